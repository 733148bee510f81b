"""
스크립트 설치 경로 배치 모듈

호스트 환경에 따라 스크립트를 설치할 로컬 경로를 결정하는 전략을 제공합니다.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from ..config.settings import Settings
from ..models.base import Repository, ScriptAsset
from ..models.enums import InstallLayout


class InstallLayoutBase(ABC):
    """설치 경로 배치 기본 추상 클래스"""

    def __init__(self, script_dir: Path):
        self.script_dir = Path(script_dir)

    @abstractmethod
    def target_path(self, repository: Repository, asset: ScriptAsset) -> Path:
        """
        자산을 설치할 로컬 경로 (추상 메서드)

        Args:
            repository: 자산을 제공하는 저장소
            asset: 설치할 자산

        Returns:
            설치 대상 파일 경로
        """
        pass


class FlatLayout(InstallLayoutBase):
    """모든 스크립트를 공용 스크립트 디렉토리 하나에 설치"""

    def target_path(self, repository: Repository, asset: ScriptAsset) -> Path:
        return self.script_dir / asset.filename


class PerRepositoryLayout(InstallLayoutBase):
    """스크립트를 저장소별 하위 디렉토리에 설치 (디렉토리는 다운로드 시 생성)"""

    def target_path(self, repository: Repository, asset: ScriptAsset) -> Path:
        return self.script_dir / repository.name / asset.filename


def create_layout(settings: Settings) -> InstallLayoutBase:
    """설정에 따른 설치 경로 배치 인스턴스 생성"""
    layout = settings.install_layout

    if layout == InstallLayout.FLAT:
        return FlatLayout(settings.scripts_path)

    elif layout == InstallLayout.PER_REPOSITORY:
        return PerRepositoryLayout(settings.scripts_path)

    else:
        raise ValueError(f"지원하지 않는 설치 경로 배치: {layout}")
