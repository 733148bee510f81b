"""
스크립트 관리자 오케스트레이터 모듈

저장소 관리와 스크립트 조회/설치/업데이트를 하나의 인터페이스로 제공합니다.
각 메서드는 repo/script 명령 하나에 대응합니다.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..config.settings import Settings
from ..models.base import FetchResult, Repository, ScriptAsset
from ..store.config_store import ConfigStore
from ..utils.helpers import calculate_file_md5, format_timestamp
from ..utils.logging import get_logger
from .fetcher import ManifestFetcher
from .installer import ScriptInstaller
from .layout import InstallLayoutBase, create_layout
from .resolver import ScriptResolver

logger = get_logger(__name__)


class ScriptManager:
    """스크립트 패키지 관리자 오케스트레이터"""

    def __init__(self, settings: Optional[Settings] = None, layout: Optional[InstallLayoutBase] = None):
        """
        스크립트 관리자 초기화

        Args:
            settings: 시스템 설정 (None이면 기본 설정 사용)
            layout: 설치 경로 배치 (None이면 설정에 따라 생성)
        """
        if settings is None:
            from ..config.settings import get_settings
            settings = get_settings()

        self.settings = settings
        self.logger = logger

        self.store = ConfigStore(settings)
        self.fetcher = ManifestFetcher(settings)
        self.resolver = ScriptResolver(self.fetcher, settings.script_extension)
        self.layout = layout or create_layout(settings)
        self.installer = ScriptInstaller(self.fetcher, self.resolver, self.layout)

        self.logger.debug(f"스크립트 관리자 초기화 완료: {settings.install_layout.value}")

    # 저장소 명령

    def repo_list(self) -> List[Repository]:
        """repo list"""
        return list(self.store.list())

    async def repo_add(self, name: str, url: str) -> Repository:
        """repo add <name> <url>"""
        return await self.store.create(name, url)

    async def repo_info(self, name: str) -> FetchResult:
        """repo info <name> - 저장소 정보와 매니페스트 조회 결과"""
        repository = self.store.lookup(name)
        return await self.fetcher.fetch(repository)

    async def repo_remove(self, name: str) -> None:
        """repo rm <name>"""
        await self.store.remove(name)

    # 스크립트 명령

    def _sources(self, repo: Optional[str] = None) -> List[Repository]:
        """--repo 지정 시 해당 저장소 하나, 아니면 등록된 모든 저장소"""
        if repo:
            return [self.store.lookup(repo)]
        return list(self.store.list())

    def _installed_state(self, repository: Repository, asset: ScriptAsset) -> Tuple[bool, Optional[bool]]:
        """(설치 여부, 구버전 여부) - 체크섬이 없으면 구버전 여부는 None"""
        local_path = self.layout.target_path(repository, asset)
        if not local_path.is_file():
            return False, None
        if not asset.md5:
            return True, None
        return True, calculate_file_md5(local_path) != asset.md5.lower()

    def _describe(self, repository: Repository, asset: ScriptAsset) -> Dict[str, Any]:
        installed, outdated = self._installed_state(repository, asset)
        return {
            'repository': repository.name,
            'name': asset.filename,
            'file': asset.file,
            'md5': asset.md5,
            'last_commit': asset.last_commit,
            'updated_at': format_timestamp(asset.last_commit),
            'installed': installed,
            'outdated': outdated,
            'local_path': str(self.layout.target_path(repository, asset)),
        }

    async def script_list(self, repo: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        script list [--repo=<name>]

        Args:
            repo: 저장소 이름 (None이면 모든 저장소)

        Returns:
            스크립트 정보 목록 (저장소 순서, 매니페스트 순서)
        """
        scripts = []
        for result in await self.fetcher.fetch_all(self._sources(repo)):
            if not result.ok:
                self.logger.warning(f"매니페스트를 사용할 수 없어 건너뜁니다: {result.repository.name} - {result.message}")
                continue
            for asset in result.repository.available:
                scripts.append(self._describe(result.repository, asset))
        return scripts

    async def script_info(self, name: str, repo: Optional[str] = None) -> Dict[str, Any]:
        """
        script info <name> [--repo=<name>]

        Returns:
            스크립트 정보와 문서 본문(header)
        """
        repository, asset = await self.resolver.resolve_asset(name, self._sources(repo))
        info = self._describe(repository, asset)
        info['header'] = await self.fetcher.fetch_header(repository, asset)
        return info

    async def script_install(self, name: str, repo: Optional[str] = None) -> Path:
        """script install [--repo=<name>] <name>"""
        return await self.installer.install(name, self._sources(repo), overwrite=False)

    async def script_update(self, name: str, repo: Optional[str] = None) -> Path:
        """script update [--repo=<name>] <name>"""
        return await self.installer.update(name, self._sources(repo))

    async def close(self) -> None:
        """리소스 정리"""
        await self.fetcher.close()
        self.logger.debug("스크립트 관리자 리소스 정리 완료")

    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        await self.close()


# 편의 함수들
async def install_script(name: str, repo: Optional[str] = None, settings: Optional[Settings] = None) -> Path:
    """
    편의 함수: 스크립트 설치

    Args:
        name: 스크립트 이름
        repo: 저장소 이름 (선택사항)
        settings: 시스템 설정

    Returns:
        설치된 로컬 경로
    """
    async with ScriptManager(settings) as manager:
        return await manager.script_install(name, repo)


async def update_script(name: str, repo: Optional[str] = None, settings: Optional[Settings] = None) -> Path:
    """
    편의 함수: 스크립트 업데이트

    Args:
        name: 스크립트 이름
        repo: 저장소 이름 (선택사항)
        settings: 시스템 설정

    Returns:
        업데이트된 로컬 경로
    """
    async with ScriptManager(settings) as manager:
        return await manager.script_update(name, repo)
