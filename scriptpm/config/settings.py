"""
설정 관리 모듈

환경 변수를 통한 시스템 설정을 관리합니다.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationException
from ..models.enums import InstallLayout


class Settings(BaseSettings):
    """시스템 설정 관리 클래스"""

    # 디렉토리 설정
    base_dir: Optional[str] = Field(
        default=None,
        description="저장소 설정 파일이 위치하는 기본 디렉토리"
    )
    script_dir: Optional[str] = Field(
        default=None,
        description="스크립트 설치 디렉토리 (없으면 base_dir/scripts)"
    )
    config_file: str = Field(
        default="repos.yaml",
        description="저장소 설정 파일 이름"
    )

    # 설치 설정
    install_layout: InstallLayout = Field(
        default=InstallLayout.FLAT,
        description="스크립트 설치 경로 배치 방식"
    )
    script_extension: str = Field(
        default=".lic",
        description="확장자 없는 스크립트 이름에 붙일 확장자"
    )

    # HTTP 설정
    manifest_name: str = Field(
        default="manifest.json",
        description="저장소 매니페스트 파일 이름"
    )
    http_timeout: int = Field(
        default=30,
        description="HTTP 요청 타임아웃 (초)"
    )
    http_user_agent: str = Field(
        default="scriptpm/1.0",
        description="HTTP User-Agent 헤더"
    )

    # 로깅 설정
    log_level: str = Field(
        default="INFO",
        description="로그 레벨"
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="로그 포맷"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="로그 파일 경로"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        # 환경 변수 이름을 대문자로 변환
        case_sensitive = False

    @property
    def config_path(self) -> Path:
        """저장소 설정 파일 경로"""
        if not self.base_dir:
            raise ConfigurationException("BASE_DIR", "기본 디렉토리가 설정되지 않았습니다")
        return Path(self.base_dir) / self.config_file

    @property
    def scripts_path(self) -> Path:
        """스크립트 설치 디렉토리 경로"""
        if self.script_dir:
            return Path(self.script_dir)
        if not self.base_dir:
            raise ConfigurationException("BASE_DIR", "기본 디렉토리가 설정되지 않았습니다")
        return Path(self.base_dir) / "scripts"

    def validate_configuration(self) -> None:
        """설정 유효성 검증"""
        if not self.base_dir:
            raise ConfigurationException(
                "BASE_DIR", "기본 디렉토리 경로가 필요합니다"
            )

        if not self.script_extension.startswith(".") or len(self.script_extension) < 2:
            raise ConfigurationException(
                "SCRIPT_EXTENSION", f"'.'으로 시작해야 합니다: {self.script_extension}"
            )

        if self.http_timeout <= 0:
            raise ConfigurationException(
                "HTTP_TIMEOUT", f"0보다 커야 합니다: {self.http_timeout}"
            )

        # 기본/스크립트 디렉토리 생성
        os.makedirs(self.base_dir, exist_ok=True)
        os.makedirs(self.scripts_path, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """
    설정 인스턴스를 반환합니다 (싱글톤 패턴)

    Returns:
        Settings: 설정 인스턴스
    """
    settings = Settings()
    settings.validate_configuration()
    return settings
