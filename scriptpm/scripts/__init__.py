"""
스크립트 관리 모듈

원격 저장소 매니페스트 조회, 제공 저장소 결정, 스크립트 설치 기능을 제공합니다.
"""

from .fetcher import ManifestFetcher
from .installer import ScriptInstaller
from .layout import FlatLayout, InstallLayoutBase, PerRepositoryLayout, create_layout
from .manager import ScriptManager, install_script, update_script
from .resolver import ScriptResolver, normalize

__all__ = [
    "ManifestFetcher",
    "ScriptInstaller",
    "ScriptResolver",
    "ScriptManager",
    "InstallLayoutBase",
    "FlatLayout",
    "PerRepositoryLayout",
    "create_layout",
    "normalize",
    "install_script",
    "update_script",
]
