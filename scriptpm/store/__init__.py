"""
설정 저장소 패키지

등록된 원격 저장소 목록의 영속화를 담당합니다.
"""

from .config_store import ConfigStore

__all__ = ["ConfigStore"]
