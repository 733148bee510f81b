"""
데이터 모델 패키지

스크립트 패키지 관리자의 핵심 데이터 모델들을 정의합니다.
"""

from .base import FetchResult, Repository, ScriptAsset
from .enums import FetchStatus, InstallLayout

__all__ = [
    "FetchResult",
    "Repository",
    "ScriptAsset",
    "FetchStatus",
    "InstallLayout",
]
