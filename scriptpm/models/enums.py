"""
열거형 정의 모듈

스크립트 패키지 관리자에서 사용되는 상수 값들을 열거형으로 정의합니다.
"""

from enum import Enum


class FetchStatus(Enum):
    """매니페스트 조회 결과 상태 열거형"""
    OK = "ok"
    NETWORK_FAILURE = "network_failure"
    MALFORMED = "malformed"


class InstallLayout(Enum):
    """스크립트 설치 경로 배치 열거형"""
    FLAT = "flat"
    PER_REPOSITORY = "per_repository"
