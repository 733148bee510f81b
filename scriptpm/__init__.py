"""
scriptpm - 스크립트 저장소 패키지 관리자

HTTP 매니페스트를 제공하는 원격 저장소를 등록하고
스크립트를 조회/설치/업데이트합니다.
"""

__version__ = "1.0.0"
