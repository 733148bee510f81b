"""
공통 유틸리티 함수 모듈

패키지 관리자 전반에서 사용되는 헬퍼 함수들을 제공합니다.
"""

import hashlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Union
from urllib.parse import urlsplit


def validate_url(url: object) -> bool:
    """
    HTTP(S) URL 유효성 검증

    Args:
        url: 검증할 값

    Returns:
        bool: 문자열이면서 호스트가 있는 http/https URL인지 여부
    """
    if not isinstance(url, str) or any(char.isspace() for char in url):
        return False

    try:
        parts = urlsplit(url)
        # 잘못된 포트는 여기서 ValueError
        parts.port
    except ValueError:
        return False

    return parts.scheme in ("http", "https") and bool(parts.hostname)


def validate_repository_name(name: object) -> bool:
    """
    저장소 이름 유효성 검증

    이름은 스크립트 디렉토리 아래 하위 디렉토리 이름으로도 쓰이므로
    경로 구분자나 상위 디렉토리 참조를 허용하지 않습니다.

    Args:
        name: 검증할 값

    Returns:
        bool: 디렉토리 이름으로 안전한 비어 있지 않은 문자열인지 여부
    """
    if not isinstance(name, str) or not name.strip():
        return False

    dangerous_chars = '/\\\0'
    if any(char in name for char in dangerous_chars):
        return False

    return name not in (".", "..")


def join_url(base_url: str, path: str) -> str:
    """
    저장소 기본 URL과 자산 경로 결합

    Args:
        base_url: 저장소 기본 URL
        path: 자산 경로 (보통 '/'로 시작)

    Returns:
        str: 결합된 URL
    """
    base_url = base_url.rstrip('/')
    if not path.startswith('/'):
        path = f"/{path}"
    return f"{base_url}{path}"


def calculate_file_md5(file_path: Union[str, Path]) -> str:
    """
    파일의 MD5 해시 계산

    Args:
        file_path: 파일 경로

    Returns:
        str: MD5 해시값 (16진수)

    Raises:
        FileNotFoundError: 파일이 존재하지 않을 때
        ValueError: 경로가 디렉토리일 때
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"파일을 찾을 수 없습니다: {file_path}")

    if not file_path.is_file():
        raise ValueError(f"디렉토리입니다: {file_path}")

    hasher = hashlib.md5()
    with open(file_path, 'rb') as f:
        for chunk in iter(lambda: f.read(4096), b""):
            hasher.update(chunk)

    return hasher.hexdigest()


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    디렉토리 존재 확인 및 생성

    Args:
        path: 디렉토리 경로

    Returns:
        Path: 디렉토리 경로 객체
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def format_timestamp(epoch_seconds: int) -> str:
    """
    epoch 초를 사람이 읽기 쉬운 UTC 시각으로 변환

    Args:
        epoch_seconds: epoch 초

    Returns:
        str: 형식화된 시각 문자열 (0 이하이면 '-')
    """
    if not epoch_seconds or epoch_seconds <= 0:
        return "-"
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    문자열을 지정된 길이로 자르기

    Args:
        text: 자를 문자열
        max_length: 최대 길이
        suffix: 자른 부분에 추가할 접미사

    Returns:
        str: 자른 문자열
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
