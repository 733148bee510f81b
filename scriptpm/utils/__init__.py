"""
유틸리티 패키지

공통으로 사용되는 유틸리티 함수들을 포함합니다.
"""

from .helpers import (
    calculate_file_md5,
    ensure_directory,
    format_timestamp,
    join_url,
    truncate_string,
    validate_repository_name,
    validate_url,
)
from .logging import get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "calculate_file_md5",
    "ensure_directory",
    "format_timestamp",
    "join_url",
    "truncate_string",
    "validate_repository_name",
    "validate_url",
]
