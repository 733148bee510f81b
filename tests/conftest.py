"""
공용 테스트 픽스처

네트워크 없이 aiohttp 세션을 흉내 내는 가짜 세션과 임시 디렉토리 설정을 제공합니다.
"""

import json
from typing import Optional

import pytest

from scriptpm.config.settings import Settings


class FakeContent:
    """aiohttp StreamReader 대역"""

    def __init__(self, body: bytes, error: Optional[BaseException] = None):
        self.body = body
        self.error = error

    async def iter_chunked(self, size: int):
        for start in range(0, len(self.body), size):
            yield self.body[start:start + size]
        if self.error is not None:
            raise self.error


class FakeResponse:
    """aiohttp ClientResponse 대역"""

    def __init__(self, body=b"", status: int = 200, error: Optional[BaseException] = None):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.body = body
        self.status = status
        self.content = FakeContent(body, error)

    async def read(self) -> bytes:
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """URL → 응답(또는 예외) 매핑으로 동작하는 aiohttp ClientSession 대역"""

    def __init__(self, routes: Optional[dict] = None):
        self.routes = dict(routes or {})
        self.requests = []
        self.closed = False

    def get(self, url: str):
        self.requests.append(url)
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(b"not found", status=404)
        if isinstance(route, BaseException):
            raise route
        return route

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings(tmp_path):
    """임시 디렉토리를 사용하는 설정"""
    settings = Settings(
        base_dir=str(tmp_path / "home"),
        script_dir=str(tmp_path / "scripts"),
        _env_file=None,
    )
    settings.validate_configuration()
    return settings


@pytest.fixture
def fake_session():
    """빈 가짜 HTTP 세션"""
    return FakeSession()
