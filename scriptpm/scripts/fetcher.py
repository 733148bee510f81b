"""
매니페스트 조회 모듈

원격 저장소의 manifest.json을 HTTP로 가져와 파싱합니다.
네트워크 실패와 형식 오류는 예외 대신 태그된 결과(FetchResult)로 돌려줍니다.
"""

import asyncio
import json
from typing import Iterable, List, Optional

import aiohttp
from pydantic import ValidationError

from ..config.settings import Settings
from ..exceptions import ManifestException
from ..models.base import FetchResult, Repository, ScriptAsset
from ..models.enums import FetchStatus
from ..utils.helpers import join_url
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ManifestFetcher:
    """저장소 매니페스트 조회기"""

    def __init__(self, settings: Settings, session: Optional[aiohttp.ClientSession] = None):
        """
        매니페스트 조회기 초기화

        Args:
            settings: 시스템 설정
            session: 외부에서 주입한 HTTP 세션 (None이면 필요할 때 생성)
        """
        self.settings = settings
        self.logger = logger
        self.session = session
        self._owns_session = session is None

    async def get_session(self) -> aiohttp.ClientSession:
        """HTTP 세션 생성"""
        if not self.session:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout),
                headers={
                    'User-Agent': self.settings.http_user_agent
                }
            )
            self._owns_session = True
        return self.session

    async def fetch(self, repository: Repository) -> FetchResult:
        """
        저장소 매니페스트 조회

        Args:
            repository: 조회할 저장소

        Returns:
            조회 결과. 실패해도 예외를 발생시키지 않고
            err가 기록되고 available이 빈 저장소를 담아 반환합니다.
        """
        manifest_url = join_url(repository.url, self.settings.manifest_name)

        try:
            session = await self.get_session()
            async with session.get(manifest_url) as response:
                if response.status != 200:
                    detail = f"HTTP {response.status}: {manifest_url}"
                    self.logger.warning(f"매니페스트 조회 실패: {repository.name} - {detail}")
                    return self._failure(repository, FetchStatus.NETWORK_FAILURE, detail)
                body = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            detail = str(e) or type(e).__name__
            self.logger.warning(f"매니페스트 조회 실패: {repository.name} - {detail}")
            return self._failure(repository, FetchStatus.NETWORK_FAILURE, detail)

        try:
            assets = self._parse_manifest(repository, body)
        except ManifestException as e:
            self.logger.error(e.message)
            return self._failure(repository, FetchStatus.MALFORMED, e.error_detail)

        self.logger.debug(f"매니페스트 조회 완료: {repository.name} ({len(assets)}개 스크립트)")
        return FetchResult(
            status=FetchStatus.OK,
            repository=repository.model_copy(update={"available": assets, "err": None})
        )

    async def fetch_all(self, repositories: Iterable[Repository]) -> List[FetchResult]:
        """여러 저장소의 매니페스트를 순서대로 조회"""
        results = []
        for repository in repositories:
            results.append(await self.fetch(repository))
        return results

    async def fetch_header(self, repository: Repository, asset: ScriptAsset) -> str:
        """
        스크립트 문서 조각 조회

        실패 시 예외 대신 오류 메시지를 본문으로 반환합니다.

        Args:
            repository: 저장소
            asset: 문서를 조회할 자산

        Returns:
            문서 본문 또는 오류 메시지
        """
        if not asset.header:
            return f"문서가 없습니다: {asset.filename}"

        header_url = join_url(repository.url, asset.header)

        try:
            session = await self.get_session()
            async with session.get(header_url) as response:
                if response.status != 200:
                    return f"문서 조회 실패: HTTP {response.status}: {header_url}"
                body = await response.read()
                return body.decode("utf-8", errors="replace")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.warning(f"문서 조회 실패: {header_url} - {e}")
            return f"문서 조회 실패: {str(e) or type(e).__name__}"

    def _parse_manifest(self, repository: Repository, body: bytes) -> List[ScriptAsset]:
        """
        매니페스트 본문 파싱

        Raises:
            ManifestException: UTF-8/JSON이 아니거나 available 배열이 없을 때
        """
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ManifestException(repository.name, f"UTF-8 디코딩 오류: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestException(repository.name, f"JSON 파싱 오류: {e}") from e

        if not isinstance(data, dict):
            raise ManifestException(repository.name, "매니페스트가 JSON 객체가 아닙니다")

        if isinstance(data.get("error"), str):
            raise ManifestException(repository.name, data["error"])

        available = data.get("available")
        if not isinstance(available, list):
            raise ManifestException(repository.name, "available 배열이 없습니다")

        try:
            return [ScriptAsset.model_validate(entry) for entry in available]
        except ValidationError as e:
            raise ManifestException(repository.name, f"잘못된 자산 항목: {e}") from e

    def _failure(self, repository: Repository, status: FetchStatus, message: str) -> FetchResult:
        """실패 결과 생성 (err 기록, available 비움)"""
        return FetchResult(
            status=status,
            repository=repository.model_copy(update={"available": [], "err": message}),
            message=message
        )

    async def close(self) -> None:
        """세션 정리"""
        if self.session and self._owns_session:
            await self.session.close()
        self.session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
