"""
스크립트 설치 모듈

결정된 (저장소, 자산) 쌍의 파일을 내려받아 로컬 스크립트 디렉토리에 설치합니다.
"""

import asyncio
import hashlib
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterable, Union

import aiohttp

from ..exceptions import ScriptAlreadyInstalledException, TransferException
from ..models.base import Repository, ScriptAsset
from ..utils.helpers import join_url
from ..utils.logging import get_logger
from .fetcher import ManifestFetcher
from .layout import InstallLayoutBase
from .resolver import ScriptResolver

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


class ScriptInstaller:
    """스크립트 설치기"""

    def __init__(self, fetcher: ManifestFetcher, resolver: ScriptResolver, layout: InstallLayoutBase):
        """
        설치기 초기화

        Args:
            fetcher: HTTP 세션을 공유할 매니페스트 조회기
            resolver: 스크립트 저장소 결정기
            layout: 설치 경로 배치 전략
        """
        self.fetcher = fetcher
        self.resolver = resolver
        self.layout = layout
        self.logger = logger

    async def download(self, repository: Repository, asset: ScriptAsset, local_path: Union[str, Path]) -> None:
        """
        자산 파일을 로컬 경로로 다운로드

        임시 파일에 먼저 기록한 뒤 대상 경로로 교체하므로
        전송이 실패해도 대상 파일은 바뀌지 않습니다.

        Args:
            repository: 자산을 제공하는 저장소
            asset: 다운로드할 자산
            local_path: 저장할 로컬 경로

        Raises:
            TransferException: 네트워크 또는 파일 입출력 오류 시
        """
        url = join_url(repository.url, asset.file)
        local_path = Path(local_path)

        try:
            local_path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(dir=local_path.parent, prefix=f".{local_path.name}.", suffix=".part")
        except OSError as e:
            raise TransferException(url, str(e)) from e

        hasher = hashlib.md5()

        try:
            with os.fdopen(fd, 'wb') as f:
                session = await self.fetcher.get_session()
                async with session.get(url) as response:
                    if response.status != 200:
                        raise TransferException(url, f"HTTP {response.status}")
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        f.write(chunk)
                        hasher.update(chunk)

            os.chmod(temp_name, self._file_mode(local_path))
            os.replace(temp_name, local_path)

        except TransferException as e:
            self._discard(temp_name)
            self.logger.error(e.message)
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            self._discard(temp_name)
            self.logger.error(f"스크립트 다운로드 오류: {url} - {e}")
            raise TransferException(url, str(e) or type(e).__name__) from e

        if asset.md5 and asset.md5.lower() != hasher.hexdigest():
            self.logger.warning(
                f"체크섬 불일치: {asset.filename} (매니페스트 {asset.md5}, 실제 {hasher.hexdigest()})"
            )

        self.logger.info(f"스크립트 다운로드 완료: {url} -> {local_path}")

    def _file_mode(self, local_path: Path) -> int:
        """기존 파일이 있으면 그 권한, 없으면 umask를 적용한 기본 권한"""
        if local_path.exists():
            return stat.S_IMODE(local_path.stat().st_mode)

        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    def _discard(self, temp_name: str) -> None:
        """남은 임시 파일 삭제"""
        if os.path.exists(temp_name):
            os.unlink(temp_name)

    async def install(self, script_name: str, sources: Iterable[Repository], overwrite: bool = False) -> Path:
        """
        스크립트 설치

        Args:
            script_name: 스크립트 이름 (확장자 생략 가능)
            sources: 후보 저장소들
            overwrite: 이미 있는 파일을 덮어쓸지 여부

        Returns:
            설치된 로컬 경로

        Raises:
            ResolutionException: 제공 저장소를 하나로 결정할 수 없을 때
            ScriptAlreadyInstalledException: 파일이 있고 overwrite가 거짓일 때
            TransferException: 다운로드 실패 시
        """
        filename = self.resolver.normalize(script_name)
        repository, asset = await self.resolver.resolve_asset(filename, sources)

        local_path = self.layout.target_path(repository, asset)
        if local_path.exists() and not overwrite:
            raise ScriptAlreadyInstalledException(filename, str(local_path))

        await self.download(repository, asset, local_path)

        action = "업데이트" if overwrite else "설치"
        self.logger.info(f"스크립트 {action} 완료: {filename} ({repository.name}) -> {local_path}")
        return local_path

    async def update(self, script_name: str, sources: Iterable[Repository]) -> Path:
        """스크립트 업데이트 (덮어쓰기 설치)"""
        return await self.install(script_name, sources, overwrite=True)
