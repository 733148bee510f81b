"""
스크립트 저장소 결정 모듈

요청한 스크립트를 제공하는 저장소를 후보 중에서 정확히 하나로 결정합니다.
"""

from typing import Iterable, List, Tuple

from ..exceptions import (
    AmbiguousScriptException,
    ScriptNotAdvertisedException,
    ScriptNotFoundException,
)
from ..models.base import Repository, ScriptAsset
from ..utils.logging import get_logger
from .fetcher import ManifestFetcher

logger = get_logger(__name__)

DEFAULT_EXTENSION = ".lic"


def normalize(script_name: str, extension: str = DEFAULT_EXTENSION) -> str:
    """
    스크립트 이름을 파일명으로 정규화

    이름에 '.'이 있으면 그대로, 없으면 확장자를 붙입니다.

    Args:
        script_name: 스크립트 이름
        extension: 붙일 확장자

    Returns:
        정규화된 파일명
    """
    if "." in script_name:
        return script_name
    return f"{script_name}{extension}"


class ScriptResolver:
    """스크립트 제공 저장소 결정기"""

    def __init__(self, fetcher: ManifestFetcher, extension: str = DEFAULT_EXTENSION):
        """
        결정기 초기화

        Args:
            fetcher: 매니페스트가 없는 저장소를 조회할 조회기
            extension: 정규화에 사용할 확장자
        """
        self.fetcher = fetcher
        self.extension = extension
        self.logger = logger

    def normalize(self, script_name: str) -> str:
        return normalize(script_name, self.extension)

    async def ensure_manifests(self, repositories: Iterable[Repository]) -> List[Repository]:
        """
        매니페스트를 아직 조회하지 않은 저장소만 조회

        Args:
            repositories: 후보 저장소들

        Returns:
            available이 채워진 저장소 목록 (입력 순서 유지)
        """
        fetched = []
        for repository in repositories:
            if repository.available is None:
                result = await self.fetcher.fetch(repository)
                repository = result.repository

            if repository.err:
                self.logger.warning(f"사용 가능한 매니페스트 없음: {repository.name} - {repository.err}")

            fetched.append(repository)
        return fetched

    async def resolve(self, script_name: str, repositories: Iterable[Repository]) -> Repository:
        """
        스크립트를 제공하는 유일한 저장소 결정

        Args:
            script_name: 스크립트 이름 (확장자 생략 가능)
            repositories: 후보 저장소들

        Returns:
            스크립트를 제공하는 저장소 (매니페스트 포함)

        Raises:
            ScriptNotAdvertisedException: 후보가 하나이고 스크립트를 제공하지 않을 때
            AmbiguousScriptException: 두 개 이상의 저장소가 제공할 때
            ScriptNotFoundException: 어느 저장소도 제공하지 않을 때
        """
        filename = self.normalize(script_name)
        candidates = await self.ensure_manifests(repositories)

        matches = [repo for repo in candidates if repo.find_asset(filename) is not None]

        if len(candidates) == 1 and not matches:
            raise ScriptNotAdvertisedException(filename, candidates[0].name)

        if len(matches) > 1:
            raise AmbiguousScriptException(filename, [repo.name for repo in matches])

        if not matches:
            raise ScriptNotFoundException(filename)

        self.logger.debug(f"스크립트 저장소 결정: {filename} -> {matches[0].name}")
        return matches[0]

    async def resolve_asset(self, script_name: str, repositories: Iterable[Repository]) -> Tuple[Repository, ScriptAsset]:
        """저장소 결정 후 (저장소, 자산) 쌍 반환"""
        repository = await self.resolve(script_name, repositories)
        return repository, self.asset_for(script_name, repository)

    def asset_for(self, script_name: str, repository: Repository) -> ScriptAsset:
        """
        저장소 매니페스트에서 스크립트 자산 조회

        Raises:
            ScriptNotAdvertisedException: 저장소가 스크립트를 제공하지 않을 때
        """
        filename = self.normalize(script_name)
        asset = repository.find_asset(filename)
        if asset is None:
            raise ScriptNotAdvertisedException(filename, repository.name)
        return asset
