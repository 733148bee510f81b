"""
저장소 설정 저장소 모듈

등록된 원격 저장소 목록을 YAML 파일에 보관하고
단일 잠금으로 읽기-수정-쓰기 주기를 직렬화합니다.
"""

import asyncio
import copy
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional

import yaml

from ..config.settings import Settings
from ..exceptions import (
    ConfigParseException,
    InvalidRepositoryNameException,
    InvalidRepositoryUrlException,
    RepositoryExistsException,
    RepositoryNotFoundException,
)
from ..models.base import Repository
from ..utils.helpers import ensure_directory, validate_repository_name, validate_url
from ..utils.logging import get_logger

logger = get_logger(__name__)

State = Dict[str, Dict[str, Any]]


class ConfigStore:
    """저장소 이름 → 연결 정보 매핑을 관리하는 설정 저장소"""

    def __init__(self, settings: Settings, path: Optional[Path] = None):
        """
        설정 저장소 초기화

        Args:
            settings: 시스템 설정
            path: 설정 파일 경로 (None이면 settings.config_path)
        """
        self.settings = settings
        self.path = Path(path) if path else settings.config_path
        self.logger = logger
        self._lock = asyncio.Lock()

    def read(self) -> State:
        """
        설정 파일 로드

        Returns:
            저장소 이름 → 설정 매핑 (파일이 없거나 비어 있으면 빈 매핑)

        Raises:
            ConfigParseException: 파일 내용이 올바른 매핑이 아닐 때
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigParseException(str(self.path), str(e)) from e

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ConfigParseException(
                str(self.path), f"최상위 값이 매핑이 아닙니다: {type(data).__name__}"
            )

        state: State = {}
        for name, entry in data.items():
            if not validate_repository_name(str(name)):
                raise ConfigParseException(str(self.path), f"잘못된 저장소 이름: {name!r}")
            if not isinstance(entry, dict) or not isinstance(entry.get("url"), str):
                raise ConfigParseException(str(self.path), f"잘못된 저장소 항목: {name}")
            state[str(name)] = entry
        return state

    def _write(self, state: State) -> None:
        """상태를 임시 파일에 기록한 뒤 설정 파일로 교체"""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".repos-", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                yaml.safe_dump(state, f, allow_unicode=True, sort_keys=False, default_flow_style=False)
            os.replace(temp_name, self.path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise

    async def atomic(self, mutator: Callable[[State], Any]) -> State:
        """
        잠금 하에 읽기-수정-쓰기 수행

        mutator가 매핑을 반환하면 그 값을, 아니면 원래 상태를 그대로 저장합니다.
        mutator에서 발생한 예외는 그대로 전파되며 아무것도 기록하지 않습니다.

        Args:
            mutator: 현재 상태(사본)를 받아 새 상태를 반환하는 함수

        Returns:
            저장된 상태
        """
        async with self._lock:
            state = self.read()
            new_state = mutator(copy.deepcopy(state))

            if isinstance(new_state, dict):
                persisted = new_state
            else:
                self.logger.debug("변경 함수가 매핑을 반환하지 않아 기존 상태를 유지합니다")
                persisted = state

            self._write(persisted)
            return persisted

    async def create(self, name: str, url: str) -> Repository:
        """
        저장소 등록

        Args:
            name: 저장소 이름
            url: 저장소 기본 HTTP(S) URL

        Returns:
            등록된 저장소

        Raises:
            InvalidRepositoryNameException: 이름이 비어 있거나 경로 구분자를 포함할 때
            InvalidRepositoryUrlException: URL이 HTTP(S) 주소가 아닐 때
            RepositoryExistsException: 같은 이름이 이미 있을 때
        """
        if not validate_repository_name(name):
            raise InvalidRepositoryNameException(name)

        if not validate_url(url):
            raise InvalidRepositoryUrlException(url)

        repository = Repository(name=name, url=url)

        def insert(state: State) -> State:
            if name in state:
                raise RepositoryExistsException(name)
            ensure_directory(self.settings.scripts_path / name)
            state[name] = repository.persisted()
            return state

        await self.atomic(insert)
        self.logger.info(f"저장소 등록 완료: {name} -> {url}")
        return repository

    async def remove(self, name: str) -> None:
        """
        저장소 삭제

        Args:
            name: 저장소 이름

        Raises:
            RepositoryNotFoundException: 저장소가 없을 때
        """
        def delete(state: State) -> State:
            if name not in state:
                raise RepositoryNotFoundException(name)
            del state[name]
            return state

        await self.atomic(delete)
        self.logger.info(f"저장소 삭제 완료: {name}")

    def lookup(self, name: str) -> Repository:
        """이름으로 저장소 조회 (없으면 RepositoryNotFoundException)"""
        state = self.read()
        if name not in state:
            raise RepositoryNotFoundException(name)
        return Repository(name=name, url=state[name]["url"])

    def list(self) -> Iterator[Repository]:
        """등록 순서대로 저장소를 생성 (호출할 때마다 파일을 다시 읽음)"""
        for name, entry in self.read().items():
            yield Repository(name=name, url=entry["url"])
