"""
스크립트 설치기 테스트

다운로드, 설치 경로 배치, 덮어쓰기 정책을 테스트합니다.
"""

import hashlib
import os
import stat
from unittest.mock import MagicMock

import aiohttp
import pytest

from conftest import FakeResponse, FakeSession
from scriptpm.exceptions import (
    AmbiguousScriptException,
    ScriptAlreadyInstalledException,
    TransferException,
)
from scriptpm.models.base import Repository, ScriptAsset
from scriptpm.models.enums import InstallLayout
from scriptpm.scripts.fetcher import ManifestFetcher
from scriptpm.scripts.installer import CHUNK_SIZE, ScriptInstaller
from scriptpm.scripts.layout import FlatLayout, PerRepositoryLayout, create_layout
from scriptpm.scripts.resolver import ScriptResolver

SCRIPT_BODY = b"# foo script\necho 'hello'\n"


def make_installer(settings, routes, layout=None):
    fetcher = ManifestFetcher(settings, session=FakeSession(routes))
    resolver = ScriptResolver(fetcher, settings.script_extension)
    return ScriptInstaller(fetcher, resolver, layout or FlatLayout(settings.scripts_path))


@pytest.fixture
def core():
    return Repository(
        name="core",
        url="https://core.example.com",
        available=[ScriptAsset(file="/foo.lic", last_commit=1000, md5=hashlib.md5(SCRIPT_BODY).hexdigest())],
    )


class TestLayouts:
    """설치 경로 배치 테스트"""

    def test_flat_layout(self, tmp_path, core):
        """공용 디렉토리에 바로 설치"""
        layout = FlatLayout(tmp_path)

        assert layout.target_path(core, core.available[0]) == tmp_path / "foo.lic"

    def test_per_repository_layout(self, tmp_path, core):
        """저장소별 하위 디렉토리에 설치"""
        layout = PerRepositoryLayout(tmp_path)

        assert layout.target_path(core, core.available[0]) == tmp_path / "core" / "foo.lic"

    def test_nested_asset_path_uses_base_filename(self, tmp_path, core):
        """원격 경로의 중간 디렉토리는 무시"""
        asset = ScriptAsset(file="/lib/deep/foo.lic")

        assert FlatLayout(tmp_path).target_path(core, asset) == tmp_path / "foo.lic"

    def test_create_layout(self, settings):
        """설정에 따른 배치 생성"""
        assert isinstance(create_layout(settings), FlatLayout)

        settings.install_layout = InstallLayout.PER_REPOSITORY
        layout = create_layout(settings)
        assert isinstance(layout, PerRepositoryLayout)
        assert layout.script_dir == settings.scripts_path

    def test_create_layout_invalid(self, settings):
        """지원하지 않는 배치"""
        settings.install_layout = "invalid"

        with pytest.raises(ValueError) as exc_info:
            create_layout(settings)

        assert "지원하지 않는 설치 경로 배치" in str(exc_info.value)


class TestDownload:
    """다운로드 테스트"""

    @pytest.mark.asyncio
    async def test_download_writes_bytes(self, settings, core, tmp_path):
        """원격 바이트를 그대로 기록"""
        installer = make_installer(settings, {"https://core.example.com/foo.lic": FakeResponse(SCRIPT_BODY)})
        target = tmp_path / "out" / "foo.lic"

        await installer.download(core, core.available[0], target)

        assert target.read_bytes() == SCRIPT_BODY
        # 임시 파일이 남지 않음
        assert [path.name for path in target.parent.iterdir()] == ["foo.lic"]

    @pytest.mark.asyncio
    async def test_new_file_follows_umask(self, settings, core, tmp_path):
        """새로 설치한 파일은 umask를 따른 권한"""
        installer = make_installer(settings, {"https://core.example.com/foo.lic": FakeResponse(SCRIPT_BODY)})
        target = tmp_path / "dl" / "foo.lic"

        old_umask = os.umask(0o022)
        try:
            await installer.download(core, core.available[0], target)
        finally:
            os.umask(old_umask)

        assert stat.S_IMODE(target.stat().st_mode) == 0o644

    @pytest.mark.asyncio
    async def test_replaced_file_keeps_mode(self, settings, core, tmp_path):
        """덮어쓴 파일은 기존 권한 유지"""
        installer = make_installer(settings, {"https://core.example.com/foo.lic": FakeResponse(SCRIPT_BODY)})
        target = tmp_path / "dl" / "foo.lic"
        target.parent.mkdir()
        target.write_bytes(b"old version")
        target.chmod(0o755)

        await installer.download(core, core.available[0], target)

        assert target.read_bytes() == SCRIPT_BODY
        assert stat.S_IMODE(target.stat().st_mode) == 0o755

    @pytest.mark.asyncio
    async def test_download_large_body_in_chunks(self, settings, core, tmp_path):
        """여러 청크로 나뉜 본문"""
        body = b"x" * (CHUNK_SIZE * 2 + 17)
        installer = make_installer(settings, {"https://core.example.com/foo.lic": FakeResponse(body)})
        target = tmp_path / "foo.lic"

        await installer.download(core, ScriptAsset(file="/foo.lic"), target)

        assert target.read_bytes() == body

    @pytest.mark.asyncio
    async def test_http_error_raises_transfer_exception(self, settings, core, tmp_path):
        """200이 아닌 응답"""
        installer = make_installer(settings, {})
        target = tmp_path / "dl" / "foo.lic"

        with pytest.raises(TransferException) as exc_info:
            await installer.download(core, core.available[0], target)

        assert exc_info.value.error_code == "TRANSFER_ERROR"
        assert "HTTP 404" in str(exc_info.value)
        assert list(target.parent.iterdir()) == []

    @pytest.mark.asyncio
    async def test_interrupted_transfer_keeps_existing_file(self, settings, core, tmp_path):
        """전송 중 실패해도 기존 파일은 그대로"""
        response = FakeResponse(b"partial", error=aiohttp.ClientPayloadError("connection reset"))
        installer = make_installer(settings, {"https://core.example.com/foo.lic": response})
        target = tmp_path / "dl" / "foo.lic"
        target.parent.mkdir()
        target.write_bytes(b"old version")

        with pytest.raises(TransferException) as exc_info:
            await installer.download(core, core.available[0], target)

        assert "connection reset" in str(exc_info.value)
        assert target.read_bytes() == b"old version"
        assert [path.name for path in target.parent.iterdir()] == ["foo.lic"]

    @pytest.mark.asyncio
    async def test_checksum_mismatch_only_warns(self, settings, tmp_path):
        """체크섬 불일치는 경고만 남김"""
        repository = Repository(name="core", url="https://core.example.com")
        asset = ScriptAsset(file="/foo.lic", md5="0" * 32)
        installer = make_installer(settings, {"https://core.example.com/foo.lic": FakeResponse(SCRIPT_BODY)})
        installer.logger = MagicMock()
        target = tmp_path / "dl" / "foo.lic"

        await installer.download(repository, asset, target)

        assert target.read_bytes() == SCRIPT_BODY
        installer.logger.warning.assert_called_once()
        assert "체크섬 불일치" in installer.logger.warning.call_args[0][0]


class TestInstall:
    """설치/업데이트 테스트"""

    @pytest.mark.asyncio
    async def test_install(self, settings, core):
        """설치 후 경로 반환"""
        installer = make_installer(settings, {"https://core.example.com/foo.lic": FakeResponse(SCRIPT_BODY)})

        path = await installer.install("foo", [core])

        assert path == settings.scripts_path / "foo.lic"
        assert path.read_bytes() == SCRIPT_BODY

    @pytest.mark.asyncio
    async def test_install_existing_refuses_without_write(self, settings, core):
        """이미 있으면 거부하고 요청도 보내지 않음"""
        installer = make_installer(settings, {"https://core.example.com/foo.lic": FakeResponse(SCRIPT_BODY)})
        target = settings.scripts_path / "foo.lic"
        target.write_bytes(b"local edits")

        with pytest.raises(ScriptAlreadyInstalledException) as exc_info:
            await installer.install("foo", [core])

        assert "script update foo.lic" in str(exc_info.value)
        assert exc_info.value.path == str(target)
        assert target.read_bytes() == b"local edits"
        assert installer.fetcher.session.requests == []

    @pytest.mark.asyncio
    async def test_update_overwrites(self, settings, core):
        """업데이트는 무조건 덮어씀"""
        installer = make_installer(settings, {"https://core.example.com/foo.lic": FakeResponse(SCRIPT_BODY)})
        target = settings.scripts_path / "foo.lic"
        target.write_bytes(b"old version")

        path = await installer.update("foo", [core])

        assert path == target
        assert target.read_bytes() == SCRIPT_BODY

    @pytest.mark.asyncio
    async def test_install_per_repository_creates_directory(self, settings, core):
        """저장소별 배치는 하위 디렉토리를 만들어 설치"""
        layout = PerRepositoryLayout(settings.scripts_path)
        installer = make_installer(
            settings, {"https://core.example.com/foo.lic": FakeResponse(SCRIPT_BODY)}, layout=layout
        )

        path = await installer.install("foo", [core])

        assert path == settings.scripts_path / "core" / "foo.lic"
        assert path.read_bytes() == SCRIPT_BODY

    @pytest.mark.asyncio
    async def test_install_ambiguous_writes_nothing(self, settings, core):
        """모호하면 아무것도 기록하지 않음"""
        other = Repository(name="other", url="https://other.example.com", available=[ScriptAsset(file="/foo.lic")])
        installer = make_installer(settings, {})

        with pytest.raises(AmbiguousScriptException):
            await installer.install("foo", [core, other])

        assert not (settings.scripts_path / "foo.lic").exists()
