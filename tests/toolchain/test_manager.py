"""
Unit tests for the VersionManager facade.
"""

import io
import os
import sys

import pytest
import responses

from govm.core.exceptions import VersionNotFoundError, VersionParseError
from govm.toolchain.manager import VersionManager
from govm.toolchain.version import Version

unix_only = pytest.mark.skipif(sys.platform == "win32", reason="Unix symlinks")


@pytest.fixture
def environ():
    return {}


@pytest.fixture
def manager(govm_config, linux_platform, environ):
    return VersionManager(govm_config, platform=linux_platform, environ=environ)


class TestResolution:
    """Test token resolution and installation paths."""

    @pytest.mark.parametrize("token", ["1.22.0", "go1.22.0", "v1.22.0"])
    def test_resolve(self, manager, token):
        """Test every accepted spelling resolves to the same version."""
        assert manager.resolve(token) == Version(1, 22, 0)

    def test_resolve_invalid(self, manager):
        """Test malformed tokens surface VersionParseError."""
        with pytest.raises(VersionParseError, match="latest"):
            manager.resolve("latest")

    def test_installation_path(self, manager, govm_config):
        """Test installation paths are derived from the token alone."""
        version = manager.resolve("go1.21rc2")
        assert manager.installation(version) == govm_config.versions_path / "go1.21rc2"
        assert manager.is_installed(version) is False

    def test_default_version(self, manager, tmp_path):
        """Test the project version file selects the default version."""
        (tmp_path / ".govm").write_text("go1.20.14\n")
        assert manager.default_version(tmp_path) == Version(1, 20, 14)

    def test_default_version_missing(self, manager, tmp_path):
        """Test a missing version file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            manager.default_version(tmp_path)


class TestListing:
    """Test listing installed versions."""

    def test_list_and_newest(self, manager, make_installation):
        """Test listing is ascending and newest is the last entry."""
        for token in ["1.19", "1.21.0", "1.20.5"]:
            make_installation(token)

        assert [str(v) for v in manager.list()] == ["1.19", "1.20.5", "1.21"]
        assert manager.newest() == Version(1, 21, 0)

    def test_newest_nothing_installed(self, manager):
        """Test newest fails when nothing is installed."""
        with pytest.raises(VersionNotFoundError):
            manager.newest()


class TestLifecycle:
    """Test install, activate, remove and uninstall through the facade."""

    @responses.activate
    def test_install_and_activate(self, manager, go_archive):
        """Test a downloaded version can be activated."""
        responses.add(
            responses.GET,
            "https://dl.example.com/go1.22.0.linux-amd64.tar.gz",
            body=go_archive,
            content_type="application/x-gzip",
        )
        version = manager.resolve("go1.22.0")

        report = manager.install(version, out=io.StringIO())

        assert manager.is_installed(version)
        assert manager.list() == [version]
        if sys.platform != "win32":
            manager.activate(version)
            assert manager.current() == version
            assert os.readlink(manager.link.path) == str(report.path)

    def test_remove(self, manager, make_installation):
        """Test removing deletes only that installation."""
        make_installation("1.20")
        make_installation("1.21.0")

        removed = manager.remove(Version.parse("1.20"))

        assert not removed.exists()
        assert manager.list() == [Version(1, 21, 0)]

    @unix_only
    def test_remove_active_leaves_link(self, manager, make_installation):
        """Test removal bypasses the active link."""
        make_installation("1.20")
        manager.activate(Version.parse("1.20"))

        manager.remove(Version.parse("1.20"))

        assert manager.link.path.is_symlink()

    def test_remove_missing(self, manager):
        """Test removing a version that is not installed fails."""
        with pytest.raises(VersionNotFoundError, match="is not installed"):
            manager.remove(Version.parse("1.99"))

    @unix_only
    def test_uninstall_all(self, manager, make_installation, govm_config):
        """Test uninstall removes the root link and all installations."""
        make_installation("1.20")
        make_installation("1.21.0")
        manager.activate(Version.parse("1.21.0"))

        manager.uninstall_all()

        assert not os.path.lexists(govm_config.root_path)
        assert not govm_config.versions_path.exists()
        assert govm_config.base.exists()

    def test_uninstall_nothing_installed(self, manager, govm_config):
        """Test uninstall on an empty base is a no-op."""
        manager.uninstall_all()
        assert govm_config.base.exists()

    @unix_only
    def test_uninstall_ignores_environment_override(
        self, manager, make_installation, environ, tmp_path
    ):
        """Test an externally managed GOROOT is left alone."""
        external = tmp_path / "system-go"
        external.mkdir()
        environ["GOROOT"] = str(external)
        make_installation("1.20")

        manager.uninstall_all()

        assert external.is_dir()
