"""
Tests for CLI command execution.

Each test runs the full CLI against a temporary base directory.
"""

import io
import os
import re
import sys

import pytest
import responses

from govm.cli.parser import CLI
from govm.cli.utils import build_config, confirm
from tests.fixtures.archives import build_archive
from tests.fixtures.directories import TEST_URL_TEMPLATE

unix_only = pytest.mark.skipif(sys.platform == "win32", reason="Unix symlinks")


@pytest.fixture
def base(govm_config):
    return govm_config.base


@pytest.fixture
def run_cli(base):
    """Run the CLI against the temporary base directory."""

    def _run(*argv):
        return CLI().run(["--base", str(base), "--no-progress", *argv])

    return _run


@pytest.fixture
def installed(make_installation):
    for token in ("1.20.14", "1.21.0", "1.22.0"):
        make_installation(token)


@pytest.fixture
def mirror_config(tmp_path):
    config_file = tmp_path / "govm.yaml"
    config_file.write_text(f"url_template: {TEST_URL_TEMPLATE}\n")
    return config_file


class TestUseCommand:
    """Test the use command."""

    @unix_only
    def test_use_version(self, run_cli, installed, base):
        """Test use points the Go root at the installation."""
        assert run_cli("use", "go1.21.0") == 0
        assert os.readlink(base / "go").endswith("go1.21.0")

    @unix_only
    def test_use_version_file(self, run_cli, installed, base, tmp_path, monkeypatch, capsys):
        """Test use falls back to the project version file."""
        project = tmp_path / "project"
        project.mkdir()
        (project / ".govm").write_text("1.20.14\n")
        monkeypatch.chdir(project)

        assert run_cli("use") == 0
        assert "using version from '.govm'" in capsys.readouterr().out
        assert os.readlink(base / "go").endswith("go1.20.14")

    def test_use_without_version_file(self, run_cli, tmp_path, monkeypatch):
        """Test use without a version or version file fails."""
        monkeypatch.chdir(tmp_path)
        assert run_cli("use") == 1

    def test_use_not_downloaded(self, run_cli, installed):
        """Test activating a version that is not installed fails."""
        assert run_cli("use", "1.19.0") == 1

    def test_use_nothing_installed(self, run_cli):
        """Test use with no installations fails."""
        assert run_cli("use", "1.22.0") == 1

    def test_use_blocked(self, run_cli, installed, base):
        """Test a real directory at the Go root is never replaced."""
        (base / "go").mkdir()
        assert run_cli("use", "1.22.0") == 1
        assert (base / "go").is_dir()
        assert not (base / "go").is_symlink()

    def test_use_invalid_version(self, run_cli):
        """Test a malformed version fails."""
        assert run_cli("use", "1.x") == 1


class TestDownloadCommand:
    """Test the download command."""

    @responses.activate
    def test_download(self, base, mirror_config, capsys):
        """Test download extracts into the installation directory."""
        responses.add(
            responses.GET,
            re.compile(r"https://dl\.example\.com/go1\.22\.0\..+\.tar\.gz"),
            body=build_archive(),
            content_type="application/x-gzip",
        )

        result = CLI().run(
            ["--base", str(base), "--config", str(mirror_config), "--no-progress", "dl", "1.22.0"]
        )

        assert result == 0
        installation = base / "govm" / "go-versions" / "go1.22.0"
        assert (installation / "bin" / "go").is_file()
        assert "downloaded 4 files" in capsys.readouterr().out

    @unix_only
    @responses.activate
    def test_download_and_use(self, base, mirror_config):
        """Test --use activates the fresh installation."""
        responses.add(
            responses.GET,
            re.compile(r"https://dl\.example\.com/go1\.21rc2\..+\.tar\.gz"),
            body=build_archive(),
            content_type="application/x-gzip",
        )

        result = CLI().run(
            ["--base", str(base), "--config", str(mirror_config), "--no-progress",
             "download", "go1.21rc2", "--use"]
        )

        assert result == 0
        assert os.readlink(base / "go").endswith("go1.21rc2")

    @responses.activate
    def test_download_unknown_version(self, base, mirror_config):
        """Test a 404 from the server fails the command."""
        responses.add(
            responses.GET,
            re.compile(r"https://dl\.example\.com/.+"),
            status=404,
        )

        result = CLI().run(
            ["--base", str(base), "--config", str(mirror_config), "download", "9.9.9"]
        )
        assert result == 1


class TestListAndCurrent:
    """Test the list and current commands."""

    def test_list_empty(self, run_cli, capsys):
        """Test list with nothing installed prints nothing."""
        assert run_cli("list") == 0
        assert capsys.readouterr().out == ""

    @unix_only
    def test_list_marks_active(self, run_cli, installed, capsys):
        """Test list prints newest first and marks the active version."""
        assert run_cli("use", "1.21.0") == 0
        capsys.readouterr()

        assert run_cli("ls") == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["  1.22.0", "* 1.21.0", "  1.20.14"]

    @unix_only
    def test_current(self, run_cli, installed, capsys):
        """Test current prints the active version."""
        run_cli("use", "1.22.0")
        capsys.readouterr()

        assert run_cli("current") == 0
        assert capsys.readouterr().out.strip() == "1.22.0"

    @unix_only
    def test_listed_versions_are_accepted(self, run_cli, make_installation, base, capsys):
        """Test every spelling printed by list and current works with use and rm."""
        make_installation("1.21.0")
        make_installation("1.22")

        assert run_cli("list") == 0
        listed = [line[2:] for line in capsys.readouterr().out.splitlines()]
        assert listed == ["1.22", "1.21.0"]

        for token in listed:
            assert run_cli("use", token) == 0
            capsys.readouterr()
            assert run_cli("current") == 0
            assert capsys.readouterr().out.strip() == token

        assert run_cli("rm", listed[1]) == 0
        assert not (base / "govm" / "go-versions" / "go1.21.0").exists()

    def test_current_without_link(self, run_cli):
        """Test current fails when no version is active."""
        assert run_cli("current") == 1


class TestRemoveAndUninstall:
    """Test the remove and uninstall commands."""

    def test_remove(self, run_cli, installed, base):
        """Test remove deletes one installation."""
        assert run_cli("rm", "1.21.0") == 0
        assert not (base / "govm" / "go-versions" / "go1.21.0").exists()
        assert (base / "govm" / "go-versions" / "go1.22.0").exists()

    def test_remove_missing(self, run_cli):
        """Test removing an unknown version fails."""
        assert run_cli("remove", "1.18.0") == 1

    @unix_only
    def test_uninstall_yes(self, run_cli, installed, base):
        """Test uninstall --yes removes the link and installations."""
        run_cli("use", "1.22.0")

        assert run_cli("uninstall", "--yes") == 0
        assert not os.path.lexists(base / "go")
        assert not (base / "govm" / "go-versions").exists()

    def test_uninstall_declined(self, run_cli, installed, base, monkeypatch):
        """Test declining the prompt keeps everything."""
        monkeypatch.setattr("sys.stdin", io.StringIO("n\n"))

        assert run_cli("uninstall") == 1
        assert (base / "govm" / "go-versions" / "go1.22.0").exists()


class TestEnvCommand:
    """Test the env command."""

    def test_env(self, run_cli, base, capsys):
        """Test env prints the root variable export."""
        assert run_cli("env") == 0
        assert capsys.readouterr().out.strip() == f'export GOROOT="{base / "go"}"'


class TestUtils:
    """Test CLI helpers."""

    @pytest.mark.parametrize(
        "answer,expected", [("y\n", True), ("YES\n", True), ("n\n", False), ("\n", False)]
    )
    def test_confirm(self, answer, expected, capsys):
        """Test only explicit yes confirms."""
        assert confirm("Proceed?", io.StringIO(answer)) is expected
        assert "Proceed? [y/N]" in capsys.readouterr().out

    def test_build_config_overrides(self, tmp_path):
        """Test --base and --no-progress override the file."""
        args = CLI().parse_args(["--base", str(tmp_path), "--no-progress", "env"])
        config = build_config(args)

        assert config.base == tmp_path
        assert config.show_progress is False

    def test_build_config_keeps_progress(self):
        """Test progress stays enabled without --no-progress."""
        config = build_config(CLI().parse_args(["env"]))
        assert config.show_progress is True
