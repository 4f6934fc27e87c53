"""
Version manager facade.

Ties the version model, the installer and the active link together behind
the operations a front end needs: resolve, list, install, activate, remove
and uninstall. All layout and behavior settings come from the GovmConfig
passed in; nothing is read from module-level state.
"""

import logging
from pathlib import Path
from typing import List, Mapping, Optional, TextIO, Union

from govm.core.config import GovmConfig
from govm.core.exceptions import VersionNotFoundError
from govm.core.filesystem import exists, remove_path, safe_rmtree
from govm.core.platform import PlatformInfo
from govm.toolchain.activator import ActiveLink
from govm.toolchain.installer import InstallReport, Installer
from govm.toolchain.version import (
    Version,
    latest,
    list_installed,
    read_version_file,
    resolve,
)

logger = logging.getLogger(__name__)


class VersionManager:
    """
    Manages installed toolchain versions under one base directory.

    Example:
        >>> manager = VersionManager(GovmConfig(base=Path.home() / ".govm"))
        >>> version = manager.resolve("go1.22.0")
        >>> manager.install(version, out=sys.stdout)
        >>> manager.activate(version)
    """

    def __init__(
        self,
        config: Optional[GovmConfig] = None,
        platform: Optional[PlatformInfo] = None,
        environ: Optional[Mapping[str, str]] = None,
        installer: Optional[Installer] = None,
    ):
        self.config = config or GovmConfig()
        self.installer = installer or Installer(self.config, platform=platform)
        self.link = ActiveLink(self.config, environ=environ, list_versions=self.list)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @staticmethod
    def resolve(token: str) -> Version:
        """Canonicalize ('v1.22', 'go1.22.0') and parse a version token."""
        return resolve(token)

    def installation(self, version: Version) -> Path:
        return self.config.installation(version)

    def is_installed(self, version: Version) -> bool:
        return exists(self.installation(version))

    def default_version(self, directory: Optional[Union[str, Path]] = None) -> Version:
        """
        Read the version named by the project version file.

        Args:
            directory: Directory holding the file (current directory if None)

        Raises:
            FileNotFoundError: If there is no version file
            VersionParseError: If the file does not hold a version
        """
        directory = Path(directory) if directory is not None else Path.cwd()
        return read_version_file(directory / self.config.version_file)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def list(self) -> List[Version]:
        """Installed versions, ascending."""
        return list_installed(self.config.versions_path)

    def newest(self) -> Version:
        """
        Most recent installed version.

        Raises:
            VersionNotFoundError: If nothing is installed
        """
        return latest(self.list())

    def current(self) -> Optional[Version]:
        return self.link.current()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def install(self, version: Version, out: Optional[TextIO] = None) -> InstallReport:
        """Download and extract a version into its installation directory."""
        return self.installer.install(version, self.config.versions_path, out=out)

    def activate(self, version: Version) -> Path:
        """Point the toolchain root at an installed version."""
        return self.link.activate(version)

    def remove(self, version: Version) -> Path:
        """
        Delete one installation. The active link is left untouched.

        Raises:
            VersionNotFoundError: If the version is not installed
        """
        installation = self.installation(version)
        if not safe_rmtree(installation, require_prefix=self.config.versions_path):
            raise VersionNotFoundError(
                version.token, f"version {version.token!r} is not installed"
            )
        logger.info(f"Removed {installation}")
        return installation

    def uninstall_all(self) -> None:
        """
        Remove the toolchain root and every installation. Irreversible.

        The configured root (base/root_dir) is removed, not an environment
        override, so an externally managed GOROOT is never deleted.
        """
        root = self.config.root_path
        if remove_path(root):
            logger.info(f"Removed {root}")
        versions = self.config.versions_path
        if safe_rmtree(versions):
            logger.info(f"Removed {versions}")
