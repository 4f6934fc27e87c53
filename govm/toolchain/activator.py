"""
govm/toolchain/activator.py

Active toolchain root management.

The toolchain root is a single symlink that points at one installation.
Activation repoints it; the link is swapped with an atomic rename so there is
no moment at which the root is missing. A real file or directory at the root
path is never replaced.
"""

import logging
import os
import stat
from enum import Enum
from pathlib import Path
from typing import Callable, List, Mapping, Optional

from govm.core.config import GovmConfig
from govm.core.exceptions import LinkConflictError, VersionNotFoundError, VersionParseError
from govm.core.filesystem import exists
from govm.toolchain.version import (
    INSTALLATION_PREFIX,
    Version,
    latest,
    list_installed,
    strip_installation_prefix,
)

logger = logging.getLogger(__name__)


class LinkState(Enum):
    """States of the active-link path."""

    NO_LINK = "no-link"  # Nothing at the path
    VALID_LINK = "valid-link"  # A symlink (its target may be missing)
    BLOCKED = "blocked"  # Something that is not a symlink


class ActiveLink:
    """Manages the symlink that selects the active installation."""

    def __init__(
        self,
        config: Optional[GovmConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
        list_versions: Optional[Callable[[], List[Version]]] = None,
    ):
        """
        Initialize the active link manager.

        Args:
            config: Layout settings (defaults if None)
            environ: Environment consulted for the root override (os.environ if None)
            list_versions: Installed-version lister (scans config.versions_path if None)
        """
        self.config = config or GovmConfig()
        self._environ = environ
        self._list_versions = list_versions or (
            lambda: list_installed(self.config.versions_path)
        )

    @property
    def path(self) -> Path:
        """
        Resolve the link path: the environment override when set, else base/root_dir.

        Checked on every access; nothing is cached.
        """
        environ = os.environ if self._environ is None else self._environ
        override = environ.get(self.config.root_env_var)
        if override:
            return Path(override)
        return self.config.root_path

    def state(self, path: Optional[Path] = None) -> LinkState:
        path = path if path is not None else self.path
        try:
            st = os.lstat(path)
        except FileNotFoundError:
            return LinkState.NO_LINK
        if stat.S_ISLNK(st.st_mode):
            return LinkState.VALID_LINK
        return LinkState.BLOCKED

    def activate(self, version: Version) -> Path:
        """
        Point the toolchain root at an installed version.

        With no link yet, the root is first bootstrapped to the newest
        installed version, then switched to the requested one.

        Args:
            version: Version to activate

        Returns:
            Path of the installation now active

        Raises:
            LinkConflictError: If the root path exists and is not a symlink
            VersionNotFoundError: If nothing is installed, or the requested
                version has not been downloaded
        """
        link = self.path
        state = self.state(link)
        logger.debug(f"Active link {link} is in state {state.value}")

        if state is LinkState.BLOCKED:
            raise LinkConflictError(link, version.token)

        if state is LinkState.NO_LINK:
            newest = latest(self._list_versions())
            bootstrap = self.config.installation(newest)
            link.parent.mkdir(parents=True, exist_ok=True)
            os.symlink(bootstrap, link, target_is_directory=True)
            logger.info(f"Created toolchain root {link} -> {bootstrap}")

        installation = self.config.installation(version)
        if not exists(installation):
            raise VersionNotFoundError(version.token)

        self._replace_link(link, installation)
        logger.info(f"switching to version {version.token}")
        return installation

    def current(self) -> Optional[Version]:
        """
        Get the version the root currently points at.

        Returns:
            Version parsed from the link target's name, or None without a link

        Raises:
            LinkConflictError: If the root path exists and is not a symlink
            VersionParseError: If the link points somewhere that is not an installation
        """
        link = self.path
        state = self.state(link)
        if state is LinkState.NO_LINK:
            return None
        if state is LinkState.BLOCKED:
            raise LinkConflictError(link)

        name = Path(os.readlink(link)).name
        if not name.startswith(INSTALLATION_PREFIX):
            raise VersionParseError(name, f"{link} does not point at an installation")
        return Version.parse(strip_installation_prefix(name))

    def target(self) -> Optional[Path]:
        """Raw link target, or None when the root is not a symlink."""
        link = self.path
        if self.state(link) is not LinkState.VALID_LINK:
            return None
        return Path(os.readlink(link))

    def _replace_link(self, link: Path, installation: Path) -> None:
        """Swap the symlink at link to point at installation via rename."""
        tmp = link.with_name(f".{link.name}.govm-{os.getpid()}")
        if os.path.lexists(tmp):
            os.unlink(tmp)
        os.symlink(installation, tmp, target_is_directory=True)
        try:
            os.replace(tmp, link)
        except OSError:
            os.unlink(tmp)
            raise
        logger.debug(f"Repointed {link} -> {installation}")