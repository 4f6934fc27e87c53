"""
Toolchain download and extraction.

This module turns a remote release archive into an installation directory:
1. Build the download URL for the version and host platform
2. Stream the HTTP response through gzip and tar readers, one entry at a time
3. Strip the archive's top-level wrapping directory
4. Write directories and regular files with their archive permission bits

Nothing is buffered in full and nothing is rolled back: an error leaves the
files written so far on disk, and re-installing overwrites them.
"""

import gzip
import logging
import os
import shutil
import tarfile
import time
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

import requests
import urllib3

from govm.core.config import GovmConfig
from govm.core.exceptions import ArchiveError, TransportError
from govm.core.filesystem import strip_archive_prefix, validate_archive_path
from govm.core.platform import PlatformInfo, detect_platform
from govm.core.progress import Spinner
from govm.toolchain.version import Version

logger = logging.getLogger(__name__)

DEFAULT_DIR_MODE = 0o775


@dataclass
class InstallReport:
    """Result of an install operation."""

    version: Version
    """Installed version"""

    path: Path
    """Installation directory"""

    url: str
    """URL the archive was downloaded from"""

    files: int
    """Number of regular files written"""

    bytes_written: int
    """Total size of regular files written"""

    elapsed: float
    """Wall time of the whole operation in seconds"""


def build_download_url(
    template: str, version: Version, platform: Optional[PlatformInfo] = None
) -> str:
    """
    Substitute version, OS and architecture into a URL template.

    Example:
        >>> build_download_url(
        ...     "https://go.dev/dl/go{version}.{os}-{arch}.tar.gz",
        ...     Version.parse("1.22.0"),
        ...     PlatformInfo("linux", "amd64"),
        ... )
        'https://go.dev/dl/go1.22.0.linux-amd64.tar.gz'
    """
    platform = platform or detect_platform()
    return template.format(version=version.token, os=platform.os, arch=platform.arch)


def is_gzip_content_type(content_type: Optional[str]) -> bool:
    """Check whether a Content-Type header identifies a gzip stream."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type.endswith("gzip")


class Installer:
    """
    Downloads a release archive and extracts it into an installation directory.

    Example:
        >>> installer = Installer(GovmConfig(base=Path("/tmp/govm")))
        >>> report = installer.install(Version.parse("1.22.0"), out=sys.stdout)
        >>> print(f"Installed {report.files} files to {report.path}")
    """

    def __init__(
        self,
        config: Optional[GovmConfig] = None,
        platform: Optional[PlatformInfo] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize installer.

        Args:
            config: Layout and URL settings (defaults if None)
            platform: Target platform (auto-detected if None)
            session: Optional requests session (module-level requests if None)
        """
        self.config = config or GovmConfig()
        self.platform = platform or detect_platform()
        self.session = session

    def download_url(self, version: Version) -> str:
        return build_download_url(self.config.url_template, version, self.platform)

    def install(
        self,
        version: Version,
        destination_root: Optional[Path] = None,
        out: Optional[TextIO] = None,
    ) -> InstallReport:
        """
        Download and extract a version.

        Args:
            version: Version to install
            destination_root: Installations directory (config.versions_path if None)
            out: Text stream for the spinner and summary lines (silent if None)

        Returns:
            InstallReport with file count and elapsed time

        Raises:
            TransportError: On network failure, non-2xx status or non-gzip content
            ArchiveError: On a corrupt stream or unsupported entry type
            OSError: If writing to the installation directory fails
        """
        if destination_root is None:
            installation = self.config.installation(version)
        else:
            installation = Path(destination_root) / f"go{version.token}"
        url = self.download_url(version)
        start = time.monotonic()

        logger.info(f"Downloading go{version.token} from {url}")
        spinner = Spinner(out if self.config.show_progress else None, "Downloading")
        spinner.start()
        try:
            files, total = self._download_and_extract(url, version, installation)
        finally:
            spinner.stop()

        elapsed = time.monotonic() - start
        logger.info(f"Installed {files} files to {installation} in {elapsed:.1f}s")
        if out is not None:
            out.write(f"\rdownloaded {files} files in {elapsed:.2f}s\n")
            out.write(f"installed to {installation}\n")
            out.flush()

        return InstallReport(
            version=version,
            path=installation,
            url=url,
            files=files,
            bytes_written=total,
            elapsed=elapsed,
        )

    def _get(self, url: str) -> requests.Response:
        getter = self.session.get if self.session is not None else requests.get
        return getter(url, stream=True)

    def _download_and_extract(self, url: str, version: Version, installation: Path):
        try:
            response = self._get(url)
        except requests.RequestException as e:
            raise TransportError(
                f"failed to download {url}: {e}", url=url, version=version.token
            ) from e

        with response:
            if not 200 <= response.status_code < 300:
                raise TransportError(
                    f"could not find version {version.token!r} using {url!r} "
                    f"(HTTP {response.status_code})",
                    url=url,
                    version=version.token,
                    status_code=response.status_code,
                )

            content_type = response.headers.get("Content-Type", "")
            if not is_gzip_content_type(content_type):
                raise TransportError(
                    f"expected a gzip response from {url}, got {content_type or 'nothing'}",
                    url=url,
                    version=version.token,
                    status_code=response.status_code,
                )

            installation.mkdir(parents=True, exist_ok=True)
            try:
                with tarfile.open(fileobj=response.raw, mode="r|gz") as tarball:
                    return extract_stream(tarball, installation)
            except (requests.RequestException, urllib3.exceptions.HTTPError) as e:
                raise TransportError(
                    f"connection failed while reading {url}: {e}",
                    url=url,
                    version=version.token,
                ) from e
            except (tarfile.TarError, gzip.BadGzipFile, zlib.error, EOFError) as e:
                raise ArchiveError(f"malformed archive from {url}: {e}") from e


def extract_stream(tarball: tarfile.TarFile, installation: Path):
    """
    Extract members of a (possibly streaming) tar archive one at a time.

    The first path component of every member is dropped. Directories and
    regular files keep their permission bits; any other member type aborts
    extraction.

    Args:
        tarball: Open tar archive (stream mode supported)
        installation: Destination directory

    Returns:
        (files written, bytes written)

    Raises:
        ArchiveError: On an unsupported member type
        InsecureArchiveError: If a member escapes the destination
    """
    files = 0
    total = 0
    for member in tarball:
        relative = strip_archive_prefix(member.name)
        target = validate_archive_path(relative, installation)
        perm = member.mode & 0o777

        if member.isdir():
            logger.debug(f"mkdir {target} ({perm:o})")
            target.mkdir(mode=perm, parents=True, exist_ok=True)
        elif member.isreg():
            if not relative:
                raise ArchiveError(
                    f"archive member {member.name!r} is a file outside the wrapping directory"
                )
            source = tarball.extractfile(member)
            if source is None:
                raise ArchiveError(f"cannot read archive member {member.name!r}")
            total += _write_file(source, target, perm)
            files += 1
        else:
            raise ArchiveError(
                f"don't know how to deal with archive member {member.name!r} "
                f"(type {member.type!r})"
            )
    return files, total


def _write_file(source, target: Path, perm: int) -> int:
    parent = target.parent
    if not parent.exists():
        parent.mkdir(mode=DEFAULT_DIR_MODE, parents=True, exist_ok=True)

    # Replace instead of truncating so read-only leftovers do not block re-installs
    if os.path.lexists(target):
        target.unlink()

    fd = os.open(target, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, perm)
    with os.fdopen(fd, "wb") as f:
        shutil.copyfileobj(source, f)
        return f.tell()
