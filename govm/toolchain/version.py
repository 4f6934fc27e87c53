"""
Semantic version model for toolchain releases.

Versions look like 'major.minor[.patch][pre]' where 'pre' is a free-text
suffix glued to the last numeric component ('1.22rc1', '1.21.0', '9.33beta').
This module parses, orders and formats them, and builds the ascending list of
installed versions from an installations directory.
"""

import functools
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Union

from govm.core.exceptions import VersionNotFoundError, VersionParseError
from govm.core.filesystem import list_subdirectories

logger = logging.getLogger(__name__)

_NUMERIC_RE = re.compile(r"[0-9]+")
_LEADING_DIGITS_RE = re.compile(r"^([0-9]*)(.*)$", re.DOTALL)

INSTALLATION_PREFIX = "go"


@functools.total_ordering
@dataclass(frozen=True, eq=True)
class Version:
    """
    Immutable release version.

    Equality, hashing and ordering use (major, minor, patch, pre) only.
    'text' remembers the canonical token the version was parsed from so that
    directory names and download URLs match upstream spelling ('1.21.0' stays
    '1.21.0' even though it formats as '1.21').
    """

    major: int
    minor: int = 0
    patch: int = 0
    pre: str = ""
    text: str = field(default="", compare=False, repr=False)

    @classmethod
    def parse(cls, token: str) -> "Version":
        """
        Parse a dotted version token.

        Accepts 1 to 3 dot-separated components. The last one is a run of
        digits optionally followed by a pre-release suffix; every other
        component must be purely numeric.

        Example:
            >>> Version.parse("9.33beta")
            Version(major=9, minor=33, patch=0, pre='beta')

        Raises:
            VersionParseError: If the token is malformed
        """
        if not isinstance(token, str):
            raise VersionParseError(str(token), "not a string")

        parts = token.split(".")
        if len(parts) > 3:
            raise VersionParseError(token, "too many components")

        *leading, last = parts
        numbers = []
        for part in leading:
            if not _NUMERIC_RE.fullmatch(part):
                raise VersionParseError(token, f"component {part!r} is not a number")
            numbers.append(int(part))

        digits, pre = _LEADING_DIGITS_RE.match(last).groups()
        if not digits:
            raise VersionParseError(token, "invalid number")
        numbers.append(int(digits))

        numbers += [0] * (3 - len(numbers))
        major, minor, patch = numbers
        return cls(major, minor, patch, pre, text=token)

    @property
    def token(self) -> str:
        """Token naming this version on disk and in download URLs."""
        return self.text or self.format()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.pre)

    def format(self) -> str:
        """
        Render as 'major.minor', adding '.patch' when patch > 0, then 'pre'.

        Example:
            >>> Version(1, 22, 0, "rc1").format()
            '1.22rc1'
        """
        out = f"{self.major}.{self.minor}"
        if self.patch > 0:
            out += f".{self.patch}"
        return out + self.pre

    def compare(self, other: "Version") -> int:
        """
        Compare with another version.

        Numeric fields compare as integers. At equal numbers a release with no
        pre-release tag is newer than any tagged one; two tags compare as
        plain strings.

        Returns:
            -1, 0 or 1
        """
        mine = (self.major, self.minor, self.patch)
        theirs = (other.major, other.minor, other.patch)
        if mine != theirs:
            return -1 if mine < theirs else 1
        if self.pre == other.pre:
            return 0
        if not self.pre:
            return 1
        if not other.pre:
            return -1
        return -1 if self.pre < other.pre else 1

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        return self.format()


def clean_version_input(token: str) -> str:
    """
    Strip one user-facing prefix from a version token.

    A leading 'v' is checked first, then a leading 'go'; only one is removed.

    Example:
        >>> clean_version_input("go1.22.0")
        '1.22.0'
        >>> clean_version_input("v1.22")
        '1.22'
    """
    token = token.strip()
    if token.startswith("v"):
        return token[1:]
    return strip_installation_prefix(token)


def strip_installation_prefix(name: str) -> str:
    """Drop a leading 'go' from an installation directory name or token."""
    if name.startswith(INSTALLATION_PREFIX):
        return name[len(INSTALLATION_PREFIX):]
    return name


def resolve(token: str) -> Version:
    """
    Canonicalize and parse a user-supplied version token.

    Raises:
        VersionParseError: If the token is empty or malformed
    """
    if not token or not token.strip():
        raise VersionParseError(token or "", "empty version")
    return Version.parse(clean_version_input(token))


def sort_versions(versions: Iterable[Version]) -> List[Version]:
    """Return versions in ascending order."""
    return sorted(versions)


def latest(versions: Iterable[Version]) -> Version:
    """
    Get the most recent version.

    Raises:
        VersionNotFoundError: If there are no versions
    """
    ordered = sort_versions(versions)
    if not ordered:
        raise VersionNotFoundError()
    return ordered[-1]


def list_installed(root: Union[str, Path]) -> List[Version]:
    """
    List installed versions under an installations directory.

    Each subdirectory name has a leading 'go' stripped and is parsed; a name
    that does not parse fails the whole listing. A missing root means no
    versions are installed.

    Args:
        root: Installations directory (one 'go<version>' dir per version)

    Returns:
        Installed versions in ascending order

    Raises:
        VersionParseError: If any subdirectory name is not a version
    """
    try:
        names = list_subdirectories(root)
    except FileNotFoundError:
        logger.debug(f"Installations directory does not exist: {root}")
        return []

    versions = []
    for name in names:
        token = strip_installation_prefix(name)
        try:
            versions.append(Version.parse(token))
        except VersionParseError as e:
            raise VersionParseError(
                name, f"unexpected directory in {root}: {e.reason}"
            ) from e
    return sort_versions(versions)


def read_version_file(filename: Union[str, Path]) -> Version:
    """
    Read a project version file holding a single, optionally 'go'-prefixed token.

    Raises:
        FileNotFoundError: If the file does not exist
        VersionParseError: If the content is not a version
    """
    raw = Path(filename).read_text(encoding="utf-8").strip(" \r\n\t")
    return Version.parse(strip_installation_prefix(raw))
