"""
Centralized exception hierarchy for govm.

Every failure surfaced by the version lifecycle engine derives from
GovmError so callers can catch one type at the outer boundary.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class GovmError(Exception):
    """Base exception for all govm errors."""

    pass


class ConfigError(GovmError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Version Exceptions
# ============================================================================


class VersionParseError(GovmError):
    """Raised when a version token is malformed."""

    def __init__(self, token: str, reason: str = ""):
        self.token = token
        self.reason = reason
        msg = f"invalid version {token!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class VersionNotFoundError(GovmError):
    """Raised when a requested version (or any version at all) is not installed."""

    def __init__(self, version: Optional[str] = None, message: str = ""):
        self.version = version
        if not message:
            if version is None:
                message = "cannot find any go installations"
            else:
                message = f"version {version!r} has not been downloaded"
        super().__init__(message)


# ============================================================================
# Activation Exceptions
# ============================================================================


class LinkConflictError(GovmError):
    """Raised when the active-link path is occupied by something other than a symlink."""

    def __init__(self, path, version: Optional[str] = None):
        self.path = path
        self.version = version
        msg = f"{str(path)!r} is not a symlink, please delete it"
        if version:
            msg += f" and use go{version}"
        super().__init__(msg)


# ============================================================================
# Installation Exceptions
# ============================================================================


class TransportError(GovmError):
    """Raised on network failure, non-success status or unexpected content type."""

    def __init__(
        self,
        message: str,
        url: str = "",
        version: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.url = url
        self.version = version
        self.status_code = status_code
        super().__init__(message)


class ArchiveError(GovmError):
    """Raised when the downloaded archive is corrupt or unsupported."""

    pass


class InsecureArchiveError(ArchiveError):
    """Raised when an archive entry would be written outside the installation."""

    pass
