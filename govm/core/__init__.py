"""
Core functionality for govm.

This package contains the foundational modules that the toolchain lifecycle
components depend on.
"""

from .config import (
    GovmConfig,
    load_config,
    default_config_path,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .progress import Spinner

from .exceptions import (
    GovmError,
    ConfigError,
    VersionParseError,
    VersionNotFoundError,
    LinkConflictError,
    TransportError,
    ArchiveError,
    InsecureArchiveError,
)

__all__ = [
    "GovmConfig",
    "load_config",
    "default_config_path",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "Spinner",
    "GovmError",
    "ConfigError",
    "VersionParseError",
    "VersionNotFoundError",
    "LinkConflictError",
    "TransportError",
    "ArchiveError",
    "InsecureArchiveError",
]
