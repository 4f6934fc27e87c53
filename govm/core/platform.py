"""
Platform detection for govm.

Maps the running host onto the operating system and CPU architecture names
used by upstream release archives (e.g. 'linux-amd64', 'darwin-arm64').

Usage:
    from govm.core.platform import detect_platform

    info = detect_platform()
    print(info.platform_string())
"""

import functools
import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform in upstream archive naming.

    Attributes:
        os: Operating system ('linux', 'darwin', 'freebsd', 'windows')
        arch: CPU architecture ('amd64', 'arm64', '386', 'armv6l', ...)
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get the '<os>-<arch>' pair used in archive file names.

        Example:
            >>> PlatformInfo('linux', 'amd64').platform_string()
            'linux-amd64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    """
    Detect operating system.

    Raises:
        RuntimeError: If OS is not supported
    """
    system = platform.system().lower()

    if system in ("linux", "darwin", "freebsd", "windows"):
        return system
    raise RuntimeError(f"Unsupported operating system: {system}")


def _detect_architecture() -> str:
    """Detect CPU architecture."""
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "amd64"
    elif machine in ("aarch64", "arm64"):
        return "arm64"
    elif machine in ("i386", "i686", "x86"):
        return "386"
    elif machine.startswith("arm"):
        # Upstream only publishes armv6l builds for 32-bit ARM
        return "armv6l"
    elif machine in ("ppc64le", "s390x", "riscv64", "loongarch64"):
        return "loong64" if machine == "loongarch64" else machine
    else:
        return machine


def clear_platform_cache():
    """Clear the cached detection result (used by tests)."""
    detect_platform.cache_clear()
