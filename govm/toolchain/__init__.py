"""
Toolchain version lifecycle for govm.

This module provides functionality for:
- Version parsing, ordering and installed-version listing
- Toolchain download and extraction
- Switching the active toolchain root
"""

from govm.toolchain.version import (
    Version,
    clean_version_input,
    resolve,
    sort_versions,
    latest,
    list_installed,
    read_version_file,
    strip_installation_prefix,
)
from govm.toolchain.installer import (
    Installer,
    InstallReport,
    build_download_url,
    extract_stream,
)
from govm.toolchain.activator import ActiveLink, LinkState
from govm.toolchain.manager import VersionManager

__all__ = [
    "Version",
    "clean_version_input",
    "resolve",
    "sort_versions",
    "latest",
    "list_installed",
    "read_version_file",
    "strip_installation_prefix",
    "Installer",
    "InstallReport",
    "build_download_url",
    "extract_stream",
    "ActiveLink",
    "LinkState",
    "VersionManager",
]
