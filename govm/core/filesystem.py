"""
File system helpers for govm.

This module provides the directory-scanning and removal glue shared by the
installer, the activator and the version listing:
- Listing installation directories
- Guarded recursive deletion
- Archive member path validation (directory traversal protection)
"""

import logging
import os
import shutil
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union

from govm.core.exceptions import GovmError, InsecureArchiveError

logger = logging.getLogger(__name__)


class FilesystemError(GovmError):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def exists(path: Union[str, Path]) -> bool:
    """
    Check whether a path exists, following symlinks.

    A dangling symlink does not exist; use os.path.lexists for the link itself.
    """
    return os.path.exists(path)


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Example:
        >>> is_relative_to(Path("/usr/local/go/bin"), Path("/usr/local"))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def list_subdirectories(directory: Union[str, Path]) -> List[str]:
    """
    List the names of the immediate subdirectories of a directory.

    Non-directory entries (files, symlinks) are skipped. Order is the
    order the OS returns; callers sort.

    Args:
        directory: Directory to scan

    Returns:
        Names of subdirectories

    Raises:
        FileNotFoundError: If directory does not exist
        NotADirectoryError: If directory is a file
    """
    names = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                names.append(entry.name)
            else:
                logger.debug(f"Skipping non-directory entry: {entry.path}")
    return names


# ============================================================================
# Archive Path Validation
# ============================================================================


def strip_archive_prefix(name: str) -> str:
    """
    Strip the single top-level wrapping directory from an archive member name.

    Example:
        >>> strip_archive_prefix("go/bin/gofmt")
        'bin/gofmt'
        >>> strip_archive_prefix("./go/")
        ''
    """
    parts = [p for p in PurePosixPath(name).parts if p != "."]
    if parts and parts[0] == "/":
        # Absolute names are kept absolute so validation rejects them
        return "/" + "/".join(parts[1:])
    return "/".join(parts[1:])


def validate_archive_path(relative: str, destination: Path) -> Path:
    """
    Validate that an archive member path is safe to extract.

    Prevents directory traversal attacks (e.g., paths containing '../').

    Args:
        relative: Member path after stripping the wrapping directory
        destination: Extraction destination

    Returns:
        Absolute path the member should be written to

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    pure = PurePosixPath(relative)
    if pure.is_absolute() or ".." in pure.parts:
        raise InsecureArchiveError(
            f"Archive member '{relative}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )
    target = destination.joinpath(*pure.parts) if pure.parts else destination
    if not is_relative_to(Path(os.path.normpath(target)), Path(os.path.normpath(destination))):
        raise InsecureArchiveError(
            f"Archive member '{relative}' resolves outside {destination}"
        )
    return target


# ============================================================================
# Removal
# ============================================================================


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> bool:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Returns:
        True if something was removed, False if the path did not exist

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If path is not a directory or deletion fails
    """
    path = Path(path)

    if require_prefix is not None:
        prefix = Path(os.path.abspath(require_prefix))
        if not is_relative_to(Path(os.path.abspath(path)), prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{prefix}'"
            )

    if not os.path.lexists(path):
        return False

    if path.is_symlink() or not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        shutil.rmtree(path)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e
    logger.debug(f"Removed directory tree: {path}")
    return True


def remove_path(path: Union[str, Path]) -> bool:
    """
    Remove a symlink, file or directory tree at path.

    Symlinks are unlinked, never followed.

    Returns:
        True if something was removed, False if nothing was there
    """
    path = Path(path)
    if not os.path.lexists(path):
        return False
    if path.is_symlink() or not path.is_dir():
        path.unlink()
        logger.debug(f"Removed: {path}")
        return True
    return safe_rmtree(path)
