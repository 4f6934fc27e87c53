"""
Shared utilities for CLI commands.

Provides the configuration and manager wiring used by every command so each
one sees the same explicit GovmConfig.
"""

import logging
import sys
from typing import Optional, TextIO

from govm.core.config import GovmConfig, load_config
from govm.toolchain.manager import VersionManager

logger = logging.getLogger(__name__)


def build_config(args) -> GovmConfig:
    """
    Load configuration and apply command-line overrides.

    Args:
        args: Parsed arguments (config, base, no_progress)

    Returns:
        Effective configuration
    """
    config = load_config(getattr(args, "config", None))
    show_progress = False if getattr(args, "no_progress", False) else None
    config = config.with_overrides(
        base=getattr(args, "base", None), show_progress=show_progress
    )
    logger.debug(f"Using base directory {config.base}")
    return config


def build_manager(args) -> VersionManager:
    """Create a VersionManager for the parsed arguments."""
    return VersionManager(build_config(args))


def confirm(prompt: str, stream: Optional[TextIO] = None) -> bool:
    """
    Ask a yes/no question on the terminal.

    Returns:
        True only for an explicit 'y' or 'yes'
    """
    print(f"{prompt} [y/N] ", end="", flush=True)
    answer = (stream or sys.stdin).readline()
    return answer.strip().lower() in ("y", "yes")
