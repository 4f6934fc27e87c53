"""
List command implementation.

Prints installed versions, newest first.
"""

import logging

from govm.cli.utils import build_manager
from govm.core.exceptions import GovmError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the list command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    manager = build_manager(args)
    versions = manager.list()

    try:
        active = manager.current()
    except GovmError as e:
        logger.debug(f"Cannot determine active version: {e}")
        active = None

    for version in reversed(versions):
        marker = "*" if version == active else " "
        print(f"{marker} {version.token}")
    return 0
