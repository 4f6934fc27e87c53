"""
Remove command implementation.

Deletes one installation without touching the Go root link.
"""

import logging

from govm.cli.utils import build_manager
from govm.core.exceptions import GovmError

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the remove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    manager = build_manager(args)
    version = manager.resolve(args.version)

    try:
        active = manager.current()
    except GovmError:
        active = None
    if version == active:
        logger.warning(f"go{version} is the active version; the Go root is now dangling")

    manager.remove(version)
    return 0
