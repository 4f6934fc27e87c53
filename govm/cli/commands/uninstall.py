"""
Uninstall command implementation.

Removes the Go root link and every installed version.
"""

import logging

from govm.cli.utils import build_manager, confirm

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the uninstall command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 if declined)
    """
    manager = build_manager(args)
    config = manager.config

    if not args.yes and not confirm(
        f"Remove {config.root_path} and everything in {config.versions_path}?"
    ):
        logger.info("Uninstall cancelled")
        return 1

    manager.uninstall_all()
    return 0
