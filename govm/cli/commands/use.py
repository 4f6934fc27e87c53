"""
Use command implementation.

Switches the Go root to an installed version.
"""

import logging
import sys

from govm.cli.utils import build_manager

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the use command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    manager = build_manager(args)

    if args.version:
        version = manager.resolve(args.version)
    else:
        version_file = manager.config.version_file
        try:
            version = manager.default_version()
        except FileNotFoundError:
            logger.error(f"give version number or use {version_file!r} file")
            return 1
        print(f"using version from {version_file!r}", file=sys.stdout)

    manager.activate(version)
    return 0
