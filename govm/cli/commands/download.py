"""
Download command implementation.

Downloads and extracts a Go release, optionally activating it afterwards.
"""

import logging
import sys

from govm.cli.utils import build_manager

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the download command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    manager = build_manager(args)
    version = manager.resolve(args.version)

    manager.install(version, out=sys.stdout)

    if args.use:
        manager.activate(version)
    return 0
