"""Current command implementation."""

import logging

from govm.cli.utils import build_manager

logger = logging.getLogger(__name__)


def run(args) -> int:
    manager = build_manager(args)
    version = manager.current()
    if version is None:
        logger.error(f"no active version, {manager.link.path} does not exist")
        return 1
    print(version.token)
    return 0
