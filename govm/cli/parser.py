"""
govm CLI argument parser.

This module implements the command-line interface for govm using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from govm.core.exceptions import GovmError

try:
    from importlib.metadata import version

    __version__ = version("govm")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """govm command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="govm",
            description="govm - Manage different versions of Go",
            epilog='Use "govm COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"govm {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ~/.config/govm/config.yaml)",
        )
        parser.add_argument(
            "--base",
            type=Path,
            metavar="DIR",
            help="Base directory for the toolchain root and installations (default: /usr/local)",
        )
        parser.add_argument(
            "--no-progress",
            action="store_true",
            help="Do not draw a progress spinner while downloading",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_use_command(subparsers)
        self._add_download_command(subparsers)
        self._add_list_command(subparsers)
        self._add_current_command(subparsers)
        self._add_remove_command(subparsers)
        self._add_uninstall_command(subparsers)
        self._add_env_command(subparsers)

        return parser

    def _add_use_command(self, subparsers):
        """Add 'use' subcommand."""
        parser = subparsers.add_parser(
            "use",
            help="Switch to a specified version of Go",
            description="Point the Go root at an installed version. Without a "
            "version, the version file in the current directory is used.",
        )
        parser.add_argument("version", nargs="?", help="Version (e.g., 1.22, go1.22.0)")

    def _add_download_command(self, subparsers):
        """Add 'download' subcommand."""
        parser = subparsers.add_parser(
            "download",
            aliases=["dl"],
            help="Download a different version of Go",
            description="Download and extract a Go release into its own installation directory",
        )
        parser.add_argument("version", help="Version to download (e.g., 1.22.0)")
        parser.add_argument(
            "--use",
            action="store_true",
            help="Set this version after downloading it",
        )

    def _add_list_command(self, subparsers):
        """Add 'list' subcommand."""
        subparsers.add_parser(
            "list",
            aliases=["ls"],
            help="List all the installed versions of Go",
            description="List installed versions, newest first; '*' marks the active one",
        )

    def _add_current_command(self, subparsers):
        """Add 'current' subcommand."""
        subparsers.add_parser(
            "current",
            help="Show the active version of Go",
        )

    def _add_remove_command(self, subparsers):
        """Add 'remove' subcommand."""
        parser = subparsers.add_parser(
            "remove",
            aliases=["rm"],
            help="Remove an installation",
        )
        parser.add_argument("version", help="Version to remove")

    def _add_uninstall_command(self, subparsers):
        """Add 'uninstall' subcommand."""
        parser = subparsers.add_parser(
            "uninstall",
            help="Remove all Go versions installed",
            description="Remove the Go root link and every installed version",
        )
        parser.add_argument(
            "--yes",
            "-y",
            action="store_true",
            help="Do not ask for confirmation",
        )

    def _add_env_command(self, subparsers):
        """Add 'env' subcommand."""
        subparsers.add_parser(
            "env",
            help="Print shell variables needed for govm to manage your Go versions",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except (GovmError, OSError) as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "use": "govm.cli.commands.use",
            "download": "govm.cli.commands.download",
            "dl": "govm.cli.commands.download",
            "list": "govm.cli.commands.list",
            "ls": "govm.cli.commands.list",
            "current": "govm.cli.commands.current",
            "remove": "govm.cli.commands.remove",
            "rm": "govm.cli.commands.remove",
            "uninstall": "govm.cli.commands.uninstall",
            "env": "govm.cli.commands.env",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
