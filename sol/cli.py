"""
Command Line Interface for sol.

Provides the install, use, remove and ls commands.
"""

import argparse
import sys
from typing import List, Optional

from sol import __version__
from sol.cli_commands import COMMANDS
from sol.common.config import SolSettings
from sol.common.constants import ExitCodes
from sol.common.logging_config import configure_logging, get_logger


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='sol',
        description='Install, remove and switch between Node.js versions'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    for command in COMMANDS:
        command.add_parser(subparsers)

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
    """
    configure_logging()
    logger = get_logger(__name__)
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    if not args:
        parser.print_help()
        sys.exit(ExitCodes.OK)

    parsed_args = parser.parse_args(args)
    if parsed_args.verbose:
        configure_logging("DEBUG", force=True)

    parsed_args.settings = SolSettings()
    logger.debug("Using sol home %s", parsed_args.settings.home())

    if hasattr(parsed_args, 'func'):
        parsed_args.func(parsed_args)
    else:
        parser.print_help()
        sys.exit(ExitCodes.OK)


if __name__ == '__main__':
    main()
