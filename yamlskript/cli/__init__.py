"""
Command line interface for yamlskript.

Usage::

    ysk build        # or: ysk b
    ysk install      # or: ysk i
    ysk help         # or: ysk h
"""

import argparse
import logging
import os
import sys
from typing import Optional

from .. import __version__
from .commands import cmd_build, cmd_install


def _configure_logging(args) -> None:
    """Configure the ``yamlskript`` logger from ``--log-level`` or ``YSK_LOG_LEVEL``."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv('YSK_LOG_LEVEL', 'warn')
    ).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }

    numeric_level = level_map.get(log_level, logging.WARNING)

    package_logger = logging.getLogger('yamlskript')
    package_logger.setLevel(numeric_level)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        package_logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="yamlSkript compiler: build JavaScript and JSX from YAML documents",
        prog="ysk"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set YSK_VERBOSE=1)'
    )
    parser.add_argument(
        '--project',
        default=None,
        help='Project root containing package.yml (defaults to current working directory)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Set logging level (or set YSK_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    build_cmd = subparsers.add_parser(
        'build',
        aliases=['b'],
        help='Compile the documents listed in package.yml'
    )
    build_cmd.add_argument(
        '--out',
        default=None,
        help='Output directory (overrides yamlSkript.output)'
    )
    build_cmd.add_argument(
        '--strict',
        action='store_true',
        help='Fail when a document contains node kinds the compiler cannot emit'
    )
    build_cmd.set_defaults(func=cmd_build)

    install_cmd = subparsers.add_parser(
        'install',
        aliases=['i'],
        help='Install the dependencies listed in package.yml'
    )
    install_cmd.set_defaults(func=cmd_install)

    help_cmd = subparsers.add_parser(
        'help',
        aliases=['h'],
        help='Show this help message'
    )
    help_cmd.set_defaults(func=lambda args: parser.print_help())

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint.

    Examples:
        >>> main(['build'])  # doctest: +SKIP
        >>> main(['--project', 'site', 'install'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    args.verbose = getattr(args, "verbose", False)
    _configure_logging(args)

    args.func(args)


if __name__ == '__main__':  # pragma: no cover
    main()
