"""
partman CLI entry point.

Checks configuration files and shows the configuration the client would start
with.
"""

import argparse
import sys
from typing import Optional

from partman import __version__
from partman.errors import ConfigError
from partman.observability.logging import configure_logging

from .commands import cmd_check, cmd_default, cmd_resolve, cmd_show, load_cli_settings
from .errors import CLIError, handle_cli_exception


def _configure_runtime_logging(args) -> None:
    """Configure logging level from the CLI flag, environment, or default."""
    log_level = getattr(args, 'log_level', None) or args.settings.log_level
    configure_logging(log_level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="partman – electronics part manager configuration tools",
        prog="partman"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to a configuration file (or set PARTMAN_CONFIG)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set PARTMAN_VERBOSE=1)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'warning', 'error'],
        default=None,
        help='Set logging level (or set PARTMAN_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    check_parser = subparsers.add_parser('check', help='Validate configuration files')
    check_parser.add_argument('files', nargs='+', help='Configuration files to check')
    check_parser.set_defaults(func=cmd_check)

    show_parser = subparsers.add_parser('show', help='Show the resolved configuration')
    show_parser.add_argument('--json', action='store_true', help='Print as JSON')
    show_parser.set_defaults(func=cmd_show)

    resolve_parser = subparsers.add_parser('resolve', help='Show the action bound to a chord')
    resolve_parser.add_argument('chord', help='Chord such as ctrl+q')
    resolve_parser.set_defaults(func=cmd_resolve)

    default_parser = subparsers.add_parser('default', help='Print the built-in configuration')
    default_parser.set_defaults(func=cmd_default)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        >>> main(['check', 'partman.conf'])  # doctest: +SKIP
        OK: partman.conf
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'func', None):
        parser.print_help()
        sys.exit(2)

    try:
        args.settings = load_cli_settings()
        _configure_runtime_logging(args)
        code = args.func(args)
    except (CLIError, ConfigError) as exc:
        handle_cli_exception(exc, verbose=args.verbose)
        return
    if code:
        sys.exit(code)


__all__ = ["build_parser", "main"]
