"""
modelicafmt CLI entry point.

This module provides the main CLI interface, dispatching subcommands to
focused command modules.
"""

import argparse
import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Optional

from modelicafmt import __version__
from modelicafmt.config import load_workspace_config

from .commands import add_format_command, add_lsp_command
from .context import CLIContext
from .errors import CLIConfigError, CLIFileNotFoundError, handle_cli_exception, wrap_exception

LOG_LEVEL_ENV = "MODELICAFMT_LOG_LEVEL"


def _configure_logging(args) -> None:
    """Configure the modelicafmt logger from the CLI flag or environment."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv(LOG_LEVEL_ENV, 'warn')
    ).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }

    numeric_level = level_map.get(log_level, logging.WARNING)

    package_logger = logging.getLogger('modelicafmt')
    package_logger.setLevel(numeric_level)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)
        # Prevent propagation to root logger to avoid duplicate messages
        package_logger.propagate = False


def _load_context(args) -> CLIContext:
    workspace_root = Path(args.workspace).resolve() if args.workspace else Path.cwd()
    config_path = Path(args.config).resolve() if args.config else None
    if config_path is not None and not config_path.exists():
        raise CLIFileNotFoundError(
            f"Configuration file not found: {config_path}",
            hint="Check the path given to --config",
        )
    try:
        config = load_workspace_config(workspace_root, config_path)
    except tomllib.TOMLDecodeError as exc:
        raise wrap_exception(
            exc,
            message=f"Invalid configuration file: {exc}",
            error_class=CLIConfigError,
            hint="modelicafmt.toml must be valid TOML",
        ) from exc
    except ValueError as exc:
        raise wrap_exception(
            exc,
            message=f"Invalid configuration value: {exc}",
            error_class=CLIConfigError,
            hint="Check preset and indent-parens in modelicafmt.toml",
        ) from exc
    return CLIContext(workspace_root=workspace_root, config=config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="modelicafmt – canonical formatting for Modelica source code",
        prog="modelicafmt"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to a modelicafmt.toml configuration file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set MODELICAFMT_VERBOSE=1)'
    )
    parser.add_argument(
        '--workspace',
        default=None,
        help='Workspace root directory (defaults to current working directory)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help=f'Set logging level (or set {LOG_LEVEL_ENV})'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    add_format_command(subparsers)
    add_lsp_command(subparsers)
    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        Check formatting of a package:
        >>> main(['format', '--check', 'Modelica/'])  # doctest: +SKIP

        Rewrite files in place:
        >>> main(['format', '-w', 'Model.mo'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, print help
    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    _configure_logging(args)

    try:
        args.cli_context = _load_context(args)
    except Exception as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    args.func(args)


__all__ = ["main", "build_parser"]


if __name__ == '__main__':  # pragma: no cover
    main()
