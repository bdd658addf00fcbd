"""LSP command implementation."""

import argparse
import os
import sys

from ..context import get_cli_context
from ..errors import CLIServerError, handle_cli_exception


def cmd_lsp(args: argparse.Namespace) -> None:
    """
    Handle the 'lsp' subcommand to launch the modelicafmt language server.

    Starts the language server over stdio for editor integration. The
    server offers whole-document formatting of Modelica files.

    Raises:
        SystemExit: If the language server fails to start

    Examples:
        >>> args = argparse.Namespace()
        >>> cmd_lsp(args)  # doctest: +SKIP
        Starting modelicafmt language server (pid=12345)
    """
    try:
        ctx = get_cli_context(args)

        from modelicafmt.lsp.server import create_server

        server = create_server(ctx.config.formatting_options())
        pid = os.getpid()
        print(f"Starting modelicafmt language server (pid={pid})", file=sys.stderr)

        try:
            server.start_io()
        except KeyboardInterrupt:
            print("Language server interrupted by user.", file=sys.stderr)
        except Exception as exc:
            raise CLIServerError(
                f"Language server stopped unexpectedly: {exc}",
            ) from exc

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def add_lsp_command(subparsers) -> argparse.ArgumentParser:
    """Register the 'lsp' subcommand."""
    lsp_parser = subparsers.add_parser(
        'lsp',
        help='Start the modelicafmt language server for editor integrations'
    )
    lsp_parser.set_defaults(func=cmd_lsp)
    return lsp_parser


__all__ = ["cmd_lsp", "add_lsp_command"]
