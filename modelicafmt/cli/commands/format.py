"""Format command implementation."""

import argparse
import difflib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from modelicafmt.config import WorkspaceConfig
from modelicafmt.formatting import FormattedResult, ModelicaFormatter

from ..context import get_cli_context
from ..errors import (
    CLIConfigError,
    CLIFileNotFoundError,
    CLIValidationError,
    format_error_detail,
    handle_cli_exception,
    wrap_exception,
)

logger = logging.getLogger(__name__)

STDIN_PATH = "-"
STDIN_LABEL = "<stdin>"


def cmd_format(args: argparse.Namespace) -> None:
    """
    Handle the 'format' subcommand to format Modelica source files.

    Args:
        args: Parsed command-line arguments containing:
            - files: Files or directories to format (``-`` reads stdin)
            - write: If True, rewrite changed files in place
            - check: If True, only report files that would change
            - diff: If True, print a unified diff of the changes
            - indent_parens: Override for the configured argument layout

    Without ``--write``, ``--check`` or ``--diff`` the formatted text is
    printed to stdout.

    Raises:
        SystemExit: If formatting encounters errors or check mode finds changes

    Examples:
        >>> args = argparse.Namespace(files=['Model.mo'], check=True, diff=False, write=False)
        >>> cmd_format(args)  # doctest: +SKIP
        Would reformat Model.mo
        1 file(s) would be reformatted
    """
    try:
        ctx = get_cli_context(args)
        if args.write and (args.check or args.diff):
            raise CLIValidationError(
                "--write cannot be combined with --check or --diff",
                hint="Run --check or --diff first, then --write",
            )

        try:
            options = ctx.config.formatting_options(indent_parens=args.indent_parens)
        except ValueError as exc:
            raise wrap_exception(
                exc,
                message=str(exc),
                error_class=CLIConfigError,
                hint="Set preset to 'standard' or 'expanded' in modelicafmt.toml",
            ) from exc
        formatter = ModelicaFormatter(options)
        logger.debug("Formatting with %s", options)

        files = _collect_files(ctx.config, args.files)
        if not files:
            print("No files to format", file=sys.stderr)
            return

        changed_count = 0
        error_count = 0

        for file_path in files:
            label = STDIN_LABEL if file_path is None else str(file_path)
            try:
                content = sys.stdin.read() if file_path is None else file_path.read_text(encoding="utf-8")
            except OSError as exc:
                logger.error("Could not read %s: %s", label, exc)
                print(f"Error reading {label}: {format_error_detail(exc)}", file=sys.stderr)
                error_count += 1
                continue

            result = formatter.format_document(content, label)
            if not result.success():
                print(f"Error formatting {label}:", file=sys.stderr)
                for error in result.errors:
                    print(f"  {error}", file=sys.stderr)
                error_count += 1
                continue

            if result.is_changed:
                changed_count += 1
            _emit(args, file_path, label, content, result)

        if args.check:
            if changed_count > 0:
                print(f"{changed_count} file(s) would be reformatted", file=sys.stderr)
            elif error_count == 0:
                print("All files are already formatted", file=sys.stderr)
        elif args.write and changed_count > 0:
            print(f"Formatted {changed_count} file(s) successfully", file=sys.stderr)

        if error_count > 0:
            print(f"Encountered {error_count} error(s)", file=sys.stderr)

        if error_count > 0 or (args.check and changed_count > 0):
            raise SystemExit(1)

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def _collect_files(config: WorkspaceConfig, file_args: List[str]) -> List[Optional[Path]]:
    """Resolve command-line paths; ``None`` stands for stdin."""
    paths: List[Path] = []
    read_stdin = False
    for file_arg in file_args:
        if file_arg == STDIN_PATH:
            read_stdin = True
            continue
        path = Path(file_arg)
        if not path.exists():
            raise CLIFileNotFoundError(
                f"Path not found: {file_arg}",
                hint="Pass existing Modelica files or directories",
                context={"path": file_arg},
            )
        paths.append(path)

    files: List[Optional[Path]] = list(config.discover_files(paths))
    if read_stdin:
        files.insert(0, None)
    return files


def _emit(
    args: argparse.Namespace,
    file_path: Optional[Path],
    label: str,
    content: str,
    result: FormattedResult,
) -> None:
    if args.check or args.diff:
        if result.is_changed:
            if args.check:
                print(f"Would reformat {label}", file=sys.stderr)
            if args.diff:
                sys.stdout.writelines(unified_diff(content, result.formatted_text, label))
        return

    if args.write and file_path is not None:
        if result.is_changed:
            file_path.write_text(result.formatted_text, encoding="utf-8")
            logger.info("Formatted %s", label)
        return

    sys.stdout.write(result.formatted_text)


def unified_diff(original: str, formatted: str, label: str) -> List[str]:
    """Return the unified diff between ``original`` and ``formatted`` as lines."""
    return list(
        difflib.unified_diff(
            _keepends(original),
            _keepends(formatted),
            fromfile=f"{label} (original)",
            tofile=f"{label} (formatted)",
        )
    )


def _keepends(text: str) -> List[str]:
    lines = text.splitlines(keepends=True)
    if lines and not lines[-1].endswith("\n"):
        lines[-1] += "\n"
    return lines


def add_format_command(subparsers) -> argparse.ArgumentParser:
    """Register the 'format' subcommand."""
    format_parser = subparsers.add_parser(
        'format',
        help='Format Modelica source files'
    )
    format_parser.add_argument(
        'files',
        nargs='*',
        default=['.'],
        help="Files or directories to format, '-' for stdin (default: current directory)"
    )
    format_parser.add_argument(
        '-w', '--write',
        action='store_true',
        help='Write formatting changes back to the files'
    )
    format_parser.add_argument(
        '--check',
        action='store_true',
        help='Report files that need formatting and exit with status 1 if any do'
    )
    format_parser.add_argument(
        '--diff',
        action='store_true',
        help='Show a unified diff of formatting changes'
    )
    format_parser.add_argument(
        '--indent-parens',
        dest='indent_parens',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Put each call argument on its own indented line (default: from config)'
    )
    format_parser.set_defaults(func=cmd_format)
    return format_parser


__all__ = ["cmd_format", "add_format_command", "unified_diff"]
