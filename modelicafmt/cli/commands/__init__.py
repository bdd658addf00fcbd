"""
CLI command modules.

Each command module implements one CLI subcommand and registers its own
argument parser.
"""

from .format import add_format_command, cmd_format
from .lsp import add_lsp_command, cmd_lsp

__all__ = [
    "cmd_format",
    "cmd_lsp",
    "add_format_command",
    "add_lsp_command",
]
