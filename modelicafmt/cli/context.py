"""
CLI context management.

This module provides the CLIContext dataclass shared by every command of a
single invocation.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from ..config import WorkspaceConfig
from .errors import CLIConfigError


@dataclass
class CLIContext:
    """
    Shared context resolved from workspace configuration.

    Attributes:
        workspace_root: Root directory of the workspace
        config: Parsed workspace configuration
    """

    workspace_root: Path
    config: WorkspaceConfig


def get_cli_context(args: argparse.Namespace) -> CLIContext:
    """
    Retrieve CLIContext from parsed arguments.

    The context is attached to ``args`` by ``main`` before the command runs.

    Raises:
        CLIConfigError: If context was not initialized
    """
    ctx = getattr(args, "cli_context", None)
    if not isinstance(ctx, CLIContext):
        raise CLIConfigError(
            "CLI context is not initialized",
            hint="Commands must be dispatched through modelicafmt.cli.main",
        )
    return ctx


__all__ = ["CLIContext", "get_cli_context"]
