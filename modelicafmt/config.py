"""Workspace configuration support for the modelicafmt CLI."""

from __future__ import annotations

import fnmatch
import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from modelicafmt.formatting import DefaultFormattingRules, FormattingOptions

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "modelicafmt.toml"
PYPROJECT_FILE_NAME = "pyproject.toml"
INDENT_PARENS_ENV = "MODELICAFMT_INDENT_PARENS"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class FormattingDefaults:
    """Formatting settings applied when not overridden on the command line."""

    preset: str = "standard"
    indent_parens: Optional[bool] = None


@dataclass
class WorkspaceConfig:
    """Resolved workspace configuration."""

    root: Path
    formatting: FormattingDefaults = field(default_factory=FormattingDefaults)
    extensions: List[str] = field(default_factory=lambda: [".mo"])
    exclude: List[str] = field(default_factory=list)
    config_path: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def formatting_options(self, *, indent_parens: Optional[bool] = None) -> FormattingOptions:
        """Build formatter options: explicit argument, then environment, then config file."""
        options = DefaultFormattingRules.named(self.formatting.preset)
        if self.formatting.indent_parens is not None:
            options.indent_parens = self.formatting.indent_parens
        env_value = os.getenv(INDENT_PARENS_ENV)
        if env_value is not None and env_value.strip():
            options.indent_parens = env_value.strip().lower() in _TRUTHY
        if indent_parens is not None:
            options.indent_parens = indent_parens
        return options

    def is_excluded(self, path: Path) -> bool:
        try:
            relative = path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            relative = path.as_posix()
        return any(
            fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(path.name, pattern)
            for pattern in self.exclude
        )

    def discover_files(self, paths: Iterable[Path]) -> List[Path]:
        """Expand files and directories into the sorted list of files to format.

        Files named explicitly are always kept; directories are searched
        recursively for the configured extensions, minus excluded paths.
        """
        found: List[Path] = []
        seen = set()
        for path in paths:
            if path.is_dir():
                candidates = sorted(
                    candidate
                    for candidate in path.rglob("*")
                    if candidate.is_file()
                    and candidate.suffix in self.extensions
                    and not self.is_excluded(candidate)
                )
            else:
                candidates = [path]
            for candidate in candidates:
                key = candidate.resolve()
                if key in seen:
                    continue
                seen.add(key)
                found.append(candidate)
        logger.debug("Discovered %d file(s) to format", len(found))
        return found


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _string_list(value: Any, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    if isinstance(value, str):
        return [value]
    return list(default)


def _parse_formatting(data: Dict[str, Any]) -> FormattingDefaults:
    preset = str(data.get("preset") or FormattingDefaults.preset)
    indent_parens = data.get("indent-parens", data.get("indent_parens"))
    if indent_parens is not None and not isinstance(indent_parens, bool):
        raise ValueError(f"indent-parens must be true or false, got {indent_parens!r}")
    return FormattingDefaults(preset=preset, indent_parens=indent_parens)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    candidate = root / CONFIG_FILE_NAME
    if candidate.exists():
        return candidate
    pyproject = root / PYPROJECT_FILE_NAME
    if pyproject.exists() and _read_toml_config(pyproject).get("tool", {}).get("modelicafmt") is not None:
        return pyproject
    return None


def load_workspace_config(root: Path, explicit: Optional[Path] = None) -> WorkspaceConfig:
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return WorkspaceConfig(root=root)

    data = _read_toml_config(config_path)
    if config_path.name == PYPROJECT_FILE_NAME:
        data = data.get("tool", {}).get("modelicafmt") or {}
    logger.debug("Loaded configuration from %s", config_path)

    return WorkspaceConfig(
        root=root,
        formatting=_parse_formatting(data),
        extensions=_string_list(data.get("extensions"), [".mo"]),
        exclude=_string_list(data.get("exclude"), []),
        config_path=config_path,
        raw=data,
    )


__all__ = [
    "CONFIG_FILE_NAME",
    "INDENT_PARENS_ENV",
    "FormattingDefaults",
    "WorkspaceConfig",
    "locate_config_file",
    "load_workspace_config",
]
