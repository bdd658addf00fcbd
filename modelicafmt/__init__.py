"""
Modelica source formatter.

This package re-emits Modelica (``.mo``) source code with canonical
spacing, indentation and comment placement, without changing what the
program means.

The code is organised into several modules:

* ``lang`` – the lark grammar for Modelica, the closed set of rule kinds
  it produces, token classification and a depth-first tree walker.
* ``formatting`` – the emission engine: spacing and layout policy,
  indentation bookkeeping, comment re-insertion and the public
  ``ModelicaFormatter`` API.
* ``config`` – workspace configuration read from ``modelicafmt.toml`` or
  the ``[tool.modelicafmt]`` table of ``pyproject.toml``.
* ``cli`` – the ``modelicafmt`` command line interface.
* ``lsp`` – a language server offering whole-document formatting to
  editors.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("modelicafmt")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"
else:  # pragma: no cover - version override for in-repo runs
    __version__ = _local_version() or __version__

__all__ = ["__version__"]
