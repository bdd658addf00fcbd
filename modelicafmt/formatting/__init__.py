"""
Tree-based formatter for Modelica.

This module provides a formatter that:
1. Parses .mo files into a lark parse tree
2. Re-emits every token with canonical spacing and indentation
3. Re-inserts comments in source order
4. Integrates with both CLI and LSP
"""

from __future__ import annotations

__all__ = [
    "ModelicaFormatter",
    "FormattingOptions",
    "FormattedResult",
    "DefaultFormattingRules",
    "format_tree",
]

from .core import FormattedResult, FormattingOptions, ModelicaFormatter, format_tree
from .rules import DefaultFormattingRules
