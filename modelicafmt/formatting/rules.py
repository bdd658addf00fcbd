"""Default formatting rules for Modelica."""

from __future__ import annotations

from .core import FormattingOptions


class DefaultFormattingRules:
    """Named option presets."""

    @classmethod
    def standard(cls) -> FormattingOptions:
        """Arguments stay on the line of their call."""
        return FormattingOptions(indent_parens=False)

    @classmethod
    def expanded(cls) -> FormattingOptions:
        """Every call argument on its own indented line."""
        return FormattingOptions(indent_parens=True)

    @classmethod
    def named(cls, name: str) -> FormattingOptions:
        presets = {"standard": cls.standard, "expanded": cls.expanded}
        try:
            return presets[name]()
        except KeyError:
            raise ValueError(
                f"Unknown formatting preset '{name}' (expected one of: {', '.join(sorted(presets))})"
            ) from None
