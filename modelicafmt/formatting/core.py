"""Core formatting infrastructure for Modelica source files."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Union

from lark import Token, Tree

from modelicafmt.errors import ModelicaSyntaxError
from modelicafmt.lang.parse import parse_source
from modelicafmt.lang.walker import walk

from .emitter import ModelicaEmitter


@dataclass
class FormattingOptions:
    """Configuration options for Modelica formatting."""

    # Put every argument of a parenthesized call on its own indented line
    indent_parens: bool = False


@dataclass
class FormattedResult:
    """Result of a formatting operation."""

    formatted_text: str
    is_changed: bool
    errors: List[str] = field(default_factory=list)

    def success(self) -> bool:
        """Check if formatting was successful."""
        return len(self.errors) == 0


def format_tree(
    tree: Tree,
    comments: Iterable[Token],
    out: TextIO,
    options: Optional[FormattingOptions] = None,
) -> None:
    """
    Write the formatted text of ``tree`` to ``out``.

    Args:
        tree: Parse tree rooted at ``stored_definition``
        comments: Comment tokens of the same source, in source order
        out: Destination stream, written once after the whole tree is visited
        options: Formatting options (defaults apply when omitted)

    Raises:
        FormatterInvariantError: if the tree or comment stream is malformed.
            Nothing is written to ``out`` in that case.
    """
    options = options or FormattingOptions()
    emitter = ModelicaEmitter(comments, indent_parens=options.indent_parens)
    walk(emitter, tree)
    emitter.finish()
    emitter.flush_to(out)


class ModelicaFormatter:
    """
    Formatter for Modelica source text.

    This formatter:
    1. Parses source code into a tree plus its comments
    2. Walks the tree, emitting canonical spacing and indentation
    3. Re-inserts comments at their original positions
    """

    def __init__(self, options: Optional[FormattingOptions] = None):
        self.options = options or FormattingOptions()

    def format_text(self, source_text: str, path: Optional[str] = None) -> str:
        """Format ``source_text`` and return the result.

        Raises:
            ModelicaSyntaxError: if the text is not valid Modelica.
        """
        unit = parse_source(source_text, path=path)
        out = io.StringIO()
        format_tree(unit.tree, unit.comments, out, self.options)
        return out.getvalue()

    def format_file(self, path: Union[str, Path], out: TextIO) -> None:
        """Read the Modelica file at ``path`` and write its formatted text to ``out``."""
        path = Path(path)
        source_text = path.read_text(encoding="utf-8")
        out.write(self.format_text(source_text, path=str(path)))

    def format_document(self, source_text: str, file_path: str = "untitled.mo") -> FormattedResult:
        """
        Format a complete Modelica document.

        Args:
            source_text: The source code to format
            file_path: Path for error reporting (optional)

        Returns:
            FormattedResult with formatted text and status. On a syntax
            error the original text is returned unchanged.
        """
        try:
            formatted_text = self.format_text(source_text, path=file_path)
        except ModelicaSyntaxError as e:
            return FormattedResult(
                formatted_text=source_text,
                is_changed=False,
                errors=[f"Parse error: {e.format()}"],
            )

        return FormattedResult(
            formatted_text=formatted_text,
            is_changed=formatted_text != source_text,
        )


__all__ = ["FormattingOptions", "FormattedResult", "ModelicaFormatter", "format_tree"]
