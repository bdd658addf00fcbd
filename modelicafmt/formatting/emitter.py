"""
Emission state machine for the Modelica formatter.

The emitter receives rule enter/exit and terminal events from
``modelicafmt.lang.walker`` and writes canonically spaced and indented text
to an in-memory buffer. Comment tokens are not part of the parse tree; they
are pulled from a ``CommentQueue`` right before the ordinary token that
follows them in the source.
"""

from __future__ import annotations

import io
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, TextIO

from lark import Token, Tree

from modelicafmt.lang.rules import RuleKind
from modelicafmt.lang.tokens import TokenCategory, classify

from .comments import CommentQueue
from .context import ContextCounters
from .indentation import IndentationStack, IndentEntry
from .policy import forces_indent_before, forces_newline_before, insert_space_before

INDENT_UNIT = "  "
STATEMENT_TERMINATOR = ";"


@dataclass
class CursorState:
    """Where the emitter stands in the output."""

    on_new_line: bool = True
    line_indent_increased: bool = False
    previous_token_text: str = ""
    previous_token_index: int = -1


class ModelicaEmitter:
    """Turns traversal events into formatted text.

    One emitter formats one unit; build a new one for every run.
    """

    def __init__(self, comments: Iterable[Token] = (), *, indent_parens: bool = False) -> None:
        self.indent_parens = indent_parens
        self.cursor = CursorState()
        self.indentation = IndentationStack()
        self.comments = CommentQueue(comments)
        self.context = ContextCounters()
        self._buffer = io.StringIO()

    # ========================================================================
    # Traversal events
    # ========================================================================

    @contextmanager
    def rule(self, node: Tree) -> Iterator[RuleKind]:
        """Scope one rule node: enter, visit children inside the block, exit."""
        kind = RuleKind.of(node)
        self.enter_rule(kind)
        with self.context.entered(kind):
            yield kind
        self.exit_rule(kind)

    def enter_rule(self, kind: RuleKind) -> None:
        if forces_newline_before(kind) and not self.cursor.on_new_line:
            self._write_newline()
        if forces_indent_before(kind, self.context, self.indent_parens):
            if not self.cursor.on_new_line:
                self._write_newline()
            self._maybe_indent()

    def exit_rule(self, kind: RuleKind) -> None:
        # the counters are already restored here, as the entry check saw them
        if forces_indent_before(kind, self.context, self.indent_parens):
            self.indentation.pop()

    def visit_terminal(self, token: Token) -> None:
        index = token.start_pos
        for comment in self.comments.drain_before(index, self.cursor.previous_token_index):
            self._write_comment(comment)

        text = str(token)
        self._write_space_before(text)
        self._write(text)
        if text == STATEMENT_TERMINATOR:
            self._write_newline()

        self.cursor.previous_token_text = text
        self.cursor.previous_token_index = index

    def finish(self) -> None:
        """Emit comments that follow the last ordinary token."""
        for comment in self.comments.drain_remaining():
            self._write_comment(comment)
        if not self.cursor.on_new_line:
            self._write_newline()

    # ========================================================================
    # Output
    # ========================================================================

    def getvalue(self) -> str:
        return self._buffer.getvalue()

    def flush_to(self, out: TextIO) -> None:
        out.write(self._buffer.getvalue())

    # ========================================================================
    # Helpers
    # ========================================================================

    def _write(self, text: str) -> None:
        self._buffer.write(text)

    def _write_newline(self) -> None:
        self._write("\n")
        self.cursor.on_new_line = True
        self.cursor.line_indent_increased = False

    def _write_space_before(self, text: str) -> None:
        if self.cursor.on_new_line:
            self._write(INDENT_UNIT * self.indentation.depth)
            self.cursor.on_new_line = False
        elif insert_space_before(text, self.cursor.previous_token_text):
            self._write(" ")

    def _write_comment(self, comment: Token) -> None:
        text = str(comment)
        self._write_space_before(text)
        self._write(text)
        if classify(comment) is TokenCategory.LINE_COMMENT:
            self._write_newline()

    def _maybe_indent(self) -> None:
        if self.cursor.line_indent_increased:
            self.indentation.push(IndentEntry.SUPPRESSED)
        else:
            self.indentation.push(IndentEntry.RENDERED)
            self.cursor.line_indent_increased = True


__all__ = ["CursorState", "ModelicaEmitter", "INDENT_UNIT"]
