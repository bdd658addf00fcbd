"""Queue of comment tokens waiting to be re-inserted into the output."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator

from lark import Token

from modelicafmt.errors import FormatterInvariantError
from modelicafmt.lang.tokens import is_comment


class CommentQueue:
    """Comments ordered by position, handed out front to back.

    Comments are absent from the parse tree, so the emitter pulls them from
    here whenever an ordinary token is about to be written.
    """

    def __init__(self, comments: Iterable[Token] = ()) -> None:
        self._pending: Deque[Token] = deque()
        last_index = -1
        for token in comments:
            if not is_comment(token):
                raise FormatterInvariantError(
                    f"Non-comment token {token.type} in comment stream",
                    line=token.line,
                    column=token.column,
                )
            if token.start_pos <= last_index:
                raise FormatterInvariantError(
                    "Comment stream is not in source order",
                    line=token.line,
                    column=token.column,
                )
            last_index = token.start_pos
            self._pending.append(token)

    def drain_before(self, index: int, previous_index: int) -> Iterator[Token]:
        """Yield, in order, every queued comment lying between the two token indices."""
        while self._pending:
            comment = self._pending[0]
            if not previous_index < comment.start_pos < index:
                break
            yield self._pending.popleft()

    def drain_remaining(self) -> Iterator[Token]:
        while self._pending:
            yield self._pending.popleft()

    def __len__(self) -> int:
        return len(self._pending)


__all__ = ["CommentQueue"]
