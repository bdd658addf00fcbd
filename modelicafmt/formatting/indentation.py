"""Indentation depth bookkeeping."""

from __future__ import annotations

from enum import Enum
from typing import List

from modelicafmt.errors import FormatterInvariantError


class IndentEntry(Enum):
    """Whether a pushed indentation level shows up in the output."""

    RENDERED = "rendered"
    SUPPRESSED = "suppressed"


class IndentationStack:
    """
    Stack of indentation levels, one per open indent-triggering rule.

    Only ``RENDERED`` entries contribute to the depth written at the start of
    a line. Several rules may open on the same physical line, but only the
    first of them raises the depth; the rest are pushed as ``SUPPRESSED`` so
    that every exit still pops exactly one entry.
    """

    def __init__(self) -> None:
        self._entries: List[IndentEntry] = []
        self._rendered = 0

    def push(self, entry: IndentEntry) -> None:
        self._entries.append(entry)
        if entry is IndentEntry.RENDERED:
            self._rendered += 1

    def pop(self) -> IndentEntry:
        if not self._entries:
            raise FormatterInvariantError(
                "Indentation stack underflow",
                hint="Every indentation pop must match an earlier push",
            )
        entry = self._entries.pop()
        if entry is IndentEntry.RENDERED:
            self._rendered -= 1
        return entry

    @property
    def depth(self) -> int:
        """Number of rendered levels."""
        return self._rendered

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


__all__ = ["IndentEntry", "IndentationStack"]
