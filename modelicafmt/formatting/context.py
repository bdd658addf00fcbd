"""Nesting counters consulted by the layout policy."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator

from modelicafmt.lang.rules import RuleKind

_COUNTED_RULES: Dict[RuleKind, str] = {
    RuleKind.ANNOTATION: "annotation",
    RuleKind.NAMED_ARGUMENT: "named_argument",
    RuleKind.VECTOR: "vector",
}


@dataclass
class ContextCounters:
    """How many annotation, named-argument and vector rules enclose the cursor.

    Rules can nest inside themselves, so these are depths rather than flags.
    """

    annotation: int = 0
    named_argument: int = 0
    vector: int = 0

    @contextmanager
    def entered(self, kind: RuleKind) -> Iterator[None]:
        """Count ``kind`` as open for the duration of the block."""
        attr = _COUNTED_RULES.get(kind)
        if attr is None:
            yield
            return
        setattr(self, attr, getattr(self, attr) + 1)
        try:
            yield
        finally:
            setattr(self, attr, getattr(self, attr) - 1)

    def is_clear(self) -> bool:
        return self.annotation == 0 and self.named_argument == 0 and self.vector == 0


__all__ = ["ContextCounters"]
