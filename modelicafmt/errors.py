"""Unified error model for modelicafmt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.path:
            return self.path
        if self.line is not None and self.column is not None:
            return f"line {self.line}, column {self.column}"
        return "unknown location"


class FmtError(Exception):
    """Base class for all errors raised by the formatter."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        self.path = path
        self.line = line
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class ModelicaSyntaxError(FmtError):
    """Raised when the source does not parse as Modelica."""

    code = "SYNTAX_ERROR"

    def __init__(
        self,
        message: str,
        *,
        found: Optional[str] = None,
        expected: Sequence[str] = (),
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.found = found
        self.expected: List[str] = sorted(expected)

    def format(self) -> str:
        base = super().format()
        details = []
        if self.found:
            details.append(f"Found: {self.found}")
        if self.expected:
            if len(self.expected) == 1:
                details.append(f"Expected: {self.expected[0]}")
            else:
                details.append(f"Expected one of: {', '.join(self.expected)}")
        if details:
            return base + "\n  " + "\n  ".join(details)
        return base


class FormatterInvariantError(FmtError):
    """Raised when the formatter's internal bookkeeping is inconsistent.

    These are programmer errors, never bad input: continuing would emit
    silently corrupted output, so callers must let them abort the run.
    """

    code = "INVARIANT_VIOLATION"


__all__ = [
    "FmtError",
    "ModelicaSyntaxError",
    "FormatterInvariantError",
    "ErrorLocation",
]
