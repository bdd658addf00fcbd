"""
Spacing and layout policy for the Modelica formatter.

Both policies are pure functions of their arguments:

* spacing looks only at the literal text of the current and previous token;
* layout looks only at the kind of the rule being entered and, for the
  call-argument rules, at the enclosing context counters.
"""

from __future__ import annotations

from typing import FrozenSet

from modelicafmt.lang.rules import RuleKind

from .context import ContextCounters


# ============================================================================
# Spacing
# ============================================================================

# Tokens which should generally not have a space after them
NO_SPACE_AFTER_TOKENS: FrozenSet[str] = frozenset({
    "(", "=", ".", "[", "{",
    "-", "^", "*", "/",
    ";",
})

# Tokens which should generally not have a space before them
NO_SPACE_BEFORE_TOKENS: FrozenSet[str] = frozenset({
    "(", ")",
    "[", "]",
    "}",
    ";",
    "=",
    ",",
    ".",
    "-", "^", "*", "/",
})


def insert_space_before(current: str, previous: str) -> bool:
    """Return True if a space belongs between ``previous`` and ``current``."""
    if current == "(" and previous == "annotation":
        return True
    return previous not in NO_SPACE_AFTER_TOKENS and current not in NO_SPACE_BEFORE_TOKENS


# ============================================================================
# Layout
# ============================================================================

# Rules that always start on a new line
NEWLINE_BEFORE_RULES: FrozenSet[RuleKind] = frozenset({
    RuleKind.COMPOSITION,
    RuleKind.EQUATIONS,
    RuleKind.IF_EXPRESSION_CONDITION,
    RuleKind.ELSEIF_EXPRESSION_CONDITION,
    RuleKind.ELSE_EXPRESSION_CONDITION,
})

# Rules that always start on a new, indented line
INDENT_BEFORE_RULES: FrozenSet[RuleKind] = frozenset({
    RuleKind.ELEMENT,
    RuleKind.EQUATIONS,
    RuleKind.ALGORITHM_STATEMENTS,
    RuleKind.CONTROL_STRUCTURE_BODY,
    RuleKind.STRING_COMMENT,
    RuleKind.ANNOTATION,
    RuleKind.EXPRESSION_LIST,
    RuleKind.CONSTRAINING_CLAUSE,
    RuleKind.IF_EXPRESSION,
    RuleKind.IF_EXPRESSION_BODY,
})

# Rules indented only when parenthesized calls are always indented
PAREN_ARGUMENT_RULES: FrozenSet[RuleKind] = frozenset({
    RuleKind.ARGUMENT,
    RuleKind.NAMED_ARGUMENT,
    RuleKind.FUNCTION_ARGUMENT,
})


def forces_newline_before(kind: RuleKind) -> bool:
    """Return True if entering a ``kind`` rule must start a new line."""
    return kind in NEWLINE_BEFORE_RULES


def forces_indent_before(kind: RuleKind, context: ContextCounters, indent_parens: bool = False) -> bool:
    """Return True if entering a ``kind`` rule must start a new, indented line."""
    if kind in INDENT_BEFORE_RULES:
        return True
    if kind not in PAREN_ARGUMENT_RULES or not indent_parens:
        return False
    if kind is RuleKind.FUNCTION_ARGUMENT:
        # already indented by the enclosing named argument, vector or annotation
        return context.is_clear()
    return context.annotation == 0


__all__ = [
    "NO_SPACE_AFTER_TOKENS",
    "NO_SPACE_BEFORE_TOKENS",
    "NEWLINE_BEFORE_RULES",
    "INDENT_BEFORE_RULES",
    "PAREN_ARGUMENT_RULES",
    "insert_space_before",
    "forces_newline_before",
    "forces_indent_before",
]
