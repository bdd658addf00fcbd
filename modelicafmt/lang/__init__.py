"""Modelica language support: grammar, rule kinds, tokens and traversal."""

from .parse import ParsedUnit, collect_comments, get_parser, lex_source, parse_source
from .rules import RuleKind
from .tokens import TokenCategory, classify, is_comment
from .walker import TreeListener, walk

__all__ = [
    # Parsing
    "ParsedUnit",
    "get_parser",
    "lex_source",
    "collect_comments",
    "parse_source",
    # Tree model
    "RuleKind",
    "TreeListener",
    "walk",
    # Tokens
    "TokenCategory",
    "classify",
    "is_comment",
]
