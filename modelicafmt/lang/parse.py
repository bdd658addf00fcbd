"""Lexing and parsing of Modelica source text.

The lexical stage yields two separate sequences: the ordinary tokens, which
end up as leaves of the parse tree, and the comment tokens, which the parser
never sees and which the formatter re-inserts on its own. Both share the
absolute character offset (``Token.start_pos``) as their sequence index.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterator, List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from modelicafmt.errors import FormatterInvariantError, ModelicaSyntaxError

from .tokens import COMMENT_TOKEN_TYPE, LINE_COMMENT_TOKEN_TYPE, is_comment

GRAMMAR_FILE = "modelica.lark"
START_RULE = "stored_definition"


@dataclass
class ParsedUnit:
    """A successfully parsed source unit."""

    tree: Tree
    comments: List[Token] = field(default_factory=list)
    source: str = ""
    path: Optional[str] = None


@lru_cache(maxsize=None)
def get_parser() -> Lark:
    """Build (once) the Modelica parser."""
    parser = Lark.open(
        GRAMMAR_FILE,
        rel_to=__file__,
        start=START_RULE,
        parser="lalr",
        lexer="basic",
        keep_all_tokens=True,
        maybe_placeholders=False,
    )
    _check_comment_terminals(parser)
    return parser


def _check_comment_terminals(parser: Lark) -> None:
    names = {terminal.name for terminal in parser.terminals}
    missing = [
        name for name in (COMMENT_TOKEN_TYPE, LINE_COMMENT_TOKEN_TYPE) if name not in names
    ]
    if missing:
        raise FormatterInvariantError(
            f"Grammar does not define comment terminal(s): {', '.join(missing)}",
            hint=f"Comment terminals in {GRAMMAR_FILE} must be named "
            f"{COMMENT_TOKEN_TYPE} and {LINE_COMMENT_TOKEN_TYPE}",
        )


def lex_source(text: str) -> Iterator[Token]:
    """Yield every token of ``text``, including comments and whitespace."""
    return get_parser().lex(text, dont_ignore=True)


def collect_comments(text: str, path: Optional[str] = None) -> List[Token]:
    try:
        return [token for token in lex_source(text) if is_comment(token)]
    except UnexpectedInput as exc:
        raise _syntax_error(exc, path) from None


def parse_source(text: str, path: Optional[str] = None) -> ParsedUnit:
    """Parse ``text`` into a tree plus its comment side channel.

    Raises:
        ModelicaSyntaxError: if the text is not valid Modelica.
    """
    try:
        tree = get_parser().parse(text)
    except UnexpectedInput as exc:
        raise _syntax_error(exc, path) from None
    return ParsedUnit(tree=tree, comments=collect_comments(text, path), source=text, path=path)


def _syntax_error(exc: UnexpectedInput, path: Optional[str]) -> ModelicaSyntaxError:
    line = exc.line if exc.line and exc.line > 0 else None
    column = exc.column if exc.column and exc.column > 0 else None
    if isinstance(exc, UnexpectedCharacters):
        return ModelicaSyntaxError(
            f"Unexpected character {exc.char!r}",
            found=exc.char,
            path=path,
            line=line,
            column=column,
        )
    if isinstance(exc, UnexpectedEOF):
        return ModelicaSyntaxError(
            "Unexpected end of input",
            expected=exc.expected or (),
            path=path,
            line=line,
            column=column,
        )
    if isinstance(exc, UnexpectedToken):
        if exc.token.type == "$END":
            message = "Unexpected end of input"
            found = None
        else:
            message = f"Unexpected token {str(exc.token)!r}"
            found = str(exc.token)
        return ModelicaSyntaxError(
            message,
            found=found,
            expected=exc.expected or (),
            path=path,
            line=line,
            column=column,
        )
    return ModelicaSyntaxError(str(exc), path=path, line=line, column=column)


__all__ = [
    "ParsedUnit",
    "get_parser",
    "lex_source",
    "collect_comments",
    "parse_source",
    "START_RULE",
]
