"""Token classification for the Modelica lexer."""

from __future__ import annotations

from enum import Enum

from lark import Token

# Terminal names of the comment tokens in modelica.lark
COMMENT_TOKEN_TYPE = "COMMENT"
LINE_COMMENT_TOKEN_TYPE = "LINE_COMMENT"


class TokenCategory(Enum):
    """How the formatter treats a lexed token."""

    ORDINARY = "ordinary"
    BLOCK_COMMENT = "block_comment"
    LINE_COMMENT = "line_comment"


_CATEGORY_BY_TYPE = {
    COMMENT_TOKEN_TYPE: TokenCategory.BLOCK_COMMENT,
    LINE_COMMENT_TOKEN_TYPE: TokenCategory.LINE_COMMENT,
}


def classify(token: Token) -> TokenCategory:
    return _CATEGORY_BY_TYPE.get(token.type, TokenCategory.ORDINARY)


def is_comment(token: Token) -> bool:
    return classify(token) is not TokenCategory.ORDINARY


__all__ = [
    "COMMENT_TOKEN_TYPE",
    "LINE_COMMENT_TOKEN_TYPE",
    "TokenCategory",
    "classify",
    "is_comment",
]
