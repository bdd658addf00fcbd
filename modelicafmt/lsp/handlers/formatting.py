"""Formatting handler."""

from __future__ import annotations

import logging
from typing import List, Optional

from lsprotocol.types import DocumentFormattingParams, Position, Range, TextEdit

from modelicafmt.formatting import FormattingOptions, ModelicaFormatter

logger = logging.getLogger(__name__)


def document_end(text: str) -> Position:
    """Position just past the last character of ``text``, in UTF-16 code units."""
    line = text.count("\n")
    last_line = text[text.rfind("\n") + 1:]
    return Position(line=line, character=len(last_line.encode("utf-16-le")) // 2)


def format_document_edits(
    text: str,
    options: Optional[FormattingOptions] = None,
    uri: str = "untitled.mo",
) -> List[TextEdit]:
    """Return the edits that turn ``text`` into its formatted form.

    A single edit replaces the whole document. Text that is already
    formatted, or that does not parse, yields no edits.
    """
    result = ModelicaFormatter(options).format_document(text, uri)
    if not result.success():
        for error in result.errors:
            logger.warning("Not formatting %s: %s", uri, error)
        return []
    if not result.is_changed:
        return []
    total_range = Range(start=Position(line=0, character=0), end=document_end(text))
    return [TextEdit(range=total_range, new_text=result.formatted_text)]


def register(server) -> None:
    @server.feature("textDocument/formatting")
    def _format(ls, params: DocumentFormattingParams) -> List[TextEdit]:
        uri = params.text_document.uri
        document = ls.workspace.get_text_document(uri)
        return format_document_edits(document.source, ls.formatting_options, uri)


__all__ = ["format_document_edits", "document_end", "register"]
