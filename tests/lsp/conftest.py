from __future__ import annotations

from types import SimpleNamespace

import pytest

from modelicafmt.formatting import FormattingOptions


class StubWorkspace:
    """Just enough of a pygls workspace for the formatting handler."""

    def __init__(self) -> None:
        self.documents = {}

    def put(self, uri: str, text: str) -> None:
        self.documents[uri] = SimpleNamespace(uri=uri, source=text)

    def get_text_document(self, uri: str):
        return self.documents[uri]


@pytest.fixture()
def stub_server():
    return SimpleNamespace(workspace=StubWorkspace(), formatting_options=FormattingOptions())


__all__ = ["stub_server", "StubWorkspace"]
