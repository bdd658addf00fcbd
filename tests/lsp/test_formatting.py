from __future__ import annotations

from lsprotocol.types import DocumentFormattingParams, FormattingOptions as LspFormattingOptions
from lsprotocol.types import MessageType, Position, TextDocumentIdentifier

from modelicafmt.formatting import FormattingOptions
from modelicafmt.lsp import create_server
from modelicafmt.lsp.handlers.formatting import document_end, format_document_edits, register

URI = "file:///work/A.mo"
UNFORMATTED = "model A Real x; equation x = 1; end A;"
FORMATTED = "model A\n  Real x;\nequation\n  x=1;\nend A;\n"


class _Registry:
    """Collects handlers registered through @server.feature."""

    def __init__(self) -> None:
        self.handlers = {}

    def feature(self, name):
        def decorator(fn):
            self.handlers[name] = fn
            return fn

        return decorator


def _params(uri: str = URI) -> DocumentFormattingParams:
    return DocumentFormattingParams(
        text_document=TextDocumentIdentifier(uri=uri),
        options=LspFormattingOptions(tab_size=2, insert_spaces=True),
    )


def test_full_document_edit() -> None:
    edits = format_document_edits(UNFORMATTED)
    assert len(edits) == 1
    edit = edits[0]
    assert edit.new_text == FORMATTED
    assert edit.range.start == Position(line=0, character=0)
    assert edit.range.end == Position(line=0, character=len(UNFORMATTED))


def test_no_edits_when_formatted() -> None:
    assert format_document_edits(FORMATTED) == []


def test_no_edits_on_syntax_error() -> None:
    assert format_document_edits("model A Real x end A;") == []


def test_options_are_applied() -> None:
    edits = format_document_edits("model A Real x = f(1); end A;", FormattingOptions(indent_parens=True))
    assert edits[0].new_text == "model A\n  Real x=f(\n    1);\nend A;\n"


def test_document_end() -> None:
    assert document_end("") == Position(line=0, character=0)
    assert document_end("ab\ncd\n") == Position(line=2, character=0)
    assert document_end("ab\nc\U0001d400") == Position(line=1, character=3)


def test_registered_handler(stub_server) -> None:
    registry = _Registry()
    register(registry)
    stub_server.workspace.put(URI, UNFORMATTED)

    handler = registry.handlers["textDocument/formatting"]
    edits = handler(stub_server, _params())

    assert [edit.new_text for edit in edits] == [FORMATTED]


def test_server_uses_pinned_options(tmp_path) -> None:
    (tmp_path / "modelicafmt.toml").write_text("indent-parens = false\n", encoding="utf-8")
    server = create_server(FormattingOptions(indent_parens=True))

    server.load_workspace_options(str(tmp_path))

    assert server.formatting_options.indent_parens is True


def test_server_reads_workspace_config(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("MODELICAFMT_INDENT_PARENS", raising=False)
    (tmp_path / "modelicafmt.toml").write_text("indent-parens = true\n", encoding="utf-8")
    server = create_server()

    server.load_workspace_options(str(tmp_path))

    assert server.formatting_options.indent_parens is True


def test_invalid_workspace_config_is_reported(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("MODELICAFMT_INDENT_PARENS", raising=False)
    (tmp_path / "modelicafmt.toml").write_text('preset = "fancy"\n', encoding="utf-8")
    server = create_server()
    messages = []
    monkeypatch.setattr(server, "show_message", lambda message, msg_type=None: messages.append((message, msg_type)))

    server.apply_workspace_options(str(tmp_path))

    assert server.formatting_options == FormattingOptions()
    assert len(messages) == 1
    assert "fancy" in messages[0][0]
    assert messages[0][1] == MessageType.Error


def test_malformed_workspace_toml_is_reported(tmp_path, monkeypatch) -> None:
    (tmp_path / "modelicafmt.toml").write_text("indent-parens = [", encoding="utf-8")
    server = create_server()
    messages = []
    monkeypatch.setattr(server, "show_message", lambda message, msg_type=None: messages.append(message))

    server.apply_workspace_options(str(tmp_path))

    assert server.formatting_options == FormattingOptions()
    assert len(messages) == 1
