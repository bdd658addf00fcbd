"""
Tests for the 'format' and top-level CLI commands.
"""

import pytest

from modelicafmt import __version__
from modelicafmt.cli import main
from modelicafmt.cli.commands.format import unified_diff
from modelicafmt.cli.errors import (
    CLIFileNotFoundError,
    CLIValidationError,
    format_cli_error,
)

pytestmark = pytest.mark.integration

UNFORMATTED = "model A Real x; equation x = 1; end A;"
FORMATTED = "model A\n  Real x;\nequation\n  x=1;\nend A;\n"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """A workspace with one unformatted and one formatted model."""
    monkeypatch.chdir(tmp_path)
    for name in ("MODELICAFMT_RERAISE", "MODELICAFMT_DEBUG", "MODELICAFMT_VERBOSE", "MODELICAFMT_INDENT_PARENS"):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / "A.mo").write_text(UNFORMATTED, encoding="utf-8")
    (tmp_path / "B.mo").write_text("model B\nend B;\n", encoding="utf-8")
    return tmp_path


class TestFormatCommand:
    """Test the output modes of 'modelicafmt format'."""

    def test_prints_to_stdout(self, workspace, capsys):
        main(["format", "A.mo"])

        captured = capsys.readouterr()
        assert captured.out == FORMATTED
        assert (workspace / "A.mo").read_text(encoding="utf-8") == UNFORMATTED

    def test_write_in_place(self, workspace, capsys):
        main(["format", "-w", "A.mo", "B.mo"])

        assert (workspace / "A.mo").read_text(encoding="utf-8") == FORMATTED
        assert (workspace / "B.mo").read_text(encoding="utf-8") == "model B\nend B;\n"
        assert "Formatted 1 file(s)" in capsys.readouterr().err

    def test_check_reports_changes(self, workspace, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["format", "--check", "."])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Would reformat A.mo" in err
        assert "B.mo" not in err
        assert (workspace / "A.mo").read_text(encoding="utf-8") == UNFORMATTED

    def test_check_passes_when_formatted(self, workspace, capsys):
        main(["format", "--check", "B.mo"])
        assert "already formatted" in capsys.readouterr().err

    def test_diff(self, workspace, capsys):
        main(["format", "--diff", "A.mo"])

        out = capsys.readouterr().out
        assert out.startswith("--- A.mo (original)\n+++ A.mo (formatted)\n")
        assert "+equation\n" in out

    def test_indent_parens_flag(self, workspace, capsys):
        (workspace / "C.mo").write_text("model C Real x = f(1, 2); end C;", encoding="utf-8")

        main(["format", "--indent-parens", "C.mo"])

        assert capsys.readouterr().out == "model C\n  Real x=f(\n    1,\n    2);\nend C;\n"

    def test_indent_parens_from_config(self, workspace, capsys):
        (workspace / "modelicafmt.toml").write_text("indent-parens = true\n", encoding="utf-8")
        (workspace / "C.mo").write_text("model C Real x = f(1); end C;", encoding="utf-8")

        main(["format", "C.mo"])

        assert capsys.readouterr().out == "model C\n  Real x=f(\n    1);\nend C;\n"

    def test_stdin(self, workspace, capsys, monkeypatch):
        import io

        monkeypatch.setattr("sys.stdin", io.StringIO(UNFORMATTED))

        main(["format", "-"])

        assert capsys.readouterr().out == FORMATTED

    def test_syntax_error_exits_nonzero(self, workspace, capsys):
        (workspace / "Bad.mo").write_text("model Bad Real x end Bad;", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["format", "-w", "Bad.mo", "A.mo"])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Error formatting Bad.mo" in err
        assert "SYNTAX_ERROR" in err
        assert (workspace / "A.mo").read_text(encoding="utf-8") == FORMATTED

    def test_check_reports_errors_and_changes(self, workspace, capsys):
        """Test --check prints the error count even when files would change."""
        (workspace / "Bad.mo").write_text("model Bad Real x end Bad;", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["format", "--check", "A.mo", "Bad.mo"])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Would reformat A.mo" in err
        assert "1 file(s) would be reformatted" in err
        assert "Encountered 1 error(s)" in err

    def test_check_with_only_errors(self, workspace, capsys):
        (workspace / "Bad.mo").write_text("model Bad Real x end Bad;", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["format", "--check", "B.mo", "Bad.mo"])

        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "already formatted" not in err
        assert "Encountered 1 error(s)" in err

    def test_missing_path(self, workspace, capsys):
        with pytest.raises(SystemExit):
            main(["format", "Missing.mo"])
        assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err

    def test_write_and_check_are_exclusive(self, workspace, capsys):
        with pytest.raises(SystemExit):
            main(["format", "-w", "--check", "A.mo"])
        assert "CLI_VALIDATION_ERROR" in capsys.readouterr().err

    def test_reraise(self, workspace, monkeypatch):
        monkeypatch.setenv("MODELICAFMT_RERAISE", "1")
        with pytest.raises(CLIFileNotFoundError):
            main(["format", "Missing.mo"])


class TestMain:
    """Test top-level argument handling."""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1
        assert "usage:" in capsys.readouterr().out

    def test_invalid_config(self, workspace, capsys):
        (workspace / "modelicafmt.toml").write_text("indent-parens = [", encoding="utf-8")

        with pytest.raises(SystemExit):
            main(["format", "A.mo"])

        assert "CLI_CONFIG_ERROR" in capsys.readouterr().err

    def test_non_boolean_indent_parens(self, workspace, capsys):
        (workspace / "modelicafmt.toml").write_text('indent-parens = "false"\n', encoding="utf-8")

        with pytest.raises(SystemExit):
            main(["format", "A.mo"])

        err = capsys.readouterr().err
        assert "CLI_CONFIG_ERROR" in err
        assert "indent-parens" in err

    def test_missing_config_argument(self, workspace, capsys):
        with pytest.raises(SystemExit):
            main(["--config", "absent.toml", "format", "A.mo"])
        assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err


class TestHelpers:
    """Test CLI helper functions."""

    def test_unified_diff_terminates_last_line(self):
        lines = unified_diff("a", "b\n", "X.mo")
        assert lines[-2:] == ["-a\n", "+b\n"]

    def test_format_cli_error(self):
        error = CLIValidationError("bad flags", hint="use fewer")
        assert format_cli_error(error) == "Error [CLI_VALIDATION_ERROR]: bad flags\nHint: use fewer"


class TestLspCommand:
    """Test 'modelicafmt lsp', the only way the language server is started."""

    def test_starts_server_with_config_options(self, workspace, monkeypatch, capsys):
        (workspace / "modelicafmt.toml").write_text("indent-parens = true\n", encoding="utf-8")
        started = []

        class FakeServer:
            def __init__(self, options):
                self.options = options

            def start_io(self):
                started.append(self.options)

        monkeypatch.setattr("modelicafmt.lsp.server.create_server", FakeServer)

        main(["lsp"])

        assert len(started) == 1
        assert started[0].indent_parens is True
        assert "Starting modelicafmt language server" in capsys.readouterr().err
