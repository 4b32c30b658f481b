"""Tests for DiagnosticBuffer."""

import contextlib
import sys

from teamcity_bdd.application.reporters.diagnostics import DiagnosticBuffer


class TestDiagnosticBuffer:
    """Tests for DiagnosticBuffer."""

    def test_starts_empty(self) -> None:
        buffer = DiagnosticBuffer()
        assert buffer.is_empty
        assert buffer.getvalue() == ""

    def test_write_accumulates(self) -> None:
        buffer = DiagnosticBuffer()
        assert buffer.write("a") == 1
        buffer.write("bc")
        assert buffer.getvalue() == "abc"

    def test_writeln_appends_newline(self) -> None:
        buffer = DiagnosticBuffer()
        buffer.writeln("note")
        assert buffer.getvalue() == "note\n"

    def test_drain_returns_and_clears(self) -> None:
        buffer = DiagnosticBuffer()
        buffer.write("captured")
        assert buffer.drain() == "captured"
        assert buffer.is_empty
        assert buffer.drain() == ""

    def test_flush_keeps_content(self) -> None:
        buffer = DiagnosticBuffer()
        buffer.write("kept")
        buffer.flush()
        assert buffer.getvalue() == "kept"

    def test_usable_as_redirect_target(self) -> None:
        buffer = DiagnosticBuffer()
        with contextlib.redirect_stderr(buffer):  # type: ignore[type-var]
            print("library warning", file=sys.stderr)
        assert buffer.getvalue() == "library warning\n"
