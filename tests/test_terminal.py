"""
Unit tests for terminal access.
"""

import io
import os

import pytest

from asciigrav import terminal as term
from asciigrav.terminal import AnsiTerminal, FixedTerminal


class TestFixedTerminal:
    """The test double reports fixed dimensions and counts clears."""

    def test_dimensions(self):
        assert FixedTerminal(40, 12).query_dimensions() == (40, 12)

    def test_clear_is_counted(self):
        display = FixedTerminal()
        display.clear_display()
        display.clear_display()
        assert display.clear_count == 2


class TestAnsiTerminal:
    """Real terminal: ANSI output and fail-soft size queries."""

    def test_clear_writes_escape_sequence(self):
        stream = io.StringIO()
        AnsiTerminal(stream=stream).clear_display()
        assert stream.getvalue() == term.CLEAR_SCREEN

    def test_context_manager_hides_and_restores_cursor(self):
        stream = io.StringIO()
        with AnsiTerminal(stream=stream):
            stream.write("frame")
        assert stream.getvalue() == term.HIDE_CURSOR + "frame" + term.SHOW_CURSOR

    def test_cursor_restored_on_error(self):
        stream = io.StringIO()
        with pytest.raises(KeyboardInterrupt):
            with AnsiTerminal(stream=stream):
                raise KeyboardInterrupt
        assert stream.getvalue().endswith(term.SHOW_CURSOR)

    def test_reports_terminal_size(self, monkeypatch):
        monkeypatch.setattr(
            term.shutil, 'get_terminal_size', lambda fallback: os.terminal_size((120, 40))
        )
        assert AnsiTerminal(stream=io.StringIO()).query_dimensions() == (120, 40)

    def test_query_failure_uses_fallback(self, monkeypatch):
        def broken(fallback):
            raise OSError("not a terminal")

        monkeypatch.setattr(term.shutil, 'get_terminal_size', broken)
        display = AnsiTerminal(stream=io.StringIO(), fallback=(33, 11))
        assert display.query_dimensions() == (33, 11)

    def test_zero_size_uses_fallback(self, monkeypatch):
        monkeypatch.setattr(
            term.shutil, 'get_terminal_size', lambda fallback: os.terminal_size((0, 0))
        )
        display = AnsiTerminal(stream=io.StringIO(), fallback=(50, 20))
        assert display.query_dimensions() == (50, 20)

    def test_size_of_stream_terminal(self, monkeypatch):
        """The terminal the frames go to decides the size, not stdout."""
        class TtyStream(io.StringIO):
            def fileno(self):
                return 7

        def stream_size(fd):
            assert fd == 7
            return os.terminal_size((100, 30))

        monkeypatch.setattr(term.os, 'get_terminal_size', stream_size)
        monkeypatch.setattr(
            term.shutil, 'get_terminal_size', lambda fallback: os.terminal_size((120, 40))
        )
        assert AnsiTerminal(stream=TtyStream()).query_dimensions() == (100, 30)

    def test_stream_without_terminal_falls_through(self, monkeypatch):
        class PipeStream(io.StringIO):
            def fileno(self):
                return 7

        def not_a_tty(fd):
            raise OSError("Inappropriate ioctl for device")

        monkeypatch.setattr(term.os, 'get_terminal_size', not_a_tty)
        monkeypatch.setattr(
            term.shutil, 'get_terminal_size', lambda fallback: os.terminal_size((120, 40))
        )
        assert AnsiTerminal(stream=PipeStream()).query_dimensions() == (120, 40)
