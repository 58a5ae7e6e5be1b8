"""
Terminal access for the live display.

The simulation loop only needs two capabilities from a terminal:
    query_dimensions() -> (width, height)
    clear_display() -> None

AnsiTerminal talks to a real terminal; FixedTerminal is a stand-in with
fixed dimensions for tests and headless use.
"""

import os
import shutil
import sys
from typing import Optional, Protocol, TextIO, Tuple

from asciigrav import constants as const

# Move cursor home, clear to end of screen
CLEAR_SCREEN = '\033[H\033[J'
HIDE_CURSOR = '\033[?25l'
SHOW_CURSOR = '\033[?25h'


class Terminal(Protocol):
    """Capabilities the simulation loop needs from a display."""

    def query_dimensions(self) -> Tuple[int, int]:
        ...

    def clear_display(self) -> None:
        ...


class AnsiTerminal:
    """
    ANSI/VT100 terminal attached to an output stream.

    Use as a context manager to hide the cursor while frames are drawn and
    restore it afterwards.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        fallback: Tuple[int, int] = (const.FALLBACK_WIDTH, const.FALLBACK_HEIGHT)
    ):
        """
        Args:
            stream: Output stream (default: sys.stdout at call time)
            fallback: (width, height) used when the size cannot be queried
        """
        self.stream = stream if stream is not None else sys.stdout
        self.fallback = fallback

    def query_dimensions(self) -> Tuple[int, int]:
        """
        Current terminal size in character cells.

        The terminal behind self.stream is asked first; when the stream is
        not a terminal, shutil.get_terminal_size (COLUMNS/LINES, then
        stdout) decides. Never raises: an unavailable or nonsensical size
        yields the fallback.
        """
        size = self._stream_size()
        if size is None or size.columns < 1 or size.lines < 1:
            try:
                size = shutil.get_terminal_size(self.fallback)
            except (OSError, ValueError):
                return self.fallback

        if size.columns < 1 or size.lines < 1:
            return self.fallback
        return size.columns, size.lines

    def _stream_size(self) -> Optional[os.terminal_size]:
        try:
            return os.get_terminal_size(self.stream.fileno())
        except (AttributeError, OSError, ValueError):
            return None

    def clear_display(self) -> None:
        self.stream.write(CLEAR_SCREEN)
        self.stream.flush()

    def __enter__(self) -> 'AnsiTerminal':
        self.stream.write(HIDE_CURSOR)
        self.stream.flush()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stream.write(SHOW_CURSOR)
        self.stream.flush()


class FixedTerminal:
    """Terminal double with fixed dimensions and a no-op clear."""

    def __init__(
        self,
        width: int = const.FALLBACK_WIDTH,
        height: int = const.FALLBACK_HEIGHT
    ):
        self.width = width
        self.height = height
        self.clear_count = 0

    def query_dimensions(self) -> Tuple[int, int]:
        return self.width, self.height

    def clear_display(self) -> None:
        self.clear_count += 1

    def __enter__(self) -> 'FixedTerminal':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        pass
