"""Terminal row allocation and serialized output for concurrent progress bars."""

import contextlib
import logging
import sys
import threading
from collections.abc import Iterator
from typing import TextIO

from pulsebar.colors import RESET, enable_ansi

__all__ = ["CLEAR_LINE", "LineRegistry", "default_registry"]

CSI = "\x1b["
CLEAR_LINE = f"{CSI}2K"

_default_registry: "LineRegistry | None" = None
_default_lock = threading.Lock()


class LineRegistry:
    """Assigns each progress bar its own terminal row and arbitrates the stream.

    Rows are numbered from the line the cursor is on when the first row is
    allocated, growing downwards, and are never reused. The registry tracks
    which row the cursor is on so that any bar can move to its row with
    relative cursor movements.

    Every operation runs under one re-entrant lock and emits its escape
    sequences as a single write, so output from different bars never
    interleaves. Hold `exclusive()` to make a sequence of operations atomic.

    Used as a context manager, the cursor is parked below all rows on exit.
    """

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream
        self.lock = threading.RLock()
        self.next_row = 0
        self.cursor_row = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.park()

    @property
    def stream(self) -> TextIO:
        # Resolved on every write so that redirection of sys.stdout is honored
        return self._stream if self._stream is not None else sys.stdout

    @property
    def last_row(self) -> int:
        """Most recently allocated row, -1 if none."""
        return self.next_row - 1

    @contextlib.contextmanager
    def exclusive(self) -> Iterator["LineRegistry"]:
        with self.lock:
            yield self

    def allocate_row(self) -> int:
        """Reserve the next row. Rows above 0 get a fresh line below the previous one."""
        with self.lock:
            row = self.next_row
            self.next_row += 1
            if row > 0:
                self._emit(self._move(row - 1) + "\n")
                self.cursor_row = row
            logging.debug("Allocated terminal row %d", row)
            return row

    def write_line(self, text: str) -> int:
        """Reserve a row for static text, such as a heading between groups of bars."""
        with self.lock:
            row = self.allocate_row()
            if text:
                self._emit(self._move(row) + CLEAR_LINE + text)
            return row

    def newline(self) -> int:
        """Reserve an empty row without creating a bar."""
        return self.write_line("")

    def move_cursor_to(self, row: int):
        with self.lock:
            self._emit(self._move(row))

    def draw(self, row: int, text: str):
        """Replace the content of row with text."""
        with self.lock:
            self._emit(self._move(row) + CLEAR_LINE + text)

    def clear_row(self, row: int):
        with self.lock:
            self._emit(self._move(row) + CLEAR_LINE)

    def release_row(self, row: int):
        """Clear a row whose bar is going away. The row itself is not recycled."""
        with self.lock:
            seq = self._move(row) + CLEAR_LINE
            if row == self.last_row:
                seq += "\r"
            self._emit(seq)
            logging.debug("Released terminal row %d", row)

    def end_row(self, row: int):
        """Finish a row with a newline, leaving the cursor on the row below."""
        with self.lock:
            self._emit(self._move(row) + RESET + "\n")
            self.cursor_row = row + 1

    def park(self):
        """Move the cursor to a fresh line below every allocated row."""
        with self.lock:
            if self.next_row == 0 or self.cursor_row > self.last_row:
                return
            self._emit(self._move(self.last_row) + "\n")
            self.cursor_row = self.next_row

    def _move(self, target: int) -> str:
        """Return the sequence moving the cursor from its current row to target."""
        delta = self.cursor_row - target
        self.cursor_row = target
        if delta > 0:
            return f"{CSI}{delta}A\r"
        if delta < 0:
            return f"{CSI}{-delta}B\r"
        return "\r"

    def _emit(self, data: str):
        stream = self.stream
        stream.write(data)
        stream.flush()


def default_registry() -> LineRegistry:
    """Process-wide registry on sys.stdout, created on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            enable_ansi()
            _default_registry = LineRegistry()
        return _default_registry
