import io
import re

import pytest

from pulsebar.registry import LineRegistry

CSI_RE = re.compile(r"\x1b\[([0-9;]*)([A-Za-z])")


def strip_ansi(text: str) -> str:
    return CSI_RE.sub("", text)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class Screen:
    """Minimal terminal emulator for the sequences the registry emits."""

    def __init__(self):
        self.lines = [""]
        self.row = 0
        self.col = 0

    def feed(self, data: str) -> "Screen":
        i = 0
        while i < len(data):
            m = CSI_RE.match(data, i)
            if m:
                params, cmd = m.groups()
                n = int(params) if params.isdigit() else 1
                if cmd == "A":
                    self.row = max(0, self.row - n)
                elif cmd == "B":
                    self.row = min(len(self.lines) - 1, self.row + n)
                elif cmd == "K" and params == "2":
                    self.lines[self.row] = ""
                i = m.end()
                continue
            ch = data[i]
            if ch == "\n":
                self.row += 1
                self.col = 0
                if self.row == len(self.lines):
                    self.lines.append("")
            elif ch == "\r":
                self.col = 0
            else:
                line = self.lines[self.row].ljust(self.col)
                self.lines[self.row] = line[: self.col] + ch + line[self.col + 1 :]
                self.col += 1
            i += 1
        return self

    def text(self) -> list[str]:
        return [line.rstrip() for line in self.lines]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def registry(stream):
    return LineRegistry(stream)


@pytest.fixture
def screen(stream):
    """Callable replaying everything written to the stream so far."""
    return lambda: Screen().feed(stream.getvalue()).text()
