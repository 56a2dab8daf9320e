"""Rendering of a single progress bar line."""

from collections.abc import Callable
from dataclasses import dataclass

from pulsebar.animation import AnimationStrategy, pulse_animation
from pulsebar.colors import RESET, Color, ColorSpec, ansi_code, hex_to_rgb

__all__ = [
    "BLOCK",
    "BarStyle",
    "BracketCallback",
    "ColorBlendCallback",
    "calculate_filled",
    "calculate_percent",
    "default_brackets",
    "gradient_blend",
    "render_bar",
    "render_label",
    "render_line",
    "render_time_info",
]

BLOCK = "█"

BracketCallback = Callable[[int], tuple[str, str]]
ColorBlendCallback = Callable[[int, int, int], ColorSpec]

PERCENT_COLOR = Color.BRIGHT_GREEN


def default_brackets(percent: int) -> tuple[str, str]:
    return "[", "]"


def gradient_blend(start: str, end: str) -> ColorBlendCallback:
    """Color blend fading from one hex color to another across the bar width."""
    r0, g0, b0 = hex_to_rgb(start)
    r1, g1, b1 = hex_to_rgb(end)

    def blend(cell: int, width: int, percent: int) -> str:
        t = cell / (width - 1) if width > 1 else 0.0
        r = int(r0 + (r1 - r0) * t)
        g = int(g0 + (g1 - g0) * t)
        b = int(b0 + (b1 - b0) * t)
        return f"#{r:02x}{g:02x}{b:02x}"

    return blend


@dataclass
class BarStyle:
    """Presentation settings of a bar, read afresh on every render."""

    bar_color: ColorSpec = Color.BRIGHT_CYAN
    label_color: ColorSpec = Color.BRIGHT_WHITE
    time_color: ColorSpec = Color.MAGENTA
    animation: AnimationStrategy = pulse_animation
    brackets: BracketCallback = default_brackets
    color_blend: ColorBlendCallback | None = None  # None: every cell in bar_color
    time_format: str | None = None

    def __post_init__(self):
        # Fail at configuration time rather than on the first render
        for color in (self.bar_color, self.label_color, self.time_color):
            ansi_code(color)

    def cell_color(self, cell: int, width: int, percent: int) -> str:
        if self.color_blend is None:
            return ansi_code(self.bar_color)
        return ansi_code(self.color_blend(cell, width, percent))


def calculate_percent(current: int, total: int) -> int:
    return current * 100 // total


def calculate_filled(current: int, total: int, width: int) -> int:
    return current * width // total


def render_label(style: BarStyle, label: str) -> str:
    return f"{ansi_code(style.label_color)}{label} {RESET}"


def render_bar(style: BarStyle, current: int, total: int, width: int, elapsed: float) -> str:
    """Render brackets, cells and percentage.

    Filled cells are solid blocks, the cell right after them shows the
    animation frame while the bar is incomplete, and the rest are blank.
    """
    percent = calculate_percent(current, total)
    filled = calculate_filled(current, total, width)
    left, right = style.brackets(percent)

    cells = []
    for i in range(width):
        if i < filled:
            cells.append(style.cell_color(i, width, percent) + BLOCK)
        elif i == filled and current < total:
            cells.append(style.cell_color(i, width, percent) + style.animation(elapsed, percent))
        else:
            cells.append(RESET + " ")

    return (
        f"{left}{''.join(cells)}{RESET}{right}"
        f" {ansi_code(PERCENT_COLOR)}{percent}%{RESET}"
    )


def _apply_time_format(template: str, seconds: float) -> str:
    """Substitute the first %S with whole seconds and the first %3N with milliseconds."""
    # Round to whole milliseconds before splitting off the seconds
    whole, millis = divmod(int(round(seconds * 1000)), 1000)
    text = template.replace("%S", str(whole), 1)
    return text.replace("%3N", f"{millis:03d}", 1)


def render_time_info(
    style: BarStyle,
    elapsed: float,
    completed: bool,
    eta: float,
    throughput: float,
) -> str:
    """Render the trailing "ETA: 3s [12.50 it/s]" annotation.

    Completed bars show elapsed time instead of the remaining time.
    """
    seconds = elapsed if completed else eta
    prefix = "Elapsed" if completed else "ETA"
    if style.time_format:
        value = _apply_time_format(style.time_format, seconds)
    else:
        value = str(int(seconds))
    return f" {ansi_code(style.time_color)}{prefix}: {value}s [{throughput:.2f} it/s]{RESET}"


def render_line(
    style: BarStyle,
    label: str,
    current: int,
    total: int,
    width: int,
    elapsed: float,
    eta: float,
    throughput: float,
) -> str:
    """Assemble the complete line: label, bar, percentage and time annotation."""
    return (
        render_label(style, label)
        + render_bar(style, current, total, width, elapsed)
        + render_time_info(style, elapsed, current >= total, eta, throughput)
    )
