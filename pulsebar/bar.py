"""Progress bar that redraws itself in place on its own terminal row."""

import enum
import sys
import time
import weakref
from collections.abc import Callable

from pulsebar.animation import AnimationStrategy, pulse_animation
from pulsebar.colors import Color, ColorSpec, ansi_code
from pulsebar.estimator import SMOOTHING, RateEstimator
from pulsebar.frame import BarStyle, BracketCallback, ColorBlendCallback, render_line
from pulsebar.registry import LineRegistry, default_registry

__all__ = [
    "DEFAULT_LABEL",
    "DEFAULT_WIDTH",
    "MIN_DELTA",
    "MIN_INTERVAL",
    "BarState",
    "PulseBar",
]

DEFAULT_WIDTH = 50
DEFAULT_LABEL = "Progress"

# A redraw needs both this much time and this much progress since the last one
MIN_INTERVAL = 0.1
MIN_DELTA = 1


def _release_row(registry: LineRegistry, row: int):
    try:
        registry.release_row(row)
    except (OSError, ValueError):
        # The stream may already be closed while the interpreter shuts down
        if not sys.is_finalizing():
            raise


class BarState(enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CLOSED = "closed"


class PulseBar:
    """A progress bar with a pulsing frontier cell, ETA and throughput.

    Each bar takes the next row from its registry when created, so bars
    should be created in the order they are to appear from top to bottom.
    Any number of bars may be updated from different threads; all terminal
    output goes through the registry lock.

    Redraws are throttled: `update` only writes to the terminal when at least
    `min_interval` seconds and `min_delta` units have passed since the last
    redraw. `complete` and `set_label` always redraw.

    Closing a bar (explicitly, by leaving a with block, or by letting it be
    garbage collected) erases its row, unless it was created with leave=True
    and has completed.
    """

    def __init__(
        self,
        total: int,
        width: int = DEFAULT_WIDTH,
        label: str = DEFAULT_LABEL,
        bar_color: ColorSpec = Color.BRIGHT_CYAN,
        label_color: ColorSpec = Color.BRIGHT_WHITE,
        animation: AnimationStrategy | None = None,
        *,
        registry: LineRegistry | None = None,
        min_interval: float = MIN_INTERVAL,
        min_delta: int = MIN_DELTA,
        smoothing: float = SMOOTHING,
        leave: bool = False,
        clock: Callable[[], float] = time.perf_counter,
    ):
        if total <= 0:
            raise ValueError(f"Total must be positive, got {total}")
        if width <= 0:
            raise ValueError(f"Width must be positive, got {width}")
        self.total = total
        self.width = width
        self.label = label
        self.style = BarStyle(
            bar_color=bar_color,
            label_color=label_color,
            animation=animation or pulse_animation,
        )
        self.estimator = RateEstimator(total, smoothing)
        self.min_interval = min_interval
        self.min_delta = min_delta
        self.leave = leave
        self._clock = clock

        self.current = 0
        self.state = BarState.ACTIVE
        self.last_render_time = 0.0
        self.last_render_count = 0
        self.render_count = 0

        self.registry = registry if registry is not None else default_registry()
        self.start_time = clock()
        self.row = self.registry.allocate_row()
        # Clears the row if the bar is garbage collected without being closed
        self._finalizer = weakref.finalize(self, _release_row, self.registry, self.row)
        self._finalizer.atexit = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def update(self, count: int, force_complete: bool = False) -> bool:
        """Report progress. Returns True if the bar was redrawn.

        Counts beyond total are clamped, and a count lower than the current
        one does not move the bar backwards.
        """
        with self.registry.exclusive():
            self._check_open()
            self.current = max(self.current, min(max(count, 0), self.total))
            if force_complete:
                self.current = self.total
            return self._refresh(force=False)

    def complete(self):
        """Draw the finished bar and move the terminal past its row."""
        with self.registry.exclusive():
            self._check_open()
            if self.state is BarState.COMPLETED:
                return
            self.current = self.total
            self._refresh(force=True)
            self.registry.end_row(self.row)
            self.state = BarState.COMPLETED
            if self.leave:
                self._finalizer.detach()

    def set_label(self, label: str):
        with self.registry.exclusive():
            self._check_open()
            self.label = label
            self._refresh(force=True)

    def close(self):
        """Erase the bar's row. Safe to call more than once."""
        with self.registry.exclusive():
            if self.state is BarState.CLOSED:
                return
            self._finalizer.detach()
            if not (self.leave and self.state is BarState.COMPLETED):
                self.registry.release_row(self.row)
            self.state = BarState.CLOSED

    def set_animation(self, animation: AnimationStrategy):
        self._set_style(animation=animation)

    def set_bracket_callback(self, callback: BracketCallback):
        self._set_style(brackets=callback)

    def set_color_blend_callback(self, callback: ColorBlendCallback | None):
        self._set_style(color_blend=callback)

    def set_bar_color(self, color: ColorSpec):
        ansi_code(color)
        self._set_style(bar_color=color)

    def set_label_color(self, color: ColorSpec):
        ansi_code(color)
        self._set_style(label_color=color)

    def set_time_color(self, color: ColorSpec):
        ansi_code(color)
        self._set_style(time_color=color)

    def set_time_format(self, template: str | None):
        """Use a template such as "%S.%3N" for the time annotation."""
        self._set_style(time_format=template or None)

    def _set_style(self, **changes):
        # Style is only read or written under the registry lock
        with self.registry.exclusive():
            for name, value in changes.items():
                setattr(self.style, name, value)

    def _check_open(self):
        if self.state is BarState.CLOSED:
            raise RuntimeError(f"Progress bar {self.label!r} is closed")

    def _refresh(self, force: bool) -> bool:
        elapsed = self._clock() - self.start_time
        if not force and (
            elapsed - self.last_render_time < self.min_interval
            or self.current - self.last_render_count < self.min_delta
        ):
            return False
        eta, throughput = self.estimator.sample(
            elapsed, self.current, self.last_render_time, self.last_render_count
        )
        line = render_line(
            self.style,
            self.label,
            self.current,
            self.total,
            self.width,
            elapsed,
            eta,
            throughput,
        )
        self.registry.draw(self.row, line)
        self.last_render_time = elapsed
        self.last_render_count = self.current
        self.render_count += 1
        return True
