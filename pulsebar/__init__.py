"""pulsebar - Concurrent in-place progress bars for the terminal.

Each bar owns one terminal row and redraws itself with a pulsing frontier
cell, percentage, ETA and throughput. Bars may be updated from multiple
threads; a shared line registry serializes all terminal output.
"""

from pulsebar.animation import (
    get_animation,
    pulse_animation,
    rainbow_animation,
    solid_block_animation,
    spinner_animation,
)
from pulsebar.bar import BarState, PulseBar
from pulsebar.colors import Color, ansi_code, enable_ansi
from pulsebar.estimator import RateEstimator
from pulsebar.frame import BarStyle, default_brackets, gradient_blend, render_line
from pulsebar.registry import LineRegistry, default_registry

__version__ = "0.1.0"

__all__ = [
    "BarState",
    "BarStyle",
    "Color",
    "LineRegistry",
    "PulseBar",
    "RateEstimator",
    "__version__",
    "ansi_code",
    "default_brackets",
    "default_registry",
    "enable_ansi",
    "get_animation",
    "gradient_blend",
    "pulse_animation",
    "rainbow_animation",
    "render_line",
    "solid_block_animation",
    "spinner_animation",
]
