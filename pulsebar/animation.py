"""Animation strategies for the frontier cell of a progress bar.

An animation is any callable ``(elapsed, percent) -> str`` returning the glyph
to draw in the cell just past the filled part of the bar.
"""

from collections.abc import Callable

__all__ = [
    "ANIMATIONS",
    "AnimationStrategy",
    "get_animation",
    "pulse_animation",
    "rainbow_animation",
    "solid_block_animation",
    "spinner_animation",
]

AnimationStrategy = Callable[[float, int], str]

# Rises and falls through the eighth-block levels, 10 frames per second
PULSE_FRAMES = "▁▂▃▄▅▆▇█▇▆▅▄▃▂"

RAINBOW_FRAMES = ("🌈", "🌟", "✨", "⚡", "💫")

SPINNER_FRAMES = "◐◓◑◒"


def pulse_animation(elapsed: float, percent: int = 0) -> str:
    return PULSE_FRAMES[int(elapsed * 10) % len(PULSE_FRAMES)]


def solid_block_animation(elapsed: float, percent: int = 0) -> str:
    return "█"


def rainbow_animation(elapsed: float, percent: int = 0) -> str:
    """Cycle twice per second, shifted by one frame every 20 percent."""
    return RAINBOW_FRAMES[int(elapsed * 2 + percent / 20) % len(RAINBOW_FRAMES)]


def spinner_animation(elapsed: float, percent: int = 0) -> str:
    return SPINNER_FRAMES[int(elapsed * 4) % len(SPINNER_FRAMES)]


ANIMATIONS: dict[str, AnimationStrategy] = {
    "pulse": pulse_animation,
    "solid": solid_block_animation,
    "rainbow": rainbow_animation,
    "spinner": spinner_animation,
}


def get_animation(name: str) -> AnimationStrategy:
    """Look up a built-in animation by name."""
    try:
        return ANIMATIONS[name.strip().lower()]
    except KeyError:
        choices = ", ".join(ANIMATIONS)
        raise ValueError(f"Unknown animation: {name} (choose from {choices})") from None
