"""ANSI color codes for named and 24-bit colors."""

import enum
import re

import colorama

__all__ = [
    "RESET",
    "Color",
    "ColorSpec",
    "ansi_code",
    "enable_ansi",
    "hex_to_rgb",
]

RESET = "\x1b[0m"

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

_ansi_enabled = False


class Color(enum.Enum):
    """Named terminal colors. Values are the SGR sequences."""

    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"
    WHITE = "\x1b[37m"
    GRAY = "\x1b[90m"
    BRIGHT_RED = "\x1b[1;31m"
    BRIGHT_GREEN = "\x1b[1;32m"
    BRIGHT_YELLOW = "\x1b[1;33m"
    BRIGHT_BLUE = "\x1b[1;34m"
    BRIGHT_MAGENTA = "\x1b[1;35m"
    BRIGHT_CYAN = "\x1b[1;36m"
    BRIGHT_WHITE = "\x1b[1;37m"
    RESET = "\x1b[0m"


# A named color or a "#RRGGBB" string
ColorSpec = Color | str


def hex_to_rgb(text: str) -> tuple[int, int, int]:
    """Parse "#RRGGBB" into an (r, g, b) tuple."""
    m = _HEX_RE.match(text)
    if not m:
        raise ValueError(f"Invalid hex color format: {text!r} (expected #RRGGBB)")
    r, g, b = (int(part, 16) for part in m.groups())
    return r, g, b


def ansi_code(color: ColorSpec) -> str:
    """Return the escape sequence that switches the terminal to color."""
    if isinstance(color, Color):
        return color.value
    if isinstance(color, str):
        r, g, b = hex_to_rgb(color)
        return f"\x1b[38;2;{r};{g};{b}m"
    raise ValueError(f"Unsupported color: {color!r}")


def enable_ansi():
    """Make escape sequences work on Windows consoles. Safe to call repeatedly."""
    global _ansi_enabled
    if _ansi_enabled:
        return
    colorama.just_fix_windows_console()
    _ansi_enabled = True
