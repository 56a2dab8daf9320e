"""Utility functions for parsing command line values."""

import re

__all__ = ["parse_duration"]

_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0}


def parse_duration(text: str | None) -> float | None:
    """Parse a duration string into seconds.

    Supports:
    - Plain numbers, taken as seconds: 0.5, 2
    - Unit suffixes: ms, s, m (minutes)
    - Case insensitive, surrounding whitespace and underscores ignored

    Examples: 20ms, 0.5s, 1m, 1_500ms
    """
    if text is None:
        return None
    s = text.strip().lower().replace("_", "")

    m = re.match(r"^(\d+(?:\.\d+)?)\s*(ms|s|m)?$", s)
    if not m:
        raise ValueError(f"Invalid duration format: {text}")
    num, unit = m.groups()
    return float(num) * _UNITS[unit or "s"]
