import pytest

from pulsebar.colors import RESET, Color, ansi_code, enable_ansi, hex_to_rgb


@pytest.mark.parametrize(
    "color, code",
    [
        (Color.RED, "\x1b[31m"),
        (Color.GRAY, "\x1b[90m"),
        (Color.BRIGHT_CYAN, "\x1b[1;36m"),
        (Color.RESET, RESET),
    ],
)
def test_named_colors(color, code):
    assert ansi_code(color) == code


def test_hex_color():
    """Hex colors become 24-bit foreground sequences"""
    assert ansi_code("#ff8000") == "\x1b[38;2;255;128;0m"
    assert ansi_code("#00C6FF") == "\x1b[38;2;0;198;255m"
    assert hex_to_rgb("#010203") == (1, 2, 3)


@pytest.mark.parametrize("bad", ["ff8000", "#ff800", "#ff80000", "#gg0000", "", "# ff800"])
def test_invalid_hex(bad):
    with pytest.raises(ValueError, match="Invalid hex color"):
        ansi_code(bad)


def test_unsupported_type():
    with pytest.raises(ValueError, match="Unsupported color"):
        ansi_code(42)


def test_enable_ansi_once(monkeypatch):
    import colorama

    from pulsebar import colors

    calls = []
    monkeypatch.setattr(colors, "_ansi_enabled", False)
    monkeypatch.setattr(colorama, "just_fix_windows_console", lambda: calls.append(1))
    enable_ansi()
    enable_ansi()
    assert calls == [1]
