import pytest

from pulsebar.animation import (
    PULSE_FRAMES,
    RAINBOW_FRAMES,
    get_animation,
    pulse_animation,
    rainbow_animation,
    solid_block_animation,
    spinner_animation,
)


def test_pulse_cycle():
    """Ten frames per second, wrapping after the full rise and fall"""
    assert pulse_animation(0.0) == "▁"
    assert pulse_animation(0.7) == "█"
    assert pulse_animation(0.8) == "▇"
    assert pulse_animation(1.4) == pulse_animation(0.0)
    assert {pulse_animation(t / 10) for t in range(14)} == set(PULSE_FRAMES)


def test_solid_block():
    assert solid_block_animation(0.0, 0) == "█"
    assert solid_block_animation(123.4, 99) == "█"


def test_rainbow_shifts_with_percent():
    assert rainbow_animation(0.0, 0) == RAINBOW_FRAMES[0]
    assert rainbow_animation(0.0, 20) == RAINBOW_FRAMES[1]
    assert rainbow_animation(0.5, 0) == RAINBOW_FRAMES[1]
    assert rainbow_animation(0.5, 80) == RAINBOW_FRAMES[0]


def test_spinner():
    assert [spinner_animation(t / 4) for t in range(5)] == list("◐◓◑◒◐")


def test_get_animation():
    assert get_animation("pulse") is pulse_animation
    assert get_animation(" Solid ") is solid_block_animation
    with pytest.raises(ValueError, match="Unknown animation"):
        get_animation("sparkles")
