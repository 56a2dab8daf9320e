import pytest

from pulsebar.utils import parse_duration


@pytest.mark.parametrize(
    "text, seconds",
    [
        ("20ms", 0.02),
        ("0.5s", 0.5),
        ("2", 2.0),
        ("1m", 60.0),
        (" 1_500MS ", 1.5),
        ("0", 0.0),
    ],
)
def test_parse_duration(text, seconds):
    assert parse_duration(text) == pytest.approx(seconds)


def test_parse_duration_none():
    assert parse_duration(None) is None


@pytest.mark.parametrize("text", ["", "fast", "-1s", "10h", "1.s"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError, match="Invalid duration"):
        parse_duration(text)
