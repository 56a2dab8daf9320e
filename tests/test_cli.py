import pytest
from conftest import strip_ansi

from pulsebar import cli


def test_all_demos(capsys):
    cli.main(["--delay", "0", "--workers", "3", "--width", "20"])
    out, err = capsys.readouterr()
    text = strip_ansi(out)
    for title, _ in cli.DEMOS.values():
        assert f"=== {title} ===" in text
    assert "Worker 3" in text
    assert "Elapsed: " in text
    assert "All demos completed" in err


def test_selected_demo_with_animation(capsys):
    cli.main(["label", "-d", "0", "-a", "spinner"])
    out, _ = capsys.readouterr()
    text = strip_ansi(out)
    assert "=== Dynamic label ===" in text
    assert "Done [" in text
    assert "Basic usage" not in text


@pytest.mark.parametrize(
    "argv, message",
    [
        (["--delay", "soon"], "Invalid duration"),
        (["--animation", "sparkles"], "Unknown animation"),
        (["bogus", "-d", "0"], "Unknown demo"),
        (["--workers", "0"], "at least one worker"),
        (["--width", "3"], "at least 10"),
    ],
)
def test_errors(capsys, argv, message):
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 1
    assert message in capsys.readouterr().err
