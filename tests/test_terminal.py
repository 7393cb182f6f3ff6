import pytest

from wxradar.terminal import TermCapability, detect_terminal


@pytest.mark.parametrize(
    "environ, expected",
    [
        ({"TERM_PROGRAM": "iTerm.app", "TERM": "xterm-256color"}, TermCapability.ITERM2),
        ({"TERM_PROGRAM": "WezTerm", "TERM": "xterm-256color"}, TermCapability.ITERM2),
        ({"TERM": "xterm-kitty", "TERM_PROGRAM": ""}, TermCapability.KITTY),
        (
            {"KITTY_PID": "12345", "TERM": "xterm-256color", "TERM_PROGRAM": ""},
            TermCapability.KITTY,
        ),
        ({"TERM_PROGRAM": "ghostty", "TERM": "xterm-ghostty"}, TermCapability.KITTY),
        (
            {"TERM_PROGRAM": "Apple_Terminal", "TERM": "xterm-256color", "KITTY_PID": ""},
            TermCapability.HALF_BLOCK,
        ),
    ],
    ids=["iterm2", "wezterm", "kitty", "kitty-pid", "ghostty", "fallback"],
)
def test_detect_terminal(environ, expected):
    assert detect_terminal(environ) == expected


def test_empty_environment_falls_back():
    assert detect_terminal({}) is TermCapability.HALF_BLOCK


def test_kitty_takes_priority_over_term_program():
    env = {"TERM": "xterm-kitty", "TERM_PROGRAM": "iTerm.app"}
    assert detect_terminal(env) is TermCapability.KITTY


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.delenv("KITTY_PID", raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")
    monkeypatch.setenv("TERM_PROGRAM", "WezTerm")
    assert detect_terminal() is TermCapability.ITERM2


def test_capability_values():
    assert TermCapability(0) is TermCapability.HALF_BLOCK
    assert TermCapability.ITERM2 < TermCapability.KITTY