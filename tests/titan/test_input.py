"""
Tests for the single-line input widget.
"""
from titan.input import Input
from titan.terminal import Key, KeyEvent, MouseEvent, MouseKind

from conftest import FakeTerminal


def test_enter_returns_buffer(terminal: FakeTerminal):
    terminal.type("abc")
    terminal.events.append(KeyEvent(Key.ENTER))

    assert Input(terminal, 3, 9).run() == "abc"
    assert terminal.row(9) == "   abc"
    assert not terminal.cursor_visible


def test_empty_answer(terminal: FakeTerminal):
    terminal.events.append(KeyEvent(Key.ENTER))
    assert Input(terminal, 0, 9).run() == ""


def test_sensitive_input_is_masked(terminal: FakeTerminal):
    terminal.type("pw")
    terminal.events.append(KeyEvent(Key.ENTER))

    assert Input(terminal, 0, 9, sensitive=True).run() == "pw"
    assert terminal.row(9) == "**"


def test_backspace(terminal: FakeTerminal):
    terminal.type("abd")
    terminal.events.append(KeyEvent(Key.BACKSPACE))
    terminal.type("c")
    terminal.events.append(KeyEvent(Key.ENTER))

    assert Input(terminal, 3, 9).run() == "abc"
    assert terminal.row(9) == "   abc"


def test_backspace_on_empty_buffer(terminal: FakeTerminal):
    terminal.events.extend([KeyEvent(Key.BACKSPACE), KeyEvent("a"), KeyEvent(Key.ENTER)])
    assert Input(terminal, 0, 9).run() == "a"


def test_escape_cancels(terminal: FakeTerminal):
    terminal.type("abc")
    terminal.events.append(KeyEvent(Key.ESC))
    assert Input(terminal, 0, 9).run() is None
    assert not terminal.cursor_visible


def test_ctrl_c_cancels(terminal: FakeTerminal):
    terminal.type("abc")
    terminal.events.append(KeyEvent("c", ctrl=True))
    assert Input(terminal, 0, 9).run() is None


def test_other_events_are_ignored(terminal: FakeTerminal):
    terminal.events.extend(
        [
            KeyEvent("a", ctrl=True),
            KeyEvent(Key.UP),
            MouseEvent(MouseKind.SCROLL_DOWN),
            KeyEvent("x"),
            KeyEvent(Key.ENTER),
        ]
    )
    assert Input(terminal, 0, 9).run() == "x"
