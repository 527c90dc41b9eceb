"""
Tests for the curses terminal backend, with curses itself mocked out.
"""
import curses
from unittest.mock import patch, call

import pytest

from titan.terminal import (
    BUTTON5_PRESSED,
    ClearType,
    Color,
    Key,
    KeyEvent,
    MouseEvent,
    MouseKind,
    ResizeEvent,
    Terminal,
    TerminalError,
    key_event,
)


@pytest.fixture
def fake_curses():
    with patch("titan.terminal.curses") as fake:
        # Keep the real constants and exception type.
        for name in (
            "error",
            "KEY_RESIZE",
            "KEY_MOUSE",
            "KEY_ENTER",
            "KEY_BACKSPACE",
            "KEY_UP",
            "KEY_DOWN",
            "BUTTON4_PRESSED",
            "A_DIM",
            "A_REVERSE",
        ):
            setattr(fake, name, getattr(curses, name))
        fake.has_colors.return_value = False
        stdscr = fake.initscr.return_value
        stdscr.getmaxyx.return_value = (24, 80)
        stdscr.getyx.return_value = (0, 0)
        yield fake


@pytest.mark.parametrize(
    "key, event",
    [
        ("x", KeyEvent("x")),
        ("\r", KeyEvent(Key.ENTER)),
        ("\x7f", KeyEvent(Key.BACKSPACE)),
        ("\x1b", KeyEvent(Key.ESC)),
        ("\x01", KeyEvent("a", ctrl=True)),
        (curses.KEY_ENTER, KeyEvent(Key.ENTER)),
        (curses.KEY_BACKSPACE, KeyEvent(Key.BACKSPACE)),
        (curses.KEY_UP, KeyEvent(Key.UP)),
        (curses.KEY_DOWN, KeyEvent(Key.DOWN)),
        (curses.KEY_F1, None),
    ],
)
def test_key_event(key, event):
    assert key_event(key) == event


def test_setup_and_restore(fake_curses):
    with Terminal() as terminal:
        assert terminal.size() == (80, 24)
        fake_curses.raw.assert_called_once_with()
        fake_curses.noecho.assert_called_once_with()
        fake_curses.initscr.return_value.keypad.assert_called_with(True)

    fake_curses.mousemask.assert_called_with(0)
    fake_curses.curs_set.assert_called_with(1)
    fake_curses.noraw.assert_called_once_with()
    fake_curses.echo.assert_called_once_with()
    fake_curses.endwin.assert_called_once_with()


def test_restored_on_error(fake_curses):
    with pytest.raises(ValueError):
        with Terminal():
            raise ValueError("boom")
    fake_curses.endwin.assert_called_once_with()


def test_setup_fails(fake_curses):
    fake_curses.initscr.side_effect = curses.error("no terminal")
    with pytest.raises(TerminalError):
        with Terminal():
            pass


def test_setup_fails_after_initscr(fake_curses):
    fake_curses.raw.side_effect = curses.error("no raw mode")
    with pytest.raises(TerminalError):
        with Terminal():
            pass
    fake_curses.endwin.assert_called_once_with()


def test_read_resize(fake_curses):
    with Terminal() as terminal:
        stdscr = fake_curses.initscr.return_value
        stdscr.get_wch.side_effect = [curses.KEY_RESIZE]
        stdscr.getmaxyx.return_value = (30, 100)
        assert terminal.read_event() == ResizeEvent(100, 30)
        fake_curses.update_lines_cols.assert_called_once_with()


def test_read_mouse(fake_curses):
    with Terminal() as terminal:
        stdscr = fake_curses.initscr.return_value
        stdscr.get_wch.side_effect = [curses.KEY_MOUSE, curses.KEY_MOUSE]
        fake_curses.getmouse.side_effect = [
            (0, 1, 1, 0, curses.BUTTON4_PRESSED),
            (0, 1, 1, 0, BUTTON5_PRESSED),
        ]
        assert terminal.read_event() == MouseEvent(MouseKind.SCROLL_UP)
        assert terminal.read_event() == MouseEvent(MouseKind.SCROLL_DOWN)


def test_read_skips_unused_keys(fake_curses):
    with Terminal() as terminal:
        stdscr = fake_curses.initscr.return_value
        stdscr.get_wch.side_effect = [curses.error(), curses.KEY_F1, "q"]
        assert terminal.read_event() == KeyEvent("q")


def test_drawing(fake_curses):
    with Terminal() as terminal:
        stdscr = fake_curses.initscr.return_value
        stdscr.getyx.return_value = (3, 70)

        terminal.move_to(100, -3)
        stdscr.move.assert_called_with(0, 79)

        terminal.print_styled("hello world", fg=Color.DARK_RED, reverse=True)
        stdscr.addnstr.assert_called_with(
            "hello world", 10, curses.A_DIM | curses.A_REVERSE
        )

        terminal.clear(ClearType.CURRENT_LINE)
        assert stdscr.move.call_args_list[-2:] == [call(3, 0), call(3, 70)]
        stdscr.clrtoeol.assert_called_once_with()

        terminal.clear(ClearType.ALL)
        stdscr.erase.assert_called_with()

        terminal.flush()
        stdscr.refresh.assert_called_with()
