"""
curses backend for the viewport and the input widget.

Only what the client needs is exposed: events, cursor movement, clearing and
coloured text.
"""

import curses
import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .client import constants

logger = logging.getLogger(constants.LOGGER_NAME)


class TerminalError(Exception):
    """Raised when the terminal cannot be set up."""


class Color(enum.Enum):
    RED = enum.auto()
    YELLOW = enum.auto()
    CYAN = enum.auto()
    WHITE = enum.auto()
    MAGENTA = enum.auto()
    DARK_RED = enum.auto()


class ClearType(enum.Enum):
    CURRENT_LINE = enum.auto()
    # Everything above the cursor, and its own line up to the cursor.
    FROM_CURSOR_UP = enum.auto()
    ALL = enum.auto()


class Key:
    """Names of the non-character keys. Character keys are the character itself."""

    ENTER = "enter"
    BACKSPACE = "backspace"
    ESC = "esc"
    UP = "up"
    DOWN = "down"


class MouseKind(enum.Enum):
    SCROLL_UP = enum.auto()
    SCROLL_DOWN = enum.auto()


@dataclass(frozen=True)
class KeyEvent:
    key: str
    ctrl: bool = False


@dataclass(frozen=True)
class MouseEvent:
    kind: MouseKind


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


Event = Union[KeyEvent, MouseEvent, ResizeEvent]

# Wheel down is button 5, which older curses modules do not name.
BUTTON5_PRESSED = getattr(curses, "BUTTON5_PRESSED", 0x200000)

_COLOR_NUMBERS = {
    Color.RED: curses.COLOR_RED,
    Color.YELLOW: curses.COLOR_YELLOW,
    Color.CYAN: curses.COLOR_CYAN,
    Color.WHITE: curses.COLOR_WHITE,
    Color.MAGENTA: curses.COLOR_MAGENTA,
    Color.DARK_RED: curses.COLOR_RED,
}


def key_event(key: Union[str, int]) -> Optional[KeyEvent]:
    """
    Translate what curses' `get_wch` returned into a key event.

    >>> key_event("j")
    KeyEvent(key='j', ctrl=False)
    >>> key_event("\\x03")
    KeyEvent(key='c', ctrl=True)
    >>> key_event("\\n")
    KeyEvent(key='enter', ctrl=False)

    :param key: a character or one of the curses KEY_* codes.
    :return: the event, or None for keys the client does not use.
    """
    if isinstance(key, str):
        if key in ("\n", "\r"):
            return KeyEvent(Key.ENTER)
        if key in ("\x7f", "\x08"):
            return KeyEvent(Key.BACKSPACE)
        if key == "\x1b":
            return KeyEvent(Key.ESC)
        if ord(key) < 32:
            # Raw mode delivers Ctrl-<letter> as the control character.
            return KeyEvent(chr(ord(key) + ord("a") - 1), ctrl=True)
        return KeyEvent(key)

    if key == curses.KEY_ENTER:
        return KeyEvent(Key.ENTER)
    if key == curses.KEY_BACKSPACE:
        return KeyEvent(Key.BACKSPACE)
    if key == curses.KEY_UP:
        return KeyEvent(Key.UP)
    if key == curses.KEY_DOWN:
        return KeyEvent(Key.DOWN)
    return None


class Terminal:
    """
    The terminal in raw mode with mouse capture.

    Use as a context manager: the terminal is restored on the way out, whatever the
    reason for leaving.
    """

    stdscr: "curses.window"

    def __init__(self) -> None:
        super().__init__()
        self._color_pairs = {}

    def __enter__(self) -> "Terminal":
        try:
            self.stdscr = curses.initscr()
        except curses.error as curses_error:
            raise TerminalError(f"could not set up terminal: {curses_error}")

        try:
            curses.raw()
            curses.noecho()
            self.stdscr.keypad(True)
            curses.mousemask(curses.BUTTON4_PRESSED | BUTTON5_PRESSED)
            curses.mouseinterval(0)
            self._init_colors()
        except curses.error as curses_error:
            self._restore()
            raise TerminalError(f"could not set up terminal: {curses_error}")
        self.show_cursor(False)
        self.clear(ClearType.ALL)
        logger.debug("terminal ready, size %s", self.size())
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self._restore()

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            # Lets -1 stand for the terminal's own background.
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        for pair_number, color in enumerate(Color, start=1):
            curses.init_pair(pair_number, _COLOR_NUMBERS[color], background)
            self._color_pairs[color] = curses.color_pair(pair_number)

    def _restore(self) -> None:
        try:
            curses.mousemask(0)
            self.show_cursor(True)
            self.stdscr.clear()
            self.stdscr.refresh()
            self.stdscr.keypad(False)
            curses.noraw()
            curses.echo()
        finally:
            curses.endwin()

    def size(self) -> Tuple[int, int]:
        """The size as (width, height)."""
        height, width = self.stdscr.getmaxyx()
        return width, height

    def read_event(self) -> Event:
        """Block until the next event the client handles."""
        while True:
            try:
                key = self.stdscr.get_wch()
            except curses.error:
                # Interrupted, e.g. by a signal.
                continue

            if key == curses.KEY_RESIZE:
                curses.update_lines_cols()
                return ResizeEvent(*self.size())

            if key == curses.KEY_MOUSE:
                try:
                    _, _, _, _, button_state = curses.getmouse()
                except curses.error:
                    continue
                if button_state & curses.BUTTON4_PRESSED:
                    return MouseEvent(MouseKind.SCROLL_UP)
                if button_state & BUTTON5_PRESSED:
                    return MouseEvent(MouseKind.SCROLL_DOWN)
                continue

            event = key_event(key)
            if event is not None:
                return event

    def move_to(self, x: int, y: int) -> None:
        width, height = self.size()
        self.stdscr.move(min(max(y, 0), height - 1), min(max(x, 0), width - 1))

    def clear(self, clear_type: ClearType) -> None:
        if clear_type == ClearType.ALL:
            self.stdscr.erase()
            return

        y, x = self.stdscr.getyx()
        if clear_type == ClearType.CURRENT_LINE:
            self.stdscr.move(y, 0)
            self.stdscr.clrtoeol()
        else:
            for row in range(y):
                self.stdscr.move(row, 0)
                self.stdscr.clrtoeol()
            self.stdscr.move(y, 0)
            self._add(" " * (x + 1), 0)
        self.stdscr.move(y, x)

    def print_styled(
        self, text: str, fg: Optional[Color] = None, reverse: bool = False
    ) -> None:
        """Print at the cursor, cutting the text off at the right edge."""
        attr = self._color_pairs.get(fg, 0) if fg else 0
        if fg == Color.DARK_RED:
            attr |= curses.A_DIM
        if reverse:
            attr |= curses.A_REVERSE
        self._add(text, attr)

    def _add(self, text: str, attr: int) -> None:
        _, x = self.stdscr.getyx()
        _, width = self.stdscr.getmaxyx()
        if x >= width or not text:
            return
        try:
            self.stdscr.addnstr(text, width - x, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off screen; the text is
            # still drawn.
            pass

    def show_cursor(self, visible: bool) -> None:
        try:
            curses.curs_set(1 if visible else 0)
        except curses.error:
            # Not every terminal can hide the cursor.
            pass

    def flush(self) -> None:
        self.stdscr.refresh()
