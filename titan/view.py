"""
Scrollable view of a wrapped document.

The screen is laid out as the document rows, a status row and a command row. The
viewport keeps a scroll position and a cursor row, repaints only what changed, and
turns terminal events into commands for the application.
"""

import logging
from functools import singledispatch
from typing import Optional, Tuple

from .client import constants
from .command import Command, CommandError, Exit, TryLoad, parse_command
from .input import Input
from .terminal import (
    ClearType,
    Color,
    Event,
    Key,
    KeyEvent,
    MouseEvent,
    MouseKind,
    ResizeEvent,
    Terminal,
)
from .text import (
    MIN_WIDTH,
    BareLink,
    Document,
    HeadingLine,
    ListItem,
    NamedLink,
    PreformattedText,
    QuoteLine,
    TextLine,
    WrappedLine,
    clip,
    text_width,
    word_wrap,
)

logger = logging.getLogger(constants.LOGGER_NAME)

# Columns left free on each side of the document.
PADDING = 2

# Rows below the document: the status row and the command row.
RESERVED_ROWS = 2

HEADING_COLORS = {1: Color.RED, 2: Color.YELLOW, 3: Color.CYAN}

# (prefix, payload, colour) of a screen line.
Rendering = Tuple[str, str, Optional[Color]]


@singledispatch
def _render(line: TextLine, first: bool) -> Rendering:
    """
    How a screen line is drawn. Continuation rows get blank prefixes of the same width
    so wrapped text stays aligned.

    >>> _render(HeadingLine(2, "Title"), True)
    ('## ', 'Title', <Color.YELLOW: 2>)
    >>> _render(ListItem("and more"), False)
    ('  ', 'and more', None)
    """
    return "", line.text, None


@_render.register
def _(line: HeadingLine, first: bool) -> Rendering:
    prefix = "#" * line.level + " " if first else " " * (line.level + 1)
    return prefix, line.heading, HEADING_COLORS[line.level]


@_render.register
def _1(line: ListItem, first: bool) -> Rendering:
    return ("• " if first else "  "), line.item, None


@_render.register
def _2(line: QuoteLine, first: bool) -> Rendering:
    return "> ", line.quote, Color.WHITE


@_render.register
def _3(line: NamedLink, first: bool) -> Rendering:
    return ("→ " if first else "  "), line.name, Color.MAGENTA


@_render.register
def _4(line: BareLink, first: bool) -> Rendering:
    return "→ ", line.url, Color.MAGENTA


@_render.register
def _5(line: PreformattedText, first: bool) -> Rendering:
    return "", line.text, Color.RED


def _printable(text: str) -> str:
    # Control characters would move the cursor; draw them as spaces.
    return "".join(char if char.isprintable() else " " for char in text)


class Viewport:
    """
    A document on screen.

    `yscroll` is the wrapped line shown on the top row and `ycursor` the highlighted
    wrapped line. For a non-empty document:

        0 <= yscroll <= ycursor < len(wrapped)
        ycursor - yscroll < height
    """

    def __init__(self, terminal: Terminal, document: Document, status: str = "") -> None:
        super().__init__()
        self.terminal = terminal
        self.document = document
        self.status = status
        self.cmd_error = False
        self.yscroll = 0
        self.ycursor = 0
        # (yscroll, ycursor) as last drawn, None when everything must be drawn.
        self._drawn: Optional[Tuple[int, int]] = None
        self._layout(*terminal.size())

    def _layout(self, width: int, height: int) -> None:
        self.width = max(width - 2 * PADDING, MIN_WIDTH)
        self.height = max(height - RESERVED_ROWS, 1)
        self.wrapped = word_wrap(self.document, self.width)

    @property
    def status_row(self) -> int:
        return self.height

    @property
    def command_row(self) -> int:
        return self.height + 1

    def down(self) -> None:
        if not self.wrapped:
            return
        self.ycursor = min(self.ycursor + 1, len(self.wrapped) - 1)
        if self.ycursor >= self.yscroll + self.height:
            self.yscroll = min(self.yscroll + 1, len(self.wrapped) - 1)

    def up(self) -> None:
        self.ycursor = max(self.ycursor - 1, 0)
        if self.ycursor < self.yscroll:
            self.yscroll = max(self.yscroll - 1, 0)

    def resize(self, width: int, height: int) -> None:
        """
        Rewrap for the new terminal size, keeping the same fraction of the document
        above the top row.
        """
        old_length = len(self.wrapped)
        self._layout(width, height)
        new_length = len(self.wrapped)

        if old_length and new_length:
            self.yscroll = self.yscroll * new_length // old_length
            self.ycursor = self.ycursor * new_length // old_length
        self._clamp()
        self._drawn = None

    def _clamp(self) -> None:
        last = max(len(self.wrapped) - 1, 0)
        self.yscroll = min(max(self.yscroll, 0), last)
        self.ycursor = min(
            max(self.ycursor, self.yscroll), self.yscroll + self.height - 1, last
        )

    def redraw(self) -> None:
        """Draw everything, including the status row."""
        self._drawn = None
        self.terminal.move_to(0, self.status_row)
        self.terminal.clear(ClearType.CURRENT_LINE)
        self.terminal.print_styled(_printable(self.status), reverse=True)
        self.draw()

    def draw(self) -> None:
        """Repaint the rows that changed since the last draw and flush."""
        if self._drawn is None or self._drawn[0] != self.yscroll:
            self.terminal.move_to(self.width, self.height - 1)
            self.terminal.clear(ClearType.FROM_CURSOR_UP)
            for row in range(self.height):
                self._draw_row(row)
        elif self._drawn[1] != self.ycursor:
            for index in (self._drawn[1], self.ycursor):
                self._draw_row(index - self.yscroll)
        self._drawn = (self.yscroll, self.ycursor)
        self.terminal.flush()

    def _draw_row(self, row: int) -> None:
        index = self.yscroll + row
        self.terminal.move_to(0, row)
        self.terminal.clear(ClearType.CURRENT_LINE)
        if not 0 <= index < len(self.wrapped):
            return

        wrapped_line: WrappedLine = self.wrapped[index]
        prefix, text, color = _render(wrapped_line.line, wrapped_line.first)
        content = clip(prefix + _printable(text), self.width)
        self.terminal.move_to(PADDING, row)
        if index == self.ycursor:
            padding = " " * (self.width - text_width(content))
            self.terminal.print_styled(content + padding, fg=color, reverse=True)
        else:
            self.terminal.print_styled(content, fg=color)

    def set_cmd_error(self, message: str) -> None:
        """Show an error on the command row until the next key press."""
        self.terminal.move_to(0, self.command_row)
        self.terminal.clear(ClearType.CURRENT_LINE)
        self.terminal.print_styled(_printable(message), fg=Color.DARK_RED)
        self.terminal.flush()
        self.cmd_error = True

    def clear_cmd(self) -> None:
        self.terminal.move_to(0, self.command_row)
        self.terminal.clear(ClearType.CURRENT_LINE)
        self.terminal.flush()
        self.cmd_error = False

    def run(self, error: Optional[str] = None) -> Command:
        """
        Show the document and handle events until one of them produces a command.

        :param error: shown on the command row, e.g. why the last fetch failed.
        """
        self.redraw()
        if error:
            self.set_cmd_error(error)
        while True:
            command = self.event(self.terminal.read_event())
            if command is not None:
                return command

    def event(self, event: Event) -> Optional[Command]:
        if isinstance(event, KeyEvent):
            return self.key(event)

        if isinstance(event, MouseEvent):
            if event.kind == MouseKind.SCROLL_DOWN:
                self.down()
            else:
                self.up()
        elif isinstance(event, ResizeEvent):
            logger.debug("resized to %dx%d", event.width, event.height)
            self.resize(event.width, event.height)
            self.terminal.clear(ClearType.ALL)
            self.redraw()
            return None
        self.draw()
        return None

    def key(self, event: KeyEvent) -> Optional[Command]:
        # Exit on Ctrl-C, even though we don't get a true SIGINT.
        if event.ctrl and event.key == "c":
            return Exit()

        if self.cmd_error:
            self.clear_cmd()

        if event.ctrl:
            return None
        if event.key == "q":
            return Exit()
        if event.key == ":":
            return self.command_mode()
        if event.key == Key.ENTER:
            return self.follow()

        if event.key in ("j", Key.DOWN):
            self.down()
        elif event.key in ("k", Key.UP):
            self.up()
        self.draw()
        return None

    def follow(self) -> Optional[Command]:
        """The command to follow the link under the cursor, if it is a link."""
        if not self.wrapped:
            return None
        line = self.wrapped[self.ycursor].line
        if isinstance(line, (BareLink, NamedLink)):
            return TryLoad(line.url)
        return None

    def command_mode(self) -> Optional[Command]:
        """Read and parse a command typed after ':'."""
        text = self.ask(":", prompt_separator="")
        if text is None:
            return None
        try:
            command = parse_command(text)
        except CommandError as command_error:
            self.set_cmd_error(str(command_error))
            return None
        return command

    def ask(
        self, prompt: str, sensitive: bool = False, prompt_separator: str = " "
    ) -> Optional[str]:
        """
        Read a line from the user on the command row.

        :return: the answer, or None when the user cancelled.
        """
        prompt = _printable(prompt) + prompt_separator
        self.terminal.move_to(0, self.command_row)
        self.terminal.clear(ClearType.CURRENT_LINE)
        self.terminal.print_styled(prompt)
        answer = Input(self.terminal, len(prompt), self.command_row, sensitive).run()
        self.clear_cmd()
        return answer
