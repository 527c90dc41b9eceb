"""
Fake terminal for the viewport, input and application tests.
"""
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from titan.terminal import ClearType, Color, Event, KeyEvent


class FakeTerminal:
    """
    Records drawing calls and keeps a character grid of what is on screen.

    `events` are handed out by `read_event` in order; running out of them fails the
    test instead of blocking.
    """

    def __init__(self, width: int = 40, height: int = 10, events: Iterable[Event] = ()):
        self.width = width
        self.height = height
        self.events: List[Event] = list(events)
        self.calls: List[tuple] = []
        self.cells: Dict[Tuple[int, int], Tuple[str, Optional[Color], bool]] = {}
        self.x = 0
        self.y = 0
        self.cursor_visible = False

    def type(self, text: str) -> None:
        self.events.extend(KeyEvent(char) for char in text)

    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def read_event(self) -> Event:
        assert self.events, "no more events"
        return self.events.pop(0)

    def move_to(self, x: int, y: int) -> None:
        self.calls.append(("move_to", x, y))
        self.x = min(max(x, 0), self.width - 1)
        self.y = min(max(y, 0), self.height - 1)

    def clear(self, clear_type: ClearType) -> None:
        self.calls.append(("clear", clear_type, self.y))
        if clear_type == ClearType.ALL:
            self.cells.clear()
            return
        for (x, y) in list(self.cells):
            if y == self.y or (clear_type == ClearType.FROM_CURSOR_UP and y < self.y):
                del self.cells[(x, y)]

    def print_styled(
        self, text: str, fg: Optional[Color] = None, reverse: bool = False
    ) -> None:
        self.calls.append(("print_styled", text, fg, reverse))
        for char in text:
            if self.x >= self.width:
                break
            self.cells[(self.x, self.y)] = (char, fg, reverse)
            self.x += 1

    def show_cursor(self, visible: bool) -> None:
        self.cursor_visible = visible

    def flush(self) -> None:
        self.calls.append(("flush",))

    def row(self, y: int) -> str:
        """The text on a screen row, without trailing blanks."""
        return "".join(
            self.cells.get((x, y), (" ", None, False))[0] for x in range(self.width)
        ).rstrip()

    def style(self, x: int, y: int) -> Tuple[Optional[Color], bool]:
        _, fg, reverse = self.cells[(x, y)]
        return fg, reverse

    def printed(self) -> List[str]:
        return [call[1] for call in self.calls if call[0] == "print_styled"]

    def reset_calls(self) -> None:
        self.calls = []


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()
