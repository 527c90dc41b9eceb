"""
Single-line text input, used for the command line and for server prompts.
"""

from typing import List, Optional

from .terminal import Event, Key, KeyEvent, Terminal


class Input:
    """
    Editable buffer drawn at a fixed position on screen.

    Enter returns the buffer; Esc or Ctrl-C cancel the edit and return None.
    Sensitive input is echoed as asterisks.
    """

    def __init__(
        self, terminal: Terminal, x: int, y: int, sensitive: bool = False
    ) -> None:
        super().__init__()
        self.terminal = terminal
        self.x = x
        self.y = y
        self.sensitive = sensitive
        self.buffer: List[str] = []
        self.done = False
        self.result: Optional[str] = None

    def run(self) -> Optional[str]:
        """Edit until the user submits or cancels."""
        self.terminal.move_to(self.x, self.y)
        self.terminal.show_cursor(True)
        self.terminal.flush()
        try:
            while not self.done:
                self.event(self.terminal.read_event())
                self.terminal.flush()
        finally:
            self.terminal.show_cursor(False)
        return self.result

    def event(self, event: Event) -> None:
        if not isinstance(event, KeyEvent):
            return

        if (event.ctrl and event.key == "c") or event.key == Key.ESC:
            self.done = True
            self.result = None
        elif event.key == Key.ENTER:
            self.done = True
            self.result = "".join(self.buffer)
        elif event.key == Key.BACKSPACE:
            if self.buffer:
                self.buffer.pop()
                self._erase_last()
        elif not event.ctrl and len(event.key) == 1 and event.key.isprintable():
            self.buffer.append(event.key)
            self.terminal.print_styled("*" if self.sensitive else event.key)

    def _erase_last(self) -> None:
        column = self.x + len(self.buffer)
        self.terminal.move_to(column, self.y)
        self.terminal.print_styled(" ")
        self.terminal.move_to(column, self.y)
