"""
The fetch, view, command loop.
"""

import logging
from typing import Optional

from .client import client, constants, exceptions, tofu, urls
from .command import Command, Exit, Load, TryLoad
from .terminal import Terminal
from .view import Viewport

logger = logging.getLogger(constants.LOGGER_NAME)


class App:
    """
    Interactive client: shows one page at a time and loads whatever the user asks for
    next.

    `url` is the page being shown, None until a page has been loaded. Links on the page
    resolve against it.
    """

    url: Optional[str]
    view: Viewport

    def __init__(self, verifier: tofu.TofuVerifier, terminal: Terminal) -> None:
        super().__init__()
        self.verifier = verifier
        self.terminal = terminal
        self.url = None
        self.view = Viewport(terminal, [])

    def run(self, url: str) -> None:
        """Load `url` and keep going until the user exits."""
        target = url
        while True:
            error = self.load(target)
            command = self.view.run(error)
            if isinstance(command, Exit):
                logger.info("exiting")
                return
            target = self.target(command)

    def target(self, command: Command) -> str:
        """The URL to load for a load command."""
        if isinstance(command, Load):
            return command.url
        if isinstance(command, TryLoad) and self.url is not None:
            return urls.resolve(self.url, command.url)
        return command.url

    def load(self, url: str) -> Optional[str]:
        """
        Fetch `url` and show it.

        :return: the message to show on the command row when there is no new document
            to show; the previous page stays on screen.
        """
        try:
            page = client.fetch(url, self.verifier, self.view.ask)
        except exceptions.InputCancelledError:
            logger.info("input for %s cancelled", url)
            return None
        except exceptions.ClientError as client_error:
            logger.warning("failed to load %s: %s", url, client_error)
            return str(client_error)

        if page.document is None:
            response = page.response
            logger.info("%s answered %s", page.url, response)
            return str(response)

        self.url = page.url
        self.view = Viewport(self.terminal, page.document, page.url)
        return None
