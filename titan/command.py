"""
Commands produced by the viewport and typed on the command line.
"""

from dataclasses import dataclass
from typing import Union
from urllib.parse import urlsplit


class CommandError(Exception):
    """Raised for command line input that is not a valid command."""


@dataclass(frozen=True)
class Exit:
    """Leave the client."""


@dataclass(frozen=True)
class Load:
    """Load an absolute URL."""

    url: str


@dataclass(frozen=True)
class TryLoad:
    """Load a link target, which may be relative to the current page."""

    url: str


Command = Union[Exit, Load, TryLoad]


def gemini_url(target: str) -> str:
    """
    Turn a typed address into an absolute URL, assuming gemini when no scheme is given.

    >>> gemini_url("foo.dev/docs/")
    'gemini://foo.dev/docs/'
    >>> gemini_url("localhost:1965")
    'gemini://localhost:1965'
    >>> gemini_url("gemini://foo.dev/")
    'gemini://foo.dev/'

    :raises CommandError: the address has no host or an invalid port.
    """
    if "://" not in target:
        target = "gemini://" + target

    try:
        parsed = urlsplit(target)
        # Accessing the port validates it.
        parsed.port  # pylint: disable=pointless-statement
    except ValueError:
        raise CommandError(f"invalid URL: {target}")
    if not parsed.hostname:
        raise CommandError(f"invalid URL: {target}")
    return target


def parse_command(text: str) -> Command:
    """
    Parse a line typed on the command line.

    >>> parse_command("q")
    Exit()
    >>> parse_command("g foo.dev")
    Load(url='gemini://foo.dev')

    :param text: the line, without the leading colon.
    :return: the command.
    :raises CommandError: the line is not a command.
    """
    tokens = text.split()
    if not tokens:
        raise CommandError("unknown command: ")

    name, arguments = tokens[0], tokens[1:]
    if name == "q":
        return Exit()
    if name == "g":
        if not arguments:
            raise CommandError("missing URL")
        return Load(gemini_url(arguments[0]))
    raise CommandError(f"unknown command: {name}")
