"""
Parser for text/gemini documents.

>>> parse_gemini_text("# Welcome to Geminispace!\\n\\n=> users/ Users directory\\n")
[HeadingLine(level=1, heading='Welcome to Geminispace!'),
    TextLine(text=''),
    NamedLink(url='users/', name='Users directory')]
"""
import logging
import re
from typing import Iterator, List, Optional

from .constants import LOGGER_NAME, PREFORMATTED_FENCE
from . import elements

logger = logging.getLogger(LOGGER_NAME)


LINK_REGEX = re.compile(r"=>\s*(?P<url>\S*)\s*(?P<name>.*)", re.DOTALL)

HEADING_PREFIXES = (("###", 3), ("##", 2), ("#", 1))
LIST_ITEM_PREFIX = "* "
QUOTE_PREFIX = ">"
LINK_PREFIX = "=>"


def _stream_lines(text: str) -> Iterator[str]:
    """
    Split text into lines on demand. Lines end in "\\n" or the end of the text.
    Carriage returns at the end of a line are dropped, so "\\r\\n" endings work; one
    inside a line is part of it.

    >>> iter = _stream_lines("foo\\r\\nbar\\n")
    >>> next(iter)
    'foo'
    >>> next(iter)
    'bar'
    >>> next(iter)
    Traceback (most recent call last):
        ...
    StopIteration

    >>> list(_stream_lines("a\\rb\\n\\nc\\r"))
    ['a\\rb', '', 'c']

    :param text: the text to split.
    :return: a generated list of lines.
    """

    start = 0

    def _index(needle: str) -> Optional[int]:
        try:
            return text.index(needle, start)
        except ValueError:
            return None

    line_index = _index("\n")
    while line_index is not None:
        yield text[start:line_index].rstrip("\r")
        start = line_index + 1
        line_index = _index("\n")

    # Deal with text that does not end in a newline.
    if start < len(text):
        yield text[start:].rstrip("\r")


def _skip_spaces(line: str, prefix: str) -> str:
    return line[len(prefix) :].lstrip(" ")


def _parse_line(line: str) -> elements.LINE:
    """
    Parse a single line outside of a preformatted block.

    >>> _parse_line("=> gemini://hello.com world")
    NamedLink(url='gemini://hello.com', name='world')
    >>> _parse_line("=> hello.com ")
    BareLink(url='hello.com')
    >>> _parse_line("#  header")
    HeadingLine(level=1, heading='header')
    >>> _parse_line("*not a list")
    TextLine(text='*not a list')

    :param line: a line without its terminator.
    :return: the parsed line.
    """
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return elements.HeadingLine(level, _skip_spaces(line, prefix))

    if line.startswith(LIST_ITEM_PREFIX):
        return elements.ListItem(_skip_spaces(line, LIST_ITEM_PREFIX))

    if line.startswith(QUOTE_PREFIX):
        return elements.QuoteLine(_skip_spaces(line, QUOTE_PREFIX))

    if line.startswith(LINK_PREFIX):
        match = LINK_REGEX.match(line)
        # The pattern matches any line starting with the link prefix.
        assert match is not None
        url, name = match.group("url"), match.group("name")
        if not name:
            return elements.BareLink(url)
        return elements.NamedLink(url, name)

    # No other matches; regular text line.
    return elements.TextLine(line)


def parse_gemini_text(text: str) -> elements.Document:
    """
    Parse Gemini text as a list of line types.

    The `LINE` type is a union of all possible line types. Parsing never fails: lines
    that are not anything else are text.

    >>> parse_gemini_text("```py\\n"
    ...   "for i in x:\\n"
    ...   "  print(i)\\n"
    ...   "```\\n"
    ...   "after")
    [PreformattedText(alt='py', text='for i in x:\\n  print(i)'),
        TextLine(text='after')]

    :param text: the gemini text, already decoded.
    :return: a list of line types.
    """

    parsed_lines: List[elements.LINE] = []
    preformatting: bool = False
    preformatting_alt: Optional[str] = None
    preformatting_lines: List[str] = []
    for line in _stream_lines(text):
        # Handle preformatted trigger.
        if line.startswith(PREFORMATTED_FENCE):
            if preformatting:
                parsed_lines.append(
                    elements.PreformattedText(
                        preformatting_alt, "\n".join(preformatting_lines)
                    )
                )
            else:
                preformatting_alt = line[len(PREFORMATTED_FENCE) :] or None
                preformatting_lines = []
            preformatting = not preformatting
            continue

        # Preformatting prevents parsing: just stuff into the block.
        if preformatting:
            preformatting_lines.append(line)
            continue

        parsed_lines.append(_parse_line(line))

    # An unclosed block runs to the end of the text.
    if preformatting:
        logger.debug("preformatted block was not closed")
        parsed_lines.append(
            elements.PreformattedText(preformatting_alt, "\n".join(preformatting_lines))
        )

    return parsed_lines
