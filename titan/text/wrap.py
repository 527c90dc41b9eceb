"""
Word wrapping of text/gemini documents into screen lines.

Each screen line remembers whether it is the first one of its source line, which
decides its prefix when drawn: a list item shows a bullet only on its first row.

Widths are terminal columns: wide East Asian characters take two, combining marks
none.
"""
import re
import unicodedata
from functools import singledispatch
from typing import Callable, Iterator, List, NamedTuple

from .constants import MIN_WIDTH
from .elements import (
    LINE,
    BareLink,
    Document,
    HeadingLine,
    ListItem,
    NamedLink,
    PreformattedText,
    QuoteLine,
    TextLine,
)

WORD_REGEX = re.compile(r"\S+")


class WrappedLine(NamedTuple):
    """A screen line: a piece of a source line and whether it is the first piece."""

    line: LINE
    first: bool


WrappedDocument = List[WrappedLine]


def _char_width(char: str) -> int:
    if unicodedata.combining(char):
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def text_width(text: str) -> int:
    """
    The number of columns `text` takes up on screen.

    >>> text_width("abc"), text_width("日本"), text_width("cafe\\u0301")
    (3, 4, 4)
    """
    return sum(map(_char_width, text))


def clip(text: str, width: int) -> str:
    """
    The longest start of `text` that fits in `width` columns.

    >>> clip("日本語", 5)
    '日本'
    """
    columns = 0
    for index, char in enumerate(text):
        columns += _char_width(char)
        if columns > width:
            return text[:index]
    return text


def _split_word(text: str, start: int, end: int, width: int) -> int:
    # End of the longest run from `start` fitting in `width`, at least one character.
    columns = 0
    for index in range(start, end):
        columns += _char_width(text[index])
        if columns > width and index > start:
            return index
    return end


def wrap_text(text: str, width: int) -> List[str]:
    """
    Greedily pack the words of `text` into pieces of at most `width` columns.

    A piece runs from the start of its first word to the end of its last word, so it is
    always a substring of `text`. Words wider than `width` are split; a character wider
    than `width` gets a piece of its own.

    >>> wrap_text("alpha beta gamma", 10)
    ['alpha beta', 'gamma']
    >>> wrap_text("  spaced   out  ", 9)
    ['spaced', 'out']
    >>> wrap_text("abcdefgh ij", 3)
    ['abc', 'def', 'gh', 'ij']
    >>> wrap_text("日本語 テキスト", 6)
    ['日本語', 'テキス', 'ト']
    >>> wrap_text("   ", 4)
    []

    :param text: the text to wrap.
    :param width: the maximum width of a piece, at least 1.
    :return: the pieces, empty if the text has no words.
    """
    pieces: List[str] = []
    start = end = -1
    for match in WORD_REGEX.finditer(text):
        word_start, word_end = match.span()

        # Words that can never fit get rows of their own.
        while text_width(text[word_start:word_end]) > width:
            if start >= 0:
                pieces.append(text[start:end])
                start = -1
            split = _split_word(text, word_start, word_end, width)
            pieces.append(text[word_start:split])
            word_start = split
        if word_start == word_end:
            continue

        if start < 0:
            start, end = word_start, word_end
        elif text_width(text[start:word_end]) <= width:
            end = word_end
        else:
            pieces.append(text[start:end])
            start, end = word_start, word_end

    if start >= 0:
        pieces.append(text[start:end])
    return pieces


def _wrap(
    text: str, width: int, make: Callable[[str], LINE]
) -> Iterator[WrappedLine]:
    # An empty payload still takes up a row so the source line is represented.
    pieces = wrap_text(text, max(width, 1)) or [""]
    for index, piece in enumerate(pieces):
        yield WrappedLine(make(piece), index == 0)


@singledispatch
def _wrap_line(line: TextLine, width: int) -> Iterator[WrappedLine]:
    """
    Wrap a single line, leaving room for the prefix its type is drawn with.

    Note that this is the base function, arbitrarily chosen as the first instance of the
    generic function.
    """
    return _wrap(line.text, width, TextLine)


@_wrap_line.register
def _(line: BareLink, width: int) -> Iterator[WrappedLine]:
    return iter([WrappedLine(line, True)])


@_wrap_line.register
def _1(line: NamedLink, width: int) -> Iterator[WrappedLine]:
    # "→ " plus a column of slack.
    return _wrap(line.name, width - 3, lambda piece: NamedLink(line.url, piece))


@_wrap_line.register
def _2(line: PreformattedText, width: int) -> Iterator[WrappedLine]:
    # Preformatted text is never wrapped, one row per raw line.
    for index, raw_line in enumerate(line.text.split("\n")):
        yield WrappedLine(PreformattedText(line.alt, raw_line), index == 0)


@_wrap_line.register
def _3(line: HeadingLine, width: int) -> Iterator[WrappedLine]:
    # "# ", "## " or "### ". At the narrowest width "### " leaves no room, and the
    # heading gets one column per row anyway.
    return _wrap(
        line.heading,
        width - line.level - 1,
        lambda piece: HeadingLine(line.level, piece),
    )


@_wrap_line.register
def _4(line: ListItem, width: int) -> Iterator[WrappedLine]:
    return _wrap(line.item, width - 2, ListItem)


@_wrap_line.register
def _5(line: QuoteLine, width: int) -> Iterator[WrappedLine]:
    return _wrap(line.quote, width - 2, QuoteLine)


def word_wrap(document: Document, width: int) -> WrappedDocument:
    """
    Wrap a document into screen lines of at most `width` columns, prefixes included.

    >>> word_wrap([ListItem("alpha beta gamma")], 12)
    [WrappedLine(line=ListItem(item='alpha beta'), first=True),
        WrappedLine(line=ListItem(item='gamma'), first=False)]

    :param document: the parsed document.
    :param width: the number of columns available.
    :return: the screen lines, in document order.
    :raises ValueError: the width is too small for the widest prefix.
    """
    if width < MIN_WIDTH:
        raise ValueError(f"width must be at least {MIN_WIDTH}")

    wrapped: WrappedDocument = []
    for line in document:
        wrapped.extend(_wrap_line(line, width))
    return wrapped
