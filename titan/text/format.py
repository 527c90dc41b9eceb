"""
Format text/gemini elements as text.
"""

from functools import singledispatch

from .constants import PREFORMATTED_FENCE
from .elements import (
    BareLink,
    Document,
    HeadingLine,
    ListItem,
    NamedLink,
    PreformattedText,
    QuoteLine,
    TextLine,
)


def format_gemini_text(lines: Document) -> str:
    """
    Format text/gemini elements in the canonical form of each line type.

    Parsing the result gives back the same elements.

    :param lines: text/gemini lines.
    :return: lines formatted as text.
    """
    return "".join(map(_format_line, lines))


@singledispatch
def _format_line(line: TextLine) -> str:
    """
    Format the line as text.

    Note that this is the base function, arbitrarily chosen as the first instance of the generic
    function. Doctests and documentation describes behaviour for all line types instead of only
    text lines.

    >>> _format_line(TextLine("Is this acceptable?"))
    'Is this acceptable?\\n'

    >>> _format_line(HeadingLine(2, "Section"))
    '## Section\\n'

    >>> _format_line(PreformattedText("py", "x = 1"))
    '```py\\nx = 1\\n```\\n'

    :param line: a text/gemini line.
    :return: line formatted as text.
    """
    return line.text + "\n"


@_format_line.register
def _(line: PreformattedText) -> str:
    return f"{PREFORMATTED_FENCE}{line.alt or ''}\n{line.text}\n{PREFORMATTED_FENCE}\n"


@_format_line.register
def _1(line: HeadingLine) -> str:
    return "#" * line.level + " " + line.heading + "\n"


@_format_line.register
def _2(line: NamedLink) -> str:
    return f"=> {line.url} {line.name}\n"


@_format_line.register
def _3(line: BareLink) -> str:
    return f"=> {line.url}\n"


@_format_line.register
def _4(line: ListItem) -> str:
    return "* " + line.item + "\n"


@_format_line.register
def _5(line: QuoteLine) -> str:
    return "> " + line.quote + "\n"
