"""
Elements of the text/gemini format.
"""

from dataclasses import dataclass
from typing import List, Optional, Union


@dataclass(frozen=True)
class NamedLink:
    """
    Link to a page with a label to show instead of the URL.

    Similar to a Markdown link: `[Hyper Kombucha Recipes](gemini://kom.bu.cha/hyper/)` is
    `=> gemini://kom.bu.cha/hyper/ Hyper Kombucha Recipes`. The URL part can be relative
    or absolute.

    Represented as a dataclass to add documentation: links are the most essential part
    of the web.
    """

    url: str
    name: str

    def __post_init__(self):
        """Validate link."""
        if "\n" in self.name:
            raise ValueError("link name cannot contain newlines")
        if "\n" in self.url:
            raise ValueError("link URL cannot contain newlines")
        if not self.url:
            raise ValueError("link URL is required")


@dataclass(frozen=True)
class HeadingLine:
    """
    Advanced text/gemini element specifying the header of new section.

    Levels are indicated by pound signs (or hashtags): the more pounds you put in,
    the higher the level. text/gemini knows three levels.

    Represented as a dataclass because the `level` field is not text but int.
    """

    level: int
    heading: str

    def __post_init__(self):
        """Validate heading line."""
        if not 1 <= self.level <= 3:
            raise ValueError("heading level must be between 1 and 3")
        if "\n" in self.heading:
            raise ValueError("heading text cannot contain newlines")


@dataclass(frozen=True)
class PreformattedText:
    """
    Block of text shown as-is, e.g. code or ASCII art.

    `text` holds the raw lines of the block joined by newlines. `alt` is whatever
    followed the opening fence, commonly a language name, or None.
    """

    alt: Optional[str]
    text: str


@dataclass(frozen=True)
class BareLink:
    """Link without a label; the URL itself is shown."""

    url: str


@dataclass(frozen=True)
class ListItem:
    item: str


@dataclass(frozen=True)
class QuoteLine:
    quote: str


@dataclass(frozen=True)
class TextLine:
    text: str

LINE = Union[
    TextLine, BareLink, NamedLink, PreformattedText, HeadingLine, ListItem, QuoteLine
]

Document = List[LINE]
