"""
text/gemini parsing, formatting and wrapping
"""

from .constants import MIN_WIDTH
from .elements import (
    BareLink,
    Document,
    HeadingLine,
    LINE,
    ListItem,
    NamedLink,
    PreformattedText,
    QuoteLine,
    TextLine,
)
from .format import format_gemini_text
from .parser import parse_gemini_text
from .wrap import WrappedDocument, WrappedLine, clip, text_width, word_wrap

__all__ = [
    "parse_gemini_text",
    "format_gemini_text",
    "word_wrap",
    "text_width",
    "clip",
    "WrappedLine",
    "WrappedDocument",
    "BareLink",
    "NamedLink",
    "HeadingLine",
    "ListItem",
    "QuoteLine",
    "TextLine",
    "PreformattedText",
    "Document",
    "LINE",
    "MIN_WIDTH",
]
