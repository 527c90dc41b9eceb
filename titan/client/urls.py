"""
Gemini URL handling on top of urllib.
"""

import urllib.parse
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from . import constants

# Teach urllib that gemini URLs have a host and resolve relative references.
if constants.GEMINI_SCHEME not in urllib.parse.uses_relative:
    urllib.parse.uses_relative.append(constants.GEMINI_SCHEME)
if constants.GEMINI_SCHEME not in urllib.parse.uses_netloc:
    urllib.parse.uses_netloc.append(constants.GEMINI_SCHEME)


def resolve(base: str, target: str) -> str:
    """
    Resolve a possibly relative reference against the URL it was found on.

    >>> resolve("gemini://foo.dev/docs/index.gmi", "faq.gmi")
    'gemini://foo.dev/docs/faq.gmi'
    >>> resolve("gemini://foo.dev/docs/", "/")
    'gemini://foo.dev/'
    >>> resolve("gemini://foo.dev/docs/", "gemini://bar.dev/")
    'gemini://bar.dev/'
    """
    return urljoin(base, target)


def with_query(url: str, query: str) -> str:
    """
    Replace the query of the URL with the percent-encoded `query`.

    >>> with_query("gemini://foo.dev/search?old", "hello world")
    'gemini://foo.dev/search?hello%20world'
    """
    return urlunsplit(urlsplit(url)._replace(query=quote(query, safe="")))


def request_form(url: str) -> str:
    """
    The URL as sent to the server: normalised by urllib and without a fragment.

    >>> request_form("GEMINI://foo.dev/a#section")
    'gemini://foo.dev/a'
    """
    return urlunsplit(urlsplit(url)._replace(fragment=""))
