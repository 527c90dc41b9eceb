"""
Tests for the fetch, view, command loop.
"""
from typing import Optional
from unittest.mock import patch, MagicMock

from titan.app import App
from titan.client import OwnedDocument, exceptions, parse_response
from titan.command import Load, TryLoad
from titan.terminal import Color, Key, KeyEvent
from titan.text import parse_gemini_text
from titan.text.elements import TextLine

from conftest import FakeTerminal


def _page(url: str, raw: bytes) -> OwnedDocument:
    response = parse_response(raw)
    document: Optional[list] = None
    if response.status_code == 20:
        document = parse_gemini_text(str(response.body, "utf-8"))
    return OwnedDocument(url, raw, response, document)


def _errors(terminal: FakeTerminal):
    return [
        call[1]
        for call in terminal.calls
        if call[0] == "print_styled" and call[2] == Color.DARK_RED
    ]


@patch("titan.app.client.fetch")
def test_follow_relative_link(fetch: MagicMock, terminal: FakeTerminal):
    fetch.side_effect = [
        _page("gemini://foo.dev/docs/", b"20 text/gemini\r\n=> faq.gmi FAQ\n"),
        _page("gemini://foo.dev/docs/faq.gmi", b"20 text/gemini\r\nanswers\n"),
    ]
    terminal.events.append(KeyEvent(Key.ENTER))
    terminal.type("q")
    verifier = MagicMock()
    app = App(verifier, terminal)

    app.run("gemini://foo.dev/docs/")

    urls = [fetch_call.args[0] for fetch_call in fetch.call_args_list]
    assert urls == ["gemini://foo.dev/docs/", "gemini://foo.dev/docs/faq.gmi"]
    assert fetch.call_args_list[0].args[1] is verifier
    assert app.url == "gemini://foo.dev/docs/faq.gmi"
    assert app.view.document == [TextLine("answers")]
    assert terminal.row(app.view.status_row) == "gemini://foo.dev/docs/faq.gmi"


@patch("titan.app.client.fetch")
def test_links_resolve_against_final_url(fetch: MagicMock, terminal: FakeTerminal):
    """After a redirect, links are relative to where the page came from."""
    fetch.return_value = _page("gemini://bar.dev/new/", b"20 text/gemini\r\n")
    app = App(MagicMock(), terminal)
    app.load("gemini://foo.dev/old/")

    assert app.target(TryLoad("page.gmi")) == "gemini://bar.dev/new/page.gmi"
    assert app.target(TryLoad("gemini://baz.dev/")) == "gemini://baz.dev/"
    assert app.target(Load("gemini://qux.dev/")) == "gemini://qux.dev/"


@patch("titan.app.client.fetch")
def test_error_keeps_previous_page(fetch: MagicMock, terminal: FakeTerminal):
    fetch.side_effect = [
        _page("gemini://foo.dev/", b"20 text/gemini\r\nhome\n"),
        exceptions.NetworkError("request to bar.dev:1965 failed"),
    ]
    terminal.type(":g bar.dev")
    terminal.events.append(KeyEvent(Key.ENTER))
    terminal.type("q")
    app = App(MagicMock(), terminal)

    app.run("gemini://foo.dev/")

    assert _errors(terminal) == ["request to bar.dev:1965 failed"]
    assert app.url == "gemini://foo.dev/"
    assert app.view.document == [TextLine("home")]


@patch("titan.app.client.fetch")
def test_first_load_fails(fetch: MagicMock, terminal: FakeTerminal):
    fetch.side_effect = exceptions.CertNotValidForNameError("certificate mismatch")
    terminal.type("q")
    app = App(MagicMock(), terminal)

    app.run("gemini://foo.dev/")

    assert _errors(terminal) == ["certificate mismatch"]
    assert app.url is None
    assert app.view.document == []


@patch("titan.app.client.fetch")
def test_failure_status_is_shown(fetch: MagicMock, terminal: FakeTerminal):
    fetch.return_value = _page("gemini://foo.dev/gone", b"51 Not found\r\n")
    terminal.type("q")
    app = App(MagicMock(), terminal)

    app.run("gemini://foo.dev/gone")

    assert _errors(terminal) == ["51 Not found"]
    assert app.url is None


@patch("titan.app.client.fetch")
def test_cancelled_input_is_silent(fetch: MagicMock, terminal: FakeTerminal):
    fetch.side_effect = exceptions.InputCancelledError("input cancelled")
    terminal.type("q")
    app = App(MagicMock(), terminal)

    app.run("gemini://foo.dev/search")

    assert _errors(terminal) == []


@patch("titan.app.client.fetch")
def test_prompt_reads_from_command_row(fetch: MagicMock, terminal: FakeTerminal):
    def fake_fetch(url, verifier, prompt):
        answer = prompt("Your name?", False)
        return _page(f"{url}?{answer}", b"20 text/gemini\r\nhi\n")

    fetch.side_effect = fake_fetch
    terminal.type("tim")
    terminal.events.append(KeyEvent(Key.ENTER))
    terminal.type("q")
    app = App(MagicMock(), terminal)

    app.run("gemini://foo.dev/name")

    assert ("print_styled", "Your name? ", None, False) in terminal.calls
    assert app.url == "gemini://foo.dev/name?tim"
