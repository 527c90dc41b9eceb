"""
Gemini client library for Python.
"""

import ipaddress
import logging
import socket
import ssl
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Tuple
from urllib.parse import urlsplit

import idna

from . import constants, exceptions, tofu, urls
from ..text import elements, parser


logger = logging.getLogger(constants.LOGGER_NAME)

# Called with the prompt sent by the server and whether the answer is sensitive.
# Returns the answer, or None when the user declines to answer.
PromptCallback = Callable[[str, bool], Optional[str]]


class Response:
    """
    A Gemini response: the header, which defines the result of the request, and the
    body that follows it.

    The body is a view on the tail of the received bytes; nothing is copied.
    """

    status: constants.Status
    meta: str
    body: memoryview

    def __init__(self, status: constants.Status, meta: str, body: memoryview) -> None:
        super().__init__()
        self.status = status
        self.meta = meta
        self.body = body

    def __repr__(self):
        return f"<Response {self.status}:{self.meta}>"

    def __str__(self) -> str:
        return f"{self.status_code} {self.meta}"

    @property
    def status_code(self) -> int:
        """The status code as an int."""
        return self.status.code

    @property
    def category(self) -> constants.Category:
        return self.status.category

    @property
    def mime_type(self) -> str:
        """
        The MIME type of a successful response, without parameters.

        An empty meta means text/gemini.
        """
        mime_type = self.meta.split(";", maxsplit=1)[0].strip().lower()
        return mime_type or constants.GEMINI_MIME_TYPE

    @property
    def charset(self) -> str:
        """The charset parameter of a successful response, UTF-8 if not given."""
        for param in self.meta.split(";")[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"')
        return "utf-8"


class OwnedDocument:
    """
    Everything derived from one response: the received bytes, the parsed response and,
    for successful text responses, the parsed document.

    `document` is None when the server answered with a status that has no body to show,
    e.g. a failure. `url` is where the response came from, after redirects and input.
    """

    url: str
    raw: bytes
    response: Response
    document: Optional[elements.Document]

    def __init__(
        self,
        url: str,
        raw: bytes,
        response: Response,
        document: Optional[elements.Document],
    ) -> None:
        super().__init__()
        self.url = url
        self.raw = raw
        self.response = response
        self.document = document

    def __repr__(self):
        return f"<OwnedDocument {self.url} {self.response}>"

    @property
    def is_document(self) -> bool:
        return self.document is not None


def tls_context() -> ssl.SSLContext:
    """
    Create an SSL/TLS context that matches Gemini requirements:
        * TLS 1.2 or better.
        * Self-signed certificates are accepted; trust is decided by the TOFU verifier
          once the handshake is done.
    """
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def parse_response_header(data: bytes) -> Tuple[constants.Status, str, memoryview]:
    """
    Parse the header line of the received input.

    >>> status, meta, body = parse_response_header(b"20 text/gemini\\r\\n# Hello\\n")
    >>> status, meta, bytes(body)
    (<Status.SUCCESS: 20>, 'text/gemini', b'# Hello\\n')

    >>> parse_response_header(b"20text/gemini\\r\\n")
    Traceback (most recent call last):
        ...
    titan.client.exceptions.HeaderParseError: expected a space after the status

    :param data: the received bytes.
    :return: a tuple of the status, the meta line and the remaining input that is not
        part of the header.
    :raises HeaderParseError: the header is malformed.
    :raises InvalidStatusCodeError: the status is not a known status.
    """
    if len(data) < 3 or not data[:2].isdigit():
        raise exceptions.HeaderParseError("status is not two digits")

    status = constants.Status.from_code(int(data[:2]))

    if data[2:3] != b" ":
        raise exceptions.HeaderParseError("expected a space after the status")

    # Determine the meta line, which is the rest of the line.
    end_index = data.find(b"\r", 3, 3 + constants.MAX_META_LENGTH + 1)
    if end_index < 0 or data[end_index + 1 : end_index + 2] != b"\n":
        raise exceptions.HeaderParseError("meta is too long or not terminated by CRLF")

    try:
        meta = data[3:end_index].decode("utf-8")
    except UnicodeDecodeError:
        raise exceptions.HeaderParseError("meta is not valid UTF-8")

    return status, meta, memoryview(data)[end_index + 2 :]


def parse_response(data: bytes) -> Response:
    """
    Parse the received bytes as a response.

    >>> parse_response(b"51 Not found\\r\\n")
    <Response Status.NOT_FOUND:Not found>
    """
    status, meta, body = parse_response_header(data)
    return Response(status, meta, body)


def _dns_name(hostname: str) -> str:
    """
    The ASCII form of the host, as used for the connection and the trust store.

    >>> _dns_name("bücher.example")
    'xn--bcher-kva.example'
    >>> _dns_name("127.0.0.1")
    '127.0.0.1'
    """
    try:
        ipaddress.ip_address(hostname)
        return hostname
    except ValueError:
        pass

    try:
        return idna.encode(hostname, uts46=True).decode("ascii")
    except idna.IDNAError as idna_error:
        raise exceptions.InvalidDNSNameError(
            f"invalid DNS name `{hostname}`"
        ) from idna_error


def _parse_url(url: str) -> Tuple[str, int]:
    """
    Parse a Gemini URL for lower-level network communication.

    >>> _parse_url("gemini://foo.dev/users/matt/index.gmi")
    ('foo.dev', 1965)

    >>> _parse_url("gemini://foo.dev:4242/foo/bar")
    ('foo.dev', 4242)

    :param url: a Gemini URL.
    :return: a tuple of the host and port of the URL. The port defaults to the default Gemini port.
    """
    try:
        parsed_url = urlsplit(url)
        port = parsed_url.port
    except ValueError as url_error:
        raise exceptions.InvalidURLError(f"invalid URL `{url}`: {url_error}")

    if parsed_url.scheme != constants.GEMINI_SCHEME:
        raise exceptions.InvalidURLSchemeError(parsed_url.scheme)
    if not parsed_url.hostname:
        raise exceptions.NoHostnameError(url)

    host = _dns_name(parsed_url.hostname)
    return host, port or constants.GEMINI_DEFAULT_PORT


def _send(secure_socket: ssl.SSLSocket, data: bytes):
    sent = 0
    while sent < len(data):
        completed = secure_socket.send(data[sent:])
        sent += completed


def _receive(secure_socket: ssl.SSLSocket) -> bytes:
    """Read until the server closes the connection."""
    chunks = []
    while True:
        try:
            next_payload = secure_socket.recv(4096)
        except (ConnectionAbortedError, ssl.SSLZeroReturnError, ssl.SSLEOFError):
            # Servers close the connection to mark the end of the response.
            logger.debug("connection closed by server")
            break
        if not next_payload:
            break
        chunks.append(next_payload)
    return b"".join(chunks)


@contextmanager
def _secure_socket(
    host: str, port: int, verifier: tofu.TofuVerifier
) -> Iterator[ssl.SSLSocket]:
    """
    Connect to the host over TLS and check its certificate against the trust store
    before handing out the socket.
    """
    logger.debug("making request to %s:%d", host, port)
    context = tls_context()
    try:
        with socket.create_connection((host, port)) as sock:
            with context.wrap_socket(sock, server_hostname=host) as secure_sock:
                certificate = secure_sock.getpeercert(binary_form=True)
                verifier.verify(host, [certificate] if certificate else [])
                yield secure_sock
    except ssl.SSLError as ssl_error:
        raise exceptions.TlsError(f"TLS error with {host}:{port}: {ssl_error}")
    except OSError as os_error:
        raise exceptions.NetworkError(f"request to {host}:{port} failed: {os_error}")


def read(url: str, verifier: tofu.TofuVerifier) -> bytes:
    """
    Send the request for `url` and read the whole response.

    :param url: a Gemini URL.
    :param verifier: the TOFU verifier deciding whether to trust the server.
    :return: the raw response, header included.
    """
    host, port = _parse_url(url)
    with _secure_socket(host, port, verifier) as secure_sock:
        _send(secure_sock, urls.request_form(url).encode("utf-8") + b"\r\n")
        return _receive(secure_sock)


def _parse_body(response: Response) -> elements.Document:
    """Parse the body of a successful response as a document."""
    mime_type = response.mime_type

    if mime_type.startswith(constants.GEMINI_MIME_TYPE):
        try:
            text = str(response.body, "utf-8")
        except UnicodeDecodeError as decode_error:
            raise exceptions.BodyDecodeError(
                f"text/gemini body is not valid UTF-8: {decode_error}"
            )
        return parser.parse_gemini_text(text)

    if mime_type.startswith("text/"):
        # Other text types are shown as a single preformatted block.
        try:
            text = str(response.body, response.charset)
        except (LookupError, UnicodeDecodeError) as decode_error:
            raise exceptions.BodyDecodeError(
                f"cannot decode {mime_type} body: {decode_error}"
            )
        return [elements.PreformattedText(None, text)]

    raise exceptions.UnknownMetaError(response.meta)


def fetch(
    url: str, verifier: tofu.TofuVerifier, prompt: Optional[PromptCallback] = None
) -> OwnedDocument:
    """
    Fetch the page at `url`, following redirects and answering input requests.

    :param url: an absolute Gemini URL.
    :param verifier: the TOFU verifier deciding whether to trust servers.
    :param prompt: asks the user for input when the server requests it.
    :return: the response together with its document. Responses other than success
        come back without a document.
    :raises TooManyRedirectsError: more than `MAX_REDIRECTS` redirects or inputs.
    :raises InputCancelledError: the user did not answer an input request.
    :raises ClientError: the request failed; see the exceptions module.
    """
    for depth in range(constants.MAX_REDIRECTS):
        logger.debug("fetching %s (depth %d)", url, depth)
        raw = read(url, verifier)
        response = parse_response(raw)
        logger.debug("%s answered %s", url, response)

        if response.category == constants.Category.SUCCESS:
            logger.info("loaded %s (%s)", url, response.meta)
            return OwnedDocument(url, raw, response, _parse_body(response))

        if response.category == constants.Category.REDIRECT:
            target = response.meta.strip()
            if not target:
                raise exceptions.HeaderParseError("redirect without a target URL")
            url = urls.resolve(url, target)
            logger.debug("following redirect to %s", url)
        elif response.category == constants.Category.INPUT:
            sensitive = response.status == constants.Status.SENSITIVE_INPUT
            answer = prompt(response.meta, sensitive) if prompt else None
            if answer is None:
                raise exceptions.InputCancelledError("input cancelled")
            url = urls.with_query(url, answer)
        else:
            return OwnedDocument(url, raw, response, None)

    raise exceptions.TooManyRedirectsError("too many redirects")
