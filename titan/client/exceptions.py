"""
Exceptions thrown by the Gemini client library.
"""


class ClientError(Exception):
    """Base Gemini client error."""


class InvalidURLError(ClientError):
    """Raised when an invalid URL is requested."""


class InvalidURLSchemeError(InvalidURLError):
    """Raised when a URL is requested with a scheme other than gemini."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"invalid URL scheme `{scheme}`")
        self.scheme = scheme


class NoHostnameError(InvalidURLError):
    """Raised when a URL has no host to connect to."""

    def __init__(self, url: str) -> None:
        super().__init__(f"no hostname in `{url}`")
        self.url = url


class InvalidDNSNameError(InvalidURLError):
    """Raised when the host of a URL is neither a DNS name nor an IP address."""


class ParseError(ClientError):
    """Base error for any parsing errors."""


class HeaderParseError(ParseError):
    """
    Raised when the header line could not be parsed.

    This error could indicate:
        * The server of the host is buggy.
        * The connection was cut before the header was complete.
    """


class InvalidStatusCodeError(ParseError):
    """Raised when the status of a header is not one of the known codes."""

    def __init__(self, code: int) -> None:
        super().__init__(f"invalid status code `{code}`")
        self.code = code


class BodyDecodeError(ParseError):
    """Raised when a text body cannot be decoded."""


class TooManyRedirectsError(ClientError):
    """Raised when a fetch takes more redirect or input round trips than allowed."""


class UnknownMetaError(ClientError):
    """Raised when a successful response carries a MIME type we cannot display."""

    def __init__(self, meta: str) -> None:
        super().__init__(f"unknown metatype `{meta}`")
        self.meta = meta


class NetworkError(ClientError):
    """Raised when the connection to the host fails."""


class CertError(ClientError):
    """Base error for certificate issues."""


class TlsError(CertError):
    """Raised when the TLS session with the host fails."""


class NoCertificatesPresentedError(CertError):
    """Raised when the host did not present a certificate."""


class CertNotValidForNameError(CertError):
    """
    Raised when the host presents a certificate other than the one recorded the first
    time we connected to it.
    """


class StoreError(ClientError):
    """Raised when the certificate store cannot be read or written."""


class InputCancelledError(ClientError):
    """Raised when the user declines to answer an input prompt."""
