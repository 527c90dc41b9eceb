import enum

from .exceptions import InvalidStatusCodeError

LOGGER_NAME = "titan"

GEMINI_SCHEME = "gemini"

GEMINI_DEFAULT_PORT = 1965

# Redirect and input round trips allowed within a single fetch.
MAX_REDIRECTS = 5

MAX_META_LENGTH = 1024

GEMINI_MIME_TYPE = "text/gemini"

DEFAULT_URL = "gemini://gemini.circumlunar.space/docs/specification.gmi"


class Category(enum.Enum):
    """The first digit of a status code."""

    INPUT = 1
    SUCCESS = 2
    REDIRECT = 3
    TEMPORARY_FAILURE = 4
    PERMANENT_FAILURE = 5
    CERTIFICATE_REQUIRED = 6


class Status(enum.Enum):
    """
    Status of a Gemini response.

    The set is closed: use `Status.from_code` to convert a received value, which
    rejects anything outside the eighteen known codes.

    >>> Status.from_code(51)
    <Status.NOT_FOUND: 51>
    >>> Status.from_code(51).category
    <Category.PERMANENT_FAILURE: 5>
    """

    # Input statuses.
    INPUT = 10
    SENSITIVE_INPUT = 11

    # Success statuses.
    SUCCESS = 20

    # Redirect statuses.
    REDIRECT_TEMPORARY = 30
    REDIRECT_PERMANENT = 31

    # Temporary failure statuses.
    TEMPORARY_FAILURE = 40
    SERVER_UNAVAILABLE = 41
    CGI_ERROR = 42
    PROXY_ERROR = 43
    SLOW_DOWN = 44

    # Permanent failure statuses.
    PERMANENT_FAILURE = 50
    NOT_FOUND = 51
    GONE = 52
    PROXY_REQUEST_REFUSED = 53
    BAD_REQUEST = 59

    # Certificate required statuses.
    CLIENT_CERTIFICATE_REQUIRED = 60
    CERTIFICATE_NOT_AUTHORISED = 61
    CERTIFICATE_NOT_VALID = 62

    @classmethod
    def from_code(cls, code: int) -> "Status":
        """
        Look up the status for a two-digit code.

        :param code: the status code received from the server.
        :raises InvalidStatusCodeError: the code is not a known status.
        """
        try:
            return cls(code)
        except ValueError:
            raise InvalidStatusCodeError(code)

    @property
    def code(self) -> int:
        """The status code as an int."""
        return self.value

    @property
    def category(self) -> Category:
        return Category(self.value // 10)
