from .client import (
    OwnedDocument,
    PromptCallback,
    Response,
    fetch,
    parse_response,
    parse_response_header,
    read,
)
from .constants import Category, Status
from .tofu import SQLiteTrustStore, TofuVerifier, TrustStore

__all__ = [
    "fetch",
    "read",
    "parse_response",
    "parse_response_header",
    "OwnedDocument",
    "PromptCallback",
    "Response",
    "Category",
    "Status",
    "SQLiteTrustStore",
    "TofuVerifier",
    "TrustStore",
]
