"""HTTP utilities public API (barrel module).

This package provides:
- The transport protocol and its httpx implementation
- The request dispatcher that runs one full round trip
- The outcome type every client call returns

Recommended import pattern for consumers:
    from afterbuy_client.utils.http import HttpxTransport, Outcome, FailureKind
"""

from .dispatch import XML_HEADERS, RequestDispatcher
from .outcome import Failure, FailureKind, Outcome
from .transport import (
    DEFAULT_TIMEOUT,
    HttpTransport,
    HttpxTransport,
    TransportResponse,
    create_timeout,
)

__all__ = [
    "RequestDispatcher",
    "XML_HEADERS",
    "Failure",
    "FailureKind",
    "Outcome",
    "DEFAULT_TIMEOUT",
    "HttpTransport",
    "HttpxTransport",
    "TransportResponse",
    "create_timeout",
]
