"""Error mapping -- turns every failure source into one :class:`ErrorResult`.

Four kinds of failure can happen while sending a message:

1. **Build errors** -- the endpoint URL or the JSON body could not be
   produced (:class:`~telesend.exceptions.BuildError`).  Reported with the
   builder's own message.
2. **Transport errors** -- :mod:`httpx` could not complete the exchange.
   These are classified into a closed set of :class:`TransportErrorKind`
   values, each with a fixed description from :data:`ERROR_MESSAGES`.
3. **Remote errors** -- Telegram answered with a non-200 status.
4. **Remote decode errors** -- the non-200 body was not the expected JSON.

Cases 3 and 4 are handled by :func:`telesend.client.response.interpret`;
this module covers 1 and 2.
"""

from __future__ import annotations

import enum
import socket
import ssl
from typing import Any, Iterator

import httpx

from telesend.exceptions import BuildError, TelesendError, TransportError
from telesend.models import ErrorResult
from telesend.status_codes import ERROR_INTERNAL_ERROR


class TransportErrorKind(str, enum.Enum):
    """Closed set of transport failure categories."""

    BAD_CLIENT_CERTIFICATE = "bad_client_certificate"
    BAD_SERVER_CERTIFICATE = "bad_server_certificate"
    CLIENT_INITIALIZATION = "client_initialization"
    CONNECTION_FAILED = "connection_failed"
    INVALID_CONTENT_ENCODING = "invalid_content_encoding"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_REQUEST = "invalid_request"
    IO = "io"
    NAME_RESOLUTION = "name_resolution"
    PROTOCOL_VIOLATION = "protocol_violation"
    REQUEST_BODY_NOT_REWINDABLE = "request_body_not_rewindable"
    TIMEOUT = "timeout"
    TLS_ENGINE = "tls_engine"
    TOO_MANY_REDIRECTS = "too_many_redirects"
    UNKNOWN = "unknown"


UNKNOWN_ERROR_MESSAGE = "Unknown error"

ERROR_MESSAGES: dict[TransportErrorKind, str] = {
    TransportErrorKind.BAD_CLIENT_CERTIFICATE: "A problem occurred with the local certificate",
    TransportErrorKind.BAD_SERVER_CERTIFICATE: "The server certificate could not be validated",
    TransportErrorKind.CLIENT_INITIALIZATION: "The HTTP client failed to initialize",
    TransportErrorKind.CONNECTION_FAILED: "Failed to connect to the server",
    TransportErrorKind.INVALID_CONTENT_ENCODING: (
        "The server either returned a response using an unknown or unsupported "
        "encoding format, or the response encoding was malformed"
    ),
    TransportErrorKind.INVALID_CREDENTIALS: "Provided authentication credentials were rejected by the server",
    TransportErrorKind.INVALID_REQUEST: "The request to be sent was invalid and could not be sent.",
    TransportErrorKind.IO: "An I/O error either sending the request or reading the response.",
    TransportErrorKind.NAME_RESOLUTION: "Failed to resolve a host name",
    TransportErrorKind.PROTOCOL_VIOLATION: "The server made an unrecoverable HTTP protocol violation",
    TransportErrorKind.REQUEST_BODY_NOT_REWINDABLE: "Not able to rewind the body stream",
    TransportErrorKind.TIMEOUT: "A request or operation took longer than the configured timeout time",
    TransportErrorKind.TLS_ENGINE: "An error occurred in the secure socket engine",
    TransportErrorKind.TOO_MANY_REDIRECTS: "Number of redirects hit the maximum configured amount.",
}


def get_error_str(kind: Any) -> str:
    """Return the fixed description for a transport failure category.

    Total: :attr:`TransportErrorKind.UNKNOWN` and anything that is not a
    known category resolve to :data:`UNKNOWN_ERROR_MESSAGE`.

    Args:
        kind: A :class:`TransportErrorKind` (or its string value).

    Returns:
        The human-readable description.
    """
    try:
        kind = TransportErrorKind(kind)
    except ValueError:
        return UNKNOWN_ERROR_MESSAGE
    return ERROR_MESSAGES.get(kind, UNKNOWN_ERROR_MESSAGE)


# ------------------------------------------------------------------ #
# Exception classification
# ------------------------------------------------------------------ #


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc* and every exception it was raised from or during."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def classify_exception(exc: BaseException) -> TransportErrorKind:
    """Map an exception raised while talking to the backend onto a category.

    httpx wraps the low-level :mod:`ssl` / :mod:`socket` errors, so the
    cause chain is inspected first for certificate, TLS and DNS failures
    before falling back to the httpx exception type itself.

    Args:
        exc: Exception raised by :mod:`httpx` (or below it).

    Returns:
        The matching :class:`TransportErrorKind`; ``UNKNOWN`` when nothing
        matches.
    """
    for inner in _exception_chain(exc):
        if isinstance(inner, ssl.SSLCertVerificationError):
            return TransportErrorKind.BAD_SERVER_CERTIFICATE
        if isinstance(inner, ssl.SSLError):
            return TransportErrorKind.TLS_ENGINE
        if isinstance(inner, socket.gaierror):
            return TransportErrorKind.NAME_RESOLUTION

    if isinstance(exc, httpx.TimeoutException):
        return TransportErrorKind.TIMEOUT
    if isinstance(exc, httpx.ProxyError):
        # 407 Proxy Authentication Required
        if str(exc).startswith("407"):
            return TransportErrorKind.INVALID_CREDENTIALS
        return TransportErrorKind.CONNECTION_FAILED
    if isinstance(exc, httpx.ConnectError):
        return TransportErrorKind.CONNECTION_FAILED
    if isinstance(exc, httpx.RemoteProtocolError):
        return TransportErrorKind.PROTOCOL_VIOLATION
    if isinstance(exc, (httpx.LocalProtocolError, httpx.UnsupportedProtocol, httpx.InvalidURL)):
        return TransportErrorKind.INVALID_REQUEST
    if isinstance(exc, httpx.DecodingError):
        return TransportErrorKind.INVALID_CONTENT_ENCODING
    if isinstance(exc, httpx.TooManyRedirects):
        return TransportErrorKind.TOO_MANY_REDIRECTS
    if isinstance(exc, httpx.StreamConsumed):
        return TransportErrorKind.REQUEST_BODY_NOT_REWINDABLE
    if isinstance(exc, (httpx.NetworkError, httpx.StreamError, OSError)):
        return TransportErrorKind.IO
    return TransportErrorKind.UNKNOWN


# ------------------------------------------------------------------ #
# Conversion to ErrorResult
# ------------------------------------------------------------------ #


def create_error_result(message: str, code: int = ERROR_INTERNAL_ERROR) -> ErrorResult:
    """Build an :class:`ErrorResult` from a plain message."""
    return ErrorResult(code=code, message=message)


def map_transport_error(error: TransportError) -> ErrorResult:
    """Convert a :class:`TransportError` using the fixed category table."""
    return create_error_result(get_error_str(error.kind), error.code)


def map_build_error(error: BuildError) -> ErrorResult:
    """Convert a :class:`BuildError`, keeping the builder's own message."""
    return create_error_result(error.message, error.code)


def to_error_result(error: TelesendError) -> ErrorResult:
    """Convert any internal telesend error into the uniform :class:`ErrorResult`."""
    if isinstance(error, TransportError):
        return map_transport_error(error)
    if isinstance(error, BuildError):
        return map_build_error(error)
    return create_error_result(error.message, error.code)
