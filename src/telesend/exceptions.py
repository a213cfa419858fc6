"""Exception hierarchy for telesend.

These exceptions never cross the public send operations: the pipeline raises
them internally and :func:`telesend.errors.to_error_result` turns them into an
:class:`~telesend.models.ErrorResult` at the boundary.  Only
:class:`ConfigError` reaches the caller, and only from the CLI helpers in
:mod:`telesend.config`.

Subclass hierarchy::

    TelesendError
    +-- BuildError
    |   +-- UrlInvalidError
    |   +-- SerializationError
    +-- TransportError
    +-- ConfigError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from telesend.status_codes import ERROR_INTERNAL_ERROR

if TYPE_CHECKING:
    from telesend.errors import TransportErrorKind


class TelesendError(Exception):
    """Base exception for all telesend errors.

    Args:
        message: Human-readable error description.
        code: Optional override for the class-level outcome code.
    """

    code: int = ERROR_INTERNAL_ERROR

    def __init__(self, message: str, code: int | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class BuildError(TelesendError):
    """Raised when a ``sendMessage`` request cannot be constructed."""


class UrlInvalidError(BuildError):
    """Raised when the bot token does not yield a well-formed endpoint URL."""


class SerializationError(BuildError):
    """Raised when the request payload cannot be encoded as a UTF-8 JSON body."""


class TransportError(TelesendError):
    """Raised by the HTTP executors for any network or client-level failure.

    The ``kind`` attribute holds the :class:`~telesend.errors.TransportErrorKind`
    the failure was classified as; the message is only used for debugging.
    """

    def __init__(self, kind: TransportErrorKind, message: str = ""):
        super().__init__(message or str(kind.value))
        self.kind = kind


class ConfigError(TelesendError):
    """Raised for configuration problems (missing credentials, invalid config file)."""
