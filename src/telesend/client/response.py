"""Raw responses and their interpretation into an outcome.

:class:`RawResponse` is the executor-agnostic view of what came back from
Telegram; :func:`interpret` classifies it.  A 200 status is success and the
body is never looked at.  Anything else is a failure whose description is
taken from Telegram's JSON error body.
"""

from __future__ import annotations

from typing import Optional

import httpx
from pydantic import ValidationError

from telesend.errors import create_error_result
from telesend.models import ErrorResult, TelegramErrorResult
from telesend.output import get_output

DECODE_ERROR_MESSAGE = "Error converting telegram error response to json"


class RawResponse:
    """Status code and body of a completed exchange.

    The body is only decoded on demand, via :meth:`error_body`.

    Args:
        status_code: HTTP status returned by the backend.
        content: Raw response body.
    """

    def __init__(self, status_code: int, content: bytes = b"") -> None:
        self.status_code = status_code
        self.content = content

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> RawResponse:
        """Wrap a fully read :class:`httpx.Response`."""
        return cls(response.status_code, response.content)

    def error_body(self) -> TelegramErrorResult:
        """Decode the body as Telegram's error structure.

        Raises:
            pydantic.ValidationError: If the body is not valid JSON or lacks
                the expected fields.
        """
        return TelegramErrorResult.model_validate_json(self.content)

    def __repr__(self) -> str:
        return f"RawResponse(status_code={self.status_code}, content={len(self.content)} bytes)"


def interpret(response: RawResponse) -> Optional[ErrorResult]:
    """Classify a raw response.

    Args:
        response: The response produced by an executor.

    Returns:
        ``None`` for status 200.  Otherwise an :class:`ErrorResult` carrying
        Telegram's ``description`` verbatim, or a fixed message when the
        error body cannot be decoded.  Telegram's ``error_code`` is not
        propagated; the result always uses the internal-error code.
    """
    if response.status_code == 200:
        return None

    try:
        body = response.error_body()
    except ValidationError as exc:
        get_output().debug(f"Undecodable error body (HTTP {response.status_code}): {exc}")
        return create_error_result(DECODE_ERROR_MESSAGE)

    get_output().debug(f"Telegram rejected the message (error_code={body.error_code})")
    return create_error_result(body.description)
