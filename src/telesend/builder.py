"""Request builder -- turns a bot instance and a message into an HTTP request.

Building is pure data transformation: no network access, and the same
inputs always produce the same :class:`~telesend.models.OutboundRequest`.
Both executors in :mod:`telesend.client` consume the result unchanged.
"""

from __future__ import annotations

import re
from typing import Optional

import httpx
from pydantic import ValidationError

from telesend.exceptions import SerializationError, UrlInvalidError
from telesend.models import (
    DEFAULT_BASE_URL,
    BotInstance,
    OutboundRequest,
    SendMessageOption,
    SendMessagePayload,
)

URL_ERROR_MESSAGE = "Error parsing internal telegram url"
SEND_MESSAGE_METHOD = "sendMessage"

# The token segment is the last "/bot..." before the endpoint, so a base URL
# path prefix that itself starts with "bot" is left alone.
_TOKEN_SEGMENT = re.compile(r"/bot(?:(?!/bot)[^?#\s])*?/sendMessage\b")


def build_url(bot_token: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Return the ``sendMessage`` endpoint URL for *bot_token*.

    The token is substituted into the path as-is.  If it contains
    characters that change the URL's structure (``?``, ``#``, control
    characters, ...) the result no longer addresses
    ``/bot<token>/sendMessage`` and the build fails.

    Raises:
        UrlInvalidError: If the resulting URL is malformed or its path
            does not match the expected endpoint.
    """
    root = base_url.rstrip("/")
    expected_path = f"/bot{bot_token}/{SEND_MESSAGE_METHOD}"
    try:
        url = httpx.URL(f"{root}{expected_path}")
    except (httpx.InvalidURL, ValueError, TypeError) as exc:
        raise UrlInvalidError(URL_ERROR_MESSAGE) from exc

    if url.scheme not in ("http", "https") or not url.host:
        raise UrlInvalidError(URL_ERROR_MESSAGE)
    # base_url may carry a path prefix, e.g. a self-hosted Bot API server
    prefix_path = httpx.URL(root).path.rstrip("/")
    if url.path != f"{prefix_path}{expected_path}" or url.query or url.fragment:
        raise UrlInvalidError(URL_ERROR_MESSAGE)
    return str(url)


def build_payload(
    instance: BotInstance,
    message: str,
    option: Optional[SendMessageOption] = None,
) -> bytes:
    """Serialise the ``sendMessage`` body.

    ``parse_mode`` is omitted from the JSON entirely when not set.

    Raises:
        SerializationError: If the text cannot be encoded (e.g. it holds
            lone UTF-16 surrogates).
    """
    parse_mode = option.parse_mode if option is not None else None
    try:
        payload = SendMessagePayload(
            chat_id=instance.chat_id,
            text=message,
            parse_mode=parse_mode,
        )
        return payload.model_dump_json(exclude_none=True).encode("utf-8")
    except (ValidationError, TypeError, ValueError) as exc:
        raise SerializationError(f"Error serializing telegram request body: {exc}") from exc


def build_request(
    instance: BotInstance,
    message: str,
    option: Optional[SendMessageOption] = None,
    base_url: str = DEFAULT_BASE_URL,
) -> OutboundRequest:
    """Build the complete ``sendMessage`` request.

    Args:
        instance: Bot token and target chat.
        message: Message text, sent verbatim.
        option: Optional formatting directives.
        base_url: Bot API root, overridable for self-hosted API servers.

    Returns:
        A ``POST`` :class:`OutboundRequest` with a JSON body.

    Raises:
        UrlInvalidError: If the token breaks the endpoint URL.
        SerializationError: If the body cannot be encoded.
    """
    url = build_url(instance.bot_token, base_url)
    body = build_payload(instance, message, option)
    return OutboundRequest(
        method="POST",
        url=url,
        headers={"content-type": "application/json"},
        body=body,
    )


def redact_url(url: str) -> str:
    """Hide the bot token in a Bot API *url* for display."""
    return _TOKEN_SEGMENT.sub(f"/bot***/{SEND_MESSAGE_METHOD}", url)
