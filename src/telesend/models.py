"""Pydantic models shared across telesend.

The models fall into three groups:

**Caller-facing values** -- :class:`BotInstance`, :class:`ParseMode`,
:class:`SendMessageOption` and :class:`ErrorResult`.  All are frozen so they
can be shared freely between threads and tasks.

**Wire models** -- :class:`SendMessagePayload` (the JSON body we send),
:class:`OutboundRequest` (the fully built request) and
:class:`TelegramErrorResult` (the body Telegram returns on failure).

**Configuration** -- :class:`ClientConfig`, the transport settings handed to
:mod:`httpx`.  Loaded from disk and environment by :mod:`telesend.config`.
"""

from __future__ import annotations

import enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://api.telegram.org"


# --- Caller-facing values ---


class BotInstance(BaseModel):
    """Identity every request is addressed with: a bot token and a target chat.

    Hold several instances to talk to several bots or chats.  The token is
    excluded from ``repr`` so instances can be logged safely.

    Example::

        instance = BotInstance(bot_token="123:abc", chat_id="-100200300")
    """

    model_config = ConfigDict(frozen=True)

    bot_token: str = Field(repr=False)
    chat_id: str


class ParseMode(str, enum.Enum):
    """Text markup modes understood by ``sendMessage``.

    Values are the exact spellings Telegram expects on the wire.
    """

    MARKDOWN_V2 = "MarkdownV2"
    HTML = "HTML"


class SendMessageOption(BaseModel):
    """Optional per-call formatting directives.

    When ``parse_mode`` is ``None`` the field is left out of the request body
    altogether.  Escaping the text for the chosen mode is the caller's job.
    """

    model_config = ConfigDict(frozen=True)

    parse_mode: Optional[ParseMode] = None


class ErrorResult(BaseModel):
    """Uniform failure value returned by the send operations.

    ``str(result)`` is the human-readable message, so an ``ErrorResult`` can
    be printed directly.
    """

    model_config = ConfigDict(frozen=True)

    code: int = Field(ge=0, le=65535, description="Outcome code, see telesend.status_codes")
    message: str

    def __str__(self) -> str:
        return self.message


# --- Wire models ---


class SendMessagePayload(BaseModel):
    """JSON body of a ``sendMessage`` call."""

    model_config = ConfigDict(use_enum_values=True)

    chat_id: str
    text: str
    parse_mode: Optional[ParseMode] = None


class OutboundRequest(BaseModel):
    """A fully built request, ready to hand to an executor."""

    model_config = ConfigDict(frozen=True)

    method: Literal["POST"] = "POST"
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes = b""


class TelegramErrorResult(BaseModel):
    """Error body Telegram returns alongside a non-200 status.

    Example body::

        {"ok": false, "error_code": 400, "description": "Bad Request: chat not found"}
    """

    ok: bool
    error_code: int
    description: str


# --- Configuration ---


class ClientConfig(BaseModel):
    """Transport settings for the HTTP executors.

    Anything left at ``None`` falls back to the :mod:`httpx` default.
    """

    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Bot API root, without trailing slash"
    )
    timeout: Optional[float] = Field(
        default=None, description="Request timeout in seconds"
    )
    verify_ssl: bool = Field(default=True, description="Verify server certificates")
    ca_bundle: Optional[str] = Field(
        default=None, description="Path to a PEM bundle used instead of the system CAs"
    )
    client_cert: Optional[str] = Field(
        default=None, description="Path to a PEM client certificate"
    )
    client_key: Optional[str] = Field(
        default=None, description="Path to the client certificate's private key"
    )
    proxy: Optional[str] = Field(default=None, description="Proxy URL")
