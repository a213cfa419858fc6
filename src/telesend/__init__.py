"""telesend -- send messages to a Telegram chat through the Bot API.

A small client that posts ``sendMessage`` requests for one bot credential
and reports every outcome the same way: ``None`` on success, an
:class:`ErrorResult` on any failure.  Blocking and ``asyncio`` entry points
share the same request building and response handling.

Typical use::

    import telesend

    bot = telesend.create_instance(token, chat_id)
    err = telesend.send_message(bot, "hello")
    err = await telesend.send_message_async(bot, "hello")

Modules:
    api: Public send operations.
    builder: Request construction.
    client: Blocking and non-blocking httpx executors.
    errors: Transport failure categories and error mapping.
    models: Pydantic models shared across the package.
    config: Configuration resolution for the ``telesend`` CLI.
    app: Typer CLI entry point.
"""

__version__ = "0.3.0"

from telesend.api import create_instance, send_message, send_message_async  # noqa: E402
from telesend.models import (  # noqa: E402
    BotInstance,
    ClientConfig,
    ErrorResult,
    ParseMode,
    SendMessageOption,
)

__all__ = [
    "__version__",
    "BotInstance",
    "ClientConfig",
    "ErrorResult",
    "ParseMode",
    "SendMessageOption",
    "create_instance",
    "send_message",
    "send_message_async",
]
