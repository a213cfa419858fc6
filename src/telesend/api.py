"""Public send operations.

Both operations run the same pipeline::

    build_request -> executor.execute -> interpret

and differ only in the executor: :func:`send_message` uses the blocking
:class:`~telesend.client.SyncClient`, :func:`send_message_async` the
non-blocking :class:`~telesend.client.AsyncClient`.

Neither raises for send failures.  The outcome is ``None`` on success and
an :class:`~telesend.models.ErrorResult` otherwise, whether the failure came
from building the request, the transport, or Telegram itself.

Example::

    import telesend

    bot = telesend.create_instance("123456:ABC", "-100987654")
    err = telesend.send_message(bot, "*deploy* finished",
                                telesend.SendMessageOption(parse_mode=telesend.ParseMode.MARKDOWN_V2))
    if err:
        print(f"send failed: {err}")
"""

from __future__ import annotations

from typing import Optional

import httpx

from telesend.builder import build_request
from telesend.client import AsyncClient, SyncClient, interpret
from telesend.errors import to_error_result
from telesend.exceptions import TelesendError
from telesend.models import BotInstance, ClientConfig, ErrorResult, SendMessageOption


def create_instance(bot_token: str, chat_id: str) -> BotInstance:
    """Create the bot instance used to address every request.

    Args:
        bot_token: Token issued by @BotFather.
        chat_id: Target chat id (numeric id or ``@channelusername``).
    """
    return BotInstance(bot_token=bot_token, chat_id=chat_id)


def send_message(
    instance: BotInstance,
    msg: str,
    option: Optional[SendMessageOption] = None,
    *,
    config: Optional[ClientConfig] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> Optional[ErrorResult]:
    """Send *msg* to the instance's chat, blocking until Telegram replies.

    Args:
        instance: Bot token and target chat.
        msg: Message text, sent verbatim.
        option: Optional formatting directives.
        config: Transport settings; defaults to :class:`ClientConfig`.
        transport: Optional httpx transport override.

    Returns:
        ``None`` on success, otherwise an :class:`ErrorResult`.
    """
    config = config or ClientConfig()
    try:
        request = build_request(instance, msg, option, base_url=config.base_url)
        with SyncClient(config, transport=transport) as client:
            raw = client.execute(request)
    except TelesendError as exc:
        return to_error_result(exc)
    return interpret(raw)


async def send_message_async(
    instance: BotInstance,
    msg: str,
    option: Optional[SendMessageOption] = None,
    *,
    config: Optional[ClientConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[ErrorResult]:
    """Send *msg* without blocking the event loop.

    Same contract as :func:`send_message`.  Concurrent calls may be awaited
    together (e.g. with :func:`asyncio.gather`); Telegram does not guarantee
    the order in which such messages are displayed.  Await each call before
    issuing the next when order matters.
    """
    config = config or ClientConfig()
    try:
        request = build_request(instance, msg, option, base_url=config.base_url)
        async with AsyncClient(config, transport=transport) as client:
            raw = await client.execute(request)
    except TelesendError as exc:
        return to_error_result(exc)
    return interpret(raw)
