"""Non-blocking executor -- mirrors :class:`~telesend.client.sync_client.SyncClient`.

:class:`AsyncClient` wraps :class:`httpx.AsyncClient`.  The calling task is
suspended only while the request is submitted and the response body is
read, so several sends can run concurrently on one event loop.
"""

from __future__ import annotations

from typing import Optional

import httpx

from telesend.builder import redact_url
from telesend.client.response import RawResponse
from telesend.client.settings import client_kwargs
from telesend.errors import TransportErrorKind, classify_exception
from telesend.exceptions import TransportError
from telesend.models import ClientConfig, OutboundRequest
from telesend.output import get_output


class AsyncClient:
    """Non-blocking HTTP executor.  Must be used as an async context manager.

    Args:
        config: Transport settings.  Defaults to :class:`ClientConfig`.
        transport: Optional :class:`httpx.AsyncBaseTransport`.

    Example::

        async with AsyncClient(config) as client:
            raw = await client.execute(request)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> AsyncClient:
        kwargs = client_kwargs(self._config, self._transport)
        try:
            self._client = httpx.AsyncClient(**kwargs)
        except Exception as exc:
            raise TransportError(TransportErrorKind.CLIENT_INITIALIZATION, str(exc)) from exc
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def execute(self, request: OutboundRequest) -> RawResponse:
        """Send *request*, suspending until the response has been read.

        Behaves identically to
        :meth:`~telesend.client.sync_client.SyncClient.execute` but is
        non-blocking.

        Raises:
            TransportError: On any network, TLS, protocol or client failure.
                Exceptions httpx does not classify are tagged ``UNKNOWN``.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        output = get_output()
        display_url = redact_url(request.url)
        output.debug(f"{request.method} {display_url} (async)")
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except Exception as exc:
            kind = classify_exception(exc)
            output.debug(f"Transport failure ({kind.value}): {redact_url(str(exc))}")
            raise TransportError(kind, str(exc)) from exc

        output.debug(f"HTTP {response.status_code} from {display_url}")
        return RawResponse.from_httpx(response)
