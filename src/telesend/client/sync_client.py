"""Blocking executor for built requests.

:class:`SyncClient` wraps :class:`httpx.Client`.  It submits an
:class:`~telesend.models.OutboundRequest` and hands back a
:class:`~telesend.client.response.RawResponse`; every failure along the way
(including building the httpx client itself) surfaces as a
:class:`~telesend.exceptions.TransportError` tagged with its category.

No retries are attempted and no timeout is imposed beyond
:attr:`ClientConfig.timeout`.

See Also:
    :class:`~telesend.client.async_client.AsyncClient` for the
    non-blocking equivalent.
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


class SyncClient:
    """Blocking HTTP executor.

    Must be used as a context manager so the underlying connection pool is
    opened and closed.

    Args:
        config: Transport settings.  Defaults to :class:`ClientConfig`.
        transport: Optional :class:`httpx.BaseTransport`, e.g. an
            :class:`httpx.MockTransport` in tests.

    Example::

        with SyncClient(config) as client:
            raw = client.execute(request)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or ClientConfig()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> SyncClient:
        kwargs = client_kwargs(self._config, self._transport)
        try:
            self._client = httpx.Client(**kwargs)
        except Exception as exc:
            raise TransportError(TransportErrorKind.CLIENT_INITIALIZATION, str(exc)) from exc
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Execution
    # ------------------------------------------------------------------ #

    def execute(self, request: OutboundRequest) -> RawResponse:
        """Send *request* and wait for the full response.

        Args:
            request: The request produced by :func:`telesend.builder.build_request`.

        Returns:
            The status code and body of the response.

        Raises:
            TransportError: On any network, TLS, protocol or client failure.
                Exceptions httpx does not classify are tagged ``UNKNOWN``.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        output = get_output()
        display_url = redact_url(request.url)
        output.debug(f"{request.method} {display_url}")
        try:
            response = self._client.request(
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
