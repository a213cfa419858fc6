"""HTTP executors for telesend.

Two interchangeable ways to submit a built
:class:`~telesend.models.OutboundRequest`:

    :class:`SyncClient` -- blocking, backed by :class:`httpx.Client`.
    :class:`AsyncClient` -- non-blocking, backed by :class:`httpx.AsyncClient`.

Both return a :class:`RawResponse` which :func:`interpret` turns into an
outcome.

Example::

    from telesend.client import SyncClient, interpret

    with SyncClient(config) as client:
        outcome = interpret(client.execute(request))
"""

from telesend.client.async_client import AsyncClient
from telesend.client.response import RawResponse, interpret
from telesend.client.sync_client import SyncClient

__all__ = ["SyncClient", "AsyncClient", "RawResponse", "interpret"]
