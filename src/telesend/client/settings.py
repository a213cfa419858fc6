"""Keyword arguments shared by the blocking and non-blocking :mod:`httpx` clients."""

from __future__ import annotations

import ssl
from typing import Any, Union

from telesend.errors import TransportErrorKind
from telesend.exceptions import TransportError
from telesend.models import ClientConfig


def build_ssl_verify(config: ClientConfig) -> Union[bool, ssl.SSLContext]:
    """Return the ``verify`` argument for httpx.

    A custom :class:`ssl.SSLContext` is only built when a CA bundle or a
    client certificate is configured; otherwise the plain boolean is passed
    through and httpx uses its own defaults.

    Raises:
        TransportError: ``CLIENT_INITIALIZATION`` if the CA bundle cannot be
            loaded, ``BAD_CLIENT_CERTIFICATE`` if the client certificate or
            key cannot be loaded.
    """
    if config.ca_bundle is None and config.client_cert is None:
        return config.verify_ssl

    try:
        ctx = ssl.create_default_context(cafile=config.ca_bundle)
    except (OSError, ValueError) as exc:
        raise TransportError(TransportErrorKind.CLIENT_INITIALIZATION, str(exc)) from exc

    if not config.verify_ssl:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE

    if config.client_cert is not None:
        try:
            ctx.load_cert_chain(config.client_cert, config.client_key)
        except (OSError, ValueError) as exc:
            raise TransportError(TransportErrorKind.BAD_CLIENT_CERTIFICATE, str(exc)) from exc
    return ctx


def client_kwargs(config: ClientConfig, transport: Any = None) -> dict[str, Any]:
    """Build the constructor arguments for ``httpx.Client`` / ``httpx.AsyncClient``."""
    kwargs: dict[str, Any] = {
        "verify": build_ssl_verify(config),
        "follow_redirects": True,
    }
    if config.timeout is not None:
        kwargs["timeout"] = config.timeout
    if config.proxy is not None:
        kwargs["proxy"] = config.proxy
    if transport is not None:
        kwargs["transport"] = transport
    return kwargs
