"""Transport boundary: the primitive that actually puts bytes on the wire.

The pipeline never talks to the network itself. The terminal fetch
interceptor hands the resolved request to a ``Transport``; the default one is
backed by ``httpx.AsyncClient``.
"""

from __future__ import annotations

import os
import ssl
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx
import structlog

from httpfetcher.request import FormData


if TYPE_CHECKING:
    from httpfetcher.config.http import HTTPSettings
    from httpfetcher.request import FetchRequest


__all__ = ["HTTPClientFactory", "HttpxTransport", "Transport"]

logger = structlog.get_logger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Sends a resolved request and returns the transport response."""

    async def send(self, url: str, request: FetchRequest) -> httpx.Response: ...


class HTTPClientFactory:
    """Factory for ``httpx.AsyncClient`` instances used by transports.

    Honors the standard proxy environment variables and SSL overrides.
    """

    @staticmethod
    def create_client(
        *,
        settings: HTTPSettings | None = None,
        timeout_connect: float = 5.0,
        timeout_read: float = 60.0,
        max_keepalive_connections: int = 20,
        max_connections: int = 100,
        http2: bool = False,
        verify: bool | str = True,
        **kwargs: Any,
    ) -> httpx.AsyncClient:
        """Create an HTTP client with the fetcher's default configuration.

        Args:
            settings: Optional HTTP settings; overrides the keyword defaults
            timeout_connect: Connection timeout in seconds
            timeout_read: Read timeout in seconds
            max_keepalive_connections: Max keep-alive connections for reuse
            max_connections: Max total concurrent connections
            http2: Enable HTTP/2 (requires ``httpx[http2]``)
            verify: SSL verification (True/False or path to CA bundle)
            **kwargs: Additional ``httpx.AsyncClient`` arguments

        Returns:
            Configured ``httpx.AsyncClient`` instance
        """
        if settings is not None:
            timeout_connect = settings.timeout_connect
            timeout_read = settings.timeout_read
            max_keepalive_connections = settings.max_keepalive_connections
            max_connections = settings.max_connections
            http2 = settings.http2
            verify = settings.verify

        proxy = _get_proxy_url()

        if isinstance(verify, bool) and verify:
            verify = _get_ssl_context()
        ssl_verify = _build_ssl_verify(verify)

        timeout = httpx.Timeout(
            connect=timeout_connect,
            read=timeout_read,
            write=30.0,
            pool=30.0,
        )
        limits = httpx.Limits(
            max_keepalive_connections=max_keepalive_connections,
            max_connections=max_connections,
        )
        transport = httpx.AsyncHTTPTransport(
            limits=limits,
            http2=http2,
            verify=ssl_verify,
            proxy=proxy,
        )

        logger.debug(
            "http_client_created",
            timeout_connect=timeout_connect,
            timeout_read=timeout_read,
            max_connections=max_connections,
            http2=http2,
            has_proxy=proxy is not None,
        )

        return httpx.AsyncClient(timeout=timeout, transport=transport, **kwargs)


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``.

    A client passed in is borrowed and never closed here; a client created by
    the transport itself is closed by :meth:`aclose`.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: HTTPSettings | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client
        self._settings = settings

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = HTTPClientFactory.create_client(settings=self._settings)
        return self._client

    async def send(self, url: str, request: FetchRequest) -> httpx.Response:
        body = request.body
        headers = request.headers
        kwargs: dict[str, Any] = {}
        if isinstance(body, FormData):
            # httpx generates the form content type, including the boundary.
            headers = {
                key: value
                for key, value in headers.items()
                if key.lower() != "content-type"
            }
            kwargs["data"] = body.fields
            if body.files:
                kwargs["files"] = body.files
        elif body is not None:
            kwargs["content"] = body
        if request.extensions:
            kwargs["extensions"] = request.extensions

        return await self.client.request(
            str(request.method),
            url,
            headers=headers,
            **kwargs,
        )

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            logger.debug("http_client_closed")

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _get_proxy_url() -> str | None:
    """Get proxy URL from environment variables.

    Returns:
        str or None: Proxy URL if any proxy is set
    """
    https_proxy = os.environ.get("HTTPS_PROXY") or os.environ.get("https_proxy")
    all_proxy = os.environ.get("ALL_PROXY")
    http_proxy = os.environ.get("HTTP_PROXY") or os.environ.get("http_proxy")

    proxy_url = https_proxy or all_proxy or http_proxy

    if proxy_url:
        logger.debug("proxy_configured", proxy_url=proxy_url)

    return proxy_url


def _get_ssl_context() -> str | bool:
    """Get SSL verification configuration from environment variables.

    Returns:
        Path to a CA bundle, True for default verification or False when
        verification is disabled.
    """
    ca_bundle = os.environ.get("REQUESTS_CA_BUNDLE") or os.environ.get("SSL_CERT_FILE")
    ssl_verify = os.environ.get("SSL_VERIFY", "true").lower()

    if ca_bundle and Path(ca_bundle).exists():
        logger.debug("ssl_ca_bundle_configured", ca_bundle_path=ca_bundle)
        return ca_bundle
    elif ssl_verify in ("false", "0", "no"):
        logger.warning(
            "ssl_verification_disabled",
            ssl_verify_value=ssl_verify,
            security_warning=True,
        )
        return False
    else:
        return True


def _build_ssl_verify(verify: bool | str) -> bool | ssl.SSLContext:
    """Turn a CA bundle path into an SSL context; httpx deprecates string paths."""
    if isinstance(verify, str):
        return ssl.create_default_context(cafile=verify)
    return verify
