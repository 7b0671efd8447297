"""Terminal request interceptor performing the network call."""

import structlog

from httpfetcher.exchange import FetchExchange
from httpfetcher.interceptor import Interceptor
from httpfetcher.timeout import timeout_fetch
from httpfetcher.transport import HttpxTransport, Transport
from httpfetcher.utils.headers import redact_headers

from .constants import TERMINAL_ORDER


logger = structlog.get_logger(__name__)

FETCH_INTERCEPTOR_NAME = "FetchInterceptor"
FETCH_INTERCEPTOR_ORDER = TERMINAL_ORDER


class FetchInterceptor(Interceptor):
    """Sends the request and stores the response on the exchange.

    The transport comes from the owning fetcher. An explicit transport given
    here takes precedence, which is mostly useful for exchanges run without a
    fetcher. Without either, a fallback ``HttpxTransport`` is created on first
    use and released by :meth:`aclose`.
    """

    def __init__(self, transport: Transport | None = None) -> None:
        self._transport = transport
        self._fallback: HttpxTransport | None = None

    @property
    def name(self) -> str:
        return FETCH_INTERCEPTOR_NAME

    @property
    def order(self) -> int:
        return FETCH_INTERCEPTOR_ORDER

    def _resolve_transport(self, exchange: FetchExchange) -> Transport:
        if self._transport is not None:
            return self._transport
        if exchange.fetcher is not None:
            return exchange.fetcher.transport
        if self._fallback is None:
            self._fallback = HttpxTransport()
        return self._fallback

    async def intercept(self, exchange: FetchExchange) -> None:
        request = exchange.request
        logger.debug(
            "fetch_started",
            method=str(request.method),
            url=request.url,
            headers=redact_headers(request.headers),
            timeout=request.timeout,
        )
        exchange.response = await timeout_fetch(
            request, self._resolve_transport(exchange)
        )
        logger.debug(
            "fetch_completed",
            method=str(request.method),
            url=request.url,
            status_code=exchange.response.status_code,
        )

    async def aclose(self) -> None:
        """Close the fallback transport created for fetcher-less exchanges."""
        if self._fallback is not None:
            await self._fallback.aclose()
            self._fallback = None
