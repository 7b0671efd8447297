"""The fetcher: public entry point of the request pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from types import TracebackType
from typing import Any

import structlog

from httpfetcher.config.http import HTTPSettings
from httpfetcher.config.settings import DEFAULT_HEADERS, FetcherSettings
from httpfetcher.exchange import FetchExchange
from httpfetcher.interceptor import InterceptorManager
from httpfetcher.request import FetchRequest, HttpMethod, UrlParams
from httpfetcher.result_extractor import ResultExtractor, ResultExtractors
from httpfetcher.timeout import resolve_timeout
from httpfetcher.transport import HttpxTransport, Transport
from httpfetcher.url_builder import UrlBuilder
from httpfetcher.url_template import UrlTemplateStyle
from httpfetcher.utils.headers import merge_headers


__all__ = [
    "DEFAULT_FETCH_OPTIONS",
    "DEFAULT_REQUEST_OPTIONS",
    "Fetcher",
    "NamedFetcher",
    "RequestOptions",
    "merge_request_options",
]

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RequestOptions:
    """Per-call options that are not part of the HTTP request itself."""

    result_extractor: ResultExtractor[Any] | None = None
    attributes: dict[str, Any] | None = None


DEFAULT_REQUEST_OPTIONS = RequestOptions(result_extractor=ResultExtractors.EXCHANGE)
DEFAULT_FETCH_OPTIONS = RequestOptions(result_extractor=ResultExtractors.RESPONSE)


def merge_request_options(
    defaults: RequestOptions, options: RequestOptions | None = None
) -> RequestOptions:
    """Call-level options win over ``defaults``; attributes are merged."""
    if options is None:
        return defaults
    attributes: dict[str, Any] | None = None
    if defaults.attributes is not None or options.attributes is not None:
        attributes = {**(defaults.attributes or {}), **(options.attributes or {})}
    return RequestOptions(
        result_extractor=options.result_extractor or defaults.result_extractor,
        attributes=attributes,
    )


class Fetcher:
    """HTTP client built around an interceptor pipeline.

    Each call merges the fetcher defaults (headers, timeout) with the call's
    request, creates a fresh ``FetchExchange`` and runs it through the
    ``InterceptorManager``. Configuration is fixed at construction; the
    interceptor registries themselves stay mutable.

    Example:
        async with Fetcher(base_url="https://api.example.com", timeout=5) as f:
            user = await f.get(
                "/users/{id}",
                url_params=UrlParams(path={"id": 42}),
                options=RequestOptions(result_extractor=ResultExtractors.JSON),
            )
    """

    def __init__(
        self,
        base_url: str = "",
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        url_template_style: UrlTemplateStyle | str | None = None,
        interceptors: InterceptorManager | None = None,
        transport: Transport | None = None,
        *,
        http_settings: HTTPSettings | None = None,
    ) -> None:
        self._url_builder = UrlBuilder(base_url, url_template_style)
        self._headers: dict[str, str] = dict(
            DEFAULT_HEADERS if headers is None else headers
        )
        self._timeout = timeout
        self._interceptors = interceptors or InterceptorManager()
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport(
            settings=http_settings
        )
        logger.debug(
            "fetcher_created",
            base_url=base_url,
            timeout=timeout,
            transport=type(self._transport).__name__,
        )

    @classmethod
    def from_settings(
        cls,
        settings: FetcherSettings,
        interceptors: InterceptorManager | None = None,
        transport: Transport | None = None,
    ) -> Fetcher:
        """Create a fetcher from ``FetcherSettings``.

        Without an explicit ``transport`` the fetcher builds and owns an
        ``HttpxTransport`` configured from ``settings.http``.
        """
        return cls(
            base_url=settings.base_url,
            headers=settings.headers,
            timeout=settings.timeout,
            url_template_style=settings.url_template_style,
            interceptors=interceptors,
            transport=transport,
            http_settings=settings.http,
        )

    @property
    def url_builder(self) -> UrlBuilder:
        return self._url_builder

    @property
    def base_url(self) -> str:
        return self._url_builder.base_url

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    @property
    def timeout(self) -> float | None:
        return self._timeout

    @property
    def interceptors(self) -> InterceptorManager:
        return self._interceptors

    @property
    def transport(self) -> Transport:
        return self._transport

    def resolve_exchange(
        self, request: FetchRequest, options: RequestOptions | None = None
    ) -> FetchExchange:
        """Build the exchange for ``request`` without any I/O.

        The caller's request object is not modified.
        """
        fetch_request = replace(
            request,
            headers=merge_headers(self._headers, request.headers),
            timeout=resolve_timeout(request.timeout, self._timeout),
            extensions=dict(request.extensions),
        )
        merged = merge_request_options(DEFAULT_REQUEST_OPTIONS, options)
        return FetchExchange(
            fetcher=self,
            request=fetch_request,
            result_extractor=merged.result_extractor,
            attributes=dict(merged.attributes or {}),
        )

    async def exchange(
        self, request: FetchRequest, options: RequestOptions | None = None
    ) -> FetchExchange:
        """Run ``request`` through the pipeline and return the exchange.

        Raises:
            ExchangeError: If the exchange fails and is not recovered.
        """
        exchange = self.resolve_exchange(request, options)
        return await self._interceptors.exchange(exchange)

    async def request(
        self, request: FetchRequest, options: RequestOptions | None = None
    ) -> Any:
        """Run ``request`` and return the configured extractor's result.

        Defaults to returning the whole ``FetchExchange``.
        """
        exchange = await self.exchange(request, options)
        return await exchange.extract_result()

    async def fetch(
        self,
        url: str,
        request: FetchRequest | None = None,
        options: RequestOptions | None = None,
    ) -> Any:
        """Request ``url``; returns the ``httpx.Response`` by default."""
        fetch_request = replace(request or FetchRequest(), url=url)
        return await self.request(
            fetch_request, merge_request_options(DEFAULT_FETCH_OPTIONS, options)
        )

    async def _method_fetch(
        self,
        method: HttpMethod,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        url_params: UrlParams | None = None,
        timeout: float | None = None,
        options: RequestOptions | None = None,
        **kwargs: Any,
    ) -> Any:
        request = FetchRequest(
            url=url,
            method=method,
            headers=dict(headers or {}),
            body=body,
            url_params=url_params,
            timeout=timeout,
            **kwargs,
        )
        return await self.request(
            request, merge_request_options(DEFAULT_FETCH_OPTIONS, options)
        )

    async def get(self, url: str, **kwargs: Any) -> Any:
        return await self._method_fetch(HttpMethod.GET, url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> Any:
        return await self._method_fetch(HttpMethod.POST, url, **kwargs)

    async def put(self, url: str, **kwargs: Any) -> Any:
        return await self._method_fetch(HttpMethod.PUT, url, **kwargs)

    async def patch(self, url: str, **kwargs: Any) -> Any:
        return await self._method_fetch(HttpMethod.PATCH, url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> Any:
        return await self._method_fetch(HttpMethod.DELETE, url, **kwargs)

    async def head(self, url: str, **kwargs: Any) -> Any:
        return await self._method_fetch(HttpMethod.HEAD, url, **kwargs)

    async def options(self, url: str, **kwargs: Any) -> Any:
        return await self._method_fetch(HttpMethod.OPTIONS, url, **kwargs)

    async def trace(self, url: str, **kwargs: Any) -> Any:
        return await self._method_fetch(HttpMethod.TRACE, url, **kwargs)

    async def aclose(self) -> None:
        """Close the transport if this fetcher created it."""
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            await self._transport.aclose()

    async def __aenter__(self) -> Fetcher:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, timeout={self._timeout})"


class NamedFetcher(Fetcher):
    """A fetcher that registers itself in ``fetcher_registrar`` under ``name``.

    Registering a second fetcher with the same name replaces the first.
    """

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.name = name
        from httpfetcher.registrar import fetcher_registrar

        fetcher_registrar.register(name, self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, base_url={self.base_url!r})"
        )
