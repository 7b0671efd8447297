"""Resolves the final request URL from the fetcher base URL and parameters."""

from httpfetcher.exchange import FetchExchange
from httpfetcher.interceptor import Interceptor
from httpfetcher.url_builder import UrlBuilder

from .constants import REQUEST_ORDER_BASE


URL_RESOLVE_INTERCEPTOR_NAME = "UrlResolveInterceptor"
URL_RESOLVE_INTERCEPTOR_ORDER = REQUEST_ORDER_BASE + 100


class UrlResolveInterceptor(Interceptor):
    """Replaces ``request.url`` with the fully resolved URL.

    Uses the owning fetcher's ``UrlBuilder`` (base URL and template style);
    a bare ``UrlBuilder`` is used for exchanges without a fetcher.

    Raises:
        MissingPathParameterError: If a template token has no value.
    """

    @property
    def name(self) -> str:
        return URL_RESOLVE_INTERCEPTOR_NAME

    @property
    def order(self) -> int:
        return URL_RESOLVE_INTERCEPTOR_ORDER

    def intercept(self, exchange: FetchExchange) -> None:
        url_builder = (
            exchange.fetcher.url_builder if exchange.fetcher else UrlBuilder()
        )
        exchange.request.url = url_builder.resolve_request_url(exchange.request)
