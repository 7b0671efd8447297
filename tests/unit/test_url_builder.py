"""Tests for URL building and the URL resolution interceptor."""

import pytest

from httpfetcher.errors import MissingPathParameterError
from httpfetcher.exchange import FetchExchange
from httpfetcher.interceptors import (
    URL_RESOLVE_INTERCEPTOR_NAME,
    UrlResolveInterceptor,
)
from httpfetcher.interceptors.constants import REQUEST_ORDER_BASE
from httpfetcher.request import FetchRequest, UrlParams
from httpfetcher.url_builder import (
    UrlBuilder,
    build_query_string,
    combine_urls,
    is_absolute_url,
    split_origin,
)
from httpfetcher.url_template import UrlTemplateStyle


@pytest.mark.unit
class TestCombineUrls:
    """Test joining base URLs and paths."""

    @pytest.mark.parametrize(
        ("base", "path", "expected"),
        [
            ("https://api.example.com", "/users", "https://api.example.com/users"),
            ("https://api.example.com/", "/users", "https://api.example.com/users"),
            ("https://api.example.com/v1", "users", "https://api.example.com/v1/users"),
            ("https://api.example.com", "", "https://api.example.com"),
            ("", "/users", "/users"),
            ("https://api.example.com", "https://other.test/x", "https://other.test/x"),
            ("https://api.example.com", "//cdn.test/x", "//cdn.test/x"),
        ],
    )
    def test_combine(self, base: str, path: str, expected: str) -> None:
        assert combine_urls(base, path) == expected

    def test_is_absolute_url(self) -> None:
        assert is_absolute_url("https://example.com")
        assert is_absolute_url("HTTP://example.com")
        assert not is_absolute_url("/relative")


@pytest.mark.unit
class TestBuildQueryString:
    """Test query string encoding."""

    def test_simple_values(self) -> None:
        assert build_query_string({"page": 1, "q": "a b"}) == "page=1&q=a+b"

    def test_booleans_render_lowercase(self) -> None:
        assert build_query_string({"active": True, "deleted": False}) == (
            "active=true&deleted=false"
        )

    def test_list_values_repeat_key(self) -> None:
        assert build_query_string({"tag": ["a", "b"]}) == "tag=a&tag=b"

    def test_none_values_are_dropped(self) -> None:
        assert build_query_string({"a": None, "b": 1}) == "b=1"

    def test_empty_query(self) -> None:
        assert build_query_string(None) == ""
        assert build_query_string({}) == ""


@pytest.mark.unit
class TestUrlBuilder:
    """Test full URL construction."""

    def test_path_and_query(self) -> None:
        builder = UrlBuilder("https://api.example.com")

        url = builder.build(
            "/users/{id}", UrlParams(path={"id": 42}, query={"active": True})
        )

        assert url == "https://api.example.com/users/42?active=true"

    def test_no_params(self) -> None:
        builder = UrlBuilder("https://api.example.com")

        assert builder.build("/users") == "https://api.example.com/users"

    def test_query_appends_to_existing_query(self) -> None:
        builder = UrlBuilder("https://api.example.com")

        url = builder.build("/search?x=1", UrlParams(query={"y": 2}))

        assert url == "https://api.example.com/search?x=1&y=2"

    def test_express_style(self) -> None:
        builder = UrlBuilder("https://api.example.com", UrlTemplateStyle.EXPRESS)

        url = builder.build("/users/:id", UrlParams(path={"id": 5}))

        assert url == "https://api.example.com/users/5"

    def test_missing_path_parameter(self) -> None:
        builder = UrlBuilder("https://api.example.com")

        with pytest.raises(MissingPathParameterError):
            builder.build("/users/{id}", UrlParams(query={"a": 1}))

    def test_resolve_request_url(self) -> None:
        builder = UrlBuilder("https://api.example.com")
        request = FetchRequest(
            url="/users/{id}", url_params=UrlParams(path={"id": 1})
        )

        assert builder.resolve_request_url(request) == "https://api.example.com/users/1"

    def test_credentials_in_base_url_are_not_tokens(self) -> None:
        builder = UrlBuilder("https://user:pw@api.example.com:8443", "express")

        url = builder.build("/users/:id", UrlParams(path={"id": 7}))

        assert url == "https://user:pw@api.example.com:8443/users/7"

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://user:pw@host/a/:b", ("https://user:pw@host", "/a/:b")),
            ("//host:80/x", ("//host:80", "/x")),
            ("http://host?q=1", ("http://host", "?q=1")),
            ("/relative/:id", ("", "/relative/:id")),
        ],
    )
    def test_split_origin(self, url: str, expected: tuple[str, str]) -> None:
        assert split_origin(url) == expected


@pytest.mark.unit
class TestUrlResolveInterceptor:
    """Test the interceptor wrapping the URL builder."""

    def test_name_and_order(self) -> None:
        interceptor = UrlResolveInterceptor()

        assert interceptor.name == URL_RESOLVE_INTERCEPTOR_NAME
        assert interceptor.order == REQUEST_ORDER_BASE + 100

    def test_rewrites_request_url_without_fetcher(self) -> None:
        exchange = FetchExchange(
            fetcher=None,
            request=FetchRequest(
                url="https://api.example.com/users/{id}",
                url_params=UrlParams(path={"id": 7}, query={"filter": "active"}),
            ),
        )

        UrlResolveInterceptor().intercept(exchange)

        assert exchange.request.url == "https://api.example.com/users/7?filter=active"
