"""Tests for URL template resolution strategies."""

import pytest

from httpfetcher.errors import MissingPathParameterError
from httpfetcher.url_template import (
    ExpressUrlTemplateResolver,
    UriTemplateResolver,
    UrlTemplateResolver,
    UrlTemplateStyle,
    express_url_template_resolver,
    get_url_template_resolver,
    uri_template_resolver,
)


@pytest.mark.unit
class TestUriTemplateResolver:
    """Brace-delimited ``{name}`` templates."""

    def test_resolve_single_parameter(self) -> None:
        assert uri_template_resolver.resolve("/users/{id}", {"id": 123}) == "/users/123"

    def test_resolve_multiple_parameters(self) -> None:
        result = uri_template_resolver.resolve(
            "/users/{userId}/posts/{postId}", {"userId": 1, "postId": "abc"}
        )

        assert result == "/users/1/posts/abc"

    def test_values_are_percent_encoded(self) -> None:
        result = uri_template_resolver.resolve("/files/{name}", {"name": "a b/c"})

        assert result == "/files/a%20b%2Fc"

    def test_missing_parameter_raises(self) -> None:
        with pytest.raises(MissingPathParameterError) as exc_info:
            uri_template_resolver.resolve("/users/{id}", {"other": 1})

        assert exc_info.value.name == "id"
        assert exc_info.value.template == "/users/{id}"
        assert str(exc_info.value) == "Missing required path parameter: id"

    def test_missing_params_mapping_still_raises(self) -> None:
        """Test that tokens are never left unresolved."""
        with pytest.raises(MissingPathParameterError):
            uri_template_resolver.resolve("/users/{id}")

    def test_none_value_counts_as_missing(self) -> None:
        with pytest.raises(MissingPathParameterError):
            uri_template_resolver.resolve("/users/{id}", {"id": None})

    def test_template_without_tokens_is_unchanged(self) -> None:
        assert uri_template_resolver.resolve("/users", None) == "/users"

    def test_extract_path_params(self) -> None:
        params = uri_template_resolver.extract_path_params(
            "/users/{userId}/posts/{postId}"
        )

        assert params == ["userId", "postId"]

    def test_colon_tokens_are_ignored(self) -> None:
        assert uri_template_resolver.extract_path_params("/users/:id") == []


@pytest.mark.unit
class TestExpressUrlTemplateResolver:
    """Colon-prefixed ``:name`` templates."""

    def test_resolve_single_parameter(self) -> None:
        assert (
            express_url_template_resolver.resolve("/users/:id", {"id": 42})
            == "/users/42"
        )

    def test_resolve_multiple_parameters(self) -> None:
        result = express_url_template_resolver.resolve(
            "/users/:userId/posts/:postId", {"userId": 1, "postId": 2}
        )

        assert result == "/users/1/posts/2"

    def test_port_is_not_a_parameter(self) -> None:
        template = "http://localhost:8080/users/:id"

        assert express_url_template_resolver.extract_path_params(template) == ["id"]
        assert (
            express_url_template_resolver.resolve(template, {"id": 7})
            == "http://localhost:8080/users/7"
        )

    def test_missing_parameter_raises(self) -> None:
        with pytest.raises(MissingPathParameterError) as exc_info:
            express_url_template_resolver.resolve("/users/:id", {})

        assert exc_info.value.name == "id"

    def test_boolean_values_render_lowercase(self) -> None:
        assert (
            express_url_template_resolver.resolve("/flags/:on", {"on": True})
            == "/flags/true"
        )


@pytest.mark.unit
class TestResolverLookup:
    """Test selecting a resolver by style."""

    def test_default_is_uri_template(self) -> None:
        assert get_url_template_resolver() is uri_template_resolver

    @pytest.mark.parametrize(
        ("style", "expected"),
        [
            (UrlTemplateStyle.URI_TEMPLATE, UriTemplateResolver),
            (UrlTemplateStyle.EXPRESS, ExpressUrlTemplateResolver),
            ("express", ExpressUrlTemplateResolver),
        ],
    )
    def test_lookup_by_style(self, style: str, expected: type) -> None:
        assert isinstance(get_url_template_resolver(style), expected)

    def test_unknown_style_raises(self) -> None:
        with pytest.raises(ValueError):
            get_url_template_resolver("mustache")

    def test_resolvers_satisfy_protocol(self) -> None:
        assert isinstance(uri_template_resolver, UrlTemplateResolver)
        assert isinstance(express_url_template_resolver, UrlTemplateResolver)
