"""Pluggable URL template resolution strategies.

Two styles are supported:

- ``URI_TEMPLATE``: brace-delimited tokens, e.g. ``/users/{id}``
- ``EXPRESS``: colon-prefixed tokens, e.g. ``/users/:id``
"""

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

from httpfetcher.errors import MissingPathParameterError


__all__ = [
    "ExpressUrlTemplateResolver",
    "UriTemplateResolver",
    "UrlTemplateResolver",
    "UrlTemplateStyle",
    "express_url_template_resolver",
    "get_url_template_resolver",
    "stringify_param",
    "uri_template_resolver",
]


class UrlTemplateStyle(str, Enum):
    """URL template styles understood by the fetcher."""

    URI_TEMPLATE = "uri_template"
    EXPRESS = "express"


@runtime_checkable
class UrlTemplateResolver(Protocol):
    """Strategy for extracting and substituting URL path parameters."""

    def extract_path_params(self, url_template: str) -> list[str]:
        """Return the parameter names in the order they appear."""
        ...

    def resolve(
        self, url_template: str, path_params: Mapping[str, Any] | None = None
    ) -> str:
        """Substitute every token of ``url_template``.

        Raises:
            MissingPathParameterError: If a token has no value.
        """
        ...


def stringify_param(value: Any) -> str:
    """Render a parameter value the way it should appear in a URL."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class RegexUrlTemplateResolver:
    """Template resolver driven by a single-group token pattern."""

    pattern: re.Pattern[str]

    def extract_path_params(self, url_template: str) -> list[str]:
        return [match.group(1) for match in self.pattern.finditer(url_template)]

    def resolve(
        self, url_template: str, path_params: Mapping[str, Any] | None = None
    ) -> str:
        params = path_params or {}

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            value = params.get(name)
            if value is None:
                raise MissingPathParameterError(name, url_template)
            return quote(stringify_param(value), safe="")

        return self.pattern.sub(_substitute, url_template)


class UriTemplateResolver(RegexUrlTemplateResolver):
    """Resolves ``{name}`` tokens."""

    pattern = re.compile(r"{([^}]+)}")


class ExpressUrlTemplateResolver(RegexUrlTemplateResolver):
    """Resolves ``:name`` tokens.

    Names must start with a letter or underscore so that ports such as
    ``localhost:8080`` are never mistaken for parameters.
    """

    pattern = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


uri_template_resolver = UriTemplateResolver()
express_url_template_resolver = ExpressUrlTemplateResolver()


def get_url_template_resolver(
    style: UrlTemplateStyle | str | None = None,
) -> UrlTemplateResolver:
    """Return the shared resolver for ``style`` (defaults to URI templates)."""
    if style is None:
        return uri_template_resolver
    if UrlTemplateStyle(style) is UrlTemplateStyle.EXPRESS:
        return express_url_template_resolver
    return uri_template_resolver
