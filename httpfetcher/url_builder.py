"""Builds final request URLs from a base URL, a template and parameters."""

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from httpfetcher.request import FetchRequest, UrlParams
from httpfetcher.url_template import (
    UrlTemplateResolver,
    UrlTemplateStyle,
    get_url_template_resolver,
    stringify_param,
)


__all__ = [
    "UrlBuilder",
    "build_query_string",
    "combine_urls",
    "is_absolute_url",
    "split_origin",
]


_ABSOLUTE_URL = re.compile(r"^([a-z][a-z\d+\-.]*:)?//", re.IGNORECASE)
_URL_ORIGIN = re.compile(r"^([a-z][a-z\d+\-.]*:)?//[^/?#]*", re.IGNORECASE)


def is_absolute_url(url: str) -> bool:
    """Return True for ``scheme://`` and protocol-relative ``//`` URLs."""
    return bool(_ABSOLUTE_URL.match(url))


def combine_urls(base_url: str, relative_url: str) -> str:
    """Join ``base_url`` and ``relative_url``; absolute URLs are kept as-is."""
    if is_absolute_url(relative_url) or not base_url:
        return relative_url
    if not relative_url:
        return base_url
    return f"{base_url.rstrip('/')}/{relative_url.lstrip('/')}"


def split_origin(url: str) -> tuple[str, str]:
    """Split ``url`` into its scheme and authority and the remainder.

    Templates are only resolved in the remainder, so credentials or ports in
    the authority (``https://user:pw@host``) are never read as tokens.
    """
    match = _URL_ORIGIN.match(url)
    if match is None:
        return "", url
    return match.group(0), url[match.end() :]


def build_query_string(query: Mapping[str, Any] | None) -> str:
    """Encode a query mapping, dropping ``None`` values.

    Sequence values repeat the key (``tag=a&tag=b``) and booleans render as
    ``true``/``false``.
    """
    if not query:
        return ""
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, list | tuple | set | frozenset):
            pairs.extend(
                (key, stringify_param(item)) for item in value if item is not None
            )
        else:
            pairs.append((key, stringify_param(value)))
    return urlencode(pairs)


class UrlBuilder:
    """Combines the fetcher base URL with request paths and parameters."""

    def __init__(
        self,
        base_url: str = "",
        url_template_style: UrlTemplateStyle | str | None = None,
    ) -> None:
        self.base_url = base_url
        self.url_template_resolver: UrlTemplateResolver = get_url_template_resolver(
            url_template_style
        )

    def build(self, url: str, params: UrlParams | None = None) -> str:
        """Build the final URL for ``url`` with optional path/query params.

        Raises:
            MissingPathParameterError: If a template token has no value.
        """
        combined = combine_urls(self.base_url, url)
        origin, path = split_origin(combined)
        final_url = origin + self.url_template_resolver.resolve(
            path, params.path if params else None
        )
        query_string = build_query_string(params.query if params else None)
        if query_string:
            separator = "&" if "?" in final_url else "?"
            final_url = f"{final_url}{separator}{query_string}"
        return final_url

    def resolve_request_url(self, request: FetchRequest) -> str:
        return self.build(request.url, request.url_params)
