"""Request description types flowing through the fetcher pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from httpfetcher.utils.headers import merge_headers


if TYPE_CHECKING:
    from httpfetcher.timeout import AbortController


__all__ = [
    "ContentTypeValues",
    "FetchRequest",
    "FormData",
    "HttpMethod",
    "UrlParams",
    "merge_request",
]


class HttpMethod(str, Enum):
    """HTTP methods supported by the fetcher."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    def __str__(self) -> str:
        return self.value


class ContentTypeValues(str, Enum):
    """Common Content-Type header values."""

    APPLICATION_JSON = "application/json"
    TEXT_EVENT_STREAM = "text/event-stream"
    FORM_URLENCODED = "application/x-www-form-urlencoded"

    def __str__(self) -> str:
        return self.value


CONTENT_TYPE_HEADER = "Content-Type"


@dataclass
class UrlParams:
    """Path and query parameters used to resolve a request URL."""

    path: dict[str, Any] | None = None
    query: dict[str, Any] | None = None


@dataclass
class FormData:
    """Form fields and files, sent as url-encoded or multipart by the transport."""

    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] | None = None


@dataclass
class FetchRequest:
    """Mutable description of a single HTTP request.

    ``url`` starts as a path or URL template and holds the final URL once the
    URL resolution interceptor has run. ``timeout`` is in seconds.
    """

    url: str = ""
    method: HttpMethod | str = HttpMethod.GET
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    url_params: UrlParams | None = None
    timeout: float | None = None
    abort_controller: AbortController | None = None
    extensions: dict[str, Any] = field(default_factory=dict)


def _merge_mapping(
    first: dict[str, Any] | None, second: dict[str, Any] | None
) -> dict[str, Any] | None:
    if first is None and second is None:
        return None
    return {**(first or {}), **(second or {})}


def merge_request(first: FetchRequest, second: FetchRequest) -> FetchRequest:
    """Merge two request fragments, giving ``second`` precedence.

    Headers and URL parameters are merged key by key. Scalar fields are taken
    from ``second`` unless they are ``None`` there; ``url`` and ``method`` from
    ``second`` win when set to a non-default value.
    """
    first_params = first.url_params or UrlParams()
    second_params = second.url_params or UrlParams()
    url_params: UrlParams | None = None
    if first.url_params is not None or second.url_params is not None:
        url_params = UrlParams(
            path=_merge_mapping(first_params.path, second_params.path),
            query=_merge_mapping(first_params.query, second_params.query),
        )

    return FetchRequest(
        url=second.url or first.url,
        method=second.method if second.method != HttpMethod.GET else first.method,
        headers=merge_headers(first.headers, second.headers),
        body=second.body if second.body is not None else first.body,
        url_params=url_params,
        timeout=second.timeout if second.timeout is not None else first.timeout,
        abort_controller=second.abort_controller or first.abort_controller,
        extensions={**first.extensions, **second.extensions},
    )
