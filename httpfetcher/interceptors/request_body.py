"""Serializes structured request bodies to JSON."""

import dataclasses
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic_core import to_json

from httpfetcher.exchange import FetchExchange
from httpfetcher.interceptor import Interceptor
from httpfetcher.request import CONTENT_TYPE_HEADER, ContentTypeValues, FormData
from httpfetcher.utils.headers import has_header

from .constants import REQUEST_ORDER_BASE


REQUEST_BODY_INTERCEPTOR_NAME = "RequestBodyInterceptor"
REQUEST_BODY_INTERCEPTOR_ORDER = REQUEST_ORDER_BASE + 200


def is_structured_body(body: Any) -> bool:
    """True for values that should be sent as JSON.

    Strings, bytes, files, iterators and ``FormData`` are already encoded
    and are left for the transport.
    """
    if isinstance(body, Mapping | list | tuple | BaseModel):
        return True
    if isinstance(body, FormData | type):
        return False
    return dataclasses.is_dataclass(body)


class RequestBodyInterceptor(Interceptor):
    """Turns dict/list/model bodies into JSON text.

    Sets ``Content-Type: application/json`` unless the caller already set a
    content type. Other bodies pass through untouched.
    """

    @property
    def name(self) -> str:
        return REQUEST_BODY_INTERCEPTOR_NAME

    @property
    def order(self) -> int:
        return REQUEST_BODY_INTERCEPTOR_ORDER

    def intercept(self, exchange: FetchExchange) -> None:
        request = exchange.request
        if request.body is None or not is_structured_body(request.body):
            return

        request.body = to_json(request.body).decode("utf-8")
        if not has_header(request.headers, CONTENT_TYPE_HEADER):
            request.headers[CONTENT_TYPE_HEADER] = str(
                ContentTypeValues.APPLICATION_JSON
            )
