"""Result extractors map a completed exchange to the value a caller receives."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

import httpx


if TYPE_CHECKING:
    from httpfetcher.exchange import FetchExchange


__all__ = ["ResultExtractor", "ResultExtractors"]

R = TypeVar("R")

ResultExtractor = Callable[["FetchExchange"], R | Awaitable[R]]


def exchange_result_extractor(exchange: FetchExchange) -> FetchExchange:
    return exchange


def response_result_extractor(exchange: FetchExchange) -> httpx.Response:
    return exchange.required_response


async def json_result_extractor(exchange: FetchExchange) -> Any:
    response = exchange.required_response
    await response.aread()
    return response.json()


async def text_result_extractor(exchange: FetchExchange) -> str:
    response = exchange.required_response
    await response.aread()
    return response.text


async def bytes_result_extractor(exchange: FetchExchange) -> bytes:
    return await exchange.required_response.aread()


class ResultExtractors:
    """Standard extractors selectable per call."""

    EXCHANGE = staticmethod(exchange_result_extractor)
    RESPONSE = staticmethod(response_result_extractor)
    JSON = staticmethod(json_result_extractor)
    TEXT = staticmethod(text_result_extractor)
    BYTES = staticmethod(bytes_result_extractor)
