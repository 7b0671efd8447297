"""The exchange record that flows through the interceptor chain."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from httpfetcher.errors import ExchangeError
from httpfetcher.request import FetchRequest


if TYPE_CHECKING:
    from httpfetcher.fetcher import Fetcher
    from httpfetcher.result_extractor import ResultExtractor


__all__ = ["FetchExchange"]


@dataclass(eq=False)
class FetchExchange:
    """Per-call record of request, response, error and shared attributes.

    An exchange is created by the fetcher for exactly one logical request,
    passed by reference through one pipeline run and then discarded.
    Interceptors mutate it in place.

    ``attributes`` is free-form storage for interceptors to talk to each
    other; the pipeline itself never reads it. Setting ``error`` to ``None``
    from an error interceptor marks the failure as handled.
    """

    fetcher: Fetcher | None
    request: FetchRequest
    response: httpx.Response | None = None
    error: BaseException | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    result_extractor: ResultExtractor[Any] | None = None

    def has_error(self) -> bool:
        return self.error is not None

    def has_response(self) -> bool:
        return self.response is not None

    @property
    def required_response(self) -> httpx.Response:
        """The response, raising ``ExchangeError`` if none was received."""
        if self.response is None:
            raise ExchangeError(
                self, f"Request to {self.request.url} failed with no response"
            )
        return self.response

    async def extract_result(self) -> Any:
        """Convert this exchange into the caller-visible value.

        Raises:
            ExchangeError: If the exchange still carries an unresolved error.
        """
        if self.error is not None:
            raise ExchangeError(self)
        if self.result_extractor is None:
            return self
        result = self.result_extractor(self)
        if inspect.isawaitable(result):
            result = await result
        return result
