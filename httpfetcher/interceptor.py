"""Interceptors, the ordered registry that holds them and the orchestrator.

Three registries make up a pipeline: request, response and error. They are
instances of the same ``InterceptorRegistry`` class; only the
``InterceptorManager`` gives each one its meaning.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable

import structlog

from httpfetcher.errors import ExchangeError
from httpfetcher.exchange import FetchExchange


__all__ = [
    "Err",
    "ExchangeOutcome",
    "FunctionInterceptor",
    "Interceptor",
    "InterceptorManager",
    "InterceptorRegistry",
    "NamedOrdered",
    "Ok",
    "to_sorted",
]

logger = structlog.get_logger(__name__)

DEFAULT_ORDER = 0


@runtime_checkable
class NamedOrdered(Protocol):
    """Anything with a ``name`` and an ``intercept`` method can be registered."""

    @property
    def name(self) -> str: ...

    def intercept(self, exchange: FetchExchange) -> None | Awaitable[None]: ...


class Interceptor(ABC):
    """Base class for a named, ordered pipeline stage.

    Lower ``order`` runs first; interceptors with the same order run in the
    order they were registered. ``intercept`` mutates the exchange in place
    and may be sync or async.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name within a registry."""

    @property
    def order(self) -> int:
        return DEFAULT_ORDER

    @abstractmethod
    def intercept(self, exchange: FetchExchange) -> None | Awaitable[None]:
        """Process the exchange."""


class FunctionInterceptor(Interceptor):
    """Adapts a plain callable into an interceptor."""

    def __init__(
        self,
        name: str,
        func: Callable[[FetchExchange], None | Awaitable[None]],
        order: int = DEFAULT_ORDER,
    ) -> None:
        self._name = name
        self._func = func
        self._order = order

    @property
    def name(self) -> str:
        return self._name

    @property
    def order(self) -> int:
        return self._order

    def intercept(self, exchange: FetchExchange) -> None | Awaitable[None]:
        return self._func(exchange)

    def __repr__(self) -> str:
        return f"FunctionInterceptor(name={self._name!r}, order={self._order})"


T = TypeVar("T")


def order_of(item: Any) -> int:
    """Order of ``item``; objects without one sort as ``DEFAULT_ORDER``."""
    order = getattr(item, "order", None)
    return DEFAULT_ORDER if order is None else order


def to_sorted(
    items: Iterable[T], predicate: Callable[[T], bool] | None = None
) -> list[T]:
    """Return a new list sorted by ``order``, optionally filtered first.

    The sort is stable, so equal orders keep their relative position.
    """
    if predicate is not None:
        items = [item for item in items if predicate(item)]
    return sorted(items, key=order_of)


class InterceptorRegistry:
    """Ordered, name-deduplicated collection of interceptors for one phase.

    The sort happens on every mutation and never on read, so running a phase
    is a plain iteration over an already ordered tuple.
    """

    def __init__(self, interceptors: Iterable[NamedOrdered] = ()) -> None:
        self._interceptors: tuple[NamedOrdered, ...] = ()
        for interceptor in interceptors:
            self.use(interceptor)

    @property
    def interceptors(self) -> tuple[NamedOrdered, ...]:
        return self._interceptors

    @property
    def names(self) -> list[str]:
        return [interceptor.name for interceptor in self._interceptors]

    def __len__(self) -> int:
        return len(self._interceptors)

    def __contains__(self, name: object) -> bool:
        return any(interceptor.name == name for interceptor in self._interceptors)

    def __iter__(self) -> Iterator[NamedOrdered]:
        return iter(self._interceptors)

    def use(self, interceptor: NamedOrdered) -> bool:
        """Register ``interceptor``.

        Returns:
            False, without changing the registry, if the name is taken.
        """
        if interceptor.name in self:
            logger.debug(
                "interceptor_rejected_duplicate",
                interceptor=interceptor.name,
            )
            return False
        self._interceptors = tuple(to_sorted([*self._interceptors, interceptor]))
        logger.debug(
            "interceptor_registered",
            interceptor=interceptor.name,
            order=order_of(interceptor),
        )
        return True

    def eject(self, name: str) -> bool:
        """Remove the interceptor called ``name``; False if it is absent."""
        original = self._interceptors
        self._interceptors = tuple(
            to_sorted(original, lambda interceptor: interceptor.name != name)
        )
        ejected = len(original) != len(self._interceptors)
        if ejected:
            logger.debug("interceptor_ejected", interceptor=name)
        return ejected

    def clear(self) -> None:
        self._interceptors = ()

    async def intercept(self, exchange: FetchExchange) -> None:
        """Run every interceptor in order, awaiting each before the next.

        The first exception aborts the remaining interceptors and propagates.
        """
        for interceptor in self._interceptors:
            result = interceptor.intercept(exchange)
            if inspect.isawaitable(result):
                await result


@dataclass(frozen=True)
class Ok:
    """Pipeline finished, either directly or after recovery."""

    exchange: FetchExchange


@dataclass(frozen=True)
class Err:
    """Pipeline failed and the error phase left an error in place."""

    exchange: FetchExchange
    cause: BaseException


ExchangeOutcome = Ok | Err


def _default_request_interceptors() -> list[NamedOrdered]:
    from httpfetcher.interceptors import (
        FetchInterceptor,
        RequestBodyInterceptor,
        UrlResolveInterceptor,
    )

    return [UrlResolveInterceptor(), RequestBodyInterceptor(), FetchInterceptor()]


def _default_response_interceptors() -> list[NamedOrdered]:
    from httpfetcher.interceptors import ValidateStatusInterceptor

    return [ValidateStatusInterceptor()]


class InterceptorManager:
    """Sequences the request, response and error phases of an exchange.

    The request phase is expected to end with the network call populating
    ``exchange.response``; any interceptor ordered last may do it. Any
    exception from the request or response phase is stored on
    ``exchange.error`` and the error phase runs. If an error interceptor
    clears the error the exchange counts as recovered.
    """

    def __init__(
        self,
        request: InterceptorRegistry | None = None,
        response: InterceptorRegistry | None = None,
        error: InterceptorRegistry | None = None,
    ) -> None:
        self.request = (
            request
            if request is not None
            else InterceptorRegistry(_default_request_interceptors())
        )
        self.response = (
            response
            if response is not None
            else InterceptorRegistry(_default_response_interceptors())
        )
        self.error = error if error is not None else InterceptorRegistry()

    async def run(self, exchange: FetchExchange) -> ExchangeOutcome:
        """Run all phases and report the outcome without raising."""
        try:
            await self.request.intercept(exchange)
            await self.response.intercept(exchange)
            return Ok(exchange)
        except Exception as error:
            exchange.error = error

        try:
            await self.error.intercept(exchange)
        except Exception as error:
            logger.debug(
                "error_interceptor_failed",
                url=exchange.request.url,
                error=str(error),
                original_error=str(exchange.error),
            )
            exchange.error = error

        if exchange.error is None:
            logger.debug("exchange_recovered", url=exchange.request.url)
            return Ok(exchange)
        return Err(exchange, exchange.error)

    async def exchange(self, exchange: FetchExchange) -> FetchExchange:
        """Run the pipeline, raising ``ExchangeError`` if it fails.

        Raises:
            ExchangeError: Wrapping the unrecovered cause, carrying the exchange.
        """
        outcome = await self.run(exchange)
        if isinstance(outcome, Err):
            logger.debug(
                "exchange_failed",
                method=str(exchange.request.method),
                url=exchange.request.url,
                error_type=type(outcome.cause).__name__,
                status_code=(
                    exchange.response.status_code if exchange.response else None
                ),
            )
            raise ExchangeError(outcome.exchange) from outcome.cause
        return outcome.exchange
