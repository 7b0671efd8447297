"""Exception hierarchy for the fetcher pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from httpfetcher.exchange import FetchExchange
    from httpfetcher.request import FetchRequest


__all__ = [
    "ConfigurationError",
    "ExchangeError",
    "FetchAbortedError",
    "FetchTimeoutError",
    "FetcherError",
    "FetcherNotFoundError",
    "HttpStatusValidationError",
    "MissingPathParameterError",
]


class FetcherError(Exception):
    """Base exception for all fetcher errors.

    Args:
        message: Human readable message. Falls back to the cause's message.
        cause: Optional originating exception, also set as ``__cause__``.
    """

    default_message = "An error occurred in the fetcher"

    def __init__(
        self, message: str | None = None, cause: BaseException | None = None
    ) -> None:
        self.message = message or (str(cause) if cause else "") or self.default_message
        self.cause = cause
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause


class ExchangeError(FetcherError):
    """Raised when an exchange fails and the error phase did not recover it.

    Always carries the full exchange (request, response if any and the
    originating error) for diagnostics.
    """

    def __init__(self, exchange: FetchExchange, message: str | None = None) -> None:
        self.exchange = exchange
        error = exchange.error
        if not message:
            message = str(error) if error is not None else ""
        if not message and exchange.response is not None:
            message = exchange.response.reason_phrase
        if not message:
            message = f"Request to {exchange.request.url} failed during exchange"
        super().__init__(message, error)

    @property
    def request(self) -> FetchRequest:
        return self.exchange.request


class HttpStatusValidationError(ExchangeError):
    """Raised by status validation when the response status is rejected."""

    def __init__(self, exchange: FetchExchange) -> None:
        status = exchange.response.status_code if exchange.response else None
        super().__init__(
            exchange,
            f"Request failed with status code {status} for {exchange.request.url}",
        )
        self.status_code = status


class FetchTimeoutError(FetcherError):
    """Raised when the transport call does not settle within the timeout."""

    def __init__(self, request: FetchRequest) -> None:
        self.request = request
        self.timeout = request.timeout
        method = str(request.method or "GET").upper()
        super().__init__(
            f"Request timeout of {request.timeout}s exceeded for {method} {request.url}"
        )


class FetchAbortedError(FetcherError):
    """Raised when the caller aborts an in-flight request."""

    default_message = "Request was aborted"

    def __init__(self, message: str | None = None, reason: Any = None) -> None:
        super().__init__(message)
        self.reason = reason


class MissingPathParameterError(FetcherError):
    """Raised when a URL template token has no bound value."""

    def __init__(self, name: str, template: str) -> None:
        self.name = name
        self.template = template
        super().__init__(f"Missing required path parameter: {name}")


class FetcherNotFoundError(FetcherError):
    """Raised when a named fetcher is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Fetcher {name} not found")


class ConfigurationError(FetcherError):
    """Raised when fetcher configuration loading or validation fails."""

    pass
