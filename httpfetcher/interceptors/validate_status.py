"""Response interceptor rejecting unexpected HTTP status codes."""

from collections.abc import Callable

from httpfetcher.errors import HttpStatusValidationError
from httpfetcher.exchange import FetchExchange
from httpfetcher.interceptor import Interceptor

from .constants import TERMINAL_ORDER


VALIDATE_STATUS_INTERCEPTOR_NAME = "ValidateStatusInterceptor"
VALIDATE_STATUS_INTERCEPTOR_ORDER = TERMINAL_ORDER

ValidateStatus = Callable[[int], bool]


def default_validate_status(status: int) -> bool:
    return 200 <= status < 300


class ValidateStatusInterceptor(Interceptor):
    """Raises ``HttpStatusValidationError`` when ``validate_status`` fails.

    Exchanges without a response are ignored.
    """

    def __init__(self, validate_status: ValidateStatus = default_validate_status):
        self.validate_status = validate_status

    @property
    def name(self) -> str:
        return VALIDATE_STATUS_INTERCEPTOR_NAME

    @property
    def order(self) -> int:
        return VALIDATE_STATUS_INTERCEPTOR_ORDER

    def intercept(self, exchange: FetchExchange) -> None:
        if exchange.response is None:
            return
        if self.validate_status(exchange.response.status_code):
            return
        raise HttpStatusValidationError(exchange)
