"""Built-in interceptors shipped with every fetcher.

Request phase, in order:
- UrlResolveInterceptor: base URL, path parameters and query string
- RequestBodyInterceptor: JSON serialization of structured bodies
- FetchInterceptor: the network call, with timeout and abort

Response phase:
- ValidateStatusInterceptor: rejects statuses outside the accepted range
"""

from .fetch import FETCH_INTERCEPTOR_NAME, FETCH_INTERCEPTOR_ORDER, FetchInterceptor
from .request_body import (
    REQUEST_BODY_INTERCEPTOR_NAME,
    REQUEST_BODY_INTERCEPTOR_ORDER,
    RequestBodyInterceptor,
)
from .url_resolve import (
    URL_RESOLVE_INTERCEPTOR_NAME,
    URL_RESOLVE_INTERCEPTOR_ORDER,
    UrlResolveInterceptor,
)
from .validate_status import (
    VALIDATE_STATUS_INTERCEPTOR_NAME,
    VALIDATE_STATUS_INTERCEPTOR_ORDER,
    ValidateStatusInterceptor,
    default_validate_status,
)


__all__ = [
    "FETCH_INTERCEPTOR_NAME",
    "FETCH_INTERCEPTOR_ORDER",
    "REQUEST_BODY_INTERCEPTOR_NAME",
    "REQUEST_BODY_INTERCEPTOR_ORDER",
    "URL_RESOLVE_INTERCEPTOR_NAME",
    "URL_RESOLVE_INTERCEPTOR_ORDER",
    "VALIDATE_STATUS_INTERCEPTOR_NAME",
    "VALIDATE_STATUS_INTERCEPTOR_ORDER",
    "FetchInterceptor",
    "RequestBodyInterceptor",
    "UrlResolveInterceptor",
    "ValidateStatusInterceptor",
    "default_validate_status",
]
