"""httpfetcher: an async HTTP client built around an interceptor pipeline."""

from ._version import __version__
from .errors import (
    ConfigurationError,
    ExchangeError,
    FetchAbortedError,
    FetcherError,
    FetcherNotFoundError,
    FetchTimeoutError,
    HttpStatusValidationError,
    MissingPathParameterError,
)
from .exchange import FetchExchange
from .fetcher import (
    DEFAULT_FETCH_OPTIONS,
    DEFAULT_REQUEST_OPTIONS,
    Fetcher,
    NamedFetcher,
    RequestOptions,
    merge_request_options,
)
from .interceptor import (
    Err,
    FunctionInterceptor,
    Interceptor,
    InterceptorManager,
    InterceptorRegistry,
    Ok,
)
from .registrar import FetcherRegistrar, fetcher_registrar
from .request import (
    ContentTypeValues,
    FetchRequest,
    FormData,
    HttpMethod,
    UrlParams,
    merge_request,
)
from .result_extractor import ResultExtractors
from .timeout import AbortController, resolve_timeout
from .transport import HttpxTransport, Transport
from .url_template import (
    ExpressUrlTemplateResolver,
    UriTemplateResolver,
    UrlTemplateResolver,
    UrlTemplateStyle,
)


__all__ = [
    "DEFAULT_FETCH_OPTIONS",
    "DEFAULT_REQUEST_OPTIONS",
    "AbortController",
    "ConfigurationError",
    "ContentTypeValues",
    "Err",
    "ExchangeError",
    "ExpressUrlTemplateResolver",
    "FetchAbortedError",
    "FetchExchange",
    "FetchRequest",
    "FetchTimeoutError",
    "Fetcher",
    "FetcherError",
    "FetcherNotFoundError",
    "FetcherRegistrar",
    "FormData",
    "FunctionInterceptor",
    "HttpMethod",
    "HttpStatusValidationError",
    "HttpxTransport",
    "Interceptor",
    "InterceptorManager",
    "InterceptorRegistry",
    "MissingPathParameterError",
    "NamedFetcher",
    "Ok",
    "RequestOptions",
    "ResultExtractors",
    "Transport",
    "UriTemplateResolver",
    "UrlParams",
    "UrlTemplateResolver",
    "UrlTemplateStyle",
    "__version__",
    "fetcher_registrar",
    "merge_request",
    "merge_request_options",
    "resolve_timeout",
]
