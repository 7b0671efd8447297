"""Configuration models for httpfetcher."""

from .http import HTTPSettings
from .logging import LoggingSettings
from .settings import DEFAULT_HEADERS, FetcherSettings, load_settings


__all__ = [
    "DEFAULT_HEADERS",
    "FetcherSettings",
    "HTTPSettings",
    "LoggingSettings",
    "load_settings",
]
