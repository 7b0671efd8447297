"""Fetcher settings loaded from the environment."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from httpfetcher.errors import ConfigurationError
from httpfetcher.request import CONTENT_TYPE_HEADER, ContentTypeValues
from httpfetcher.url_template import UrlTemplateStyle

from .http import HTTPSettings
from .logging import LoggingSettings


__all__ = ["DEFAULT_HEADERS", "FetcherSettings", "load_settings"]


DEFAULT_HEADERS: dict[str, str] = {
    CONTENT_TYPE_HEADER: ContentTypeValues.APPLICATION_JSON.value,
}


class FetcherSettings(BaseSettings):
    """
    Configuration for a fetcher.

    Values come from keyword arguments, then ``HTTPFETCHER_*`` environment
    variables, then a ``.env`` file. Nested models use ``__`` as delimiter,
    e.g. ``HTTPFETCHER_HTTP__TIMEOUT_READ=30``.
    """

    model_config = SettingsConfigDict(
        env_prefix="HTTPFETCHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    base_url: str = Field(
        default="",
        description="Base URL prepended to relative request URLs",
    )

    headers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_HEADERS),
        description="Default headers sent with every request",
    )

    timeout: float | None = Field(
        default=None,
        description="Default request timeout in seconds; None disables it",
    )

    url_template_style: UrlTemplateStyle = Field(
        default=UrlTemplateStyle.URI_TEMPLATE,
        description="Path parameter syntax: 'uri_template' ({id}) or 'express' (:id)",
    )

    http: HTTPSettings = Field(
        default_factory=HTTPSettings,
        description="HTTP client configuration settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        return v.rstrip("/")


def load_settings(**overrides: object) -> FetcherSettings:
    """Load settings, converting validation failures to ``ConfigurationError``."""
    try:
        return FetcherSettings(**overrides)  # type: ignore[arg-type]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid fetcher configuration: {e}", e) from e
