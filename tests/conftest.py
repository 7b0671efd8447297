"""Shared test configuration for httpfetcher tests."""

from collections.abc import Generator

import pytest
import structlog

from httpfetcher.registrar import fetcher_registrar


@pytest.fixture(autouse=True)
def clean_registrar() -> Generator[None, None, None]:
    """Keep the process-wide fetcher registrar isolated between tests."""
    fetcher_registrar.clear()
    yield
    fetcher_registrar.clear()


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()
