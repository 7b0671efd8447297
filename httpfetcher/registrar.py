"""Process-wide registry of named fetchers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from httpfetcher.errors import FetcherNotFoundError


if TYPE_CHECKING:
    from httpfetcher.fetcher import Fetcher


__all__ = ["DEFAULT_FETCHER_NAME", "FetcherRegistrar", "fetcher_registrar"]

logger = structlog.get_logger(__name__)

DEFAULT_FETCHER_NAME = "default"


class FetcherRegistrar:
    """Maps names to fetcher instances.

    Useful when an application talks to several services, each with its own
    base URL, headers and interceptors.
    """

    def __init__(self) -> None:
        self._fetchers: dict[str, Fetcher] = {}

    def register(self, name: str, fetcher: Fetcher) -> None:
        """Register ``fetcher`` under ``name``, replacing any previous one."""
        self._fetchers[name] = fetcher
        logger.debug("fetcher_registered", name=name)

    def unregister(self, name: str) -> bool:
        """Remove ``name``; returns False if it was not registered."""
        removed = self._fetchers.pop(name, None) is not None
        if removed:
            logger.debug("fetcher_unregistered", name=name)
        return removed

    def get(self, name: str) -> Fetcher | None:
        return self._fetchers.get(name)

    def required_get(self, name: str) -> Fetcher:
        """Return the fetcher for ``name``.

        Raises:
            FetcherNotFoundError: If ``name`` is not registered.
        """
        fetcher = self.get(name)
        if fetcher is None:
            raise FetcherNotFoundError(name)
        return fetcher

    @property
    def default(self) -> Fetcher:
        return self.required_get(DEFAULT_FETCHER_NAME)

    @default.setter
    def default(self, fetcher: Fetcher) -> None:
        self.register(DEFAULT_FETCHER_NAME, fetcher)

    @property
    def fetchers(self) -> dict[str, Fetcher]:
        """Snapshot of the registered fetchers."""
        return dict(self._fetchers)

    def clear(self) -> None:
        self._fetchers.clear()


fetcher_registrar = FetcherRegistrar()
