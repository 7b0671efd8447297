"""Fake transports and fixtures shared across the suite."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable

import httpx
import pytest

from httpfetcher import Fetcher
from httpfetcher.request import FetchRequest


Responder = Callable[[str, FetchRequest], httpx.Response | Awaitable[httpx.Response]]


def ok_responder(url: str, request: FetchRequest) -> httpx.Response:
    return httpx.Response(200, json={"ok": True})


class RecordingTransport:
    """Transport that records every call and answers with ``responder``."""

    def __init__(self, responder: Responder = ok_responder) -> None:
        self.responder = responder
        self.calls: list[tuple[str, FetchRequest]] = []

    async def send(self, url: str, request: FetchRequest) -> httpx.Response:
        self.calls.append((url, request))
        result = self.responder(url, request)
        if inspect.isawaitable(result):
            result = await result
        return result

    @property
    def last_call(self) -> tuple[str, FetchRequest]:
        assert self.calls, "transport was never called"
        return self.calls[-1]


class HangingTransport:
    """Transport whose send never settles unless cancelled."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.cancelled = False

    async def send(self, url: str, request: FetchRequest) -> httpx.Response:
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        raise AssertionError("unreachable")


class FailingTransport:
    """Transport that always raises ``error``."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.calls = 0

    async def send(self, url: str, request: FetchRequest) -> httpx.Response:
        self.calls += 1
        raise self.error


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def fetcher(recording_transport: RecordingTransport) -> Fetcher:
    """Fetcher against ``https://api.example.com`` backed by a recording transport."""
    return Fetcher(
        base_url="https://api.example.com",
        headers={"Content-Type": "application/json"},
        transport=recording_transport,
    )
