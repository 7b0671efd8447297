"""Timeout resolution and cancellation for the terminal network call."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from httpfetcher.errors import FetchAbortedError, FetchTimeoutError


if TYPE_CHECKING:
    import httpx

    from httpfetcher.request import FetchRequest
    from httpfetcher.transport import Transport


__all__ = ["AbortController", "resolve_timeout", "timeout_fetch"]

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def resolve_timeout(
    request_timeout: float | None = None, options_timeout: float | None = None
) -> float | None:
    """Return the request timeout if set, else the fetcher default, else None."""
    if request_timeout is not None:
        return request_timeout
    return options_timeout


class AbortController:
    """Single cancellation token shared by a request and its timeout timer."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: Any = None

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    def abort(self, reason: Any = None) -> None:
        """Signal cancellation. Only the first reason is kept."""
        if self.aborted:
            return
        self.reason = reason if reason is not None else FetchAbortedError()
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def abort_error(self) -> BaseException:
        """Exception to raise for the recorded abort reason."""
        if isinstance(self.reason, BaseException):
            return self.reason
        return FetchAbortedError(reason=self.reason)


async def race_abort(awaitable: Awaitable[T], controller: AbortController) -> T:
    """Await ``awaitable`` unless ``controller`` is aborted first.

    The losing side is cancelled and awaited, so no task outlives the call.
    """
    if controller.aborted:
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise controller.abort_error()

    send_task = asyncio.ensure_future(awaitable)
    abort_task = asyncio.ensure_future(controller.wait())
    try:
        await asyncio.wait(
            {send_task, abort_task}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        pending = [task for task in (send_task, abort_task) if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if send_task.done() and not send_task.cancelled():
        return send_task.result()
    raise controller.abort_error()


def _on_timeout(controller: AbortController, request: FetchRequest) -> None:
    logger.debug(
        "fetch_timeout",
        method=str(request.method),
        url=request.url,
        timeout=request.timeout,
    )
    controller.abort(FetchTimeoutError(request))


async def timeout_fetch(request: FetchRequest, transport: Transport) -> httpx.Response:
    """Send ``request`` through ``transport`` honoring timeout and abort.

    When a caller-supplied ``abort_controller`` is present it is the only
    cancellation token used; the timeout timer aborts that controller instead
    of creating a second one.

    Raises:
        FetchTimeoutError: If the timer fires before the transport settles.
        FetchAbortedError: If the caller aborts without an exception reason.
    """
    timeout = request.timeout
    controller = request.abort_controller
    if not timeout and controller is None:
        return await transport.send(request.url, request)

    if controller is None:
        controller = AbortController()
        request.abort_controller = controller

    timer: asyncio.TimerHandle | None = None
    if timeout:
        timer = asyncio.get_running_loop().call_later(
            timeout, _on_timeout, controller, request
        )
    try:
        return await race_abort(transport.send(request.url, request), controller)
    finally:
        if timer is not None:
            timer.cancel()
