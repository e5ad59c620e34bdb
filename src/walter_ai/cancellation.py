"""
Cooperative cancellation for Walter calls.

A ``CancelToken`` is handed down from the caller to every network call and
delay. ``race`` runs one awaitable against a timeout and a token, whichever
finishes first wins and the others are cancelled and drained before
returning.
"""

import asyncio
from typing import Any, Awaitable, Optional, TypeVar

from walter_ai.errors import RequestCancelled, ResponseTimeout

T = TypeVar("T")


class CancelToken:
    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

    def raise_if_cancelled(self, what: str = "Request") -> None:
        if self._event.is_set():
            raise RequestCancelled(f"{what} was cancelled")

    def __repr__(self) -> str:
        return f"CancelToken(cancelled={self.cancelled})"


async def race(
    awaitable: Awaitable[T],
    cancel_token: Optional[CancelToken],
    timeout: Optional[float],
    what: str = "Request",
) -> T:
    """Await ``awaitable`` unless the timeout or the token fires first."""
    if cancel_token is not None and cancel_token.cancelled:
        # never started: close the coroutine so it does not warn
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise RequestCancelled(f"{what} was cancelled")

    task: asyncio.Future[Any] = asyncio.ensure_future(awaitable)
    waiters: set[asyncio.Future[Any]] = {task}
    cancel_waiter: Optional[asyncio.Future[Any]] = None
    if cancel_token is not None:
        cancel_waiter = asyncio.ensure_future(cancel_token.wait())
        waiters.add(cancel_waiter)

    try:
        done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [w for w in waiters if not w.done()]
        for w in pending:
            w.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if task in done:
        return task.result()
    if cancel_waiter is not None and cancel_waiter in done:
        raise RequestCancelled(f"{what} was cancelled")
    raise ResponseTimeout(f"{what} timed out after {timeout:g}s")


async def sleep(seconds: float, cancel_token: Optional[CancelToken] = None) -> None:
    """Delay that ends early with ``RequestCancelled`` when the token fires."""
    if cancel_token is None:
        await asyncio.sleep(seconds)
        return
    cancel_token.raise_if_cancelled()
    try:
        await asyncio.wait_for(cancel_token.wait(), timeout=max(seconds, 0))
    except asyncio.TimeoutError:
        return
    raise RequestCancelled()
