"""Run a coroutine on the shared I/O loop under a ``CallContext``.

``run_bounded`` is the bridge between the synchronous provider interface and
the async SDK client: the whole coroutine, SDK retries and backoff included,
is bounded by ``ctx.remaining()``, and cancelling ``ctx.token`` cancels the
task on the loop, which aborts the in-flight HTTP request and releases its
pooled connection.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
from typing import Awaitable, Callable, TypeVar

from ..context import CallContext
from .client import get_io_loop

T = TypeVar("T")

POLL_SECONDS = 0.05

DEADLINE_MESSAGE = "context deadline exceeded"


async def _within(make: Callable[[], Awaitable[T]], timeout: float | None) -> T:
    try:
        return await asyncio.wait_for(make(), timeout=timeout)
    except asyncio.TimeoutError:
        raise TimeoutError(DEADLINE_MESSAGE) from None


def run_bounded(make: Callable[[], Awaitable[T]], ctx: CallContext) -> T:
    """Run ``make()`` on the I/O loop and wait for it on the calling thread.

    ``make`` is invoked on the loop, so any per-request value it reads from
    ``ctx`` (such as the remaining time) is taken when the request starts.

    Raises:
        CancelledError: ``ctx.token`` was cancelled before or during the call.
        TimeoutError: ``ctx``'s deadline passed before the call finished.
        Exception: Whatever the coroutine itself raised.
    """
    ctx.raise_if_done()
    future = asyncio.run_coroutine_threadsafe(_within(make, ctx.remaining()), get_io_loop())
    while True:
        done, _ = concurrent.futures.wait([future], timeout=POLL_SECONDS)
        if done:
            break
        if ctx.cancelled:
            future.cancel()
            ctx.token.raise_if_cancelled()
        if ctx.expired:
            future.cancel()
            raise TimeoutError(DEADLINE_MESSAGE)
    if future.cancelled():
        ctx.token.raise_if_cancelled()
        raise TimeoutError(DEADLINE_MESSAGE)
    return future.result()


__all__ = ["run_bounded", "DEADLINE_MESSAGE"]
