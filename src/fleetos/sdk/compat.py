"""Adapters between the async core and other calling conventions.

The models only return awaitables.  Callers that prefer completion callbacks
use :func:`with_callback`; synchronous callers (the CLI) use :func:`run_sync`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

__all__ = ["Callback", "run_sync", "with_callback"]

T = TypeVar("T")

Callback = Callable[[Optional[BaseException], Any], None]

_log = logging.getLogger("fleetos.sdk.compat")


def run_sync(awaitable: Awaitable[T]) -> T:
    """Run ``awaitable`` to completion on a fresh event loop and return its result."""

    async def _main() -> T:
        return await awaitable

    return asyncio.run(_main())


def with_callback(awaitable: Awaitable[T], callback: Callback) -> "asyncio.Task[T]":
    """Schedule ``awaitable`` and report its outcome as ``callback(error, result)``.

    Must be called from a running event loop.  The callback fires exactly once:
    with ``(None, result)`` on success, ``(exc, None)`` on failure or
    cancellation.  The returned task still carries the outcome for awaiting.
    """
    task = asyncio.ensure_future(awaitable)

    def _done(fut: "asyncio.Future[T]") -> None:
        if fut.cancelled():
            error: BaseException | None = asyncio.CancelledError()
            result = None
        else:
            error = fut.exception()
            result = None if error is not None else fut.result()
        try:
            callback(error, result)
        except Exception:
            _log.exception("compat: callback raised")

    task.add_done_callback(_done)
    return task
