"""Fail-fast concurrent execution of independent ledger walks."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any


async def ledger_gather_or_cancel(*awaitables: Awaitable[Any]) -> list[Any]:
    """Await all awaitables concurrently, cancelling the rest on the first failure.

    Unlike a bare `asyncio.gather`, a failing branch does not leave its siblings
    paginating in the background, and sibling exceptions are always retrieved.

    Args:
        awaitables: Independent coroutines or futures.

    Returns:
        list[Any]: Results in argument order.

    Raises:
        Exception: The first exception raised by any awaitable.
    """

    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


__all__ = ["ledger_gather_or_cancel"]
