"""Small standalone helpers shipped alongside the outcome type."""

from __future__ import annotations

import asyncio
from typing import Optional, TypeGuard, TypeVar

T = TypeVar("T")


def not_null(x: Optional[T]) -> TypeGuard[T]:
    """Type guard that is true when the input is not None.

    Handy with ``filter()`` to narrow ``list[T | None]`` to ``list[T]``.
    """
    return x is not None


async def sleep(millis: float) -> None:
    """Suspend the current task for at least ``millis`` milliseconds."""
    if millis < 0:
        raise ValueError(f"Sleep duration cannot be negative, got {millis}")
    loop = asyncio.get_running_loop()
    deadline = loop.time() + millis / 1000
    await asyncio.sleep(millis / 1000)
    # The loop may wake a handle up to one clock tick early
    while (remaining := deadline - loop.time()) > 0:
        await asyncio.sleep(remaining)
