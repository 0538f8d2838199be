"""Async retry helper with exponential backoff."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    func: Callable[[], Awaitable[T]],
    *,
    attempts: int = 3,
    base_delay: float = 1.0,
    give_up_on: tuple[type[BaseException], ...] = (),
    description: str = "request",
) -> T:
    """Call ``func`` until it succeeds or attempts run out.

    After the n-th failure the helper sleeps ``base_delay * 2**n`` seconds
    (2s, 4s, ... with the default delay) before trying again. An error that
    carries a ``retry_after`` hint (RateLimitError) waits at least that long.

    Args:
        func: Zero-argument coroutine factory
        attempts: Maximum number of calls
        base_delay: Backoff base in seconds
        give_up_on: Exception types re-raised immediately without retrying
        description: Label used in log messages

    Returns:
        Whatever ``func`` returns on its first success

    Raises:
        Exception: The last error once attempts are exhausted, or any
            ``give_up_on`` error straight away
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    attempt = 0
    while True:
        try:
            return await func()
        except give_up_on:
            raise
        except Exception as e:
            attempt += 1
            logger.warning(f"{description} failed (attempt {attempt}/{attempts}): {e}")
            if attempt >= attempts:
                raise
            delay = base_delay * (2**attempt)
            retry_after = getattr(e, "retry_after", None)
            if retry_after:
                delay = max(delay, float(retry_after))
            await asyncio.sleep(delay)
