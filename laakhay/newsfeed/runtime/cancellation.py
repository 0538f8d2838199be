"""Cooperative cancellation token.

The scheduler only checks the token at window boundaries and during the
inter-batch pause; an in-flight fetch is never interrupted.
"""

from __future__ import annotations

import asyncio


class CancellationToken:
    """Explicit stop flag passed into a run."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Safe to call repeatedly."""
        self._event.set()

    def reset(self) -> None:
        """Clear a previous request so the token can be reused."""
        self._event.clear()

    async def wait(self, timeout: float | None = None) -> bool:
        """Wait until cancellation is requested or ``timeout`` elapses.

        Returns:
            True if cancellation was requested
        """
        if timeout is not None and timeout <= 0:
            return self.is_cancelled
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except TimeoutError:
            pass
        return self.is_cancelled
