"""Fetch capability protocol.

A fetcher turns ``(scope, date_range, target_count)`` into a list of
NewsItem. It signals failures by raising: errors flagged ``is_fatal``
(see FetchFatalError) abort the whole run, anything else only fails the
chunk.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import DateRange, NewsItem


@runtime_checkable
class NewsFetcher(Protocol):
    """Protocol for fetch capability implementations."""

    async def fetch(self, scope: str, date_range: DateRange, target_count: int) -> list[NewsItem]:
        """Fetch up to ``target_count`` items for ``scope`` within ``date_range``.

        Raises:
            FetchFatalError: Credentials missing or rejected
            FetchTransientError: Any per-chunk recoverable failure
        """
        ...

    async def close(self) -> None:
        """Release resources (HTTP sessions etc.)."""
        ...
