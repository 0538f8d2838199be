"""In-memory result accumulator."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..models import NewsItem

logger = logging.getLogger(__name__)


class ResultAccumulator:
    """Ordered collection of fetched items for the session.

    Insertion order is preserved. ``remove`` is the only in-place mutation
    and is idempotent. Duplicate ids are not rejected; ids are assumed to be
    unique because the fetcher assigns them.

    Removal is not coordinated with a running scheduler. Callers should
    avoid removing while a run is active; appends and removals on disjoint
    ids commute.
    """

    def __init__(self, items: Iterable[NewsItem] | None = None) -> None:
        self._items: list[NewsItem] = list(items) if items is not None else []

    def append(self, items: Iterable[NewsItem]) -> int:
        """Append items in order.

        Returns:
            Number of items appended
        """
        batch = list(items)
        self._items.extend(batch)
        return len(batch)

    def remove(self, item_id: str) -> bool:
        """Remove every item with ``item_id``.

        Returns:
            True if anything was removed
        """
        before = len(self._items)
        self._items = [item for item in self._items if item.id != item_id]
        removed = before - len(self._items)
        if removed:
            logger.debug(f"Removed item {item_id}")
        return removed > 0

    def all(self) -> list[NewsItem]:
        """Snapshot of all items in insertion order."""
        return list(self._items)

    def count(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[NewsItem]:
        return iter(list(self._items))
