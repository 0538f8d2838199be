"""Chunk planning logic for determining chunk windows.

This module provides the ChunkPlanner class that determines how to split
a dated request into bounded sub-requests sized from the requested density.
"""

from __future__ import annotations

import math
from datetime import timedelta

from ...models import DateRange
from .definitions import Chunk, ChunkPolicy
from .telemetry import log_chunk_plan


def chunk_span_days(density: float, policy: ChunkPolicy) -> int:
    """Calculate how many calendar days one chunk should span.

    Args:
        density: Requested items per day (clamped to the policy floor)
        policy: Chunking policy

    Returns:
        Span in days, clamped to [min_chunk_days, max_chunk_days]

    Examples:
        >>> chunk_span_days(1.0, ChunkPolicy())
        25
        >>> chunk_span_days(100.0, ChunkPolicy())
        5
        >>> chunk_span_days(0.0, ChunkPolicy())
        60
    """
    raw_days = math.ceil(policy.target_items_per_request / policy.effective_density(density))
    return max(policy.min_chunk_days, min(raw_days, policy.max_chunk_days))


def target_count(days: int, density: float) -> int:
    """Items to request for a span of ``days`` at ``density`` items/day."""
    # Round first so float noise (10 * 1.1 == 11.000000000000002) does not bump the ceiling
    return math.ceil(round(days * density, 9))


class ChunkPlanner:
    """Plans chunk windows for dated requests.

    The planner takes a date range and a density (items per day) and walks
    forward from the range start in fixed strides, emitting one chunk per
    stride with a target item count proportional to its length.
    """

    def __init__(self, policy: ChunkPolicy | None = None) -> None:
        """Initialize chunk planner.

        Args:
            policy: Chunking policy (defaults to ChunkPolicy())
        """
        self._policy = policy or ChunkPolicy()

    @property
    def policy(self) -> ChunkPolicy:
        return self._policy

    def plan(self, date_range: DateRange, density: float) -> list[Chunk]:
        """Plan chunks for a request.

        Args:
            date_range: Overall range to cover
            density: Requested items per calendar day

        Returns:
            Ordered, contiguous, non-overlapping chunks covering the range.
            Empty when the range is empty.
        """
        effective = self._policy.effective_density(density)
        span_days = chunk_span_days(density, self._policy)
        stride = timedelta(days=span_days)

        chunks: list[Chunk] = []
        cursor = date_range.start

        while cursor < date_range.end:
            chunk_end = min(cursor + stride, date_range.end)
            sub_range = DateRange(start=cursor, end=chunk_end)
            count = target_count(sub_range.days, effective)

            if count > 0:
                chunks.append(
                    Chunk(date_range=sub_range, target_count=count, chunk_index=len(chunks))
                )

            cursor = chunk_end

        log_chunk_plan(
            total_chunks=len(chunks),
            span_days=span_days,
            density=effective,
            total_target=sum(c.target_count for c in chunks),
            start_date=date_range.start,
            end_date=date_range.end,
        )

        return chunks
