"""Chunking metadata definitions and policy structures.

This module defines the data structures used to describe how a request is
split into chunks and how those chunks are scheduled, plus the per-chunk
outcomes and per-run state the scheduler tracks.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...core import config
from ...core.enums import RunStatus
from ...models import DateRange, NewsItem


@dataclass(frozen=True)
class ChunkPolicy:
    """Chunking and scheduling policy.

    Attributes:
        target_items_per_request: Items a single fetch should aim to return
        min_chunk_days: Lower bound on a chunk's span (avoids tiny requests)
        max_chunk_days: Upper bound on a chunk's span (keeps requests reliable)
        min_density: Floor applied to the requested items-per-day
        concurrency: Maximum number of fetches in flight at once
        batch_pause: Seconds to wait between windows
    """

    target_items_per_request: int = config.DEFAULT_TARGET_ITEMS_PER_REQUEST
    min_chunk_days: int = config.DEFAULT_MIN_CHUNK_DAYS
    max_chunk_days: int = config.DEFAULT_MAX_CHUNK_DAYS
    min_density: float = config.MIN_EFFECTIVE_DENSITY
    concurrency: int = config.DEFAULT_CONCURRENCY
    batch_pause: float = config.DEFAULT_BATCH_PAUSE_SECONDS

    def __post_init__(self) -> None:
        """Validate policy configuration."""
        if self.target_items_per_request < 1:
            raise ValueError("target_items_per_request must be positive")
        if self.min_chunk_days < 1:
            raise ValueError("min_chunk_days must be at least 1")
        if self.max_chunk_days < self.min_chunk_days:
            raise ValueError("max_chunk_days must be >= min_chunk_days")
        if self.min_density <= 0:
            raise ValueError("min_density must be positive")
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if self.batch_pause < 0:
            raise ValueError("batch_pause cannot be negative")

    def effective_density(self, density: float) -> float:
        """Clamp a requested density to the policy floor."""
        return max(self.min_density, density)


@dataclass(frozen=True)
class Chunk:
    """Plan for a single chunk.

    Attributes:
        date_range: Sub-range this chunk covers
        target_count: Number of items to request for the sub-range
        chunk_index: Zero-based index of this chunk in the overall plan
    """

    date_range: DateRange
    target_count: int
    chunk_index: int = 0

    @property
    def days(self) -> int:
        return self.date_range.days


@dataclass(frozen=True)
class FetchSuccess:
    """Chunk fetched successfully."""

    chunk: Chunk
    items: list[NewsItem]

    is_success = True


@dataclass(frozen=True)
class FetchFailure:
    """Chunk fetch failed.

    Attributes:
        chunk: The chunk that failed
        error: Exception raised by the fetch capability
        is_fatal: Whether the error invalidates the whole run
    """

    chunk: Chunk
    error: Exception
    is_fatal: bool = False

    is_success = False


FetchOutcome = FetchSuccess | FetchFailure


@dataclass
class RunState:
    """Mutable state owned by the scheduler for one run."""

    is_running: bool = False
    cancel_requested: bool = False
    total_succeeded: int = 0
    total_failed: int = 0
    windows_dispatched: int = 0


@dataclass(frozen=True)
class RunSummary:
    """Result of a run that was not aborted by a fatal error.

    Attributes:
        status: COMPLETED or STOPPED
        total_succeeded: Number of items appended to the accumulator
        total_failed: Number of chunks that failed
        chunks_planned: Number of chunks in the plan
        windows_dispatched: Number of windows that were sent out
        message: Terminal progress message
    """

    status: RunStatus
    total_succeeded: int
    total_failed: int
    chunks_planned: int
    windows_dispatched: int
    message: str = field(default="")
