"""Chunked, concurrency-bounded, cancellable fetch orchestration.

Architecture:
    The chunking layer consists of:
    - definitions.py: Chunk metadata structures (ChunkPolicy, Chunk, outcomes, run state)
    - planners.py: Chunk planning logic (date range + density -> chunks)
    - executors.py: Windowed execution (bounded fan-out, failure isolation, cancellation)
    - telemetry.py: Structured logging

Usage:
    planner = ChunkPlanner(policy)
    chunks = planner.plan(DateRange(start, end), density=1.25)
    summary = await ChunkExecutor(policy).execute(
        chunks=chunks, scope="S&P 500 ESG Index", fetch_chunk=fetcher.fetch,
        on_items=accumulator.append, token=token,
    )
"""

from __future__ import annotations

from ...models import DateRange
from .definitions import (
    Chunk,
    ChunkPolicy,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    RunState,
    RunSummary,
)
from .executors import ChunkExecutor, is_fatal_error
from .planners import ChunkPlanner, chunk_span_days, target_count

__all__ = [
    "DateRange",
    "Chunk",
    "ChunkPolicy",
    "FetchOutcome",
    "FetchSuccess",
    "FetchFailure",
    "RunState",
    "RunSummary",
    "ChunkPlanner",
    "ChunkExecutor",
    "chunk_span_days",
    "target_count",
    "is_fatal_error",
]
