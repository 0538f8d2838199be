"""Structured logging for chunking operations.

This module provides telemetry hooks for planning and scheduling, emitting
structured logs for observability.
"""

from __future__ import annotations

import logging
from datetime import date

from .definitions import Chunk, RunState

logger = logging.getLogger(__name__)


def log_chunk_plan(
    *,
    total_chunks: int,
    span_days: int,
    density: float,
    total_target: int,
    start_date: date,
    end_date: date,
) -> None:
    """Log chunk plan creation.

    Args:
        total_chunks: Total number of chunks planned
        span_days: Days covered by each full chunk
        density: Effective items-per-day used for sizing
        total_target: Sum of the chunks' target counts
        start_date: Start of the planned range
        end_date: End of the planned range
    """
    logger.info(
        "chunk_plan_created",
        extra={
            "total_chunks": total_chunks,
            "span_days": span_days,
            "density": density,
            "total_target": total_target,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
        },
    )


def log_window_dispatched(
    *,
    scope: str,
    window_index: int,
    total_windows: int,
    chunk_indices: list[int],
) -> None:
    """Log dispatch of a window of concurrent fetches."""
    logger.info(
        "window_dispatched",
        extra={
            "scope": scope,
            "window_index": window_index,
            "total_windows": total_windows,
            "chunk_indices": chunk_indices,
        },
    )


def log_chunk_completed(
    *,
    scope: str,
    chunk: Chunk,
    items_appended: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single chunk.

    Args:
        scope: Scope identifier of the run
        chunk: The completed chunk
        items_appended: Number of items appended from this chunk
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "chunk_completed",
        extra={
            "scope": scope,
            "chunk_index": chunk.chunk_index,
            "date_range": str(chunk.date_range),
            "target_count": chunk.target_count,
            "items_appended": items_appended,
            "latency_ms": latency_ms,
        },
    )


def log_chunk_error(
    *,
    scope: str,
    chunk: Chunk,
    error: Exception,
    is_fatal: bool,
) -> None:
    """Log chunk fetch error."""
    logger.error(
        "chunk_error",
        extra={
            "scope": scope,
            "chunk_index": chunk.chunk_index,
            "date_range": str(chunk.date_range),
            "error_type": type(error).__name__,
            "error_message": str(error),
            "is_fatal": is_fatal,
        },
    )


def log_run_complete(
    *,
    scope: str,
    status: str,
    state: RunState,
    total_latency_ms: float | None = None,
) -> None:
    """Log the terminal state of a run."""
    logger.info(
        "run_complete",
        extra={
            "scope": scope,
            "status": status,
            "total_succeeded": state.total_succeeded,
            "total_failed": state.total_failed,
            "windows_dispatched": state.windows_dispatched,
            "total_latency_ms": total_latency_ms,
        },
    )
