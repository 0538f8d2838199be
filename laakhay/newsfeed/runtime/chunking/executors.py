"""Chunk execution logic for fetching and aggregating chunks.

This module provides the ChunkExecutor class that drives a chunk plan
through a fetch capability in fixed-size windows of concurrent requests,
hands successful results to the caller as they arrive, isolates per-chunk
failures and honours cooperative cancellation between windows.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from time import perf_counter
from typing import Any

from ...core.enums import RunStatus
from ...models import DateRange, NewsItem
from ..cancellation import CancellationToken
from .definitions import (
    Chunk,
    ChunkPolicy,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    RunState,
    RunSummary,
)
from .telemetry import (
    log_chunk_completed,
    log_chunk_error,
    log_run_complete,
    log_window_dispatched,
)

logger = logging.getLogger(__name__)

FetchChunk = Callable[[str, DateRange, int], Awaitable[Sequence[NewsItem]]]
ItemsCallback = Callable[[list[NewsItem]], Any]
ProgressCallback = Callable[[str], Awaitable[None]] | Callable[[str], None]


def is_fatal_error(error: BaseException) -> bool:
    """Whether an error invalidates the whole run rather than one chunk."""
    return bool(getattr(error, "is_fatal", False))


class ChunkExecutor:
    """Executes chunk plans with bounded concurrency.

    Chunks are dispatched in consecutive windows of ``policy.concurrency``.
    Every window is awaited in full before the next one starts, so no more
    than ``concurrency`` fetches are ever in flight. A fatal failure lets the
    current window drain (sibling successes are still delivered) and is then
    raised to the caller; every other failure is counted and the run goes on.
    """

    def __init__(self, policy: ChunkPolicy | None = None) -> None:
        """Initialize chunk executor.

        Args:
            policy: Scheduling policy (concurrency and inter-batch pause)
        """
        self._policy = policy or ChunkPolicy()
        self._state = RunState()

    @property
    def state(self) -> RunState:
        """State of the current (or most recent) run."""
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    async def execute(
        self,
        *,
        chunks: Sequence[Chunk],
        scope: str,
        fetch_chunk: FetchChunk,
        on_items: ItemsCallback,
        on_progress: ProgressCallback | None = None,
        token: CancellationToken | None = None,
    ) -> RunSummary:
        """Execute chunk plans window by window.

        Args:
            chunks: Planned chunks, in order
            scope: Scope identifier passed through to the fetch capability
            fetch_chunk: Async function ``(scope, date_range, target_count) -> items``
            on_items: Receives each successful chunk's items as soon as it resolves
            on_progress: Optional status-string callback (sync or async)
            token: Cancellation token, checked before each window and during pauses

        Returns:
            RunSummary for a completed or stopped run

        Raises:
            RuntimeError: If this executor is already running
            Exception: The first fatal fetch error, after its window has drained
        """
        if self._state.is_running:
            raise RuntimeError("ChunkExecutor is already running")

        token = token or CancellationToken()
        state = RunState(is_running=True)
        self._state = state

        concurrency = self._policy.concurrency
        total_windows = math.ceil(len(chunks) / concurrency)
        run_start = perf_counter()

        try:
            for window_index, offset in enumerate(range(0, len(chunks), concurrency), start=1):
                if token.is_cancelled:
                    break

                window = list(chunks[offset : offset + concurrency])
                await self._report(
                    on_progress,
                    f"Batch {window_index}/{total_windows}: Crawling {len(window)} parallel "
                    f"segments... | Total: {state.total_succeeded} | Errors: {state.total_failed}",
                )
                log_window_dispatched(
                    scope=scope,
                    window_index=window_index,
                    total_windows=total_windows,
                    chunk_indices=[c.chunk_index for c in window],
                )
                state.windows_dispatched += 1

                fatal = await self._run_window(window, scope, fetch_chunk, on_items, state)
                if fatal is not None:
                    await self._finish(
                        on_progress,
                        scope,
                        RunStatus.ABORTED,
                        f"Aborted: {fatal.error}. Total: {state.total_succeeded}. "
                        f"Errors: {state.total_failed}",
                        state,
                        run_start,
                    )
                    raise fatal.error

                # Rate limit breather between windows
                if offset + concurrency < len(chunks) and not token.is_cancelled:
                    await token.wait(self._policy.batch_pause)

            state.cancel_requested = token.is_cancelled
            if state.cancel_requested:
                status = RunStatus.STOPPED
                message = (
                    f"Stopped by user. Total: {state.total_succeeded}. Errors: {state.total_failed}"
                )
            else:
                status = RunStatus.COMPLETED
                message = (
                    f"Sequence Completed! Total: {state.total_succeeded}. "
                    f"Errors: {state.total_failed}"
                )
            await self._finish(on_progress, scope, status, message, state, run_start)

            return RunSummary(
                status=status,
                total_succeeded=state.total_succeeded,
                total_failed=state.total_failed,
                chunks_planned=len(chunks),
                windows_dispatched=state.windows_dispatched,
                message=message,
            )
        finally:
            state.is_running = False
            state.cancel_requested = False
            token.reset()

    async def _run_window(
        self,
        window: list[Chunk],
        scope: str,
        fetch_chunk: FetchChunk,
        on_items: ItemsCallback,
        state: RunState,
    ) -> FetchFailure | None:
        """Fan out one window and fold outcomes in as they resolve.

        Returns:
            The first fatal failure of the window, if any
        """
        tasks = [
            asyncio.create_task(self._fetch_one(chunk, scope, fetch_chunk)) for chunk in window
        ]
        fatal: FetchFailure | None = None

        try:
            for next_done in asyncio.as_completed(tasks):
                outcome: FetchOutcome = await next_done
                if isinstance(outcome, FetchSuccess):
                    if outcome.items:
                        on_items(outcome.items)
                    state.total_succeeded += len(outcome.items)
                else:
                    state.total_failed += 1
                    if outcome.is_fatal and fatal is None:
                        fatal = outcome
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        return fatal

    async def _fetch_one(self, chunk: Chunk, scope: str, fetch_chunk: FetchChunk) -> FetchOutcome:
        """Fetch a single chunk, converting any failure into an outcome."""
        chunk_start = perf_counter()
        try:
            items = list(await fetch_chunk(scope, chunk.date_range, chunk.target_count) or [])
        except Exception as e:
            fatal = is_fatal_error(e)
            log_chunk_error(scope=scope, chunk=chunk, error=e, is_fatal=fatal)
            return FetchFailure(chunk=chunk, error=e, is_fatal=fatal)

        log_chunk_completed(
            scope=scope,
            chunk=chunk,
            items_appended=len(items),
            latency_ms=(perf_counter() - chunk_start) * 1000.0,
        )
        return FetchSuccess(chunk=chunk, items=items)

    async def _finish(
        self,
        on_progress: ProgressCallback | None,
        scope: str,
        status: RunStatus,
        message: str,
        state: RunState,
        run_start: float,
    ) -> None:
        await self._report(on_progress, message)
        log_run_complete(
            scope=scope,
            status=status.value,
            state=state,
            total_latency_ms=(perf_counter() - run_start) * 1000.0,
        )

    async def _report(self, on_progress: ProgressCallback | None, message: str) -> None:
        if on_progress is None:
            return
        try:
            result = on_progress(message)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Progress callback failed: {e}", exc_info=True)
