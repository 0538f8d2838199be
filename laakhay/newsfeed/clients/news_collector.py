"""High-level NewsCollector for session-scoped news collection.

This wraps the chunk planner, the windowed executor and a fetch capability
and exposes a developer-friendly API for scripts and UI layers:

- collect(config) runs one request end to end and returns a RunSummary
- stop() requests cooperative cancellation of the active run
- items / remove(id) read and edit the accumulated results
- export_csv() renders everything collected so far

Notes:
- All state is in memory and lives as long as the collector.
- Only one run may be active per collector at a time.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from pathlib import Path

from ..core.enums import GenerationMode
from ..core.exceptions import RunInProgressError
from ..fetchers import GeminiNewsFetcher, NewsFetcher
from ..io.csv_export import to_csv, write_csv
from ..models import GenerationConfig, NewsItem
from ..runtime.accumulator import ResultAccumulator
from ..runtime.cancellation import CancellationToken
from ..runtime.chunking import ChunkExecutor, ChunkPlanner, ChunkPolicy, RunSummary
from ..runtime.chunking.executors import ProgressCallback

logger = logging.getLogger(__name__)

FetcherFactory = Callable[[GenerationMode], NewsFetcher]


class NewsCollector:
    """Session driver: plans, runs, stops, edits and exports."""

    def __init__(
        self,
        fetcher_factory: FetcherFactory | None = None,
        *,
        policy: ChunkPolicy | None = None,
        accumulator: ResultAccumulator | None = None,
        on_progress: ProgressCallback | None = None,
        api_key: str | None = None,
    ) -> None:
        """Create a collector.

        Args:
            fetcher_factory: Builds the fetch capability for a mode
                (defaults to GeminiNewsFetcher)
            policy: Chunking/scheduling policy
            accumulator: Result store (a new one by default)
            on_progress: Receives status strings
            api_key: Passed to the default Gemini fetcher
        """
        self._policy = policy or ChunkPolicy()
        self._planner = ChunkPlanner(self._policy)
        self._executor = ChunkExecutor(self._policy)
        self._accumulator = accumulator if accumulator is not None else ResultAccumulator()
        self._fetcher_factory = fetcher_factory or (
            lambda mode: GeminiNewsFetcher(mode, api_key=api_key)
        )
        self._on_progress = on_progress
        self._token: CancellationToken | None = None
        self._running = False
        self._progress = ""
        self._last_error: Exception | None = None

    # ----------------------
    # Lifecycle
    # ----------------------
    async def collect(self, config: GenerationConfig) -> RunSummary:
        """Run one collection request.

        Args:
            config: Scope, dates, mode and density of the request

        Returns:
            RunSummary (COMPLETED or STOPPED)

        Raises:
            RunInProgressError: If a run is already active
            PlanningInputError: If the date range is invalid
            FetchFatalError: If a chunk failed fatally (after its window drained)
        """
        if self._running:
            raise RunInProgressError("A collection run is already in progress")

        self._running = True
        self._last_error = None
        # Fresh token per run; asyncio.Event binds to the loop that first waits on it
        token = CancellationToken()
        self._token = token
        fetcher: NewsFetcher | None = None
        try:
            chunks = self._planner.plan(config.date_range, config.items_per_day)
            logger.info(
                f"Collecting {config.scope} {config.date_range} mode={config.mode.value} "
                f"density={config.items_per_day} chunks={len(chunks)}"
            )
            fetcher = self._fetcher_factory(config.mode)
            return await self._executor.execute(
                chunks=chunks,
                scope=config.scope,
                fetch_chunk=fetcher.fetch,
                on_items=self._accumulator.append,
                on_progress=self._report,
                token=token,
            )
        except Exception as e:
            self._last_error = e
            raise
        finally:
            self._running = False
            self._token = None
            if fetcher is not None:
                await self._close_fetcher(fetcher)

    def stop(self) -> None:
        """Request a cooperative stop; takes effect at the next window boundary."""
        if self._running and self._token is not None:
            self._token.cancel()

    # ----------------------
    # Results
    # ----------------------
    @property
    def items(self) -> list[NewsItem]:
        return self._accumulator.all()

    @property
    def count(self) -> int:
        return self._accumulator.count()

    def remove(self, item_id: str) -> bool:
        """Delete an item by id; removing an unknown id is a no-op."""
        return self._accumulator.remove(item_id)

    def clear(self) -> None:
        self._accumulator.clear()

    def export_csv(self, path: str | Path | None = None) -> str:
        """Render collected items as CSV, optionally writing them to ``path``."""
        items = self._accumulator.all()
        if path is not None:
            write_csv(items, path)
        return to_csv(items)

    # ----------------------
    # Status
    # ----------------------
    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def progress(self) -> str:
        """Most recent status string."""
        return self._progress

    @property
    def last_error(self) -> Exception | None:
        """Error that ended the most recent run, if any."""
        return self._last_error

    async def _report(self, message: str) -> None:
        self._progress = message
        if self._on_progress is None:
            return
        result = self._on_progress(message)
        if inspect.isawaitable(result):
            await result

    async def _close_fetcher(self, fetcher: NewsFetcher) -> None:
        close = getattr(fetcher, "close", None)
        if close is None:
            return
        try:
            result = close()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.warning(f"Failed to close fetcher: {e}")

    async def __aenter__(self) -> NewsCollector:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
