"""Unit tests for windowed chunk execution."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta

import pytest

from laakhay.newsfeed.core import AuthError, FetchTransientError, RunStatus
from laakhay.newsfeed.models import NewsItem
from laakhay.newsfeed.runtime import CancellationToken, ResultAccumulator
from laakhay.newsfeed.runtime.chunking import Chunk, ChunkExecutor, ChunkPolicy, DateRange

SCOPE = "S&P 500 ESG Index"


def make_chunks(n: int, count: int = 2) -> list[Chunk]:
    start = date(2024, 1, 1)
    return [
        Chunk(
            date_range=DateRange(
                start + timedelta(days=5 * i), start + timedelta(days=5 * (i + 1))
            ),
            target_count=count,
            chunk_index=i,
        )
        for i in range(n)
    ]


def make_items(date_range: DateRange, n: int) -> list[NewsItem]:
    tag = date_range.start.isoformat()
    return [
        NewsItem(id=f"SYN-{tag}-{i}", timestamp=tag, text=f"item {i}", source="test", scope=SCOPE)
        for i in range(n)
    ]


class FakeFetcher:
    """Fetch capability double recording calls and concurrency."""

    def __init__(self, delay: float = 0.0, failures: dict | None = None) -> None:
        self.delay = delay
        self.failures = failures or {}
        self.calls: list[DateRange] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, scope: str, date_range: DateRange, target_count: int):
        self.calls.append(date_range)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            error = self.failures.get(date_range.start)
            if error is not None:
                raise error
            return make_items(date_range, target_count)
        finally:
            self.in_flight -= 1


class RecordingToken(CancellationToken):
    """Token that records pauses instead of sleeping."""

    def __init__(self) -> None:
        super().__init__()
        self.pauses: list[float | None] = []

    async def wait(self, timeout: float | None = None) -> bool:
        self.pauses.append(timeout)
        return await super().wait(0)


@pytest.fixture
def accumulator():
    return ResultAccumulator()


@pytest.fixture
def fast_policy():
    return ChunkPolicy(concurrency=3, batch_pause=0)


class TestChunkExecutor:
    """Test ChunkExecutor functionality."""

    @pytest.mark.asyncio
    async def test_single_window_with_transient_failure(self, accumulator, fast_policy):
        """One transient failure is counted; siblings still land; run completes."""
        chunks = make_chunks(3)
        fetcher = FakeFetcher(
            failures={chunks[1].date_range.start: FetchTransientError("boom", status_code=503)}
        )
        messages: list[str] = []

        summary = await ChunkExecutor(fast_policy).execute(
            chunks=chunks,
            scope=SCOPE,
            fetch_chunk=fetcher.fetch,
            on_items=accumulator.append,
            on_progress=messages.append,
        )

        assert summary.status == RunStatus.COMPLETED
        assert summary.total_succeeded == 4
        assert summary.total_failed == 1
        assert summary.windows_dispatched == 1
        assert summary.chunks_planned == 3
        assert accumulator.count() == 4
        assert messages[0] == (
            "Batch 1/1: Crawling 3 parallel segments... | Total: 0 | Errors: 0"
        )
        assert messages[-1] == "Sequence Completed! Total: 4. Errors: 1"

    @pytest.mark.asyncio
    async def test_never_exceeds_concurrency(self, accumulator):
        policy = ChunkPolicy(concurrency=2, batch_pause=0)
        fetcher = FakeFetcher(delay=0.01)

        summary = await ChunkExecutor(policy).execute(
            chunks=make_chunks(7),
            scope=SCOPE,
            fetch_chunk=fetcher.fetch,
            on_items=accumulator.append,
        )

        assert fetcher.max_in_flight == 2
        assert summary.windows_dispatched == 4
        assert len(fetcher.calls) == 7
        assert accumulator.count() == 14

    @pytest.mark.asyncio
    async def test_windows_run_in_order(self, accumulator):
        policy = ChunkPolicy(concurrency=2, batch_pause=0)
        fetcher = FakeFetcher()
        chunks = make_chunks(5)

        await ChunkExecutor(policy).execute(
            chunks=chunks, scope=SCOPE, fetch_chunk=fetcher.fetch, on_items=accumulator.append
        )

        timestamps = [item.timestamp for item in accumulator.all()]
        window_of = {c.date_range.start.isoformat(): c.chunk_index // 2 for c in chunks}
        windows = [window_of[ts] for ts in timestamps]
        assert windows == sorted(windows)

    @pytest.mark.asyncio
    async def test_results_appended_in_arrival_order(self, accumulator, fast_policy):
        chunks = make_chunks(2, count=1)

        async def fetch(scope, date_range, target_count):
            if date_range == chunks[0].date_range:
                await asyncio.sleep(0.05)
            return make_items(date_range, target_count)

        await ChunkExecutor(fast_policy).execute(
            chunks=chunks, scope=SCOPE, fetch_chunk=fetch, on_items=accumulator.append
        )

        assert [item.timestamp for item in accumulator.all()] == ["2024-01-06", "2024-01-01"]

    @pytest.mark.asyncio
    async def test_pause_only_between_windows(self, accumulator):
        policy = ChunkPolicy(concurrency=3, batch_pause=1.5)
        token = RecordingToken()

        await ChunkExecutor(policy).execute(
            chunks=make_chunks(7),
            scope=SCOPE,
            fetch_chunk=FakeFetcher().fetch,
            on_items=accumulator.append,
            token=token,
        )

        assert token.pauses == [1.5, 1.5]

    @pytest.mark.asyncio
    async def test_cancel_during_pause_stops_next_window(self, accumulator):
        policy = ChunkPolicy(concurrency=2, batch_pause=5.0)
        fetcher = FakeFetcher()
        token = CancellationToken()
        messages: list[str] = []
        asyncio.get_running_loop().call_later(0.05, token.cancel)

        summary = await asyncio.wait_for(
            ChunkExecutor(policy).execute(
                chunks=make_chunks(6),
                scope=SCOPE,
                fetch_chunk=fetcher.fetch,
                on_items=accumulator.append,
                on_progress=messages.append,
                token=token,
            ),
            timeout=2.0,
        )

        assert summary.status == RunStatus.STOPPED
        assert summary.windows_dispatched == 1
        assert len(fetcher.calls) == 2
        assert accumulator.count() == 4
        assert messages[-1] == "Stopped by user. Total: 4. Errors: 0"

    @pytest.mark.asyncio
    async def test_cancel_keeps_in_flight_results(self, accumulator, fast_policy):
        token = CancellationToken()
        chunks = make_chunks(6)

        async def fetch(scope, date_range, target_count):
            token.cancel()
            return make_items(date_range, target_count)

        summary = await ChunkExecutor(fast_policy).execute(
            chunks=chunks, scope=SCOPE, fetch_chunk=fetch, on_items=accumulator.append, token=token
        )

        assert summary.status == RunStatus.STOPPED
        assert summary.windows_dispatched == 1
        assert accumulator.count() == 6

    @pytest.mark.asyncio
    async def test_cancel_before_start(self, accumulator, fast_policy):
        token = CancellationToken()
        token.cancel()
        fetcher = FakeFetcher()

        summary = await ChunkExecutor(fast_policy).execute(
            chunks=make_chunks(3),
            scope=SCOPE,
            fetch_chunk=fetcher.fetch,
            on_items=accumulator.append,
            token=token,
        )

        assert summary.status == RunStatus.STOPPED
        assert fetcher.calls == []
        assert summary.windows_dispatched == 0

    @pytest.mark.asyncio
    async def test_fatal_error_drains_window_then_aborts(self, accumulator, fast_policy):
        chunks = make_chunks(6)
        fetcher = FakeFetcher(
            failures={chunks[1].date_range.start: AuthError("API key is missing")}
        )
        messages: list[str] = []
        executor = ChunkExecutor(fast_policy)

        with pytest.raises(AuthError, match="API key"):
            await executor.execute(
                chunks=chunks,
                scope=SCOPE,
                fetch_chunk=fetcher.fetch,
                on_items=accumulator.append,
                on_progress=messages.append,
            )

        assert len(fetcher.calls) == 3
        assert accumulator.count() == 4
        assert executor.state.total_failed == 1
        assert executor.state.total_succeeded == 4
        assert not executor.is_running
        assert messages[-1] == "Aborted: API key is missing. Total: 4. Errors: 1"

    @pytest.mark.asyncio
    async def test_error_flagged_fatal_by_attribute(self, accumulator, fast_policy):
        class CredentialError(Exception):
            is_fatal = True

        async def fetch(scope, date_range, target_count):
            raise CredentialError("revoked")

        with pytest.raises(CredentialError):
            await ChunkExecutor(fast_policy).execute(
                chunks=make_chunks(4), scope=SCOPE, fetch_chunk=fetch, on_items=accumulator.append
            )

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_per_chunk(self, accumulator, fast_policy):
        async def fetch(scope, date_range, target_count):
            raise KeyError("candidates")

        summary = await ChunkExecutor(fast_policy).execute(
            chunks=make_chunks(4), scope=SCOPE, fetch_chunk=fetch, on_items=accumulator.append
        )

        assert summary.status == RunStatus.COMPLETED
        assert summary.total_failed == 4
        assert summary.total_succeeded == 0

    @pytest.mark.asyncio
    async def test_empty_plan_completes(self, accumulator, fast_policy):
        messages: list[str] = []

        summary = await ChunkExecutor(fast_policy).execute(
            chunks=[],
            scope=SCOPE,
            fetch_chunk=FakeFetcher().fetch,
            on_items=accumulator.append,
            on_progress=messages.append,
        )

        assert summary.status == RunStatus.COMPLETED
        assert summary.windows_dispatched == 0
        assert messages == ["Sequence Completed! Total: 0. Errors: 0"]

    @pytest.mark.asyncio
    async def test_progress_callback_errors_are_ignored(self, accumulator, fast_policy):
        def broken(message: str) -> None:
            raise RuntimeError("ui gone")

        summary = await ChunkExecutor(fast_policy).execute(
            chunks=make_chunks(2),
            scope=SCOPE,
            fetch_chunk=FakeFetcher().fetch,
            on_items=accumulator.append,
            on_progress=broken,
        )

        assert summary.total_succeeded == 4

    @pytest.mark.asyncio
    async def test_async_progress_callback(self, accumulator, fast_policy):
        messages: list[str] = []

        async def report(message: str) -> None:
            messages.append(message)

        await ChunkExecutor(fast_policy).execute(
            chunks=make_chunks(1),
            scope=SCOPE,
            fetch_chunk=FakeFetcher().fetch,
            on_items=accumulator.append,
            on_progress=report,
        )

        assert len(messages) == 2

    @pytest.mark.asyncio
    async def test_state_reset_after_stop(self, accumulator, fast_policy):
        token = CancellationToken()
        token.cancel()
        executor = ChunkExecutor(fast_policy)

        await executor.execute(
            chunks=make_chunks(1),
            scope=SCOPE,
            fetch_chunk=FakeFetcher().fetch,
            on_items=accumulator.append,
            token=token,
        )

        assert not executor.is_running
        assert not executor.state.cancel_requested
        assert not token.is_cancelled

    @pytest.mark.asyncio
    async def test_rejects_concurrent_runs(self, accumulator, fast_policy):
        release = asyncio.Event()

        async def fetch(scope, date_range, target_count):
            await release.wait()
            return []

        executor = ChunkExecutor(fast_policy)
        first = asyncio.create_task(
            executor.execute(
                chunks=make_chunks(1), scope=SCOPE, fetch_chunk=fetch, on_items=accumulator.append
            )
        )
        await asyncio.sleep(0)
        assert executor.is_running

        with pytest.raises(RuntimeError, match="already running"):
            await executor.execute(
                chunks=make_chunks(1), scope=SCOPE, fetch_chunk=fetch, on_items=accumulator.append
            )

        release.set()
        summary = await first
        assert summary.status == RunStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_cancelled_run_waits_for_in_flight_fetches(self, accumulator, fast_policy):
        fetcher = FakeFetcher(delay=10)
        executor = ChunkExecutor(fast_policy)
        run = asyncio.create_task(
            executor.execute(
                chunks=make_chunks(3),
                scope=SCOPE,
                fetch_chunk=fetcher.fetch,
                on_items=accumulator.append,
            )
        )
        while fetcher.in_flight < 3:
            await asyncio.sleep(0)

        run.cancel()
        with pytest.raises(asyncio.CancelledError):
            await run

        assert fetcher.in_flight == 0
        assert not executor.is_running
        assert accumulator.count() == 0
