"""Runtime orchestration components."""

from .accumulator import ResultAccumulator
from .cancellation import CancellationToken
from .chunking import ChunkExecutor, ChunkPlanner, ChunkPolicy, RunSummary

__all__ = [
    "ResultAccumulator",
    "CancellationToken",
    "ChunkExecutor",
    "ChunkPlanner",
    "ChunkPolicy",
    "RunSummary",
]
