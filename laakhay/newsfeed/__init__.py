"""Laakhay Newsfeed - chunked, concurrency-bounded ESG news collection."""

from .clients import NewsCollector
from .core import (
    TARGET_SCOPES,
    AuthError,
    FetchError,
    FetchFatalError,
    FetchTransientError,
    GenerationMode,
    NewsfeedError,
    PlanningInputError,
    RateLimitError,
    ResponseParseError,
    RunInProgressError,
    RunStatus,
)
from .fetchers import GeminiNewsFetcher, NewsFetcher
from .io import default_export_filename, to_csv, write_csv
from .models import DateRange, GenerationConfig, NewsItem
from .runtime import (
    CancellationToken,
    ChunkExecutor,
    ChunkPlanner,
    ChunkPolicy,
    ResultAccumulator,
    RunSummary,
)
from .runtime.chunking import Chunk

__version__ = "0.1.0"

__all__ = [
    # Core enums
    "GenerationMode",
    "RunStatus",
    "TARGET_SCOPES",
    # Models
    "DateRange",
    "GenerationConfig",
    "NewsItem",
    # Runtime
    "Chunk",
    "ChunkPolicy",
    "ChunkPlanner",
    "ChunkExecutor",
    "CancellationToken",
    "ResultAccumulator",
    "RunSummary",
    # Fetchers
    "NewsFetcher",
    "GeminiNewsFetcher",
    # Clients
    "NewsCollector",
    # Export
    "to_csv",
    "write_csv",
    "default_export_filename",
    # Exceptions
    "NewsfeedError",
    "PlanningInputError",
    "RunInProgressError",
    "FetchError",
    "FetchTransientError",
    "FetchFatalError",
    "RateLimitError",
    "ResponseParseError",
    "AuthError",
]
