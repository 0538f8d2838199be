"""Core components."""

from .config import TARGET_SCOPES, resolve_api_key
from .enums import GenerationMode, RunStatus
from .exceptions import (
    AuthError,
    FetchError,
    FetchFatalError,
    FetchTransientError,
    NewsfeedError,
    PlanningInputError,
    RateLimitError,
    ResponseParseError,
    RunInProgressError,
)

__all__ = [
    "GenerationMode",
    "RunStatus",
    "TARGET_SCOPES",
    "resolve_api_key",
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
