"""Custom exception hierarchy."""

from __future__ import annotations


class NewsfeedError(Exception):
    """Base exception for all library errors."""

    pass


class PlanningInputError(NewsfeedError, ValueError):
    """Request cannot be planned (e.g. start date after end date)."""

    pass


class RunInProgressError(NewsfeedError):
    """A collection run is already active on this collector."""

    pass


class FetchError(NewsfeedError):
    """Error raised by a fetch capability for a single chunk."""

    is_fatal: bool = False

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FetchTransientError(FetchError):
    """Recoverable per-chunk failure. The run continues."""

    pass


class RateLimitError(FetchTransientError):
    """Upstream rate limit exceeded."""

    def __init__(self, message: str, retry_after: int | None = None) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class ResponseParseError(FetchTransientError):
    """Upstream answered but the payload could not be decoded."""

    pass


class FetchFatalError(FetchError):
    """Failure that invalidates the whole run."""

    is_fatal = True


class AuthError(FetchFatalError):
    """Missing or rejected credentials."""

    pass
