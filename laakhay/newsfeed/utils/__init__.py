"""Utility functions."""

from .http import HTTPClient, raise_for_status
from .retry import retry_async

__all__ = ["HTTPClient", "raise_for_status", "retry_async"]
