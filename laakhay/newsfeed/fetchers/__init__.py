"""Fetch capability implementations."""

from .base import NewsFetcher
from .gemini import GeminiNewsFetcher

__all__ = ["NewsFetcher", "GeminiNewsFetcher"]
