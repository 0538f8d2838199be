"""High-level clients."""

from .news_collector import NewsCollector

__all__ = ["NewsCollector"]
