"""Data models.

Architecture:
    NewsItem and GenerationConfig are Pydantic v2 models and immutable
    (frozen=True). DateRange is a frozen dataclass shared with the chunking
    runtime.
"""

from .date_range import DateRange
from .generation import GenerationConfig
from .news_item import NewsItem

__all__ = [
    "DateRange",
    "GenerationConfig",
    "NewsItem",
]
