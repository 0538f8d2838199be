"""CSV export of collected items.

Format::

    Time,Sample ID,text,source
    2024-01-03,SYN-1a2b3c4d5,"Headline. Summary ""quoted"".","Reuters"

``text`` and ``source`` are always quote-wrapped with embedded quotes
doubled; time and id are written as-is.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from pathlib import Path

from ..core import config
from ..models import NewsItem

CSV_HEADER = "Time,Sample ID,text,source"


def quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def format_row(item: NewsItem) -> str:
    return f"{item.timestamp},{item.id},{quote(item.text)},{quote(item.source or '')}"


def to_csv(items: Iterable[NewsItem]) -> str:
    """Render items as CSV text (header first, one row per item, in order)."""
    return "\n".join([CSV_HEADER, *(format_row(item) for item in items)])


def write_csv(items: Iterable[NewsItem], path: str | Path) -> Path:
    """Write items to ``path`` as UTF-8 CSV and return the path."""
    target = Path(path)
    target.write_text(to_csv(items), encoding="utf-8")
    return target


def default_export_filename(today: date | None = None) -> str:
    """File name used for downloads, e.g. ``sp500_esg_news_2024-05-01.csv``."""
    day = today or date.today()
    return f"{config.EXPORT_FILENAME_PREFIX}_{day.isoformat()}.csv"
