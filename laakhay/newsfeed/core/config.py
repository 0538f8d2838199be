"""Shared constants and defaults.

Centralizes upstream URLs, model names and environment variable names so the
fetchers and the collector can stay small and focused.
"""

from __future__ import annotations

import os

# Gemini REST API (generateContent)
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
LIVE_SEARCH_MODEL = "gemini-3-pro-preview"
SYNTHETIC_MODEL = "gemini-2.5-flash"

# Checked in order; first non-empty value wins
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")

# Chunking defaults
DEFAULT_TARGET_ITEMS_PER_REQUEST = 25
DEFAULT_MIN_CHUNK_DAYS = 5
DEFAULT_MAX_CHUNK_DAYS = 60
MIN_EFFECTIVE_DENSITY = 0.1

# Scheduling defaults
DEFAULT_CONCURRENCY = 3
DEFAULT_BATCH_PAUSE_SECONDS = 1.0

# Fetch retry defaults
DEFAULT_FETCH_ATTEMPTS = 3
DEFAULT_RETRY_BASE_DELAY = 1.0
DEFAULT_HTTP_TIMEOUT = 120.0

EXPORT_FILENAME_PREFIX = "sp500_esg_news"

TARGET_SCOPES = [
    "S&P 500 Index (Overall)",
    "S&P 500 ESG Index",
    "S&P 500 Top 10 Constituents",
    "S&P 500 Energy Sector",
    "S&P 500 Technology Sector",
]


def resolve_api_key(explicit: str | None = None) -> str | None:
    """Return the explicit key, or the first key found in the environment.

    Examples:
        >>> resolve_api_key("abc")
        'abc'
    """
    if explicit:
        return explicit
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None
