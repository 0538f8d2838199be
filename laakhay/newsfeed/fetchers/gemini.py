"""Gemini-backed fetch capability.

Two variants share one class and differ by GenerationMode:

- LIVE_SEARCH: grounded on Google Search, asks the model to behave like a
  crawler and return real articles for the window.
- SYNTHETIC: structured JSON output (response schema) with realistic but
  generated snippets.

Requests go to the Gemini REST ``generateContent`` endpoint through the
shared aiohttp-based HTTPClient.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any
from urllib.parse import urlparse

from ..core import config
from ..core.enums import GenerationMode
from ..core.exceptions import AuthError, FetchFatalError, ResponseParseError
from ..models import DateRange, NewsItem
from ..utils.http import HTTPClient
from ..utils.retry import retry_async
from .prompts import NEWS_RESPONSE_SCHEMA, build_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODELS = {
    GenerationMode.LIVE_SEARCH: config.LIVE_SEARCH_MODEL,
    GenerationMode.SYNTHETIC: config.SYNTHETIC_MODEL,
}


def generate_id(mode: GenerationMode) -> str:
    """Random sample id, e.g. ``WEB-3f9a1c2b7``."""
    return f"{mode.id_prefix}-{uuid.uuid4().hex[:9]}"


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block (```json ... ```)."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()
    return cleaned


def extract_text(response: Any) -> str:
    """Concatenate the text parts of the first candidate.

    Raises:
        ResponseParseError: If the response has no usable candidate
    """
    try:
        parts = response["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError) as e:
        raise ResponseParseError(f"Unexpected Gemini response shape: {e!r}") from e
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))


def parse_rows(text: str) -> list[dict[str, Any]]:
    """Decode the model's JSON list of articles.

    Raises:
        ResponseParseError: If the text is not a JSON list (or an object wrapping one)
    """
    cleaned = strip_code_fences(text) or "[]"
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Model returned invalid JSON: {e}") from e

    if isinstance(data, dict):
        lists = [v for v in data.values() if isinstance(v, list)]
        if len(lists) != 1:
            raise ResponseParseError("Model returned an object without a single article list")
        data = lists[0]
    if not isinstance(data, list):
        raise ResponseParseError(f"Model returned {type(data).__name__}, expected a list")
    return [row for row in data if isinstance(row, dict)]


def source_label(mode: GenerationMode, row: dict[str, Any], model: str) -> str:
    """Human readable source for an article row."""
    if mode is not GenerationMode.LIVE_SEARCH:
        return f"Synthetic Generation ({model})"
    if row.get("sourceName"):
        return str(row["sourceName"])
    url = row.get("url")
    if url:
        host = urlparse(str(url)).hostname
        if host:
            return host.removeprefix("www.")
    return "Google Crawler Result"


class GeminiNewsFetcher:
    """Fetch capability backed by the Gemini API."""

    def __init__(
        self,
        mode: GenerationMode = GenerationMode.SYNTHETIC,
        *,
        api_key: str | None = None,
        model: str | None = None,
        http: HTTPClient | None = None,
        max_attempts: int = config.DEFAULT_FETCH_ATTEMPTS,
        base_delay: float = config.DEFAULT_RETRY_BASE_DELAY,
    ) -> None:
        """Initialize the fetcher.

        Args:
            mode: Which variant (prompt/model/tools) to use
            api_key: Gemini API key; falls back to GEMINI_API_KEY / API_KEY
            model: Override the model for the mode
            http: Shared HTTP client (the fetcher closes only clients it created)
            max_attempts: Attempts per chunk, including the first
            base_delay: Retry backoff base in seconds
        """
        self.mode = GenerationMode(mode)
        self.model = model or DEFAULT_MODELS[self.mode]
        self._api_key = config.resolve_api_key(api_key)
        self._owns_http = http is None
        self._http = http or HTTPClient(
            base_url=config.GEMINI_BASE_URL, timeout=config.DEFAULT_HTTP_TIMEOUT
        )
        self._max_attempts = max_attempts
        self._base_delay = base_delay

    def build_request(self, scope: str, date_range: DateRange, count: int) -> dict[str, Any]:
        """Request body for ``generateContent``."""
        prompt = build_prompt(self.mode, scope, date_range, count)
        body: dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if self.mode is GenerationMode.LIVE_SEARCH:
            # Search grounding does not combine with a response schema
            body["tools"] = [{"google_search": {}}]
        else:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": NEWS_RESPONSE_SCHEMA,
            }
        return body

    async def fetch(self, scope: str, date_range: DateRange, target_count: int) -> list[NewsItem]:
        """Fetch items for one chunk, retrying transient failures.

        Raises:
            AuthError: API key missing or rejected (never retried)
            FetchTransientError: Last transient failure after all attempts
        """
        if not self._api_key:
            raise AuthError("API key is missing. Set GEMINI_API_KEY or pass api_key.")

        return await retry_async(
            lambda: self._fetch_once(scope, date_range, target_count),
            attempts=self._max_attempts,
            base_delay=self._base_delay,
            give_up_on=(FetchFatalError,),
            description=f"Gemini request {scope} {date_range}",
        )

    async def _fetch_once(self, scope: str, date_range: DateRange, count: int) -> list[NewsItem]:
        response = await self._http.post(
            f"/models/{self.model}:generateContent",
            json_body=self.build_request(scope, date_range, count),
            headers={"x-goog-api-key": self._api_key or ""},
        )
        rows = parse_rows(extract_text(response))
        items = self.map_rows(scope, rows)
        logger.debug(f"Gemini returned {len(items)}/{count} items for {scope} {date_range}")
        return items

    def map_rows(self, scope: str, rows: list[dict[str, Any]]) -> list[NewsItem]:
        """Turn decoded article rows into NewsItem, skipping incomplete rows."""
        items: list[NewsItem] = []
        for row in rows:
            headline = str(row.get("headline") or "").strip()
            date = str(row.get("date") or "").strip()
            if not headline or not date:
                logger.debug(f"Skipping incomplete row: {row!r}")
                continue
            summary = str(row.get("summary") or "").strip()
            items.append(
                NewsItem(
                    id=generate_id(self.mode),
                    timestamp=date,
                    text=f"{headline}. {summary}" if summary else headline,
                    source=source_label(self.mode, row, self.model),
                    scope=scope,
                )
            )
        return items

    async def close(self) -> None:
        if self._owns_http:
            await self._http.close()

    async def __aenter__(self) -> GeminiNewsFetcher:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
