"""HTTP client helper."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from ..core.exceptions import AuthError, FetchTransientError, RateLimitError, ResponseParseError

_INVALID_KEY_MARKERS = ("api key not valid", "api_key_invalid", "api key is missing")


def raise_for_status(status: int, body: str, retry_after: Optional[str] = None) -> None:
    """Map an HTTP error status onto the fetch error taxonomy.

    Args:
        status: HTTP status code
        body: Response body text (used to spot invalid-key 400s)
        retry_after: Value of the Retry-After header, if any

    Raises:
        AuthError: 401/403, or 400 complaining about the API key
        RateLimitError: 429
        FetchTransientError: Any other status >= 400
    """
    if status < 400:
        return
    snippet = body[:200]
    if status in (401, 403) or (
        status == 400 and any(marker in body.lower() for marker in _INVALID_KEY_MARKERS)
    ):
        raise AuthError(f"Upstream rejected credentials ({status}): {snippet}", status_code=status)
    if status == 429:
        try:
            wait = int(retry_after) if retry_after else None
        except ValueError:
            wait = None
        raise RateLimitError(f"Rate limit exceeded: {snippet}", retry_after=wait)
    raise FetchTransientError(f"HTTP {status}: {snippet}", status_code=status)


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _url(self, url: str) -> str:
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET request returning decoded JSON."""
        return await self._request("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        json_body: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """POST a JSON body and return decoded JSON."""
        return await self._request("POST", url, json=json_body, headers=headers)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async with self.session.request(method, self._url(url), **kwargs) as response:
                if response.status >= 400:
                    body = await response.text()
                    raise_for_status(response.status, body, response.headers.get("Retry-After"))
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise ResponseParseError(f"Invalid JSON from {method} {url}: {e}") from e
        except aiohttp.ClientError as e:
            raise FetchTransientError(f"{method} {url} failed: {e}") from e
        except asyncio.TimeoutError as e:
            raise FetchTransientError(f"{method} {url} timed out") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "HTTPClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
