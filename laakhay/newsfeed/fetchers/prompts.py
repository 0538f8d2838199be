"""Prompt text and response schema for the Gemini fetchers."""

from __future__ import annotations

from typing import Any

from ..core.enums import GenerationMode
from ..models import DateRange

NEWS_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "date": {
                "type": "STRING",
                "description": "The specific publication date of the article (YYYY-MM-DD)",
            },
            "headline": {
                "type": "STRING",
                "description": "The exact headline of the article found on the web",
            },
            "summary": {
                "type": "STRING",
                "description": (
                    "A comprehensive snippet or summary of the article content, "
                    "focusing on ESG facts."
                ),
            },
            "url": {"type": "STRING", "description": "The direct URL to the source article."},
            "sourceName": {
                "type": "STRING",
                "description": "The name of the publisher (e.g., Bloomberg, Reuters, CNBC).",
            },
        },
        "required": ["date", "headline", "summary"],
    },
}


def live_search_prompt(scope: str, date_range: DateRange, count: int) -> str:
    start, end = date_range.start.isoformat(), date_range.end.isoformat()
    return f"""
You are a specialized Web Crawler and Data Scraper.

Task: Perform a deep Google Search to find exactly {count} distinct news articles for "{scope}" related to ESG (Environmental, Social, Governance).

Constraints:
1. Timeframe: Articles MUST be published between {start} and {end}.
2. Quantity: I need exactly {count} items.
3. Quality: Prioritize reputable financial sources (Reuters, Bloomberg, WSJ, CNBC, S&P Global).

Output Requirements:
- Extract the real Headline.
- Extract a detailed text snippet (summary) for analysis.
- Extract the Publisher Name.
- Extract the Source URL.

Return the data strictly as a JSON list of objects with the keys
"date" (YYYY-MM-DD), "headline", "summary", "url" and "sourceName".
""".strip()


def synthetic_prompt(scope: str, date_range: DateRange, count: int) -> str:
    start, end = date_range.start.isoformat(), date_range.end.isoformat()
    return f"""
Generate exactly {count} REALISTIC financial news snippets for "{scope}" related to ESG.
Distribution: The dates MUST be strictly within {start} to {end}.
Density: Spread the {count} items somewhat evenly across this time period.

Content Style: Financial news feed (Bloomberg/Reuters).
Topics: ESG Index rebalancing, carbon goals, diversity reports, governance scandals.

Output strictly valid JSON.
""".strip()


def build_prompt(mode: GenerationMode, scope: str, date_range: DateRange, count: int) -> str:
    if mode is GenerationMode.LIVE_SEARCH:
        return live_search_prompt(scope, date_range, count)
    return synthetic_prompt(scope, date_range, count)
