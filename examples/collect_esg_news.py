#!/usr/bin/env python3
"""Collect ESG news for a scope over a date range and export it as CSV.

Usage:
    GEMINI_API_KEY=... python examples/collect_esg_news.py "S&P 500 ESG Index" \
        2024-01-01 2024-06-30 --mode LIVE_SEARCH --density 1.25

Press Ctrl+C once to stop after the current batch; results collected so far
are still written.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
from datetime import date

from laakhay.newsfeed import (
    TARGET_SCOPES,
    ChunkPolicy,
    FetchFatalError,
    GenerationConfig,
    GenerationMode,
    NewsCollector,
    default_export_filename,
)

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Collect ESG news items and export them as CSV")
    p.add_argument("scope", nargs="?", default=TARGET_SCOPES[0])
    p.add_argument("start", nargs="?", default="2024-01-01", type=date.fromisoformat)
    p.add_argument("end", nargs="?", default="2024-03-31", type=date.fromisoformat)
    p.add_argument("--mode", default="SYNTHETIC", choices=[m.value for m in GenerationMode])
    p.add_argument("--density", type=float, default=1.0, help="items per day")
    p.add_argument("--concurrency", type=int, default=3)
    p.add_argument("--pause", type=float, default=1.0, help="seconds between batches")
    p.add_argument("--per-request", type=int, default=25, help="target items per request")
    p.add_argument("--output", default=None, help="CSV path (default: dated file name)")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    policy = ChunkPolicy(
        target_items_per_request=args.per_request,
        concurrency=args.concurrency,
        batch_pause=args.pause,
    )
    collector = NewsCollector(policy=policy, on_progress=print)
    config = GenerationConfig(
        scope=args.scope,
        start_date=args.start,
        end_date=args.end,
        mode=GenerationMode(args.mode),
        items_per_day=args.density,
    )

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, collector.stop)
        except NotImplementedError:
            # Windows event loops lack add_signal_handler
            pass

    exit_code = 0
    try:
        summary = await collector.collect(config)
        logger.info(f"Run finished: {summary.status.value}")
    except FetchFatalError as e:
        print(f"Fatal error: {e}")
        exit_code = 1

    if collector.count:
        output = args.output or default_export_filename()
        collector.export_csv(output)
        print(f"Wrote {collector.count} records to {output}")
    return exit_code


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
