#!/usr/bin/env python3
"""Print the chunk plan for a request without calling any API."""

from __future__ import annotations

import argparse

from laakhay.newsfeed import ChunkPlanner, ChunkPolicy, DateRange


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Show how a date range is split into requests")
    p.add_argument("start", nargs="?", default="2015-01-01")
    p.add_argument("end", nargs="?", default="2025-01-01")
    p.add_argument("density", nargs="?", type=float, default=1.25)
    p.add_argument("--per-request", type=int, default=25)
    p.add_argument("--concurrency", type=int, default=3)
    return p.parse_args()


def main() -> None:
    args = parse_args()
    policy = ChunkPolicy(target_items_per_request=args.per_request, concurrency=args.concurrency)
    chunks = ChunkPlanner(policy).plan(DateRange.parse(args.start, args.end), args.density)

    print("=" * 50)
    print(f"Chunks   : {len(chunks)}")
    print(f"Batches  : {-(-len(chunks) // policy.concurrency)}")
    print(f"Items    : {sum(c.target_count for c in chunks)}")
    print("=" * 50)
    print(f"{'#':>4} | {'Start':10} | {'End':10} | {'Days':>4} | {'Count':>5}")
    print("-" * 50)
    for c in chunks:
        print(
            f"{c.chunk_index:>4} | {c.date_range.start.isoformat():10} | "
            f"{c.date_range.end.isoformat():10} | {c.days:>4} | {c.target_count:>5}"
        )


if __name__ == "__main__":
    main()
