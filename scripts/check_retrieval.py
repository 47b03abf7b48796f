"""Print which topics a set of queries retrieves, and how diverse they are."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from docchat.config import get_settings
from docchat.retrieval.diagnostics import compare_queries
from docchat.services import build_services

DEFAULT_QUERIES = [
    "How do I create a dashboard?",
    "How do I set up alerts?",
    "What data sources are supported?",
    "How do I write PromQL queries?",
    "How do I install plugins?",
    "help me",
]


def check_retrieval(queries: list[str], video_ids: list[str], limit: int) -> None:
    settings = get_settings()
    services = build_services(settings)

    if video_ids:
        results = asyncio.run(services.ingestion.add_videos(video_ids))
        for r in results:
            print(f"  {r.video_id}: {r.status.value} ({r.chunk_count} chunks)")

    report = compare_queries(services.retriever, queries, limit)
    for probe in report.probes:
        print(f"\n{probe.query}")
        for topic, score in zip(probe.topics, probe.scores):
            print(f"  {score:6.1f}  {topic}")

    print(
        f"\nUnique topics: {report.unique_topics} / {report.total_results} results "
        f"({report.diversity:.0%} diversity)"
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    parser = argparse.ArgumentParser()
    parser.add_argument("queries", nargs="*", default=DEFAULT_QUERIES)
    parser.add_argument("--video", action="append", default=[], help="YouTube id or URL to ingest first")
    parser.add_argument("--limit", type=int, default=3)
    args = parser.parse_args()
    check_retrieval(args.queries, args.video, args.limit)
