"""Retrieval diversity checks for spotting repetitive answers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from docchat.retrieval.models import SourceRetriever

logger = logging.getLogger(__name__)


@dataclass
class QueryProbe:
    """Topics and scores returned for one query."""

    query: str
    topics: list[str]
    scores: list[float]


@dataclass
class DiversityReport:
    """How many distinct topics a batch of queries surfaced."""

    probes: list[QueryProbe] = field(default_factory=list)

    @property
    def total_results(self) -> int:
        return sum(len(p.topics) for p in self.probes)

    @property
    def unique_topics(self) -> int:
        return len({t for p in self.probes for t in p.topics})

    @property
    def diversity(self) -> float:
        """Unique topics / total results (0.0 when nothing was returned)."""
        if not self.total_results:
            return 0.0
        return self.unique_topics / self.total_results


def compare_queries(retriever: SourceRetriever, queries: list[str], limit: int = 3) -> DiversityReport:
    """Run each query through ``retriever`` and summarise topic diversity."""
    report = DiversityReport()
    for query in queries:
        docs = retriever.find_relevant(query, limit)
        probe = QueryProbe(
            query=query,
            topics=[d.topic for d in docs],
            scores=[d.score or 0.0 for d in docs],
        )
        logger.info("%r -> %s", query, list(zip(probe.topics, probe.scores)))
        report.probes.append(probe)

    logger.info(
        "Unique topics: %d, total results: %d, diversity: %.1f%%",
        report.unique_topics,
        report.total_results,
        report.diversity * 100,
    )
    return report
