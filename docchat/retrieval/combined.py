"""Fan-out retrieval across several sources with merge and de-duplication."""

from __future__ import annotations

import random

from docchat.retrieval.models import RelevantDoc, SourceRetriever
from docchat.retrieval.ranking import rank_by_score

MAX_FOLLOW_UPS = 5
MIN_SOURCE_LIMIT = 5


def dedupe_docs(docs: list[RelevantDoc]) -> list[RelevantDoc]:
    """Collapse docs sharing ``(topic, content)``, keeping the higher score.

    A missing score counts as 0. The survivor takes the first-seen position.
    """
    unique: dict[tuple[str, str], RelevantDoc] = {}
    for doc in docs:
        key = (doc.topic, doc.content)
        existing = unique.get(key)
        if existing is None or (doc.score or 0) > (existing.score or 0):
            unique[key] = doc
    return list(unique.values())


class CombinedRetriever:
    """Queries every configured source and merges the results.

    Holds no state besides its sources. Build one at startup and pass it to
    whatever needs it.
    """

    def __init__(self, sources: list[SourceRetriever], rng: random.Random | None = None) -> None:
        self._sources = list(sources)
        self._rng = rng or random.Random()

    def find_relevant(self, query: str, limit: int = 3) -> list[RelevantDoc]:
        # Over-fetch per source so the merged ranking has candidates to choose from
        source_limit = max(limit, MIN_SOURCE_LIMIT)
        docs: list[RelevantDoc] = []
        for source in self._sources:
            docs.extend(source.find_relevant(query, source_limit))

        ranked = rank_by_score(dedupe_docs(docs), lambda d: d.score or 0.0, self._rng)
        return ranked[:limit]

    def follow_up_questions(self, topic: str) -> list[str]:
        questions: list[str] = []
        for source in self._sources:
            questions.extend(source.follow_up_questions(topic))
        return list(dict.fromkeys(questions))[:MAX_FOLLOW_UPS]
