"""Keyword/heuristic retrieval over the curated documentation corpus."""

from __future__ import annotations

import random
import re
from dataclasses import replace

from docchat.retrieval.models import Document, RelevantDoc
from docchat.retrieval.ranking import rank_by_score

GENERIC_PREFIXES: tuple[str, ...] = ("help", "what", "how", "tell", "show", "explain")

_NON_WORD_RE = re.compile(r"[^\w]")


def query_words(query: str) -> list[str]:
    """Lowercased query tokens, punctuation stripped, longer than two characters."""
    stripped = (_NON_WORD_RE.sub("", word) for word in query.lower().strip().split())
    return [word for word in stripped if len(word) > 2]


class StaticCorpusRetriever:
    """Scores a small, curated document collection against a query.

    Topic and keyword matches dominate the score; content matches add smaller
    amounts. Retrieval never comes back empty while the corpus has documents:
    queries without usable words, or with no positive scores, return the
    first ``limit`` documents in storage order.
    """

    def __init__(
        self,
        documents: list[Document],
        follow_ups: dict[str, list[str]] | None = None,
        default_follow_ups: list[str] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._documents = list(documents)
        self._follow_ups = follow_ups or {}
        self._default_follow_ups = default_follow_ups or []
        self._rng = rng or random.Random()

    def _score(self, doc: Document, q: str, words: list[str]) -> float:
        score = 0.0
        topic = doc.topic.lower()
        content = doc.content.lower()

        # Topic
        if q == topic or q in topic:
            score += 20
        for word in words:
            if word in topic:
                score += 10

        # Curated keywords
        for kw in (k.lower() for k in doc.keywords):
            if any(word == kw for word in words):
                score += 8
            if any(kw in word or word in kw for word in words):
                score += 5
            if kw in q:
                score += 3

        # Content
        if q in content:
            score += 6

        whole_word_matches = 0
        for word in words:
            if len(word) <= 3:
                continue
            if re.search(rf"\b{re.escape(word)}\b", content):
                whole_word_matches += 1
                score += 2
            elif word in content:
                score += 1

        if whole_word_matches == len(words) and len(words) > 1:
            score += 5

        if q.startswith(GENERIC_PREFIXES) and score < 10:
            score += self._rng.uniform(0, 3)

        return score

    def _first(self, limit: int) -> list[RelevantDoc]:
        return [RelevantDoc(topic=d.topic, content=d.content) for d in self._documents[:limit]]

    def find_relevant(self, query: str, limit: int = 3) -> list[RelevantDoc]:
        q = query.lower().strip()
        words = query_words(query)
        if not words:
            return self._first(limit)

        scored = [replace(doc, score=self._score(doc, q, words)) for doc in self._documents]
        matched = [doc for doc in scored if doc.score and doc.score > 0]
        if not matched:
            return self._first(limit)

        ranked = rank_by_score(matched, lambda d: d.score or 0.0, self._rng)
        return [RelevantDoc(topic=d.topic, content=d.content, score=d.score) for d in ranked[:limit]]

    def follow_up_questions(self, topic: str) -> list[str]:
        return list(self._follow_ups.get(topic, self._default_follow_ups))
