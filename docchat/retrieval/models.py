"""Retrieval data models and the source-retriever contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class Document:
    """A curated knowledge-base entry."""

    topic: str
    content: str
    keywords: list[str] = field(default_factory=list)
    score: float | None = None  # set per query on a copy, never on the stored entry


@dataclass(frozen=True)
class RelevantDoc:
    """A retrieval result handed to the chat service."""

    topic: str
    content: str
    score: float | None = None


class SourceRetriever(Protocol):
    """A scorer over one document collection."""

    def find_relevant(self, query: str, limit: int = 3) -> list[RelevantDoc]: ...

    def follow_up_questions(self, topic: str) -> list[str]: ...
