"""Occurrence-count retrieval over ingested video transcripts."""

from __future__ import annotations

from docchat.ingestion.manager import IngestionManager
from docchat.ingestion.models import TranscriptChunk
from docchat.retrieval.models import RelevantDoc

GENERIC_FOLLOW_UPS: list[str] = [
    "Tell me more about this",
    "Are there other examples?",
    "How do I apply this in practice?",
]


def format_timestamp(seconds: float) -> str:
    """Render seconds as ``M:SS``, or ``H:MM:SS`` past the hour."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_chunk(chunk: TranscriptChunk, video_title: str | None = None) -> str:
    """Format a transcript chunk as a context block for the model."""
    header = f"[YouTube Video: {video_title}]" if video_title else "[YouTube Video]"
    return (
        f"{header}\n"
        f"Time: {format_timestamp(chunk.start_time)} - {format_timestamp(chunk.end_time)}\n"
        f"URL: {chunk.video_url}\n\n"
        f"Content:\n{chunk.text}"
    )


class TranscriptRetriever:
    """Scores every ingested transcript chunk by raw term occurrence.

    Transcripts are optional content, so no match means an empty result
    rather than a fallback.
    """

    def __init__(self, manager: IngestionManager) -> None:
        self._manager = manager

    @staticmethod
    def _score(text: str, q: str, words: list[str]) -> int:
        score = 0
        for word in words:
            occurrences = text.count(word)
            score += occurrences * 2
            if occurrences:
                score += 3
        if q in text:
            score += 10
        return score

    def find_relevant(self, query: str, limit: int = 3) -> list[RelevantDoc]:
        q = query.lower()
        words = [w for w in q.split() if len(w) > 2]

        scored: list[tuple[TranscriptChunk, int]] = []
        for chunk in self._manager.all_chunks():
            score = self._score(chunk.text.lower(), q, words)
            if score > 0:
                scored.append((chunk, score))
        scored.sort(key=lambda item: item[1], reverse=True)

        results: list[RelevantDoc] = []
        for chunk, score in scored[:limit]:
            video = self._manager.get_video(chunk.video_id)
            title = video.title if video else None
            results.append(
                RelevantDoc(
                    topic=title or f"YouTube Video: {chunk.video_id}",
                    content=format_chunk(chunk, title),
                    score=score,
                )
            )
        return results

    def follow_up_questions(self, topic: str) -> list[str]:
        needle = topic.lower()
        related = [
            v for v in self._manager.list_videos() if v.title and needle in v.title.lower()
        ]
        if not related:
            return list(GENERIC_FOLLOW_UPS)
        return [
            f"Tell me more about {topic}",
            "Show me examples from the video",
            "What other videos cover this topic?",
            "Explain this in simple terms",
        ]
