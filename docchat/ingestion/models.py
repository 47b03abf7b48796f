"""Data models for transcript ingestion."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


@dataclass(frozen=True)
class CaptionEvent:
    """A single timed caption as delivered by the caption source."""

    text: str
    start: float
    duration: float


@dataclass(frozen=True)
class TranscriptChunk:
    """A bounded window of transcript text with approximate time bounds."""

    text: str
    start_time: float
    end_time: float
    video_id: str = ""
    video_url: str = ""


@dataclass
class IngestedVideo:
    """A video tracked by the ingestion manager.

    ``chunks`` is empty when the video had no captions available.
    """

    video_id: str
    url: str
    title: str | None = None
    chunks: list[TranscriptChunk] = field(default_factory=list)


class IngestStatus(StrEnum):
    """Outcome of a single ingestion attempt."""

    ADDED = "added"
    ALREADY_PRESENT = "already_present"
    FAILED = "failed"


@dataclass(frozen=True)
class IngestResult:
    """Result of ``IngestionManager.add_video``."""

    video_id: str | None
    status: IngestStatus
    reason: str | None = None
    chunk_count: int = 0

    @property
    def ok(self) -> bool:
        return self.status is not IngestStatus.FAILED
