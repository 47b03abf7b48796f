"""In-memory registry of ingested YouTube transcripts."""

from __future__ import annotations

import asyncio
import logging

from docchat.exceptions import InvalidVideoIdentifierError
from docchat.ingestion.chunking import chunk_captions
from docchat.ingestion.models import IngestedVideo, IngestResult, IngestStatus, TranscriptChunk
from docchat.ingestion.youtube import CaptionFetcher, extract_video_id, watch_url

logger = logging.getLogger(__name__)


class IngestionManager:
    """Owns the id-keyed set of ingested videos and their chunks.

    A video is recorded after the first fetch that completes, even when it
    produced no chunks, so repeat imports are no-ops. A fetch that raises
    leaves the id unseen; calling ``add_video`` again retries from scratch.
    Only ``clear()`` removes records.
    """

    def __init__(
        self,
        fetcher: CaptionFetcher,
        chunk_size: int = 500,
        overlap: int = 50,
        language: str = "en",
    ) -> None:
        self._fetcher = fetcher
        self._chunk_size = chunk_size
        self._overlap = overlap
        self._language = language
        self._videos: dict[str, IngestedVideo] = {}

    async def add_video(self, id_or_url: str, title: str | None = None) -> IngestResult:
        """Fetch, chunk and register one video.

        Raises:
            InvalidVideoIdentifierError: ``id_or_url`` holds no video id.
        """
        video_id = extract_video_id(id_or_url)
        if video_id is None:
            raise InvalidVideoIdentifierError(id_or_url)

        if video_id in self._videos:
            logger.info("Video %s already added", video_id)
            return IngestResult(
                video_id=video_id,
                status=IngestStatus.ALREADY_PRESENT,
                chunk_count=len(self._videos[video_id].chunks),
            )

        url = watch_url(video_id)
        try:
            # The fetcher does blocking HTTP; keep it off the event loop
            events = await asyncio.to_thread(
                self._fetcher.fetch_transcript, video_id, self._language
            )
            chunks = chunk_captions(
                events,
                chunk_size=self._chunk_size,
                overlap=self._overlap,
                video_id=video_id,
                video_url=url,
            )
        except Exception as exc:
            logger.exception("Failed to add video %s", video_id)
            return IngestResult(video_id=video_id, status=IngestStatus.FAILED, reason=str(exc))

        # A concurrent add of the same id may have finished while we were fetching
        if video_id in self._videos:
            return IngestResult(
                video_id=video_id,
                status=IngestStatus.ALREADY_PRESENT,
                chunk_count=len(self._videos[video_id].chunks),
            )

        if not chunks:
            logger.warning("Video %s has no transcript chunks", video_id)
        self._videos[video_id] = IngestedVideo(video_id=video_id, url=url, title=title, chunks=chunks)
        logger.info("Added video %s with %d chunks", video_id, len(chunks))
        return IngestResult(video_id=video_id, status=IngestStatus.ADDED, chunk_count=len(chunks))

    async def _add_video_safely(self, id_or_url: str) -> IngestResult:
        try:
            return await self.add_video(id_or_url)
        except InvalidVideoIdentifierError as exc:
            logger.warning("%s", exc)
            return IngestResult(video_id=None, status=IngestStatus.FAILED, reason=str(exc))

    async def add_videos(self, ids_or_urls: list[str]) -> list[IngestResult]:
        """Ingest several videos concurrently; one failure never aborts the rest."""
        return list(await asyncio.gather(*(self._add_video_safely(v) for v in ids_or_urls)))

    def list_videos(self) -> list[IngestedVideo]:
        return list(self._videos.values())

    def get_video(self, video_id: str) -> IngestedVideo | None:
        return self._videos.get(video_id)

    def all_chunks(self) -> list[TranscriptChunk]:
        """Every chunk of every video, in insertion order."""
        return [chunk for video in self._videos.values() for chunk in video.chunks]

    def clear(self) -> None:
        self._videos.clear()
