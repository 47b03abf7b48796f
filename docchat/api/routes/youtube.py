"""YouTube transcript endpoints: import videos and browse ingested chunks."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from docchat.api.dependencies import get_services
from docchat.api.models import (
    ChunkView,
    ContentSummary,
    ImportItemResult,
    ImportRequest,
    ImportResponse,
    RagContentResponse,
    VideoChunksResponse,
    VideoListResponse,
    VideoRef,
    VideoSummary,
)
from docchat.exceptions import InvalidRequestError, VideoNotFoundError
from docchat.ingestion.models import IngestedVideo, TranscriptChunk
from docchat.services import Services

router = APIRouter(prefix="/api/youtube")

VIDEO_PREVIEW_CHARS = 200
SAMPLE_PREVIEW_CHARS = 150


def _summary(video: IngestedVideo, with_length: bool = False) -> VideoSummary:
    return VideoSummary(
        video_id=video.video_id,
        url=video.url,
        title=video.title,
        chunks_count=len(video.chunks),
        total_text_length=sum(len(c.text) for c in video.chunks) if with_length else None,
    )


def _preview(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def _chunk_view(chunk: TranscriptChunk, preview_chars: int) -> ChunkView:
    return ChunkView(
        text=chunk.text,
        start_time=chunk.start_time,
        end_time=chunk.end_time,
        duration=chunk.end_time - chunk.start_time,
        preview=_preview(chunk.text, preview_chars),
    )


@router.post("/import", response_model=ImportResponse, response_model_exclude_none=True)
async def import_videos(
    body: ImportRequest,
    services: Annotated[Services, Depends(get_services)],
) -> ImportResponse:
    """Import videos by id or URL.

    Each video is fetched and chunked independently; one failure is reported
    in ``errors`` without aborting the others.
    """
    if body.video_ids is None and body.video_urls is None:
        raise InvalidRequestError("videoIds or videoUrls required")

    inputs = [*(body.video_ids or []), *(body.video_urls or [])]
    results = await services.ingestion.add_videos(inputs)

    items = [
        ImportItemResult(
            input=value,
            video_id=r.video_id,
            status=r.status.value,
            reason=r.reason,
            chunk_count=r.chunk_count,
        )
        for value, r in zip(inputs, results, strict=True)
    ]
    errors = [f"{i.input}: {i.reason}" for i in items if i.status == "failed"]

    return ImportResponse(
        imported=len(inputs) - len(errors),
        failed=len(errors),
        total=len(inputs),
        errors=errors or None,
        results=items,
        videos=[_summary(v) for v in services.ingestion.list_videos()],
    )


@router.get("/import", response_model=VideoListResponse)
async def list_videos(services: Annotated[Services, Depends(get_services)]) -> VideoListResponse:
    """List imported videos with their chunk counts."""
    videos = services.ingestion.list_videos()
    return VideoListResponse(
        videos=[_summary(v) for v in videos],
        total_chunks=sum(len(v.chunks) for v in videos),
        total_videos=len(videos),
    )


@router.delete("/import", status_code=status.HTTP_204_NO_CONTENT)
async def clear_videos(services: Annotated[Services, Depends(get_services)]) -> None:
    """Forget every imported video."""
    services.ingestion.clear()


@router.get(
    "/rag-content",
    response_model=VideoChunksResponse | RagContentResponse,
    response_model_exclude_none=True,
)
async def rag_content(
    services: Annotated[Services, Depends(get_services)],
    video_id: Annotated[str | None, Query(alias="videoId")] = None,
    limit: Annotated[int, Query(ge=0)] = 10,
    search: str | None = None,
) -> VideoChunksResponse | RagContentResponse:
    """Inspect the transcript corpus.

    With ``videoId``: that video's chunks. Without: corpus totals plus sample
    chunks ordered by start time. ``search`` filters chunks by substring.
    """
    needle = search.lower() if search else None
    videos = services.ingestion.list_videos()

    if not videos:
        return RagContentResponse(
            summary=ContentSummary(total_videos=0, total_chunks=0, total_text_length=0),
            videos=[],
            sample_chunks=[],
            showing=0,
            message="No videos imported yet",
            suggestion="Import videos using POST /api/youtube/import",
        )

    if video_id:
        video = services.ingestion.get_video(video_id)
        if video is None:
            raise VideoNotFoundError(f"Video {video_id} not found")

        chunks = video.chunks
        if needle:
            chunks = [c for c in chunks if needle in c.text.lower()]

        return VideoChunksResponse(
            video=VideoRef(video_id=video.video_id, url=video.url, title=video.title),
            chunks=[_chunk_view(c, VIDEO_PREVIEW_CHARS) for c in chunks[:limit]],
            total_chunks=len(chunks),
            showing=min(limit, len(chunks)),
        )

    all_chunks = services.ingestion.all_chunks()
    samples = [c for c in all_chunks if needle in c.text.lower()] if needle else list(all_chunks)
    samples.sort(key=lambda c: c.start_time)

    titles = {v.video_id: v.title for v in videos}
    sample_views: list[ChunkView] = []
    for chunk in samples[:limit]:
        view = _chunk_view(chunk, SAMPLE_PREVIEW_CHARS)
        view.video_id = chunk.video_id
        view.video_title = titles.get(chunk.video_id)
        view.video_url = chunk.video_url
        sample_views.append(view)

    return RagContentResponse(
        summary=ContentSummary(
            total_videos=len(videos),
            total_chunks=len(all_chunks),
            total_text_length=sum(len(c.text) for c in all_chunks),
        ),
        videos=[_summary(v, with_length=True) for v in videos],
        sample_chunks=sample_views,
        showing=min(limit, len(samples)),
        search=needle,
    )
