"""Pydantic request/response schemas for the chat and YouTube APIs.

JSON field names are camelCase on the wire; Python code uses snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRequestBody(CamelModel):
    """Request body for the /api/chat endpoint.

    ``message`` is optional at the schema level so that a missing message
    gets the same 400 as an empty one.
    """

    message: str | None = None
    conversation_id: str | None = None
    context: str | None = None


class ChatResponseBody(CamelModel):
    """Response body for the /api/chat endpoint."""

    response: str
    conversation_id: str
    follow_up_questions: list[str] | None = None
    sources: list[str] | None = None


class ErrorBody(BaseModel):
    error: str


class ImportRequest(CamelModel):
    """Request body for POST /api/youtube/import."""

    video_ids: list[str] | None = None
    video_urls: list[str] | None = None


class VideoSummary(CamelModel):
    video_id: str
    url: str
    title: str | None = None
    chunks_count: int = 0
    total_text_length: int | None = None


class ImportItemResult(CamelModel):
    input: str
    video_id: str | None = None
    status: str
    reason: str | None = None
    chunk_count: int = 0


class ImportResponse(CamelModel):
    """Response body for POST /api/youtube/import."""

    success: bool = True
    imported: int
    failed: int
    total: int
    errors: list[str] | None = None
    results: list[ImportItemResult] = []
    videos: list[VideoSummary] = []


class VideoListResponse(CamelModel):
    """Response body for GET /api/youtube/import."""

    videos: list[VideoSummary]
    total_chunks: int
    total_videos: int


class ChunkView(CamelModel):
    """A transcript chunk as shown by the RAG content browser."""

    text: str
    start_time: float
    end_time: float
    duration: float
    preview: str
    video_id: str | None = None
    video_title: str | None = None
    video_url: str | None = None


class VideoRef(CamelModel):
    video_id: str
    url: str
    title: str | None = None


class VideoChunksResponse(CamelModel):
    """Chunks of a single video (GET /api/youtube/rag-content?videoId=...)."""

    video: VideoRef
    chunks: list[ChunkView]
    total_chunks: int
    showing: int


class ContentSummary(CamelModel):
    total_videos: int
    total_chunks: int
    total_text_length: int


class RagContentResponse(CamelModel):
    """Corpus overview (GET /api/youtube/rag-content)."""

    summary: ContentSummary
    videos: list[VideoSummary]
    sample_chunks: list[ChunkView]
    showing: int
    search: str | None = None
    message: str | None = None
    suggestion: str | None = None
