"""Data models for the chat service."""

from __future__ import annotations

from dataclasses import dataclass

TEMP_CONVERSATION_ID = "temp"


@dataclass(frozen=True)
class ChatFeatures:
    """Immutable feature switches for a :class:`ChatService`."""

    enable_follow_up_questions: bool = True
    enable_sources: bool = True
    debug_retrieval: bool = False
    retrieval_limit: int = 3


@dataclass
class ChatRequest:
    """An inbound user message."""

    message: str
    conversation_id: str | None = None
    context: str | None = None  # when set, used verbatim instead of retrieved context


@dataclass
class ChatResponse:
    """The assistant's reply and its metadata."""

    response: str
    conversation_id: str = TEMP_CONVERSATION_ID
    follow_up_questions: list[str] | None = None
    sources: list[str] | None = None
