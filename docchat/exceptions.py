"""Custom exceptions for docchat."""

from __future__ import annotations


class DocChatError(Exception):
    """Base exception for docchat."""


class InvalidRequestError(DocChatError):
    """Chat request is malformed (e.g. empty message)."""


class InvalidVideoIdentifierError(DocChatError):
    """Input is neither a bare video id nor a recognised YouTube URL."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid YouTube URL or video ID: {value}")
        self.value = value


class CaptionFetchError(DocChatError):
    """Caption transport failed for every language tried."""


class GenerationError(DocChatError):
    """Language-model backend failed or returned an unusable payload."""


class PersistenceError(DocChatError):
    """Conversation storage failed."""


class VideoNotFoundError(DocChatError):
    """No ingested video has the requested id."""
