"""Supabase storage for conversations and chat messages."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Protocol

from supabase import Client, ClientOptions, create_client

from docchat.config import Settings
from docchat.exceptions import PersistenceError

Role = Literal["user", "assistant"]


class ConversationStore(Protocol):
    """Conversation history capability used by the chat service."""

    def create_conversation(self, title: str) -> str: ...

    def save_message(self, conversation_id: str, role: Role, content: str) -> None: ...

    def touch_conversation(self, conversation_id: str) -> None: ...


def get_supabase_client(settings: Settings) -> Client:
    """Create a Supabase client whose PostgREST calls honour the persistence timeout."""
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(postgrest_client_timeout=settings.persistence_timeout_seconds),
    )


class SupabaseConversationStore:
    """Stores conversations in ``conversations`` and messages in ``messages``.

    Every client or network error is re-raised as :class:`PersistenceError`.
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    def create_conversation(self, title: str) -> str:
        try:
            result = self._client.table("conversations").insert({"title": title}).execute()
        except Exception as exc:
            raise PersistenceError(f"Failed to create conversation: {exc}") from exc
        if not result.data:
            raise PersistenceError("Conversation insert returned no row")
        return str(result.data[0]["id"])

    def save_message(self, conversation_id: str, role: Role, content: str) -> None:
        try:
            self._client.table("messages").insert(
                {"conversation_id": conversation_id, "role": role, "content": content}
            ).execute()
        except Exception as exc:
            raise PersistenceError(f"Failed to save {role} message: {exc}") from exc

    def touch_conversation(self, conversation_id: str) -> None:
        try:
            (
                self._client.table("conversations")
                .update({"updated_at": datetime.now(timezone.utc).isoformat()})
                .eq("id", conversation_id)
                .execute()
            )
        except Exception as exc:
            raise PersistenceError(f"Failed to update conversation {conversation_id}: {exc}") from exc
