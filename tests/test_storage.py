"""Tests for Supabase conversation storage (mocked client)."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from docchat.exceptions import PersistenceError
from docchat.storage import SupabaseConversationStore


class TestSupabaseConversationStore:
    def test_create_conversation_returns_id(self) -> None:
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value.data = [{"id": 7}]

        assert SupabaseConversationStore(client).create_conversation("Alerts question") == "7"
        client.table.assert_called_with("conversations")
        client.table.return_value.insert.assert_called_once_with({"title": "Alerts question"})

    def test_create_conversation_without_row(self) -> None:
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.return_value.data = []
        with pytest.raises(PersistenceError):
            SupabaseConversationStore(client).create_conversation("t")

    def test_save_message(self) -> None:
        client = MagicMock()
        SupabaseConversationStore(client).save_message("c1", "assistant", "Hello")
        client.table.assert_called_with("messages")
        client.table.return_value.insert.assert_called_once_with(
            {"conversation_id": "c1", "role": "assistant", "content": "Hello"}
        )

    def test_touch_conversation(self) -> None:
        client = MagicMock()
        SupabaseConversationStore(client).touch_conversation("c1")
        update = client.table.return_value.update
        assert "updated_at" in update.call_args.args[0]
        update.return_value.eq.assert_called_once_with("id", "c1")

    def test_client_errors_wrapped(self) -> None:
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("timeout")
        store = SupabaseConversationStore(client)

        with pytest.raises(PersistenceError, match="timeout"):
            store.save_message("c1", "user", "hi")
        with pytest.raises(PersistenceError):
            store.create_conversation("t")
