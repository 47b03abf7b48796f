"""Tests for the chat orchestration service."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from docchat.chat.models import ChatFeatures, ChatRequest
from docchat.chat.service import (
    NO_CONTEXT_FOUND,
    NO_CONTEXT_PROVIDED,
    ChatService,
    build_context,
)
from docchat.exceptions import GenerationError, InvalidRequestError, PersistenceError
from docchat.retrieval.models import RelevantDoc

from tests.fakes import FakeGenerator

ALERTS = RelevantDoc(topic="Alerts", content="Alert rules have thresholds.", score=20)
PANELS = RelevantDoc(topic="Panels", content="Panels visualise data.", score=8)


def _retriever(docs: list[RelevantDoc]) -> MagicMock:
    retriever = MagicMock()
    retriever.find_relevant.return_value = docs
    retriever.follow_up_questions.return_value = ["How do I silence alerts?"]
    return retriever


def _store(conversation_id: str = "conv-1") -> MagicMock:
    store = MagicMock()
    store.create_conversation.return_value = conversation_id
    return store


class TestBuildContext:
    def test_orders_by_score_and_labels(self) -> None:
        context = build_context([PANELS, ALERTS])
        assert context == (
            "Most relevant - Topic: Alerts\nAlert rules have thresholds.\n\n"
            "Also relevant - Topic: Panels\nPanels visualise data."
        )

    def test_caps_at_three_docs(self) -> None:
        docs = [RelevantDoc(topic=f"T{i}", content="c", score=i) for i in range(5)]
        context = build_context(docs)
        assert context.count("Topic:") == 3
        assert "T4" in context and "T1" not in context

    def test_empty(self) -> None:
        assert build_context([]) == NO_CONTEXT_FOUND


class TestValidation:
    @pytest.mark.parametrize("message", ["", "   \n\t"])
    def test_blank_message_rejected_without_side_effects(self, message: str) -> None:
        generator, store, retriever = FakeGenerator(), _store(), _retriever([ALERTS])
        service = ChatService(generator, retriever=retriever, store=store)

        with pytest.raises(InvalidRequestError):
            service.handle(ChatRequest(message=message))

        assert generator.calls == []
        store.create_conversation.assert_not_called()
        store.save_message.assert_not_called()
        retriever.find_relevant.assert_not_called()


class TestHandle:
    def test_retrieved_context_sources_and_follow_ups(self) -> None:
        generator = FakeGenerator(reply="Set a threshold on the rule.")
        retriever = _retriever([ALERTS, PANELS])
        service = ChatService(generator, retriever=retriever)

        result = service.handle(ChatRequest(message="How do I set alert thresholds?"))

        retriever.find_relevant.assert_called_once_with("How do I set alert thresholds?", 3)
        assert generator.calls[0][1].startswith("Most relevant - Topic: Alerts")
        assert result.response == "Set a threshold on the rule."
        assert result.conversation_id == "temp"
        assert result.sources == ["Alerts", "Panels"]
        assert result.follow_up_questions == ["How do I silence alerts?"]
        retriever.follow_up_questions.assert_called_once_with("Alerts")

    def test_generation_failure_falls_back_to_context(self) -> None:
        generator = FakeGenerator(error=GenerationError("LLM unavailable: timeout"))
        service = ChatService(generator, retriever=_retriever([ALERTS]))

        result = service.handle(ChatRequest(message="alerts?"))

        assert "I apologize" in result.response
        assert "Alert rules have thresholds." in result.response
        assert result.conversation_id == "temp"

    def test_unexpected_generator_error_also_falls_back(self) -> None:
        generator = FakeGenerator(error=RuntimeError("socket closed"))
        service = ChatService(generator)

        result = service.handle(ChatRequest(message="hello", context="Supplied context"))

        assert "Supplied context" in result.response

    def test_supplied_context_used_verbatim(self) -> None:
        generator = FakeGenerator()
        retriever = _retriever([ALERTS])
        service = ChatService(generator, retriever=retriever)

        result = service.handle(ChatRequest(message="alerts?", context="Custom context"))

        assert generator.calls == [("alerts?", "Custom context")]
        # Retrieval still feeds sources and follow-ups
        assert result.sources == ["Alerts"]
        retriever.follow_up_questions.assert_called_once_with("Alerts")

    def test_no_results_uses_general_topic(self) -> None:
        generator = FakeGenerator()
        retriever = _retriever([])
        service = ChatService(generator, retriever=retriever)

        result = service.handle(ChatRequest(message="anything"))

        assert generator.calls[0][1] == NO_CONTEXT_FOUND
        retriever.follow_up_questions.assert_called_once_with("General")
        assert result.sources is None

    def test_without_retriever(self) -> None:
        generator = FakeGenerator()
        result = ChatService(generator).handle(ChatRequest(message="hello"))

        assert generator.calls[0][1] == NO_CONTEXT_PROVIDED
        assert result.follow_up_questions is None
        assert result.sources is None

    def test_features_disabled(self) -> None:
        service = ChatService(
            FakeGenerator(),
            retriever=_retriever([ALERTS]),
            features=ChatFeatures(enable_follow_up_questions=False, enable_sources=False),
        )
        result = service.handle(ChatRequest(message="alerts?"))
        assert result.follow_up_questions is None
        assert result.sources is None

    def test_debug_retrieval_logs_topics(self, caplog: pytest.LogCaptureFixture) -> None:
        service = ChatService(
            FakeGenerator(),
            retriever=_retriever([ALERTS]),
            features=ChatFeatures(debug_retrieval=True),
        )
        with caplog.at_level(logging.INFO, logger="docchat.chat.service"):
            service.handle(ChatRequest(message="alerts?"))
        assert "Alerts" in caplog.text


class TestPersistence:
    def test_creates_conversation_and_saves_exchange(self) -> None:
        store = _store("conv-42")
        message = "How do I configure alert notification channels for my production team?"
        service = ChatService(FakeGenerator(reply="Use contact points."), store=store)

        result = service.handle(ChatRequest(message=message))

        assert result.conversation_id == "conv-42"
        store.create_conversation.assert_called_once_with(message[:50])
        assert [c.args for c in store.save_message.call_args_list] == [
            ("conv-42", "user", message),
            ("conv-42", "assistant", "Use contact points."),
        ]
        store.touch_conversation.assert_called_once_with("conv-42")

    def test_existing_conversation_reused(self) -> None:
        store = _store()
        service = ChatService(FakeGenerator(), store=store)

        result = service.handle(ChatRequest(message="hi there", conversation_id="existing"))

        assert result.conversation_id == "existing"
        store.create_conversation.assert_not_called()

    def test_conversation_id_echoed_without_store(self) -> None:
        result = ChatService(FakeGenerator()).handle(
            ChatRequest(message="hi there", conversation_id="abc")
        )
        assert result.conversation_id == "abc"

    def test_storage_failure_propagates(self) -> None:
        store = _store()
        store.save_message.side_effect = PersistenceError("supabase down")
        service = ChatService(FakeGenerator(), store=store)

        with pytest.raises(PersistenceError):
            service.handle(ChatRequest(message="hi there"))
