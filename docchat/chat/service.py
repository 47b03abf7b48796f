"""Request-level chat orchestration: retrieve, generate, suggest, persist."""

from __future__ import annotations

import logging

from docchat.chat.models import TEMP_CONVERSATION_ID, ChatFeatures, ChatRequest, ChatResponse
from docchat.exceptions import InvalidRequestError
from docchat.retrieval.generation import Generator
from docchat.retrieval.models import RelevantDoc, SourceRetriever
from docchat.storage import ConversationStore

logger = logging.getLogger(__name__)

NO_CONTEXT_FOUND = "No specific context found for this query."
NO_CONTEXT_PROVIDED = "No specific context provided."
GENERAL_TOPIC = "General"
MAX_CONTEXT_DOCS = 3
CONVERSATION_TITLE_LENGTH = 50


def build_context(docs: list[RelevantDoc]) -> str:
    """Join the top documents into a prompt context, best match first."""
    if not docs:
        return NO_CONTEXT_FOUND

    ranked = sorted(docs, key=lambda d: d.score or 0, reverse=True)[:MAX_CONTEXT_DOCS]
    parts: list[str] = []
    for i, doc in enumerate(ranked):
        priority = "Most relevant" if i == 0 else "Also relevant"
        parts.append(f"{priority} - Topic: {doc.topic}\n{doc.content}")
    return "\n\n".join(parts)


def fallback_response(context: str) -> str:
    """Reply used when the generation backend fails."""
    return (
        "I apologize, but I'm having trouble processing your request right now.\n\n"
        "Based on the available documentation:\n\n"
        f"{context}\n\n"
        "Please try rephrasing your question, or contact support if the issue persists."
    )


class ChatService:
    """Answers one chat message end to end.

    Retrieval and generation problems never reach the caller: retrieval has
    its own fallbacks and a generation failure yields :func:`fallback_response`.
    Invalid input raises :class:`InvalidRequestError`; storage failures raise
    :class:`PersistenceError` and the computed answer is not returned.

    The retriever and store are optional. Without a store the reply carries the
    ``"temp"`` conversation id.
    """

    def __init__(
        self,
        generator: Generator,
        retriever: SourceRetriever | None = None,
        store: ConversationStore | None = None,
        features: ChatFeatures | None = None,
    ) -> None:
        self._generator = generator
        self._retriever = retriever
        self._store = store
        self._features = features or ChatFeatures()

    def handle(self, request: ChatRequest) -> ChatResponse:
        message = request.message
        if not isinstance(message, str) or not message.strip():
            raise InvalidRequestError("Message is required")

        docs = self._retrieve(message)
        primary_topic = docs[0].topic if docs else GENERAL_TOPIC

        if request.context:
            context = request.context
        elif self._retriever is not None:
            context = build_context(docs)
        else:
            context = NO_CONTEXT_PROVIDED

        response = self._generate(message, context)

        follow_ups: list[str] | None = None
        if self._features.enable_follow_up_questions and self._retriever is not None:
            follow_ups = self._retriever.follow_up_questions(primary_topic)

        conversation_id = request.conversation_id
        if self._store is not None:
            conversation_id = self._persist(self._store, message, response, conversation_id)

        sources = [d.topic for d in docs] if self._features.enable_sources and docs else None
        return ChatResponse(
            response=response,
            conversation_id=conversation_id or TEMP_CONVERSATION_ID,
            follow_up_questions=follow_ups,
            sources=sources,
        )

    def _retrieve(self, message: str) -> list[RelevantDoc]:
        if self._retriever is None:
            return []

        docs = self._retriever.find_relevant(message, self._features.retrieval_limit)
        if self._features.debug_retrieval:
            logger.info("Query: %r", message)
            logger.info(
                "Found %d relevant docs: %s",
                len(docs),
                [(d.topic, d.score) for d in docs],
            )
        return docs

    def _generate(self, message: str, context: str) -> str:
        try:
            return self._generator.generate(message, context)
        except Exception:
            logger.exception("Generation failed, answering from retrieved context")
            return fallback_response(context)

    @staticmethod
    def _persist(
        store: ConversationStore, message: str, response: str, conversation_id: str | None
    ) -> str:
        if not conversation_id:
            conversation_id = store.create_conversation(message[:CONVERSATION_TITLE_LENGTH])

        store.save_message(conversation_id, "user", message)
        store.save_message(conversation_id, "assistant", response)
        store.touch_conversation(conversation_id)
        return conversation_id
