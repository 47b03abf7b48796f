"""Process-wide service wiring.

Everything here is built once at startup and handed to the API through
``app.state``; nothing is cached at module level.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from docchat.chat.models import ChatFeatures
from docchat.chat.service import ChatService
from docchat.config import Settings
from docchat.ingestion.manager import IngestionManager
from docchat.ingestion.youtube import CaptionFetcher, TimedTextCaptionFetcher
from docchat.retrieval.combined import CombinedRetriever
from docchat.retrieval.generation import AnthropicGenerator, Generator
from docchat.retrieval.knowledge_base import DEFAULT_FOLLOW_UPS, GRAFANA_DOCS, GRAFANA_FOLLOW_UPS
from docchat.retrieval.static import StaticCorpusRetriever
from docchat.retrieval.transcripts import TranscriptRetriever
from docchat.storage import ConversationStore, SupabaseConversationStore, get_supabase_client


@dataclass
class Services:
    """The long-lived collaborators shared by every request."""

    ingestion: IngestionManager
    retriever: CombinedRetriever
    chat: ChatService


def build_services(
    settings: Settings,
    generator: Generator | None = None,
    fetcher: CaptionFetcher | None = None,
    store: ConversationStore | None = None,
    rng: random.Random | None = None,
) -> Services:
    """Wire the retrieval stack and chat service from settings.

    Collaborators passed explicitly take precedence over the ones built from
    ``settings``; persistence is only enabled when Supabase is configured or a
    ``store`` is supplied.
    """
    rng = rng or random.Random()

    ingestion = IngestionManager(
        fetcher or TimedTextCaptionFetcher(timeout=settings.caption_timeout_seconds),
        chunk_size=settings.chunk_size,
        overlap=settings.chunk_overlap,
        language=settings.caption_language,
    )
    retriever = CombinedRetriever(
        [
            StaticCorpusRetriever(GRAFANA_DOCS, GRAFANA_FOLLOW_UPS, DEFAULT_FOLLOW_UPS, rng=rng),
            TranscriptRetriever(ingestion),
        ],
        rng=rng,
    )

    if store is None and settings.persistence_enabled:
        store = SupabaseConversationStore(get_supabase_client(settings))

    chat = ChatService(
        generator or AnthropicGenerator.from_settings(settings),
        retriever=retriever,
        store=store,
        features=ChatFeatures(
            enable_follow_up_questions=settings.enable_follow_up_questions,
            enable_sources=settings.enable_sources,
            debug_retrieval=settings.debug_retrieval,
            retrieval_limit=settings.retrieval_limit,
        ),
    )
    return Services(ingestion=ingestion, retriever=retriever, chat=chat)
