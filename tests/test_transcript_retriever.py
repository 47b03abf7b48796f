"""Tests for occurrence-count retrieval over ingested transcripts."""

from __future__ import annotations

import asyncio

from docchat.ingestion.manager import IngestionManager
from docchat.ingestion.models import CaptionEvent, TranscriptChunk
from docchat.retrieval.transcripts import (
    GENERIC_FOLLOW_UPS,
    TranscriptRetriever,
    format_chunk,
    format_timestamp,
)

from tests.fakes import OTHER_VIDEO_ID, VIDEO_ID, FakeFetcher


def _retriever(captions: dict[str, str], titles: dict[str, str] | None = None) -> TranscriptRetriever:
    fetcher = FakeFetcher(
        captions={vid: [CaptionEvent(text=text, start=0.0, duration=65.0)] for vid, text in captions.items()}
    )
    manager = IngestionManager(fetcher, chunk_size=500, overlap=50)
    for vid in captions:
        asyncio.run(manager.add_video(vid, title=(titles or {}).get(vid)))
    return TranscriptRetriever(manager)


class TestFormatting:
    def test_minutes_only(self) -> None:
        assert format_timestamp(65) == "1:05"
        assert format_timestamp(0) == "0:00"

    def test_with_hours(self) -> None:
        assert format_timestamp(3725.9) == "1:02:05"

    def test_chunk_block(self) -> None:
        chunk = TranscriptChunk(
            text="hello grafana",
            start_time=5.0,
            end_time=70.0,
            video_id=VIDEO_ID,
            video_url=f"https://www.youtube.com/watch?v={VIDEO_ID}",
        )
        assert format_chunk(chunk, "Intro") == (
            "[YouTube Video: Intro]\n"
            "Time: 0:05 - 1:10\n"
            f"URL: https://www.youtube.com/watch?v={VIDEO_ID}\n\n"
            "Content:\nhello grafana"
        )
        assert format_chunk(chunk).startswith("[YouTube Video]\n")


class TestFindRelevant:
    def test_no_videos_is_empty(self) -> None:
        assert _retriever({}).find_relevant("grafana", 3) == []

    def test_no_match_is_empty(self) -> None:
        assert _retriever({VIDEO_ID: "dashboards and panels"}).find_relevant("kubernetes", 3) == []

    def test_score_counts_occurrences_and_phrase(self) -> None:
        docs = _retriever({VIDEO_ID: "Grafana alerts and more grafana"}).find_relevant("grafana", 3)
        # 2 occurrences * 2 + 3 for presence + 10 for the whole query
        assert docs[0].score == 17

    def test_short_words_ignored(self) -> None:
        assert _retriever({VIDEO_ID: "go to it"}).find_relevant("go to", 3)[0].score == 10

    def test_ranked_and_limited(self) -> None:
        retriever = _retriever(
            {
                VIDEO_ID: "alert alert alert threshold",
                OTHER_VIDEO_ID: "one alert here",
            },
            titles={VIDEO_ID: "Alerting deep dive"},
        )
        docs = retriever.find_relevant("alert", 1)
        assert len(docs) == 1
        assert docs[0].topic == "Alerting deep dive"

        both = retriever.find_relevant("alert", 5)
        assert [d.score for d in both] == sorted((d.score for d in both), reverse=True)
        assert both[1].topic == f"YouTube Video: {OTHER_VIDEO_ID}"

    def test_content_is_formatted_block(self) -> None:
        docs = _retriever({VIDEO_ID: "panels everywhere"}, titles={VIDEO_ID: "Panels"}).find_relevant(
            "panels", 3
        )
        assert docs[0].content.startswith("[YouTube Video: Panels]\nTime: 0:00 - 1:05\n")
        assert "Content:\npanels everywhere" in docs[0].content


class TestFollowUps:
    def test_related_title(self) -> None:
        retriever = _retriever({VIDEO_ID: "text"}, titles={VIDEO_ID: "Grafana Alerts tutorial"})
        questions = retriever.follow_up_questions("alerts")
        assert questions[0] == "Tell me more about alerts"
        assert len(questions) == 4

    def test_unrelated_topic(self) -> None:
        retriever = _retriever({VIDEO_ID: "text"}, titles={VIDEO_ID: "Dashboards"})
        assert retriever.follow_up_questions("General") == GENERIC_FOLLOW_UPS
