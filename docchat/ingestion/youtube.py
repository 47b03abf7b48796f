"""YouTube identifiers and caption retrieval."""

from __future__ import annotations

import html
import logging
import re
from typing import Protocol

import httpx

from docchat.exceptions import CaptionFetchError
from docchat.ingestion.models import CaptionEvent

logger = logging.getLogger(__name__)

TIMEDTEXT_URL = "https://www.youtube.com/api/timedtext"

_BARE_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")
_URL_ID_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtube\.com/.*[?&]v=([a-zA-Z0-9_-]{11})"),
]

_TEXT_ELEMENT_RE = re.compile(
    r'<text start="([\d.]+)" dur="([\d.]+)"[^>]*>(.*?)</text>',
    re.DOTALL,
)
_TAG_RE = re.compile(r"<[^>]+>")


def extract_video_id(url_or_id: str) -> str | None:
    """Return the 11-character video id for a bare id or a YouTube URL.

    Recognised URL shapes: ``youtube.com/watch?v=ID``, ``youtu.be/ID``,
    ``youtube.com/embed/ID`` and any ``youtube.com`` URL with a ``v=ID``
    query parameter. Returns ``None`` when nothing matches.
    """
    if _BARE_ID_RE.match(url_or_id):
        return url_or_id

    for pattern in _URL_ID_PATTERNS:
        match = pattern.search(url_or_id)
        if match:
            return match.group(1)

    return None


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def parse_timedtext_xml(xml_text: str) -> list[CaptionEvent]:
    """Parse ``<text start=".." dur="..">`` caption elements.

    HTML entities are decoded, nested markup is stripped and empty captions
    are dropped.
    """
    events: list[CaptionEvent] = []
    for match in _TEXT_ELEMENT_RE.finditer(xml_text):
        # Entities are decoded first so escaped markup (&lt;i&gt;) is removed too
        text = _TAG_RE.sub("", html.unescape(match.group(3))).strip()
        if text:
            events.append(
                CaptionEvent(text=text, start=float(match.group(1)), duration=float(match.group(2)))
            )
    return events


class CaptionFetcher(Protocol):
    """Source of timed captions for a video.

    An empty list means the video has no captions; that is not an error.
    """

    def fetch_transcript(self, video_id: str, language: str) -> list[CaptionEvent]: ...


class TimedTextCaptionFetcher:
    """Fetch captions from the public ``timedtext`` endpoint via httpx.

    The preferred language is tried first, then English and Russian.
    """

    fallback_languages: tuple[str, ...] = ("en", "ru")

    def __init__(self, timeout: float = 15.0, client: httpx.Client | None = None) -> None:
        self._client = client or httpx.Client(
            timeout=timeout,
            headers={
                "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
                "Accept": "text/xml",
            },
        )

    def _languages(self, language: str) -> list[str]:
        return list(dict.fromkeys([language, *self.fallback_languages]))

    def fetch_transcript(self, video_id: str, language: str) -> list[CaptionEvent]:
        last_error: httpx.HTTPError | None = None
        transport_failures = 0
        languages = self._languages(language)

        for lang in languages:
            try:
                r = self._client.get(
                    TIMEDTEXT_URL, params={"lang": lang, "v": video_id, "fmt": "srv3"}
                )
            except httpx.HTTPError as exc:
                logger.warning("Caption request failed for %s (%s): %s", video_id, lang, exc)
                last_error = exc
                transport_failures += 1
                continue

            if r.status_code != 200:
                continue
            events = parse_timedtext_xml(r.text)
            if events:
                logger.info("Fetched %d captions for %s (%s)", len(events), video_id, lang)
                return events

        if transport_failures == len(languages):
            raise CaptionFetchError(f"Caption fetch failed for {video_id}: {last_error}")

        logger.warning("No transcript available for video %s", video_id)
        return []

    def close(self) -> None:
        self._client.close()
