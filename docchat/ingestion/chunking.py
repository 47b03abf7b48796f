"""Split timed caption streams into overlapping text windows."""

from __future__ import annotations

from docchat.ingestion.models import CaptionEvent, TranscriptChunk


def _event_for_offset(events: list[CaptionEvent], offset: int, total_length: int) -> CaptionEvent:
    """Map a character offset in the joined text onto a caption event.

    The mapping is proportional (offset / length -> event index), so it is only
    an approximation: captions carry no per-word timing.
    """
    if offset < 0:
        return events[-1]
    index = int(offset / total_length * len(events))
    if index >= len(events):
        return events[-1]
    return events[index]


def chunk_captions(
    events: list[CaptionEvent],
    chunk_size: int = 500,
    overlap: int = 50,
    video_id: str = "",
    video_url: str = "",
) -> list[TranscriptChunk]:
    """Concatenate caption text and split it into ~``chunk_size`` character windows.

    Words are accumulated greedily; when the next word would push the buffer
    past ``chunk_size`` characters, the buffer is emitted and the trailing
    ``overlap / chunk_size`` fraction of its *words* seeds the next chunk.

    Args:
        events: Caption events in playback order.
        chunk_size: Target chunk length in characters.
        overlap: Overlap budget in characters, applied as a word fraction.
        video_id: Stamped on every chunk.
        video_url: Stamped on every chunk.

    Returns:
        List of :class:`TranscriptChunk` in transcript order.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if not events:
        return []

    full_text = " ".join(e.text for e in events)
    words = full_text.split()
    if not words:
        return []

    chunks: list[TranscriptChunk] = []
    buffer: list[str] = []
    current_length = 0
    chunk_start = events[0].start
    chunk_end = events[0].start

    def emit() -> None:
        chunks.append(
            TranscriptChunk(
                text=" ".join(buffer),
                start_time=min(chunk_start, chunk_end),
                end_time=chunk_end,
                video_id=video_id,
                video_url=video_url,
            )
        )

    for word in words:
        word_length = len(word) + 1  # trailing space

        event = _event_for_offset(events, full_text.find(word, current_length), len(full_text))
        chunk_end = event.start + event.duration

        if current_length + word_length > chunk_size and buffer:
            emit()
            keep = int(overlap / chunk_size * len(buffer))
            buffer = buffer[-keep:] if keep > 0 else []
            current_length = len(" ".join(buffer))
            chunk_start = event.start

        buffer.append(word)
        current_length += word_length

    if buffer:
        emit()

    return chunks
