"""Parser for AssemblyAI transcript JSON into :class:`TranscriptionResult`."""

from __future__ import annotations

from typing import Any

from smart_timestamps.transcription.models import (
    Chapter,
    Entity,
    Highlight,
    TranscriptionResult,
    Utterance,
    Word,
)


def _items(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Return ``data[key]`` as a list, treating a missing key or ``null`` as empty."""
    value = data.get(key)
    return list(value) if value else []


def parse_chapter(item: dict[str, Any]) -> Chapter:
    return Chapter(
        summary=item.get("summary") or "",
        headline=item.get("headline") or "",
        gist=item.get("gist") or "",
        start_ms=item.get("start", 0),
        end_ms=item.get("end", 0),
    )


def parse_highlight(item: dict[str, Any]) -> Highlight:
    """Parse one auto-highlight result.

    The highlight's time is its ``timestamp`` field when present, otherwise
    the start of its first occurrence in ``timestamps``. Confidence falls back
    to the provider's ``rank`` score.
    """
    timestamp_ms = item.get("timestamp")
    if timestamp_ms is None:
        occurrences = item.get("timestamps") or []
        timestamp_ms = occurrences[0].get("start", 0) if occurrences else 0

    confidence = item.get("confidence")
    if confidence is None:
        confidence = item.get("rank") or 0.0

    return Highlight(
        timestamp_ms=timestamp_ms,
        text=item.get("text") or "",
        confidence=float(confidence),
    )


def parse_word(item: dict[str, Any]) -> Word:
    return Word(
        text=item.get("text") or "",
        start_ms=item.get("start", 0),
        end_ms=item.get("end", 0),
        confidence=float(item.get("confidence", 1.0)),
    )


def parse_entity(item: dict[str, Any]) -> Entity:
    # The SDK hands back its EntityType enum rather than the raw string.
    entity_type = item.get("entity_type") or ""
    return Entity(
        entity_type=str(getattr(entity_type, "value", entity_type)),
        text=item.get("text") or "",
        start_ms=item.get("start", 0),
        end_ms=item.get("end", 0),
    )


def parse_utterance(item: dict[str, Any]) -> Utterance:
    return Utterance(
        speaker=item.get("speaker"),
        text=item.get("text") or "",
        start_ms=item.get("start", 0),
        end_ms=item.get("end", 0),
    )


def parse_transcription_result(data: dict[str, Any]) -> TranscriptionResult:
    """Parse a completed AssemblyAI transcript response.

    Expected shape (every section optional)::

        {
          "chapters": [{"summary", "headline", "gist", "start", "end"}],
          "auto_highlights_result": {"results": [{"text", "timestamp" | "timestamps", ...}]},
          "words": [{"text", "start", "end", "confidence"}],
          "entities": [{"entity_type", "text", "start", "end"}],
          "iab_categories_result": {"summary": {"Topic>Sub": 0.9}},
          "content_safety_labels": {...},
          "utterances": [{"speaker", "text", "start", "end"}]
        }

    All times are milliseconds.
    """
    highlights_result = data.get("auto_highlights_result") or {}
    categories_result = data.get("iab_categories_result") or {}

    return TranscriptionResult(
        chapters=[parse_chapter(c) for c in _items(data, "chapters")],
        highlights=[parse_highlight(h) for h in _items(highlights_result, "results")],
        words=[parse_word(w) for w in _items(data, "words")],
        entities=[parse_entity(e) for e in _items(data, "entities")],
        categories=dict(categories_result.get("summary") or {}),
        content_safety=dict(data.get("content_safety_labels") or {}),
        utterances=[parse_utterance(u) for u in _items(data, "utterances")],
    )
