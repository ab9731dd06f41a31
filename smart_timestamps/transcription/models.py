"""Data models for a completed transcription job."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Chapter:
    """Provider summary of a contiguous span of the recording."""

    summary: str
    headline: str
    gist: str
    start_ms: int
    end_ms: int


@dataclass(frozen=True)
class Highlight:
    """A short, high-salience phrase anchored at a single point in time."""

    timestamp_ms: int
    text: str
    confidence: float


@dataclass(frozen=True)
class Word:
    text: str
    start_ms: int
    end_ms: int
    confidence: float = 1.0


@dataclass(frozen=True)
class Entity:
    entity_type: str
    text: str
    start_ms: int
    end_ms: int


@dataclass(frozen=True)
class Utterance:
    """A speaker-attributed segment of the transcript."""

    speaker: str | None
    text: str
    start_ms: int = 0
    end_ms: int = 0


@dataclass(frozen=True)
class TranscriptionResult:
    """Uniform representation of a finished transcript.

    ``words`` are ordered by ``start_ms``; ``chapters`` and ``highlights``
    keep provider order and are not guaranteed to be sorted.
    """

    chapters: list[Chapter] = field(default_factory=list)
    highlights: list[Highlight] = field(default_factory=list)
    words: list[Word] = field(default_factory=list)
    entities: list[Entity] = field(default_factory=list)
    categories: dict[str, float] = field(default_factory=dict)
    content_safety: dict[str, Any] = field(default_factory=dict)
    utterances: list[Utterance] = field(default_factory=list)
