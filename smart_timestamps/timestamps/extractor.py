"""Chapter-style timestamp extraction from a finished transcript.

Candidates are collected in three tiers, each only consulted while fewer than
``target_count`` entries exist:

1. provider chapters,
2. provider highlights,
3. sections synthesized at fixed fractions of the video duration, titled
   from the words spoken around that point (or canned titles when there is no
   word-level data).

The result is sorted by time and thinned so that kept entries are at least
``min_gap_seconds`` apart.
"""

from __future__ import annotations

import logging
import math
import re

from smart_timestamps.extraction_config import (
    CANNED_SECTION_TITLES,
    DEFAULT_EXTRACTION_CONFIG,
    ExtractionConfig,
    TimestampCategory,
)
from smart_timestamps.timestamps.formatting import format_time
from smart_timestamps.timestamps.models import Timestamp
from smart_timestamps.timestamps.titles import normalize_title
from smart_timestamps.transcription.models import TranscriptionResult, Word

logger = logging.getLogger(__name__)

_SENTENCE_BREAK_RE = re.compile(r"[.!?,;:]")


def _ms_to_seconds(ms: float) -> int:
    return max(0, math.floor(ms / 1000))


def _make_timestamp(
    time_seconds: int,
    title: str,
    category: TimestampCategory,
    confidence: float,
) -> Timestamp:
    return Timestamp(
        time_seconds=time_seconds,
        formatted_time=format_time(time_seconds),
        title=title,
        category=category,
        confidence=confidence,
    )


def estimate_duration(
    transcript: TranscriptionResult,
    config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG,
) -> float:
    """Best guess of the video length in seconds.

    Takes the latest of the last word's end, the last chapter's end and the
    latest highlight. Falls back to ``fallback_duration_seconds`` when that is
    shorter than ``min_duration_seconds`` (including when nothing is known).
    """
    duration = 0.0
    if transcript.words:
        duration = max(duration, transcript.words[-1].end_ms / 1000)
    if transcript.chapters:
        duration = max(duration, transcript.chapters[-1].end_ms / 1000)
    if transcript.highlights:
        duration = max(duration, *(h.timestamp_ms / 1000 for h in transcript.highlights))

    if duration < config.min_duration_seconds:
        return config.fallback_duration_seconds
    return duration


def nearest_word_index(words: list[Word], time_seconds: float) -> int:
    """Index of the word starting closest to *time_seconds*.

    Ties go to the earliest word.
    """
    best = 0
    best_distance = abs(words[0].start_ms / 1000 - time_seconds)
    for index, word in enumerate(words[1:], start=1):
        distance = abs(word.start_ms / 1000 - time_seconds)
        if distance < best_distance:
            best, best_distance = index, distance
    return best


def title_from_words(
    words: list[Word],
    time_seconds: float,
    config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG,
) -> str:
    """Build a normalized title from the words spoken around *time_seconds*."""
    index = nearest_word_index(words, time_seconds)
    start = max(0, index - config.words_before)
    end = min(len(words) - 1, index + config.words_after)

    phrase = " ".join(w.text for w in words[start : end + 1])
    phrase = _SENTENCE_BREAK_RE.split(phrase, maxsplit=1)[0].strip()
    return normalize_title(phrase)


def _chapter_timestamps(
    transcript: TranscriptionResult, config: ExtractionConfig
) -> list[Timestamp]:
    return [
        _make_timestamp(
            _ms_to_seconds(chapter.start_ms),
            normalize_title(chapter.headline or chapter.gist or chapter.summary or ""),
            TimestampCategory.CHAPTER,
            config.chapter_confidence,
        )
        for chapter in transcript.chapters
    ]


def _highlight_timestamps(transcript: TranscriptionResult) -> list[Timestamp]:
    return [
        _make_timestamp(
            _ms_to_seconds(highlight.timestamp_ms),
            normalize_title(highlight.text),
            TimestampCategory.HIGHLIGHT,
            highlight.confidence,
        )
        for highlight in transcript.highlights
    ]


def _section_timestamps(
    transcript: TranscriptionResult,
    existing: list[Timestamp],
    config: ExtractionConfig,
) -> list[Timestamp]:
    """Synthesize sections at fixed fractions of the video duration.

    A candidate point is skipped when an existing entry, or a section added
    earlier in this pass, lies within ``min_gap_seconds`` of it.
    """
    duration = estimate_duration(transcript, config)
    points = [math.floor(duration * fraction) for fraction in config.section_fractions]
    logger.debug("Synthesizing sections for %.1fs video at %s", duration, points)

    taken = [t.time_seconds for t in existing]
    sections: list[Timestamp] = []
    for index, point in enumerate(points):
        if any(abs(t - point) < config.min_gap_seconds for t in taken):
            continue

        if transcript.words:
            title = title_from_words(transcript.words, point, config)
            confidence = config.section_confidence
        else:
            title = CANNED_SECTION_TITLES[min(index, len(CANNED_SECTION_TITLES) - 1)]
            confidence = config.canned_section_confidence

        sections.append(_make_timestamp(point, title, TimestampCategory.SECTION, confidence))
        taken.append(point)
    return sections


def deduplicate(timestamps: list[Timestamp], min_gap_seconds: int = 30) -> list[Timestamp]:
    """Sort by time and drop entries too close to the last kept one.

    An entry near a dropped predecessor is compared against the last *kept*
    entry, so ``[0, 20, 45]`` keeps 0 and 45.
    """
    kept: list[Timestamp] = []
    for timestamp in sorted(timestamps, key=lambda t: t.time_seconds):
        if not kept or timestamp.time_seconds - kept[-1].time_seconds >= min_gap_seconds:
            kept.append(timestamp)
    return kept


def extract_timestamps(
    transcript: TranscriptionResult,
    config: ExtractionConfig = DEFAULT_EXTRACTION_CONFIG,
) -> list[Timestamp]:
    """Derive an ordered, deduplicated list of chapter timestamps.

    Args:
        transcript: Parsed transcription result. Missing chapters, highlights
            or words simply contribute nothing.
        config: Extraction tunables.

    Returns:
        Timestamps ascending by time, at least ``min_gap_seconds`` apart.
        Never empty: synthesized sections cover transcripts with no usable
        chapters or highlights.
    """
    timestamps = _chapter_timestamps(transcript, config)

    if len(timestamps) < config.target_count and transcript.highlights:
        timestamps.extend(_highlight_timestamps(transcript))

    if len(timestamps) < config.target_count:
        timestamps.extend(_section_timestamps(transcript, timestamps, config))

    result = deduplicate(timestamps, config.min_gap_seconds)
    logger.info(
        "Extracted %d timestamps (%d candidates) from %d chapters, %d highlights, %d words",
        len(result),
        len(timestamps),
        len(transcript.chapters),
        len(transcript.highlights),
        len(transcript.words),
    )
    return result
