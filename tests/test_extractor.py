"""Tests for timestamp extraction: tiers, duration estimate, and dedup."""

from __future__ import annotations

from smart_timestamps.extraction_config import (
    CANNED_SECTION_TITLES,
    ExtractionConfig,
    TimestampCategory,
)
from smart_timestamps.timestamps.extractor import (
    deduplicate,
    estimate_duration,
    extract_timestamps,
    nearest_word_index,
    title_from_words,
)
from smart_timestamps.timestamps.models import Timestamp
from smart_timestamps.transcription.models import (
    Chapter,
    Highlight,
    TranscriptionResult,
    Word,
)


def _chapter(start_s: float, headline: str = "Overview", end_s: float | None = None) -> Chapter:
    end = end_s if end_s is not None else start_s + 60
    return Chapter(
        summary="",
        headline=headline,
        gist="",
        start_ms=int(start_s * 1000),
        end_ms=int(end * 1000),
    )


def _words(texts: list[str], spacing_s: float = 1.0) -> list[Word]:
    return [
        Word(
            text=t,
            start_ms=int(i * spacing_s * 1000),
            end_ms=int(i * spacing_s * 1000 + 500),
        )
        for i, t in enumerate(texts)
    ]


def _ts(seconds: int) -> Timestamp:
    return Timestamp(
        time_seconds=seconds,
        formatted_time="",
        title=f"t{seconds}",
        category=TimestampCategory.CHAPTER,
        confidence=1.0,
    )


def _assert_ordered_and_spaced(timestamps: list[Timestamp]) -> None:
    times = [t.time_seconds for t in timestamps]
    for earlier, later in zip(times, times[1:]):
        assert later - earlier >= 30


# ---------------------------------------------------------------------------
# Tier 1: chapters
# ---------------------------------------------------------------------------


class TestChapters:
    def test_enough_chapters_skip_other_tiers(self) -> None:
        transcript = TranscriptionResult(
            chapters=[_chapter(s) for s in (0, 60, 120, 180, 240)],
            highlights=[Highlight(timestamp_ms=90_000, text="big moment", confidence=0.9)],
            words=_words(["hello"] * 10),
        )
        result = extract_timestamps(transcript)

        assert len(result) == 5
        assert all(t.category is TimestampCategory.CHAPTER for t in result)
        assert all(t.confidence == 0.95 for t in result)

    def test_chapter_fields(self) -> None:
        transcript = TranscriptionResult(
            chapters=[_chapter(s, "I want to build a REST API") for s in (0, 60, 120, 180, 3661.9)]
        )
        result = extract_timestamps(transcript)

        assert result[0].title == "Building a REST API"
        assert result[-1].time_seconds == 3661
        assert result[-1].formatted_time == "1:01:01"

    def test_title_falls_back_to_gist_then_summary(self) -> None:
        chapters = [
            Chapter(summary="Summary", headline="", gist="deploy to prod", start_ms=0, end_ms=1),
            Chapter(summary="the wrap-up", headline="", gist="", start_ms=60_000, end_ms=1),
            Chapter(summary="", headline="", gist="", start_ms=120_000, end_ms=1),
            _chapter(180),
            _chapter(240),
        ]
        titles = [t.title for t in extract_timestamps(TranscriptionResult(chapters=chapters))]

        assert titles[:3] == ["Deploying to prod", "The wrap-up", ""]

    def test_unsorted_chapters_are_sorted(self) -> None:
        transcript = TranscriptionResult(chapters=[_chapter(s) for s in (240, 0, 120, 60, 180)])
        times = [t.time_seconds for t in extract_timestamps(transcript)]
        assert times == [0, 60, 120, 180, 240]


# ---------------------------------------------------------------------------
# Tiers 2 and 3
# ---------------------------------------------------------------------------


class TestHighlightsAndSections:
    def test_highlights_then_canned_sections(self) -> None:
        transcript = TranscriptionResult(
            chapters=[_chapter(0, "Intro", end_s=300)],
            highlights=[
                Highlight(timestamp_ms=100_000, text="use the cache", confidence=0.7),
                Highlight(timestamp_ms=200_000, text="benchmarks", confidence=0.6),
            ],
        )
        result = extract_timestamps(transcript)

        assert [t.time_seconds for t in result] == [0, 100, 150, 200, 270]
        assert [t.category for t in result] == [
            TimestampCategory.CHAPTER,
            TimestampCategory.HIGHLIGHT,
            TimestampCategory.SECTION,
            TimestampCategory.HIGHLIGHT,
            TimestampCategory.SECTION,
        ]
        assert result[1].title == "Using the cache"
        assert result[1].confidence == 0.7
        # Canned titles follow the candidate index, not the output position
        assert result[2].title == CANNED_SECTION_TITLES[2]
        assert result[4].title == CANNED_SECTION_TITLES[4]
        assert result[4].confidence == 0.8

    def test_empty_transcript_gets_canned_sections(self) -> None:
        result = extract_timestamps(TranscriptionResult())

        assert [t.time_seconds for t in result] == [0, 225, 450, 675, 810]
        assert [t.title for t in result] == list(CANNED_SECTION_TITLES)
        assert all(t.category is TimestampCategory.SECTION for t in result)

    def test_sections_skip_points_near_existing_entries(self) -> None:
        transcript = TranscriptionResult(
            chapters=[_chapter(0, "Start"), _chapter(10, "Too close", end_s=600)],
        )
        result = extract_timestamps(transcript)

        assert [t.time_seconds for t in result] == [0, 150, 300, 450, 540]
        assert result[0].title == "Start"
        assert result[1].title == "Setting up the environment"

    def test_sections_titled_from_words(self) -> None:
        words = _words([f"word{i}" for i in range(100)])
        result = extract_timestamps(TranscriptionResult(words=words))

        # D = 99.5s -> candidates 0, 24, 49, 74, 89; 24 and 74 are too close
        assert [t.time_seconds for t in result] == [0, 49, 89]
        assert result[0].title == " ".join(f"word{i}" for i in range(11)).capitalize()
        assert all(t.confidence == 0.85 for t in result)

    def test_output_is_never_empty(self) -> None:
        transcript = TranscriptionResult(words=_words(["."]))
        assert extract_timestamps(transcript)


class TestInvariants:
    def test_mixed_sources_are_ordered_and_spaced(self) -> None:
        transcript = TranscriptionResult(
            chapters=[_chapter(5, end_s=1000), _chapter(20), _chapter(400)],
            highlights=[
                Highlight(timestamp_ms=410_000, text="x", confidence=0.5),
                Highlight(timestamp_ms=700_000, text="y", confidence=0.5),
            ],
            words=_words([f"w{i}" for i in range(50)], spacing_s=20),
        )
        _assert_ordered_and_spaced(extract_timestamps(transcript))

    def test_custom_gap(self) -> None:
        config = ExtractionConfig(min_gap_seconds=100)
        transcript = TranscriptionResult(chapters=[_chapter(s) for s in (0, 60, 120, 180, 240)])
        times = [t.time_seconds for t in extract_timestamps(transcript, config)]
        assert times == [0, 120, 240]


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------


class TestDeduplicate:
    def test_compares_against_last_kept(self) -> None:
        result = deduplicate([_ts(45), _ts(0), _ts(20)])
        assert [t.time_seconds for t in result] == [0, 45]

    def test_exact_gap_is_kept(self) -> None:
        assert [t.time_seconds for t in deduplicate([_ts(0), _ts(30)])] == [0, 30]

    def test_same_time_keeps_first_in_input_order(self) -> None:
        first = _ts(10)
        second = Timestamp(10, "", "other", TimestampCategory.SECTION, 0.5)
        assert deduplicate([first, second]) == [first]

    def test_empty(self) -> None:
        assert deduplicate([]) == []


class TestEstimateDuration:
    def test_latest_signal_wins(self) -> None:
        transcript = TranscriptionResult(
            chapters=[_chapter(0, end_s=500)],
            highlights=[Highlight(timestamp_ms=1_200_000, text="late", confidence=1.0)],
            words=_words(["a", "b"]),
        )
        assert estimate_duration(transcript) == 1200

    def test_no_signal_defaults_to_fifteen_minutes(self) -> None:
        assert estimate_duration(TranscriptionResult()) == 900

    def test_short_video_defaults_to_fifteen_minutes(self) -> None:
        assert estimate_duration(TranscriptionResult(words=_words(["a"] * 10))) == 900


class TestWordWindows:
    def test_nearest_word_tie_goes_to_first(self) -> None:
        words = [Word("a", 9000, 9500), Word("b", 11000, 11500)]
        assert nearest_word_index(words, 10) == 0

    def test_nearest_word(self) -> None:
        words = _words(["a", "b", "c", "d"])
        assert nearest_word_index(words, 2.4) == 2

    def test_title_cut_at_first_punctuation(self) -> None:
        words = _words(["let's", "deploy", "the", "app.", "Then", "more"])
        assert title_from_words(words, 0) == "Deploying the app"

    def test_window_is_clamped(self) -> None:
        words = _words([f"w{i}" for i in range(30)])
        # nearest is w20; window runs from w15 through w29 (clamped from w30)
        assert title_from_words(words, 20) == " ".join(f"w{i}" for i in range(15, 30)).capitalize()
