"""Extraction configuration: timestamp categories and ExtractionConfig dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TimestampCategory(str, Enum):
    """Where a timestamp was sourced from."""

    CHAPTER = "Chapter"
    HIGHLIGHT = "Highlight"
    SECTION = "Section"


CANNED_SECTION_TITLES: tuple[str, ...] = (
    "Introduction to the project",
    "Setting up the environment",
    "Building core functionality",
    "Implementing advanced features",
    "Finalizing and deploying",
)


@dataclass(frozen=True)
class ExtractionConfig:
    """Immutable tunables for timestamp extraction.

    Defaults reproduce the product behaviour: five entries are the target,
    entries closer than 30 seconds collapse, and a 15 minute video is assumed
    when the transcript carries no usable duration signal.
    """

    target_count: int = 5
    min_gap_seconds: int = 30
    min_duration_seconds: float = 30.0
    fallback_duration_seconds: float = 15 * 60
    section_fractions: tuple[float, ...] = (0.0, 0.25, 0.5, 0.75, 0.9)
    words_before: int = 5
    words_after: int = 10
    chapter_confidence: float = 0.95
    section_confidence: float = 0.85
    canned_section_confidence: float = 0.8


DEFAULT_EXTRACTION_CONFIG = ExtractionConfig()
