"""Data models for extracted timestamps."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from smart_timestamps.extraction_config import TimestampCategory


@dataclass(frozen=True)
class Timestamp:
    """A single chapter marker ready for display or export."""

    time_seconds: int
    formatted_time: str
    title: str
    category: TimestampCategory
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["category"] = self.category.value
        return data
