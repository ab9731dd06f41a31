"""Applying manual review (edit / accept / reject) to extracted timestamps."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from smart_timestamps.timestamps.formatting import format_time, parse_time


def apply_review(
    timestamps: Iterable[Mapping[str, Any]],
    edits: Iterable[Mapping[str, Any]],
) -> list[dict[str, Any]]:
    """Merge reviewer edits into *timestamps* and keep only accepted entries.

    Each edit lines up with the timestamp at the same position and may carry
    ``time`` (a clock string such as ``"1:05"``), ``title`` and ``accepted``.
    Entries are re-sorted by time because an edited time can move an entry.

    Raises:
        ValueError: If an edited time cannot be parsed.
    """
    reviewed: list[dict[str, Any]] = []
    for original, edit in zip(timestamps, edits, strict=True):
        if not edit.get("accepted", True):
            continue

        entry = dict(original)
        if edit.get("time") is not None:
            entry["time_seconds"] = parse_time(str(edit["time"]))
        if edit.get("title") is not None:
            entry["title"] = str(edit["title"]).strip() or entry["title"]
        entry["formatted_time"] = format_time(entry["time_seconds"])
        reviewed.append(entry)

    return sorted(reviewed, key=lambda e: e["time_seconds"])
