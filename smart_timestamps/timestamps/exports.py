"""Plain-text, Markdown and JSON renderings of timestamps and transcripts."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from smart_timestamps.timestamps.models import Timestamp
from smart_timestamps.transcription.models import Utterance


def _as_dict(timestamp: Timestamp | Mapping[str, Any]) -> dict[str, Any]:
    # The review UI works on plain dicts after edits; both shapes are accepted.
    if isinstance(timestamp, Timestamp):
        return timestamp.to_dict()
    return dict(timestamp)


def to_plain_text(timestamps: Iterable[Timestamp | Mapping[str, Any]]) -> str:
    """One ``M:SS Title`` line per timestamp (the format video platforms read)."""
    lines = []
    for ts in timestamps:
        data = _as_dict(ts)
        lines.append(f"{data['formatted_time']} {data['title']}")
    return "\n".join(lines)


def to_markdown(timestamps: Iterable[Timestamp | Mapping[str, Any]]) -> str:
    lines = []
    for ts in timestamps:
        data = _as_dict(ts)
        lines.append(f"- **{data['formatted_time']}** {data['title']}")
    return "\n".join(lines)


def to_json(timestamps: Iterable[Timestamp | Mapping[str, Any]]) -> str:
    return json.dumps([_as_dict(ts) for ts in timestamps], indent=2, ensure_ascii=False)


def speaker_label(speaker: str | None, speaker_names: Mapping[str, str] | None = None) -> str:
    """Display name for *speaker*, falling back to ``Speaker {id}``."""
    names = speaker_names or {}
    if speaker is not None and names.get(speaker):
        return names[speaker]
    return f"Speaker {speaker if speaker is not None else '?'}"


def format_transcript(
    utterances: Iterable[Utterance],
    speaker_names: Mapping[str, str] | None = None,
) -> str:
    """Render utterances as ``Name: text`` blocks separated by blank lines."""
    return "\n\n".join(
        f"{speaker_label(u.speaker, speaker_names)}: {u.text}" for u in utterances
    )
