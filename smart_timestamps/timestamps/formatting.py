"""Conversion between integer seconds and ``M:SS`` / ``H:MM:SS`` strings."""

from __future__ import annotations


def format_time(seconds: int) -> str:
    """Render *seconds* as ``M:SS``, or ``H:MM:SS`` from one hour upwards.

    Minutes and seconds are zero-padded to two digits; hours and the leading
    minutes field are not padded.
    """
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def parse_time(text: str) -> int:
    """Parse ``H:MM:SS``, ``M:SS`` or a bare number of seconds.

    Raises:
        ValueError: If *text* is not a non-negative clock value.
    """
    parts = text.strip().split(":")
    if not parts or len(parts) > 3 or not all(p.isdigit() for p in parts):
        msg = f"Invalid time value: {text!r}. Expected H:MM:SS, M:SS or seconds."
        raise ValueError(msg)

    values = [int(p) for p in parts]
    # Every field after the leading one is a sexagesimal digit pair
    if any(v >= 60 for v in values[1:]):
        msg = f"Invalid time value: {text!r}. Minutes and seconds must be below 60."
        raise ValueError(msg)

    total = 0
    for value in values:
        total = total * 60 + value
    return total
