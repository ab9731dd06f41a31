"""Supabase Storage helpers for uploaded videos and saved timestamps."""

from __future__ import annotations

import json
import uuid
from typing import Any

from storage3.utils import StorageException
from supabase import Client, create_client

from smart_timestamps.config import settings


class TimestampsNotFoundError(LookupError):
    """No timestamps have been saved for the requested video."""


def _is_not_found(exc: StorageException) -> bool:
    # Storage reports missing objects as 404, or as 400 with a "not found" error
    payload = exc.args[0] if exc.args else None
    if isinstance(payload, dict):
        status = payload.get("statusCode")
        reason = f"{payload.get('error', '')} {payload.get('message', '')}"
    else:
        status = getattr(exc, "status", None)
        reason = f"{getattr(exc, 'code', '')} {getattr(exc, 'message', '')}"
    try:
        status = int(status)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return False
    reason = reason.lower().replace("_", " ")
    return status == 404 or (status == 400 and "not found" in reason)


def get_supabase_client() -> Client:
    """Create and return a Supabase client from settings."""
    return create_client(settings.supabase_url, settings.supabase_key)


def build_video_key(file_name: str) -> str:
    """Object key for a new upload: ``videos/{uuid}-{file_name}``."""
    return f"videos/{uuid.uuid4()}-{file_name}"


def timestamps_key(video_key: str) -> str:
    return f"timestamps/{video_key}.json"


def _signed_url(result: dict[str, Any]) -> str:
    # storage3 has returned both spellings across releases
    for key in ("signed_url", "signedUrl", "signedURL"):
        if result.get(key):
            return str(result[key])
    msg = f"Storage response carried no signed URL. Keys: {list(result.keys())}"
    raise ValueError(msg)


def create_signed_upload_url(client: Client, key: str) -> str:
    """Return a URL the client can PUT the file body to."""
    result = client.storage.from_(settings.storage_bucket).create_signed_upload_url(key)
    return _signed_url(result)


def create_signed_read_url(client: Client, key: str, expires_in: int | None = None) -> str:
    """Return a time-bounded download URL for *key* (handed to the transcription provider)."""
    result = client.storage.from_(settings.storage_bucket).create_signed_url(
        key, expires_in or settings.signed_url_expiry_seconds
    )
    return _signed_url(result)


def store_timestamps(client: Client, video_key: str, timestamps: list[dict[str, Any]]) -> str:
    """Save *timestamps* as JSON next to the video, overwriting earlier saves.

    Returns:
        The object key the timestamps were written to.
    """
    key = timestamps_key(video_key)
    client.storage.from_(settings.storage_bucket).upload(
        key,
        json.dumps(timestamps).encode("utf-8"),
        {"content-type": "application/json", "upsert": "true"},
    )
    return key


def load_timestamps(client: Client, video_key: str) -> list[dict[str, Any]]:
    """Load previously saved timestamps for *video_key*.

    Raises:
        TimestampsNotFoundError: Nothing has been saved for *video_key*.
        ValueError: The stored object is not a JSON list.
        StorageException: Any other storage failure.
    """
    try:
        raw = client.storage.from_(settings.storage_bucket).download(timestamps_key(video_key))
    except StorageException as exc:
        if _is_not_found(exc):
            raise TimestampsNotFoundError(f"No timestamps stored for {video_key}") from exc
        raise
    data = json.loads(raw)
    if not isinstance(data, list):
        msg = f"Stored timestamps for {video_key!r} are not a list"
        raise ValueError(msg)
    return data
