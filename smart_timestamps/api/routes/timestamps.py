"""Timestamp endpoints: save and load reviewed timestamps for a video."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from smart_timestamps.api.models import (
    SaveTimestampsRequest,
    SaveTimestampsResponse,
    TimestampItem,
)
from smart_timestamps.storage import (
    TimestampsNotFoundError,
    get_supabase_client,
    load_timestamps,
    store_timestamps,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/timestamps", response_model=SaveTimestampsResponse)
async def save_timestamps(request: SaveTimestampsRequest) -> SaveTimestampsResponse:
    """Persist the accepted timestamps for a video, replacing any earlier save."""
    if not request.video_key:
        raise HTTPException(status_code=400, detail="video_key is required")

    rows = [ts.model_dump(mode="json") for ts in request.timestamps]
    try:
        key = store_timestamps(get_supabase_client(), request.video_key, rows)
    except Exception as exc:
        logger.exception("Failed to store timestamps for %s", request.video_key)
        raise HTTPException(status_code=503, detail=f"Storage unavailable: {exc}") from exc

    logger.info("Stored %d timestamps at %s", len(rows), key)
    return SaveTimestampsResponse(success=True, key=key)


@router.get("/api/timestamps/{video_key:path}", response_model=list[TimestampItem])
async def get_timestamps(video_key: str) -> list[TimestampItem]:
    """Return the timestamps previously saved for *video_key*.

    Raises:
        HTTPException(404): Nothing has been saved for this video.
        HTTPException(502): The saved file exists but cannot be read back.
        HTTPException(503): Storage unreachable.
    """
    try:
        rows = load_timestamps(get_supabase_client(), video_key)
        return [TimestampItem(**row) for row in rows]
    except TimestampsNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (ValueError, TypeError) as exc:
        # json and pydantic validation errors are ValueErrors
        logger.exception("Stored timestamps for %s are unreadable", video_key)
        raise HTTPException(
            status_code=502,
            detail=f"Stored timestamps for {video_key} are unreadable",
        ) from exc
    except Exception as exc:
        logger.exception("Failed to load timestamps for %s", video_key)
        raise HTTPException(status_code=503, detail=f"Storage unavailable: {exc}") from exc
