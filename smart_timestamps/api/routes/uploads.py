"""Upload endpoint: issue a signed URL for direct-to-storage uploads."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from smart_timestamps.api.models import UploadUrlRequest, UploadUrlResponse
from smart_timestamps.storage import (
    build_video_key,
    create_signed_upload_url,
    get_supabase_client,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/upload-url", response_model=UploadUrlResponse)
async def get_upload_url(request: UploadUrlRequest) -> UploadUrlResponse:
    """Return a signed URL the client PUTs the video to, plus its storage key.

    The file never passes through this server.
    """
    if not request.file_name or not request.file_type:
        raise HTTPException(status_code=400, detail="file_name and file_type are required")

    key = build_video_key(request.file_name)
    try:
        upload_url = create_signed_upload_url(get_supabase_client(), key)
    except Exception as exc:
        logger.exception("Failed to create upload URL for %s", key)
        raise HTTPException(
            status_code=503,
            detail=f"Storage unavailable: {exc}",
        ) from exc

    return UploadUrlResponse(upload_url=upload_url, key=key)
