"""Analysis endpoint: transcribe an uploaded video and derive chapter timestamps."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException

from smart_timestamps.api.models import (
    AnalyzeVideoRequest,
    AnalyzeVideoResponse,
    EntityItem,
    TimestampItem,
)
from smart_timestamps.config import settings
from smart_timestamps.storage import create_signed_read_url, get_supabase_client
from smart_timestamps.transcription.client import (
    TranscriptionFailedError,
    TranscriptionTimeoutError,
    TranscriptionUnavailableError,
    analyze_audio,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/analyze-video", response_model=AnalyzeVideoResponse)
async def analyze_video(request: AnalyzeVideoRequest) -> AnalyzeVideoResponse:
    """Run chapter/highlight analysis on a stored video and return timestamps.

    The provider reads the video through a short-lived signed URL. Blocks
    until the analysis job finishes (or the polling timeout is hit).

    Raises:
        HTTPException(400): Missing key, or the provider could not process the media.
        HTTPException(501): ASSEMBLYAI_API_KEY is not configured.
        HTTPException(503): Storage or provider unreachable.
        HTTPException(504): The job did not finish in time.
    """
    if not request.video_key:
        raise HTTPException(status_code=400, detail="video_key is required")

    if not settings.assemblyai_api_key:
        raise HTTPException(
            status_code=501,
            detail="Video analysis is not configured. Set ASSEMBLYAI_API_KEY.",
        )

    try:
        audio_url = create_signed_read_url(get_supabase_client(), request.video_key)
    except Exception as exc:
        logger.exception("Failed to sign read URL for %s", request.video_key)
        raise HTTPException(status_code=503, detail=f"Storage unavailable: {exc}") from exc

    logger.info("Submitting %s for analysis", request.video_key)
    try:
        # Synchronous SDK + polling loop: keep it off the event loop.
        result, timestamps = await asyncio.to_thread(analyze_audio, audio_url)
    except TranscriptionFailedError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except TranscriptionTimeoutError as exc:
        raise HTTPException(status_code=504, detail=str(exc)) from exc
    except TranscriptionUnavailableError as exc:
        raise HTTPException(
            status_code=503,
            detail=f"Transcription service unavailable: {exc}",
        ) from exc

    return AnalyzeVideoResponse(
        timestamps=[TimestampItem(**ts.to_dict()) for ts in timestamps],
        categories=result.categories,
        entities=[
            EntityItem(
                entity_type=e.entity_type,
                text=e.text,
                start_ms=e.start_ms,
                end_ms=e.end_ms,
            )
            for e in result.entities
        ],
        content_safety=result.content_safety,
    )
