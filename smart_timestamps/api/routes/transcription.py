"""Transcript endpoints: start a speaker-labelled job and report its status."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException

from smart_timestamps.api.models import (
    TranscribeRequest,
    TranscribeResponse,
    TranscriptionStatusResponse,
    UtteranceItem,
)
from smart_timestamps.config import settings
from smart_timestamps.storage import create_signed_read_url, get_supabase_client
from smart_timestamps.transcription.client import (
    TranscriptionFailedError,
    TranscriptionUnavailableError,
    fetch_transcript,
    submit_transcription,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_api_key() -> None:
    if not settings.assemblyai_api_key:
        raise HTTPException(
            status_code=501,
            detail="Transcription is not configured. Set ASSEMBLYAI_API_KEY.",
        )


@router.post("/api/transcribe", response_model=TranscribeResponse)
async def transcribe(request: TranscribeRequest) -> TranscribeResponse:
    """Start a speaker-labelled transcription job for a stored video.

    Returns immediately with the job ID; clients poll
    ``/api/transcription/{id}`` for the result.
    """
    if not request.key:
        raise HTTPException(status_code=400, detail="key is required")
    _require_api_key()

    try:
        audio_url = create_signed_read_url(get_supabase_client(), request.key)
    except Exception as exc:
        logger.exception("Failed to sign read URL for %s", request.key)
        raise HTTPException(status_code=503, detail=f"Storage unavailable: {exc}") from exc

    try:
        transcript_id = await asyncio.to_thread(submit_transcription, audio_url)
    except TranscriptionFailedError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except TranscriptionUnavailableError as exc:
        raise HTTPException(
            status_code=503,
            detail=f"Transcription service unavailable: {exc}",
        ) from exc

    return TranscribeResponse(id=transcript_id)


@router.get("/api/transcription/{transcript_id}", response_model=TranscriptionStatusResponse)
async def get_transcription(transcript_id: str) -> TranscriptionStatusResponse:
    """Report a job's status, with utterances once it has completed."""
    _require_api_key()

    try:
        transcript = await asyncio.to_thread(fetch_transcript, transcript_id)
    except TranscriptionUnavailableError as exc:
        raise HTTPException(
            status_code=503,
            detail=f"Transcription service unavailable: {exc}",
        ) from exc

    status = getattr(transcript.status, "value", str(transcript.status))
    utterances = (transcript.utterances or []) if status == "completed" else []
    return TranscriptionStatusResponse(
        id=transcript_id,
        status=status,
        utterances=[
            UtteranceItem(speaker=u.speaker, text=u.text, start_ms=u.start, end_ms=u.end)
            for u in utterances
        ],
        error=transcript.error,
    )
