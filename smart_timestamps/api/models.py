"""Pydantic request/response schemas for the Smart Timestamps API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from smart_timestamps.extraction_config import TimestampCategory


class UploadUrlRequest(BaseModel):
    """Request body for the /api/upload-url endpoint."""

    file_name: str
    file_type: str


class UploadUrlResponse(BaseModel):
    upload_url: str
    key: str


class AnalyzeVideoRequest(BaseModel):
    """Request body for the /api/analyze-video endpoint."""

    video_key: str


class TimestampItem(BaseModel):
    """A single chapter timestamp."""

    time_seconds: int
    formatted_time: str
    title: str
    category: TimestampCategory
    confidence: float


class EntityItem(BaseModel):
    entity_type: str
    text: str
    start_ms: int
    end_ms: int


class AnalyzeVideoResponse(BaseModel):
    """Response body for the /api/analyze-video endpoint."""

    timestamps: list[TimestampItem]
    categories: dict[str, float] = {}
    entities: list[EntityItem] = []
    content_safety: dict[str, Any] = {}


class SaveTimestampsRequest(BaseModel):
    """Request body for the /api/timestamps endpoint.

    Timestamps arrive after manual review, so titles and times may differ
    from what extraction produced.
    """

    video_key: str
    timestamps: list[TimestampItem]


class SaveTimestampsResponse(BaseModel):
    success: bool
    key: str


class TranscribeRequest(BaseModel):
    """Request body for the /api/transcribe endpoint."""

    key: str


class TranscribeResponse(BaseModel):
    id: str


class UtteranceItem(BaseModel):
    speaker: str | None = None
    text: str
    start_ms: int = 0
    end_ms: int = 0


class TranscriptionStatusResponse(BaseModel):
    """Response body for the /api/transcription/{id} endpoint."""

    id: str
    status: str
    utterances: list[UtteranceItem] = []
    error: str | None = None
