"""HTTP client wrapper for the Smart Timestamps FastAPI backend."""

from __future__ import annotations

import os
import time
from collections.abc import Callable

import httpx
import streamlit as st

API_URL = os.getenv("API_URL", "http://localhost:8000")

# Statuses after which a transcription job will not change again
TERMINAL_STATUSES = {"completed", "error"}

# 4xx responses worth polling through
RETRYABLE_STATUS_CODES = {408, 429}


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def upload_video(file_content: bytes, filename: str, content_type: str) -> str | None:
    """Upload a video straight to storage and return its storage key.

    Asks the API for a signed upload URL, then PUTs the bytes to it.
    """
    try:
        r = httpx.post(
            f"{API_URL}/api/upload-url",
            json={"file_name": filename, "file_type": content_type},
            timeout=30.0,
        )
        r.raise_for_status()
        signed = r.json()

        put = httpx.put(
            signed["upload_url"],
            content=file_content,
            headers={"content-type": content_type},
            timeout=None,
        )
        put.raise_for_status()
        return str(signed["key"])
    except httpx.HTTPError as e:
        st.error(f"Upload failed: {e}")
        return None


def analyze_video(video_key: str) -> dict:  # type: ignore[type-arg]
    """Run analysis on an uploaded video; blocks until timestamps are ready."""
    try:
        r = httpx.post(
            f"{API_URL}/api/analyze-video",
            json={"video_key": video_key},
            timeout=None,
        )
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Analysis failed: {e}")
        return {}


def save_timestamps(video_key: str, timestamps: list[dict]) -> bool:  # type: ignore[type-arg]
    """Store the accepted timestamps for *video_key*."""
    try:
        r = httpx.post(
            f"{API_URL}/api/timestamps",
            json={"video_key": video_key, "timestamps": timestamps},
            timeout=30.0,
        )
        r.raise_for_status()
        return bool(r.json().get("success"))
    except httpx.HTTPError as e:
        st.error(f"Saving timestamps failed: {e}")
        return False


def start_transcription(video_key: str) -> str | None:
    """Start a speaker-labelled transcription job and return its ID."""
    try:
        r = httpx.post(f"{API_URL}/api/transcribe", json={"key": video_key}, timeout=30.0)
        r.raise_for_status()
        return str(r.json()["id"])
    except httpx.HTTPError as e:
        st.error(f"Could not start transcription: {e}")
        return None


def get_transcription(transcript_id: str) -> dict:  # type: ignore[type-arg]
    """Fetch the status (and, once completed, the utterances) of a job.

    Transient failures (network errors, 5xx, 408, 429) return ``{}`` so the
    caller can retry. Any other 4xx is reported and returned as an ``error``
    status, which ends polling.
    """
    try:
        r = httpx.get(f"{API_URL}/api/transcription/{transcript_id}", timeout=30.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPStatusError as e:
        code = e.response.status_code
        if code >= 500 or code in RETRYABLE_STATUS_CODES:
            return {}
        st.error(f"Could not check transcription status: {e}")
        return {"id": transcript_id, "status": "error", "error": str(e)}
    except httpx.HTTPError:
        return {}


def poll_transcription(
    transcript_id: str,
    interval: float = 5.0,
    timeout: float = 30 * 60,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> dict:  # type: ignore[type-arg]
    """Poll a transcription job until it completes, fails or *timeout* passes.

    Returns the last status payload; ``{"status": "timeout"}`` when the
    deadline passes first.
    """
    deadline = clock() + timeout
    while True:
        status = get_transcription(transcript_id)
        if status.get("status") in TERMINAL_STATUSES:
            return status
        if clock() + interval > deadline:
            return {"id": transcript_id, "status": "timeout"}
        sleep(interval)
