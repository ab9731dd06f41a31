"""AssemblyAI transcription jobs: submit, poll until terminal, analyze."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import assemblyai as aai  # type: ignore[import-untyped]  # no stubs

from smart_timestamps.config import settings
from smart_timestamps.timestamps.extractor import extract_timestamps
from smart_timestamps.timestamps.models import Timestamp
from smart_timestamps.transcription.models import TranscriptionResult
from smart_timestamps.transcription.parsers import parse_transcription_result

logger = logging.getLogger(__name__)


class TranscriptionError(Exception):
    """Base class for transcription job failures."""


class TranscriptionFailedError(TranscriptionError):
    """The provider finished the job with status ``error`` (bad media, bad URL)."""


class TranscriptionTimeoutError(TranscriptionError):
    """The job did not reach a terminal status before the polling deadline."""


class TranscriptionUnavailableError(TranscriptionError):
    """The provider could not be reached or rejected our credentials."""


def _configure() -> None:
    aai.settings.api_key = settings.assemblyai_api_key


def build_config(analyze: bool) -> Any:
    """Transcription options for the two job kinds.

    ``analyze=True`` requests the chapter/highlight/entity/topic/safety models
    that feed timestamp extraction; otherwise a speaker-labelled transcript is
    requested for the transcript editor.
    """
    if analyze:
        return aai.TranscriptionConfig(
            speech_models=settings.speech_models,
            auto_chapters=True,
            auto_highlights=True,
            content_safety=True,
            entity_detection=True,
            iab_categories=True,
        )
    return aai.TranscriptionConfig(
        speech_models=settings.speech_models,
        speaker_labels=True,
    )


def submit_transcription(audio_url: str, *, analyze: bool = False) -> str:
    """Queue a transcription job for *audio_url* and return its job ID."""
    _configure()
    try:
        transcript = aai.Transcriber().submit(audio_url, config=build_config(analyze))
    except Exception as exc:
        raise TranscriptionUnavailableError(f"Could not submit transcription: {exc}") from exc

    if transcript.status == aai.TranscriptStatus.error:
        raise TranscriptionFailedError(f"Transcription failed: {transcript.error}")

    logger.info("Submitted transcription %s (analyze=%s)", transcript.id, analyze)
    return str(transcript.id)


def fetch_transcript(transcript_id: str) -> Any:
    """Fetch the current state of a job without waiting."""
    _configure()
    try:
        return aai.Transcript.get_by_id(transcript_id)
    except Exception as exc:
        raise TranscriptionUnavailableError(
            f"Could not fetch transcription {transcript_id}: {exc}"
        ) from exc


def wait_for_transcript(
    transcript_id: str,
    poll_interval: float,
    timeout: float,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> Any:
    """Poll a job at a fixed interval until it completes.

    Raises:
        TranscriptionFailedError: The job ended with status ``error``.
        TranscriptionTimeoutError: *timeout* seconds passed without a terminal status.
        TranscriptionUnavailableError: The provider could not be reached.
    """
    deadline = clock() + timeout
    while True:
        transcript = fetch_transcript(transcript_id)
        logger.debug("Transcription %s status: %s", transcript_id, transcript.status)

        if transcript.status == aai.TranscriptStatus.completed:
            return transcript
        if transcript.status == aai.TranscriptStatus.error:
            logger.error("Transcription %s failed: %s", transcript_id, transcript.error)
            raise TranscriptionFailedError(f"Transcription failed: {transcript.error}")

        if clock() + poll_interval > deadline:
            raise TranscriptionTimeoutError(
                f"Transcription {transcript_id} not completed after {timeout:.0f}s"
            )
        sleep(poll_interval)


def analyze_audio(audio_url: str) -> tuple[TranscriptionResult, list[Timestamp]]:
    """Run an analysis job for *audio_url* and extract chapter timestamps.

    Blocking: callers on the event loop should use ``asyncio.to_thread``.
    """
    transcript_id = submit_transcription(audio_url, analyze=True)
    transcript = wait_for_transcript(
        transcript_id,
        poll_interval=settings.analysis_poll_interval_seconds,
        timeout=settings.poll_timeout_seconds,
    )

    result = parse_transcription_result(transcript.json_response or {})
    timestamps = extract_timestamps(result)
    logger.info("Analysis %s produced %d timestamps", transcript_id, len(timestamps))
    return result, timestamps
