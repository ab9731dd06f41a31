"""Tests for the AssemblyAI transcription client (SDK fully mocked)."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from smart_timestamps.extraction_config import TimestampCategory
from smart_timestamps.transcription import client as tc
from smart_timestamps.transcription.client import (
    TranscriptionFailedError,
    TranscriptionTimeoutError,
    TranscriptionUnavailableError,
    analyze_audio,
    submit_transcription,
    wait_for_transcript,
)


@pytest.fixture
def mock_aai():
    with patch("smart_timestamps.transcription.client.aai") as aai:
        aai.TranscriptStatus.queued = "queued"
        aai.TranscriptStatus.processing = "processing"
        aai.TranscriptStatus.completed = "completed"
        aai.TranscriptStatus.error = "error"
        yield aai


def _transcript(status: str, error: str | None = None, **extra: object) -> SimpleNamespace:
    return SimpleNamespace(id="tx-1", status=status, error=error, **extra)


class TestSubmit:
    def test_returns_job_id(self, mock_aai: MagicMock) -> None:
        mock_aai.Transcriber.return_value.submit.return_value = _transcript("queued")

        assert submit_transcription("https://storage/video.mp4", analyze=True) == "tx-1"

        _, kwargs = mock_aai.TranscriptionConfig.call_args
        assert kwargs["auto_chapters"] is True
        assert kwargs["auto_highlights"] is True
        assert kwargs["iab_categories"] is True

    def test_transcript_job_requests_speaker_labels(self, mock_aai: MagicMock) -> None:
        mock_aai.Transcriber.return_value.submit.return_value = _transcript("queued")

        submit_transcription("https://storage/video.mp4")

        _, kwargs = mock_aai.TranscriptionConfig.call_args
        assert kwargs["speaker_labels"] is True
        assert "auto_chapters" not in kwargs

    def test_network_failure_is_unavailable(self, mock_aai: MagicMock) -> None:
        mock_aai.Transcriber.return_value.submit.side_effect = ConnectionError("down")

        with pytest.raises(TranscriptionUnavailableError, match="down"):
            submit_transcription("https://storage/video.mp4")

    def test_immediate_error_status(self, mock_aai: MagicMock) -> None:
        mock_aai.Transcriber.return_value.submit.return_value = _transcript("error", "bad url")

        with pytest.raises(TranscriptionFailedError, match="bad url"):
            submit_transcription("https://storage/video.mp4")


class TestWaitForTranscript:
    def test_polls_until_completed(self, mock_aai: MagicMock) -> None:
        mock_aai.Transcript.get_by_id.side_effect = [
            _transcript("queued"),
            _transcript("processing"),
            _transcript("completed"),
        ]
        sleeps: list[float] = []

        result = wait_for_transcript(
            "tx-1", poll_interval=3.0, timeout=60.0, sleep=sleeps.append, clock=lambda: 0.0
        )

        assert result.status == "completed"
        assert sleeps == [3.0, 3.0]

    def test_error_status_raises(self, mock_aai: MagicMock) -> None:
        mock_aai.Transcript.get_by_id.side_effect = [
            _transcript("processing"),
            _transcript("error", "unsupported media"),
        ]

        with pytest.raises(TranscriptionFailedError, match="unsupported media"):
            wait_for_transcript(
                "tx-1", poll_interval=1.0, timeout=60.0, sleep=lambda _: None, clock=lambda: 0.0
            )

    def test_timeout(self, mock_aai: MagicMock) -> None:
        mock_aai.Transcript.get_by_id.return_value = _transcript("processing")
        now = {"t": 0.0}

        def fake_sleep(seconds: float) -> None:
            now["t"] += seconds

        with pytest.raises(TranscriptionTimeoutError):
            wait_for_transcript(
                "tx-1", poll_interval=5.0, timeout=12.0, sleep=fake_sleep, clock=lambda: now["t"]
            )
        # polls at t=0, 5 and 10; the next poll would land past the deadline
        assert mock_aai.Transcript.get_by_id.call_count == 3

    def test_fetch_failure_is_unavailable(self, mock_aai: MagicMock) -> None:
        mock_aai.Transcript.get_by_id.side_effect = RuntimeError("401 Unauthorized")

        with pytest.raises(TranscriptionUnavailableError):
            wait_for_transcript("tx-1", poll_interval=1.0, timeout=5.0, sleep=lambda _: None)


class TestAnalyzeAudio:
    def test_extracts_timestamps_from_completed_job(self) -> None:
        completed = _transcript(
            "completed",
            json_response={
                "chapters": [
                    {"summary": "", "headline": f"Part {i}", "gist": "",
                     "start": i * 60_000, "end": (i + 1) * 60_000}
                    for i in range(5)
                ],
                "iab_categories_result": {"summary": {"Education": 0.7}},
            },
        )
        with (
            patch.object(tc, "submit_transcription", return_value="tx-1") as submit,
            patch.object(tc, "wait_for_transcript", return_value=completed),
        ):
            result, timestamps = analyze_audio("https://storage/video.mp4")

        submit.assert_called_once_with("https://storage/video.mp4", analyze=True)
        assert result.categories == {"Education": 0.7}
        assert [t.title for t in timestamps] == [f"Part {i}" for i in range(5)]
        assert all(t.category is TimestampCategory.CHAPTER for t in timestamps)
