"""Smart Timestamps -- Streamlit UI.

Two pages: generate and review chapter timestamps for a video, and edit a
speaker-labelled transcript.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from smart_timestamps.timestamps.exports import (
    format_transcript,
    speaker_label,
    to_json,
    to_markdown,
    to_plain_text,
)
from smart_timestamps.timestamps.review import apply_review
from smart_timestamps.transcription.models import Utterance
from smart_timestamps.ui.api_client import (
    analyze_video,
    check_health,
    poll_transcription,
    save_timestamps,
    start_transcription,
    upload_video,
)

MAX_UPLOAD_BYTES = 4 * 1024 * 1024 * 1024
VIDEO_TYPES = ["mp4", "mov", "mkv", "webm", "avi", "mp3", "wav", "m4a"]

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Smart Timestamps", layout="wide")

# ---------------------------------------------------------------------------
# Sidebar -- navigation + API status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Smart Timestamps")
    st.markdown("---")

    page = st.radio(
        "Navigate",
        ["Smart Timestamps", "Transcript"],
        label_visibility="collapsed",
    )

    st.markdown("---")

    # API connection indicator
    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
    else:
        st.markdown(":red_circle: API unreachable")


def _pick_file() -> Any:
    uploaded = st.file_uploader("Choose a video", type=VIDEO_TYPES)
    if uploaded is not None and uploaded.size > MAX_UPLOAD_BYTES:
        st.error("File size must be less than 4GB")
        return None
    return uploaded


# ---------------------------------------------------------------------------
# Page: Smart Timestamps
# ---------------------------------------------------------------------------
if page == "Smart Timestamps":
    st.header("Smart Timestamps")
    st.write("Upload a video to generate chapter timestamps, then review and export them.")

    uploaded_file = _pick_file()

    if st.button("Generate timestamps", disabled=uploaded_file is None):
        if not api_healthy:
            st.error("Cannot analyze: the API server is not reachable.")
        elif uploaded_file is not None:
            with st.spinner("Uploading video..."):
                key = upload_video(
                    uploaded_file.getvalue(),
                    uploaded_file.name,
                    uploaded_file.type or "application/octet-stream",
                )
            if key:
                with st.spinner("Analyzing video. This can take a few minutes..."):
                    result = analyze_video(key)
                if result:
                    st.session_state["video_key"] = key
                    st.session_state["timestamps"] = result.get("timestamps", [])
                    st.session_state["categories"] = result.get("categories", {})

    timestamps: list[dict] = st.session_state.get("timestamps", [])  # type: ignore[type-arg]
    if timestamps:
        st.subheader("Review")
        edits = []
        for i, ts in enumerate(timestamps):
            col_time, col_title, col_meta, col_keep = st.columns([1, 5, 2, 1])
            time_text = col_time.text_input("Time", ts["formatted_time"], key=f"time_{i}")
            title_text = col_title.text_input("Title", ts["title"], key=f"title_{i}")
            col_meta.caption(f"{ts['category']} · {ts['confidence']:.2f}")
            accepted = col_keep.checkbox("Keep", value=True, key=f"keep_{i}")
            edits.append({"time": time_text, "title": title_text, "accepted": accepted})

        try:
            reviewed = apply_review(timestamps, edits)
        except ValueError as e:
            st.error(str(e))
            reviewed = []

        if reviewed:
            if st.button("Save accepted timestamps"):
                if save_timestamps(st.session_state["video_key"], reviewed):
                    st.success(f"Saved {len(reviewed)} timestamps.")

            col_a, col_b, col_c = st.columns(3)
            col_a.download_button("Download .txt", to_plain_text(reviewed), "timestamps.txt")
            col_b.download_button("Download .md", to_markdown(reviewed), "timestamps.md")
            col_c.download_button("Download .json", to_json(reviewed), "timestamps.json")

            st.code(to_plain_text(reviewed), language=None)

        categories = st.session_state.get("categories", {})
        if categories:
            with st.expander("Detected topics"):
                for topic, relevance in sorted(categories.items(), key=lambda kv: -kv[1]):
                    st.write(f"- {topic} ({relevance:.2f})")

# ---------------------------------------------------------------------------
# Page: Transcript
# ---------------------------------------------------------------------------
elif page == "Transcript":
    st.header("Transcript")
    st.write("Transcribe a video with speaker labels, then tidy it up and download it.")

    uploaded_file = _pick_file()

    if st.button("Start transcription", disabled=uploaded_file is None):
        if not api_healthy:
            st.error("Cannot transcribe: the API server is not reachable.")
        elif uploaded_file is not None:
            with st.spinner("Uploading video..."):
                key = upload_video(
                    uploaded_file.getvalue(),
                    uploaded_file.name,
                    uploaded_file.type or "application/octet-stream",
                )
            transcript_id = start_transcription(key) if key else None
            if transcript_id:
                with st.spinner("Processing your video..."):
                    status = poll_transcription(transcript_id, interval=5.0)
                if status.get("status") == "completed":
                    st.session_state["utterances"] = [
                        {**u, "id": f"utterance-{i}"}
                        for i, u in enumerate(status.get("utterances", []))
                    ]
                    st.session_state.setdefault("speaker_names", {})
                elif status.get("status") == "timeout":
                    st.error("Transcription is taking too long. Try again later.")
                else:
                    st.error("Transcription failed")

    utterances: list[dict] = st.session_state.get("utterances", [])  # type: ignore[type-arg]
    if utterances:
        speaker_names: dict[str, str] = st.session_state.setdefault("speaker_names", {})

        st.subheader("Speakers")
        for speaker in sorted({u["speaker"] for u in utterances if u.get("speaker")}):
            speaker_names[speaker] = st.text_input(
                f"Name for speaker {speaker}",
                speaker_label(speaker, speaker_names),
                key=f"speaker_{speaker}",
            )

        st.subheader("Utterances")
        editing = st.session_state.get("editing_id")
        for u in list(utterances):
            st.markdown(f"**{speaker_label(u.get('speaker'), speaker_names)}:**")
            col_text, col_edit, col_delete = st.columns([8, 1, 1])
            if editing == u["id"]:
                new_text = col_text.text_area("Text", u["text"], key=f"edit_{u['id']}")
                if col_edit.button("Save", key=f"save_{u['id']}"):
                    u["text"] = new_text
                    st.session_state["editing_id"] = None
                    st.rerun()
            else:
                col_text.write(u["text"])
                if col_edit.button("Edit", key=f"editbtn_{u['id']}"):
                    st.session_state["editing_id"] = u["id"]
                    st.rerun()
            if col_delete.button("Delete", key=f"delete_{u['id']}"):
                st.session_state["utterances"] = [x for x in utterances if x["id"] != u["id"]]
                st.rerun()

        text = format_transcript(
            [
                Utterance(
                    speaker=u.get("speaker"),
                    text=u["text"],
                    start_ms=u.get("start_ms", 0),
                    end_ms=u.get("end_ms", 0),
                )
                for u in utterances
            ],
            speaker_names,
        )
        st.download_button("Download transcript", text, "transcript.txt")
