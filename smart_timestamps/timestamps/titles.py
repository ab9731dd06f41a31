"""Normalization of transcript fragments into short chapter titles.

Spoken phrasing ("so, um, let's deploy the app") is rewritten into a
title-like gerund phrase ("Deploying the app"). The same routine is used for
chapter headlines, highlight text and titles synthesized from word windows.
"""

from __future__ import annotations

import re

# "00:12 - ", "1:02:03 – "
_TIMESTAMP_PREFIX_RE = re.compile(r"^\s*[0-9:]+\s*[-–]\s*")

_LEADING_FILLER_RE = re.compile(r"^(?:and|so|then|now|if|this|by),?\s+", re.IGNORECASE)

# Isolated fillers; the lookahead leaves the following space for the next match.
# "like" after "would" belongs to the "I would like to" lead-in.
_INLINE_FILLER_RE = re.compile(r"(?:^|\s+)(?:um|uh|you know|(?<!\b[Ww]ould\s)like),?(?=\s|$)")

_WHITESPACE_RE = re.compile(r"\s+")

_CONVERSATIONAL_LEAD_INS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^I\s+(?:want|would\s+like)\s+to\s+", re.IGNORECASE),
    re.compile(r"^You\s+can\s+", re.IGNORECASE),
    re.compile(r"^(?:Can|Could|How\s+do|How\s+can|Do)\s+(?:you|I|we)\s+", re.IGNORECASE),
    re.compile(r"^Let(?:['’]s|s|\s+me|\s+us)\s+", re.IGNORECASE),
)

GERUND_TRIGGERS = frozenset(
    {
        "use",
        "build",
        "create",
        "deploy",
        "host",
        "get",
        "make",
        "setup",
        "set",
        "develop",
        "implement",
        "add",
        "install",
        "configure",
    }
)

# "host" triggers conversion but has no form of its own and is left as-is.
GERUND_FORMS: dict[str, str] = {
    "use": "Using",
    "build": "Building",
    "create": "Creating",
    "deploy": "Deploying",
    "get": "Getting",
    "make": "Making",
    "set": "Setting up",
    "setup": "Setting up",
    "develop": "Developing",
    "implement": "Implementing",
    "add": "Adding",
    "install": "Installing",
    "configure": "Configuring",
}

ALREADY_GOOD_PREFIXES: tuple[str, ...] = (
    "How to",
    "Using",
    "Building",
    "Creating",
    "Getting",
    "Setting",
    "Developing",
    "Implementing",
    "Adding",
    "Installing",
    "Configuring",
)


def strip_fillers(text: str) -> str:
    """Drop a timestamp prefix, one leading filler word and inline fillers."""
    cleaned = _TIMESTAMP_PREFIX_RE.sub("", text, count=1)
    cleaned = _LEADING_FILLER_RE.sub("", cleaned, count=1)
    cleaned = _INLINE_FILLER_RE.sub(" ", _WHITESPACE_RE.sub(" ", cleaned))
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def strip_lead_ins(text: str) -> str:
    """Remove conversational lead-ins such as "I want to" or "Let's"."""
    cleaned = text
    for pattern in _CONVERSATIONAL_LEAD_INS:
        cleaned = pattern.sub("", cleaned, count=1)
    return cleaned.strip()


def to_gerund(text: str) -> str:
    """Rewrite a leading imperative verb into its gerund form."""
    first_word = text.split(" ")[0].lower()
    if first_word not in GERUND_TRIGGERS or text.startswith(ALREADY_GOOD_PREFIXES):
        return text

    replacement = GERUND_FORMS.get(first_word)
    if replacement is None:
        return text
    return replacement + text[len(first_word) :]


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def normalize_title(text: str) -> str:
    """Turn a fragment of transcribed speech into a chapter title.

    Never raises. When cleaning leaves nothing behind, the trimmed input is
    used instead; whitespace-only input yields ``""``.
    """
    cleaned = to_gerund(strip_lead_ins(strip_fillers(text)))
    if not cleaned:
        cleaned = text.strip()
    return capitalize_first(cleaned)
