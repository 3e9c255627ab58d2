"""Text cleaning helpers."""

from __future__ import annotations

import re

_TRAILING_PRICE = re.compile(r"[\s.]*\$\s?\d{1,3}(?:,\d{3})*(?:\.\d{2})?\s*$")
_EDGE_PUNCT = re.compile(r"^[\W_]+|[\W_]+$")


def normalize_label(text: str) -> str:
    """Comparison key for features and checkbox labels.

    - lower-case
    - whitespace collapsed
    - surrounding whitespace/punctuation trimmed

    Inner punctuation is kept so that "Anti-Lock Brakes" and
    "Anti Lock Brakes" stay distinct keys.
    """
    if not text:
        return ""

    normalized = re.sub(r"\s+", " ", text.lower()).strip()
    normalized = _EDGE_PUNCT.sub("", normalized)
    return normalized


def clean_feature_text(text: str) -> str:
    """
    Strip list markers and trailing prices from one scraped sticker line.

    Examples:
    - "• Leather Seats" -> "Leather Seats"
    - "2. Power Sunroof ..... $995" -> "Power Sunroof"

    Args:
        text: raw line fragment

    Returns:
        cleaned feature text
    """
    if not text:
        return ""

    cleaned = _TRAILING_PRICE.sub("", text)
    # digits only count as markers when followed by ". " / ") " so that
    # "4WD" and "6.7L" survive
    cleaned = re.sub(r"^\s*\d+[.)]\s+", "", cleaned)
    cleaned = re.sub(r"^[\s.)\-*•·▪■□–]+", "", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned)
    return cleaned.strip(" \t,;:")


def is_numeric_noise(text: str) -> bool:
    """True for fragments that are only digits, whitespace and separators"""
    return bool(re.fullmatch(r"[\s\d.,$%/\-]*", text or ""))
