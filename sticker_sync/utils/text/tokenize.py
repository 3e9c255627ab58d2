"""Tokenization utilities for matching."""

from __future__ import annotations

import re

from sticker_sync.utils.resource_loader import load_stop_words


def extract_keywords(text: str) -> list[str]:
    """Meaningful lower-case keywords of a feature or label.

    Words of two characters or fewer, stop words and pure numbers are
    dropped; order and duplicates are kept.
    """
    if not text:
        return []

    stopwords = load_stop_words()
    rough = re.sub(r"[^a-z0-9\s]", " ", text.lower())
    return [
        w for w in rough.split()
        if len(w) > 2 and w not in stopwords and not w.isdigit()
    ]
