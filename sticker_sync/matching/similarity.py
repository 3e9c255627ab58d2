"""Similarity helpers (light-weight path).

Normalized Levenshtein similarity on the 0..1 scale, used when the
multi-algorithm fuzzy matcher is not wanted.
"""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein

from sticker_sync.utils.text.tokenize import extract_keywords


def levenshtein_similarity(text1: str, text2: str) -> float:
    """(max_len - edit_distance) / max_len over lower-cased inputs.

    Two empty strings are identical (1.0).
    """
    text1 = text1 or ""
    text2 = text2 or ""
    max_length = max(len(text1), len(text2))
    if max_length == 0:
        return 1.0

    distance = Levenshtein.distance(text1.lower(), text2.lower())
    return (max_length - distance) / max_length


def keyword_similarity(feature: str, label: str) -> float:
    """Share of keywords that appear (or contain one another) on both sides.

    Returns:
        matched feature keywords / max(keyword counts), 0.0 when either side
        has no keywords
    """
    feature_words = extract_keywords(feature)
    label_words = extract_keywords(label)
    if not feature_words or not label_words:
        return 0.0

    matching = 0
    for fw in feature_words:
        for lw in label_words:
            if fw == lw or fw in lw or lw in fw:
                matching += 1
                break

    return matching / max(len(feature_words), len(label_words))


def enhanced_similarity(feature: str, label: str) -> float:
    """Levenshtein similarity blended with keyword overlap (70/30).

    Helps multi-word labels where word order or filler words differ,
    e.g. "Power Door Locks" vs "Locks, Power".
    """
    base = levenshtein_similarity(feature, label)
    keyword_bonus = keyword_similarity(feature, label)
    return min(1.0, base * 0.7 + keyword_bonus * 0.3)
