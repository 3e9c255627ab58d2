"""Window sticker text -> candidate feature list."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sticker_sync.core.logging import logger, sanitize_for_log
from sticker_sync.utils.resource_loader import load_known_features
from sticker_sync.utils.text.cleaning import clean_feature_text, is_numeric_noise

from .sections import categorize_features, extract_priced_options, match_section_header, parse_sections

MIN_FEATURE_LENGTH = 3  # exclusive
MAX_FEATURE_LENGTH = 100  # exclusive

_LIST_SPLIT = re.compile(r"[\n,;•·▪■□]")
# "Key: value" lines whose key names vehicle data rather than equipment
_COLON_SKIP_KEYS = re.compile(r"equipment|\bvin\b|msrp|price|total|colou?r|stock|model|year", re.IGNORECASE)

# Applied in this order; insertion order of the result follows it.
EXTRACTION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("bullet", re.compile(r"^[ \t]*[•·▪■□*\-–][ \t]*([^\n]+?)[ \t]*$", re.MULTILINE)),
    ("numbered", re.compile(r"^[ \t]*\d+[.)][ \t]+([^\n]+?)[ \t]*$", re.MULTILINE)),
    (
        "equipment",
        re.compile(
            r"(?:standard|optional)\s+equipment[ \t]*:?[ \t]*((?:[^\n]*)(?:\n(?![ \t]*\n)[^\n]*)*)",
            re.IGNORECASE,
        ),
    ),
    ("parenthesized", re.compile(r"\(([^()\n]+)\)")),
    ("colon", re.compile(r"^[ \t]*([^:\n]{2,40}?)[ \t]*:[ \t]*([^\n]+?)[ \t]*$", re.MULTILINE)),
)

# captures of these patterns are lists and get split into items
_LIST_PATTERNS = {"equipment", "colon"}


def _is_bare_header(line: str) -> bool:
    header = match_section_header(line)
    return header is not None and not header[1]


@dataclass
class StickerExtraction:
    """Everything the extractor reads from one sticker.

    Attributes:
        features: deduplicated candidate features (the planner input)
        sections: features per sticker section
        priced_options: option -> price
        categories: features bucketed by keyword
    """

    features: list[str] = field(default_factory=list)
    sections: dict[str, list[str]] = field(default_factory=dict)
    priced_options: dict[str, float] = field(default_factory=dict)
    categories: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.features


class TextFeatureExtractor:
    """Heuristic feature extraction from raw sticker text.

    Runs a fixed sequence of regex extractors (bullets, numbered lists,
    Standard/Optional Equipment blocks, parenthesised clauses, "Key: value"
    clauses), keeps every capture whose cleaned length is strictly between 3
    and 100 characters, then scans the whole text for known feature names.

    Deduplication is exact-string: "Leather Seats" and "leather seats" are
    two different features.

    Usage:
        extractor = TextFeatureExtractor()
        extractor.extract("• Leather Seats\\n1. Navigation")
        # ["Leather Seats", "Navigation"]
    """

    def __init__(self, known_features: Optional[Iterable[str]] = None):
        names = list(known_features) if known_features is not None else load_known_features()
        self.known_features = [n for n in names if n and n.strip()]

    def _accept(self, candidate: str) -> bool:
        if not MIN_FEATURE_LENGTH < len(candidate) < MAX_FEATURE_LENGTH:
            return False
        return not is_numeric_noise(candidate)

    def _captures(self, raw_text: str) -> Iterable[str]:
        for name, pattern in EXTRACTION_PATTERNS:
            for m in pattern.finditer(raw_text):
                if name == "colon":
                    if _COLON_SKIP_KEYS.search(m.group(1)):
                        continue
                    capture = m.group(2)
                else:
                    capture = m.group(1)

                parts = _LIST_SPLIT.split(capture) if name in _LIST_PATTERNS else [capture]
                for part in parts:
                    item = clean_feature_text(part)
                    # an equipment block with no blank line after it runs into
                    # the next header line ("Interior")
                    if name == "equipment" and _is_bare_header(item):
                        continue
                    yield item

    def extract(self, raw_text: str) -> list[str]:
        """
        Candidate features in first-occurrence order, duplicates removed.

        Args:
            raw_text: full scraped sticker text

        Returns:
            list of feature strings ([] for empty or blank input)
        """
        if not raw_text or not raw_text.strip():
            return []

        found: dict[str, None] = {}
        for candidate in self._captures(raw_text):
            if self._accept(candidate):
                found.setdefault(candidate, None)

        # plain substring: "Blind Spot Monitor" also hits "Blind Spot Monitoring"
        lowered = raw_text.lower()
        for name in self.known_features:
            if name.lower() in lowered:
                found.setdefault(name, None)

        features = list(found)
        logger.debug(
            f"Extracted {len(features)} features from sticker text: {sanitize_for_log(raw_text)}"
        )
        return features

    def analyze(self, raw_text: str) -> StickerExtraction:
        """Features plus sticker structure (sections, priced options, categories)."""
        features = self.extract(raw_text)
        if not features:
            return StickerExtraction()

        result = StickerExtraction(
            features=features,
            sections=parse_sections(raw_text),
            priced_options=extract_priced_options(raw_text),
            categories=categorize_features(features),
        )
        logger.info(
            f"Sticker analysed: {len(result.features)} features, "
            f"{len(result.sections)} sections, {len(result.priced_options)} priced options"
        )
        return result


def extract_features(raw_text: str) -> list[str]:
    """Module-level shortcut using the bundled known-feature list."""
    return TextFeatureExtractor().extract(raw_text)
