"""Window sticker structure: sections, priced options, feature categories."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable

from sticker_sync.utils.resource_loader import load_section_rules
from sticker_sync.utils.text.cleaning import clean_feature_text, is_numeric_noise

GENERAL_SECTION = "general"
OTHER_CATEGORY = "other"

_ITEM_SPLIT = re.compile(r"[•·▪■□;]")
_PRICED_LINE = re.compile(
    r"^[ \t]*([^$\n]+?)[ \t.:]*\$[ \t]?(\d{1,3}(?:,\d{3})*(?:\.\d{2})?)",
    re.MULTILINE,
)
_PRICE_NOISE = re.compile(r"total|msrp|price|destination|delivery", re.IGNORECASE)


@lru_cache(maxsize=1)
def _header_patterns() -> tuple[tuple[str, re.Pattern[str]], ...]:
    rules = load_section_rules()["sections"]
    compiled = []
    for section_id, spellings in rules.items():
        alternation = "|".join(f"(?:{s})" for s in spellings)
        compiled.append((
            str(section_id),
            re.compile(rf"^\s*(?:{alternation})\s*(?::\s*(.*))?$", re.IGNORECASE),
        ))
    return tuple(compiled)


def match_section_header(line: str) -> tuple[str, str] | None:
    """(section_id, inline content) if the line is a section header"""
    for section_id, pattern in _header_patterns():
        m = pattern.match(line)
        if m:
            return section_id, (m.group(1) or "").strip()
    return None


def _section_items(line: str) -> list[str]:
    items = []
    for part in _ITEM_SPLIT.split(line):
        cleaned = clean_feature_text(part)
        lower = cleaned.lower()
        if len(cleaned) <= 3 or is_numeric_noise(cleaned):
            continue
        if "section" in lower or "category" in lower:
            continue
        items.append(cleaned)
    return items


def parse_sections(raw_text: str) -> dict[str, list[str]]:
    """
    Split sticker text into its labelled sections.

    Lines before the first recognised header go to "general". A header may
    carry content after its colon ("Safety: Front Airbags"). Sections are
    returned in order of first appearance; a header seen twice appends.

    Args:
        raw_text: full sticker text

    Returns:
        {section_id: [feature, ...]}
    """
    sections: dict[str, list[str]] = {}
    if not raw_text or not raw_text.strip():
        return sections

    current = GENERAL_SECTION
    for line in raw_text.splitlines():
        if not line.strip():
            continue
        header = match_section_header(line)
        if header:
            current, inline = header
            sections.setdefault(current, [])
            if inline:
                sections[current].extend(_section_items(inline))
            continue
        items = _section_items(line)
        if items:
            sections.setdefault(current, []).extend(items)

    return {k: v for k, v in sections.items() if v}


def extract_priced_options(raw_text: str) -> dict[str, float]:
    """
    Options listed with a price, e.g. "Power Sunroof ........ $995".

    Totals, MSRP and destination lines are skipped. The first price seen for
    an option wins.

    Returns:
        {option: price}
    """
    options: dict[str, float] = {}
    if not raw_text:
        return options

    for m in _PRICED_LINE.finditer(raw_text):
        feature = clean_feature_text(m.group(1))
        if len(feature) <= 3 or _PRICE_NOISE.search(feature):
            continue
        price = float(m.group(2).replace(",", ""))
        options.setdefault(feature, price)

    return options


def categorize_features(features: Iterable[str]) -> dict[str, list[str]]:
    """Bucket features by keyword (interior/mechanical/comfort/safety/other)"""
    categories = load_section_rules()["categories"]
    buckets: dict[str, list[str]] = {str(name): [] for name in categories}
    buckets[OTHER_CATEGORY] = []

    for feature in features:
        lower = feature.lower()
        for name, keywords in categories.items():
            if any(str(k).lower() in lower for k in keywords or []):
                buckets[str(name)].append(feature)
                break
        else:
            buckets[OTHER_CATEGORY].append(feature)

    return buckets
