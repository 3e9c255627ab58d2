"""Unmatched feature log - curation data for the feature dictionary"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from sticker_sync.core.logging import logger
from sticker_sync.utils.text.cleaning import normalize_label

SUGGESTION_MIN_OCCURRENCES = 3
HIGH_PRIORITY_OCCURRENCES = 5


@dataclass
class UnmatchedFeatureEntry:
    """One distinct unmatched feature (case-insensitive)"""

    feature: str
    occurrences: int = 0
    closest_label: Optional[str] = None
    closest_score: float = 0.0
    first_seen: datetime = field(default_factory=datetime.now)
    last_seen: datetime = field(default_factory=datetime.now)


class UnmatchedFeatureLog:
    """In-process aggregation of features no tier could match.

    Every planning pass records its unmatched features here. Repeated
    misses, and the closest label that was rejected, show which aliases are
    missing from the dictionary.
    """

    def __init__(self):
        self._entries: Dict[str, UnmatchedFeatureEntry] = {}

    def record(
        self,
        feature: str,
        closest_label: Optional[str] = None,
        closest_score: float = 0.0,
    ) -> None:
        key = normalize_label(feature)
        if not key:
            return
        entry = self._entries.get(key)
        if entry is None:
            entry = UnmatchedFeatureEntry(feature=feature.strip())
            self._entries[key] = entry
        entry.occurrences += 1
        entry.last_seen = datetime.now()
        if closest_label and closest_score >= entry.closest_score:
            entry.closest_label = closest_label
            entry.closest_score = closest_score

    def entries(self) -> List[UnmatchedFeatureEntry]:
        """Most frequent first"""
        return sorted(self._entries.values(), key=lambda e: -e.occurrences)

    def get_stats(self) -> Dict:
        """Totals"""
        return {
            "distinct": len(self._entries),
            "total": sum(e.occurrences for e in self._entries.values()),
            "repeated": sum(
                1 for e in self._entries.values()
                if e.occurrences >= SUGGESTION_MIN_OCCURRENCES
            ),
        }

    def export(self, format: str = "json") -> Optional[str]:
        """
        Export the log

        Format options:
        - json: JSON array
        - csv: CSV with a header row
        """
        entries = self.entries()
        if not entries:
            logger.warning("No unmatched features to export")
            return None

        rows = [
            {
                "feature": e.feature,
                "occurrences": e.occurrences,
                "closest_label": e.closest_label or "",
                "closest_score": round(e.closest_score, 1),
                "first_seen": e.first_seen.isoformat(),
                "last_seen": e.last_seen.isoformat(),
            }
            for e in entries
        ]

        if format == "json":
            import json
            return json.dumps(rows, ensure_ascii=False, indent=2)

        elif format == "csv":
            import csv
            import io

            output = io.StringIO()
            writer = csv.DictWriter(output, fieldnames=list(rows[0]))
            writer.writeheader()
            writer.writerows(rows)
            return output.getvalue()

        return None

    def get_improvement_suggestions(self) -> List[Dict]:
        """Dictionary additions worth considering"""
        suggestions = []
        for entry in self.entries():
            if entry.occurrences < SUGGESTION_MIN_OCCURRENCES:
                continue
            if entry.closest_label:
                text = f"Consider adding '{entry.feature}' as an alias of the label '{entry.closest_label}'"
            else:
                text = f"Consider adding a dictionary entry for '{entry.feature}'"
            suggestions.append({
                "feature": entry.feature,
                "closest_label": entry.closest_label,
                "closest_score": entry.closest_score,
                "occurrences": entry.occurrences,
                "suggestion": text,
                "priority": "HIGH" if entry.occurrences >= HIGH_PRIORITY_OCCURRENCES else "MEDIUM",
            })
        return suggestions

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
