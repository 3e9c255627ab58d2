"""Multi-algorithm fuzzy matcher (rapidfuzz)."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from rapidfuzz import fuzz, utils

from .ranking import RankedCandidate, TieBreakPolicy, rank_candidates

Scorer = Callable[..., float]

ALGORITHMS: dict[str, Scorer] = {
    "ratio": fuzz.ratio,
    "partial_ratio": fuzz.partial_ratio,
    "token_set_ratio": fuzz.token_set_ratio,
    "token_sort_ratio": fuzz.token_sort_ratio,
}

# partial alignments get the same 0.9 weight rapidfuzz WRatio gives them
PARTIAL_SCALE = 0.9
# below this many characters a partial alignment is just a substring hit
PARTIAL_MIN_LENGTH = 4


class FuzzyMatcher:
    """Best-of-N fuzzy comparison on the 0..100 scale.

    Inputs go through rapidfuzz's default processor (lower-case,
    non-alphanumerics to spaces, trimmed), so scoring is case-insensitive.
    partial_ratio is scaled by 0.9 and skipped when the shorter string has
    fewer than 4 characters, so a short label buried in a long feature
    ("AC" in "Traction Control") does not outscore a real near match.

    Usage:
        matcher = FuzzyMatcher()
        matcher.score("Bluetoot Connectivty", "Bluetooth")   # ~80, partial_ratio wins
        matcher.best_match("Sunroof", ["Moonroof", "Sunroof"], threshold=75)
    """

    def __init__(self, algorithms: Optional[Sequence[str]] = None):
        names = list(algorithms) if algorithms else list(ALGORITHMS)
        unknown = [n for n in names if n not in ALGORITHMS]
        if unknown:
            raise ValueError(f"Unknown fuzzy algorithms: {unknown}")
        self.algorithms = names

    def score_detail(self, a: str, b: str) -> dict[str, float]:
        """Score of every enabled algorithm (partial_ratio already weighted)"""
        a = utils.default_process(a) if a else ""
        b = utils.default_process(b) if b else ""
        if not a or not b:
            return {name: 0.0 for name in self.algorithms}

        detail = {}
        for name in self.algorithms:
            if name == "partial_ratio":
                if min(len(a), len(b)) < PARTIAL_MIN_LENGTH:
                    detail[name] = 0.0
                else:
                    detail[name] = fuzz.partial_ratio(a, b) * PARTIAL_SCALE
            else:
                detail[name] = float(ALGORITHMS[name](a, b))
        return detail

    def score(self, a: str, b: str) -> float:
        """Maximum over the enabled algorithms (0..100)"""
        return max(self.score_detail(a, b).values())

    def rank(
        self,
        target: str,
        candidates: Iterable[str],
        threshold: float,
        tie_break: TieBreakPolicy = TieBreakPolicy.INPUT_ORDER,
        limit: Optional[int] = None,
    ) -> list[RankedCandidate]:
        """Candidates scoring >= threshold against target, best first"""
        scored = [(c, self.score(target, c)) for c in candidates]
        return rank_candidates(scored, threshold, tie_break, limit)

    def best_match(
        self,
        target: str,
        candidates: Iterable[str],
        threshold: float,
        tie_break: TieBreakPolicy = TieBreakPolicy.INPUT_ORDER,
    ) -> Optional[tuple[str, float]]:
        """Best (candidate, score) at or above threshold, or None"""
        ranked = self.rank(target, candidates, threshold, tie_break, limit=1)
        if not ranked:
            return None
        return ranked[0].label, ranked[0].score
