"""Candidate ranking and tie-break policies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional


class TieBreakPolicy(str, Enum):
    """How equal top scores are resolved.

    INPUT_ORDER keeps the first candidate in scrape order, which is only as
    stable as the page's DOM order. The other two are deterministic.
    """

    INPUT_ORDER = "input_order"
    SHORTEST_LABEL = "shortest_label"
    LEXICAL = "lexical"


@dataclass(frozen=True)
class RankedCandidate:
    """One scored candidate.

    Attributes:
        label: candidate text
        score: similarity on the 0..100 scale
        index: position in the original candidate sequence
    """

    label: str
    score: float
    index: int


def _sort_key(candidate: RankedCandidate, policy: TieBreakPolicy) -> tuple:
    if policy == TieBreakPolicy.SHORTEST_LABEL:
        return (-candidate.score, len(candidate.label), candidate.index)
    if policy == TieBreakPolicy.LEXICAL:
        return (-candidate.score, candidate.label.lower(), candidate.index)
    return (-candidate.score, candidate.index)


def rank_candidates(
    scored: Iterable[tuple[str, float]],
    threshold: float,
    policy: TieBreakPolicy = TieBreakPolicy.INPUT_ORDER,
    limit: Optional[int] = None,
) -> list[RankedCandidate]:
    """Keep candidates scoring >= threshold, best first.

    Args:
        scored: (label, score) pairs in candidate order
        threshold: inclusive lower bound
        policy: tie-break among equal scores
        limit: maximum number of results (None = all)

    Returns:
        ranked candidates
    """
    kept = [
        RankedCandidate(label=label, score=float(score), index=i)
        for i, (label, score) in enumerate(scored)
        if score >= threshold
    ]
    kept.sort(key=lambda c: _sort_key(c, policy))
    if limit is not None:
        kept = kept[:limit]
    return kept
