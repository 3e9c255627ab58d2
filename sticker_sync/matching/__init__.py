"""Matching primitives.

- similarity: Levenshtein similarity (0..1) and the keyword-weighted variant
- fuzzy: rapidfuzz best-of-four matcher (0..100)
- ranking: threshold filtering and tie-break policies
"""

from .fuzzy import ALGORITHMS, FuzzyMatcher
from .ranking import RankedCandidate, TieBreakPolicy, rank_candidates
from .similarity import enhanced_similarity, keyword_similarity, levenshtein_similarity

__all__ = [
    "ALGORITHMS",
    "FuzzyMatcher",
    "RankedCandidate",
    "TieBreakPolicy",
    "rank_candidates",
    "enhanced_similarity",
    "keyword_similarity",
    "levenshtein_similarity",
]
