"""Matching strategies - the tiers of the planning cascade

The planner composes these instead of specialising itself per engine:
- DictionaryStrategy: alias / exact label equality (confidence 100)
- ScoringStrategy: best label by a pluggable LabelScorer (fuzzy, Levenshtein, enhanced)
- SemanticStrategy: best label by embedding cosine similarity, under a time budget
"""

from typing import Optional, Protocol, Sequence

import numpy as np

from sticker_sync.core.exceptions import EmbeddingBudgetExhaustedException, EmbeddingException
from sticker_sync.core.logging import logger
from sticker_sync.dictionary import FeatureDictionary
from sticker_sync.matching import (
    FuzzyMatcher,
    TieBreakPolicy,
    enhanced_similarity,
    levenshtein_similarity,
    rank_candidates,
)
from sticker_sync.semantic import SemanticEmbedder, cosine_scores
from sticker_sync.utils.text.cleaning import normalize_label

from .budget import SemanticBudget
from .result import CheckboxRecord, MatchResult, MatchTier

FULL_CONFIDENCE = 100.0
# 100 belongs to dictionary and exact matches; scored tiers stop below it
SCORED_CONFIDENCE_CAP = 99.0


class LabelScorer(Protocol):
    """Similarity of a feature and a label on the 0..100 scale"""

    def score(self, a: str, b: str) -> float:
        ...


class LevenshteinScorer:
    """Normalized Levenshtein similarity, scaled to 0..100"""

    def score(self, a: str, b: str) -> float:
        return levenshtein_similarity(a, b) * 100.0


class EnhancedScorer:
    """Levenshtein blended with keyword overlap, scaled to 0..100"""

    def score(self, a: str, b: str) -> float:
        return enhanced_similarity(a, b) * 100.0


def build_scorer(engine: str) -> LabelScorer:
    """
    Args:
        engine: "fuzzy" (rapidfuzz best-of-four), "levenshtein" (light path)
            or "enhanced" (light path with keyword overlap)

    Raises:
        ValueError: unknown engine
    """
    if engine == "fuzzy":
        return FuzzyMatcher()
    if engine == "levenshtein":
        return LevenshteinScorer()
    if engine == "enhanced":
        return EnhancedScorer()
    raise ValueError(f"Unknown matching engine: {engine}")


class LabelIndex:
    """Distinct live labels of one pass, in scrape order.

    Labels that differ only in case or surrounding punctuation collapse to
    the first one seen.
    """

    def __init__(self, checkboxes: Sequence[CheckboxRecord]):
        self._by_key: dict[str, str] = {}
        for cb in checkboxes:
            key = normalize_label(cb.label)
            if key and key not in self._by_key:
                self._by_key[key] = cb.label
        self.labels: list[str] = list(self._by_key.values())

    def lookup(self, text: str) -> Optional[str]:
        """Live label equal to text (case-insensitive), or None"""
        return self._by_key.get(normalize_label(text))

    def __len__(self) -> int:
        return len(self.labels)


class DictionaryStrategy:
    """First tier: label equality through the feature dictionary.

    Order of attempts:
    1. aliases of the feature (the feature is a canonical name)
    2. the feature text itself
    3. canonical names the feature is an alias of, then their aliases
    """

    def __init__(self, dictionary: FeatureDictionary):
        self.dictionary = dictionary

    def match(self, feature: str, labels: LabelIndex) -> Optional[MatchResult]:
        for alias in self.dictionary.aliases_of(feature):
            label = labels.lookup(alias)
            if label is not None:
                return MatchResult(feature, label, FULL_CONFIDENCE, True, MatchTier.DICTIONARY)

        label = labels.lookup(feature)
        if label is not None:
            return MatchResult(feature, label, FULL_CONFIDENCE, True, MatchTier.EXACT)

        for canonical in self.dictionary.canonicals_of(feature):
            for candidate in (canonical, *self.dictionary.aliases_of(canonical)):
                label = labels.lookup(candidate)
                if label is not None:
                    return MatchResult(feature, label, FULL_CONFIDENCE, True, MatchTier.DICTIONARY)

        return None


class ScoringStrategy:
    """Second tier: best label by string similarity (score >= threshold)."""

    def __init__(
        self,
        scorer: LabelScorer,
        threshold: float,
        tie_break: TieBreakPolicy = TieBreakPolicy.INPUT_ORDER,
        limit: int = 5,
    ):
        self.scorer = scorer
        self.threshold = threshold
        self.tie_break = tie_break
        self.limit = limit

    def match(self, feature: str, labels: LabelIndex) -> MatchResult:
        """
        Returns:
            matched MatchResult (tier FUZZY, score at most 99), or an unmatched
            one carrying the closest label seen
        """
        scored = [
            (label, min(self.scorer.score(feature, label), SCORED_CONFIDENCE_CAP))
            for label in labels.labels
        ]
        ranked = rank_candidates(scored, 0.0, self.tie_break)
        if not ranked:
            return MatchResult.unmatched(feature)

        best = ranked[0]
        candidates = [(c.label, c.score) for c in ranked[: self.limit] if c.score >= self.threshold]
        if best.score >= self.threshold:
            return MatchResult(feature, best.label, best.score, True, MatchTier.FUZZY, candidates)
        return MatchResult.unmatched(feature, best.label, best.score)


class SemanticStrategy:
    """Optional tier: cosine similarity of embeddings, scaled to 0..99.

    prepare() embeds the live labels once per pass. Any embedding failure or
    an exhausted budget marks the strategy degraded; a degraded strategy
    returns no matches for the rest of the pass and is never retried.
    """

    def __init__(
        self,
        embedder: SemanticEmbedder,
        threshold: float,
        budget: SemanticBudget,
        tie_break: TieBreakPolicy = TieBreakPolicy.INPUT_ORDER,
        limit: int = 5,
    ):
        self.embedder = embedder
        self.threshold = threshold
        self.budget = budget
        self.tie_break = tie_break
        self.limit = limit
        self.degraded = False
        self.last_error: Optional[EmbeddingException] = None
        self._labels: list[str] = []
        self._matrix: Optional[np.ndarray] = None

    def _degrade(self, error: EmbeddingException) -> None:
        if not self.degraded:
            logger.warning(f"Semantic tier disabled for this pass: {error.message}")
        self.degraded = True
        self.last_error = error

    def _within_budget(self) -> bool:
        if self.budget.is_exhausted():
            self._degrade(EmbeddingBudgetExhaustedException(self.budget.remaining()))
            return False
        return True

    def prepare(self, labels: Sequence[str]) -> bool:
        """Start the pass budget and embed the live labels

        Returns:
            False when the tier is degraded for this pass
        """
        self.budget.start()
        self.degraded = False
        self.last_error = None
        self._labels = list(labels)
        self._matrix = None
        if not self._labels:
            return True

        result = self.embedder.embed(self._labels)
        self.budget.checkpoint("labels_embedded")
        if not result.is_ok:
            self._degrade(result.error)
            return False
        self._matrix = result.vectors
        return True

    def match(self, feature: str) -> Optional[MatchResult]:
        """Best label with cosine score >= threshold, or None"""
        if self.degraded or self._matrix is None or not self._within_budget():
            return None

        result = self.embedder.embed([feature])
        if not result.is_ok:
            self._degrade(result.error)
            return None

        scores = np.clip(
            cosine_scores(result.vector, self._matrix) * 100.0, 0.0, SCORED_CONFIDENCE_CAP
        )
        ranked = rank_candidates(
            zip(self._labels, (float(s) for s in scores)),
            self.threshold,
            self.tie_break,
            self.limit,
        )
        if not ranked:
            return None
        best = ranked[0]
        return MatchResult(
            feature,
            best.label,
            best.score,
            True,
            MatchTier.SEMANTIC,
            [(c.label, c.score) for c in ranked],
        )
