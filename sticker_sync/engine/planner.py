"""Checkbox Action Planner - feature list + live checkboxes -> actions

Cascade per feature (input order):
1. Dictionary / exact label equality (confidence 100, stops the cascade)
2. String similarity (rapidfuzz or Levenshtein), score >= threshold
3. Semantic similarity (optional), preferred when >= its threshold and >= the fuzzy score
4. Otherwise unmatched

Synchronisation:
- unchecked and matched -> check
- checked and unmatched -> uncheck, only when more features than the
  coverage threshold were extracted; otherwise none
- everything else -> none
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from sticker_sync.core.config import settings
from sticker_sync.core.exceptions import (
    DuplicateCheckboxException,
    InvalidThresholdException,
    ValidationException,
)
from sticker_sync.core.logging import logger, sanitize_for_log
from sticker_sync.curation import UnmatchedFeatureLog
from sticker_sync.dictionary import FeatureDictionary, load_feature_dictionary
from sticker_sync.matching import TieBreakPolicy
from sticker_sync.semantic import SemanticEmbedder
from sticker_sync.utils.text.cleaning import normalize_label

from .budget import SemanticBudget, SemanticBudgetConfig
from .result import ActionType, CheckboxAction, CheckboxRecord, MatchResult, PlanResult
from .strategy import DictionaryStrategy, LabelIndex, ScoringStrategy, SemanticStrategy, build_scorer

ENGINES = ("fuzzy", "levenshtein", "enhanced")

CheckboxInput = Union[CheckboxRecord, dict]


@dataclass
class PlanOptions:
    """Planning options (scores on the 0..100 scale).

    Attributes:
        threshold: minimum fuzzy score accepted (inclusive)
        max_results_per_feature: runners-up kept on each MatchResult
        semantic_threshold: minimum semantic score (None -> threshold)
        coverage_threshold: unchecking needs more features than this
        tie_break: resolution of equal top scores
        engine: "fuzzy", or the lighter "levenshtein" / "enhanced"
        semantic_enabled: use the embedder when the planner has one
    """

    threshold: float = 75.0
    max_results_per_feature: int = 5
    semantic_threshold: Optional[float] = None
    coverage_threshold: int = 10
    tie_break: TieBreakPolicy = TieBreakPolicy.INPUT_ORDER
    engine: str = "fuzzy"
    semantic_enabled: bool = True

    def __post_init__(self):
        if not 0.0 <= self.threshold <= 100.0:
            raise InvalidThresholdException("threshold", self.threshold)
        if self.semantic_threshold is not None and not 0.0 <= self.semantic_threshold <= 100.0:
            raise InvalidThresholdException("semantic_threshold", self.semantic_threshold)
        if self.max_results_per_feature < 1:
            raise ValidationException("max_results_per_feature", "must be >= 1")
        if self.coverage_threshold < 0:
            raise ValidationException("coverage_threshold", "must be >= 0")
        if self.engine not in ENGINES:
            raise ValidationException("engine", f"must be one of {ENGINES} (value: {self.engine})")
        try:
            self.tie_break = TieBreakPolicy(self.tie_break)
        except ValueError:
            raise ValidationException("tie_break", f"unknown policy '{self.tie_break}'") from None

    @property
    def effective_semantic_threshold(self) -> float:
        return self.threshold if self.semantic_threshold is None else self.semantic_threshold

    @classmethod
    def from_settings(cls) -> "PlanOptions":
        return cls(
            threshold=settings.fuzzy_threshold,
            max_results_per_feature=settings.max_results_per_feature,
            semantic_threshold=settings.semantic_threshold,
            coverage_threshold=settings.coverage_threshold,
        )


class CheckboxActionPlanner:
    """Decides check / uncheck / none for every checkbox on the form.

    The dictionary is read-only and may be shared across planners; the
    embedder (if any) only shares its vector cache. Everything else is local
    to one run() call, so passes for different vehicles are independent.

    Usage:
        planner = CheckboxActionPlanner()
        actions = planner.plan(
            ["Backup Camera", "Heated Seats"],
            [CheckboxRecord("c1", "Rear View Camera", False)],
        )
    """

    def __init__(
        self,
        dictionary: Optional[FeatureDictionary] = None,
        embedder: Optional[SemanticEmbedder] = None,
        options: Optional[PlanOptions] = None,
        unmatched_log: Optional[UnmatchedFeatureLog] = None,
        budget_config: Optional[SemanticBudgetConfig] = None,
    ):
        """
        Args:
            dictionary: feature dictionary (default: bundled YAML)
            embedder: semantic embedder (default: one is built when
                settings.semantic_enabled, otherwise no semantic tier)
            options: default options for plan()/run()
            unmatched_log: receives every unmatched feature
            budget_config: semantic time budget per pass
        """
        self.dictionary = dictionary if dictionary is not None else load_feature_dictionary()
        if embedder is None and settings.semantic_enabled:
            embedder = SemanticEmbedder()
        self.embedder = embedder
        self.options = options or PlanOptions.from_settings()
        self.unmatched_log = unmatched_log
        self.budget_config = budget_config
        self._dictionary_strategy = DictionaryStrategy(self.dictionary)

    def plan(
        self,
        features: Iterable[str],
        checkboxes: Sequence[CheckboxInput],
        options: Optional[PlanOptions] = None,
    ) -> list[CheckboxAction]:
        """One action per checkbox, in checkbox order"""
        return self.run(features, checkboxes, options).actions

    def run(
        self,
        features: Iterable[str],
        checkboxes: Sequence[CheckboxInput],
        options: Optional[PlanOptions] = None,
    ) -> PlanResult:
        """
        Plan one pass.

        Args:
            features: extracted sticker features
            checkboxes: live checkbox snapshot (CheckboxRecord or {"id", "label", "checked"})
            options: overrides the planner's default options for this pass

        Returns:
            PlanResult

        Raises:
            DuplicateCheckboxException: two checkboxes share an id
        """
        opts = options or self.options
        records = self._records(checkboxes)
        cleaned = [f.strip() for f in features if f and f.strip()]

        result = PlanResult(
            feature_count=len(cleaned),
            uncheck_allowed=len(cleaned) > opts.coverage_threshold,
        )
        if not records:
            logger.debug("No checkboxes supplied, nothing to plan")
            return result

        labels = LabelIndex(records)
        scoring = ScoringStrategy(
            build_scorer(opts.engine), opts.threshold, opts.tie_break, opts.max_results_per_feature
        )
        semantic = self._semantic_strategy(opts)
        if semantic is not None:
            semantic.prepare(labels.labels)

        matched: dict[str, float] = {}
        for feature in cleaned:
            match = self._match_feature(feature, labels, scoring, semantic)
            result.matches.append(match)
            if match.matched:
                key = normalize_label(match.target_label)
                matched[key] = max(matched.get(key, 0.0), match.score)
            else:
                result.unmatched_features.append(feature)
                logger.warning(
                    f"Unmatched feature: '{sanitize_for_log(feature)}' "
                    f"(closest: {match.target_label!r}, score={match.score:.1f})"
                )
                if self.unmatched_log is not None:
                    self.unmatched_log.record(feature, match.target_label, match.score)

        result.semantic_degraded = semantic is not None and semantic.degraded
        result.actions = [self._decide(cb, matched, result.uncheck_allowed) for cb in records]

        logger.info(f"Plan completed: {result.summary()}")
        return result

    @staticmethod
    def _records(checkboxes: Sequence[CheckboxInput]) -> list[CheckboxRecord]:
        records = [
            cb if isinstance(cb, CheckboxRecord) else CheckboxRecord.from_dict(cb)
            for cb in checkboxes
        ]
        seen: set[str] = set()
        for record in records:
            if record.id in seen:
                raise DuplicateCheckboxException(record.id)
            seen.add(record.id)
        return records

    def _semantic_strategy(self, opts: PlanOptions) -> Optional[SemanticStrategy]:
        if self.embedder is None or not opts.semantic_enabled:
            return None
        return SemanticStrategy(
            self.embedder,
            opts.effective_semantic_threshold,
            SemanticBudget(self.budget_config),
            opts.tie_break,
            opts.max_results_per_feature,
        )

    def _match_feature(
        self,
        feature: str,
        labels: LabelIndex,
        scoring: ScoringStrategy,
        semantic: Optional[SemanticStrategy],
    ) -> MatchResult:
        exact = self._dictionary_strategy.match(feature, labels)
        if exact is not None:
            return exact

        fuzzy = scoring.match(feature, labels)
        if semantic is None:
            return fuzzy

        candidate = semantic.match(feature)
        if candidate is None:
            return fuzzy
        if not fuzzy.matched or candidate.score >= fuzzy.score:
            return candidate
        return fuzzy

    @staticmethod
    def _decide(
        checkbox: CheckboxRecord, matched: dict[str, float], uncheck_allowed: bool
    ) -> CheckboxAction:
        key = normalize_label(checkbox.label)
        confidence = matched.get(key) if key else None

        if confidence is not None and not checkbox.checked:
            action = ActionType.CHECK
        elif confidence is None and checkbox.checked and uncheck_allowed:
            action = ActionType.UNCHECK
        else:
            action = ActionType.NONE

        return CheckboxAction(
            checkbox_id=checkbox.id,
            label=checkbox.label,
            action=action,
            confidence=confidence or 0.0,
        )


def plan_checkbox_actions(
    features: Iterable[str],
    checkboxes: Sequence[CheckboxInput],
    options: Optional[PlanOptions] = None,
    dictionary: Optional[FeatureDictionary] = None,
) -> list[CheckboxAction]:
    """One-shot planning with the bundled dictionary and the configured settings"""
    planner = CheckboxActionPlanner(
        dictionary=dictionary,
        options=options or PlanOptions.from_settings(),
    )
    return planner.plan(features, checkboxes, options)
