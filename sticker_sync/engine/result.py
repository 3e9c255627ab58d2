"""Planning results - standardized value types for one planning pass

Every outcome of a pass (matches, unmatched features, degraded semantic
tier, per-checkbox actions) is reported through these values; nothing in the
planner raises for expected conditions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MatchTier(str, Enum):
    """Which cascade tier produced a match"""

    DICTIONARY = "dictionary"  # feature alias equals a label
    EXACT = "exact"  # feature text equals a label
    FUZZY = "fuzzy"
    SEMANTIC = "semantic"
    NONE = "none"  # unmatched


class ActionType(str, Enum):
    """What the UI driver should do with a checkbox"""

    CHECK = "check"
    UNCHECK = "uncheck"
    NONE = "none"


@dataclass(frozen=True)
class CheckboxRecord:
    """Read-only snapshot of one checkbox on the page.

    Attributes:
        id: opaque id, stable for one page load
        label: visible label text
        checked: current state
    """

    id: str
    label: str
    checked: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "CheckboxRecord":
        """Build from a scraped {"id", "label", "checked"} mapping"""
        return cls(
            id=str(data["id"]),
            label=str(data.get("label", "")),
            checked=bool(data.get("checked", False)),
        )


@dataclass
class MatchResult:
    """Outcome of matching one feature against the live labels.

    Attributes:
        source_feature: feature text as supplied
        target_label: matched label (closest label seen when unmatched, may be None)
        score: 0..100
        matched: True when a tier accepted the label
        tier: tier that produced the result
        candidates: runners-up (label, score) from the scoring tier, best first
    """

    source_feature: str
    target_label: Optional[str]
    score: float
    matched: bool
    tier: MatchTier = MatchTier.NONE
    candidates: list[tuple[str, float]] = field(default_factory=list)

    @classmethod
    def unmatched(
        cls, feature: str, closest_label: Optional[str] = None, score: float = 0.0
    ) -> "MatchResult":
        return cls(
            source_feature=feature,
            target_label=closest_label,
            score=score,
            matched=False,
            tier=MatchTier.NONE,
        )


@dataclass
class CheckboxAction:
    """Decision for one checkbox.

    confidence is the score of the match that selected the checkbox (100 for
    dictionary and exact matches, 0 when nothing matched it).
    """

    checkbox_id: str
    label: str
    action: ActionType
    confidence: float = 0.0

    def to_dict(self) -> dict:
        return {
            "checkbox_id": self.checkbox_id,
            "label": self.label,
            "action": self.action.value,
            "confidence": self.confidence,
        }


@dataclass
class PlanResult:
    """Everything a planning pass decided.

    Attributes:
        actions: one action per checkbox, in checkbox input order
        matches: one MatchResult per feature, in feature input order
        unmatched_features: features no tier accepted
        feature_count: features considered (drives the uncheck gate)
        uncheck_allowed: feature_count exceeded the coverage threshold
        semantic_degraded: semantic tier was enabled but failed or ran out of budget
    """

    actions: list[CheckboxAction] = field(default_factory=list)
    matches: list[MatchResult] = field(default_factory=list)
    unmatched_features: list[str] = field(default_factory=list)
    feature_count: int = 0
    uncheck_allowed: bool = False
    semantic_degraded: bool = False

    @property
    def to_check(self) -> list[CheckboxAction]:
        return [a for a in self.actions if a.action == ActionType.CHECK]

    @property
    def to_uncheck(self) -> list[CheckboxAction]:
        return [a for a in self.actions if a.action == ActionType.UNCHECK]

    @property
    def pending(self) -> list[CheckboxAction]:
        """Actions the UI driver actually has to perform"""
        return [a for a in self.actions if a.action != ActionType.NONE]

    def summary(self) -> dict:
        """Counts for logging and reports"""
        tiers: dict[str, int] = {}
        for m in self.matches:
            if m.matched:
                tiers[m.tier.value] = tiers.get(m.tier.value, 0) + 1
        return {
            "features": self.feature_count,
            "checkboxes": len(self.actions),
            "check": len(self.to_check),
            "uncheck": len(self.to_uncheck),
            "unmatched": len(self.unmatched_features),
            "matched_by_tier": tiers,
            "uncheck_allowed": self.uncheck_allowed,
            "semantic_degraded": self.semantic_degraded,
        }


@dataclass
class SyncReport:
    """Outcome of one sticker -> checkbox synchronisation.

    Attributes:
        features: features extracted from the sticker
        plan: planning result
        applied: checkbox ids the UI driver reported as done
        failed: checkbox ids the UI driver reported as failed (or never reported)
        errors: driver error messages
    """

    features: list[str] = field(default_factory=list)
    plan: PlanResult = field(default_factory=PlanResult)
    applied: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return not self.failed and not self.errors

    def summary(self) -> dict:
        return {
            **self.plan.summary(),
            "applied": len(self.applied),
            "failed": len(self.failed),
            "errors": len(self.errors),
        }
