"""Engine Layer - Matching Cascade and Sync Orchestration

This module provides the core engine layer, implementing:
- CheckboxActionPlanner: feature list + live checkboxes -> one action per checkbox
- StickerSyncOrchestrator: sticker text -> plan -> UI driver -> SyncReport
- SemanticBudget: per-pass time budget for the embedding tier
- Strategies: dictionary, string-similarity and semantic tiers
- Results: standardized value types (PlanResult, CheckboxAction, ...)
"""

from .budget import SemanticBudget, SemanticBudgetConfig
from .orchestrator import StickerSyncOrchestrator, UIDriver
from .planner import CheckboxActionPlanner, PlanOptions, plan_checkbox_actions
from .result import (
    ActionType,
    CheckboxAction,
    CheckboxRecord,
    MatchResult,
    MatchTier,
    PlanResult,
    SyncReport,
)
from .strategy import (
    DictionaryStrategy,
    LabelIndex,
    LabelScorer,
    EnhancedScorer,
    LevenshteinScorer,
    ScoringStrategy,
    SemanticStrategy,
    build_scorer,
)

__all__ = [
    "CheckboxActionPlanner",
    "PlanOptions",
    "plan_checkbox_actions",
    "StickerSyncOrchestrator",
    "UIDriver",
    "SemanticBudget",
    "SemanticBudgetConfig",
    # Results
    "ActionType",
    "CheckboxAction",
    "CheckboxRecord",
    "MatchResult",
    "MatchTier",
    "PlanResult",
    "SyncReport",
    # Strategies
    "DictionaryStrategy",
    "LabelIndex",
    "LabelScorer",
    "EnhancedScorer",
    "LevenshteinScorer",
    "ScoringStrategy",
    "SemanticStrategy",
    "build_scorer",
]
