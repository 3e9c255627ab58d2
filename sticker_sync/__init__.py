"""sticker-sync - window sticker features -> vendor form checkboxes

Public entry points:
- TextFeatureExtractor: raw sticker text -> feature list
- CheckboxActionPlanner / plan_checkbox_actions: features + checkboxes -> actions
- StickerSyncOrchestrator: extract -> plan -> UI driver -> SyncReport
"""

from .curation import UnmatchedFeatureLog
from .dictionary import FeatureDictionary, load_feature_dictionary
from .engine import (
    ActionType,
    CheckboxAction,
    CheckboxActionPlanner,
    CheckboxRecord,
    MatchResult,
    MatchTier,
    PlanOptions,
    PlanResult,
    StickerSyncOrchestrator,
    SyncReport,
    plan_checkbox_actions,
)
from .extraction import TextFeatureExtractor, extract_features
from .matching import FuzzyMatcher, TieBreakPolicy, levenshtein_similarity
from .semantic import EmbeddingResult, EmbeddingStatus, SemanticEmbedder

__version__ = "0.3.0"

__all__ = [
    "ActionType",
    "CheckboxAction",
    "CheckboxActionPlanner",
    "CheckboxRecord",
    "EmbeddingResult",
    "EmbeddingStatus",
    "FeatureDictionary",
    "FuzzyMatcher",
    "MatchResult",
    "MatchTier",
    "PlanOptions",
    "PlanResult",
    "SemanticEmbedder",
    "StickerSyncOrchestrator",
    "SyncReport",
    "TextFeatureExtractor",
    "TieBreakPolicy",
    "UnmatchedFeatureLog",
    "extract_features",
    "levenshtein_similarity",
    "load_feature_dictionary",
    "plan_checkbox_actions",
]
