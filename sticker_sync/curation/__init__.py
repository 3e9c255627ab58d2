"""Dictionary curation helpers."""

from .unmatched_log import UnmatchedFeatureEntry, UnmatchedFeatureLog

__all__ = ["UnmatchedFeatureEntry", "UnmatchedFeatureLog"]
