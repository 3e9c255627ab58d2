"""Custom exceptions (structured exception hierarchy)

The matching core has no fatal runtime conditions: empty input, missing
embeddings and unmatched features are all reported through result values.
These exceptions cover caller mistakes and broken resources only.
"""
from typing import Any, Optional


class StickerSyncException(Exception):
    """Base exception - parent of every custom exception"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# Validation
class ValidationException(StickerSyncException):
    """Invalid argument passed to the matching core"""
    def __init__(self, field: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Validation failed for '{field}': {reason}"
        super().__init__(message, "VALIDATION_ERROR",
                        details or {"field": field, "reason": reason})


class InvalidThresholdException(ValidationException):
    """Threshold outside the 0..100 score scale"""
    def __init__(self, name: str, value: Any, details: Optional[dict[str, Any]] = None):
        super().__init__(name, f"must be within [0, 100] (value: {value})", details)


class DuplicateCheckboxException(ValidationException):
    """Two checkbox records in one snapshot share an id"""
    def __init__(self, checkbox_id: str, details: Optional[dict[str, Any]] = None):
        super().__init__("checkboxes", f"duplicate checkbox id '{checkbox_id}'",
                        details or {"checkbox_id": checkbox_id})


# Feature dictionary
class FeatureDictionaryException(StickerSyncException):
    """Feature dictionary violates its invariants"""
    def __init__(self, canonical: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Invalid feature dictionary entry '{canonical}': {reason}"
        super().__init__(message, "FEATURE_DICTIONARY_ERROR",
                        details or {"canonical": canonical, "reason": reason})


# Embeddings
class EmbeddingException(StickerSyncException):
    """Embedding backend could not be loaded or failed on a call.

    Carried inside a failed EmbeddingResult; the planner never lets it escape.
    """
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Embedding {operation} failed: {reason}"
        super().__init__(message, "EMBEDDING_ERROR",
                        details or {"operation": operation, "reason": reason})


class EmbeddingBudgetExhaustedException(EmbeddingException):
    """Semantic tier ran out of its per-pass time budget"""
    def __init__(self, remaining_s: float, details: Optional[dict[str, Any]] = None):
        super().__init__("budget", f"budget exhausted (remaining: {remaining_s:.3f}s)",
                        details or {"remaining_s": remaining_s})
