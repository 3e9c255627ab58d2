"""Text utilities.

- cleaning: comparison keys and scraped-line cleanup
- tokenize: keyword extraction for keyword similarity
"""

from .cleaning import clean_feature_text, is_numeric_noise, normalize_label
from .tokenize import extract_keywords

__all__ = [
    "clean_feature_text",
    "is_numeric_noise",
    "normalize_label",
    "extract_keywords",
]
