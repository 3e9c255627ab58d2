"""Feature dictionary package."""

from .feature_dictionary import FeatureDictionary
from .loader import clear_feature_dictionary_cache, get_feature_dictionary_path, load_feature_dictionary

__all__ = [
    "FeatureDictionary",
    "clear_feature_dictionary_cache",
    "get_feature_dictionary_path",
    "load_feature_dictionary",
]
