"""Feature dictionary loader - YAML resource load and caching"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from sticker_sync.core.config import settings
from sticker_sync.core.logging import logger
from sticker_sync.utils.resource_loader import load_yaml_file

from .feature_dictionary import FeatureDictionary

# Loaded dictionaries by resolved path (singleton per file)
_DICTIONARY_CACHE: dict[str, FeatureDictionary] = {}


def get_feature_dictionary_path() -> str:
    """Locate resources/feature_dictionary.yaml from wherever the package runs."""
    if settings.feature_dictionary_path:
        return settings.feature_dictionary_path

    here = Path(__file__).resolve()
    for parent in [here.parent, *here.parents]:
        candidate = parent / "resources" / "feature_dictionary.yaml"
        if candidate.exists():
            return str(candidate)

    return str(here.parents[2] / "resources" / "feature_dictionary.yaml")


def load_feature_dictionary(path: Optional[str] = None) -> FeatureDictionary:
    """
    Load the feature dictionary once per file and cache it.

    A missing or unreadable file yields an empty dictionary with a warning,
    so the planner degrades to exact/fuzzy matching. A file whose entries
    break the dictionary invariants raises FeatureDictionaryException.

    Args:
        path: YAML file; defaults to the configured/bundled dictionary

    Returns:
        FeatureDictionary
    """
    yaml_path = str(Path(path or get_feature_dictionary_path()).resolve())

    cached = _DICTIONARY_CACHE.get(yaml_path)
    if cached is not None:
        return cached

    data = load_yaml_file(yaml_path)
    raw_mapping = data.get("mapping", {}) or {}
    if not isinstance(raw_mapping, dict):
        logger.error(f"Feature dictionary 'mapping' is not a mapping: {yaml_path}")
        raw_mapping = {}

    dictionary = FeatureDictionary(raw_mapping)
    if len(dictionary) == 0:
        logger.warning(f"Feature dictionary is empty: {yaml_path}")
    else:
        logger.info(f"Feature dictionary loaded: {len(dictionary)} entries")

    _DICTIONARY_CACHE[yaml_path] = dictionary
    return dictionary


def clear_feature_dictionary_cache() -> None:
    """Forget loaded dictionaries (tests and hot reloads)."""
    _DICTIONARY_CACHE.clear()
    load_yaml_file.cache_clear()
