"""Resource file (YAML) loader utilities"""
import os
import yaml
from typing import Any, Dict
from functools import lru_cache

from sticker_sync.core.logging import logger


def get_resource_path(relative_path: str) -> str:
    """Absolute path of a file under the project-level resources/ directory"""
    # sticker_sync/utils/resource_loader.py -> sticker_sync/utils -> sticker_sync -> root
    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    return os.path.join(base_dir, "resources", relative_path)


@lru_cache(maxsize=32)
def load_yaml_file(path: str) -> Dict[str, Any]:
    """Load and cache a YAML mapping from an absolute path.

    A missing file yields an empty mapping with a warning; a file that does
    not parse is logged and also yields an empty mapping.
    """
    if not os.path.exists(path):
        logger.warning(f"Resource not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to load YAML resource {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"YAML resource {path} is not a mapping (got {type(data).__name__})")
        return {}
    return data


def load_yaml_resource(relative_path: str) -> Dict[str, Any]:
    """Load and cache a YAML resource relative to resources/"""
    return load_yaml_file(get_resource_path(relative_path))


def load_known_features() -> list[str]:
    """Canonical feature names scanned for verbatim in sticker text"""
    data = load_yaml_resource("extraction/known_features.yaml")
    return [str(x) for x in data.get("known_features", []) or []]


def load_section_rules() -> Dict[str, Any]:
    """Section headers and category keywords for sticker parsing"""
    data = load_yaml_resource("extraction/sections.yaml")
    return {
        "sections": data.get("sections", {}) or {},
        "categories": data.get("categories", {}) or {},
    }


def load_stop_words() -> set[str]:
    """Stop words ignored by keyword similarity"""
    data = load_yaml_resource("matching/stop_words.yaml")
    return {str(x).lower() for x in data.get("stop_words", []) or []}
