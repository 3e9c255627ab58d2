"""Sticker text extraction package."""

from .extractor import StickerExtraction, TextFeatureExtractor, extract_features
from .sections import categorize_features, extract_priced_options, parse_sections

__all__ = [
    "StickerExtraction",
    "TextFeatureExtractor",
    "categorize_features",
    "extract_features",
    "extract_priced_options",
    "parse_sections",
]
