"""Test assets (data) layer

Rules:
- no logic (plain str/dict/list)
- no dependence on the engine
"""

from .stickers import CHECKBOX_SNAPSHOTS, STICKERS

__all__ = [
    "CHECKBOX_SNAPSHOTS",
    "STICKERS",
]
