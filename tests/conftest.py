"""Global test setup

Role:
- test environment configuration
- shared fakes (embedding backend, UI driver)
- global state reset (dictionary cache)

Not here:
- sticker text and checkbox snapshots (tests/fixtures)
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import pytest


# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """Test environment variables (session-wide)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


@pytest.fixture(autouse=True)
def reset_dictionary_cache():
    """Every test starts from a freshly loaded dictionary"""
    from sticker_sync.dictionary import clear_feature_dictionary_cache

    clear_feature_dictionary_cache()
    yield
    clear_feature_dictionary_cache()


@dataclass
class FakeEmbeddingBackend:
    """Deterministic embedding backend for unit tests

    - vectors: exact text -> vector; unknown texts map to a vector orthogonal
      to every configured one
    - records every encode() batch
    """

    vectors: dict[str, Sequence[float]]
    dim: int = 4
    calls: list[list[str]] = field(default_factory=list)

    def encode(self, texts: list[str]) -> np.ndarray:
        self.calls.append(list(texts))
        rows = []
        for text in texts:
            vec = self.vectors.get(text)
            if vec is None:
                vec = [0.0] * (self.dim - 1) + [1.0]
            rows.append(np.asarray(vec, dtype=float))
        return np.vstack(rows)


@dataclass
class FailingEmbeddingBackend:
    """Backend whose encode() always raises"""

    error: Exception = field(default_factory=lambda: RuntimeError("inference server down"))
    calls: int = 0

    def encode(self, texts: list[str]) -> np.ndarray:
        self.calls += 1
        raise self.error


@dataclass
class FakeUIDriver:
    """UI driver double for orchestrator tests

    - outcomes: per-checkbox result override (default True)
    - raises: exception thrown from apply()
    """

    outcomes: dict[str, bool] = field(default_factory=dict)
    raises: Optional[Exception] = None
    applied: list = field(default_factory=list)

    def apply(self, actions):
        self.applied.append(list(actions))
        if self.raises is not None:
            raise self.raises
        return {a.checkbox_id: self.outcomes.get(a.checkbox_id, True) for a in actions}


@pytest.fixture
def fake_backend() -> FakeEmbeddingBackend:
    # unit vectors along 3 axes; "Seat Heater" and "Heated Front Seats" are synonyms
    return FakeEmbeddingBackend(
        vectors={
            "Heated Front Seats": [1.0, 0.0, 0.0, 0.0],
            "Seat Heater": [0.98, 0.2, 0.0, 0.0],
            "Moonroof": [0.0, 1.0, 0.0, 0.0],
            "Glass Roof Panel": [0.0, 0.95, 0.3, 0.0],
            "Tow Package": [0.0, 0.0, 1.0, 0.0],
        }
    )


@pytest.fixture
def failing_backend() -> FailingEmbeddingBackend:
    return FailingEmbeddingBackend()


@pytest.fixture
def fake_driver() -> FakeUIDriver:
    return FakeUIDriver()


@pytest.fixture
def small_dictionary():
    """Tiny dictionary independent of the bundled YAML"""
    from sticker_sync.dictionary import FeatureDictionary

    return FeatureDictionary({
        "Backup Camera": ["Rear View Camera", "Backup Camera"],
        "Bluetooth Connectivity": ["Bluetooth", "Hands-Free Phone"],
        "Sunroof": ["Sunroof", "Moonroof"],
    })
