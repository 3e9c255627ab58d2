"""Semantic Budget - wall-clock budget for embedding calls in one planning pass

Embedding inference is the only potentially slow step of a pass. The
semantic tier checks the budget before every call; once it is spent the
tier is skipped for the rest of the pass and matching continues on the
fuzzy result.
"""

from dataclasses import dataclass
from time import time
from typing import Callable, Optional

from sticker_sync.core.config import settings


@dataclass
class SemanticBudgetConfig:
    """Budget settings"""

    total_budget: float = 2.0  # seconds per planning pass
    min_remaining: float = 0.0  # below this the budget counts as spent

    def __post_init__(self):
        if self.total_budget <= 0:
            raise ValueError(f"total_budget must be positive (got {self.total_budget})")
        if self.min_remaining < 0 or self.min_remaining >= self.total_budget:
            raise ValueError(
                f"min_remaining ({self.min_remaining}s) must be within [0, total_budget)"
            )

    @classmethod
    def from_settings(cls) -> "SemanticBudgetConfig":
        return cls(total_budget=settings.semantic_budget_s)


class SemanticBudget:
    """Time budget tracker for one planning pass.

    Usage:
        budget = SemanticBudget()
        budget.start()

        if not budget.is_exhausted():
            result = embedder.embed(texts)
            budget.checkpoint("labels_embedded")

        report = budget.get_report()
    """

    def __init__(
        self,
        config: Optional[SemanticBudgetConfig] = None,
        clock: Callable[[], float] = time,
    ):
        self.config = config or SemanticBudgetConfig.from_settings()
        self._clock = clock
        self.start_time: Optional[float] = None
        self._checkpoints: dict[str, float] = {}

    def start(self) -> None:
        """Start (or restart) measuring"""
        self.start_time = self._clock()
        self._checkpoints.clear()

    def checkpoint(self, name: str) -> None:
        """Record elapsed time under a name

        Raises:
            RuntimeError: start() was not called
        """
        if self.start_time is None:
            raise RuntimeError("Budget not started. Call start() first.")
        self._checkpoints[name] = self._clock() - self.start_time

    def elapsed(self) -> float:
        """Seconds since start() (0.0 before start)"""
        if self.start_time is None:
            return 0.0
        return self._clock() - self.start_time

    def remaining(self) -> float:
        """Seconds left, never negative"""
        return max(0.0, self.config.total_budget - self.elapsed())

    def is_exhausted(self) -> bool:
        return self.remaining() <= self.config.min_remaining

    def get_report(self) -> dict:
        """Budget usage report"""
        return {
            "total_budget": self.config.total_budget,
            "elapsed": round(self.elapsed(), 3),
            "remaining": round(self.remaining(), 3),
            "exhausted": self.is_exhausted(),
            "checkpoints": {k: round(v, 3) for k, v in self._checkpoints.items()},
        }
