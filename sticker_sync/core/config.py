"""Settings - environment loading and validation"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Matching core settings.

    Scores are on the 0..100 scale used by the fuzzy matcher.
    """

    # Fuzzy matching
    fuzzy_threshold: float = 75.0

    # Semantic matching (optional tier, off unless explicitly enabled)
    semantic_enabled: bool = False
    semantic_threshold: Optional[float] = None  # None -> same as fuzzy_threshold
    semantic_model_name: str = "all-MiniLM-L6-v2"
    # Wall-clock budget for embedding calls within one planning pass
    semantic_budget_s: float = 2.0

    # Unchecking is only allowed when more features than this were extracted
    coverage_threshold: int = 10
    max_results_per_feature: int = 5

    # None -> resources/feature_dictionary.yaml
    feature_dictionary_path: Optional[str] = None

    # Logging
    environment: str = "development"  # "production" floors DEBUG at INFO
    log_level: str = "INFO"

    @field_validator("fuzzy_threshold")
    @classmethod
    def validate_fuzzy_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError("fuzzy_threshold must be within [0, 100]")
        return v

    @field_validator("semantic_threshold")
    @classmethod
    def validate_semantic_threshold(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and not 0.0 <= v <= 100.0:
            raise ValueError("semantic_threshold must be within [0, 100]")
        return v

    @field_validator("semantic_budget_s")
    @classmethod
    def validate_semantic_budget(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("semantic_budget_s must be positive")
        return v

    @field_validator("coverage_threshold")
    @classmethod
    def validate_coverage_threshold(cls, v: int) -> int:
        if v < 0:
            raise ValueError("coverage_threshold must be >= 0")
        return v

    @field_validator("max_results_per_feature")
    @classmethod
    def validate_max_results(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_results_per_feature must be >= 1")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
