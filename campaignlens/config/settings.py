"""
Pydantic-based configuration settings for CampaignLens.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PatternSettings(BaseModel):
    """Scoring knobs for scam-language detection."""

    low_weight: int = Field(default=5, ge=0, le=100)
    medium_weight: int = Field(default=10, ge=0, le=100)
    high_weight: int = Field(default=20, ge=0, le=100)
    # A category with more than this many hits is treated as high severity
    escalation_count: int = Field(default=2, ge=1)
    max_score: int = Field(default=100, ge=1, le=100)

    def weight_for(self, severity: str) -> int:
        """Score contribution of a single match at the given severity."""
        return {
            "low": self.low_weight,
            "medium": self.medium_weight,
            "high": self.high_weight,
        }[severity]


class StructureSettings(BaseModel):
    """Thresholds for structural validation of campaign drafts."""

    title_min_length: int = Field(default=10, ge=0)
    title_max_length: int = Field(default=200, ge=1)
    description_min_length: int = Field(default=50, ge=0)
    minimal_description_length: int = Field(default=100, ge=0)
    minimal_description_goal: float = Field(default=10_000, ge=0)
    caps_ratio: float = Field(default=0.3, gt=0, le=1)
    special_char_ratio: float = Field(default=0.15, gt=0, le=1)
    max_goal: float = Field(default=1_000_000, gt=0)

    @model_validator(mode="after")
    def check_title_bounds(self) -> "StructureSettings":
        if self.title_min_length > self.title_max_length:
            raise ValueError("title_min_length must not exceed title_max_length")
        return self


class KnownFraudSettings(BaseModel):
    """Similarity thresholds for matching against confirmed fraud."""

    title_threshold: float = Field(default=0.7, ge=0, le=1)
    description_threshold: float = Field(default=0.6, ge=0, le=1)
    supporting_title_threshold: float = Field(default=0.6, ge=0, le=1)
    supporting_description_threshold: float = Field(default=0.4, ge=0, le=1)
    high_risk_threshold: float = Field(default=0.9, ge=0, le=1)
    high_risk_mean_threshold: float = Field(default=0.85, ge=0, le=1)


class ScoringSettings(BaseModel):
    """Weights used to merge the individual analyses into one risk score."""

    pattern_weight: float = Field(default=0.65, ge=0, le=1)
    structure_weight: float = Field(default=0.35, ge=0, le=1)
    ai_pattern_weight: float = Field(default=0.4, ge=0, le=1)
    ai_structure_weight: float = Field(default=0.2, ge=0, le=1)
    ai_weight: float = Field(default=0.4, ge=0, le=1)

    high_issue_penalty: int = Field(default=25, ge=0, le=100)
    medium_issue_penalty: int = Field(default=10, ge=0, le=100)
    low_issue_penalty: int = Field(default=5, ge=0, le=100)

    known_fraud_boost: int = Field(default=15, ge=0, le=100)
    known_fraud_floor: int = Field(default=90, ge=0, le=100)

    medium_threshold: int = Field(default=40, ge=0, le=100)
    high_threshold: int = Field(default=60, ge=0, le=100)
    critical_threshold: int = Field(default=80, ge=0, le=100)

    @model_validator(mode="after")
    def check_bands(self) -> "ScoringSettings":
        if not self.medium_threshold < self.high_threshold < self.critical_threshold:
            raise ValueError("risk thresholds must be strictly increasing")
        return self


class AISettings(BaseModel):
    """Settings for the optional AI opinion."""

    model: str = "gemini-2.0-flash-exp"
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta/models"
    timeout_seconds: float = Field(default=20.0, gt=0)
    temperature: float = Field(default=0.3, ge=0, le=2)
    top_k: int = Field(default=20, ge=1)
    top_p: float = Field(default=0.8, gt=0, le=1)
    max_output_tokens: int = Field(default=2048, ge=1)
    placeholder_keys: list[str] = Field(
        default_factory=lambda: ["your_gemini_api_key_here"]
    )

    def is_usable_key(self, api_key: str | None) -> bool:
        """Check whether an API key is present and not a template placeholder."""
        key = (api_key or "").strip()
        return bool(key) and key not in self.placeholder_keys


class ObservabilitySettings(BaseModel):
    """Settings for logging and metrics."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Path | None = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"
    # Extra fields bound onto every record, e.g. {"service": "moderation"}
    log_context: dict[str, str] = Field(default_factory=dict)
    enable_metrics: bool = False


class CampaignLensSettings(BaseSettings):
    """
    Main configuration settings for CampaignLens.

    Configuration can be provided via:
    - Environment variables with CAMPAIGNLENS_ prefix
      (nested values use a double underscore, e.g. CAMPAIGNLENS_AI__TIMEOUT_SECONDS)
    - .env file in current directory
    - Direct instantiation with kwargs

    Example:
        ```python
        settings = CampaignLensSettings()

        settings = CampaignLensSettings(
            structure=StructureSettings(max_goal=250_000),
        )
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGNLENS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"

    patterns: PatternSettings = Field(default_factory=PatternSettings)
    structure: StructureSettings = Field(default_factory=StructureSettings)
    known_fraud: KnownFraudSettings = Field(default_factory=KnownFraudSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    ai: AISettings = Field(default_factory=AISettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "prod"

    def to_dict(self) -> dict:
        """Convert settings to dictionary."""
        return self.model_dump()


@lru_cache
def get_settings(env_file: str | None = None) -> CampaignLensSettings:
    """
    Get cached settings instance.

    To reload settings, clear the cache with `get_settings.cache_clear()`.

    Args:
        env_file: Optional path to .env file

    Returns:
        Settings instance
    """
    if env_file:
        return CampaignLensSettings(_env_file=env_file)
    return CampaignLensSettings()


def load_settings_from_yaml(yaml_path: Path) -> CampaignLensSettings:
    """
    Load settings from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        Settings instance
    """
    import yaml

    with open(yaml_path) as f:
        config_dict = yaml.safe_load(f) or {}

    return CampaignLensSettings(**config_dict)
