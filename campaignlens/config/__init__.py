"""
Configuration management for CampaignLens.

Uses Pydantic BaseSettings for type-safe, validated configuration
with support for environment variables, .env files, and YAML.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from campaignlens.config.settings import (
    AISettings,
    CampaignLensSettings,
    KnownFraudSettings,
    ObservabilitySettings,
    PatternSettings,
    ScoringSettings,
    StructureSettings,
    get_settings,
    load_settings_from_yaml,
)

__all__ = [
    "CampaignLensSettings",
    "PatternSettings",
    "StructureSettings",
    "KnownFraudSettings",
    "ScoringSettings",
    "AISettings",
    "ObservabilitySettings",
    "get_settings",
    "load_settings_from_yaml",
]
