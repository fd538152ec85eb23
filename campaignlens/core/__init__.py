"""
Core data model for campaign fraud analysis.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from campaignlens.core.types import (
    AIAnalysis,
    CampaignDraft,
    CompletedAIAnalysis,
    DetectedPattern,
    FraudMatch,
    FraudReport,
    KnownFraudCheckResult,
    KnownFraudEntry,
    PatternAnalysisResult,
    PatternCategory,
    Recommendation,
    ReportAnalysis,
    RiskLevel,
    Severity,
    SkippedAIAnalysis,
    StructureIssue,
    StructureValidationResult,
)

__all__ = [
    "AIAnalysis",
    "CampaignDraft",
    "CompletedAIAnalysis",
    "DetectedPattern",
    "FraudMatch",
    "FraudReport",
    "KnownFraudCheckResult",
    "KnownFraudEntry",
    "PatternAnalysisResult",
    "PatternCategory",
    "Recommendation",
    "ReportAnalysis",
    "RiskLevel",
    "Severity",
    "SkippedAIAnalysis",
    "StructureIssue",
    "StructureValidationResult",
]
