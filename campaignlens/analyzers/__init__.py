"""
Specialized analyzers for campaign drafts.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from campaignlens.analyzers.known_fraud import KnownFraudChecker, check_against_known_fraud
from campaignlens.analyzers.patterns import (
    SCAM_PATTERNS,
    PatternRule,
    ScamPatternMatcher,
    detect_scam_patterns,
)
from campaignlens.analyzers.similarity import calculate_text_similarity, normalize_text
from campaignlens.analyzers.structure import (
    CampaignStructureValidator,
    validate_campaign_structure,
)

__all__ = [
    "SCAM_PATTERNS",
    "PatternRule",
    "ScamPatternMatcher",
    "detect_scam_patterns",
    "CampaignStructureValidator",
    "validate_campaign_structure",
    "KnownFraudChecker",
    "check_against_known_fraud",
    "calculate_text_similarity",
    "normalize_text",
]
