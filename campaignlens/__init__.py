"""
CampaignLens: trust scoring for crowdfunding campaign submissions.

Combines scam-language detection, structural heuristics, similarity
matching against confirmed fraud and an optional AI opinion into a single
risk verdict with a moderation recommendation.

Author: Yobie Benjamin
Date: 2026-10-18
"""

__version__ = "0.1.0"
__author__ = "Yobie Benjamin"
__license__ = "MIT"

from campaignlens.analyzers import (
    calculate_text_similarity,
    check_against_known_fraud,
    detect_scam_patterns,
    validate_campaign_structure,
)
from campaignlens.core.types import (
    CampaignDraft,
    FraudReport,
    KnownFraudEntry,
    Recommendation,
    RiskLevel,
)
from campaignlens.detector import CampaignFraudDetector, detect_fraud, detect_fraud_batch

__all__ = [
    "CampaignFraudDetector",
    "detect_fraud",
    "detect_fraud_batch",
    "detect_scam_patterns",
    "validate_campaign_structure",
    "check_against_known_fraud",
    "calculate_text_similarity",
    "CampaignDraft",
    "KnownFraudEntry",
    "FraudReport",
    "RiskLevel",
    "Recommendation",
]
