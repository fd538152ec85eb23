"""
CampaignLens exceptions.

Author: Yobie Benjamin
Date: 2026-10-18
"""


class CampaignLensError(Exception):
    """Base exception for all CampaignLens errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidCampaignError(CampaignLensError):
    """Raised when a campaign draft cannot be interpreted."""
    pass


class AIAnalysisError(CampaignLensError):
    """Raised when the AI opinion cannot be obtained or parsed."""
    pass
