"""Utility helpers for CampaignLens."""

from campaignlens.utils.logging import configure_logging

__all__ = ["configure_logging"]
