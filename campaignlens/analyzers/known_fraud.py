"""
Similarity matching against a corpus of confirmed fraudulent campaigns.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from typing import Any, Iterable, List, Optional, Tuple

from loguru import logger

from campaignlens.analyzers.similarity import calculate_text_similarity
from campaignlens.config.settings import KnownFraudSettings, get_settings
from campaignlens.core.types import (
    CampaignDraft,
    FraudMatch,
    KnownFraudCheckResult,
    KnownFraudEntry,
)
from campaignlens.exceptions import InvalidCampaignError


def _percent(similarity: float) -> str:
    return f"{similarity * 100:.2f}"


class KnownFraudChecker:
    """
    Compares a draft with previously confirmed fraud.

    The corpus is supplied per call and never stored. An entry matches when
    its title or description is close to the candidate's, or when a fairly
    similar title is backed by a somewhat similar description. A match at
    or near textual identity marks the result as high risk.
    """

    def __init__(self, settings: Optional[KnownFraudSettings] = None):
        self.settings = settings or get_settings().known_fraud

    def is_match(self, title_similarity: float, description_similarity: float) -> bool:
        s = self.settings
        return (
            title_similarity > s.title_threshold
            or description_similarity > s.description_threshold
            or (
                title_similarity > s.supporting_title_threshold
                and description_similarity > s.supporting_description_threshold
            )
        )

    def is_high_risk(self, title_similarity: float, description_similarity: float) -> bool:
        s = self.settings
        mean = (title_similarity + description_similarity) / 2
        return (
            (title_similarity >= s.high_risk_threshold
             and description_similarity >= s.high_risk_threshold)
            or mean >= s.high_risk_mean_threshold
        )

    def check(
        self,
        draft: Any,
        known_fraud_campaigns: Optional[Iterable[Any]] = None,
    ) -> KnownFraudCheckResult:
        """
        Check a draft against the known-fraud corpus.

        Args:
            draft: CampaignDraft or mapping with title and description
            known_fraud_campaigns: KnownFraudEntry objects or mappings

        Returns:
            Matches ordered by descending similarity
        """
        draft = CampaignDraft.from_input(draft)
        scored: List[Tuple[float, FraudMatch]] = []
        high_risk = False

        for raw_entry in known_fraud_campaigns or []:
            try:
                entry = KnownFraudEntry.from_input(raw_entry)
            except InvalidCampaignError as e:
                logger.warning(f"Skipping known fraud entry: {e.message}")
                continue

            title_sim = calculate_text_similarity(draft.title, entry.title)
            desc_sim = calculate_text_similarity(draft.description, entry.description)

            if not self.is_match(title_sim, desc_sim):
                continue

            if self.is_high_risk(title_sim, desc_sim):
                high_risk = True

            scored.append((
                title_sim + desc_sim,
                FraudMatch(
                    entry_id=entry.id,
                    title_similarity=_percent(title_sim),
                    description_similarity=_percent(desc_sim),
                    reason=entry.reason,
                ),
            ))

        scored.sort(key=lambda item: item[0], reverse=True)
        matches = [match for _, match in scored]

        if matches:
            logger.info(
                f"Campaign resembles {len(matches)} known fraudulent campaign(s) "
                f"(high_risk={high_risk})"
            )

        return KnownFraudCheckResult(
            matches_found=len(matches) > 0,
            high_risk=high_risk,
            matches=matches,
        )


def check_against_known_fraud(
    draft: Any,
    known_fraud_campaigns: Optional[Iterable[Any]] = None,
    settings: Optional[KnownFraudSettings] = None,
) -> KnownFraudCheckResult:
    """Check campaign against a known fraud corpus."""
    return KnownFraudChecker(settings).check(draft, known_fraud_campaigns)
