"""
Structural and formatting checks for campaign drafts.

Author: Yobie Benjamin
Date: 2026-10-18
"""

import re
from datetime import datetime, timezone
from typing import Any, List, Optional

from loguru import logger

from campaignlens.config.settings import StructureSettings, get_settings
from campaignlens.core.types import (
    CampaignDraft,
    Severity,
    StructureIssue,
    StructureValidationResult,
)

_UPPERCASE = re.compile(r"[A-Z]")
_SPECIAL = re.compile(r"[^\w\s]")


class CampaignStructureValidator:
    """
    Validates the shape of a campaign draft independent of its meaning.

    Only high-severity issues invalidate a draft; medium and low issues are
    warnings. Every issue counts towards the warning count.
    """

    def __init__(self, settings: Optional[StructureSettings] = None):
        self.settings = settings or get_settings().structure

    def validate(
        self,
        draft: Any,
        now: Optional[datetime] = None,
    ) -> StructureValidationResult:
        """
        Validate a campaign draft.

        Args:
            draft: CampaignDraft or mapping with campaign fields
            now: Reference time for the deadline check (defaults to current UTC time)

        Returns:
            Validation result with the issues found
        """
        draft = CampaignDraft.from_input(draft)
        s = self.settings
        issues: List[StructureIssue] = []

        title = draft.title
        description = draft.description
        goal = draft.goal

        if not title or len(title) < s.title_min_length:
            issues.append(StructureIssue(
                "title", Severity.HIGH, "Campaign title is too short or missing"
            ))
        if len(title) > s.title_max_length:
            issues.append(StructureIssue(
                "title", Severity.MEDIUM, "Campaign title is unusually long"
            ))

        if not description or len(description) < s.description_min_length:
            issues.append(StructureIssue(
                "description", Severity.HIGH, "Campaign description is too short or vague"
            ))
        if (
            description
            and len(description) < s.minimal_description_length
            and goal > s.minimal_description_goal
        ):
            issues.append(StructureIssue(
                "description",
                Severity.HIGH,
                "High funding goal with minimal description raises red flags",
            ))

        combined = title + description
        if combined:
            caps_ratio = len(_UPPERCASE.findall(combined)) / len(combined)
            if caps_ratio > s.caps_ratio:
                issues.append(StructureIssue(
                    "formatting",
                    Severity.MEDIUM,
                    "Excessive use of capital letters (common in scams)",
                ))

            special_ratio = len(_SPECIAL.findall(combined)) / len(combined)
            if special_ratio > s.special_char_ratio:
                issues.append(StructureIssue(
                    "formatting", Severity.LOW, "Excessive special characters or emoji usage"
                ))

        if goal > s.max_goal:
            issues.append(StructureIssue(
                "goal",
                Severity.MEDIUM,
                "Funding goal is unusually high - requires extra verification",
            ))

        if not draft.beneficiary.strip():
            issues.append(StructureIssue(
                "beneficiary", Severity.MEDIUM, "No beneficiary address provided"
            ))

        if draft.deadline is not None:
            deadline = draft.deadline
            if deadline.tzinfo is None:
                deadline = deadline.replace(tzinfo=timezone.utc)
            reference = now or datetime.now(timezone.utc)
            if reference.tzinfo is None:
                reference = reference.replace(tzinfo=timezone.utc)
            if deadline < reference:
                issues.append(StructureIssue(
                    "deadline", Severity.LOW, "Campaign deadline has already passed"
                ))

        valid = not any(issue.severity == Severity.HIGH for issue in issues)
        if issues:
            logger.debug(f"Structure validation found {len(issues)} issues (valid={valid})")

        return StructureValidationResult(
            valid=valid,
            issues=issues,
            warning_count=len(issues),
        )


def validate_campaign_structure(
    draft: Any,
    settings: Optional[StructureSettings] = None,
    now: Optional[datetime] = None,
) -> StructureValidationResult:
    """Validate campaign structure and formatting."""
    return CampaignStructureValidator(settings).validate(draft, now=now)
