"""
Scam-language detection for campaign titles and descriptions.

Author: Yobie Benjamin
Date: 2026-10-18
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Pattern, Tuple

from loguru import logger

from campaignlens.config.settings import PatternSettings, get_settings
from campaignlens.core.types import (
    DetectedPattern,
    PatternAnalysisResult,
    PatternCategory,
    Severity,
)


@dataclass(frozen=True)
class PatternRule:
    """Trigger phrases for one category of scam language."""

    category: PatternCategory
    severity: Severity
    matchers: Tuple[str, ...]


SCAM_PATTERNS: Mapping[PatternCategory, PatternRule] = MappingProxyType({
    PatternCategory.URGENT_LANGUAGE: PatternRule(
        category=PatternCategory.URGENT_LANGUAGE,
        severity=Severity.MEDIUM,
        matchers=(
            "act now", "limited time", "urgent", "hurry", "don't miss out",
            "last chance", "only today", "expires soon", "immediate action",
        ),
    ),
    PatternCategory.UNREALISTIC_PROMISES: PatternRule(
        category=PatternCategory.UNREALISTIC_PROMISES,
        severity=Severity.HIGH,
        matchers=(
            "guaranteed returns", "100% profit", "risk-free", "no risk",
            "get rich quick", "passive income", "double your money",
            "guaranteed success", "can't lose",
        ),
    ),
    PatternCategory.TECHNICAL_BUZZWORDS: PatternRule(
        category=PatternCategory.TECHNICAL_BUZZWORDS,
        severity=Severity.LOW,
        matchers=(
            "revolutionary blockchain", "quantum encryption", "ai-powered",
            "guaranteed roi", "decentralized autonomous", "next-gen crypto",
            "unlimited scalability", "instant millionaire",
        ),
    ),
    PatternCategory.SUSPICIOUS_REQUESTS: PatternRule(
        category=PatternCategory.SUSPICIOUS_REQUESTS,
        severity=Severity.HIGH,
        matchers=(
            "send crypto", "wire transfer", "gift card", "prepaid card",
            "western union", "moneygram", "cryptocurrency only",
            "no refunds", "final sale",
        ),
    ),
    PatternCategory.PRESSURE_TACTICS: PatternRule(
        category=PatternCategory.PRESSURE_TACTICS,
        severity=Severity.MEDIUM,
        matchers=(
            "limited spots", "exclusive", "vip access", "insider",
            "secret opportunity", "private sale", "whitelist only",
        ),
    ),
})


def _compile_matcher(phrase: str) -> Pattern:
    """Build a case-insensitive, whole-phrase regex for a trigger."""
    parts = []
    for char in phrase:
        if char in " -":
            # "risk-free", "risk free" and "risk  free" are the same trigger
            if parts and parts[-1] == r"[\s\-]+":
                continue
            parts.append(r"[\s\-]+")
        elif char == "'":
            parts.append("['’]?")
        else:
            parts.append(re.escape(char))
    return re.compile(r"(?<!\w)" + "".join(parts) + r"(?!\w)", re.IGNORECASE)


_COMPILED: Tuple[Tuple[PatternRule, Tuple[Tuple[str, Pattern], ...]], ...] = tuple(
    (rule, tuple((phrase, _compile_matcher(phrase)) for phrase in rule.matchers))
    for rule in SCAM_PATTERNS.values()
)

_CATEGORY_ORDER = {category: index for index, category in enumerate(SCAM_PATTERNS)}


class ScamPatternMatcher:
    """
    Scans campaign text against the scam-language rule table.

    Each distinct trigger found contributes to the score according to its
    severity. A category with many hits is escalated to high severity, and
    the score is capped so keyword-stuffed text cannot exceed the maximum.
    Detected entries are ordered most severe first.
    """

    def __init__(self, settings: Optional[PatternSettings] = None):
        self.settings = settings or get_settings().patterns

    def analyze(self, title: Optional[str], description: Optional[str]) -> PatternAnalysisResult:
        """Detect scam language in a title and description."""
        text = f"{title or ''} {description or ''}"
        hits: List[Tuple[DetectedPattern, int]] = []

        for rule, matchers in _COMPILED:
            found = []
            for phrase, regex in matchers:
                match = regex.search(text)
                if match:
                    found.append((match.group(0), match.start()))

            if not found:
                continue

            severity = rule.severity
            if len(found) > self.settings.escalation_count:
                severity = Severity.HIGH

            for matched_text, position in found:
                hits.append((DetectedPattern(rule.category, severity, matched_text), position))

        hits.sort(key=lambda item: (
            -item[0].severity.rank,
            _CATEGORY_ORDER[item[0].category],
            item[1],
        ))
        detected = [pattern for pattern, _ in hits]

        raw_score = sum(self.settings.weight_for(p.severity.value) for p in detected)
        score = min(raw_score, self.settings.max_score)

        if detected:
            logger.debug(
                f"Detected {len(detected)} scam phrases across "
                f"{len({p.category for p in detected})} categories (score {score})"
            )

        return PatternAnalysisResult(
            has_red_flags=len(detected) > 0,
            detected=detected,
            score=score,
        )


def detect_scam_patterns(
    title: Optional[str],
    description: Optional[str],
    settings: Optional[PatternSettings] = None,
) -> PatternAnalysisResult:
    """Check for common scam patterns in campaign text."""
    return ScamPatternMatcher(settings).analyze(title, description)
