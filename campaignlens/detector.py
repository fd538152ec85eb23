"""
Campaign fraud detector: merges all analyses into a single risk verdict.

Author: Yobie Benjamin
Date: 2026-10-18
"""

import asyncio
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np
from loguru import logger

from campaignlens.analyzers.known_fraud import KnownFraudChecker
from campaignlens.analyzers.patterns import ScamPatternMatcher
from campaignlens.analyzers.structure import CampaignStructureValidator
from campaignlens.config.settings import CampaignLensSettings, ScoringSettings, get_settings
from campaignlens.core.types import (
    AIAnalysis,
    CampaignDraft,
    FraudReport,
    KnownFraudCheckResult,
    PatternAnalysisResult,
    Recommendation,
    ReportAnalysis,
    RiskLevel,
    Severity,
    SkippedAIAnalysis,
    StructureIssue,
    StructureValidationResult,
)
from campaignlens.exceptions import InvalidCampaignError
from campaignlens.llm.analyzer import AIFraudAnalyzer
from campaignlens.llm.client import AIClient, GeminiClient
from campaignlens.observability.sinks import (
    LoggingReportSink,
    ReportSink,
    get_prometheus_sink,
)


def structure_penalty(structure: StructureValidationResult, scoring: ScoringSettings) -> int:
    """Penalty points (0-100) for the structural issues of a draft."""
    penalty = (
        structure.count(Severity.HIGH) * scoring.high_issue_penalty
        + structure.count(Severity.MEDIUM) * scoring.medium_issue_penalty
        + structure.count(Severity.LOW) * scoring.low_issue_penalty
    )
    return min(penalty, 100)


def calculate_overall_risk_score(
    pattern_analysis: PatternAnalysisResult,
    structure_validation: StructureValidationResult,
    ai_analysis: AIAnalysis,
    known_fraud_check: KnownFraudCheckResult,
    scoring: Optional[ScoringSettings] = None,
) -> int:
    """
    Calculate overall fraud risk score.

    Pattern score and structure penalty are blended with fixed weights; when
    an AI opinion is available its score joins the blend. A structurally
    invalid draft never scores below the medium band, a near-identical
    known-fraud match lifts the score to the known-fraud floor, and a
    weaker match adds a fixed boost. The result is clamped to [0, 100].
    """
    scoring = scoring or get_settings().scoring
    penalty = structure_penalty(structure_validation, scoring)

    if ai_analysis.skipped:
        components = np.array([pattern_analysis.score, penalty], dtype=float)
        weights = np.array([scoring.pattern_weight, scoring.structure_weight])
    else:
        components = np.array(
            [pattern_analysis.score, penalty, ai_analysis.assessment.risk_score],
            dtype=float,
        )
        weights = np.array([
            scoring.ai_pattern_weight,
            scoring.ai_structure_weight,
            scoring.ai_weight,
        ])

    score = float(np.dot(components, weights))

    if not structure_validation.valid:
        score = max(score, scoring.medium_threshold)

    if known_fraud_check.high_risk:
        score = max(score, scoring.known_fraud_floor)
    elif known_fraud_check.matches_found:
        score += scoring.known_fraud_boost

    return int(np.clip(round(score), 0, 100))


def determine_risk_level(score: float, scoring: Optional[ScoringSettings] = None) -> RiskLevel:
    """Map a risk score onto its band (lower edges inclusive)."""
    scoring = scoring or get_settings().scoring
    if score >= scoring.critical_threshold:
        return RiskLevel.CRITICAL
    if score >= scoring.high_threshold:
        return RiskLevel.HIGH
    if score >= scoring.medium_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def determine_recommendation(
    risk_level: RiskLevel,
    known_fraud_check: Optional[KnownFraudCheckResult] = None,
    ai_analysis: Optional[AIAnalysis] = None,
) -> Recommendation:
    """
    Map a risk level onto a moderation action.

    Critical risk is rejected. High risk goes to review unless it duplicates
    known fraud or the AI opinion itself recommends rejection.
    """
    if risk_level == RiskLevel.CRITICAL:
        return Recommendation.REJECT
    if risk_level == RiskLevel.HIGH:
        if known_fraud_check is not None and known_fraud_check.high_risk:
            return Recommendation.REJECT
        if (
            ai_analysis is not None
            and not ai_analysis.skipped
            and ai_analysis.assessment.recommendation == Recommendation.REJECT
        ):
            return Recommendation.REJECT
        return Recommendation.REVIEW
    if risk_level == RiskLevel.MEDIUM:
        return Recommendation.REVIEW
    return Recommendation.APPROVE


def generate_summary(
    score: int,
    risk_level: RiskLevel,
    analysis: ReportAnalysis,
) -> str:
    """Generate human-readable summary."""
    lines = [f"Overall Risk Score: {score}/100 ({risk_level.value.upper()})"]

    patterns = analysis.pattern_analysis
    if patterns.has_red_flags:
        lines.append(
            f"Detected {len(patterns.categories)} scam pattern categories "
            f"({len(patterns.detected)} phrases)"
        )

    high_issues = analysis.structure_validation.count(Severity.HIGH)
    if high_issues:
        lines.append(f"{high_issues} high-severity structural issues found")

    ai_analysis = analysis.ai_analysis
    if not ai_analysis.skipped:
        if ai_analysis.assessment.plagiarism_detected:
            lines.append("Possible plagiarized content detected")
        if ai_analysis.assessment.unrealistic_claims:
            lines.append(
                f"{len(ai_analysis.assessment.unrealistic_claims)} unrealistic claims identified"
            )

    fraud_check = analysis.known_fraud_check
    if fraud_check.matches_found:
        lines.append(f"Matches {fraud_check.match_count} known fraudulent campaign(s)")

    return "\n".join(lines)


class CampaignFraudDetector:
    """
    Evaluates campaign drafts for fraud risk.

    Runs scam-language detection, structural validation and known-fraud
    matching, optionally asks an AI model for an opinion, and merges the
    results into a FraudReport. The detector holds no per-call state, so
    one instance can serve concurrent analyses.

    Example:
        ```python
        detector = CampaignFraudDetector()
        report = await detector.detect(draft, skip_ai=True)
        print(report.risk_level, report.recommendation)
        ```
    """

    def __init__(
        self,
        settings: Optional[CampaignLensSettings] = None,
        ai_client: Optional[AIClient] = None,
        sinks: Optional[Sequence[ReportSink]] = None,
    ):
        """
        Initialize detector.

        Args:
            settings: Settings (defaults to the cached global settings)
            ai_client: AI client to use instead of Gemini; used whenever AI is not skipped
            sinks: Report sinks (defaults to a logging sink, plus the global
                Prometheus sink when metrics are enabled)
        """
        self.settings = settings or get_settings()
        self.pattern_matcher = ScamPatternMatcher(self.settings.patterns)
        self.structure_validator = CampaignStructureValidator(self.settings.structure)
        self.known_fraud_checker = KnownFraudChecker(self.settings.known_fraud)
        self.ai_client = ai_client

        if sinks is not None:
            self.sinks: List[ReportSink] = list(sinks)
        else:
            self.sinks = [LoggingReportSink()]
            if self.settings.observability.enable_metrics:
                self.sinks.append(get_prometheus_sink())

    async def detect(
        self,
        campaign_data: Any,
        skip_ai: bool = False,
        api_key: Optional[str] = None,
        known_fraud_campaigns: Optional[Iterable[Any]] = None,
    ) -> FraudReport:
        """
        Analyze a campaign draft.

        Never raises: malformed input and unexpected failures produce an
        error report recommending manual review.

        Args:
            campaign_data: CampaignDraft, mapping, or object with campaign fields
            skip_ai: Skip the AI opinion
            api_key: Gemini API key (ignored when an AI client was injected)
            known_fraud_campaigns: Corpus of confirmed fraudulent campaigns

        Returns:
            Fraud report
        """
        start_time = time.time()

        try:
            draft = CampaignDraft.from_input(campaign_data)
        except InvalidCampaignError as e:
            logger.warning(f"Rejecting malformed campaign input: {e.message}")
            report = self._error_report(_campaign_id(campaign_data), e.message, e.details)
            self._emit(report)
            return report

        try:
            report = await self._analyze(draft, skip_ai, api_key, known_fraud_campaigns)
        except Exception as e:
            logger.exception(f"Fraud detection analysis failed for campaign {draft.id or 'new'}")
            report = self._error_report(
                draft.id or "new",
                "Fraud detection analysis failed",
                {"error": str(e)},
            )

        logger.debug(f"Campaign analysis took {(time.time() - start_time) * 1000:.1f}ms")
        self._emit(report)
        return report

    async def detect_batch(
        self,
        campaigns: Iterable[Any],
        skip_ai: bool = False,
        api_key: Optional[str] = None,
        known_fraud_campaigns: Optional[Iterable[Any]] = None,
    ) -> List[FraudReport]:
        """Analyze several drafts concurrently, preserving input order."""
        corpus = list(known_fraud_campaigns or [])
        return list(await asyncio.gather(*(
            self.detect(campaign, skip_ai=skip_ai, api_key=api_key, known_fraud_campaigns=corpus)
            for campaign in campaigns
        )))

    async def _analyze(
        self,
        draft: CampaignDraft,
        skip_ai: bool,
        api_key: Optional[str],
        known_fraud_campaigns: Optional[Iterable[Any]],
    ) -> FraudReport:
        scoring = self.settings.scoring

        pattern_analysis = self.pattern_matcher.analyze(draft.title, draft.description)
        structure_validation = self.structure_validator.validate(draft)
        known_fraud_check = self.known_fraud_checker.check(draft, known_fraud_campaigns)
        ai_analysis = await self._run_ai(draft, skip_ai, api_key)

        analysis = ReportAnalysis(
            pattern_analysis=pattern_analysis,
            structure_validation=structure_validation,
            ai_analysis=ai_analysis,
            known_fraud_check=known_fraud_check,
        )

        score = calculate_overall_risk_score(
            pattern_analysis, structure_validation, ai_analysis, known_fraud_check, scoring
        )
        risk_level = determine_risk_level(score, scoring)
        recommendation = determine_recommendation(risk_level, known_fraud_check, ai_analysis)

        return FraudReport(
            campaign_id=draft.id or "new",
            timestamp=_now_iso(),
            overall_risk_score=score,
            risk_level=risk_level,
            recommendation=recommendation,
            analysis=analysis,
            summary=generate_summary(score, risk_level, analysis),
        )

    async def _run_ai(
        self,
        draft: CampaignDraft,
        skip_ai: bool,
        api_key: Optional[str],
    ) -> AIAnalysis:
        if skip_ai:
            return SkippedAIAnalysis(reason="AI analysis disabled")

        client = self.ai_client
        if client is None:
            if not self.settings.ai.is_usable_key(api_key):
                return SkippedAIAnalysis(reason="No API key provided")
            client = GeminiClient(api_key, self.settings.ai)

        return await AIFraudAnalyzer(client, self.settings.ai).analyze(draft)

    def _error_report(self, campaign_id: str, message: str, details: dict) -> FraudReport:
        scoring = self.settings.scoring
        analysis = ReportAnalysis(
            pattern_analysis=PatternAnalysisResult.empty(),
            structure_validation=StructureValidationResult(
                valid=False,
                issues=[StructureIssue("input", Severity.HIGH, message)],
                warning_count=1,
            ),
            ai_analysis=SkippedAIAnalysis(reason="Campaign data could not be analyzed"),
            known_fraud_check=KnownFraudCheckResult.empty(),
        )
        return FraudReport(
            campaign_id=campaign_id,
            timestamp=_now_iso(),
            overall_risk_score=scoring.medium_threshold,
            risk_level=RiskLevel.MEDIUM,
            recommendation=Recommendation.REVIEW,
            analysis=analysis,
            summary=f"Analysis failed: {message}. Manual review required.",
            error=True,
            message=message,
            details=details,
        )

    def _emit(self, report: FraudReport) -> None:
        for sink in self.sinks:
            try:
                sink.record(report)
            except Exception:
                logger.exception(f"Report sink {type(sink).__name__} failed")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _campaign_id(campaign_data: Any) -> str:
    if isinstance(campaign_data, Mapping) and campaign_data.get("id") is not None:
        return str(campaign_data["id"])
    return "new"


async def detect_fraud(
    campaign_data: Any,
    skip_ai: bool = False,
    api_key: Optional[str] = None,
    known_fraud_campaigns: Optional[Iterable[Any]] = None,
    ai_client: Optional[AIClient] = None,
    settings: Optional[CampaignLensSettings] = None,
    sinks: Optional[Sequence[ReportSink]] = None,
) -> FraudReport:
    """Main fraud detection entry point."""
    detector = CampaignFraudDetector(settings=settings, ai_client=ai_client, sinks=sinks)
    return await detector.detect(
        campaign_data,
        skip_ai=skip_ai,
        api_key=api_key,
        known_fraud_campaigns=known_fraud_campaigns,
    )


async def detect_fraud_batch(
    campaigns: Iterable[Any],
    skip_ai: bool = False,
    api_key: Optional[str] = None,
    known_fraud_campaigns: Optional[Iterable[Any]] = None,
    ai_client: Optional[AIClient] = None,
    settings: Optional[CampaignLensSettings] = None,
    sinks: Optional[Sequence[ReportSink]] = None,
) -> List[FraudReport]:
    """Analyze several campaigns concurrently."""
    detector = CampaignFraudDetector(settings=settings, ai_client=ai_client, sinks=sinks)
    return await detector.detect_batch(
        campaigns,
        skip_ai=skip_ai,
        api_key=api_key,
        known_fraud_campaigns=known_fraud_campaigns,
    )
