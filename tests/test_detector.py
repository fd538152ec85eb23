"""
Tests for the campaign fraud detector.
"""

import json
from types import SimpleNamespace

import pytest

from campaignlens.config.settings import AISettings, CampaignLensSettings, ScoringSettings
from campaignlens.core.types import (
    CompletedAIAnalysis,
    KnownFraudCheckResult,
    PatternAnalysisResult,
    Recommendation,
    RiskLevel,
    Severity,
    SkippedAIAnalysis,
    StructureIssue,
    StructureValidationResult,
)
from campaignlens.detector import (
    CampaignFraudDetector,
    calculate_overall_risk_score,
    detect_fraud,
    detect_fraud_batch,
    determine_recommendation,
    determine_risk_level,
    structure_penalty,
)
from campaignlens.llm.schemas import AIAssessment


def ai_response(risk_score=90, recommendation="reject", **extra):
    payload = {
        "riskScore": risk_score,
        "riskLevel": "critical" if risk_score >= 80 else "low",
        "plagiarismDetected": False,
        "unrealisticClaims": [],
        "missingDetails": [],
        "redFlags": [],
        "legitimacyIndicators": [],
        "recommendation": recommendation,
        "reasoning": "Test assessment",
        "confidence": 80,
    }
    payload.update(extra)
    return "```json\n" + json.dumps(payload) + "\n```"


def completed(risk_score, recommendation="review"):
    assessment = AIAssessment(
        risk_score=risk_score,
        risk_level=RiskLevel.HIGH,
        recommendation=recommendation,
    )
    return CompletedAIAnalysis(assessment=assessment, model="fake-model", latency_ms=1.0)


def structure(*severities):
    issues = [StructureIssue("test", severity, "test issue") for severity in severities]
    return StructureValidationResult(
        valid=Severity.HIGH not in severities,
        issues=issues,
        warning_count=len(issues),
    )


def patterns(score):
    return PatternAnalysisResult(has_red_flags=score > 0, detected=[], score=score)


SKIPPED = SkippedAIAnalysis(reason="AI analysis disabled")
NO_MATCH = KnownFraudCheckResult.empty()
WEAK_MATCH = KnownFraudCheckResult(matches_found=True, high_risk=False, matches=[])
STRONG_MATCH = KnownFraudCheckResult(matches_found=True, high_risk=True, matches=[])


class TestRiskScoring:
    """Test score, band and recommendation helpers."""

    def test_structure_penalty(self):
        scoring = ScoringSettings()
        assert structure_penalty(structure(), scoring) == 0
        assert structure_penalty(structure(Severity.HIGH, Severity.MEDIUM, Severity.LOW), scoring) == 40
        assert structure_penalty(structure(*[Severity.HIGH] * 5), scoring) == 100

    def test_score_without_ai(self):
        score = calculate_overall_risk_score(patterns(20), structure(Severity.LOW), SKIPPED, NO_MATCH)
        # 0.65 * 20 + 0.35 * 5
        assert score == 15

    def test_score_with_ai(self):
        score = calculate_overall_risk_score(
            patterns(50), structure(Severity.MEDIUM), completed(80), NO_MATCH
        )
        # 0.4 * 50 + 0.2 * 10 + 0.4 * 80
        assert score == 54

    def test_invalid_structure_floor(self):
        score = calculate_overall_risk_score(patterns(0), structure(Severity.HIGH), SKIPPED, NO_MATCH)
        assert score == 40

    def test_known_fraud_boost(self):
        score = calculate_overall_risk_score(patterns(0), structure(), SKIPPED, WEAK_MATCH)
        assert score == 15

    def test_high_risk_known_fraud_floor(self):
        score = calculate_overall_risk_score(patterns(0), structure(), SKIPPED, STRONG_MATCH)
        assert score == 90

    def test_score_clamped(self):
        score = calculate_overall_risk_score(
            patterns(100),
            structure(*[Severity.HIGH] * 4),
            completed(100),
            WEAK_MATCH,
        )
        assert score == 100

    @pytest.mark.parametrize("score,expected", [
        (0, RiskLevel.LOW),
        (39, RiskLevel.LOW),
        (40, RiskLevel.MEDIUM),
        (59, RiskLevel.MEDIUM),
        (60, RiskLevel.HIGH),
        (79, RiskLevel.HIGH),
        (80, RiskLevel.CRITICAL),
        (100, RiskLevel.CRITICAL),
    ])
    def test_risk_level_bands(self, score, expected):
        assert determine_risk_level(score) == expected

    def test_risk_level_custom_bands(self):
        scoring = ScoringSettings(medium_threshold=20, high_threshold=30, critical_threshold=50)
        assert determine_risk_level(25, scoring) == RiskLevel.MEDIUM
        assert determine_risk_level(50, scoring) == RiskLevel.CRITICAL

    @pytest.mark.parametrize("level,expected", [
        (RiskLevel.LOW, Recommendation.APPROVE),
        (RiskLevel.MEDIUM, Recommendation.REVIEW),
        (RiskLevel.HIGH, Recommendation.REVIEW),
        (RiskLevel.CRITICAL, Recommendation.REJECT),
    ])
    def test_recommendation(self, level, expected):
        assert determine_recommendation(level, NO_MATCH, SKIPPED) == expected

    def test_high_risk_with_known_fraud_rejected(self):
        assert determine_recommendation(RiskLevel.HIGH, STRONG_MATCH, SKIPPED) == Recommendation.REJECT

    def test_high_risk_with_ai_reject(self):
        result = determine_recommendation(RiskLevel.HIGH, NO_MATCH, completed(90, "reject"))
        assert result == Recommendation.REJECT

    def test_medium_risk_ignores_ai_reject(self):
        result = determine_recommendation(RiskLevel.MEDIUM, NO_MATCH, completed(90, "reject"))
        assert result == Recommendation.REVIEW


class TestDetectFraud:
    """Integration tests for detect_fraud."""

    @pytest.mark.asyncio
    async def test_legitimate_campaign(self, valid_campaign):
        report = await detect_fraud(valid_campaign, skip_ai=True)

        assert report.campaign_id == "campaign1"
        assert report.overall_risk_score < 40
        assert report.risk_level == RiskLevel.LOW
        assert report.recommendation == Recommendation.APPROVE
        assert report.error is False
        assert report.timestamp
        assert report.summary.startswith("Overall Risk Score: 0/100 (LOW)")

    @pytest.mark.asyncio
    async def test_scam_campaign(self, scam_campaign):
        report = await detect_fraud(scam_campaign, skip_ai=True)

        assert report.overall_risk_score == 65
        assert report.risk_level == RiskLevel.HIGH
        assert report.recommendation == Recommendation.REVIEW
        assert report.analysis.pattern_analysis.has_red_flags is True
        assert "scam pattern categories" in report.summary

    @pytest.mark.asyncio
    async def test_known_fraud_duplicate(self, scam_campaign):
        corpus = [{
            "id": "fraud-dup",
            "title": scam_campaign["title"],
            "description": scam_campaign["description"],
            "reason": "Duplicate of confirmed scam",
        }]

        report = await detect_fraud(scam_campaign, skip_ai=True, known_fraud_campaigns=corpus)

        assert report.overall_risk_score >= 90
        assert report.risk_level == RiskLevel.CRITICAL
        assert report.recommendation == Recommendation.REJECT
        assert report.analysis.known_fraud_check.high_risk is True
        assert "Matches 1 known fraudulent campaign(s)" in report.summary

    @pytest.mark.asyncio
    async def test_poorly_structured_campaign(self):
        report = await detect_fraud(
            {"id": "poor", "title": "Help", "description": "Need money", "goal": 50000},
            skip_ai=True,
        )

        assert report.analysis.structure_validation.valid is False
        assert report.overall_risk_score == 40
        assert report.risk_level == RiskLevel.MEDIUM
        assert report.recommendation == Recommendation.REVIEW
        assert "high-severity structural issues found" in report.summary

    @pytest.mark.asyncio
    async def test_default_campaign_id(self, valid_campaign):
        draft = {k: v for k, v in valid_campaign.items() if k != "id"}
        report = await detect_fraud(draft, skip_ai=True)
        assert report.campaign_id == "new"

    @pytest.mark.asyncio
    async def test_numeric_campaign_id(self, valid_campaign):
        report = await detect_fraud({**valid_campaign, "id": 42}, skip_ai=True)
        assert report.campaign_id == "42"

    @pytest.mark.asyncio
    async def test_attribute_object_input(self, valid_campaign):
        report = await detect_fraud(SimpleNamespace(**valid_campaign), skip_ai=True)
        assert report.recommendation == Recommendation.APPROVE

    @pytest.mark.asyncio
    async def test_missing_campaign_returns_error_report(self):
        report = await detect_fraud(None, skip_ai=True)

        assert report.error is True
        assert report.campaign_id == "new"
        assert report.overall_risk_score == 40
        assert report.risk_level == RiskLevel.MEDIUM
        assert report.recommendation == Recommendation.REVIEW
        assert report.message == "Campaign data is missing"
        assert report.summary == "Analysis failed: Campaign data is missing. Manual review required."

    @pytest.mark.asyncio
    async def test_malformed_campaign_returns_error_report(self, valid_campaign):
        report = await detect_fraud({**valid_campaign, "goal": "lots"}, skip_ai=True)

        assert report.error is True
        assert report.campaign_id == "campaign1"
        assert report.details["errors"]

    @pytest.mark.asyncio
    async def test_null_values_are_scored(self):
        report = await detect_fraud({"title": None, "description": None, "goal": None}, skip_ai=True)

        assert report.error is False
        assert report.overall_risk_score >= 40

    @pytest.mark.asyncio
    async def test_report_is_json_serializable(self, scam_campaign, known_fraud_campaigns):
        report = await detect_fraud(
            scam_campaign, skip_ai=True, known_fraud_campaigns=known_fraud_campaigns
        )
        data = json.loads(json.dumps(report.to_dict()))

        assert data["campaign_id"] == "scam1"
        assert data["risk_level"] == "high"
        assert set(data["analysis"]) == {
            "pattern_analysis",
            "structure_validation",
            "ai_analysis",
            "known_fraud_check",
        }
        assert "error" not in data

    @pytest.mark.asyncio
    async def test_score_bounded(self, scam_campaign):
        report = await detect_fraud(scam_campaign, skip_ai=True)
        assert 0 <= report.overall_risk_score <= 100


class TestAIAnalysis:
    """Test the optional AI opinion."""

    @pytest.mark.asyncio
    async def test_skip_ai(self, valid_campaign, fake_ai_client):
        client = fake_ai_client(response=ai_response())
        report = await detect_fraud(valid_campaign, skip_ai=True, ai_client=client)

        assert report.analysis.ai_analysis.skipped is True
        assert report.analysis.ai_analysis.reason == "AI analysis disabled"
        assert client.prompts == []

    @pytest.mark.asyncio
    async def test_no_api_key(self, valid_campaign):
        report = await detect_fraud(valid_campaign)

        assert report.analysis.ai_analysis.skipped is True
        assert report.analysis.ai_analysis.reason == "No API key provided"

    @pytest.mark.asyncio
    async def test_placeholder_api_key(self, valid_campaign):
        report = await detect_fraud(valid_campaign, api_key="your_gemini_api_key_here")
        assert report.analysis.ai_analysis.reason == "No API key provided"

    @pytest.mark.asyncio
    async def test_injected_client_used_without_key(self, valid_campaign, fake_ai_client):
        client = fake_ai_client(response=ai_response(risk_score=90, recommendation="reject"))
        report = await detect_fraud(valid_campaign, ai_client=client)

        ai = report.analysis.ai_analysis
        assert ai.skipped is False
        assert ai.model == "fake-model"
        assert ai.assessment.risk_score == 90
        assert "Community Garden Project" in client.prompts[0]
        # 0.4 * 90
        assert report.overall_risk_score == 36
        assert report.recommendation == Recommendation.APPROVE

    @pytest.mark.asyncio
    async def test_ai_reject_escalates_high_risk(self, scam_campaign, fake_ai_client):
        client = fake_ai_client(response=ai_response(risk_score=90, recommendation="reject"))
        report = await detect_fraud(scam_campaign, ai_client=client)

        assert report.overall_risk_score == 76
        assert report.risk_level == RiskLevel.HIGH
        assert report.recommendation == Recommendation.REJECT

    @pytest.mark.asyncio
    async def test_ai_findings_in_summary(self, valid_campaign, fake_ai_client):
        client = fake_ai_client(response=ai_response(
            risk_score=10,
            recommendation="approve",
            plagiarismDetected=True,
            unrealisticClaims=["Triple yield", "Zero cost"],
        ))
        report = await detect_fraud(valid_campaign, ai_client=client)

        assert "Possible plagiarized content detected" in report.summary
        assert "2 unrealistic claims identified" in report.summary

    @pytest.mark.asyncio
    async def test_ai_failure_degrades(self, valid_campaign, fake_ai_client):
        client = fake_ai_client(error=RuntimeError("boom"))
        report = await detect_fraud(valid_campaign, ai_client=client)

        assert report.error is False
        assert report.analysis.ai_analysis.skipped is True
        assert report.analysis.ai_analysis.reason == "AI analysis failed: RuntimeError"
        assert report.recommendation == Recommendation.APPROVE

    @pytest.mark.asyncio
    async def test_ai_malformed_response_degrades(self, valid_campaign, fake_ai_client):
        client = fake_ai_client(response="I think this campaign looks fine.")
        report = await detect_fraud(valid_campaign, ai_client=client)

        assert report.analysis.ai_analysis.skipped is True
        assert report.analysis.ai_analysis.reason == (
            "AI analysis failed: AI response contained no JSON object"
        )

    @pytest.mark.asyncio
    async def test_ai_timeout_degrades(self, valid_campaign, fake_ai_client):
        settings = CampaignLensSettings(ai=AISettings(timeout_seconds=0.05))
        client = fake_ai_client(response=ai_response(), delay=1.0)

        report = await detect_fraud(valid_campaign, ai_client=client, settings=settings)

        assert report.analysis.ai_analysis.skipped is True
        assert report.analysis.ai_analysis.reason == "AI analysis timed out after 0.05s"


class TestCampaignFraudDetector:
    """Test detector wiring: batches and sinks."""

    @pytest.mark.asyncio
    async def test_batch_preserves_order(self, valid_campaign, scam_campaign):
        reports = await detect_fraud_batch([scam_campaign, None, valid_campaign], skip_ai=True)

        assert [r.campaign_id for r in reports] == ["scam1", "new", "campaign1"]
        assert reports[1].error is True
        assert reports[2].recommendation == Recommendation.APPROVE

    @pytest.mark.asyncio
    async def test_sink_receives_reports(self, valid_campaign, recording_sink):
        detector = CampaignFraudDetector(sinks=[recording_sink])

        report = await detector.detect(valid_campaign, skip_ai=True)
        error_report = await detector.detect(None)

        assert recording_sink.reports == [report, error_report]

    @pytest.mark.asyncio
    async def test_failing_sink_does_not_break_detection(self, valid_campaign, recording_sink):
        class FailingSink:
            def record(self, report):
                raise RuntimeError("sink down")

        detector = CampaignFraudDetector(sinks=[FailingSink(), recording_sink])
        report = await detector.detect(valid_campaign, skip_ai=True)

        assert report.error is False
        assert recording_sink.reports == [report]

    @pytest.mark.asyncio
    async def test_custom_settings(self, valid_campaign):
        settings = CampaignLensSettings(
            scoring=ScoringSettings(medium_threshold=1, high_threshold=2, critical_threshold=3)
        )
        detector = CampaignFraudDetector(settings=settings, sinks=[])

        report = await detector.detect(
            {**valid_campaign, "beneficiary": "", "goal": 2_000_000}, skip_ai=True
        )

        # two medium issues: 0.35 * 20
        assert report.overall_risk_score == 7
        assert report.risk_level == RiskLevel.CRITICAL
