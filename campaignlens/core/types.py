"""
Type definitions for campaign fraud analysis.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from campaignlens.exceptions import InvalidCampaignError

if TYPE_CHECKING:
    from campaignlens.llm.schemas import AIAssessment


class Severity(str, Enum):
    """Severity of a single finding."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.LOW: 0, Severity.MEDIUM: 1, Severity.HIGH: 2}


class RiskLevel(str, Enum):
    """Coarse risk bucket derived from the overall score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Recommendation(str, Enum):
    """Action a moderation workflow should take."""

    APPROVE = "approve"
    REVIEW = "review"
    REJECT = "reject"


class PatternCategory(str, Enum):
    """Categories of scam language."""

    URGENT_LANGUAGE = "urgent_language"
    UNREALISTIC_PROMISES = "unrealistic_promises"
    TECHNICAL_BUZZWORDS = "technical_buzzwords"
    SUSPICIOUS_REQUESTS = "suspicious_requests"
    PRESSURE_TACTICS = "pressure_tactics"


class CampaignDraft(BaseModel):
    """
    A campaign submission awaiting acceptance.

    Missing text fields are treated as empty strings and a missing goal as
    zero, so sparse drafts are still scored. Values that cannot be coerced
    (a non-numeric goal, an unparseable deadline) make the draft invalid.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    goal: float = Field(default=0.0, allow_inf_nan=False)
    deadline: Optional[datetime] = None
    beneficiary: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("title", "description", "beneficiary", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("goal", mode="before")
    @classmethod
    def none_to_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @property
    def text(self) -> str:
        """Title and description joined for lexical scans."""
        return f"{self.title} {self.description}"

    @classmethod
    def from_input(cls, data: Any) -> "CampaignDraft":
        """
        Build a draft from a mapping, a draft, or an attribute-bearing object.

        Raises:
            InvalidCampaignError: If the input is missing or malformed
        """
        if isinstance(data, cls):
            return data
        if data is None:
            raise InvalidCampaignError("Campaign data is missing")

        try:
            if isinstance(data, Mapping):
                return cls.model_validate(dict(data))
            if hasattr(data, "title") and hasattr(data, "description"):
                return cls.model_validate(data, from_attributes=True)
        except ValidationError as e:
            raise InvalidCampaignError(
                "Campaign data is malformed",
                details={
                    "errors": e.errors(
                        include_url=False, include_context=False, include_input=False
                    )
                },
            ) from e

        raise InvalidCampaignError(
            f"Campaign data must be a mapping, got {type(data).__name__}"
        )


@dataclass(frozen=True)
class KnownFraudEntry:
    """A previously confirmed fraudulent campaign."""

    id: str
    title: str
    description: str
    reason: str = "Previously flagged as fraudulent"

    @classmethod
    def from_input(cls, data: Any) -> "KnownFraudEntry":
        """Create from a mapping or an existing entry."""
        if isinstance(data, cls):
            return data
        if not isinstance(data, Mapping):
            raise InvalidCampaignError(
                f"Known fraud entry must be a mapping, got {type(data).__name__}"
            )

        texts = {}
        for key in ("title", "description"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise InvalidCampaignError(
                    f"Known fraud entry {key} must be text, got {type(value).__name__}",
                    details={"id": data.get("id")},
                )
            texts[key] = value or ""

        return cls(
            id=str(data.get("id", "")),
            title=texts["title"],
            description=texts["description"],
            reason=str(data.get("reason") or "Previously flagged as fraudulent"),
        )


@dataclass
class DetectedPattern:
    """A single scam-language hit."""

    category: PatternCategory
    severity: Severity
    matched_text: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "matched_text": self.matched_text,
        }


@dataclass
class PatternAnalysisResult:
    """Result of scanning title and description for scam language."""

    has_red_flags: bool
    detected: List[DetectedPattern]
    score: int

    @property
    def categories(self) -> List[PatternCategory]:
        """Distinct categories hit, in report order."""
        seen: List[PatternCategory] = []
        for pattern in self.detected:
            if pattern.category not in seen:
                seen.append(pattern.category)
        return seen

    @classmethod
    def empty(cls) -> "PatternAnalysisResult":
        return cls(has_red_flags=False, detected=[], score=0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "has_red_flags": self.has_red_flags,
            "detected": [p.to_dict() for p in self.detected],
            "score": self.score,
        }


@dataclass
class StructureIssue:
    """A structural or formatting problem with a draft."""

    type: str
    severity: Severity
    message: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type,
            "severity": self.severity.value,
            "message": self.message,
        }


@dataclass
class StructureValidationResult:
    """Result of structural validation."""

    valid: bool
    issues: List[StructureIssue]
    warning_count: int

    def count(self, severity: Severity) -> int:
        """Number of issues at the given severity."""
        return sum(1 for issue in self.issues if issue.severity == severity)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "valid": self.valid,
            "issues": [i.to_dict() for i in self.issues],
            "warning_count": self.warning_count,
        }


@dataclass
class FraudMatch:
    """A known-fraud entry resembling the candidate."""

    entry_id: str
    title_similarity: str
    description_similarity: str
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "entry_id": self.entry_id,
            "title_similarity": self.title_similarity,
            "description_similarity": self.description_similarity,
            "reason": self.reason,
        }


@dataclass
class KnownFraudCheckResult:
    """Result of comparing a draft against the known-fraud corpus."""

    matches_found: bool
    high_risk: bool
    matches: List[FraudMatch]

    @property
    def match_count(self) -> int:
        return len(self.matches)

    @classmethod
    def empty(cls) -> "KnownFraudCheckResult":
        return cls(matches_found=False, high_risk=False, matches=[])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "matches_found": self.matches_found,
            "match_count": self.match_count,
            "matches": [m.to_dict() for m in self.matches],
            "high_risk": self.high_risk,
        }


@dataclass
class SkippedAIAnalysis:
    """AI opinion was not used for this report."""

    reason: str
    skipped: Literal[True] = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"skipped": True, "reason": self.reason}


@dataclass
class CompletedAIAnalysis:
    """AI opinion obtained and parsed successfully."""

    assessment: "AIAssessment"
    model: str
    latency_ms: float
    skipped: Literal[False] = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "skipped": False,
            "model": self.model,
            "latency_ms": self.latency_ms,
            **self.assessment.to_dict(),
        }


AIAnalysis = Union[SkippedAIAnalysis, CompletedAIAnalysis]


@dataclass
class ReportAnalysis:
    """The four sub-analyses behind a report."""

    pattern_analysis: PatternAnalysisResult
    structure_validation: StructureValidationResult
    ai_analysis: AIAnalysis
    known_fraud_check: KnownFraudCheckResult

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "pattern_analysis": self.pattern_analysis.to_dict(),
            "structure_validation": self.structure_validation.to_dict(),
            "ai_analysis": self.ai_analysis.to_dict(),
            "known_fraud_check": self.known_fraud_check.to_dict(),
        }


@dataclass
class FraudReport:
    """Final risk verdict for a campaign draft."""

    campaign_id: str
    timestamp: str
    overall_risk_score: int
    risk_level: RiskLevel
    recommendation: Recommendation
    analysis: ReportAnalysis
    summary: str
    error: bool = False
    message: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            "campaign_id": self.campaign_id,
            "timestamp": self.timestamp,
            "overall_risk_score": self.overall_risk_score,
            "risk_level": self.risk_level.value,
            "recommendation": self.recommendation.value,
            "analysis": self.analysis.to_dict(),
            "summary": self.summary,
        }
        if self.error:
            data["error"] = True
            data["message"] = self.message
            data["details"] = self.details
        return data
