"""
Pydantic schema for the structured AI opinion on a campaign.

Author: Yobie Benjamin
Date: 2026-10-18
"""

import json
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from campaignlens.core.types import Recommendation, RiskLevel
from campaignlens.exceptions import AIAnalysisError

_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")


class AIAssessment(BaseModel):
    """
    Structured fraud opinion returned by the AI model.

    The model is asked for camelCase JSON; fields also accept their
    snake_case names.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    risk_score: float = Field(..., ge=0, le=100, alias="riskScore")
    risk_level: RiskLevel = Field(..., alias="riskLevel")
    plagiarism_detected: bool = Field(default=False, alias="plagiarismDetected")
    unrealistic_claims: list[str] = Field(default_factory=list, alias="unrealisticClaims")
    missing_details: list[str] = Field(default_factory=list, alias="missingDetails")
    red_flags: list[str] = Field(default_factory=list, alias="redFlags")
    legitimacy_indicators: list[str] = Field(
        default_factory=list, alias="legitimacyIndicators"
    )
    recommendation: Recommendation = Recommendation.REVIEW
    reasoning: str = ""
    confidence: float = Field(default=50, ge=0, le=100)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary with snake_case keys."""
        return self.model_dump(mode="json")


def parse_ai_response(text: str) -> AIAssessment:
    """
    Extract and validate the JSON object in a model response.

    Markdown code fences and surrounding prose are ignored.

    Raises:
        AIAnalysisError: If no valid assessment can be extracted
    """
    match = _JSON_BLOCK.search(text or "")
    if not match:
        raise AIAnalysisError("AI response contained no JSON object")

    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise AIAnalysisError(f"AI response JSON is malformed: {e.msg}") from e

    if not isinstance(payload, dict):
        raise AIAnalysisError("AI response JSON is not an object")

    try:
        return AIAssessment.model_validate(payload)
    except ValidationError as e:
        raise AIAnalysisError(
            "AI response does not match the assessment schema",
            details={"errors": e.errors(include_url=False, include_input=False)},
        ) from e
