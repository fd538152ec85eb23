"""
AI-assisted campaign assessment.

Author: Yobie Benjamin
Date: 2026-10-18
"""

import asyncio
import time
from typing import Optional

import aiohttp
from loguru import logger

from campaignlens.config.settings import AISettings
from campaignlens.core.types import (
    AIAnalysis,
    CampaignDraft,
    CompletedAIAnalysis,
    SkippedAIAnalysis,
)
from campaignlens.exceptions import AIAnalysisError
from campaignlens.llm.client import AIClient
from campaignlens.llm.schemas import AIAssessment, parse_ai_response

PROMPT_TEMPLATE = """You are a fraud detection expert reviewing crowdfunding campaigns.
Analyze the following campaign for potential fraud indicators.

Campaign:
- Title: {title}
- Description: {description}
- Funding goal: {goal}
- Deadline: {deadline}
- Beneficiary: {beneficiary}

Look for copied or templated content, unrealistic technical claims, emotional
manipulation, vague or missing implementation details, narrative
inconsistencies and social engineering.

Respond with a single JSON object:
{{
  "riskScore": <0-100>,
  "riskLevel": "low" | "medium" | "high" | "critical",
  "plagiarismDetected": <boolean>,
  "unrealisticClaims": [<strings>],
  "missingDetails": [<strings>],
  "redFlags": [<strings>],
  "legitimacyIndicators": [<strings>],
  "recommendation": "approve" | "review" | "reject",
  "reasoning": "<explanation>",
  "confidence": <0-100>
}}"""


def build_prompt(draft: CampaignDraft) -> str:
    """Render the assessment prompt for a draft."""
    return PROMPT_TEMPLATE.format(
        title=draft.title,
        description=draft.description,
        goal=draft.goal,
        deadline=draft.deadline.isoformat() if draft.deadline else "not set",
        beneficiary=draft.beneficiary or "not set",
    )


class AIFraudAnalyzer:
    """
    Obtains an AI opinion on a draft, bounded by a timeout.

    The opinion is an enhancement: any failure (transport, timeout,
    unusable output) yields a skipped analysis instead of an error.
    """

    def __init__(self, client: AIClient, settings: Optional[AISettings] = None):
        self.client = client
        self.settings = settings or AISettings()

    async def assess(self, draft: CampaignDraft) -> AIAssessment:
        """
        Ask the model for an assessment.

        Raises:
            AIAnalysisError: If the model output cannot be used
            asyncio.TimeoutError: If the model does not answer in time
        """
        text = await asyncio.wait_for(
            self.client.generate(build_prompt(draft)),
            timeout=self.settings.timeout_seconds,
        )
        return parse_ai_response(text)

    async def analyze(self, draft: CampaignDraft) -> AIAnalysis:
        """Run the assessment, degrading to a skipped analysis on failure."""
        start_time = time.time()
        model = getattr(self.client, "model_name", "unknown")

        try:
            assessment = await self.assess(draft)
        except asyncio.TimeoutError:
            logger.warning(f"AI analysis timed out after {self.settings.timeout_seconds}s")
            return SkippedAIAnalysis(
                reason=f"AI analysis timed out after {self.settings.timeout_seconds:g}s"
            )
        except AIAnalysisError as e:
            logger.warning(f"AI analysis unusable: {e.message}")
            return SkippedAIAnalysis(reason=f"AI analysis failed: {e.message}")
        except aiohttp.ClientError as e:
            logger.warning(f"AI analysis transport error: {e}")
            return SkippedAIAnalysis(reason=f"AI analysis failed: {e}")
        except Exception as e:
            logger.warning(f"AI analysis error: {e!r}")
            return SkippedAIAnalysis(reason=f"AI analysis failed: {type(e).__name__}")

        latency_ms = (time.time() - start_time) * 1000
        logger.debug(f"AI analysis by {model} finished in {latency_ms:.1f}ms")
        return CompletedAIAnalysis(assessment=assessment, model=model, latency_ms=latency_ms)
