"""
AI opinion support: client protocol, Gemini client, schema and analyzer.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from campaignlens.llm.analyzer import AIFraudAnalyzer, build_prompt
from campaignlens.llm.client import AIClient, GeminiClient
from campaignlens.llm.schemas import AIAssessment, parse_ai_response

__all__ = [
    "AIClient",
    "GeminiClient",
    "AIAssessment",
    "parse_ai_response",
    "AIFraudAnalyzer",
    "build_prompt",
]
