"""
AI text-generation clients.

The detector only depends on the `AIClient` protocol, so any provider
(or a test double) can be injected.

Author: Yobie Benjamin
Date: 2026-10-18
"""

from typing import Any, Dict, Optional, Protocol

import aiohttp
from loguru import logger

from campaignlens.config.settings import AISettings
from campaignlens.exceptions import AIAnalysisError


class AIClient(Protocol):
    """Protocol for text-generation client implementations."""

    model_name: str

    async def generate(self, prompt: str) -> str:
        """Generate a completion for the prompt."""
        ...


class GeminiClient:
    """
    Google Gemini client using the public REST API.

    Example:
        ```python
        client = GeminiClient(api_key=os.environ["GEMINI_API_KEY"])
        text = await client.generate("Analyze this campaign...")
        ```
    """

    def __init__(self, api_key: str, settings: Optional[AISettings] = None):
        self.api_key = api_key
        self.settings = settings or AISettings()
        self.model_name = self.settings.model

    @property
    def url(self) -> str:
        return f"{self.settings.endpoint.rstrip('/')}/{self.model_name}:generateContent"

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.settings.temperature,
                "topK": self.settings.top_k,
                "topP": self.settings.top_p,
                "maxOutputTokens": self.settings.max_output_tokens,
            },
        }

    async def generate(self, prompt: str) -> str:
        """
        Generate content with Gemini.

        Raises:
            AIAnalysisError: On HTTP errors or responses without text
        """
        headers = {"x-goog-api-key": self.api_key}
        timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(
                self.url, json=self._build_payload(prompt), headers=headers
            ) as response:
                if response.status != 200:
                    body = await response.text()
                    logger.warning(f"Gemini API returned HTTP {response.status}")
                    raise AIAnalysisError(
                        f"Gemini API returned HTTP {response.status}",
                        details={"body": body[:500]},
                    )
                data = await response.json()

        try:
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError) as e:
            raise AIAnalysisError("Gemini response contained no text") from e
