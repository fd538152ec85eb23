"""
Pytest configuration and fixtures for CampaignLens tests.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from campaignlens.config.settings import CampaignLensSettings, get_settings


def future_deadline() -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=1)


class FakeAIClient:
    """AI client double returning a canned response or raising."""

    model_name = "fake-model"

    def __init__(self, response: str = "", error: Exception | None = None, delay: float = 0.0):
        self.response = response
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


class RecordingSink:
    """Report sink that keeps every report it receives."""

    def __init__(self):
        self.reports = []

    def record(self, report) -> None:
        self.reports.append(report)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Ensure each test sees freshly loaded settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Default settings."""
    return CampaignLensSettings()


@pytest.fixture
def valid_campaign():
    """A legitimate, well-described campaign."""
    return {
        "id": "campaign1",
        "title": "Community Garden Project",
        "description": (
            "We are building a sustainable community garden to provide fresh, organic produce "
            "for local families in need. The funds will be used to purchase seeds, gardening tools, "
            "build raised beds, and install an irrigation system. Our team has 5 years of experience "
            "in urban agriculture and has successfully completed 3 similar projects."
        ),
        "goal": 5000,
        "deadline": future_deadline(),
        "beneficiary": "0x123abc",
    }


@pytest.fixture
def scam_campaign():
    """An obvious scam campaign."""
    return {
        "id": "scam1",
        "title": "Act Now! Guaranteed Returns!",
        "description": (
            "Limited time offer! Invest in our revolutionary blockchain platform with guaranteed "
            "100% returns! Don't miss out on this exclusive opportunity! Send crypto immediately! "
            "No refunds! Risk-free investment!"
        ),
        "goal": 500000,
        "deadline": future_deadline(),
        "beneficiary": "0xscam",
    }


@pytest.fixture
def known_fraud_campaigns():
    """Corpus of confirmed fraudulent campaigns."""
    return [
        {
            "id": "fraud1",
            "title": "Get Rich Quick Blockchain Scheme",
            "description": (
                "Invest now and double your money with our revolutionary "
                "quantum blockchain AI platform!"
            ),
            "reason": "Confirmed Ponzi scheme",
        },
        {
            "id": "fraud2",
            "title": "Urgent Medical Emergency",
            "description": "Need immediate funds for emergency surgery. Send crypto now!",
            "reason": "Fake medical emergency scam",
        },
    ]


@pytest.fixture
def fake_ai_client():
    """Factory for AI client doubles."""
    return FakeAIClient


@pytest.fixture
def recording_sink():
    """Sink collecting reports."""
    return RecordingSink()
