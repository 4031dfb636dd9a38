"""Integration test fixtures (service checks and prerequisites).

Integration tests call the live Gemini API and are skipped unless
GEMINI_API_KEY is set in the environment.
"""

import os

import pytest
import pytest_asyncio

from content_wizard.config import Settings
from content_wizard.facade import GenerationFacade


@pytest.fixture(scope="session")
def gemini_api_key() -> str:
    key = os.environ.get("GEMINI_API_KEY", "")
    if not key:
        pytest.skip("GEMINI_API_KEY not set")
    return key


@pytest_asyncio.fixture
async def live_facade(gemini_api_key):
    """Facade against the real API; webhook disabled so only Gemini is exercised."""
    settings = Settings(GEMINI_API_KEY=gemini_api_key, WEBHOOK_URL="", PROMETHEUS_ENABLED=False)
    facade = GenerationFacade.from_settings(settings)
    yield facade
    await facade.close()
