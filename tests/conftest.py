"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from content_wizard.config import Settings
from content_wizard.models.records import SiteContext


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Override specific settings in individual tests via model_copy:
        def test_something(test_settings):
            settings = test_settings.model_copy(update={"WEBHOOK_URL": ""})
    """
    return Settings(
        # === Application ===
        APP_NAME="Content Wizard (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Gemini ===
        GEMINI_API_KEY="test-key",
        PRIMARY_MODEL="primary-model",
        FALLBACK_MODEL="fallback-model",
        FAST_MODEL="fast-model",
        FAST_FALLBACK_MODEL="fast-fallback-model",
        IMAGE_MODEL="image-model",
        IMAGE_FALLBACK_MODEL="imagen-model",
        TTS_MODEL="tts-model",

        # === Retry & Fallback ===
        PRIMARY_MAX_RETRIES=1,
        PRIMARY_BASE_DELAY_MS=1000,
        FALLBACK_MAX_RETRIES=3,
        FALLBACK_BASE_DELAY_MS=2000,

        # === Webhook tool ===
        WEBHOOK_URL="http://webhook.test/hook",

        # === Monitoring ===
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def site() -> SiteContext:
    """Wizard setup used by webhook-backed operations."""
    return SiteContext(website_url="https://example.com", country="us", language="en")
