"""API test fixtures: app built around a mocked facade."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from content_wizard.facade import GenerationFacade
from content_wizard.main import create_app


@pytest.fixture
def api_facade(test_settings, mock_llm_client, mock_webhook_client) -> MagicMock:
    """GenerationFacade double: every operation is an AsyncMock."""
    facade = MagicMock(spec=GenerationFacade)
    facade.llm_client = mock_llm_client
    facade.webhook_client = mock_webhook_client
    facade.tiers = test_settings.model_tiers()
    facade.close = AsyncMock()
    return facade


@pytest.fixture
def client(test_settings, api_facade) -> TestClient:
    app = create_app(settings=test_settings, facade=api_facade)
    return TestClient(app, raise_server_exceptions=False)
