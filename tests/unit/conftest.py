"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from content_wizard.facade import GenerationFacade
from content_wizard.llm.base_client import BaseLLMClient
from content_wizard.llm.prompt_builder import PromptBuilder
from content_wizard.resilience.executor import RetryExecutor
from content_wizard.resilience.router import ModelFallbackRouter
from content_wizard.webhook.client import WebhookClient


@pytest.fixture
def no_sleep() -> AsyncMock:
    """Sleep replacement recording requested delays (in seconds) without waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def executor(no_sleep: AsyncMock) -> RetryExecutor:
    return RetryExecutor(sleep=no_sleep)


@pytest.fixture
def mock_llm_client() -> MagicMock:
    """BaseLLMClient double: async methods are AsyncMocks, open_chat is a MagicMock."""
    client = MagicMock(spec=BaseLLMClient)
    client.health_check = AsyncMock(return_value=True)
    return client


@pytest.fixture
def mock_webhook_client() -> MagicMock:
    client = MagicMock(spec=WebhookClient)
    client.configured = True
    return client


@pytest.fixture
def facade(test_settings, mock_llm_client, mock_webhook_client, executor) -> GenerationFacade:
    """Facade wired with mocked clients, real prompts and a non-sleeping router."""
    return GenerationFacade(
        llm_client=mock_llm_client,
        webhook_client=mock_webhook_client,
        prompts=PromptBuilder(),
        settings=test_settings,
        router=ModelFallbackRouter(executor),
    )
