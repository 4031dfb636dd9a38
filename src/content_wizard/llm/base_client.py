"""
Abstract base client for generative model inference.

Defines the interface the facade talks to. The concrete implementation
(GeminiClient) wraps google-genai; tests substitute fakes. Keeping the SDK
behind this seam means the facade never touches SDK response objects.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import structlog

from content_wizard.llm.streaming import TextStream
from content_wizard.models.llm_models import GenerationRequest, GenerationResult, ToolFunction
from content_wizard.models.records import ChatTurn

logger = structlog.get_logger(__name__)


class ChatSession(ABC):
    """A multi-turn conversation bound to one model."""

    @abstractmethod
    async def send(self, message: str) -> GenerationResult:
        pass

    @abstractmethod
    async def send_function_response(self, name: str, response: Dict[str, Any]) -> GenerationResult:
        """Return the result of a function the model asked us to call."""
        pass


class BaseLLMClient(ABC):
    """
    Abstract base class for model inference clients.

    Responsibilities:
    - Send generation requests to the model service
    - Convert responses into GenerationResult
    - Apply the per-call transport timeout

    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Parsing/normalizing output (that's the parsing package's job)
    - Retry or model fallback (that's the resilience package's job);
      failures are raised unchanged so the classifier sees real status codes
    """

    def __init__(self, timeout: int = 120, **kwargs):
        """
        Initialize base client.

        Args:
            timeout: Per-request timeout in seconds
            **kwargs: Additional provider-specific config
        """
        self.timeout = timeout
        self.extra_config = kwargs

        logger.info(
            "Initialized LLM client",
            client_class=self.__class__.__name__,
            timeout=timeout,
        )

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Run one non-streaming generation.

        Raises:
            Exception: Upstream failure, unchanged
        """
        pass

    @abstractmethod
    async def open_stream(self, request: GenerationRequest) -> TextStream:
        """
        Start a streaming generation.

        The returned stream is primed: failures up to and including the first
        chunk are raised here, where the router can retry or fall back.
        """
        pass

    @abstractmethod
    async def generate_images(
        self,
        model: str,
        prompt: str,
        *,
        aspect_ratio: str = "16:9",
        number_of_images: int = 1,
    ) -> GenerationResult:
        """Dedicated image-generation endpoint; images come back as media."""
        pass

    @abstractmethod
    def open_chat(
        self,
        model: str,
        *,
        system_instruction: Optional[str] = None,
        history: Optional[list[ChatTurn]] = None,
        tools: Optional[list[ToolFunction]] = None,
        use_search: bool = False,
    ) -> ChatSession:
        pass

    async def health_check(self) -> bool:
        """
        Check if the client is usable.

        Note:
            This should NOT raise exceptions - return False on error.
        """
        return True

    async def close(self):
        """
        Close client connections and cleanup resources.

        Should be called on shutdown. Default implementation does nothing.
        """
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timeout={self.timeout}s)"
