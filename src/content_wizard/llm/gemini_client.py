"""
Gemini client implementation using the google-genai SDK.

Supports:
- Plain and JSON-schema-constrained generation
- Google Search grounding (grounding links extracted from candidate metadata)
- Streaming text generation
- Image output (inline parts) and the dedicated Imagen endpoint
- Speech output (inline audio parts)
- Chat sessions with declared function tools

SDK errors (google.genai.errors.APIError) are re-raised unchanged: their
`code`, `status` and `message` fields are exactly what the classifier reads.
"""

import base64
import time
from typing import Any, Dict, Optional

import structlog
from google import genai
from google.genai import types

from content_wizard.llm.base_client import BaseLLMClient, ChatSession
from content_wizard.llm.streaming import TextStream
from content_wizard.models.llm_models import (
    FunctionCall,
    GenerationRequest,
    GenerationResult,
    InlineMedia,
    ToolFunction,
)
from content_wizard.models.records import ChatTurn, GroundingLink
from content_wizard.monitoring.metrics import llm_latency_seconds
from content_wizard.resilience.exceptions import FatalUpstreamError

logger = structlog.get_logger(__name__)


def _as_bytes(data: Any) -> bytes:
    """Inline data arrives as bytes from the SDK, or base64 text from raw JSON."""
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        return base64.b64decode(data)
    return b""


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def to_generation_result(response: Any, model: str, latency_ms: int = 0) -> GenerationResult:
    """
    Convert a GenerateContentResponse into a GenerationResult.

    Only the first candidate is read. Thought parts are excluded from text.
    """
    candidates = getattr(response, "candidates", None) or []
    candidate = candidates[0] if candidates else None
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []

    texts = []
    media = []
    calls = []
    for part in parts:
        text = getattr(part, "text", None)
        if text and not getattr(part, "thought", False):
            texts.append(text)

        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            media.append(InlineMedia(mime_type=getattr(inline, "mime_type", None), data=_as_bytes(inline.data)))

        call = getattr(part, "function_call", None)
        if call is not None and getattr(call, "name", None):
            calls.append(FunctionCall(name=call.name, args=dict(getattr(call, "args", None) or {})))

    links = []
    metadata = getattr(candidate, "grounding_metadata", None)
    for chunk in getattr(metadata, "grounding_chunks", None) or []:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if not uri or uri == "#":
            continue
        links.append(GroundingLink(title=getattr(web, "title", None) or "Unknown Source", url=uri))

    return GenerationResult(
        text="".join(texts),
        model_version=getattr(response, "model_version", None) or model,
        media=media,
        grounding_links=links,
        function_calls=calls,
        latency_ms=latency_ms,
    )


def _chunk_text(chunk: Any) -> str:
    candidates = getattr(chunk, "candidates", None) or []
    content = getattr(candidates[0], "content", None) if candidates else None
    parts = getattr(content, "parts", None) or []
    return "".join(p.text for p in parts if getattr(p, "text", None) and not getattr(p, "thought", False))


class GeminiChatSession(ChatSession):
    """ChatSession over google-genai's AsyncChat."""

    def __init__(self, chat: Any, model: str):
        self._chat = chat
        self.model = model

    async def send(self, message: str) -> GenerationResult:
        start = time.monotonic()
        response = await self._chat.send_message(message)
        return to_generation_result(response, self.model, _elapsed_ms(start))

    async def send_function_response(self, name: str, response: Dict[str, Any]) -> GenerationResult:
        start = time.monotonic()
        part = types.Part.from_function_response(name=name, response=response)
        result = await self._chat.send_message(part)
        return to_generation_result(result, self.model, _elapsed_ms(start))


class GeminiClient(BaseLLMClient):
    """
    Gemini client using google-genai's async surface (`client.aio`).

    The SDK client is created lazily on first use so that building the app
    (and its facade) never requires credentials.
    """

    def __init__(self, api_key: str, timeout: int = 120, **kwargs):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key
            timeout: Per-request timeout in seconds (passed to the SDK in ms)
            **kwargs: Additional config
        """
        super().__init__(timeout, **kwargs)
        self.api_key = api_key
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        """Get or create the SDK client."""
        if self._client is None:
            if not self.api_key:
                raise FatalUpstreamError("GEMINI_API_KEY is not configured", status="UNAUTHENTICATED")
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=self.timeout * 1000),
            )
            logger.debug("Created google-genai client")
        return self._client

    def _build_contents(self, request: GenerationRequest) -> Any:
        if not request.images:
            return request.prompt
        parts = [types.Part.from_bytes(data=img.data, mime_type=img.mime_type) for img in request.images]
        parts.append(types.Part.from_text(text=request.prompt))
        return [types.Content(role="user", parts=parts)]

    def _build_config(self, request: GenerationRequest) -> types.GenerateContentConfig:
        config: Dict[str, Any] = {}

        if request.system_instruction:
            config["system_instruction"] = request.system_instruction

        if request.use_search:
            config["tools"] = [types.Tool(google_search=types.GoogleSearch())]

        if request.response_schema is not None:
            config["response_mime_type"] = "application/json"
            config["response_schema"] = request.response_schema

        if request.response_modalities:
            config["response_modalities"] = list(request.response_modalities)

        if request.voice_name:
            config["speech_config"] = types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=request.voice_name),
                ),
            )

        return types.GenerateContentConfig(**config)

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        start = time.monotonic()

        logger.info(
            "Sending generation request to Gemini",
            model=request.model,
            prompt_length=len(request.prompt),
            use_search=request.use_search,
            has_schema=request.response_schema is not None,
            images=len(request.images),
        )

        try:
            response = await self._get_client().aio.models.generate_content(
                model=request.model,
                contents=self._build_contents(request),
                config=self._build_config(request),
            )
        except Exception as e:
            latency_ms = _elapsed_ms(start)
            llm_latency_seconds.labels(model=request.model, success="false").observe(latency_ms / 1000.0)
            logger.warning(
                "Gemini generation failed",
                model=request.model,
                latency_ms=latency_ms,
                error_type=type(e).__name__,
                code=getattr(e, "code", None),
                status=getattr(e, "status", None),
            )
            raise

        latency_ms = _elapsed_ms(start)
        result = to_generation_result(response, request.model, latency_ms)
        llm_latency_seconds.labels(model=request.model, success="true").observe(latency_ms / 1000.0)

        logger.info(
            "Gemini generation successful",
            model=result.model_version,
            latency_ms=latency_ms,
            text_length=len(result.text),
            media=len(result.media),
            grounding_links=len(result.grounding_links),
            function_calls=len(result.function_calls),
        )
        return result

    async def open_stream(self, request: GenerationRequest) -> TextStream:
        """
        Start a streaming generation and wait for its first chunk.

        The SDK only sends the request once the stream is iterated, so
        rate-limit and overload errors are raised here rather than in the
        consumer's loop.
        """
        start = time.monotonic()

        try:
            chunks = await self._get_client().aio.models.generate_content_stream(
                model=request.model,
                contents=self._build_contents(request),
                config=self._build_config(request),
            )
            stream = await TextStream(chunks, model=request.model, extract=_chunk_text).prime()
        except Exception as e:
            latency_ms = _elapsed_ms(start)
            llm_latency_seconds.labels(model=request.model, success="false").observe(latency_ms / 1000.0)
            logger.warning(
                "Gemini stream failed to open",
                model=request.model,
                latency_ms=latency_ms,
                error_type=type(e).__name__,
                code=getattr(e, "code", None),
                status=getattr(e, "status", None),
            )
            raise

        logger.info(
            "Opened Gemini stream",
            model=request.model,
            prompt_length=len(request.prompt),
            first_chunk_ms=_elapsed_ms(start),
        )
        return stream

    async def generate_images(
        self,
        model: str,
        prompt: str,
        *,
        aspect_ratio: str = "16:9",
        number_of_images: int = 1,
    ) -> GenerationResult:
        start = time.monotonic()
        try:
            response = await self._get_client().aio.models.generate_images(
                model=model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=number_of_images,
                    aspect_ratio=aspect_ratio,
                ),
            )
        except Exception:
            llm_latency_seconds.labels(model=model, success="false").observe(_elapsed_ms(start) / 1000.0)
            raise

        latency_ms = _elapsed_ms(start)
        llm_latency_seconds.labels(model=model, success="true").observe(latency_ms / 1000.0)

        media = []
        for generated in getattr(response, "generated_images", None) or []:
            image = getattr(generated, "image", None)
            data = getattr(image, "image_bytes", None)
            if data:
                media.append(InlineMedia(mime_type=getattr(image, "mime_type", None) or "image/png", data=_as_bytes(data)))

        return GenerationResult(model_version=model, media=media, latency_ms=latency_ms)

    def open_chat(
        self,
        model: str,
        *,
        system_instruction: Optional[str] = None,
        history: Optional[list[ChatTurn]] = None,
        tools: Optional[list[ToolFunction]] = None,
        use_search: bool = False,
    ) -> ChatSession:
        sdk_tools = []
        if tools:
            sdk_tools.append(
                types.Tool(
                    function_declarations=[
                        types.FunctionDeclaration(name=t.name, description=t.description, parameters=t.parameters)
                        for t in tools
                    ]
                )
            )
        if use_search:
            sdk_tools.append(types.Tool(google_search=types.GoogleSearch()))

        chat = self._get_client().aio.chats.create(
            model=model,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                tools=sdk_tools or None,
            ),
            history=[
                types.Content(role=turn.role.value, parts=[types.Part.from_text(text=turn.text)])
                for turn in history or []
            ],
        )
        return GeminiChatSession(chat, model)

    async def health_check(self) -> bool:
        return bool(self.api_key)

    async def close(self):
        if self._client is not None:
            await self._client.aio.aclose()
            self._client = None
            logger.debug("Closed google-genai client")
