"""
Unit tests for GeminiClient.

The google-genai SDK client is replaced by mocks; responses are plain
namespaces shaped like GenerateContentResponse.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from content_wizard.llm.gemini_client import GeminiClient, to_generation_result
from content_wizard.models.enums import ChatRole
from content_wizard.models.llm_models import GenerationRequest, InlineImageInput, ToolFunction
from content_wizard.models.records import ChatTurn
from content_wizard.resilience.exceptions import FatalUpstreamError
from tests.unit.fakes import overloaded


def text_part(text, thought=False):
    return SimpleNamespace(text=text, thought=thought, inline_data=None, function_call=None)


def make_response(*parts, grounding_chunks=None, model_version="gemini-test-001"):
    candidate = SimpleNamespace(
        content=SimpleNamespace(parts=list(parts)),
        grounding_metadata=SimpleNamespace(grounding_chunks=grounding_chunks) if grounding_chunks else None,
    )
    return SimpleNamespace(candidates=[candidate], model_version=model_version)


@pytest.fixture
def client() -> GeminiClient:
    """GeminiClient with the SDK client replaced by a MagicMock."""
    gemini = GeminiClient(api_key="test-key", timeout=30)
    gemini._client = MagicMock()
    return gemini


class TestToGenerationResult:
    """Tests for response conversion."""

    def test_text_parts_joined_without_thoughts(self):
        response = make_response(text_part("thinking...", thought=True), text_part("Hello "), text_part("world"))

        result = to_generation_result(response, "requested-model", latency_ms=12)

        assert result.text == "Hello world"
        assert result.model_version == "gemini-test-001"
        assert result.latency_ms == 12

    def test_inline_media_and_function_calls(self):
        image = SimpleNamespace(
            text=None, inline_data=SimpleNamespace(mime_type="image/png", data=b"\x89PNG"), function_call=None
        )
        call = SimpleNamespace(
            text=None,
            inline_data=None,
            function_call=SimpleNamespace(name="get_keyword_data", args={"keyword": "espresso"}),
        )

        result = to_generation_result(make_response(image, call), "m")

        assert result.media[0].mime_type == "image/png"
        assert result.media[0].data == b"\x89PNG"
        assert result.function_calls[0].name == "get_keyword_data"
        assert result.function_calls[0].args == {"keyword": "espresso"}

    def test_base64_inline_data_is_decoded(self):
        audio = SimpleNamespace(text=None, inline_data=SimpleNamespace(mime_type="audio/pcm", data="AAEC"))

        assert to_generation_result(make_response(audio), "m").media[0].data == b"\x00\x01\x02"

    def test_grounding_links(self):
        chunks = [
            SimpleNamespace(web=SimpleNamespace(uri="https://a.com", title="A")),
            SimpleNamespace(web=SimpleNamespace(uri="#", title="Placeholder")),
            SimpleNamespace(web=SimpleNamespace(uri="https://b.com", title=None)),
            SimpleNamespace(web=None),
        ]

        result = to_generation_result(make_response(text_part("x"), grounding_chunks=chunks), "m")

        assert [(link.title, link.url) for link in result.grounding_links] == [
            ("A", "https://a.com"),
            ("Unknown Source", "https://b.com"),
        ]

    def test_no_candidates(self):
        result = to_generation_result(SimpleNamespace(candidates=None, model_version=None), "fallback-model")

        assert result.text == ""
        assert result.model_version == "fallback-model"


class TestGenerate:
    """Tests for generate()."""

    @pytest.mark.asyncio
    async def test_missing_api_key_is_fatal(self):
        gemini = GeminiClient(api_key="")

        with pytest.raises(FatalUpstreamError, match="GEMINI_API_KEY"):
            await gemini.generate(GenerationRequest(model="m", prompt="hi"))

    @pytest.mark.asyncio
    async def test_plain_generation(self, client):
        client._client.aio.models.generate_content = AsyncMock(return_value=make_response(text_part("Answer")))

        result = await client.generate(GenerationRequest(model="gemini-2.5-flash", prompt="Question"))

        assert result.text == "Answer"
        kwargs = client._client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == "Question"

    @pytest.mark.asyncio
    async def test_config_reflects_request(self, client):
        client._client.aio.models.generate_content = AsyncMock(return_value=make_response(text_part("[]")))
        request = GenerationRequest(
            model="m",
            prompt="p",
            system_instruction="Be brief",
            use_search=True,
            response_schema={"type": "ARRAY", "items": {"type": "STRING"}},
        )

        await client.generate(request)

        config = client._client.aio.models.generate_content.await_args.kwargs["config"]
        assert config.system_instruction == "Be brief"
        assert config.response_mime_type == "application/json"
        assert config.tools[0].google_search is not None

    @pytest.mark.asyncio
    async def test_speech_config(self, client):
        client._client.aio.models.generate_content = AsyncMock(return_value=make_response())

        await client.generate(
            GenerationRequest(model="tts", prompt="Hello", response_modalities=["AUDIO"], voice_name="Kore")
        )

        config = client._client.aio.models.generate_content.await_args.kwargs["config"]
        assert config.response_modalities == ["AUDIO"]
        assert config.speech_config.voice_config.prebuilt_voice_config.voice_name == "Kore"

    @pytest.mark.asyncio
    async def test_images_sent_before_prompt(self, client):
        client._client.aio.models.generate_content = AsyncMock(return_value=make_response())
        image = InlineImageInput(mime_type="image/jpeg", data=b"jpeg-bytes")

        await client.generate(GenerationRequest(model="m", prompt="Make it warmer", images=[image]))

        contents = client._client.aio.models.generate_content.await_args.kwargs["contents"]
        assert contents[0].role == "user"
        assert contents[0].parts[0].inline_data.data == b"jpeg-bytes"
        assert contents[0].parts[1].text == "Make it warmer"

    @pytest.mark.asyncio
    async def test_sdk_errors_are_reraised_unchanged(self, client):
        error = overloaded()
        client._client.aio.models.generate_content = AsyncMock(side_effect=error)

        with pytest.raises(Exception) as exc_info:
            await client.generate(GenerationRequest(model="m", prompt="p"))

        assert exc_info.value is error


class TestOtherEndpoints:
    """Tests for streaming, images, chat and lifecycle."""

    @pytest.mark.asyncio
    async def test_open_stream(self, client):
        async def chunks():
            yield make_response(text_part("Hello "))
            yield make_response(text_part("hidden", thought=True))
            yield make_response(text_part("world"))

        client._client.aio.models.generate_content_stream = AsyncMock(return_value=chunks())

        stream = await client.open_stream(GenerationRequest(model="m", prompt="p"))

        assert await stream.collect() == "Hello world"
        assert stream.model == "m"

    @pytest.mark.asyncio
    async def test_open_stream_waits_for_first_chunk(self, client):
        pulled = []

        async def chunks():
            pulled.append("first")
            yield make_response(text_part("Hello"))
            pulled.append("second")
            yield make_response(text_part(" again"))

        client._client.aio.models.generate_content_stream = AsyncMock(return_value=chunks())

        stream = await client.open_stream(GenerationRequest(model="m", prompt="p"))

        assert pulled == ["first"]
        assert await stream.collect() == "Hello again"

    @pytest.mark.asyncio
    async def test_open_stream_raises_error_of_first_chunk(self, client):
        error = overloaded()

        async def chunks():
            raise error
            yield make_response(text_part("never sent"))

        client._client.aio.models.generate_content_stream = AsyncMock(return_value=chunks())

        with pytest.raises(type(error)) as exc_info:
            await client.open_stream(GenerationRequest(model="m", prompt="p"))

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_generate_images(self, client):
        response = SimpleNamespace(
            generated_images=[SimpleNamespace(image=SimpleNamespace(image_bytes=b"png", mime_type=None))]
        )
        client._client.aio.models.generate_images = AsyncMock(return_value=response)

        result = await client.generate_images("imagen", "a cup of coffee", aspect_ratio="16:9")

        assert result.media[0].data == b"png"
        assert result.media[0].mime_type == "image/png"
        config = client._client.aio.models.generate_images.await_args.kwargs["config"]
        assert config.aspect_ratio == "16:9"
        assert config.number_of_images == 1

    @pytest.mark.asyncio
    async def test_chat_session(self, client):
        chat = MagicMock()
        chat.send_message = AsyncMock(return_value=make_response(text_part("Done")))
        client._client.aio.chats.create = MagicMock(return_value=chat)
        tool = ToolFunction(
            name="get_keyword_data",
            description="Keyword data",
            parameters={"type": "OBJECT", "properties": {"keyword": {"type": "STRING"}}},
        )

        session = client.open_chat(
            "m",
            system_instruction="You edit drafts",
            history=[ChatTurn(role=ChatRole.USER, text="hi"), ChatTurn(role=ChatRole.MODEL, text="hello")],
            tools=[tool],
            use_search=True,
        )
        result = await session.send("Shorten the intro")

        assert result.text == "Done"
        kwargs = client._client.aio.chats.create.call_args.kwargs
        assert [c.role for c in kwargs["history"]] == ["user", "model"]
        assert kwargs["config"].tools[0].function_declarations[0].name == "get_keyword_data"
        assert kwargs["config"].tools[1].google_search is not None

    @pytest.mark.asyncio
    async def test_function_response_is_sent_as_part(self, client):
        chat = MagicMock()
        chat.send_message = AsyncMock(return_value=make_response(text_part("Volume is 1200")))
        client._client.aio.chats.create = MagicMock(return_value=chat)

        session = client.open_chat("m")
        result = await session.send_function_response("get_keyword_data", {"result": "[]"})

        assert result.text == "Volume is 1200"
        part = chat.send_message.await_args.args[0]
        assert part.function_response.name == "get_keyword_data"

    @pytest.mark.asyncio
    async def test_health_check_reflects_api_key(self):
        assert await GeminiClient(api_key="k").health_check() is True
        assert await GeminiClient(api_key="").health_check() is False

    @pytest.mark.asyncio
    async def test_close_releases_sdk_client(self, client):
        sdk = client._client
        sdk.aio.aclose = AsyncMock()

        await client.close()

        sdk.aio.aclose.assert_awaited_once()
        assert client._client is None
