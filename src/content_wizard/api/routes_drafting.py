"""
Drafting routes: writing, editing and enriching the article.

The long-form draft is streamed as plain text. The stream is opened (with
retry and model fallback) before the response starts, so opening failures
still map to a JSON error; failures after the first chunk end the stream.
"""

import base64
import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from content_wizard.api.dependencies import get_facade
from content_wizard.api.models import (
    ErrorResponse,
    ChatRequest,
    ContextualAdditionRequest,
    DraftRequest,
    EditImageRequest,
    ImagePromptRequest,
    ImageResponse,
    LongFormRequest,
    SpeechRequest,
    SpeechResponse,
    TextRequest,
    TextResponse,
    TitleRequest,
    TransformTextRequest,
)
from content_wizard.facade import GenerationFacade
from content_wizard.llm.streaming import TextStream
from content_wizard.models.records import GeneratedImage, SocialPosts

logger = logging.getLogger(__name__)

router = APIRouter()

GENERATION_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request format"},
    502: {"model": ErrorResponse, "description": "Generation failed upstream (user-facing message included)"},
}


def _image_response(image: GeneratedImage) -> ImageResponse:
    return ImageResponse(
        mime_type=image.mime_type,
        data_base64=base64.b64encode(image.data).decode("ascii"),
        data_url=image.data_url,
    )


async def _relay(stream: TextStream) -> AsyncIterator[str]:
    """Forward chunks to the client; a disconnect closes the upstream stream."""
    try:
        async for chunk in stream:
            yield chunk
    except Exception as exc:
        logger.error(
            "Draft stream failed mid-flight",
            extra={"model": stream.model, "chars": len(stream.text), "error_type": type(exc).__name__},
        )
        raise
    finally:
        await stream.aclose()


# === Writing ===


@router.post(
    "/draft/stream",
    summary="Stream the long-form article draft",
    response_class=StreamingResponse,
    responses={
        200: {"description": "Draft text, streamed as it is generated", "content": {"text/plain": {}}},
        **GENERATION_RESPONSES,
    },
)
async def stream_draft(
    request: LongFormRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> StreamingResponse:
    stream = await facade.stream_long_form_content(request.prompt, request.links)
    logger.info("Draft stream opened", extra={"model": stream.model})
    return StreamingResponse(_relay(stream), media_type="text/plain; charset=utf-8")


@router.post(
    "/draft/review",
    response_model=TextResponse,
    summary="Review and improve the full draft",
    responses=GENERATION_RESPONSES,
)
async def review_article(
    request: DraftRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> TextResponse:
    return TextResponse(text=await facade.review_article(request.draft))


@router.post(
    "/draft/addition",
    response_model=TextResponse,
    summary="Generate a block between two sections",
    description="""
    TEXT and TABLE additions return content; IMAGE and GRAPH additions return
    a `[IMAGE: ...]` / `[GRAPH: ...]` placeholder describing the visual.
    """,
    responses=GENERATION_RESPONSES,
)
async def contextual_addition(
    request: ContextualAdditionRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> TextResponse:
    text = await facade.generate_contextual_addition(request.prev_context, request.next_context, request.kind)
    return TextResponse(text=text)


@router.post(
    "/draft/chat",
    response_model=TextResponse,
    summary="Ask the editing assistant about the draft",
    responses=GENERATION_RESPONSES,
)
async def chat(
    request: ChatRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> TextResponse:
    reply = await facade.chat_with_draft(request.draft, request.history, request.message, request.site)
    return TextResponse(text=reply)


# === Editing ===


@router.post(
    "/text/transform",
    response_model=TextResponse,
    summary="Rewrite a text selection",
    responses=GENERATION_RESPONSES,
)
async def transform_text(
    request: TransformTextRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> TextResponse:
    return TextResponse(text=await facade.transform_text(request.text, request.action, request.language))


@router.post(
    "/title",
    response_model=TextResponse,
    summary="Regenerate the article title",
    responses=GENERATION_RESPONSES,
)
async def regenerate_title(
    request: TitleRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> TextResponse:
    return TextResponse(text=await facade.regenerate_title(request.article))


# === Media ===


@router.post(
    "/image",
    response_model=ImageResponse,
    summary="Generate a 16:9 article image",
    responses=GENERATION_RESPONSES,
)
async def article_image(
    request: ImagePromptRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> ImageResponse:
    return _image_response(await facade.generate_article_image(request.prompt))


@router.post(
    "/image/edit",
    response_model=ImageResponse,
    summary="Edit an existing image",
    responses=GENERATION_RESPONSES,
)
async def edit_image(
    request: EditImageRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> ImageResponse:
    image = await facade.edit_article_image(request.image_bytes(), request.mime_type, request.prompt)
    return _image_response(image)


@router.post(
    "/speech",
    response_model=SpeechResponse,
    summary="Read text aloud",
    description="Returns raw PCM; the client wraps it in a container (e.g. WAV).",
    responses=GENERATION_RESPONSES,
)
async def speech(
    request: SpeechRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> SpeechResponse:
    audio = await facade.generate_speech(request.text, request.voice)
    return SpeechResponse(
        audio_base64=base64.b64encode(audio.pcm).decode("ascii"),
        sample_rate=audio.sample_rate,
        channels=audio.channels,
        mime_type=audio.mime_type,
    )


@router.post(
    "/social-posts",
    response_model=SocialPosts,
    summary="Write social media posts for the article",
    responses=GENERATION_RESPONSES,
)
async def social_posts(
    request: TextRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> SocialPosts:
    return await facade.generate_social_posts(request.text)
