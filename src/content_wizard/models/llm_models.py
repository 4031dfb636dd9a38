"""
LLM-specific data models for request/response cycle.

These models are internal to the LLM layer and handle the raw communication
with Gemini. They are separate from the record types (TopicIdea etc.) so the
facade never depends on the google-genai SDK objects directly.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from content_wizard.models.records import GroundingLink


class InlineMedia(BaseModel):
    """Binary part (image/audio) returned alongside or instead of text."""

    model_config = ConfigDict(frozen=True)

    mime_type: Optional[str] = None
    data: bytes


class InlineImageInput(BaseModel):
    """Image sent to the model as part of the request (image editing)."""

    model_config = ConfigDict(frozen=True)

    mime_type: str
    data: bytes


class FunctionCall(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    args: Dict[str, Any] = Field(default_factory=dict)


class GenerationRequest(BaseModel):
    """
    Internal request model for one generate_content call.

    Output-shape constraints are either a JSON schema (response_schema, which
    implies an application/json response) or nothing (free text).
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(..., description="Model identifier (e.g. 'gemini-2.5-flash')")
    prompt: str = Field(..., description="Rendered prompt text")
    images: list[InlineImageInput] = Field(default_factory=list)
    system_instruction: Optional[str] = None
    use_search: bool = Field(default=False, description="Enable Google Search grounding")
    response_schema: Optional[Dict[str, Any]] = Field(
        default=None,
        description="JSON schema the response must conform to",
    )
    response_modalities: Optional[list[str]] = Field(
        default=None,
        description="e.g. ['AUDIO'] for speech, ['IMAGE'] for images",
    )
    voice_name: Optional[str] = Field(default=None, description="Prebuilt TTS voice")


class GenerationResult(BaseModel):
    """
    Raw upstream payload from one successful attempt.

    Consumed immediately by the extractor/normalizer, never cached.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(default="", description="Concatenated text parts ('' if none)")
    model_version: str = Field(..., description="Model that produced the answer")
    media: list[InlineMedia] = Field(default_factory=list)
    grounding_links: list[GroundingLink] = Field(default_factory=list)
    function_calls: list[FunctionCall] = Field(default_factory=list)
    latency_ms: int = Field(default=0, ge=0)


class ToolFunction(BaseModel):
    """Function the model may call during a chat (declared, executed by us)."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, Any] = Field(..., description="Schema of the call arguments")
