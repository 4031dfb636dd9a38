"""
API-specific request and response models for FastAPI endpoints.

Request bodies mirror the facade method arguments; responses wrap the
domain records (TopicIdea, CompetitorAnalysis, ...) so every endpoint
returns a JSON object.
"""

import base64
import binascii
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from content_wizard.models.enums import AdditionType
from content_wizard.models.records import (
    ChatTurn,
    CompetitorSummary,
    InternalLink,
    RankedKeyword,
    SiteContext,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# === Requests ===


class ThemeRequest(BaseModel):
    theme: str = Field(min_length=1, description="Broad theme to brainstorm around")


class TopicRequest(BaseModel):
    topic: str = Field(min_length=1, description="Article topic")


class KeywordStrategyRequest(BaseModel):
    """Request for keyword strategy generation."""

    topic: str = Field(min_length=1)
    ranked_keywords: list[RankedKeyword] = Field(
        default_factory=list,
        description="Keywords the site already ranks for",
    )
    site: SiteContext = Field(default_factory=SiteContext)


class InternalLinkSelectionRequest(BaseModel):
    topic: str = Field(min_length=1)
    links: list[InternalLink] = Field(default_factory=list, description="Candidate pages from the site map")


class OutlineRequest(BaseModel):
    """Request for outline generation."""

    topic: str = Field(min_length=1)
    keywords: list[str] = Field(default_factory=list)
    competitors: list[CompetitorSummary] = Field(default_factory=list)
    links: list[InternalLink] = Field(default_factory=list)


class RefineOutlineRequest(OutlineRequest):
    current_outline: Union[str, list[str]] = Field(
        description="Outline being refined, as text or one heading per entry"
    )


class LongFormRequest(BaseModel):
    prompt: str = Field(min_length=1, description="Fully assembled drafting brief")
    links: list[InternalLink] = Field(default_factory=list)


class DraftRequest(BaseModel):
    draft: str = Field(min_length=1)


class ContextualAdditionRequest(BaseModel):
    prev_context: str = ""
    next_context: str = ""
    kind: AdditionType


class ChatRequest(BaseModel):
    """Request for the draft editing assistant."""

    draft: str = ""
    history: list[ChatTurn] = Field(default_factory=list)
    message: str = Field(min_length=1)
    site: SiteContext = Field(default_factory=SiteContext)


class TransformTextRequest(BaseModel):
    text: str = Field(min_length=1)
    action: str = Field(
        min_length=1,
        description="Preset action (Shorten, Elaborate, ...) or a free-form instruction",
        examples=["Shorten", "Make it sound more optimistic"],
    )
    language: str = "English"


class TitleRequest(BaseModel):
    article: str = Field(min_length=1)


class ImagePromptRequest(BaseModel):
    prompt: str = Field(min_length=1)


class EditImageRequest(BaseModel):
    """Request for image editing; the source image travels base64 encoded."""

    image_base64: str = Field(min_length=1)
    mime_type: str = "image/png"
    prompt: str = Field(min_length=1)

    @field_validator("image_base64")
    @classmethod
    def must_be_base64(cls, v: str) -> str:
        # Accept data URLs as produced by GeneratedImage.data_url
        if v.startswith("data:") and "," in v:
            v = v.split(",", 1)[1]
        try:
            base64.b64decode(v, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("image_base64 is not valid base64") from e
        return v

    def image_bytes(self) -> bytes:
        return base64.b64decode(self.image_base64)


class SpeechRequest(BaseModel):
    text: str = Field(min_length=1)
    voice: Optional[str] = Field(default=None, description="Prebuilt voice name", examples=["Kore"])


class TextRequest(BaseModel):
    text: str = Field(min_length=1)


class SiteRequest(BaseModel):
    site: SiteContext


# === Responses ===


class TextResponse(BaseModel):
    text: str


class StringListResponse(BaseModel):
    items: list[str] = Field(default_factory=list)


class ImageResponse(BaseModel):
    """Generated image, base64 encoded plus a ready-to-embed data URL."""

    mime_type: str
    data_base64: str
    data_url: str


class SpeechResponse(BaseModel):
    """Raw PCM speech; container encoding is left to the client."""

    audio_base64: str
    sample_rate: int
    channels: int
    mime_type: Optional[str] = None


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str = Field(
        description="Overall health status",
        examples=["healthy", "degraded"],
    )
    version: str = Field(
        description="Content wizard version",
        examples=["0.1.0"],
    )
    services: dict[str, str] = Field(
        description="Service-specific health status",
        examples=[{"gemini": "ok", "webhook": "not_configured"}],
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Health check timestamp (UTC)",
    )


class VersionResponse(BaseModel):
    """Response for version info endpoint."""

    version: str = Field(description="Application version")
    environment: str
    models: dict[str, dict[str, str]] = Field(
        description="Primary and fallback model per task tier",
        examples=[{"fast": {"primary": "gemini-2.5-flash", "fallback": "gemini-2.5-flash"}}],
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(
        description="Error code or type",
        examples=["generation_failed", "invalid_request", "internal_error"],
    )
    message: str = Field(description="Human-readable error message")
    task: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)
