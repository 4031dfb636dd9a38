"""
Record types produced by the facade.

These are the canonical shapes every upstream payload is normalized into.
Field names here are the canonical names the normalizer writes, so dumping
a record and normalizing it again yields the same record.
"""

import base64
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from content_wizard.models.enums import ChatRole


class TopicIdea(BaseModel):
    """A blog topic suggestion."""

    title: str = Field(..., description="SEO-friendly title (Title Case)")
    description: str = Field(default="", description="Why this topic builds authority")


class CompetitorSummary(BaseModel):
    """Model-written analysis of one competing article."""

    title: str = Field(default="Competitor Analysis")
    summary: str = Field(default="", description="Argument, gaps and structure in one string")


class GroundingLink(BaseModel):
    """A web source the model cited while answering with search grounding."""

    title: str = Field(default="Unknown Source")
    url: str
    summary: str = ""


class CompetitorAnalysis(BaseModel):
    competitors: list[CompetitorSummary] = Field(default_factory=list)
    grounding_links: list[GroundingLink] = Field(default_factory=list)


class EeatSource(BaseModel):
    """An authoritative source backing claims in the article (E-E-A-T)."""

    title: str = "Source"
    url: str = "#"
    summary: str = ""


class InternalLink(BaseModel):
    """A page of the user's own site that can be linked from the article."""

    title: str
    url: str


class RankedKeyword(BaseModel):
    """A keyword the site already ranks for, as reported by the webhook tool."""

    keyword: str
    competition: float = 0
    competition_level: str = "UNKNOWN"
    cpc: float = 0
    search_volume: int = 0
    difficulty: float = 0
    intent: str = "unknown"


class KeywordSuggestion(BaseModel):
    keyword: str


class SocialPosts(BaseModel):
    """Per-network promotional copy for a finished article."""

    twitter: str = ""
    linkedin: str = ""
    reddit: str = ""
    instagram: str = ""
    facebook: str = ""


class GeneratedImage(BaseModel):
    """Image bytes returned by an image model."""

    model_config = ConfigDict(frozen=True)

    mime_type: str = "image/png"
    data: bytes

    @property
    def data_url(self) -> str:
        """Inline `data:` URL, the form the publishing step embeds."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class SpeechAudio(BaseModel):
    """
    Raw PCM audio plus the format it was requested in.

    Container formatting (WAV headers etc.) is the consumer's job.
    """

    model_config = ConfigDict(frozen=True)

    pcm: bytes
    sample_rate: int = Field(..., gt=0)
    channels: int = Field(..., ge=1)
    mime_type: Optional[str] = None


class SiteContext(BaseModel):
    """Wizard setup: the site being written for and its market."""

    website_url: str = ""
    country: str = ""
    language: str = ""


class ChatTurn(BaseModel):
    role: ChatRole
    text: str
