"""
Pydantic data models for the content wizard core.

Includes:
- Enums (WebhookFunction, AdditionType, TextAction, ChatRole)
- Records (TopicIdea, CompetitorAnalysis, InternalLink, RankedKeyword, ...)
- LLM models (GenerationRequest, GenerationResult, InlineMedia, FunctionCall)
"""

from content_wizard.models.enums import AdditionType, ChatRole, TextAction, WebhookFunction
from content_wizard.models.llm_models import (
    FunctionCall,
    GenerationRequest,
    GenerationResult,
    InlineImageInput,
    InlineMedia,
    ToolFunction,
)
from content_wizard.models.records import (
    ChatTurn,
    CompetitorAnalysis,
    CompetitorSummary,
    EeatSource,
    GeneratedImage,
    GroundingLink,
    InternalLink,
    KeywordSuggestion,
    RankedKeyword,
    SiteContext,
    SocialPosts,
    SpeechAudio,
    TopicIdea,
)

__all__ = [
    # Enums
    "AdditionType",
    "ChatRole",
    "TextAction",
    "WebhookFunction",
    # Records
    "ChatTurn",
    "CompetitorAnalysis",
    "CompetitorSummary",
    "EeatSource",
    "GeneratedImage",
    "GroundingLink",
    "InternalLink",
    "KeywordSuggestion",
    "RankedKeyword",
    "SiteContext",
    "SocialPosts",
    "SpeechAudio",
    "TopicIdea",
    # LLM models
    "FunctionCall",
    "GenerationRequest",
    "GenerationResult",
    "InlineImageInput",
    "InlineMedia",
    "ToolFunction",
]
