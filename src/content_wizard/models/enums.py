"""
Enumerations for content wizard data models.

All enums are closed sets - no values outside these sets are permitted.
"""

from enum import Enum


class WebhookFunction(str, Enum):
    """
    Functions exposed by the webhook tool.

    Each implies a distinct response shape:
    URL_MAP -> internal link records, PAGE_RANKED_KEYWORDS -> ranked keyword
    records, SUGGESTED_KEYWORDS -> keyword strings, URL_SCRAPE -> passthrough.
    """

    URL_MAP = "url_map"
    URL_SCRAPE = "url_scrape"
    PAGE_RANKED_KEYWORDS = "page_ranked_keywords"
    SUGGESTED_KEYWORDS = "suggested_keywords"


class AdditionType(str, Enum):
    """Kind of block inserted between two sections of a draft."""

    TEXT = "TEXT"
    IMAGE = "IMAGE"
    GRAPH = "GRAPH"
    TABLE = "TABLE"


class TextAction(str, Enum):
    """Preset rewrite actions. Free-form instructions are also accepted."""

    SHORTEN = "Shorten"
    ELABORATE = "Elaborate"
    FORMALIZE = "Formalize"
    SIMPLIFY = "Simplify"
    SUMMARIZE = "Summarize"
    HUMANIZE = "Humanize"


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"
