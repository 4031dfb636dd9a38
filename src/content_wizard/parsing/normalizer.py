"""
Normalization of heterogeneous upstream JSON into canonical records.

Model output and webhook responses describe the same records with shifting
shapes: wrapped or bare arrays, `Keyword` vs `keyword`, nested objects where
a sentence was asked for. Each record type is described once by a RecordSpec
(wrapper keys, field alias priority lists, defaults, mandatory fields) and
`normalize` applies it. It returns a list for any JSON value and never raises;
entries without a mandatory field are dropped and counted.

Canonical field names come first in every alias list, so normalizing a list
of already-normalized records gives the same records back.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

import structlog
from pydantic import BaseModel, ValidationError

from content_wizard.models.records import (
    CompetitorSummary,
    EeatSource,
    InternalLink,
    KeywordSuggestion,
    RankedKeyword,
    SocialPosts,
    TopicIdea,
)
from content_wizard.monitoring.metrics import normalizer_skips_total

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """
    How to fill one canonical field.

    Attributes:
        name: Canonical field name on the record model
        aliases: Source keys in priority order (first present wins)
        kind: Target type, one of str, float, int
        default: Used when no alias is present and nothing can be derived
        derive: Hook computing a value from (raw entry, fields built so far)
            when no alias is present; returning None means "not derivable"
    """

    name: str
    aliases: tuple[str, ...]
    kind: type = str
    default: Any = ""
    derive: Optional[Callable[[dict, dict], Any]] = None


@dataclass(frozen=True)
class RecordSpec:
    """
    Declarative description of one record type.

    Attributes:
        record: Name used in logs and the skip metric
        model: Pydantic model the fields are fed into
        wrappers: Keys under which upstream may nest the entry list
        fields: Field specs, evaluated in order
        required: Fields that must be present; entries lacking one are skipped
        scalar_field: Field a bare scalar entry is assigned to (e.g. a
            keyword list given as plain strings)
    """

    record: str
    model: type[BaseModel]
    wrappers: tuple[str, ...] = ()
    fields: tuple[FieldSpec, ...] = ()
    required: tuple[str, ...] = ()
    scalar_field: Optional[str] = None


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def flatten_to_text(value: Any) -> str:
    """
    Render an arbitrary JSON value as a single string.

    Objects become "key: value" pairs joined by ". " (underscores in keys
    become spaces); arrays become items joined by ", ".
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return ". ".join(f"{str(k).replace('_', ' ')}: {flatten_to_text(v)}" for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return ", ".join(flatten_to_text(v) for v in value if _is_present(v))
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _coerce(value: Any, kind: type, default: Any) -> Any:
    if kind is str:
        return flatten_to_text(value)
    if isinstance(value, bool):
        return default
    try:
        if kind is int:
            return int(float(value))
        if kind is float:
            return float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return value


def _entries(value: Any) -> list:
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        return [value]
    return []


def unwrap(raw: Any, wrappers: Sequence[str]) -> list:
    """
    Find the entry collection inside an upstream payload.

    - dict holding a wrapper key -> that value
    - list whose first element is a dict holding a wrapper key -> that value
    - list -> itself
    - any other dict -> a one-entry collection
    - anything else -> []
    """
    if isinstance(raw, dict):
        for key in wrappers:
            if key in raw:
                return _entries(raw[key])
        return [raw]

    if isinstance(raw, list):
        if raw and isinstance(raw[0], dict):
            for key in wrappers:
                if key in raw[0]:
                    return _entries(raw[0][key])
        return raw

    return []


def _skip(spec: RecordSpec, reason: str, entry: Any) -> None:
    normalizer_skips_total.labels(record=spec.record).inc()
    logger.info(
        "Skipping upstream entry",
        record=spec.record,
        reason=reason,
        entry=repr(entry)[:200],
    )


def _build(entry: Any, spec: RecordSpec) -> Optional[BaseModel]:
    if not isinstance(entry, dict):
        if spec.scalar_field and isinstance(entry, (str, int, float)) and not isinstance(entry, bool):
            entry = {spec.scalar_field: entry}
        else:
            _skip(spec, "not_an_object", entry)
            return None

    values: dict[str, Any] = {}
    for fs in spec.fields:
        raw_value = next((entry[a] for a in fs.aliases if _is_present(entry.get(a))), None)
        if raw_value is None and fs.derive is not None:
            raw_value = fs.derive(entry, values)

        if not _is_present(raw_value):
            if fs.name in spec.required:
                _skip(spec, f"missing_{fs.name}", entry)
                return None
            values[fs.name] = fs.default
            continue

        value = _coerce(raw_value, fs.kind, fs.default)
        if fs.name in spec.required and not _is_present(value.strip() if isinstance(value, str) else value):
            _skip(spec, f"empty_{fs.name}", entry)
            return None
        values[fs.name] = value

    try:
        return spec.model(**values)
    except ValidationError as e:
        _skip(spec, f"invalid: {e.error_count()} errors", entry)
        return None


def normalize(raw: Any, spec: RecordSpec) -> list:
    """
    Normalize any JSON value into a list of `spec.model` records.

    Args:
        raw: Decoded JSON (dict, list, scalar or None)
        spec: Record description

    Returns:
        List of records, possibly empty; never raises
    """
    records = []
    for entry in unwrap(raw, spec.wrappers):
        record = _build(entry, spec)
        if record is not None:
            records.append(record)
    return records


# === Derive hooks ===


def title_from_url(entry: dict, values: dict) -> Optional[str]:
    """Readable title from the last URL path segment ("my-post.html" -> "My Post")."""
    url = values.get("url")
    if not url:
        return None
    segments = [s for s in str(url).split("/") if s]
    last = segments[-1] if segments else ""
    last = re.sub(r"\.[^/.]+$", "", last)
    words = re.sub(r"[-_]", " ", last).split(" ")
    title = " ".join(w[:1].upper() + w[1:] for w in words if w)
    return title or str(url)


def competitor_summary_composite(entry: dict, values: dict) -> Optional[str]:
    """Summary assembled from analysis keys the model left at the entry root."""
    parts = []
    for key, label in (("main_argument", "Argument"), ("content_gaps", "Gaps"), ("structure", "Structure")):
        if _is_present(entry.get(key)):
            parts.append(f"{label}: {flatten_to_text(entry[key])}")
    return ". ".join(parts) or None


# === Record specs ===

TOPIC_IDEA_SPEC = RecordSpec(
    record="topic_idea",
    model=TopicIdea,
    wrappers=("topics", "ideas"),
    fields=(
        FieldSpec("title", ("title", "Title", "topic")),
        FieldSpec("description", ("description", "Description", "reason")),
    ),
    required=("title",),
)

COMPETITOR_SPEC = RecordSpec(
    record="competitor",
    model=CompetitorSummary,
    wrappers=("competitors",),
    fields=(
        FieldSpec("title", ("title",), default="Competitor Analysis"),
        FieldSpec(
            "summary",
            ("summary",),
            default="Analysis available in source link.",
            derive=competitor_summary_composite,
        ),
    ),
)

EEAT_SOURCE_SPEC = RecordSpec(
    record="eeat_source",
    model=EeatSource,
    wrappers=("sources", "eeat_sources"),
    fields=(
        FieldSpec("title", ("title", "name"), default="Source"),
        FieldSpec("url", ("url", "link", "uri"), default="#"),
        FieldSpec("summary", ("summary", "description")),
    ),
)

INTERNAL_LINK_SPEC = RecordSpec(
    record="internal_link",
    model=InternalLink,
    wrappers=("internal_links",),
    fields=(
        FieldSpec("url", ("url", "loc")),
        FieldSpec("title", ("title",), derive=title_from_url),
    ),
    required=("url",),
)

RANKED_KEYWORD_SPEC = RecordSpec(
    record="ranked_keyword",
    model=RankedKeyword,
    wrappers=("ranked_keywords",),
    fields=(
        FieldSpec("keyword", ("keyword", "Keyword")),
        FieldSpec("competition", ("competition", "competition_score"), kind=float, default=0),
        FieldSpec("competition_level", ("competition_level",), default="UNKNOWN"),
        FieldSpec("cpc", ("cpc",), kind=float, default=0),
        FieldSpec("search_volume", ("search_volume",), kind=int, default=0),
        FieldSpec("difficulty", ("difficulty", "keyword_difficulty"), kind=float, default=0),
        FieldSpec("intent", ("intent",), default="unknown"),
    ),
    required=("keyword",),
)

KEYWORD_SUGGESTION_SPEC = RecordSpec(
    record="keyword_suggestion",
    model=KeywordSuggestion,
    wrappers=("related_keyword", "suggested_keywords"),
    fields=(FieldSpec("keyword", ("keyword", "Keyword")),),
    required=("keyword",),
    scalar_field="keyword",
)

SOCIAL_POSTS_SPEC = RecordSpec(
    record="social_posts",
    model=SocialPosts,
    wrappers=("posts", "social_posts"),
    fields=(
        FieldSpec("twitter", ("twitter", "Twitter", "x", "X")),
        FieldSpec("linkedin", ("linkedin", "LinkedIn")),
        FieldSpec("reddit", ("reddit", "Reddit")),
        FieldSpec("instagram", ("instagram", "Instagram")),
        FieldSpec("facebook", ("facebook", "Facebook")),
    ),
)

STRING_ITEM_KEYS = ("title", "text", "keyword", "Keyword", "section", "name")


# === Public mappers ===


def normalize_topic_ideas(raw: Any) -> list[TopicIdea]:
    return normalize(raw, TOPIC_IDEA_SPEC)


def normalize_competitors(raw: Any) -> list[CompetitorSummary]:
    return normalize(raw, COMPETITOR_SPEC)


def normalize_eeat_sources(raw: Any) -> list[EeatSource]:
    return normalize(raw, EEAT_SOURCE_SPEC)


def normalize_internal_links(raw: Any) -> list[InternalLink]:
    return normalize(raw, INTERNAL_LINK_SPEC)


def normalize_ranked_keywords(raw: Any) -> list[RankedKeyword]:
    return normalize(raw, RANKED_KEYWORD_SPEC)


def normalize_keyword_suggestions(raw: Any) -> list[str]:
    """Keyword strings from any suggested-keywords payload shape."""
    return [s.keyword for s in normalize(raw, KEYWORD_SUGGESTION_SPEC)]


def normalize_string_list(raw: Any, wrappers: Sequence[str] = ()) -> list[str]:
    """
    List of non-blank strings (outline lines, seeds, keywords).

    Leading whitespace is kept since outlines use indentation for hierarchy.
    Object entries contribute their first present text-like key.
    """
    result = []
    for entry in unwrap(raw, wrappers):
        if isinstance(entry, dict):
            entry = next((entry[k] for k in STRING_ITEM_KEYS if _is_present(entry.get(k))), None)
        if isinstance(entry, bool) or not isinstance(entry, (str, int, float)):
            normalizer_skips_total.labels(record="string").inc()
            logger.info("Skipping non-text list entry", entry=repr(entry)[:200])
            continue
        text = str(entry).rstrip()
        if text.strip():
            result.append(text)
    return result


def normalize_social_posts(raw: Any) -> SocialPosts:
    """Single SocialPosts object; missing networks are empty strings."""
    posts = normalize(raw, SOCIAL_POSTS_SPEC)
    return posts[0] if posts else SocialPosts()
