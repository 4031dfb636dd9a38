"""
Parsing of model and webhook payloads.

- extractor: isolate and decode JSON embedded in free-form text
- normalizer: map heterogeneous JSON shapes onto canonical records
"""

from content_wizard.parsing.extractor import extract_json, parse_json
from content_wizard.parsing.normalizer import (
    FieldSpec,
    RecordSpec,
    flatten_to_text,
    normalize,
    normalize_competitors,
    normalize_eeat_sources,
    normalize_internal_links,
    normalize_keyword_suggestions,
    normalize_ranked_keywords,
    normalize_social_posts,
    normalize_string_list,
    normalize_topic_ideas,
    unwrap,
)

__all__ = [
    "FieldSpec",
    "RecordSpec",
    "extract_json",
    "flatten_to_text",
    "normalize",
    "normalize_competitors",
    "normalize_eeat_sources",
    "normalize_internal_links",
    "normalize_keyword_suggestions",
    "normalize_ranked_keywords",
    "normalize_social_posts",
    "normalize_string_list",
    "normalize_topic_ideas",
    "parse_json",
    "unwrap",
]
