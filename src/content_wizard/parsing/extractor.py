"""
Structured payload extraction from free-form model text.

Models asked for JSON routinely wrap it in markdown fences or surround it
with prose. `extract_json` isolates the candidate JSON substring without
ever failing; `parse_json` decodes it, attempting one conservative repair
pass before giving up with MalformedResponseError.
"""

import json
import re
from typing import Any, Optional

import structlog

from content_wizard.resilience.exceptions import MalformedResponseError

logger = structlog.get_logger(__name__)

_FENCE_RE = re.compile(r"```[\w+-]*[ \t]*\n?(.*?)```", re.DOTALL)

SNIPPET_LIMIT = 500


def extract_json(text: Optional[str]) -> str:
    """
    Return the most likely JSON substring of `text`.

    1. Interior of the first fenced block, trimmed.
    2. Otherwise from the first `{` or `[` up to the last matching `}`/`]`.
    3. Otherwise the whole text, trimmed.

    The closer is the last occurrence of the matching bracket type, not a
    depth-aware match, so trailing prose containing that bracket is included.
    """
    if not text:
        return ""

    fenced = _FENCE_RE.search(text)
    if fenced:
        return fenced.group(1).strip()

    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    if starts:
        start = min(starts)
        closer = "}" if text[start] == "{" else "]"
        end = text.rfind(closer)
        if end > start:
            return text[start : end + 1]

    return text.strip()


def _repair_jsonish(s: str) -> str:
    """
    Repair common LLM "JSON-ish" mistakes:
    - Python literals None/True/False, and NULL
    - Trailing commas before } or ]
    - Missing commas between adjacent objects or fields
    """
    s = s.strip()

    s = re.sub(r"\bNone\b", "null", s)
    s = re.sub(r"\bNULL\b", "null", s)
    s = re.sub(r"\bTrue\b", "true", s)
    s = re.sub(r"\bFalse\b", "false", s)

    s = re.sub(r",\s*([\}\]])", r"\1", s)

    s = re.sub(r'(?<=[0-9"\}\]])\s*\n\s*(?="[^"\n]+"\s*:)', ",", s)
    s = re.sub(r"\}\s*\{", "},{", s)
    s = re.sub(r"\]\s*\{", "],{", s)

    return s


def parse_json(text: Optional[str]) -> Any:
    """
    Extract and decode the JSON payload embedded in `text`.

    Args:
        text: Raw model output

    Returns:
        Decoded JSON value (dict, list, str, number, bool or None)

    Raises:
        MalformedResponseError: Payload is empty or still invalid after repair
    """
    candidate = extract_json(text)
    if not candidate:
        raise MalformedResponseError(
            "Model response contained no JSON payload",
            details={"snippet": (text or "")[:SNIPPET_LIMIT], "parse_error": "Empty content"},
        )

    try:
        return json.loads(candidate)
    except json.JSONDecodeError as first_error:
        repaired = _repair_jsonish(candidate)
        try:
            value = json.loads(repaired)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Failed to parse model response as JSON: {e.msg}",
                details={
                    "snippet": candidate[:SNIPPET_LIMIT],
                    "parse_error": f"{e.msg} at line {e.lineno} col {e.colno}",
                },
            ) from e

        logger.info("Parsed model JSON after repair", original_error=first_error.msg)
        return value
