"""
Upstream failure classification.

Decides whether a failed remote call is worth repeating. Classification is a
pure function of what the failure exposes (status/code fields, exception
type, message text), never of how many times we have already tried.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

import httpx

from content_wizard.resilience.exceptions import (
    CancelledByCaller,
    FatalUpstreamError,
    TransientUpstreamError,
)


class ErrorKind(str, Enum):
    TRANSIENT = "transient"
    FATAL = "fatal"


# Throttling and server-side overload
TRANSIENT_STATUS_CODES = frozenset({429, 500, 503})
# PERMISSION_DENIED is how Gemini reports exhausted project quota; UNAVAILABLE
# is its symbolic form of 503
TRANSIENT_STATUS_NAMES = frozenset({"RESOURCE_EXHAUSTED", "PERMISSION_DENIED", "UNAVAILABLE"})

# Checked in order, case-sensitive
TRANSIENT_MESSAGE_MARKERS = (
    "429",
    "quota",
    "RESOURCE_EXHAUSTED",
    "Too Many Requests",
    "Rpc failed",
    "xhr error",
    "500",
    "overloaded",
)


@dataclass(frozen=True)
class ClassifiedError:
    """
    A failure together with its classification.

    Attributes:
        kind: TRANSIENT (retry/fallback allowed) or FATAL
        error: The original failure, untouched
        status: Numeric or symbolic status if one was found
        retry_after_ms: Server-provided Retry-After hint, if any
    """

    kind: ErrorKind
    error: Any
    status: Optional[int | str] = None
    retry_after_ms: Optional[int] = None

    @property
    def is_transient(self) -> bool:
        return self.kind is ErrorKind.TRANSIENT


def _status_values(failure: Any) -> list[Any]:
    values = []
    for attr in ("status", "code", "status_code"):
        value = getattr(failure, attr, None)
        if value is not None:
            values.append(value)

    response = getattr(failure, "response", None)
    if response is not None:
        status_code = getattr(response, "status_code", None)
        if status_code is not None:
            values.append(status_code)
    return values


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _message_of(failure: Any) -> str:
    message = getattr(failure, "message", None)
    if isinstance(message, str) and message:
        return message
    try:
        return str(failure)
    except Exception:
        return ""


def _retry_after_ms(failure: Any) -> Optional[int]:
    response = getattr(failure, "response", None)
    headers = getattr(response, "headers", None)
    if headers is None:
        return None
    try:
        raw = headers.get("retry-after")
    except Exception:
        return None
    if raw is None:
        return None
    try:
        return int(float(raw) * 1000)
    except (TypeError, ValueError):
        # HTTP-date form is not interpreted
        return None


def classify(failure: Any) -> ClassifiedError:
    """
    Classify a failure as transient or fatal.

    Never raises: anything that cannot be inspected is fatal.

    Args:
        failure: Exception (or any object) raised by a remote call

    Returns:
        ClassifiedError wrapping the failure unchanged
    """
    statuses = _status_values(failure)
    first_status = statuses[0] if statuses else None
    retry_after = _retry_after_ms(failure)

    def _result(kind: ErrorKind) -> ClassifiedError:
        return ClassifiedError(kind=kind, error=failure, status=first_status, retry_after_ms=retry_after)

    if isinstance(failure, (CancelledByCaller, FatalUpstreamError)):
        return _result(ErrorKind.FATAL)

    if isinstance(failure, (TransientUpstreamError, httpx.TransportError, asyncio.TimeoutError)):
        return _result(ErrorKind.TRANSIENT)

    for value in statuses:
        if _as_int(value) in TRANSIENT_STATUS_CODES:
            return _result(ErrorKind.TRANSIENT)
        if isinstance(value, str) and value.upper() in TRANSIENT_STATUS_NAMES:
            return _result(ErrorKind.TRANSIENT)

    message = _message_of(failure)
    if any(marker in message for marker in TRANSIENT_MESSAGE_MARKERS):
        return _result(ErrorKind.TRANSIENT)

    return _result(ErrorKind.FATAL)
