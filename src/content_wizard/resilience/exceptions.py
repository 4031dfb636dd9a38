"""
Error taxonomy for remote invocations.

These exceptions let the classifier, executor and facade tell apart the
failure modes of a generation task:

- UpstreamError and its subclasses: a remote call failed
- MalformedResponseError: the call succeeded but the payload is unusable
- CancelledByCaller: the caller gave up while we were waiting to retry
- TaskFailedError: the labelled, user-facing wrapper raised by the facade
"""

from typing import Optional


class UpstreamError(Exception):
    """
    Base exception for failures of calls we make to remote services.

    Carries the HTTP/RPC status when one is known so the classifier can read
    it the same way it reads status fields on SDK errors.
    """

    def __init__(self, message: str, status: Optional[int | str] = None, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details or {}


class TransientUpstreamError(UpstreamError):
    """
    Raised for failures known to clear up on their own (throttling, overload).

    Always classified as transient regardless of status or message.
    """

    pass


class FatalUpstreamError(UpstreamError):
    """
    Raised for failures that will not succeed on repetition.

    Examples:
    - Invalid request / bad argument
    - Unknown model
    - Missing credentials

    Always classified as fatal: never retried, never falls back.
    """

    pass


class MalformedResponseError(Exception):
    """
    Raised when a successful response cannot be turned into the expected shape.

    Attributes:
        message: Human-readable error
        details: Diagnostic context (snippet of the raw text, decoder error)
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CancelledByCaller(Exception):
    """Raised when the caller's abort event fires before or during a retry wait."""

    def __init__(self, label: str = "task"):
        super().__init__(f"Cancelled by caller: {label}")
        self.label = label


class TaskFailedError(Exception):
    """
    Labelled failure of a facade operation.

    `user_message` is safe to show to an end user; the real cause is kept
    on `__cause__` and logged.
    """

    def __init__(self, user_message: str, task: str):
        super().__init__(user_message)
        self.user_message = user_message
        self.task = task
