"""
Resilient invocation: failure classification, retry and model fallback.

Main Components:
    - classify: Transient vs. fatal decision for any upstream failure
    - RetryExecutor: Exponential-backoff retry of one operation
    - ModelFallbackRouter: Primary -> fallback model descent
    - RetryPolicy / ModelTier: Immutable budget values

Usage:
    >>> router = ModelFallbackRouter(RetryExecutor())
    >>> text = await router.route(task, settings.model_tiers()["quality"], label="review")
"""

from content_wizard.resilience.classifier import ClassifiedError, ErrorKind, classify
from content_wizard.resilience.exceptions import (
    CancelledByCaller,
    FatalUpstreamError,
    MalformedResponseError,
    TaskFailedError,
    TransientUpstreamError,
    UpstreamError,
)
from content_wizard.resilience.executor import RetryExecutor
from content_wizard.resilience.policy import ModelTier, RetryPolicy
from content_wizard.resilience.router import InvocationTask, ModelFallbackRouter

__all__ = [
    "CancelledByCaller",
    "ClassifiedError",
    "ErrorKind",
    "FatalUpstreamError",
    "InvocationTask",
    "MalformedResponseError",
    "ModelFallbackRouter",
    "ModelTier",
    "RetryExecutor",
    "RetryPolicy",
    "TaskFailedError",
    "TransientUpstreamError",
    "UpstreamError",
    "classify",
]
