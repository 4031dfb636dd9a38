"""
Two-tier model fallback.

Runs a task against the tier's primary model with a shallow retry budget,
and only when that ends in a transient failure, against the fallback model
with a deeper budget. Fatal failures surface immediately and the fallback
is never started before the primary budget is spent.
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from content_wizard.monitoring.metrics import model_fallbacks_total
from content_wizard.resilience.classifier import classify
from content_wizard.resilience.exceptions import CancelledByCaller
from content_wizard.resilience.executor import RetryExecutor
from content_wizard.resilience.policy import ModelTier

logger = structlog.get_logger(__name__)

T = TypeVar("T")

InvocationTask = Callable[[str], Awaitable[T]]


class ModelFallbackRouter:
    """Routes invocation tasks through primary and fallback models of a tier."""

    def __init__(self, executor: Optional[RetryExecutor] = None):
        self.executor = executor or RetryExecutor()

    async def route(
        self,
        primary_task: InvocationTask[T],
        tier: ModelTier,
        fallback_task: Optional[InvocationTask[T]] = None,
        *,
        abort: Optional[asyncio.Event] = None,
        label: str = "task",
    ) -> T:
        """
        Invoke `primary_task` on the primary model, falling back on transient failure.

        Args:
            primary_task: Coroutine function taking a model identifier
            tier: Models and retry policies to use
            fallback_task: Task to run on the fallback model when it needs a
                different call shape (e.g. a different image API); defaults
                to primary_task
            abort: Event cancelling pending retry waits
            label: Name used in logs and metrics

        Returns:
            Result from whichever model succeeded

        Raises:
            CancelledByCaller: abort fired during a wait
            Exception: fatal primary failure, or the fallback's final failure
        """
        try:
            return await self.executor.execute(
                lambda: primary_task(tier.primary_model),
                tier.primary_policy,
                abort=abort,
                label=label,
            )
        except CancelledByCaller:
            raise
        except Exception as e:
            if not classify(e).is_transient:
                raise

            logger.warning(
                "Primary model exhausted, switching to fallback",
                label=label,
                primary_model=tier.primary_model,
                fallback_model=tier.fallback_model,
                error_type=type(e).__name__,
            )
            model_fallbacks_total.labels(label=label).inc()

        task = fallback_task or primary_task
        return await self.executor.execute(
            lambda: task(tier.fallback_model),
            tier.fallback_policy,
            abort=abort,
            label=f"{label}:fallback",
        )
