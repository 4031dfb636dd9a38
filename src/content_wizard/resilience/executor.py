"""
Retry executor with exponential backoff.

Runs one operation under a RetryPolicy. Transient failures are retried after
a policy-derived delay while budget remains; fatal failures and the final
transient failure are re-raised unchanged so callers (the router, the
facade) see the real upstream error.

Usage:
    >>> executor = RetryExecutor()
    >>> result = await executor.execute(task, policy, abort=event, label="topic_ideas")
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from content_wizard.monitoring.metrics import retries_total, upstream_failures_total
from content_wizard.resilience.classifier import classify
from content_wizard.resilience.exceptions import CancelledByCaller
from content_wizard.resilience.policy import RetryPolicy

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[object]]


class RetryExecutor:
    """
    Loop-based retry of a single async operation.

    Holds no per-call state, so one executor can serve any number of
    concurrent `execute` calls.

    Attributes:
        sleep: Coroutine function taking seconds (asyncio.sleep; injectable for tests)
    """

    def __init__(self, sleep: SleepFunc = asyncio.sleep):
        self.sleep = sleep

    async def execute(
        self,
        task: Callable[[], Awaitable[T]],
        policy: RetryPolicy,
        *,
        abort: Optional[asyncio.Event] = None,
        label: str = "task",
    ) -> T:
        """
        Execute `task` with retry under `policy`.

        Args:
            task: Zero-argument coroutine function performing one remote call
            policy: Retry budget and backoff
            abort: Event that cancels any pending retry wait when set
            label: Name used in logs and metrics

        Returns:
            Result of the first successful call

        Raises:
            CancelledByCaller: abort was set before or during a retry wait
            Exception: the last failure, unchanged, once it is fatal or the
                budget is exhausted
        """
        retry_number = 0

        while True:
            if abort is not None and abort.is_set():
                raise CancelledByCaller(label)

            try:
                return await task()
            except CancelledByCaller:
                raise
            except Exception as e:
                classified = classify(e)

                if not classified.is_transient:
                    upstream_failures_total.labels(label=label, kind=classified.kind.value).inc()
                    logger.error(
                        "Fatal upstream failure",
                        label=label,
                        attempt=retry_number + 1,
                        error_type=type(e).__name__,
                        status=classified.status,
                    )
                    raise

                if retry_number >= policy.max_retries:
                    upstream_failures_total.labels(label=label, kind=classified.kind.value).inc()
                    logger.error(
                        "Retry budget exhausted",
                        label=label,
                        attempts=retry_number + 1,
                        error_type=type(e).__name__,
                        status=classified.status,
                    )
                    raise

                retry_number += 1
                delay_ms = policy.delay_before_retry(retry_number)
                retries_total.labels(label=label).inc()

                logger.warning(
                    "Transient upstream failure, retrying",
                    label=label,
                    retry=retry_number,
                    max_retries=policy.max_retries,
                    delay_ms=delay_ms,
                    status=classified.status,
                    retry_after_ms=classified.retry_after_ms,
                    error=str(e)[:200],
                )

            await self._wait(delay_ms / 1000, abort, label)

    async def _wait(self, seconds: float, abort: Optional[asyncio.Event], label: str) -> None:
        """Sleep for `seconds`, returning early with CancelledByCaller if abort fires."""
        if abort is None:
            await self.sleep(seconds)
            return

        if abort.is_set():
            raise CancelledByCaller(label)

        sleeper = asyncio.ensure_future(self.sleep(seconds))
        aborter = asyncio.ensure_future(abort.wait())
        try:
            await asyncio.wait({sleeper, aborter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for pending in (sleeper, aborter):
                if not pending.done():
                    pending.cancel()

        if abort.is_set():
            logger.info("Retry wait aborted by caller", label=label)
            raise CancelledByCaller(label)
