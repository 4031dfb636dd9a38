"""
Unit tests for RetryExecutor.

Uses an injected sleep so backoff delays are recorded instead of waited.
"""

import asyncio
from unittest.mock import AsyncMock, call

import pytest

from content_wizard.resilience.exceptions import CancelledByCaller
from content_wizard.resilience.executor import RetryExecutor
from content_wizard.resilience.policy import RetryPolicy
from tests.unit.fakes import invalid_argument, overloaded

POLICY = RetryPolicy(max_retries=2, base_delay_ms=1000)


class TestRetryExecutor:
    """Tests for the retry loop."""

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self, executor, no_sleep):
        task = AsyncMock(return_value="ok")

        assert await executor.execute(task, POLICY) == "ok"
        assert task.await_count == 1
        no_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transient_failure_then_success(self, executor, no_sleep):
        task = AsyncMock(side_effect=[overloaded(), "ok"])

        assert await executor.execute(task, POLICY) == "ok"
        assert task.await_count == 2
        assert no_sleep.await_args_list == [call(1.0)]

    @pytest.mark.asyncio
    async def test_budget_exhausted_reraises_last_error(self, executor, no_sleep):
        errors = [overloaded(), overloaded(), overloaded()]
        task = AsyncMock(side_effect=errors)

        with pytest.raises(Exception) as exc_info:
            await executor.execute(task, POLICY)

        assert exc_info.value is errors[-1]
        assert task.await_count == POLICY.max_attempts
        assert no_sleep.await_args_list == [call(1.0), call(2.0)]

    @pytest.mark.asyncio
    async def test_fatal_failure_is_not_retried(self, executor, no_sleep):
        error = invalid_argument()
        task = AsyncMock(side_effect=error)

        with pytest.raises(Exception) as exc_info:
            await executor.execute(task, POLICY)

        assert exc_info.value is error
        assert task.await_count == 1
        no_sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_retries_calls_once(self, executor):
        task = AsyncMock(side_effect=overloaded())

        with pytest.raises(Exception):
            await executor.execute(task, RetryPolicy(max_retries=0, base_delay_ms=1000))

        assert task.await_count == 1

    @pytest.mark.asyncio
    async def test_cancellation_from_task_propagates_untouched(self, executor):
        task = AsyncMock(side_effect=CancelledByCaller("inner"))

        with pytest.raises(CancelledByCaller):
            await executor.execute(task, POLICY)

        assert task.await_count == 1

    @pytest.mark.asyncio
    async def test_concurrent_executions_are_independent(self, executor):
        first = AsyncMock(side_effect=[overloaded(), "first"])
        second = AsyncMock(return_value="second")

        results = await asyncio.gather(
            executor.execute(first, POLICY, label="a"),
            executor.execute(second, POLICY, label="b"),
        )

        assert results == ["first", "second"]
        assert first.await_count == 2
        assert second.await_count == 1


class TestAbort:
    """Tests for caller cancellation."""

    @pytest.mark.asyncio
    async def test_abort_before_start(self, executor):
        abort = asyncio.Event()
        abort.set()
        task = AsyncMock(return_value="ok")

        with pytest.raises(CancelledByCaller):
            await executor.execute(task, POLICY, abort=abort)

        task.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_abort_interrupts_backoff_wait(self):
        executor = RetryExecutor()  # real asyncio.sleep
        policy = RetryPolicy(max_retries=3, base_delay_ms=60_000)
        task = AsyncMock(side_effect=overloaded())
        abort = asyncio.Event()

        asyncio.get_running_loop().call_later(0.05, abort.set)

        with pytest.raises(CancelledByCaller) as exc_info:
            await asyncio.wait_for(executor.execute(task, policy, abort=abort, label="topic_ideas"), timeout=5)

        assert exc_info.value.label == "topic_ideas"
        assert task.await_count == 1

    @pytest.mark.asyncio
    async def test_unused_abort_does_not_change_result(self, executor):
        task = AsyncMock(side_effect=[overloaded(), "ok"])

        assert await executor.execute(task, POLICY, abort=asyncio.Event()) == "ok"
