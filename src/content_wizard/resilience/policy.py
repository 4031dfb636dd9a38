"""
Retry policy and model tier values.

Both are immutable and validated at construction so a bad configuration
fails at startup instead of in the middle of a retry loop.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """
    Exponential backoff policy for a single operation.

    Attributes:
        max_retries: Attempts allowed after the first call (0 = call once)
        base_delay_ms: Delay before the first retry
        backoff_factor: Multiplier applied to the delay on each further retry
    """

    max_retries: int
    base_delay_ms: int
    backoff_factor: float = 2.0

    def __post_init__(self) -> None:
        """Validate policy invariants."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")

        if self.base_delay_ms <= 0:
            raise ValueError("base_delay_ms must be > 0")

        if self.backoff_factor <= 1:
            raise ValueError("backoff_factor must be > 1")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_before_retry(self, retry_number: int) -> float:
        """
        Delay in milliseconds before retry `retry_number` (1-indexed).

        Retry 1 waits base_delay_ms, retry 2 waits base_delay_ms * factor, ...
        """
        if retry_number < 1:
            raise ValueError("retry_number must be >= 1")
        return self.base_delay_ms * self.backoff_factor ** (retry_number - 1)


@dataclass(frozen=True)
class ModelTier:
    """
    Primary/fallback model pair for one class of task.

    The primary policy is meant to be shallow (fail fast into the fallback),
    the fallback policy deeper. The fallback must get at least one retry.
    """

    primary_model: str
    fallback_model: str
    primary_policy: RetryPolicy
    fallback_policy: RetryPolicy

    def __post_init__(self) -> None:
        if not self.primary_model or not self.fallback_model:
            raise ValueError("primary_model and fallback_model must be non-empty")

        if self.fallback_policy.max_retries < 1:
            raise ValueError("fallback_policy.max_retries must be >= 1")
