"""Monitoring and metrics instrumentation for the content wizard core.

Exports custom Prometheus metrics for operational monitoring and alerting.
"""

from content_wizard.monitoring.metrics import (
    llm_latency_seconds,
    model_fallbacks_total,
    normalizer_skips_total,
    retries_total,
    upstream_failures_total,
    webhook_requests_total,
)

__all__ = [
    "retries_total",
    "model_fallbacks_total",
    "upstream_failures_total",
    "normalizer_skips_total",
    "llm_latency_seconds",
    "webhook_requests_total",
]
