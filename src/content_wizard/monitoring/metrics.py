"""Custom Prometheus metrics for the content wizard core.

These metrics are exposed at /metrics endpoint and should be scraped by Prometheus.
Alert rules should be configured for:
- model_fallbacks_total (primary model degraded)
- upstream_failures_total{kind="fatal"} (request-validity problems)
- normalizer_skips_total (upstream contract drift)
"""

from prometheus_client import Counter, Histogram

# === Retry Metrics ===

retries_total = Counter(
    "retries_total",
    "Total retry attempts scheduled after a transient failure",
    ["label"],
)
"""
Retry attempts counter.

Labels:
- label: logical task label (e.g. topic_ideas, review_article, webhook.url_map)

Alert thresholds:
- WARN: retry rate > 10% of total requests
- CRITICAL: retry rate > 30% of total requests
"""

model_fallbacks_total = Counter(
    "model_fallbacks_total",
    "Total switches from the primary model to the fallback model",
    ["label"],
)
"""
Fallback switches counter.

A rising rate usually means the primary model is quota-limited or
globally overloaded rather than anything being wrong with our requests.
"""

upstream_failures_total = Counter(
    "upstream_failures_total",
    "Upstream failures surfaced to callers after retry budgets were spent",
    ["label", "kind"],
)
"""
Terminal upstream failures.

Labels:
- label: logical task label
- kind: transient (budget exhausted), fatal (never retried)
"""

# === Normalization Metrics ===

normalizer_skips_total = Counter(
    "normalizer_skips_total",
    "Upstream entries dropped for lacking a mandatory field",
    ["record"],
)

# === LLM Performance Metrics ===

llm_latency_seconds = Histogram(
    "llm_latency_seconds",
    "LLM generation latency in seconds",
    ["model", "success"],
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0, 120.0],
)
"""
LLM generation latency histogram.

Labels:
- model: Model name (e.g., gemini-3-pro-preview, gemini-2.5-flash)
- success: true (generation succeeded), false (generation failed)

Alert thresholds:
- WARN: p95 > 30s
- CRITICAL: p95 > 60s
"""

# === Webhook Metrics ===

webhook_requests_total = Counter(
    "webhook_requests_total",
    "Webhook tool calls by function and outcome",
    ["function", "outcome"],
)
