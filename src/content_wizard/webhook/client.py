"""
Webhook tool client.

The webhook (an n8n workflow) exposes SEO data functions behind one POST
endpoint. Payload:

{
    "function": "url_map" | "url_scrape" | "page_ranked_keywords" | "suggested_keywords",
    "url": "https://example.com",
    "country": "us",
    "language": "en",
    "keyword": "optional seed"
}

Responses vary per function and are often wrapped as [{"<key>": [...]}];
the normalizer deals with the shapes, this client only transports them.
"""

import asyncio
import json
from typing import Any, Optional

import httpx
import structlog

from content_wizard.models.enums import WebhookFunction
from content_wizard.models.records import InternalLink, RankedKeyword, SiteContext
from content_wizard.monitoring.metrics import webhook_requests_total
from content_wizard.parsing.normalizer import (
    normalize_internal_links,
    normalize_keyword_suggestions,
    normalize_ranked_keywords,
)
from content_wizard.resilience.exceptions import MalformedResponseError, UpstreamError
from content_wizard.resilience.executor import RetryExecutor
from content_wizard.resilience.policy import RetryPolicy

logger = structlog.get_logger(__name__)

DEFAULT_WEBHOOK_POLICY = RetryPolicy(max_retries=2, base_delay_ms=1000)


class WebhookClient:
    """
    Async client for the webhook tool using httpx.

    Features:
    - Connection pooling via a persistent AsyncClient
    - Retry of transient failures (429/5xx, transport errors) via RetryExecutor
    - Unconfigured URL degrades to empty results with a warning
    """

    def __init__(
        self,
        url: str,
        timeout: int = 60,
        executor: Optional[RetryExecutor] = None,
        policy: RetryPolicy = DEFAULT_WEBHOOK_POLICY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize webhook client.

        Args:
            url: Webhook endpoint (empty disables the tool)
            timeout: Request timeout in seconds
            executor: Retry executor (a fresh one by default)
            policy: Retry budget for each call
            transport: httpx transport override (tests use httpx.MockTransport)
        """
        self.url = url
        self.timeout = timeout
        self.executor = executor or RetryExecutor()
        self.policy = policy
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        return bool(self.url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def call(
        self,
        function: WebhookFunction | str,
        site: SiteContext,
        *,
        url: Optional[str] = None,
        keyword: Optional[str] = None,
        abort: Optional[asyncio.Event] = None,
    ) -> Any:
        """
        Invoke a webhook function and return the decoded JSON body.

        Args:
            function: Webhook function name
            site: Website, country and language of the wizard session
            url: Target URL (defaults to the site URL)
            keyword: Seed keyword for suggested_keywords
            abort: Event cancelling pending retry waits

        Returns:
            Decoded JSON, or None for an empty body / unconfigured webhook

        Raises:
            UpstreamError: Non-2xx response (after retries for 429/5xx)
            MalformedResponseError: Body is not JSON
        """
        function = WebhookFunction(function)

        if not self.configured:
            logger.warning("Webhook URL is not configured, returning empty result", function=function.value)
            webhook_requests_total.labels(function=function.value, outcome="unconfigured").inc()
            return None

        payload = {
            "function": function.value,
            "url": url or site.website_url,
            "country": site.country,
            "language": site.language,
            "keyword": keyword,
        }
        payload = {k: v for k, v in payload.items() if v not in (None, "")}

        try:
            data = await self.executor.execute(
                lambda: self._post(payload),
                self.policy,
                abort=abort,
                label=f"webhook.{function.value}",
            )
        except Exception:
            webhook_requests_total.labels(function=function.value, outcome="error").inc()
            raise

        webhook_requests_total.labels(function=function.value, outcome="ok" if data is not None else "empty").inc()
        return data

    async def _post(self, payload: dict) -> Any:
        client = await self._get_client()
        response = await client.post(self.url, json=payload)

        if not response.is_success:
            text = response.text
            try:
                message = json.loads(text).get("message") or ""
            except (ValueError, AttributeError):
                message = ""
            message = message or f"Webhook request failed with status {response.status_code}: {text[:200]}"
            logger.error(
                "Webhook error response",
                function=payload["function"],
                status_code=response.status_code,
                body=text[:500],
            )
            raise UpstreamError(message, status=response.status_code, details={"function": payload["function"]})

        text = response.text
        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                "Webhook returned a non-JSON body",
                details={"function": payload["function"], "snippet": text[:500], "parse_error": e.msg},
            ) from e

    # === Typed helpers ===

    async def fetch_internal_links(self, site: SiteContext, *, abort: Optional[asyncio.Event] = None) -> list[InternalLink]:
        return normalize_internal_links(await self.call(WebhookFunction.URL_MAP, site, abort=abort))

    async def fetch_ranked_keywords(self, site: SiteContext, *, abort: Optional[asyncio.Event] = None) -> list[RankedKeyword]:
        return normalize_ranked_keywords(await self.call(WebhookFunction.PAGE_RANKED_KEYWORDS, site, abort=abort))

    async def fetch_keyword_suggestions(
        self, site: SiteContext, keyword: str, *, abort: Optional[asyncio.Event] = None
    ) -> list[str]:
        raw = await self.call(WebhookFunction.SUGGESTED_KEYWORDS, site, keyword=keyword, abort=abort)
        return normalize_keyword_suggestions(raw)

    async def scrape_url(self, site: SiteContext, url: str, *, abort: Optional[asyncio.Event] = None) -> Any:
        """Passthrough: the scrape payload is handed to the model untouched."""
        return await self.call(WebhookFunction.URL_SCRAPE, site, url=url, abort=abort)

    async def close(self):
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
