"""
Resilient invocation core for the GEO content wizard.

Turns wizard steps (topic ideation, research, outlining, drafting, publishing)
into calls against Gemini and the keyword/sitemap webhook tool, and coerces
whatever comes back into typed records:
- Failure classification, backoff retry and primary/fallback model routing
- JSON extraction and repair from free-form model text
- Normalization of inconsistent webhook payloads

Architecture: GenerationFacade -> ModelFallbackRouter -> RetryExecutor,
with google-genai and httpx as transports and FastAPI as the HTTP surface.
"""

__version__ = "0.1.0"
