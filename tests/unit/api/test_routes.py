"""
Unit tests for the HTTP surface: routing, serialization and error mapping.
"""

import base64

import pytest

from content_wizard.llm.streaming import TextStream
from content_wizard.models.enums import AdditionType
from content_wizard.models.records import (
    CompetitorAnalysis,
    CompetitorSummary,
    GeneratedImage,
    InternalLink,
    SiteContext,
    SocialPosts,
    SpeechAudio,
    TopicIdea,
)
from content_wizard.resilience.exceptions import (
    CancelledByCaller,
    MalformedResponseError,
    TaskFailedError,
    UpstreamError,
)


class TestServiceRoutes:
    """Tests for /, /health and /version."""

    def test_root(self, client):
        body = client.get("/").json()

        assert body["service"] == "Content Wizard (Test)"
        assert body["metrics"] is None

    def test_health_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["services"] == {"gemini": "ok", "webhook": "ok"}

    def test_health_degraded_without_webhook(self, client, mock_webhook_client):
        mock_webhook_client.configured = False

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    def test_health_unhealthy_without_model_client(self, client, mock_llm_client):
        mock_llm_client.health_check.return_value = False

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["services"]["gemini"] == "not_configured"

    def test_version(self, client):
        body = client.get("/version").json()

        assert body["version"] == "0.1.0"
        assert body["models"]["quality"] == {"primary": "primary-model", "fallback": "fallback-model"}

    def test_request_id_is_echoed(self, client):
        response = client.get("/", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_is_generated(self, client):
        assert client.get("/").headers["X-Request-ID"]


class TestPlanningRoutes:
    """Tests for /planning routes."""

    def test_topic_ideas(self, client, api_facade):
        api_facade.generate_topic_ideas.return_value = [TopicIdea(title="A", description="B")]

        response = client.post("/planning/topics", json={"theme": "espresso"})

        assert response.status_code == 200
        assert response.json() == [{"title": "A", "description": "B"}]
        api_facade.generate_topic_ideas.assert_awaited_once_with("espresso")

    def test_website_topic_ideas(self, client, api_facade):
        api_facade.generate_topic_ideas_for_website.return_value = []

        response = client.post(
            "/planning/topics/website",
            json={"website_url": "https://example.com", "country": "us", "language": "en"},
        )

        assert response.status_code == 200
        site = api_facade.generate_topic_ideas_for_website.await_args.args[0]
        assert site == SiteContext(website_url="https://example.com", country="us", language="en")

    def test_competitors(self, client, api_facade):
        api_facade.analyze_competitors.return_value = CompetitorAnalysis(
            competitors=[CompetitorSummary(title="Site A", summary="Thin")]
        )

        body = client.post("/planning/competitors", json={"topic": "espresso"}).json()

        assert body["competitors"] == [{"title": "Site A", "summary": "Thin"}]
        assert body["grounding_links"] == []

    def test_keyword_strategy(self, client, api_facade):
        api_facade.generate_keyword_strategy.return_value = ["best espresso grinder"]

        response = client.post(
            "/planning/keywords/strategy",
            json={
                "topic": "espresso grinders",
                "ranked_keywords": [{"keyword": "burr grinder", "search_volume": 900}],
                "site": {"website_url": "https://example.com"},
            },
        )

        assert response.json() == {"items": ["best espresso grinder"]}
        topic, rankings, site = api_facade.generate_keyword_strategy.await_args.args
        assert topic == "espresso grinders"
        assert rankings[0].search_volume == 900
        assert site.website_url == "https://example.com"

    def test_refine_outline_accepts_text_or_list(self, client, api_facade):
        api_facade.refine_outline.return_value = ["Intro"]

        for current in ("Intro\n  Detail", ["Intro", "  Detail"]):
            response = client.post("/planning/outline/refine", json={"topic": "t", "current_outline": current})
            assert response.json() == {"items": ["Intro"]}

    def test_site_internal_links(self, client, api_facade):
        api_facade.fetch_internal_links.return_value = [InternalLink(title="A", url="https://example.com/a")]

        response = client.post("/planning/site/internal-links", json={"site": {"website_url": "https://example.com"}})

        assert response.json() == [{"title": "A", "url": "https://example.com/a"}]


class TestDraftingRoutes:
    """Tests for /drafting routes."""

    def test_stream_draft(self, client, api_facade):
        async def chunks():
            for text in ("# Title\n", "Body"):
                yield type("Chunk", (), {"text": text})()

        api_facade.stream_long_form_content.return_value = TextStream(chunks(), model="primary-model")

        response = client.post("/drafting/draft/stream", json={"prompt": "Write about espresso"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "# Title\nBody"

    def test_stream_open_failure_is_json_error(self, client, api_facade):
        api_facade.stream_long_form_content.side_effect = TaskFailedError(
            "Failed to generate the article draft.", task="long_form"
        )

        response = client.post("/drafting/draft/stream", json={"prompt": "Write"})

        assert response.status_code == 502
        assert response.json()["message"] == "Failed to generate the article draft."

    def test_contextual_addition(self, client, api_facade):
        api_facade.generate_contextual_addition.return_value = "[IMAGE: a cup]"

        response = client.post(
            "/drafting/draft/addition",
            json={"prev_context": "a", "next_context": "b", "kind": "IMAGE"},
        )

        assert response.json() == {"text": "[IMAGE: a cup]"}
        assert api_facade.generate_contextual_addition.await_args.args[2] is AdditionType.IMAGE

    def test_chat(self, client, api_facade):
        api_facade.chat_with_draft.return_value = "Done."

        response = client.post(
            "/drafting/draft/chat",
            json={"draft": "# D", "history": [{"role": "user", "text": "hi"}], "message": "Shorten"},
        )

        assert response.json() == {"text": "Done."}
        history = api_facade.chat_with_draft.await_args.args[1]
        assert history[0].text == "hi"

    def test_transform_text(self, client, api_facade):
        api_facade.transform_text.return_value = "Short."

        response = client.post("/drafting/text/transform", json={"text": "Long.", "action": "Shorten"})

        assert response.json() == {"text": "Short."}
        api_facade.transform_text.assert_awaited_once_with("Long.", "Shorten", "English")

    def test_article_image(self, client, api_facade):
        api_facade.generate_article_image.return_value = GeneratedImage(mime_type="image/png", data=b"png")

        body = client.post("/drafting/image", json={"prompt": "a cup"}).json()

        assert body["data_base64"] == base64.b64encode(b"png").decode()
        assert body["data_url"] == f"data:image/png;base64,{body['data_base64']}"

    def test_edit_image_accepts_data_url(self, client, api_facade):
        api_facade.edit_article_image.return_value = GeneratedImage(data=b"new")
        encoded = base64.b64encode(b"old").decode()

        response = client.post(
            "/drafting/image/edit",
            json={"image_base64": f"data:image/jpeg;base64,{encoded}", "mime_type": "image/jpeg", "prompt": "warmer"},
        )

        assert response.status_code == 200
        api_facade.edit_article_image.assert_awaited_once_with(b"old", "image/jpeg", "warmer")

    def test_edit_image_rejects_bad_base64(self, client, api_facade):
        response = client.post("/drafting/image/edit", json={"image_base64": "not base64!!", "prompt": "warmer"})

        assert response.status_code == 400
        api_facade.edit_article_image.assert_not_awaited()

    def test_speech(self, client, api_facade):
        api_facade.generate_speech.return_value = SpeechAudio(pcm=b"\x00\x01", sample_rate=24000, channels=1)

        body = client.post("/drafting/speech", json={"text": "Hello"}).json()

        assert base64.b64decode(body["audio_base64"]) == b"\x00\x01"
        assert body["sample_rate"] == 24000
        api_facade.generate_speech.assert_awaited_once_with("Hello", None)

    def test_social_posts(self, client, api_facade):
        api_facade.generate_social_posts.return_value = SocialPosts(twitter="t")

        assert client.post("/drafting/social-posts", json={"text": "Article"}).json()["twitter"] == "t"


class TestErrorMapping:
    """Tests for exception handlers."""

    def test_task_failure_maps_to_502_with_user_message(self, client, api_facade):
        error = TaskFailedError("Failed to generate topic ideas. Please try a different theme.", task="topic_ideas")
        error.__cause__ = UpstreamError("secret upstream detail")
        api_facade.generate_topic_ideas.side_effect = error

        response = client.post("/planning/topics", json={"theme": "x"})

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "generation_failed"
        assert body["message"] == "Failed to generate topic ideas. Please try a different theme."
        assert body["task"] == "topic_ideas"
        assert "secret" not in response.text

    def test_cancellation_maps_to_499(self, client, api_facade):
        api_facade.review_article.side_effect = CancelledByCaller("review_article")

        assert client.post("/drafting/draft/review", json={"draft": "d"}).status_code == 499

    @pytest.mark.parametrize("error", [MalformedResponseError("bad"), UpstreamError("down", status=500)])
    def test_unwrapped_upstream_errors_map_to_502(self, client, api_facade, error):
        api_facade.regenerate_title.side_effect = error

        response = client.post("/drafting/title", json={"article": "text"})

        assert response.status_code == 502
        assert "down" not in response.json()["message"]

    def test_invalid_body_maps_to_400(self, client):
        response = client.post("/planning/topics", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"

    def test_unknown_addition_kind_maps_to_400(self, client):
        response = client.post("/drafting/draft/addition", json={"kind": "VIDEO"})

        assert response.status_code == 400

    def test_unexpected_error_maps_to_500(self, client, api_facade):
        api_facade.generate_outline_suggestions.side_effect = RuntimeError("boom")

        response = client.post("/planning/outline/suggestions", json={"topic": "t"})

        assert response.status_code == 500
        assert response.json()["error"] == "internal_error"
