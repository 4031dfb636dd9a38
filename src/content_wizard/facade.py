"""
Generation facade: one async method per wizard operation.

Every operation follows the same path:

1. Render the prompt template
2. Build a task closure taking a model identifier
3. Route it through ModelFallbackRouter with the operation's model tier
4. Structured tasks: extract -> parse -> normalize; free text: strip

Failures are re-raised as TaskFailedError carrying a user-facing message,
chained to the real cause (which is logged). CancelledByCaller is never
wrapped so callers can tell "gave up" from "failed".

Usage:
    >>> facade = GenerationFacade.from_settings(Settings())
    >>> ideas = await facade.generate_topic_ideas("home espresso")
"""

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

import structlog

from content_wizard.config import Settings
from content_wizard.llm.base_client import BaseLLMClient
from content_wizard.llm.gemini_client import GeminiClient
from content_wizard.llm.prompt_builder import (
    IMAGE_EDIT_STYLE,
    IMAGE_STYLE,
    INTERNAL_LINKS_SCHEMA,
    SOCIAL_POSTS_SCHEMA,
    STRING_ARRAY_SCHEMA,
    PromptBuilder,
    instruction_for_action,
)
from content_wizard.llm.streaming import TextStream
from content_wizard.logging_config import task_context
from content_wizard.models.enums import AdditionType, WebhookFunction
from content_wizard.models.llm_models import (
    FunctionCall,
    GenerationRequest,
    GenerationResult,
    InlineImageInput,
    ToolFunction,
)
from content_wizard.models.records import (
    ChatTurn,
    CompetitorAnalysis,
    CompetitorSummary,
    EeatSource,
    GeneratedImage,
    InternalLink,
    RankedKeyword,
    SiteContext,
    SocialPosts,
    SpeechAudio,
    TopicIdea,
)
from content_wizard.parsing.extractor import parse_json
from content_wizard.parsing.normalizer import (
    normalize_competitors,
    normalize_eeat_sources,
    normalize_internal_links,
    normalize_social_posts,
    normalize_string_list,
    normalize_topic_ideas,
)
from content_wizard.resilience.exceptions import (
    CancelledByCaller,
    FatalUpstreamError,
    MalformedResponseError,
    TaskFailedError,
)
from content_wizard.resilience.executor import RetryExecutor
from content_wizard.resilience.policy import ModelTier
from content_wizard.resilience.router import ModelFallbackRouter
from content_wizard.webhook.client import WebhookClient

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# === User-facing failure messages ===

MESSAGES = {
    "topic_ideas": "Failed to generate topic ideas. Please try a different theme.",
    "website_topic_ideas": (
        "Failed to generate topic ideas for your website. Please check the URL or try a manual theme."
    ),
    "competitors": "Failed to analyze competitor data.",
    "eeat_sources": "Failed to find E-E-A-T sources.",
    "keyword_strategy": "Failed to generate a keyword strategy.",
    "outline_suggestions": "Failed to generate outline suggestions.",
    "outline": "Failed to generate the article outline.",
    "refine_outline": "Failed to refine the article outline with AI.",
    "long_form": "Failed to generate the article draft.",
    "review_article": "Failed to review the article.",
    "contextual_addition": "Failed to generate content for this section.",
    "chat": "Failed to get a response from the editor assistant.",
    "article_image": "Failed to generate image.",
    "edit_image": "Failed to edit image.",
    "transform_text": "Failed to transform the selected text.",
    "regenerate_title": "Failed to regenerate the title.",
    "speech": "Failed to generate speech.",
    "social_posts": "Failed to generate social posts.",
}

CHAT_TOOLS = [
    ToolFunction(
        name="get_keyword_data",
        description="Get search volume and competition data for a keyword.",
        parameters={
            "type": "OBJECT",
            "properties": {"keyword": {"type": "STRING"}},
            "required": ["keyword"],
        },
    ),
    ToolFunction(
        name="analyze_url",
        description="Analyze a specific URL for content gaps or data.",
        parameters={
            "type": "OBJECT",
            "properties": {"url": {"type": "STRING"}},
            "required": ["url"],
        },
    ),
]


def _tool_failure_message(function: WebhookFunction, error: BaseException) -> str:
    detail = getattr(error, "message", None) or str(error)
    return f"Failed to get data from custom tool: {function.value}. {detail}"


class GenerationFacade:
    """
    Entry point for all generation tasks of the wizard.

    Holds only immutable configuration and stateless collaborators, so one
    instance serves any number of concurrent calls.

    Attributes:
        llm_client: Model client (GeminiClient in production)
        webhook_client: Webhook tool client
        prompts: Prompt template renderer
        router: Primary/fallback model router
        settings: Application settings
        tiers: Model tiers keyed by task type
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        webhook_client: WebhookClient,
        prompts: PromptBuilder,
        settings: Settings,
        router: Optional[ModelFallbackRouter] = None,
    ):
        self.llm_client = llm_client
        self.webhook_client = webhook_client
        self.prompts = prompts
        self.settings = settings
        self.router = router or ModelFallbackRouter(RetryExecutor())
        self.tiers: dict[str, ModelTier] = settings.model_tiers()

        logger.info(
            "GenerationFacade initialized",
            llm_client=repr(llm_client),
            webhook_configured=webhook_client.configured,
            tiers={name: (t.primary_model, t.fallback_model) for name, t in self.tiers.items()},
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        llm_client: Optional[BaseLLMClient] = None,
        webhook_client: Optional[WebhookClient] = None,
        executor: Optional[RetryExecutor] = None,
    ) -> "GenerationFacade":
        """Wire the default collaborators from an explicit Settings object."""
        executor = executor or RetryExecutor()
        llm_client = llm_client or GeminiClient(
            api_key=settings.GEMINI_API_KEY,
            timeout=settings.LLM_REQUEST_TIMEOUT_S,
        )
        webhook_client = webhook_client or WebhookClient(
            url=settings.WEBHOOK_URL,
            timeout=settings.WEBHOOK_TIMEOUT_S,
            executor=executor,
            policy=settings.webhook_policy(),
        )
        prompts = PromptBuilder(settings.PROMPT_TEMPLATES_DIR or None)
        return cls(llm_client, webhook_client, prompts, settings, ModelFallbackRouter(executor))

    async def close(self) -> None:
        await self.llm_client.close()
        await self.webhook_client.close()

    # === Internal helpers ===

    async def _labelled(self, task: str, user_message: str, operation: Callable[[], Awaitable[T]]) -> T:
        """Run `operation`, converting any failure except cancellation into TaskFailedError."""
        try:
            with task_context(task):
                return await operation()
        except (CancelledByCaller, TaskFailedError):
            raise
        except Exception as e:
            logger.error(
                "Generation task failed",
                task=task,
                error_type=type(e).__name__,
                error=str(e)[:500],
                details=getattr(e, "details", None),
            )
            raise TaskFailedError(user_message, task=task) from e

    async def _invoke(
        self,
        tier: str,
        label: str,
        prompt: str,
        abort: Optional[asyncio.Event],
        **request_fields: Any,
    ) -> GenerationResult:
        async def task(model: str) -> GenerationResult:
            return await self.llm_client.generate(GenerationRequest(model=model, prompt=prompt, **request_fields))

        return await self.router.route(task, self.tiers[tier], abort=abort, label=label)

    async def _text(self, tier: str, label: str, prompt: str, abort: Optional[asyncio.Event], **fields: Any) -> str:
        result = await self._invoke(tier, label, prompt, abort, **fields)
        text = result.text.strip()
        if not text:
            raise MalformedResponseError(
                "Model returned an empty response",
                details={"label": label, "model": result.model_version},
            )
        return text

    async def _json(self, tier: str, label: str, prompt: str, abort: Optional[asyncio.Event], **fields: Any) -> Any:
        result = await self._invoke(tier, label, prompt, abort, **fields)
        return parse_json(result.text)

    # === Planning ===

    async def generate_topic_ideas(self, theme: str, *, abort: Optional[asyncio.Event] = None) -> list[TopicIdea]:
        async def run() -> list[TopicIdea]:
            prompt = self.prompts.render("topic_ideas", theme=theme)
            raw = await self._json("fast", "topic_ideas", prompt, abort, use_search=True)
            return normalize_topic_ideas(raw)

        return await self._labelled("topic_ideas", MESSAGES["topic_ideas"], run)

    async def generate_topic_ideas_for_website(
        self, site: SiteContext, *, abort: Optional[asyncio.Event] = None
    ) -> list[TopicIdea]:
        async def run() -> list[TopicIdea]:
            prompt = self.prompts.render(
                "website_topic_ideas",
                website_url=site.website_url,
                country=site.country,
                language=site.language,
            )
            raw = await self._json("fast", "website_topic_ideas", prompt, abort, use_search=True)
            return normalize_topic_ideas(raw)

        return await self._labelled("website_topic_ideas", MESSAGES["website_topic_ideas"], run)

    async def analyze_competitors(self, topic: str, *, abort: Optional[asyncio.Event] = None) -> CompetitorAnalysis:
        """
        Research the top competing articles for `topic` with search grounding.

        Returns the model's per-competitor summaries plus the web sources the
        model cited (entries without a URL are dropped).
        """

        async def run() -> CompetitorAnalysis:
            prompt = self.prompts.render("competitor_analysis", topic=topic)
            result = await self._invoke("quality", "competitors", prompt, abort, use_search=True)
            competitors = normalize_competitors(parse_json(result.text))
            links = [link for link in result.grounding_links if link.url and link.url != "#"]
            return CompetitorAnalysis(competitors=competitors, grounding_links=links)

        return await self._labelled("competitors", MESSAGES["competitors"], run)

    async def find_eeat_sources(self, topic: str, *, abort: Optional[asyncio.Event] = None) -> list[EeatSource]:
        async def run() -> list[EeatSource]:
            prompt = self.prompts.render("eeat_sources", topic=topic)
            raw = await self._json("quality", "eeat_sources", prompt, abort, use_search=True)
            return normalize_eeat_sources(raw)

        return await self._labelled("eeat_sources", MESSAGES["eeat_sources"], run)

    async def generate_keyword_strategy(
        self,
        topic: str,
        ranked_keywords: Sequence[RankedKeyword],
        site: SiteContext,
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> list[str]:
        """
        Pick target keywords for `topic`.

        Steps:
        1. Ask the model for short seed keywords (falls back to the first two
           words of the topic when the answer cannot be parsed)
        2. Look up suggestions for every seed on the webhook in parallel; a
           failing seed contributes nothing
        3. Ask the model to select the final keywords from suggestions and
           the site's existing rankings
        """
        limits = self.settings

        async def lookup(seed: str) -> list[str]:
            try:
                return await self.webhook_client.fetch_keyword_suggestions(site, seed, abort=abort)
            except CancelledByCaller:
                raise
            except Exception as e:
                logger.warning("Keyword lookup failed for seed", seed=seed, error_type=type(e).__name__, error=str(e)[:200])
                return []

        async def run() -> list[str]:
            seed_prompt = self.prompts.render("keyword_seeds", topic=topic, max_seeds=limits.MAX_KEYWORD_SEEDS)
            try:
                seeds = normalize_string_list(
                    await self._json("fast", "keyword_seeds", seed_prompt, abort),
                    wrappers=("seeds", "keywords"),
                )
            except MalformedResponseError as e:
                logger.info("Seed keywords unparseable, using topic words", error=e.message)
                seeds = []
            if not seeds:
                seeds = [" ".join(topic.split()[:2])]
            seeds = [s.strip() for s in seeds[: limits.MAX_KEYWORD_SEEDS]]

            results = await asyncio.gather(*(lookup(seed) for seed in seeds))
            suggestions = [keyword for batch in results for keyword in batch]

            selection_prompt = self.prompts.render(
                "keyword_selection",
                topic=topic,
                seeds=seeds,
                suggestions=suggestions[: limits.MAX_TOOL_SUGGESTIONS],
                rankings=[k.keyword for k in ranked_keywords][: limits.MAX_EXISTING_RANKINGS],
            )
            raw = await self._json("fast", "keyword_selection", selection_prompt, abort, use_search=True)
            return normalize_string_list(raw, wrappers=("keywords",))

        return await self._labelled("keyword_strategy", MESSAGES["keyword_strategy"], run)

    async def generate_outline_suggestions(self, topic: str, *, abort: Optional[asyncio.Event] = None) -> list[str]:
        async def run() -> list[str]:
            prompt = self.prompts.render("outline_suggestions", topic=topic)
            raw = await self._json("fast", "outline_suggestions", prompt, abort)
            return normalize_string_list(raw, wrappers=("suggestions", "structures"))

        return await self._labelled("outline_suggestions", MESSAGES["outline_suggestions"], run)

    async def select_relevant_internal_links(
        self,
        topic: str,
        links: Sequence[InternalLink],
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> list[InternalLink]:
        """Pick the site pages worth linking from an article on `topic`. Never fails: errors yield []."""
        if not links:
            return []

        prompt = self.prompts.render("internal_links", topic=topic, links=links)
        try:
            raw = await self._json("fast", "internal_links", prompt, abort, response_schema=INTERNAL_LINKS_SCHEMA)
            return normalize_internal_links(raw)
        except CancelledByCaller:
            raise
        except Exception as e:
            logger.warning("Internal link selection failed, returning none", error_type=type(e).__name__, error=str(e)[:200])
            return []

    async def generate_outline(
        self,
        topic: str,
        keywords: Sequence[str],
        competitors: Sequence[CompetitorSummary],
        links: Sequence[InternalLink],
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> list[str]:
        async def run() -> list[str]:
            prompt = self.prompts.render(
                "outline", topic=topic, keywords=list(keywords), competitors=competitors, links=links
            )
            raw = await self._json("quality", "outline", prompt, abort, response_schema=STRING_ARRAY_SCHEMA)
            return normalize_string_list(raw, wrappers=("outline", "sections"))

        return await self._labelled("outline", MESSAGES["outline"], run)

    async def refine_outline(
        self,
        current_outline: str | Sequence[str],
        topic: str,
        keywords: Sequence[str],
        competitors: Sequence[CompetitorSummary],
        links: Sequence[InternalLink],
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> list[str]:
        if not isinstance(current_outline, str):
            current_outline = "\n".join(current_outline)

        async def run() -> list[str]:
            prompt = self.prompts.render(
                "refine_outline",
                current_outline=current_outline,
                topic=topic,
                keywords=list(keywords),
                competitors=competitors,
                links=links,
            )
            raw = await self._json("quality", "refine_outline", prompt, abort, response_schema=STRING_ARRAY_SCHEMA)
            return normalize_string_list(raw, wrappers=("outline", "sections"))

        return await self._labelled("refine_outline", MESSAGES["refine_outline"], run)

    # === Drafting ===

    async def stream_long_form_content(
        self,
        prompt: str,
        links: Sequence[InternalLink] = (),
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> TextStream:
        """
        Open a streaming draft generation.

        Opening the stream is retried and may fall back to the fallback
        model; failures after the first chunk reach the consumer unchanged.
        """
        full_prompt = self.prompts.render("long_form", prompt=prompt, links=links)

        async def task(model: str) -> TextStream:
            return await self.llm_client.open_stream(GenerationRequest(model=model, prompt=full_prompt))

        return await self._labelled(
            "long_form",
            MESSAGES["long_form"],
            lambda: self.router.route(task, self.tiers["quality"], abort=abort, label="long_form"),
        )

    async def review_article(self, draft: str, *, abort: Optional[asyncio.Event] = None) -> str:
        async def run() -> str:
            prompt = self.prompts.render("review_article", draft=draft)
            return await self._text("quality", "review_article", prompt, abort)

        return await self._labelled("review_article", MESSAGES["review_article"], run)

    async def generate_contextual_addition(
        self,
        prev_context: str,
        next_context: str,
        kind: AdditionType | str,
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> str:
        """
        Generate a block to insert between two draft sections.

        IMAGE and GRAPH results are returned as `[IMAGE: ...]` / `[GRAPH: ...]`
        placeholders; TEXT and TABLE results are returned as written.
        """
        kind = AdditionType(kind)
        window = self.settings.ADDITION_CONTEXT_CHARS

        async def run() -> str:
            prompt = self.prompts.render(
                "contextual_addition",
                prev_context=prev_context[-window:] if window else "",
                next_context=next_context[:window],
                kind=kind.value,
            )
            text = await self._text("quality", "contextual_addition", prompt, abort)
            if kind in (AdditionType.IMAGE, AdditionType.GRAPH):
                return f"[{kind.value}: {text}]"
            return text

        return await self._labelled("contextual_addition", MESSAGES["contextual_addition"], run)

    async def _run_chat_tool(self, call: FunctionCall, site: SiteContext, abort: Optional[asyncio.Event]) -> str:
        """
        Execute a tool call on the webhook.

        The webhook client already retries its own failures, so whatever
        still fails is raised as fatal: the model router must not replay the
        chat turn or fall back to another model over a webhook outage.
        """
        try:
            if call.name == "get_keyword_data":
                data: Any = await self.webhook_client.fetch_keyword_suggestions(
                    site, str(call.args.get("keyword", "")), abort=abort
                )
            elif call.name == "analyze_url":
                data = await self.webhook_client.scrape_url(site, str(call.args.get("url", "")), abort=abort)
            else:
                logger.warning("Model called an unknown tool", tool=call.name)
                return ""
        except CancelledByCaller:
            raise
        except Exception as e:
            raise FatalUpstreamError(
                f"Chat tool {call.name} failed: {getattr(e, 'message', None) or e}",
                status=getattr(e, "status", None),
                details={"tool": call.name},
            ) from e
        return json.dumps(data)

    async def chat_with_draft(
        self,
        draft: str,
        history: Sequence[ChatTurn],
        message: str,
        site: SiteContext,
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> str:
        """
        Answer an editing request about the draft.

        The model may call one webhook-backed tool (keyword data or URL
        analysis); its result is sent back and the follow-up answer returned.
        """
        limit = self.settings.DRAFT_CONTEXT_LIMIT
        system_instruction = self.prompts.render(
            "chat_system", draft=draft[:limit], truncated=len(draft) > limit
        )

        async def task(model: str) -> str:
            session = self.llm_client.open_chat(
                model,
                system_instruction=system_instruction,
                history=list(history),
                tools=CHAT_TOOLS,
                use_search=True,
            )
            result = await session.send(message)

            if result.function_calls:
                call = result.function_calls[0]
                logger.info("Chat tool call", tool=call.name, model=model)
                tool_result = await self._run_chat_tool(call, site, abort)
                result = await session.send_function_response(call.name, {"result": tool_result})

            text = result.text.strip()
            if not text:
                raise MalformedResponseError("Chat returned an empty response", details={"model": model})
            return text

        return await self._labelled(
            "chat",
            MESSAGES["chat"],
            lambda: self.router.route(task, self.tiers["quality"], abort=abort, label="chat"),
        )

    async def transform_text(
        self,
        text: str,
        action: str,
        language: str,
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> str:
        """Rewrite `text` with a preset action (Shorten, Humanize, ...) or a free-form instruction."""
        async def run() -> str:
            prompt = self.prompts.render(
                "transform_text", instruction=instruction_for_action(action), language=language, text=text
            )
            return await self._text("quality", "transform_text", prompt, abort)

        return await self._labelled("transform_text", MESSAGES["transform_text"], run)

    async def regenerate_title(self, article: str, *, abort: Optional[asyncio.Event] = None) -> str:
        async def run() -> str:
            prompt = self.prompts.render("regenerate_title", snippet=article[: self.settings.TITLE_SNIPPET_LIMIT])
            return await self._text("fast", "regenerate_title", prompt, abort)

        return await self._labelled("regenerate_title", MESSAGES["regenerate_title"], run)

    # === Media ===

    @staticmethod
    def _first_image(result: GenerationResult) -> GeneratedImage:
        for media in result.media:
            if media.data:
                return GeneratedImage(mime_type=media.mime_type or "image/png", data=media.data)
        raise MalformedResponseError(
            "Response contained no image data",
            details={"model": result.model_version, "text": result.text[:200]},
        )

    async def generate_article_image(self, prompt: str, *, abort: Optional[asyncio.Event] = None) -> GeneratedImage:
        """
        Generate a 16:9 editorial image.

        The primary model answers through generate_content with inline image
        parts; the fallback is the dedicated Imagen endpoint.
        """
        enhanced = self.prompts.render("image_generation", prompt=prompt, style=IMAGE_STYLE)

        async def inline_image(model: str) -> GeneratedImage:
            result = await self.llm_client.generate(GenerationRequest(model=model, prompt=enhanced))
            return self._first_image(result)

        async def imagen(model: str) -> GeneratedImage:
            result = await self.llm_client.generate_images(model, enhanced, aspect_ratio="16:9", number_of_images=1)
            return self._first_image(result)

        return await self._labelled(
            "article_image",
            MESSAGES["article_image"],
            lambda: self.router.route(inline_image, self.tiers["image"], imagen, abort=abort, label="article_image"),
        )

    async def edit_article_image(
        self,
        image: bytes,
        mime_type: str,
        prompt: str,
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> GeneratedImage:
        enhanced = self.prompts.render("image_edit", prompt=prompt, style=IMAGE_EDIT_STYLE)
        source = InlineImageInput(mime_type=mime_type, data=image)

        async def task(model: str) -> GeneratedImage:
            result = await self.llm_client.generate(GenerationRequest(model=model, prompt=enhanced, images=[source]))
            return self._first_image(result)

        return await self._labelled(
            "edit_image",
            MESSAGES["edit_image"],
            lambda: self.router.route(task, self.tiers["image_edit"], abort=abort, label="edit_image"),
        )

    async def generate_speech(
        self,
        text: str,
        voice: Optional[str] = None,
        *,
        abort: Optional[asyncio.Event] = None,
    ) -> SpeechAudio:
        """Synthesize `text` to raw PCM (container encoding is left to the caller)."""

        async def run() -> SpeechAudio:
            prompt = self.prompts.render("speech", text=text)
            result = await self._invoke(
                "speech",
                "speech",
                prompt,
                abort,
                response_modalities=["AUDIO"],
                voice_name=voice or self.settings.SPEECH_DEFAULT_VOICE,
            )
            audio = next((m for m in result.media if m.data), None)
            if audio is None:
                raise MalformedResponseError("No audio data received", details={"model": result.model_version})
            return SpeechAudio(
                pcm=audio.data,
                sample_rate=self.settings.SPEECH_SAMPLE_RATE,
                channels=self.settings.SPEECH_CHANNELS,
                mime_type=audio.mime_type,
            )

        return await self._labelled("speech", MESSAGES["speech"], run)

    async def generate_social_posts(self, text: str, *, abort: Optional[asyncio.Event] = None) -> SocialPosts:
        async def run() -> SocialPosts:
            prompt = self.prompts.render("social_posts", text=text)
            raw = await self._json("fast", "social_posts", prompt, abort, response_schema=SOCIAL_POSTS_SCHEMA)
            return normalize_social_posts(raw)

        return await self._labelled("social_posts", MESSAGES["social_posts"], run)

    # === Webhook data ===

    async def fetch_internal_links(self, site: SiteContext, *, abort: Optional[asyncio.Event] = None) -> list[InternalLink]:
        try:
            return await self.webhook_client.fetch_internal_links(site, abort=abort)
        except CancelledByCaller:
            raise
        except Exception as e:
            logger.error("Webhook call failed", function=WebhookFunction.URL_MAP.value, error_type=type(e).__name__)
            raise TaskFailedError(_tool_failure_message(WebhookFunction.URL_MAP, e), task="internal_links") from e

    async def fetch_ranked_keywords(
        self, site: SiteContext, *, abort: Optional[asyncio.Event] = None
    ) -> list[RankedKeyword]:
        try:
            return await self.webhook_client.fetch_ranked_keywords(site, abort=abort)
        except CancelledByCaller:
            raise
        except Exception as e:
            logger.error(
                "Webhook call failed",
                function=WebhookFunction.PAGE_RANKED_KEYWORDS.value,
                error_type=type(e).__name__,
            )
            raise TaskFailedError(
                _tool_failure_message(WebhookFunction.PAGE_RANKED_KEYWORDS, e), task="ranked_keywords"
            ) from e
