"""
Planning routes: everything the wizard does before the draft exists.

Topic ideation, research (competitors, E-E-A-T sources, site data from the
webhook tool), keyword strategy and outlining. Each route is a thin wrapper
around one GenerationFacade method; failures surface through the exception
handlers in error_handlers.py.
"""

import logging

from fastapi import APIRouter, Depends

from content_wizard.api.dependencies import get_facade
from content_wizard.api.models import (
    ErrorResponse,
    InternalLinkSelectionRequest,
    KeywordStrategyRequest,
    OutlineRequest,
    RefineOutlineRequest,
    SiteRequest,
    StringListResponse,
    ThemeRequest,
    TopicRequest,
)
from content_wizard.facade import GenerationFacade
from content_wizard.models.records import (
    CompetitorAnalysis,
    EeatSource,
    InternalLink,
    RankedKeyword,
    SiteContext,
    TopicIdea,
)

logger = logging.getLogger(__name__)

router = APIRouter()

GENERATION_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request format"},
    502: {"model": ErrorResponse, "description": "Generation failed upstream (user-facing message included)"},
}


# === Ideation ===


@router.post(
    "/topics",
    response_model=list[TopicIdea],
    summary="Brainstorm topic ideas for a theme",
    responses=GENERATION_RESPONSES,
)
async def topic_ideas(
    request: ThemeRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> list[TopicIdea]:
    return await facade.generate_topic_ideas(request.theme)


@router.post(
    "/topics/website",
    response_model=list[TopicIdea],
    summary="Brainstorm topic ideas for a website",
    description="""
    Uses search grounding to look at the website's existing content and
    suggests topics for its market (country and language).
    """,
    responses=GENERATION_RESPONSES,
)
async def website_topic_ideas(
    site: SiteContext,
    facade: GenerationFacade = Depends(get_facade),
) -> list[TopicIdea]:
    logger.info("Website topic ideas requested", extra={"website_url": site.website_url})
    return await facade.generate_topic_ideas_for_website(site)


# === Research ===


@router.post(
    "/competitors",
    response_model=CompetitorAnalysis,
    summary="Analyze top competing articles",
    responses=GENERATION_RESPONSES,
)
async def competitors(
    request: TopicRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> CompetitorAnalysis:
    return await facade.analyze_competitors(request.topic)


@router.post(
    "/eeat-sources",
    response_model=list[EeatSource],
    summary="Find authoritative sources for a topic",
    responses=GENERATION_RESPONSES,
)
async def eeat_sources(
    request: TopicRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> list[EeatSource]:
    return await facade.find_eeat_sources(request.topic)


@router.post(
    "/site/internal-links",
    response_model=list[InternalLink],
    summary="Fetch the site map through the webhook tool",
    responses=GENERATION_RESPONSES,
)
async def site_internal_links(
    request: SiteRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> list[InternalLink]:
    return await facade.fetch_internal_links(request.site)


@router.post(
    "/site/ranked-keywords",
    response_model=list[RankedKeyword],
    summary="Fetch keywords the site already ranks for",
    responses=GENERATION_RESPONSES,
)
async def site_ranked_keywords(
    request: SiteRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> list[RankedKeyword]:
    return await facade.fetch_ranked_keywords(request.site)


# === Keywords & links ===


@router.post(
    "/keywords/strategy",
    response_model=StringListResponse,
    summary="Select target keywords",
    description="""
    Generates seed keywords, expands them with the webhook keyword tool and
    lets the model pick the final set, taking existing rankings into account.
    """,
    responses=GENERATION_RESPONSES,
)
async def keyword_strategy(
    request: KeywordStrategyRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> StringListResponse:
    keywords = await facade.generate_keyword_strategy(request.topic, request.ranked_keywords, request.site)
    return StringListResponse(items=keywords)


@router.post(
    "/internal-links/select",
    response_model=list[InternalLink],
    summary="Pick internal links relevant to a topic",
    description="Never fails on model errors: an empty list is returned instead.",
)
async def select_internal_links(
    request: InternalLinkSelectionRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> list[InternalLink]:
    return await facade.select_relevant_internal_links(request.topic, request.links)


# === Outline ===


@router.post(
    "/outline/suggestions",
    response_model=StringListResponse,
    summary="Suggest outline structures",
    responses=GENERATION_RESPONSES,
)
async def outline_suggestions(
    request: TopicRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> StringListResponse:
    return StringListResponse(items=await facade.generate_outline_suggestions(request.topic))


@router.post(
    "/outline",
    response_model=StringListResponse,
    summary="Generate the article outline",
    responses=GENERATION_RESPONSES,
)
async def outline(
    request: OutlineRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> StringListResponse:
    sections = await facade.generate_outline(request.topic, request.keywords, request.competitors, request.links)
    return StringListResponse(items=sections)


@router.post(
    "/outline/refine",
    response_model=StringListResponse,
    summary="Refine an existing outline",
    responses=GENERATION_RESPONSES,
)
async def refine_outline(
    request: RefineOutlineRequest,
    facade: GenerationFacade = Depends(get_facade),
) -> StringListResponse:
    sections = await facade.refine_outline(
        request.current_outline,
        request.topic,
        request.keywords,
        request.competitors,
        request.links,
    )
    return StringListResponse(items=sections)
