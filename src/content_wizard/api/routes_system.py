"""Service routes: health and version information."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from content_wizard.api.dependencies import get_facade, get_settings
from content_wizard.api.models import HealthResponse, VersionResponse
from content_wizard.config import Settings
from content_wizard.facade import GenerationFacade

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="""
    Reports whether the model client and the webhook tool are configured.

    No upstream call is made: a configured API key is reported as "ok".
    The webhook tool is optional, so a missing webhook only degrades.
    """,
    responses={
        200: {"description": "Healthy or degraded"},
        503: {"description": "Model client unusable"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
    facade: GenerationFacade = Depends(get_facade),
) -> JSONResponse:
    services = {
        "gemini": "ok" if await facade.llm_client.health_check() else "not_configured",
        "webhook": "ok" if facade.webhook_client.configured else "not_configured",
    }

    if services["gemini"] != "ok":
        health_status = "unhealthy"
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif services["webhook"] != "ok":
        health_status = "degraded"
        status_code = status.HTTP_200_OK
    else:
        health_status = "healthy"
        status_code = status.HTTP_200_OK

    logger.info("Health check", extra={"status": health_status, "services": services})

    response = HealthResponse(
        status=health_status,
        version=settings.APP_VERSION,
        services=services,
    )
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


@router.get(
    "/version",
    response_model=VersionResponse,
    summary="Get version and model routing information",
)
async def get_version(
    settings: Settings = Depends(get_settings),
    facade: GenerationFacade = Depends(get_facade),
) -> VersionResponse:
    return VersionResponse(
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        models={
            name: {"primary": tier.primary_model, "fallback": tier.fallback_model}
            for name, tier in facade.tiers.items()
        },
    )
