"""
FastAPI application entry point for the content wizard.
"""

from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from content_wizard.api.error_handlers import EXCEPTION_HANDLERS
from content_wizard.api.middleware import RequestTracingMiddleware
from content_wizard.api.routes_drafting import router as drafting_router
from content_wizard.api.routes_planning import router as planning_router
from content_wizard.api.routes_system import router as system_router
from content_wizard.config import Settings
from content_wizard.facade import GenerationFacade
from content_wizard.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None, facade: Optional[GenerationFacade] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to run with (loaded from the environment if omitted)
        facade: Pre-built facade, e.g. wired with fake clients in tests

    Returns:
        Configured FastAPI app; settings and facade live on app.state
    """
    settings = settings or Settings()
    configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
    facade = facade or GenerationFacade.from_settings(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="AI-assisted SEO article wizard: planning, drafting and media generation",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.facade = facade

    # Request tracing middleware (must be first for request_id in all logs)
    app.add_middleware(RequestTracingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # TODO: restrict to the wizard frontend origin once it is deployed
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)

    app.include_router(system_router, tags=["system"])
    app.include_router(planning_router, prefix="/planning", tags=["planning"])
    app.include_router(drafting_router, prefix="/drafting", tags=["drafting"])

    @app.on_event("startup")
    async def startup():
        logger.info(
            "Application startup",
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
            gemini_configured=bool(settings.GEMINI_API_KEY),
            webhook_configured=facade.webhook_client.configured,
        )
        if not settings.GEMINI_API_KEY:
            logger.error("GEMINI_API_KEY is not set; every generation request will fail")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("Application shutdown")
        await facade.close()
        logger.info("Application shutdown complete")

    if settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)

    @app.get("/")
    async def root():
        """Root endpoint with API documentation links."""
        return {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/docs",
            "health": "/health",
            "metrics": "/metrics" if settings.PROMETHEUS_ENABLED else None,
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "content_wizard.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,  # Only for development
    )
