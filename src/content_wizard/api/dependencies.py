"""
FastAPI dependency injection for the content wizard API.

The facade and settings are built once by create_app() and stored on
app.state; dependencies only read them back, so tests can hand create_app()
a facade wired with fakes.
"""

from fastapi import Request

from content_wizard.config import Settings
from content_wizard.facade import GenerationFacade


def get_settings(request: Request) -> Settings:
    """
    Get the settings the app was created with.

    Returns:
        Settings instance
    """
    return request.app.state.settings


def get_facade(request: Request) -> GenerationFacade:
    """
    Get the shared generation facade.

    The facade is stateless per call and safe to share across requests.

    Returns:
        GenerationFacade instance
    """
    return request.app.state.facade
