"""
FastAPI exception handlers for structured error responses.

Maps domain exceptions to appropriate HTTP status codes and formats.
Upstream diagnostics are logged, never returned to the client.
"""

import logging
from datetime import datetime, timezone

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from content_wizard.resilience.exceptions import (
    CancelledByCaller,
    MalformedResponseError,
    TaskFailedError,
    UpstreamError,
)

logger = logging.getLogger(__name__)

HTTP_499_CLIENT_CLOSED_REQUEST = 499


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def task_failed_handler(request: Request, exc: TaskFailedError) -> JSONResponse:
    """
    Handle labelled facade failures.

    Maps to 502 Bad Gateway: the failure happened in a remote service.
    """
    cause = exc.__cause__
    logger.error(
        "Generation task failed",
        extra={
            "task": exc.task,
            "cause_type": type(cause).__name__ if cause else None,
            "cause": str(cause)[:500] if cause else None,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": "generation_failed",
            "message": exc.user_message,
            "task": exc.task,
            "timestamp": _now(),
        },
    )


async def cancelled_handler(request: Request, exc: CancelledByCaller) -> JSONResponse:
    logger.info("Request cancelled by caller", extra={"label": exc.label})

    return JSONResponse(
        status_code=HTTP_499_CLIENT_CLOSED_REQUEST,
        content={
            "error": "cancelled",
            "message": "The request was cancelled",
            "timestamp": _now(),
        },
    )


async def malformed_response_handler(request: Request, exc: MalformedResponseError) -> JSONResponse:
    """
    Handle unusable model/webhook payloads that escaped the facade.

    Maps to 502 Bad Gateway.
    """
    logger.error("Malformed upstream response", extra={"details": exc.details})

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": "malformed_response",
            "message": "The upstream service returned an unusable response",
            "timestamp": _now(),
        },
    )


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """
    Handle remote service failures that escaped the facade.

    Maps to 502 Bad Gateway (upstream service unavailable).
    """
    logger.error(
        "Upstream error",
        extra={"status": exc.status, "error": exc.message, "details": exc.details},
    )

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": "upstream_failed",
            "message": "An upstream service failed",
            "timestamp": _now(),
        },
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle invalid request bodies.

    Maps to 400 Bad Request (client error).
    """
    logger.warning("Invalid request format", extra={"errors": exc.errors()})

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_request",
            "message": "Request validation failed",
            "details": jsonable_errors(exc.errors()),
            "timestamp": _now(),
        },
    )


async def pydantic_validation_error_handler(request: Request, exc: PydanticValidationError) -> JSONResponse:
    logger.warning("Invalid data", extra={"errors": exc.errors()})

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_request",
            "message": "Request validation failed",
            "details": jsonable_errors(exc.errors()),
            "timestamp": _now(),
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.

    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", extra={"error_type": type(exc).__name__})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "timestamp": _now(),
        },
    )


def jsonable_errors(errors: list) -> list:
    """Drop non-serializable context (e.g. exception objects) from pydantic errors."""
    return [{k: v for k, v in err.items() if k in ("type", "loc", "msg")} for err in errors]


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    TaskFailedError: task_failed_handler,
    CancelledByCaller: cancelled_handler,
    MalformedResponseError: malformed_response_handler,
    UpstreamError: upstream_error_handler,
    RequestValidationError: request_validation_error_handler,
    PydanticValidationError: pydantic_validation_error_handler,
    Exception: generic_error_handler,
}
