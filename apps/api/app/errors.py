"""Exception handlers mapping pipeline failures to HTTP responses.

Every error body has the same shape::

    {"error": "<human readable message>", "status": "<status class>"}
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from medmap_core.errors import InvalidRequest, MindMapError, UnknownFailure
from medmap_core.utils.logging import get_logger

logger = get_logger(__name__)


def error_response(exc: MindMapError, message: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message or str(exc), "status": exc.status_class},
    )


async def mindmap_error_handler(request: Request, exc: MindMapError) -> JSONResponse:
    logger.warning(
        f"{request.method} {request.url.path} failed ({exc.status_class}): {exc}"
    )
    return error_response(exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(InvalidRequest(f"Invalid request payload: {exc.errors()}"))


async def internal_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception: {exc}")
    return error_response(UnknownFailure(str(exc) or "Unknown error."))


def register_error_handlers(app: FastAPI) -> None:
    """Attach the pipeline exception handlers to the application."""
    app.add_exception_handler(MindMapError, mindmap_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, internal_exception_handler)
