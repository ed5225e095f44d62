"""Translate domain errors into the JSON error envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ledgerkit.domain.errors import DomainError, NotFoundError

logger = logging.getLogger(__name__)


def status_for(error: DomainError, not_found_status: int = 404) -> int:
    """Return the HTTP status for a domain error.

    ``not_found_status`` lets a route report an unknown reference inside the
    request body as a bad request instead of a missing resource.
    """
    if isinstance(error, NotFoundError):
        return not_found_status
    return 400


def error_response(error: DomainError, not_found_status: int = 404) -> JSONResponse:
    status_code = status_for(error, not_found_status)
    return JSONResponse(status_code=status_code, content={"error": str(error), "kind": error.kind})


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers so every failure uses the {"error": ...} envelope."""

    @app.exception_handler(DomainError)
    async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc)
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": _describe_validation_error(exc), "kind": "ValidationError"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
