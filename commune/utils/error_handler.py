"""Error handling utilities and custom exceptions.

Every failure the commune endpoint can report is a :class:`CommuneError`
carrying the HTTP status and the public message returned to the client.
Internal detail (upstream status codes, exception text) is logged but
never included in the response body.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from loguru import logger

from ..models.enums import ValidationFailure
from .http import cors_headers


class CommuneError(Exception):
    """Base class for errors rendered as ``{"error": ...}`` responses."""

    status_code: int = 500
    public_message: str = "The veil is too thick... try again"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail


class ConfigurationError(CommuneError):
    """A required credential or endpoint is not configured."""

    status_code = 500
    public_message = "Service misconfigured"


class AuthenticationError(CommuneError):
    """The caller could not be resolved to a user while auth is mandatory."""

    status_code = 401
    public_message = "Unauthorized"


class RateLimitError(CommuneError):
    """The caller exceeded the sliding window request budget."""

    status_code = 429
    public_message = "The veil resists... slow down"


class MethodNotAllowedError(CommuneError):
    status_code = 405
    public_message = "Method not allowed"


class ValidationError(CommuneError):
    """The request payload failed one of the structural checks."""

    status_code = 400

    def __init__(self, failure: ValidationFailure) -> None:
        super().__init__(failure.value)
        self.failure = failure

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return self.failure.value


class UpstreamError(CommuneError):
    """The generation service answered with a non-success response."""

    status_code = 500
    public_message = "Failed to communicate with spirit realm"


class UnexpectedError(CommuneError):
    """Any other fault raised while processing a request."""

    status_code = 500
    public_message = "The veil is too thick... try again"


async def commune_exception_handler(request: Request, exc: CommuneError) -> JSONResponse:
    """Convert a CommuneError into its JSON error response."""
    if exc.status_code >= 500:
        logger.error("{} on {} {}: {}", type(exc).__name__, request.method, request.url.path, exc)
    else:
        logger.warning("{} on {} {}: {}", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.public_message},
        headers=cors_headers(),
    )


async def router_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Render router-level 405s like every other commune error.

    Starlette raises these for any method a path has no route for; all
    other statuses keep FastAPI's default rendering.
    """
    if exc.status_code == 405:
        return await commune_exception_handler(
            request, MethodNotAllowedError(f"{request.method} is not supported")
        )
    return await http_exception_handler(request, exc)
