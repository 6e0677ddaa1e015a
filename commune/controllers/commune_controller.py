"""API controller for the commune endpoint.

A single path accepts ``POST`` requests from the app and answers CORS
preflight ``OPTIONS`` requests.  Any other method gets the router's
405, which ``main.py`` renders as a commune error.  All failures are
raised as :class:`CommuneError` subclasses and rendered by the
exception handler registered in ``main.py``.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from loguru import logger

from ..models.commune_response import CommuneResponse, ErrorResponse
from ..services.commune_service import CommuneService, get_commune_service
from ..utils.error_handler import CommuneError, UnexpectedError
from ..utils.http import cors_headers, preflight_headers

router = APIRouter(prefix="", tags=["Commune"])


@router.options("/")
async def preflight_endpoint() -> Response:
    """Answer CORS preflight requests with an empty body."""
    return Response(status_code=status.HTTP_200_OK, headers=preflight_headers())


@router.post(
    "/",
    response_model=CommuneResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def commune_endpoint(
    request: Request,
    response: Response,
    service: CommuneService = Depends(get_commune_service),
) -> CommuneResponse:
    """Relay a message to the spirit and return its reply.

    The body is only read once the caller has been identified and
    admitted by the rate limiter.
    """
    try:
        service.ensure_configured()
        caller = await service.identify(request.headers.get("authorization"), request.headers)
        service.check_rate_limit(caller)
        body = await request.json()
        reply = await service.reply(body)
        logger.info("Reply generated for session {}", reply.session_id)
    except CommuneError:
        raise
    except Exception as exc:
        logger.exception("Unhandled exception during commune processing")
        raise UnexpectedError(str(exc)) from exc

    response.headers.update(cors_headers())
    return reply

