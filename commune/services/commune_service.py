"""Orchestration service for a single commune exchange.

The CommuneService runs the stages of a request in order: configuration
check, caller identification, rate limiting, payload validation, prompt
assembly and generation.  Each stage raises a
:class:`~commune.utils.error_handler.CommuneError` subclass on failure so
controllers can remain thin.
"""

from __future__ import annotations

import uuid
from functools import lru_cache
from typing import Any, Mapping

from loguru import logger

from ..chains.prompt_builder import build_messages
from ..config.app_config import AppConfig, get_app_config
from ..models.commune_response import CommuneResponse
from ..utils.error_handler import AuthenticationError, ConfigurationError, RateLimitError
from .identity_service import CallerIdentity, IdentityService, get_identity_service
from .llm_service import LLMService, get_llm_service
from .rate_limiter import SlidingWindowRateLimiter, get_rate_limiter
from .validation import validate


class CommuneService:
    """Coordinates identity, rate limiting, validation and generation."""

    def __init__(
        self,
        app_config: AppConfig | None = None,
        llm_service: LLMService | None = None,
        identity_service: IdentityService | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
    ) -> None:
        self.app_config = app_config or get_app_config()
        self.llm_service = llm_service or get_llm_service()
        self.identity_service = identity_service or get_identity_service()
        self.rate_limiter = rate_limiter or get_rate_limiter()

    @property
    def require_auth(self) -> bool:
        return self.app_config.require_auth

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when a required collaborator has no credentials."""
        if not self.llm_service.is_configured:
            logger.error("OPENAI_API_KEY is missing")
            raise ConfigurationError("OPENAI_API_KEY is missing")
        if self.require_auth and not self.identity_service.is_configured:
            logger.error("SUPABASE_URL or SUPABASE_ANON_KEY is missing while auth is required")
            raise ConfigurationError("Identity service is not configured")

    async def identify(self, authorization: str | None, headers: Mapping[str, str]) -> CallerIdentity:
        """Resolve the caller, enforcing authentication when it is mandatory."""
        caller = await self.identity_service.resolve(authorization, headers)
        if self.require_auth and caller.user_id is None:
            raise AuthenticationError("No resolvable user for request")
        logger.debug(
            "Resolved caller user={} network={}",
            caller.user_id,
            caller.network_key,
        )
        return caller

    def check_rate_limit(self, caller: CallerIdentity) -> None:
        """Count the request against the caller's window.

        Anonymous callers whose origin cannot be determined share the
        ``"unknown"`` key and are not limited.
        """
        if caller.is_anonymous_unknown:
            return
        if not self.rate_limiter.admit(caller.key):
            raise RateLimitError(f"Rate limit exceeded for caller {caller.key}")

    async def reply(self, raw_body: Any) -> CommuneResponse:
        """Validate the payload and generate the spirit's answer."""
        request = validate(raw_body)
        logger.info(
            "Commune request: message_chars={} history={} seance_audio={} location={}",
            len(request.message),
            len(request.conversation_history),
            request.seance_audio_recorded,
            request.location is not None,
        )
        messages = build_messages(
            request.conversation_history,
            request.message,
            location=request.location,
            seance_audio_recorded=request.seance_audio_recorded,
        )
        answer = await self.llm_service.generate(messages)
        return CommuneResponse(response=answer, session_id=str(uuid.uuid4()))


@lru_cache()
def get_commune_service() -> CommuneService:
    """Dependency injector for CommuneService instances.

    FastAPI will call this function to obtain a singleton
    CommuneService.  The lru_cache decorator ensures only one
    instance exists.
    """
    return CommuneService()
