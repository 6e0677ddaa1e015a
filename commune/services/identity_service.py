"""Resolve the caller of a request to a rate limiting key.

Authenticated callers are identified by the user id the identity
provider returns for their bearer token.  Anonymous callers fall back to
the client address reported by the edge proxy.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping

import httpx
from loguru import logger

from ..config.identity_config import IdentityConfig, get_identity_config
from ..utils.api_client import get_json

UNKNOWN_CALLER = "unknown"


@dataclass(frozen=True)
class CallerIdentity:
    """Who is calling: a resolved user id and/or a network origin."""

    user_id: str | None
    network_key: str

    @property
    def key(self) -> str:
        return self.user_id or self.network_key

    @property
    def is_anonymous_unknown(self) -> bool:
        """True when nothing identifies the caller at all."""
        return self.user_id is None and self.network_key == UNKNOWN_CALLER


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def network_caller_key(headers: Mapping[str, str]) -> str:
    """Best-effort client address from proxy headers.

    Uses the first hop of ``X-Forwarded-For``, then ``CF-Connecting-IP``,
    then the literal ``"unknown"``.
    """
    forwarded_for = headers.get("x-forwarded-for") or ""
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop
    connecting_ip = (headers.get("cf-connecting-ip") or "").strip()
    return connecting_ip or UNKNOWN_CALLER


class IdentityService:
    """Exchanges bearer tokens for user ids with the identity provider."""

    def __init__(
        self,
        identity_config: IdentityConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.identity_config = identity_config or get_identity_config()
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self.identity_config.is_configured

    async def resolve_user_id(self, token: str | None) -> str | None:
        """Return the user id for ``token`` or ``None`` if it cannot be resolved.

        Failures are logged and never raised; callers decide whether an
        unresolved identity is acceptable.
        """
        if not token:
            return None
        if not self.is_configured:
            logger.warning("Identity service is not configured; ignoring bearer token")
            return None

        headers = {
            "Authorization": f"Bearer {token}",
            "apikey": self.identity_config.api_key or "",
        }
        try:
            payload = await get_json(
                self.identity_config.user_endpoint,
                headers,
                timeout=self.identity_config.timeout,
                transport=self._transport,
            )
        except httpx.HTTPStatusError as exc:
            logger.warning("Identity exchange rejected: status={}", exc.response.status_code)
            return None
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Identity exchange failed: {}", exc)
            return None

        user_id = payload.get("id") if isinstance(payload, dict) else None
        if not isinstance(user_id, str) or not user_id:
            logger.warning("Identity response did not contain a user id")
            return None
        return user_id

    async def resolve(self, authorization: str | None, headers: Mapping[str, str]) -> CallerIdentity:
        """Resolve request credentials and origin headers to a caller."""
        user_id = await self.resolve_user_id(extract_bearer_token(authorization))
        return CallerIdentity(user_id=user_id, network_key=network_caller_key(headers))


@lru_cache()
def get_identity_service() -> IdentityService:
    """Dependency injector for a shared IdentityService."""
    return IdentityService()
