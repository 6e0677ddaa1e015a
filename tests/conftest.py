from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

import pytest
from fastapi.testclient import TestClient

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from commune.config.app_config import AppConfig
from commune.config.identity_config import IdentityConfig
from commune.config.llm_config import LlmConfig
from commune.main import app
from commune.services.commune_service import CommuneService, get_commune_service
from commune.services.identity_service import IdentityService
from commune.services.llm_service import LLMService
from commune.services.rate_limiter import SlidingWindowRateLimiter

VALID_TOKEN = "valid-token"
USER_ID = "6f1c2d4e-0000-4000-8000-000000000001"


class FakeLLMService(LLMService):
    """Records the messages it is asked to complete and returns a canned reply."""

    def __init__(self, reply: str = "...she sees you... rest now...", configured: bool = True) -> None:
        super().__init__(LlmConfig(api_key="sk-test" if configured else None))
        self.reply = reply
        self.calls: list[Sequence] = []

    async def generate(self, messages):
        self.calls.append(list(messages))
        return self.reply


class FakeIdentityService(IdentityService):
    """Accepts a single known token without any network exchange."""

    def __init__(self, configured: bool = True) -> None:
        config = IdentityConfig(
            base_url="https://identity.test" if configured else None,
            api_key="anon-key" if configured else None,
        )
        super().__init__(config)

    async def resolve_user_id(self, token):
        return USER_ID if token == VALID_TOKEN else None


def make_service(
    *,
    require_auth: bool = True,
    llm: LLMService | None = None,
    identity: IdentityService | None = None,
    limiter: SlidingWindowRateLimiter | None = None,
) -> CommuneService:
    return CommuneService(
        app_config=AppConfig(require_auth=require_auth),
        llm_service=llm or FakeLLMService(),
        identity_service=identity or FakeIdentityService(),
        rate_limiter=limiter or SlidingWindowRateLimiter(),
    )


@pytest.fixture
def fake_llm() -> FakeLLMService:
    return FakeLLMService()


@pytest.fixture
def commune_service(fake_llm: FakeLLMService) -> CommuneService:
    return make_service(llm=fake_llm)


@pytest.fixture
def client(commune_service: CommuneService):
    app.dependency_overrides[get_commune_service] = lambda: commune_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {VALID_TOKEN}"}
