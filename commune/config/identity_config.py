"""Settings for the external identity provider.

Bearer tokens presented by the mobile app are exchanged against the
provider's ``/auth/v1/user`` endpoint.  The base URL and the public
(anon) API key are read from ``SUPABASE_URL`` and ``SUPABASE_ANON_KEY``.
"""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class IdentityConfig(BaseSettings):
    """Connection details for the identity service."""

    base_url: Optional[str] = Field(default=None, alias="SUPABASE_URL")
    api_key: Optional[str] = Field(default=None, alias="SUPABASE_ANON_KEY")
    timeout: float = Field(10.0, alias="IDENTITY_TIMEOUT")

    @field_validator("base_url")
    def strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value:
            return value.rstrip("/")
        return value

    @field_validator("timeout")
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("IDENTITY_TIMEOUT must be positive")
        return value

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    @property
    def user_endpoint(self) -> str:
        return f"{self.base_url}/auth/v1/user"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_identity_config() -> IdentityConfig:
    """Return a cached identity service configuration."""

    return IdentityConfig()
