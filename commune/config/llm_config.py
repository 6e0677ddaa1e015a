from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class LlmConfig(BaseSettings):
    """Configuration settings for the chat completion backend.

    The API key is optional at startup so that a missing credential is
    reported per request as a misconfiguration instead of preventing the
    application from booting.
    """

    api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    base_url: Optional[str] = Field(default=None, alias="LLM_BASE_URL")
    model: str = Field("gpt-4o-mini", alias="LLM_MODEL")
    temperature: float = Field(0.9, alias="LLM_TEMPERATURE")
    max_tokens: int = Field(100, alias="LLM_MAX_TOKENS")
    timeout: Optional[float] = Field(None, alias="LLM_TIMEOUT")

    @field_validator("temperature")
    def validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError("LLM_TEMPERATURE must be between 0.0 and 2.0")
        return value

    @field_validator("timeout")
    def validate_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("LLM_TIMEOUT must be positive")
        return value

    @field_validator("max_tokens")
    def validate_max_tokens(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("LLM_MAX_TOKENS must be positive")
        return value

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_llm_config() -> LlmConfig:
    """Return a cached language model configuration."""

    return LlmConfig()
