from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class LlmConfig(BaseSettings):
    """Configuration for the chat completions provider.

    The API key is injected through the environment at process start.  An
    empty key is accepted so the application can boot; the provider will
    then answer with an authentication error, which is surfaced to the
    user like any other failed completion.
    """

    api_key: str = Field("", alias="LLM_API_KEY")
    base_url: str = Field("https://api.openai.com/v1", alias="LLM_BASE_URL")
    model: str = Field("gpt-4o-mini", alias="LLM_MODEL")
    timeout: float = Field(30, alias="LLM_TIMEOUT")
    max_response_bytes: int = Field(1_048_576, alias="LLM_MAX_RESPONSE_BYTES")

    @field_validator("base_url")
    def validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("LLM_BASE_URL must be an http(s) URL")
        return value.rstrip("/")

    @field_validator("timeout")
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("LLM_TIMEOUT must be positive")
        return value

    @field_validator("max_response_bytes")
    def validate_max_response_bytes(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("LLM_MAX_RESPONSE_BYTES must be positive")
        return value

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_llm_config() -> LlmConfig:
    """Return a cached language model configuration."""

    return LlmConfig()
