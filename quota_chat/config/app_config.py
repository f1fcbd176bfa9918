from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

class AppConfig(BaseSettings):
    """Application configuration settings.

    The quota values are deployment constants: they are read once when the
    application container is built and never change while it runs.
    """

    # Environment
    app_env: str = Field("development")
    app_debug: bool = Field(False)
    app_host: str = Field("0.0.0.0")
    app_port: int = Field(8501)

    # Logging
    log_level: str = Field("INFO")
    log_file: Optional[str] = Field(None)

    # Prompt quota
    prompt_limit: int = Field(50)
    block_window_hours: float = Field(12.0)

    # Storage
    lock_shards: int = Field(64)
    checkpoint_file: Optional[str] = Field(None)

    @field_validator("app_env")
    def validate_app_env(cls, value: str) -> str:
        if value not in ["development", "staging", "production"]:
            raise ValueError("APP_ENV must be development, staging, or production")
        return value

    @field_validator("log_level")
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("LOG_LEVEL must be a valid Loguru level")
        return level

    @field_validator("prompt_limit")
    def validate_prompt_limit(cls, value: int) -> int:
        if value < 1:
            raise ValueError("PROMPT_LIMIT must be at least 1")
        return value

    @field_validator("block_window_hours")
    def validate_block_window(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("BLOCK_WINDOW_HOURS must be positive")
        return value

    @field_validator("lock_shards")
    def validate_lock_shards(cls, value: int) -> int:
        if value < 1:
            raise ValueError("LOCK_SHARDS must be at least 1")
        return value

    @property
    def block_window_seconds(self) -> float:
        return self.block_window_hours * 60 * 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache()
def get_app_config() -> AppConfig:
    """Return a cached application configuration instance."""

    return AppConfig()
