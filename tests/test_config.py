from __future__ import annotations

import pytest
from pydantic import ValidationError

from quota_chat.config.app_config import AppConfig
from quota_chat.config.llm_config import LlmConfig


def test_quota_defaults() -> None:
    config = AppConfig(_env_file=None)

    assert config.prompt_limit == 50
    assert config.block_window_hours == 12.0
    assert config.block_window_seconds == 12 * 60 * 60


def test_log_level_is_normalised() -> None:
    assert AppConfig(log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize(
    "overrides",
    [
        {"prompt_limit": 0},
        {"block_window_hours": 0},
        {"lock_shards": 0},
        {"app_env": "qa"},
        {"log_level": "verbose"},
    ],
)
def test_invalid_app_settings_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        AppConfig(**overrides)


def test_llm_config_reads_aliases_and_strips_trailing_slash() -> None:
    config = LlmConfig.model_validate(
        {"LLM_API_KEY": "secret", "LLM_BASE_URL": "https://llm.test/v1/", "LLM_MODEL": "m"}
    )

    assert config.api_key == "secret"
    assert config.model == "m"
    assert config.completions_url == "https://llm.test/v1/chat/completions"


@pytest.mark.parametrize(
    "overrides",
    [
        {"LLM_BASE_URL": "llm.test"},
        {"LLM_TIMEOUT": 0},
        {"LLM_MAX_RESPONSE_BYTES": 0},
    ],
)
def test_invalid_llm_settings_are_rejected(overrides: dict) -> None:
    with pytest.raises(ValidationError):
        LlmConfig.model_validate(overrides)
