from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest

from quota_chat.config.app_config import AppConfig
from quota_chat.config.llm_config import LlmConfig


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def completion_payload(*answers: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": index,
                "message": {"role": "assistant", "content": answer},
                "finish_reason": "stop",
            }
            for index, answer in enumerate(answers)
        ],
    }


class RecordingProvider:
    """Mock completion provider that records every request it receives."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(prompt_limit=3, block_window_hours=1.0, lock_shards=8)


@pytest.fixture
def llm_config() -> LlmConfig:
    return LlmConfig(
        api_key="test-key",
        base_url="https://llm.test/v1",
        model="gpt-4o-mini",
        timeout=5,
    )


@pytest.fixture
def answering_provider() -> RecordingProvider:
    def respond(request: httpx.Request) -> httpx.Response:
        prompt = json.loads(request.content)["messages"][0]["content"]
        return httpx.Response(200, json=completion_payload(f"answer to {prompt}"))

    return RecordingProvider(respond)


@pytest.fixture
def failing_provider() -> RecordingProvider:
    return RecordingProvider(lambda request: httpx.Response(500, text="upstream exploded"))
