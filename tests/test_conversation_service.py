from __future__ import annotations

import asyncio

from quota_chat.config.llm_config import LlmConfig
from quota_chat.models.enums import CompletionStatus
from quota_chat.services.completion_client import CompletionClient
from quota_chat.services.conversation_service import ConversationService

from .conftest import RecordingProvider


def make_service(llm_config: LlmConfig, provider: RecordingProvider) -> ConversationService:
    return ConversationService(CompletionClient(llm_config=llm_config, transport=provider.transport))


def test_submit_prompt_returns_answer_text(
    llm_config: LlmConfig, answering_provider: RecordingProvider
) -> None:
    service = make_service(llm_config, answering_provider)

    answer = asyncio.run(service.submit_prompt("alice", "Where to?"))

    assert answer == "answer to Where to?"
    assert len(answering_provider.requests) == 1


def test_submit_prompt_returns_diagnostic_instead_of_raising(
    llm_config: LlmConfig, failing_provider: RecordingProvider
) -> None:
    service = make_service(llm_config, failing_provider)

    answer = asyncio.run(service.submit_prompt("alice", "Where to?"))

    assert answer == "Completion error status: 500, body: upstream exploded"


def test_submit_prompt_result_keeps_the_outcome_tag(
    llm_config: LlmConfig, failing_provider: RecordingProvider
) -> None:
    service = make_service(llm_config, failing_provider)

    result = asyncio.run(service.submit_prompt_result("alice", "Where to?"))

    assert result.status is CompletionStatus.STATUS_ERROR
    assert not result.ok


def test_each_prompt_is_sent_without_earlier_turns(
    llm_config: LlmConfig, answering_provider: RecordingProvider
) -> None:
    service = make_service(llm_config, answering_provider)

    asyncio.run(service.submit_prompt("alice", "first"))
    asyncio.run(service.submit_prompt("alice", "second"))

    assert answering_provider.last_body()["messages"] == [{"role": "user", "content": "second"}]
