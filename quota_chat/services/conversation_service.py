"""Service forwarding user prompts to the language model.

The service only performs the completion call.  Checking the quota gate
before it and appending the turn to a chat after it are separate steps
that the integrating caller runs itself, in that order.
"""

from __future__ import annotations

from loguru import logger

from ..models.completion import CompletionResult
from .completion_client import CompletionClient


class ConversationService:
    """Turn a prompt into an answer string.

    Every outcome, including provider failures, comes back as a string so
    the outer API has a single return type.  Callers that need to know
    whether the text is a real answer use :meth:`submit_prompt_result`.
    """

    def __init__(self, client: CompletionClient) -> None:
        self.client = client

    async def submit_prompt_result(self, user: str, prompt: str) -> CompletionResult:
        logger.debug("Submitting prompt for user={} ({} chars)", user, len(prompt))
        result = await self.client.complete(prompt)
        if result.ok:
            logger.debug("Completion succeeded for user={}", user)
        else:
            logger.info("Completion for user={} ended with {}", user, result.status.value)
        return result

    async def submit_prompt(self, user: str, prompt: str) -> str:
        """Return the model's answer, or a readable diagnostic on failure."""
        result = await self.submit_prompt_result(user, prompt)
        return result.render()
