"""Client for the chat completions provider.

Sends one prompt per call, with no earlier turns attached, and reports
the outcome as a :class:`~quota_chat.models.completion.CompletionResult`
instead of raising.  Response bodies are streamed and capped so an
oversized reply is reported as a transport failure rather than read into
memory.
"""

from __future__ import annotations

from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from ..config.llm_config import LlmConfig, get_llm_config
from ..models.completion import CompletionRequest, CompletionResult, ProviderResponse


class CompletionClient:
    """Thin async wrapper around ``POST /chat/completions``.

    Parameters
    ----------
    llm_config: LlmConfig, optional
        Provider URL, model, credentials and limits.  Loaded from the
        environment when omitted.
    transport: httpx.AsyncBaseTransport, optional
        Transport handed to :class:`httpx.AsyncClient`; tests pass an
        :class:`httpx.MockTransport` here.
    """

    def __init__(
        self,
        llm_config: LlmConfig | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.llm_config = llm_config or get_llm_config()
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.llm_config.api_key}",
            "Content-Type": "application/json",
        }

    async def complete(self, prompt: str) -> CompletionResult:
        """Ask the model a single question and classify the reply."""
        payload = CompletionRequest.for_prompt(self.llm_config.model, prompt)
        limit = self.llm_config.max_response_bytes
        try:
            async with httpx.AsyncClient(
                timeout=self.llm_config.timeout,
                transport=self._transport,
            ) as client:
                async with client.stream(
                    "POST",
                    self.llm_config.completions_url,
                    json=payload.model_dump(mode="json"),
                    headers=self._headers(),
                ) as response:
                    body = await self._read_capped(response, limit)
                    status_code = response.status_code
        except httpx.HTTPError as exc:
            logger.warning("Completion request failed: {}", exc)
            return CompletionResult.transport_error(f"{exc.__class__.__name__}: {exc}")

        if body is None:
            logger.warning("Completion response exceeded {} bytes", limit)
            return CompletionResult.transport_error(f"response exceeded {limit} bytes")

        if status_code != 200:
            text = body.decode("utf-8", errors="replace")
            logger.warning("Completion provider returned status {}", status_code)
            return CompletionResult.status_error(status_code, text)

        return self._parse(body)

    @staticmethod
    async def _read_capped(response: httpx.Response, limit: int) -> bytes | None:
        """Read the body, or return ``None`` once it grows past ``limit``."""
        body = bytearray()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) > limit:
                return None
        return bytes(body)

    @staticmethod
    def _parse(body: bytes) -> CompletionResult:
        try:
            parsed = ProviderResponse.model_validate_json(body)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first.get("loc", ())) or "body"
            logger.warning("Could not parse completion response: {}", first.get("msg"))
            return CompletionResult.parse_error(f"{location}: {first.get('msg')}")

        if not parsed.choices:
            return CompletionResult.no_choices()
        return CompletionResult.success(parsed.choices[0].message.content)
