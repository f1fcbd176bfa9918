"""Models for the chat completions provider payloads and call outcomes."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

from .enums import CompletionStatus, MessageRole

NO_CHOICES_MESSAGE = "No choices in response"


class ProviderMessage(BaseModel):
    role: MessageRole
    content: str


class CompletionRequest(BaseModel):
    """Request body sent to ``/chat/completions``."""

    model: str
    messages: List[ProviderMessage]

    @classmethod
    def for_prompt(cls, model: str, prompt: str) -> "CompletionRequest":
        return cls(model=model, messages=[ProviderMessage(role=MessageRole.USER, content=prompt)])


class ProviderReply(BaseModel):
    role: Optional[str] = None
    content: str


class ProviderChoice(BaseModel):
    message: ProviderReply


class ProviderResponse(BaseModel):
    """The subset of the provider's response that is read.

    Unknown fields (usage, ids, finish reasons) are ignored.
    """

    choices: List[ProviderChoice]


class CompletionResult(BaseModel):
    """Tagged outcome of a completion call.

    Callers that need to tell a real answer from a failure inspect
    ``status``.  The outer API keeps the historical behaviour of returning
    one string for every outcome, produced by :meth:`render`.
    """

    status: CompletionStatus
    text: Optional[str] = None
    status_code: Optional[int] = None
    body: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is CompletionStatus.SUCCESS

    @classmethod
    def success(cls, text: str) -> "CompletionResult":
        return cls(status=CompletionStatus.SUCCESS, text=text)

    @classmethod
    def no_choices(cls) -> "CompletionResult":
        return cls(status=CompletionStatus.NO_CHOICES)

    @classmethod
    def transport_error(cls, error: str) -> "CompletionResult":
        return cls(status=CompletionStatus.TRANSPORT_ERROR, error=error)

    @classmethod
    def status_error(cls, status_code: int, body: str) -> "CompletionResult":
        return cls(status=CompletionStatus.STATUS_ERROR, status_code=status_code, body=body)

    @classmethod
    def parse_error(cls, error: str) -> "CompletionResult":
        return cls(status=CompletionStatus.PARSE_ERROR, error=error)

    def render(self) -> str:
        """Return the user-visible string for this outcome."""
        if self.status is CompletionStatus.SUCCESS:
            return self.text or ""
        if self.status is CompletionStatus.NO_CHOICES:
            return NO_CHOICES_MESSAGE
        if self.status is CompletionStatus.STATUS_ERROR:
            return f"Completion error status: {self.status_code}, body: {self.body}"
        if self.status is CompletionStatus.PARSE_ERROR:
            return f"JSON parse error: {self.error}"
        return f"HTTP request error: {self.error}"
