"""Request and response bodies for the HTTP API.

Names and message contents are not validated beyond being strings; the
stores accept whatever the caller supplies.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PromptRequest(BaseModel):
    prompt: str = Field(..., description="Free-text question forwarded to the model as is.")


class PromptResponse(BaseModel):
    answer: str


class CreateChatRequest(BaseModel):
    chat_id: str = Field(..., min_length=1, description="Caller-chosen identifier, unique per user.")
    name: str


class AppendMessageRequest(BaseModel):
    question: str
    answer: str


class RenameChatRequest(BaseModel):
    name: str


class RenameChatResponse(BaseModel):
    renamed: bool


class DeleteChatResponse(BaseModel):
    deleted: bool


class ConsumeResponse(BaseModel):
    allowed: bool


class AskResponse(BaseModel):
    """Result of the gate-check, prompt and append sequence for one chat."""

    allowed: bool
    answer: str
    recorded: bool = Field(
        default=False,
        description="True when the turn was appended to the chat history.",
    )
    status: Optional[str] = None


class UserNameRequest(BaseModel):
    name: str


class UserNameResponse(BaseModel):
    name: str


class EvictResponse(BaseModel):
    evicted: int
