"""Models representing chats and the question/answer turns they hold."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class MessageTurn(BaseModel):
    """A single question/answer exchange.

    Turns are frozen once created; a chat's history only ever grows by
    appending new turns.
    """

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class ChatRecord(BaseModel):
    """A named chat owned by one user.

    ``messages`` is kept in arrival order.  The name may be changed in
    place by a rename; the messages are only cleared by deleting the
    whole chat.
    """

    name: str
    messages: List[MessageTurn] = Field(default_factory=list)


class ChatMeta(BaseModel):
    """Projection of a chat used when listing a user's chats."""

    id: str
    name: str
