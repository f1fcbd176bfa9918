"""Serialisable images of the in-memory stores.

Snapshots are plain data: user keys map to the same models the stores
hold.  They are used by the checkpoint file and the admin snapshot route.
"""

from typing import Dict

from pydantic import BaseModel, Field

from .chat import ChatRecord
from .quota import QuotaState


class ChatStoreSnapshot(BaseModel):
    users: Dict[str, Dict[str, ChatRecord]] = Field(default_factory=dict)


class ProfileStoreSnapshot(BaseModel):
    names: Dict[str, str] = Field(default_factory=dict)


class QuotaGateSnapshot(BaseModel):
    states: Dict[str, QuotaState] = Field(default_factory=dict)


class StoreSnapshot(BaseModel):
    """Combined snapshot of every store owned by the application."""

    chats: ChatStoreSnapshot = Field(default_factory=ChatStoreSnapshot)
    profiles: ProfileStoreSnapshot = Field(default_factory=ProfileStoreSnapshot)
    quotas: QuotaGateSnapshot = Field(default_factory=QuotaGateSnapshot)
