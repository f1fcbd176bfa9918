"""Application-wide object graph.

One :class:`AppContainer` is built per application and stored on
``app.state``.  It owns the three stores and the conversation service for
the lifetime of the process; nothing else holds them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import httpx
from loguru import logger

from ..config.app_config import AppConfig, get_app_config
from ..config.llm_config import LlmConfig, get_llm_config
from ..models.dashboard import DashboardData
from ..models.snapshot import StoreSnapshot
from ..stores.chat_store import ChatStore
from ..stores.profile_store import ProfileStore
from ..stores.quota_gate import QuotaGate
from .completion_client import CompletionClient
from .conversation_service import ConversationService


@dataclass
class AppContainer:
    app_config: AppConfig
    llm_config: LlmConfig
    chat_store: ChatStore
    profile_store: ProfileStore
    quota_gate: QuotaGate
    conversation_service: ConversationService

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            chats=self.chat_store.snapshot(),
            profiles=self.profile_store.snapshot(),
            quotas=self.quota_gate.snapshot(),
        )

    def restore(self, snapshot: StoreSnapshot) -> None:
        self.chat_store.restore(snapshot.chats)
        self.profile_store.restore(snapshot.profiles)
        self.quota_gate.restore(snapshot.quotas)

    def dashboard(self) -> DashboardData:
        stats = self.chat_store.stats()
        return DashboardData(
            total_users=stats["users"],
            total_chats=stats["chats"],
            total_messages=stats["messages"],
            named_users=self.profile_store.count(),
            tracked_quota_users=self.quota_gate.tracked_users(),
            locked_users=self.quota_gate.locked_users(),
        )


def build_container(
    app_config: AppConfig | None = None,
    llm_config: LlmConfig | None = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Optional[Callable[[], float]] = None,
) -> AppContainer:
    """Create the stores and services from configuration."""
    app_config = app_config or get_app_config()
    llm_config = llm_config or get_llm_config()
    shards = app_config.lock_shards

    container = AppContainer(
        app_config=app_config,
        llm_config=llm_config,
        chat_store=ChatStore(shards=shards),
        profile_store=ProfileStore(shards=shards),
        quota_gate=QuotaGate(
            limit=app_config.prompt_limit,
            window_seconds=app_config.block_window_seconds,
            clock=clock,
            shards=shards,
        ),
        conversation_service=ConversationService(
            CompletionClient(llm_config=llm_config, transport=transport)
        ),
    )
    logger.debug(
        "Container built: model={} limit={} window={}s shards={}",
        llm_config.model,
        app_config.prompt_limit,
        app_config.block_window_seconds,
        shards,
    )
    return container
