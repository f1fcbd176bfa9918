"""In-memory chat histories keyed by user and chat identifier.

Chats are created by the caller with an identifier of its choosing, so
creation is idempotent.  Appending, renaming and deleting are lenient: a
missing user or chat turns them into a no-op (or a ``False`` return).
Fetching a history is the one strict operation and raises
:class:`~quota_chat.utils.error_handler.ChatNotFoundError`, so a caller can
tell "nothing happened" apart from "there is nothing there".
"""

from __future__ import annotations

from typing import Dict, List

from loguru import logger

from ..models.chat import ChatMeta, ChatRecord, MessageTurn
from ..models.snapshot import ChatStoreSnapshot
from ..utils.error_handler import ChatNotFoundError
from .locks import ShardedLock


class ChatStore:
    """Own the mapping user key -> chat id -> :class:`ChatRecord`.

    Every operation runs under the user's shard lock.  Records handed out
    by :meth:`get_chat_history` are deep copies, so a reader never sees a
    list that another thread is appending to.
    """

    def __init__(self, shards: int = 64) -> None:
        # Mapping of user -> chat_id -> ChatRecord, chats in insertion order
        self._chats: Dict[str, Dict[str, ChatRecord]] = {}
        self._locks = ShardedLock(shards)

    def create_chat(self, user: str, chat_id: str, name: str) -> None:
        """Create an empty chat unless ``chat_id`` already exists for ``user``.

        A duplicate create leaves the existing name and messages untouched.
        """
        with self._locks.for_key(user):
            chats = self._chats.setdefault(user, {})
            if chat_id in chats:
                logger.debug("Chat {} already exists for user={}, keeping it", chat_id, user)
                return
            chats[chat_id] = ChatRecord(name=name)
        logger.debug("Created chat {} for user={}", chat_id, user)

    def append_message(self, user: str, chat_id: str, question: str, answer: str) -> None:
        """Append a question/answer turn; ignored if the chat does not exist."""
        self.record_turn(user, chat_id, question, answer)

    def record_turn(self, user: str, chat_id: str, question: str, answer: str) -> bool:
        """Append a turn and return whether the chat was there to receive it."""
        with self._locks.for_key(user):
            chat = self._chats.get(user, {}).get(chat_id)
            if chat is None:
                logger.debug("Append ignored, no chat {} for user={}", chat_id, user)
                return False
            chat.messages.append(MessageTurn(question=question, answer=answer))
            return True

    def get_chat_history(self, user: str, chat_id: str) -> ChatRecord:
        """Return a copy of the chat record.

        Raises
        ------
        ChatNotFoundError
            If the user has no chat with this identifier.
        """
        with self._locks.for_key(user):
            chat = self._chats.get(user, {}).get(chat_id)
            if chat is None:
                raise ChatNotFoundError(user, chat_id)
            return chat.model_copy(deep=True)

    def delete_chat(self, user: str, chat_id: str) -> bool:
        with self._locks.for_key(user):
            chats = self._chats.get(user)
            if chats is None or chat_id not in chats:
                return False
            del chats[chat_id]
        logger.debug("Deleted chat {} for user={}", chat_id, user)
        return True

    def rename_chat(self, user: str, chat_id: str, new_name: str) -> bool:
        with self._locks.for_key(user):
            chat = self._chats.get(user, {}).get(chat_id)
            if chat is None:
                return False
            chat.name = new_name
            return True

    def list_chats(self, user: str) -> List[ChatMeta]:
        """Return ``(id, name)`` pairs for the user's chats, oldest first."""
        with self._locks.for_key(user):
            chats = self._chats.get(user, {})
            return [ChatMeta(id=chat_id, name=chat.name) for chat_id, chat in chats.items()]

    # ------------------------------------------------------------------
    # Whole-store helpers

    def stats(self) -> Dict[str, int]:
        with self._locks.all():
            return {
                "users": len(self._chats),
                "chats": sum(len(chats) for chats in self._chats.values()),
                "messages": sum(
                    len(chat.messages) for chats in self._chats.values() for chat in chats.values()
                ),
            }

    def snapshot(self) -> ChatStoreSnapshot:
        with self._locks.all():
            return ChatStoreSnapshot(
                users={
                    user: {chat_id: chat.model_copy(deep=True) for chat_id, chat in chats.items()}
                    for user, chats in self._chats.items()
                }
            )

    def restore(self, snapshot: ChatStoreSnapshot) -> None:
        """Replace every chat with the contents of ``snapshot``."""
        with self._locks.all():
            self._chats = {
                user: {chat_id: chat.model_copy(deep=True) for chat_id, chat in chats.items()}
                for user, chats in snapshot.users.items()
            }
        logger.debug("Restored chats for {} users", len(snapshot.users))
