"""Display names keyed by user."""

from __future__ import annotations

from typing import Dict

from ..models.profile import DEFAULT_DISPLAY_NAME, ProfileEntry
from ..models.snapshot import ProfileStoreSnapshot
from .locks import ShardedLock


class ProfileStore:
    def __init__(self, shards: int = 64) -> None:
        self._profiles: Dict[str, ProfileEntry] = {}
        self._locks = ShardedLock(shards)

    def set_name(self, user: str, name: str) -> None:
        with self._locks.for_key(user):
            self._profiles[user] = ProfileEntry(display_name=name)

    def get_name(self, user: str) -> str:
        """Return the stored name, or ``"user"`` if none was set."""
        with self._locks.for_key(user):
            entry = self._profiles.get(user)
            return entry.display_name if entry is not None else DEFAULT_DISPLAY_NAME

    def count(self) -> int:
        with self._locks.all():
            return len(self._profiles)

    def snapshot(self) -> ProfileStoreSnapshot:
        with self._locks.all():
            return ProfileStoreSnapshot(
                names={user: entry.display_name for user, entry in self._profiles.items()}
            )

    def restore(self, snapshot: ProfileStoreSnapshot) -> None:
        with self._locks.all():
            self._profiles = {
                user: ProfileEntry(display_name=name) for user, name in snapshot.names.items()
            }
