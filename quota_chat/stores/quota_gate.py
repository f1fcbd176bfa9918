"""Per-user prompt quota with a fixed lockout window.

Each user moves through three states:

* open: no lockout, ``count`` below the limit;
* just tripped: the call that brings ``count`` to the limit is still
  allowed, and it starts the lockout;
* locked: every call is refused until the window has elapsed, after which
  the next call resets the counter and counts as the first prompt of the
  new window.

The cycle repeats indefinitely.  Nothing here can fail.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional

from loguru import logger

from ..models.quota import QuotaState, QuotaStatus
from ..models.snapshot import QuotaGateSnapshot
from .locks import ShardedLock

PROMPT_LIMIT = 50
BLOCK_WINDOW_SECONDS = 12 * 60 * 60


class QuotaGate:
    """Track prompt usage per user key and decide whether a prompt may run."""

    def __init__(
        self,
        limit: int = PROMPT_LIMIT,
        window_seconds: float = BLOCK_WINDOW_SECONDS,
        clock: Optional[Callable[[], float]] = None,
        shards: int = 64,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock or time.time
        self._states: Dict[str, QuotaState] = {}
        self._locks = ShardedLock(shards)

    def try_consume(self, user: str) -> bool:
        """Count one prompt for ``user`` and return whether it is allowed."""
        now = self._clock()
        with self._locks.for_key(user):
            state = self._states.get(user)
            if state is None:
                state = self._states[user] = QuotaState()

            if state.blocked_since is not None:
                if now - state.blocked_since >= self.window_seconds:
                    state.count = 1
                    state.blocked_since = None
                    logger.info("Quota lockout expired for user={}", user)
                    return True
                logger.debug("Prompt refused, user={} is locked out", user)
                return False

            state.count += 1
            if state.count >= self.limit:
                state.blocked_since = now
                logger.info(
                    "User={} reached the prompt limit of {}, locked out for {}s",
                    user,
                    self.limit,
                    self.window_seconds,
                )
            return True

    def get_state(self, user: str) -> QuotaState:
        """Return a copy of ``user``'s state; unknown users read as zero."""
        with self._locks.for_key(user):
            state = self._states.get(user)
            return state.model_copy() if state is not None else QuotaState()

    def status(self, user: str) -> QuotaStatus:
        """Describe ``user``'s quota as the next prompt would see it.

        A lockout that has already expired reads as a fresh window, since
        the next prompt resets it.
        """
        now = self._clock()
        state = self.get_state(user)
        if state.blocked_since is not None and now - state.blocked_since >= self.window_seconds:
            state = QuotaState()
        unblocks_at = None
        remaining = max(self.limit - state.count, 0)
        if state.blocked_since is not None:
            unblocks_at = state.blocked_since + self.window_seconds
            remaining = 0
        return QuotaStatus(
            count=state.count,
            limit=self.limit,
            remaining=remaining,
            blocked_since=state.blocked_since,
            unblocks_at=unblocks_at,
        )

    def evict_expired(self) -> int:
        """Drop users whose lockout has already expired.

        Their next prompt would reset them to a count of one anyway, so
        removing them only frees memory.  Entries that are still open or
        still locked are kept.
        """
        now = self._clock()
        with self._locks.all():
            expired = [
                user
                for user, state in self._states.items()
                if state.blocked_since is not None
                and now - state.blocked_since >= self.window_seconds
            ]
            for user in expired:
                del self._states[user]
        if expired:
            logger.info("Evicted {} expired quota entries", len(expired))
        return len(expired)

    def tracked_users(self) -> int:
        with self._locks.all():
            return len(self._states)

    def locked_users(self) -> int:
        now = self._clock()
        with self._locks.all():
            return sum(
                1
                for state in self._states.values()
                if state.blocked_since is not None
                and now - state.blocked_since < self.window_seconds
            )

    # ------------------------------------------------------------------
    # Snapshot helpers

    def snapshot(self) -> QuotaGateSnapshot:
        with self._locks.all():
            return QuotaGateSnapshot(
                states={user: state.model_copy() for user, state in self._states.items()}
            )

    def restore(self, snapshot: QuotaGateSnapshot) -> None:
        """Replace every tracked state with the contents of ``snapshot``."""
        with self._locks.all():
            self._states = {user: state.model_copy() for user, state in snapshot.states.items()}
        logger.debug("Restored quota state for {} users", len(snapshot.states))
