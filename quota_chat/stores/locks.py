"""Per-key locking for the in-memory stores."""

from __future__ import annotations

import threading
from contextlib import ExitStack, contextmanager
from typing import Hashable, Iterator, List


class ShardedLock:
    """A fixed set of locks indexed by key hash.

    Operations on the same key always take the same lock.  Keys that land
    in different shards never contend.  :meth:`all` takes every shard in
    index order for whole-store operations such as snapshots.
    """

    def __init__(self, shards: int = 64) -> None:
        if shards < 1:
            raise ValueError("shards must be at least 1")
        self._locks: List[threading.Lock] = [threading.Lock() for _ in range(shards)]

    def __len__(self) -> int:
        return len(self._locks)

    def for_key(self, key: Hashable) -> threading.Lock:
        return self._locks[hash(key) % len(self._locks)]

    @contextmanager
    def all(self) -> Iterator[None]:
        with ExitStack() as stack:
            for lock in self._locks:
                stack.enter_context(lock)
            yield
