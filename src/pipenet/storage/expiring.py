"""Bounded key-value store with expire-after-write and removal notifications.

Backs the primary index. Entries disappear for one of four reasons, each
reported to the removal listener:

- EXPLICIT: discard() was called
- REPLACED: put() stored a different value under the same key
- EXPIRED: the entry outlived its time-to-live
- SIZE: the store exceeded its capacity and the oldest write was evicted

Expiry is lazy on read and eager through sweep(). Listeners run after the
store has been updated, so a listener may call back into the store.

Usage:
    index = ExpiringIndex(maximum_size=100, expire_after_write=60.0,
                          on_removal=lambda key, value, cause: ...)
    index.put(key, value)
    index.sweep()  # from the host's periodic tick
"""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from enum import Enum, auto
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class RemovalCause(Enum):
    """Why an entry left the store."""

    EXPLICIT = auto()
    REPLACED = auto()
    EXPIRED = auto()
    SIZE = auto()


RemovalListener = Callable[[K, V, RemovalCause], None]
"""Signature: (key, value, cause) -> None"""


class ExpiringIndex(Generic[K, V]):
    """Write-ordered dict with a capacity bound and a time-to-live.

    Structure:
        _entries[key] = (value, written_at), oldest write first

    Values are compared by identity when deciding whether a put() replaced
    something, so rewriting the same object only refreshes its write time.

    Args:
        maximum_size: Capacity; the oldest write is evicted beyond it.
        expire_after_write: Time-to-live in seconds (0 = never expire).
        on_removal: Listener called for every removed entry.
        clock: Monotonic time source (default time.monotonic).
    """

    def __init__(
        self,
        maximum_size: int,
        expire_after_write: float = 0.0,
        on_removal: RemovalListener[K, V] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if maximum_size < 1:
            raise ValueError(f"maximum_size must be positive, got {maximum_size}")
        if expire_after_write < 0:
            raise ValueError(f"expire_after_write must be >= 0, got {expire_after_write}")
        self._maximum_size = maximum_size
        self._ttl = expire_after_write
        self._on_removal = on_removal
        self._clock = clock
        self._entries: OrderedDict[K, tuple[V, float]] = OrderedDict()

    def _is_expired(self, written_at: float, now: float) -> bool:
        return self._ttl > 0 and now - written_at >= self._ttl

    def _notify(self, key: K, value: V, cause: RemovalCause) -> None:
        if self._on_removal is not None:
            self._on_removal(key, value, cause)

    def _expire(self, key: K) -> bool:
        """Drop `key` if it is expired. Returns True if it was."""
        entry = self._entries.get(key)
        if entry is None or not self._is_expired(entry[1], self._clock()):
            return False
        del self._entries[key]
        self._notify(key, entry[0], RemovalCause.EXPIRED)
        return True

    def get(self, key: K) -> V | None:
        """Get a live value, expiring it first if its time is up.

        Args:
            key: Key to look up.

        Returns:
            The value, or None if absent or expired.
        """
        if self._expire(key):
            return None
        entry = self._entries.get(key)
        return entry[0] if entry is not None else None

    def peek(self, key: K) -> V | None:
        """Get a live value without expiring anything or notifying."""
        entry = self._entries.get(key)
        if entry is None or self._is_expired(entry[1], self._clock()):
            return None
        return entry[0]

    def put(self, key: K, value: V) -> None:
        """Store a value, restarting its time-to-live.

        Args:
            key: Key to write.
            value: Value to store.
        """
        previous = self._entries.pop(key, None)
        self._entries[key] = (value, self._clock())
        if previous is not None and previous[0] is not value:
            self._notify(key, previous[0], RemovalCause.REPLACED)

        while len(self._entries) > self._maximum_size:
            old_key, (old_value, _) = self._entries.popitem(last=False)
            self._notify(old_key, old_value, RemovalCause.SIZE)

    def discard(self, key: K, value: V) -> bool:
        """Remove a key only while it still maps to `value`.

        Returns:
            True if the entry was removed.
        """
        entry = self._entries.get(key)
        if entry is None or entry[0] is not value:
            return False
        del self._entries[key]
        self._notify(key, value, RemovalCause.EXPLICIT)
        return True

    def sweep(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries expired by this call.
        """
        if self._ttl <= 0:
            return 0
        now = self._clock()
        stale = [
            key
            for key, (_, written_at) in self._entries.items()
            if self._is_expired(written_at, now)
        ]
        expired = 0
        for key in stale:
            # An earlier listener may already have removed or rewritten it.
            entry = self._entries.get(key)
            if entry is None or not self._is_expired(entry[1], now):
                continue
            del self._entries[key]
            expired += 1
            self._notify(key, entry[0], RemovalCause.EXPIRED)
        return expired

    def __contains__(self, key: object) -> bool:
        return self.peek(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)

