"""Fixed-size slot allocator with least-recently-used eviction."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class LruCache(Generic[T]):
    """Hands out slot indices, recycling the least recently used when full."""

    def __init__(self, size: int | None = None) -> None:
        self._values: list[T | None] = []
        self._prev: list[int | None] = []
        self._next: list[int | None] = []
        self._first: int | None = None
        self._last: int | None = None
        self._first_free: int | None = None
        if size is not None:
            self.reset(size)

    def reset(self, size: int) -> None:
        """Drop all slots and start over with `size` free ones."""
        if size <= 0:
            raise ValueError("cache size must be positive")
        self._values = [None] * size
        self._prev = [None] * size
        self._next = [*range(1, size), None]
        self._first = None
        self._last = None
        self._first_free = 0

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, idx: int) -> T | None:
        return self._values[idx]

    def __setitem__(self, idx: int, value: T) -> None:
        self._values[idx] = value

    def _unlink(self, idx: int) -> None:
        prev, nxt = self._prev[idx], self._next[idx]
        if prev is not None:
            self._next[prev] = nxt
        else:
            self._first = nxt
        if nxt is not None:
            self._prev[nxt] = prev
        else:
            self._last = prev

    def _push_front(self, idx: int) -> None:
        self._prev[idx] = None
        self._next[idx] = self._first
        if self._first is not None:
            self._prev[self._first] = idx
        self._first = idx
        if self._last is None:
            self._last = idx

    def bump(self, idx: int) -> None:
        """Mark a slot in use as the most recently used."""
        if idx == self._first:
            return
        self._unlink(idx)
        self._push_front(idx)

    def next(self) -> int | None:
        """Return a free slot, or else recycle the least recently used one."""
        idx = self.next_free()
        if idx is None:
            idx = self.next_used()
        return idx

    def next_free(self) -> int | None:
        """Take a slot from the free list, or None if none are left."""
        idx = self._first_free
        if idx is None:
            return None
        self._first_free = self._next[idx]
        self._push_front(idx)
        return idx

    def next_used(self) -> int | None:
        """Recycle the least recently used slot, or None if none are in use."""
        idx = self._last
        if idx is None:
            return None
        if idx != self._first:
            self._unlink(idx)
            self._push_front(idx)
        return idx