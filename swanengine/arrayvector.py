"""A list with a fixed maximum capacity."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class ArrayVector(Generic[T]):
    """Sequence that refuses to grow beyond its capacity."""

    def __init__(self, capacity: int, items: Iterable[T] = ()) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._capacity = capacity
        self._items: list[T] = []
        for item in items:
            self.append(item)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._items[index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayVector):
            return NotImplemented
        return self._capacity == other._capacity and self._items == other._items

    def __repr__(self) -> str:
        return f"ArrayVector({self._capacity}, {self._items!r})"

    def copy(self) -> ArrayVector[T]:
        return ArrayVector(self._capacity, self._items)

    def at(self, n: int) -> T:
        """Bounds-checked access by non-negative index."""
        if not 0 <= n < len(self._items):
            raise IndexError("Out of range")
        return self._items[n]

    def front(self) -> T:
        if not self._items:
            raise IndexError("front of empty ArrayVector")
        return self._items[0]

    def back(self) -> T:
        if not self._items:
            raise IndexError("back of empty ArrayVector")
        return self._items[-1]

    def append(self, value: T) -> None:
        if len(self._items) >= self._capacity:
            raise OverflowError(f"ArrayVector is full (capacity {self._capacity})")
        self._items.append(value)

    def pop(self) -> T:
        if not self._items:
            raise IndexError("pop from empty ArrayVector")
        return self._items.pop()

    def clear(self) -> None:
        self._items.clear()

    def resize(self, n: int, value: T | None = None) -> None:
        """Grow with copies of `value` or shrink from the end to length n."""
        if n < 0:
            raise ValueError("size must not be negative")
        if n > self._capacity:
            raise OverflowError(f"size {n} exceeds capacity {self._capacity}")
        if n < len(self._items):
            del self._items[n:]
        else:
            self._items.extend([value] * (n - len(self._items)))