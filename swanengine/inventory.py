"""Items, stacks of items and simple slot-based inventories."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class Item:
    """A kind of item; compared by identity."""

    name: str
    max_stack: int = 64
    id: int = 0
    hidden: bool = False


@dataclass
class ItemStack:
    """A number of items of one kind."""

    item: Item | None = None
    count: int = 0

    def empty(self) -> bool:
        return self.item is None or self.count <= 0

    def copy(self) -> ItemStack:
        return ItemStack(self.item, self.count)

    def insert(self, other: ItemStack) -> ItemStack:
        """Merge `other` into this stack and return what did not fit."""
        rest = other.copy()

        if self.empty():
            self.item, self.count = rest.item, rest.count
            return ItemStack()

        if rest.item is not self.item:
            return rest

        self.count += rest.count
        if self.count > self.item.max_stack:
            rest.count = self.count - self.item.max_stack
            self.count = self.item.max_stack
            return rest

        return ItemStack()

    def remove(self, count: int) -> ItemStack:
        """Take up to `count` items off this stack and return them."""
        if self.empty():
            return ItemStack()

        count = min(count, self.count)
        taken = ItemStack(self.item, count)
        self.count -= count
        if self.count == 0:
            self.item = None
        return taken


class BasicInventory:
    """A fixed number of item slots."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("inventory size must not be negative")
        self.content = [ItemStack() for _ in range(size)]

    def __len__(self) -> int:
        return len(self.content)

    def _in_range(self, slot: int) -> bool:
        return 0 <= slot < len(self.content)

    def get(self, slot: int) -> ItemStack:
        """Return a copy of the stack in a slot; out-of-range slots are empty."""
        if not self._in_range(slot):
            return ItemStack()
        return self.content[slot].copy()

    def set(self, slot: int, stack: ItemStack) -> ItemStack:
        """Replace a slot's stack and return the old one.

        For an out-of-range slot, the given stack is handed back unchanged.
        """
        if not self._in_range(slot):
            return stack
        old = self.content[slot]
        self.content[slot] = stack
        return old

    def insert_at(self, slot: int, stack: ItemStack) -> ItemStack:
        """Insert into one slot and return what did not fit."""
        if not self._in_range(slot):
            raise IndexError(f"slot {slot} out of range")
        return self.content[slot].insert(stack)

    def insert(self, stack: ItemStack) -> ItemStack:
        """Insert anywhere, preferring matching stacks; return the leftover."""
        for existing in self.content:
            if stack.empty():
                break
            if existing.item is stack.item:
                stack = existing.insert(stack)

        for existing in self.content:
            if stack.empty():
                break
            stack = existing.insert(stack)

        return stack