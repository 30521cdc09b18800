# indexed binary min-heap used as the A* open set
# src/nav/heap.py
"""
BinaryHeap: array-backed min-heap with O(1) membership and in-place
priority updates.

Items must be hashable. Each resident item's slot is tracked in a
separate dict (item -> array index) instead of on the item itself, so
the same item type can sit in several heaps at once.

Ordering is given by a `key` callable. Keys are compared with `<` only,
so tuples such as (f_cost, h_cost) give the usual A* tie-breaking.

Misuse fails loudly:
- remove_first() / peek() on an empty heap -> IndexError
- update_item() on a non-resident item     -> KeyError
- add() of an already-resident item        -> ValueError
- add() beyond a fixed capacity            -> OverflowError
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Generic, Hashable, List, Optional, TypeVar

T = TypeVar("T", bound=Hashable)

KeyFn = Callable[[Any], Any]


class BinaryHeap(Generic[T]):
    def __init__(self, key: KeyFn, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self._key = key
        self._capacity = capacity
        self._items: List[T] = []
        self._slots: Dict[T, int] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add(self, item: T) -> None:
        """Insert `item` and sift it up into place."""
        if item in self._slots:
            raise ValueError(f"item already in heap: {item!r}")
        if self._capacity is not None and len(self._items) >= self._capacity:
            raise OverflowError(f"heap capacity {self._capacity} exceeded")

        self._items.append(item)
        self._slots[item] = len(self._items) - 1
        self._sift_up(len(self._items) - 1)

    def remove_first(self) -> T:
        """Remove and return the item with the smallest key."""
        if not self._items:
            raise IndexError("remove_first() on empty heap")

        first = self._items[0]
        last = self._items.pop()
        del self._slots[first]

        if self._items:
            self._items[0] = last
            self._slots[last] = 0
            self._sift_down(0)

        return first

    def peek(self) -> T:
        if not self._items:
            raise IndexError("peek() on empty heap")
        return self._items[0]

    def contains(self, item: T) -> bool:
        slot = self._slots.get(item)
        return slot is not None and slot < len(self._items) and self._items[slot] == item

    def update_item(self, item: T) -> None:
        """
        Restore heap order after `item`'s key decreased.

        Only the upward direction is handled; A* never raises a key of an
        item that is still open.
        """
        slot = self._slots.get(item)
        if slot is None:
            raise KeyError(f"item not in heap: {item!r}")
        self._sift_up(slot)

    def clear(self) -> None:
        self._items.clear()
        self._slots.clear()

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return self.contains(item)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _less(self, a: T, b: T) -> bool:
        return self._key(a) < self._key(b)

    def _swap(self, i: int, j: int) -> None:
        items = self._items
        items[i], items[j] = items[j], items[i]
        self._slots[items[i]] = i
        self._slots[items[j]] = j

    def _sift_up(self, slot: int) -> None:
        while slot > 0:
            parent = (slot - 1) // 2
            if self._less(self._items[slot], self._items[parent]):
                self._swap(slot, parent)
                slot = parent
            else:
                break

    def _sift_down(self, slot: int) -> None:
        count = len(self._items)
        while True:
            left = slot * 2 + 1
            right = left + 1
            if left >= count:
                return

            # Left child wins a key tie.
            child = left
            if right < count and self._less(self._items[right], self._items[left]):
                child = right

            if self._less(self._items[child], self._items[slot]):
                self._swap(slot, child)
                slot = child
            else:
                return
