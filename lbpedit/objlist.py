"""A fixed-capacity pool of live game objects with slot reuse."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")

MAX_OBJECTS = 0xFFFF


class ObjList(Generic[T]):
    """Live objects kept in slots; freed slots are reused last-freed first."""

    def __init__(self, capacity: int = MAX_OBJECTS) -> None:
        self._capacity = capacity
        self._slots: list[T | None] = []
        self._free: list[int] = []
        self._slot_of: dict[int, int] = {}

    def spawn(self, obj: T) -> T:
        """Place ``obj`` in a slot and return it."""
        if id(obj) in self._slot_of:
            raise ValueError("object is already alive in this list")
        if self._free:
            slot = self._free.pop()
        else:
            if len(self._slots) >= self._capacity:
                raise OverflowError("object list is full")
            self._slots.append(None)
            slot = len(self._slots) - 1
        self._slots[slot] = obj
        self._slot_of[id(obj)] = slot
        return obj

    def kill(self, obj: T) -> None:
        """Release ``obj`` (calling its ``free`` method if any) and free its slot."""
        slot = self._slot_of.get(id(obj))
        if slot is None:
            raise ValueError("object is not alive in this list")
        release = getattr(obj, "free", None)
        if callable(release):
            release()
        del self._slot_of[id(obj)]
        self._slots[slot] = None
        self._free.append(slot)

    def first(self) -> T | None:
        """Return the live object in the lowest slot, or None."""
        return next((obj for obj in self._slots if obj is not None), None)

    def next(self, obj: T) -> T | None:
        """Return the live object after ``obj`` in slot order, or None."""
        slot = self._slot_of.get(id(obj))
        if slot is None:
            raise ValueError("object is not alive in this list")
        return next((o for o in self._slots[slot + 1:] if o is not None), None)

    def __iter__(self) -> Iterator[T]:
        for slot, obj in enumerate(list(self._slots)):
            if obj is not None and self._slots[slot] is obj:
                yield obj

    def __len__(self) -> int:
        return len(self._slot_of)