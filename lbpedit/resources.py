"""Per-type resource registries addressed through small handles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Handles carry a 16-bit index.
MAX_RESOURCES = 0x10000

_managers: dict[type, list[Any]] = {}


def manager_for(kind: type) -> list[Any]:
    """Return the registry holding every resource of type ``kind``."""
    return _managers.setdefault(kind, [])


@dataclass(frozen=True)
class ResHandle(Generic[T]):
    """A stable reference to a registered resource."""

    kind: type
    idx: int

    def get(self) -> T:
        """Return the resource this handle refers to."""
        return manager_for(self.kind)[self.idx]


def add_resource(res: T) -> ResHandle[T]:
    """Register ``res`` under its own type and return a handle to it."""
    manager = manager_for(type(res))
    idx = len(manager)
    if idx >= MAX_RESOURCES:
        raise OverflowError(f"too many {type(res).__name__} resources")
    manager.append(res)
    return ResHandle(type(res), idx)