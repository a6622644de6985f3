"""Frontier - Holds discovered but not yet processed vertices.

The Frontier is the key abstraction that separates breadth-first from
depth-first traversal. Both variants remove from the head; they differ
only in where a newly discovered block of vertices is inserted:

- FifoFrontier: block appended at the tail (queue) -> breadth-first
- LifoFrontier: block prepended at the head (stack) -> depth-first

In both cases the block keeps its own order, so with neighbors expanded in
ascending id order the smallest new id is the first of the block to leave
a LIFO frontier.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Protocol, runtime_checkable


class Strategy(str, Enum):
    """Traversal discipline."""

    BREADTH_FIRST = "bfs"
    DEPTH_FIRST = "dfs"

    @classmethod
    def parse(cls, value: str | Strategy) -> Strategy:
        """Accept ``bfs``/``dfs``/``breadth-first``/``depth-first`` in any case."""
        if isinstance(value, Strategy):
            return value
        aliases = {
            "bfs": cls.BREADTH_FIRST,
            "breadth-first": cls.BREADTH_FIRST,
            "breadth_first": cls.BREADTH_FIRST,
            "breadthfirst": cls.BREADTH_FIRST,
            "dfs": cls.DEPTH_FIRST,
            "depth-first": cls.DEPTH_FIRST,
            "depth_first": cls.DEPTH_FIRST,
            "depthfirst": cls.DEPTH_FIRST,
        }
        try:
            return aliases[value.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown strategy {value!r}; expected 'bfs' or 'dfs'") from None

    @property
    def frontier_kind(self) -> str:
        return "FIFO" if self is Strategy.BREADTH_FIRST else "LIFO"

    @property
    def container_name(self) -> str:
        """What the frontier is called in trace messages."""
        return "queue" if self is Strategy.BREADTH_FIRST else "stack"

    @property
    def short_name(self) -> str:
        return self.value.upper()


@runtime_checkable
class Frontier(Protocol):
    """Protocol for frontier implementations."""

    def push_many(self, vertex_ids: Iterable[int]) -> None:
        """Insert a block of newly discovered vertices, keeping their order."""
        ...

    def pop(self) -> int | None:
        """Remove and return the vertex at the extraction point, or None if empty."""
        ...

    def is_empty(self) -> bool:
        ...

    def snapshot(self) -> tuple[int, ...]:
        """Current contents, extraction point first."""
        ...

    def __len__(self) -> int:
        ...

    def __iter__(self) -> Iterator[int]:
        ...


class BaseFrontier(ABC):
    """Deque-backed frontier that always removes from the head."""

    def __init__(self, initial: Iterable[int] = ()) -> None:
        self._items: deque[int] = deque(initial)

    @abstractmethod
    def push_many(self, vertex_ids: Iterable[int]) -> None:
        ...

    def push(self, vertex_id: int) -> None:
        self.push_many([vertex_id])

    def pop(self) -> int | None:
        if not self._items:
            return None
        return self._items.popleft()

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._items))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items)})"


class FifoFrontier(BaseFrontier):
    """Queue: insert at tail, remove at head."""

    def push_many(self, vertex_ids: Iterable[int]) -> None:
        self._items.extend(vertex_ids)


class LifoFrontier(BaseFrontier):
    """Stack whose top is the head: insert at head, remove at head."""

    def push_many(self, vertex_ids: Iterable[int]) -> None:
        # extendleft reverses its input, so feed it the block backwards
        self._items.extendleft(reversed(list(vertex_ids)))


def frontier_for(strategy: Strategy | str) -> BaseFrontier:
    """Return a fresh, empty frontier for ``strategy``."""
    if Strategy.parse(strategy) is Strategy.BREADTH_FIRST:
        return FifoFrontier()
    return LifoFrontier()


__all__ = [
    "Strategy",
    "Frontier",
    "BaseFrontier",
    "FifoFrontier",
    "LifoFrontier",
    "frontier_for",
]
