"""Save slots - Named graph snapshots kept in memory or in a JSON file.

A SlotStore is a fixed-size list of optional snapshots. Each snapshot holds
the vertices (with positions) and edges of a graph plus the time it was
saved. Traversal state is never stored.

Example:
    >>> store = SlotStore("slots.json")
    >>> store.save(0, Graph.default())
    >>> graph = store.load(0)
    >>> store.delete(0)
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from traversim.errors import EmptySlotError, ErrorContext, SlotIndexError, SlotStorageError
from traversim.graph import Graph

logger = logging.getLogger(__name__)


class NodeRecord(BaseModel):
    id: int
    label: str = ""
    x: float = 0.0
    y: float = 0.0


class GraphSnapshot(BaseModel):
    """A stored graph: nodes, edges and when it was saved."""

    nodes: list[NodeRecord] = Field(default_factory=list)
    edges: list[tuple[int, int]] = Field(default_factory=list)
    saved_at: datetime = Field(default_factory=datetime.now)

    @classmethod
    def from_graph(cls, graph: Graph) -> GraphSnapshot:
        data = graph.to_dict()
        return cls(
            nodes=[NodeRecord(**node) for node in data["nodes"]],
            edges=[(a, b) for a, b in data["edges"]],
        )

    def to_graph(self) -> Graph:
        return Graph.from_dict(
            {
                "nodes": [node.model_dump() for node in self.nodes],
                "edges": [list(edge) for edge in self.edges],
            }
        )


class SlotStore:
    """Fixed number of save slots, optionally persisted to ``path``.

    Every mutation rewrites the whole file. A file that cannot be read at
    construction is logged and ignored, leaving all slots empty.
    """

    def __init__(self, path: str | Path | None = None, slot_count: int = 3) -> None:
        if slot_count < 1:
            raise ValueError("slot_count must be at least 1")
        self.path = Path(path) if path else None
        self.slot_count = slot_count
        self._slots: list[GraphSnapshot | None] = [None] * slot_count
        if self.path is not None and self.path.exists():
            self._read()

    def slots(self) -> list[GraphSnapshot | None]:
        return list(self._slots)

    def get(self, slot: int) -> GraphSnapshot | None:
        self._check(slot)
        return self._slots[slot]

    def is_empty(self, slot: int) -> bool:
        return self.get(slot) is None

    def save(self, slot: int, graph: Graph) -> GraphSnapshot:
        """Store a snapshot of ``graph`` in ``slot``, replacing any previous one."""
        self._check(slot)
        snapshot = GraphSnapshot.from_graph(graph)
        self._slots[slot] = snapshot
        self._write()
        logger.info("Saved graph to slot %d", slot)
        return snapshot

    def load(self, slot: int) -> Graph:
        """Return a new Graph rebuilt from ``slot``.

        Raises:
            EmptySlotError: If nothing is stored in ``slot``.
        """
        snapshot = self.get(slot)
        if snapshot is None:
            raise EmptySlotError(
                f"Slot {slot + 1} is empty",
                context=ErrorContext(slot=slot),
            )
        return snapshot.to_graph()

    def delete(self, slot: int) -> bool:
        """Empty ``slot``. Returns True if it held a snapshot."""
        self._check(slot)
        existed = self._slots[slot] is not None
        self._slots[slot] = None
        self._write()
        return existed

    def describe(self, slot: int) -> str:
        """``"Slot 1 (12:30:01)"`` or ``"Slot 1 (empty)"``."""
        snapshot = self.get(slot)
        if snapshot is None:
            return f"Slot {slot + 1} (empty)"
        return f"Slot {slot + 1} ({snapshot.saved_at.strftime('%H:%M:%S')})"

    def _check(self, slot: int) -> None:
        if not 0 <= slot < self.slot_count:
            raise SlotIndexError(
                f"Slot index {slot} out of range (0-{self.slot_count - 1})",
                context=ErrorContext(slot=slot),
            )

    def _read(self) -> None:
        assert self.path is not None
        try:
            raw = json.loads(self.path.read_text())
            if not isinstance(raw, list):
                raise ValueError("slot file must contain a JSON list")
            for i, entry in enumerate(raw[: self.slot_count]):
                self._slots[i] = None if entry is None else GraphSnapshot.model_validate(entry)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Error loading save slots from %s: %s", self.path, e)
            self._slots = [None] * self.slot_count

    def _write(self) -> None:
        if self.path is None:
            return
        payload = [None if s is None else s.model_dump(mode="json") for s in self._slots]
        try:
            self.path.write_text(json.dumps(payload, indent=2))
        except OSError as e:
            raise SlotStorageError(
                f"Failed to write save slots to {self.path}",
                cause=e,
                path=str(self.path),
            ) from e


__all__ = ["GraphSnapshot", "NodeRecord", "SlotStore"]
