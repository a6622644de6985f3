"""Graph - Editable undirected graph consumed by the traversal engine."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from traversim.errors import ErrorContext, GraphError

logger = logging.getLogger(__name__)


def vertex_label(vertex_id: int) -> str:
    """Derive the display label for a vertex id.

    0 -> "A", 25 -> "Z", 26 -> "A1", 27 -> "B1", 52 -> "A2".
    """
    letter = chr(65 + vertex_id % 26)
    if vertex_id >= 26:
        return f"{letter}{vertex_id // 26}"
    return letter


@dataclass
class Vertex:
    """A graph vertex.

    Attributes:
        id: Unique integer identifier.
        x: Horizontal position on the canvas.
        y: Vertical position on the canvas.
    """

    id: int
    x: float = 0.0
    y: float = 0.0

    @property
    def label(self) -> str:
        return vertex_label(self.id)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "x": self.x, "y": self.y}


class Graph:
    """Vertices plus undirected edges, with the editing operations of the canvas.

    Edges are stored as normalized ``(low, high)`` pairs in insertion order,
    so there is never more than one edge between two vertices and an edge
    never connects a vertex to itself.

    The traversal engine only reads ``vertices()``, ``edges_incident_to()``,
    ``neighbors()`` and ``label()``.

    Example::

        graph = Graph()
        a = graph.add_node(250, 100)
        b = graph.add_node(100, 200)
        graph.toggle_edge(a.id, b.id)   # creates the edge
        graph.toggle_edge(b.id, a.id)   # removes it again
    """

    def __init__(self) -> None:
        self._vertices: dict[int, Vertex] = {}
        self._edges: list[tuple[int, int]] = []

    @classmethod
    def default(cls) -> Graph:
        """The six-vertex sample graph A..F the simulator starts with."""
        graph = cls()
        for vertex_id, x, y in [
            (0, 250, 100),
            (1, 100, 200),
            (2, 350, 200),
            (3, 100, 300),
            (4, 200, 300),
            (5, 400, 300),
        ]:
            graph.insert_vertex(Vertex(vertex_id, float(x), float(y)))
        for a, b in [(0, 1), (0, 2), (1, 3), (1, 4), (2, 5), (4, 5)]:
            graph.add_edge(a, b)
        return graph

    @classmethod
    def from_edges(cls, vertex_ids: list[int], edges: list[tuple[int, int]]) -> Graph:
        """Build a graph from bare ids and edge pairs (positions default to 0)."""
        graph = cls()
        for vertex_id in vertex_ids:
            graph.insert_vertex(Vertex(vertex_id))
        for a, b in edges:
            graph.add_edge(a, b)
        return graph

    # ---- Read-only view -------------------------------------------------

    def vertices(self) -> frozenset[int]:
        """Ids of all vertices."""
        return frozenset(self._vertices)

    def edges(self) -> list[tuple[int, int]]:
        """All edges as ``(low, high)`` pairs in insertion order."""
        return list(self._edges)

    def edges_incident_to(self, vertex_id: int) -> list[int]:
        """Other endpoints of every edge touching ``vertex_id``, in edge order."""
        result = []
        for a, b in self._edges:
            if a == vertex_id:
                result.append(b)
            elif b == vertex_id:
                result.append(a)
        return result

    def neighbors(self, vertex_id: int) -> list[int]:
        """Adjacent vertex ids, deduplicated and sorted ascending."""
        return sorted(set(self.edges_incident_to(vertex_id)))

    def has_edge(self, a: int, b: int) -> bool:
        return _normalize(a, b) in self._edges

    def get_vertex(self, vertex_id: int) -> Vertex | None:
        return self._vertices.get(vertex_id)

    def label(self, vertex_id: int) -> str:
        """Display label, or ``"?"`` for an unknown id."""
        if vertex_id not in self._vertices:
            return "?"
        return vertex_label(vertex_id)

    def iter_vertices(self) -> Iterator[Vertex]:
        """Iterate over vertices in ascending id order."""
        for vertex_id in sorted(self._vertices):
            yield self._vertices[vertex_id]

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    # ---- Editing --------------------------------------------------------

    def next_id(self) -> int:
        """Id the next ``add_node`` call will assign."""
        return max(self._vertices) + 1 if self._vertices else 0

    def insert_vertex(self, vertex: Vertex) -> Vertex:
        """Insert ``vertex`` as-is, replacing any vertex with the same id."""
        self._vertices[vertex.id] = vertex
        return vertex

    def add_node(self, x: float = 0.0, y: float = 0.0) -> Vertex:
        """Create a vertex at ``(x, y)`` with the next free id."""
        vertex = self.insert_vertex(Vertex(self.next_id(), float(x), float(y)))
        logger.debug("Added vertex %s (%d)", vertex.label, vertex.id)
        return vertex

    def delete_node(self, vertex_id: int) -> bool:
        """Delete a vertex and every edge touching it.

        Returns:
            True if the vertex existed.
        """
        if vertex_id not in self._vertices:
            return False
        del self._vertices[vertex_id]
        self._edges = [e for e in self._edges if vertex_id not in e]
        logger.debug("Deleted vertex %d", vertex_id)
        return True

    def add_edge(self, a: int, b: int) -> bool:
        """Add the edge ``a - b`` if absent. Returns True if it was added."""
        self._require(a)
        self._require(b)
        if a == b:
            return False
        key = _normalize(a, b)
        if key in self._edges:
            return False
        self._edges.append(key)
        return True

    def remove_edge(self, a: int, b: int) -> bool:
        """Remove the edge ``a - b`` if present. Returns True if it was removed."""
        key = _normalize(a, b)
        if key not in self._edges:
            return False
        self._edges.remove(key)
        return True

    def toggle_edge(self, a: int, b: int) -> bool | None:
        """Remove the edge if it exists, otherwise create it.

        Returns:
            True if the edge now exists, False if it was removed, None when
            ``a == b`` (self-loops are ignored).
        """
        self._require(a)
        self._require(b)
        if a == b:
            return None
        if self.remove_edge(a, b):
            logger.debug("Removed edge %d-%d", a, b)
            return False
        self.add_edge(a, b)
        logger.debug("Created edge %d-%d", a, b)
        return True

    def move_node(self, vertex_id: int, x: float, y: float) -> None:
        """Reposition a vertex."""
        vertex = self._require(vertex_id)
        vertex.x, vertex.y = float(x), float(y)

    def clear(self) -> None:
        """Remove all vertices and edges."""
        self._vertices.clear()
        self._edges.clear()

    def copy(self) -> Graph:
        return Graph.from_dict(self.to_dict())

    def _require(self, vertex_id: int) -> Vertex:
        vertex = self._vertices.get(vertex_id)
        if vertex is None:
            raise GraphError(
                f"Vertex {vertex_id} does not exist",
                context=ErrorContext(vertex=vertex_id),
            )
        return vertex

    # ---- Serialization --------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{"nodes": [...], "edges": [[a, b], ...]}``."""
        return {
            "nodes": [v.to_dict() for v in self.iter_vertices()],
            "edges": [[a, b] for a, b in self._edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Graph:
        """Construct a graph from ``to_dict()`` output.

        Node labels in ``data`` are ignored; they are always derived from ids.
        Edges referencing unknown vertices raise ``GraphError``.
        """
        graph = cls()
        for node in data.get("nodes", []):
            graph.insert_vertex(
                Vertex(int(node["id"]), float(node.get("x", 0.0)), float(node.get("y", 0.0)))
            )
        for edge in data.get("edges", []):
            a, b = edge
            graph.add_edge(int(a), int(b))
        return graph

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Graph(vertices={len(self._vertices)}, edges={len(self._edges)})"


def _normalize(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


__all__ = ["Graph", "Vertex", "vertex_label"]
