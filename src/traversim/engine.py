"""TraversalEngine - Step-by-step breadth-first / depth-first search.

The engine is a small resumable state machine::

    NOT_STARTED --step()--> RUNNING     seed frontier/visited with the start vertex
    RUNNING     --step()--> RUNNING     dequeue one vertex and expand it
    RUNNING     --step()--> FINISHED    frontier empty
    FINISHED    --step()--> FINISHED    no-op

A vertex is marked visited when it is *discovered* (pushed onto the
frontier), not when it is processed. A vertex already waiting in the
frontier is therefore never pushed a second time, even when a vertex
processed later is also adjacent to it.

The engine is pull-based: callers invoke ``step()`` and then read the
accessors or ``snapshot()``. It never calls back into the UI.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from traversim.errors import ErrorContext, InvalidStartError
from traversim.frontier import BaseFrontier, Strategy, frontier_for
from traversim.graph import Graph

logger = logging.getLogger(__name__)


class EngineState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    FINISHED = "finished"


class VertexStatus(str, Enum):
    """How a vertex should be drawn for the current engine state."""

    UNVISITED = "unvisited"
    QUEUED = "queued"
    CURRENT = "current"
    PROCESSED = "processed"


@dataclass(frozen=True)
class TraceEntry:
    """One human-readable line of the traversal trace.

    Attributes:
        kind: One of ``reset``, ``start``, ``expand``, ``dead_end``, ``finish``.
        message: Text shown to the user.
        vertex: Vertex the entry is about (start or current), if any.
        added: Vertices pushed onto the frontier by this step, in push order.
        timestamp: When the entry was recorded.
    """

    kind: str
    message: str
    vertex: int | None = None
    added: tuple[int, ...] = ()
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class EngineSnapshot:
    """Immutable view of the engine after a step.

    ``frontier`` lists the extraction point first. ``log`` is newest first.
    """

    state: EngineState
    strategy: Strategy
    start: int | None
    current: int | None
    frontier: tuple[int, ...]
    visited: frozenset[int]
    processed: tuple[int, ...]
    log: tuple[TraceEntry, ...]

    @property
    def is_finished(self) -> bool:
        return self.state is EngineState.FINISHED

    def status_of(self, vertex_id: int) -> VertexStatus:
        if vertex_id == self.current:
            return VertexStatus.CURRENT
        if vertex_id in self.processed:
            return VertexStatus.PROCESSED
        if vertex_id in self.frontier:
            return VertexStatus.QUEUED
        return VertexStatus.UNVISITED


class TraversalEngine:
    """Performs one discrete visit-step of BFS or DFS per ``step()`` call.

    Two ways to begin a run:

    - ``initialize(graph, start, strategy)`` validates and seeds immediately;
      the engine is ``RUNNING`` on return.
    - ``load(graph, start, strategy)`` validates and leaves the engine
      ``NOT_STARTED``; the first ``step()`` seeds the run without dequeuing.

    Both raise ``InvalidStartError`` when ``start`` is not in the graph and
    leave the engine untouched in that case.

    All mutating calls and ``snapshot()`` hold one re-entrant lock, so an
    auto-play thread and a reader on another thread never see a frontier
    that disagrees with the visited set.

    Example::

        engine = TraversalEngine()
        engine.initialize(Graph.default(), 0, Strategy.BREADTH_FIRST)
        while not engine.is_finished():
            engine.step()
        engine.processed_order()   # [0, 1, 2, 3, 4, 5]
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._graph: Graph | None = None
        self._start: int | None = None
        self._strategy = Strategy.BREADTH_FIRST
        self._state = EngineState.NOT_STARTED
        self._frontier: BaseFrontier = frontier_for(self._strategy)
        self._visited: set[int] = set()
        self._processed: list[int] = []
        self._current: int | None = None
        self._log: list[TraceEntry] = []

    # ---- Lifecycle ------------------------------------------------------

    def load(self, graph: Graph, start: int, strategy: Strategy | str) -> None:
        """Configure a new run and leave the engine in ``NOT_STARTED``."""
        strategy = Strategy.parse(strategy)
        with self._lock:
            self._validate_start(graph, start)
            self._graph = graph
            self._start = start
            self._strategy = strategy
            self._clear_run()

    def initialize(self, graph: Graph, start: int, strategy: Strategy | str) -> EngineSnapshot:
        """Configure a new run and seed it, leaving the engine ``RUNNING``."""
        strategy = Strategy.parse(strategy)
        with self._lock:
            self._validate_start(graph, start)
            self._graph = graph
            self._start = start
            self._strategy = strategy
            self._clear_run()
            self._seed()
            return self.snapshot()

    def reset(self) -> None:
        """Discard the current run, keeping graph, start and strategy."""
        with self._lock:
            self._clear_run()
            self._record("reset", "Traversal reset.")
            logger.debug("Engine reset")

    def clear_log(self) -> None:
        with self._lock:
            self._log.clear()

    def step(self) -> EngineSnapshot:
        """Advance the traversal by exactly one unit of work.

        Raises:
            InvalidStartError: Only from ``NOT_STARTED``, when nothing was
                loaded or the start vertex has left the graph since.
        """
        with self._lock:
            if self._state is EngineState.FINISHED:
                return self.snapshot()

            if self._state is EngineState.NOT_STARTED:
                if self._graph is None or self._start is None:
                    raise InvalidStartError("No graph or start vertex has been loaded")
                self._validate_start(self._graph, self._start)
                self._seed()
                return self.snapshot()

            if self._frontier.is_empty():
                self._finish()
            else:
                self._expand_next()
            return self.snapshot()

    # ---- Accessors ------------------------------------------------------

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def start(self) -> int | None:
        return self._start

    @property
    def graph(self) -> Graph | None:
        return self._graph

    def is_finished(self) -> bool:
        return self._state is EngineState.FINISHED

    def is_started(self) -> bool:
        return self._state is not EngineState.NOT_STARTED

    def current_frontier(self) -> list[int]:
        with self._lock:
            return list(self._frontier.snapshot())

    def current_vertex(self) -> int | None:
        return self._current

    def processed_order(self) -> list[int]:
        with self._lock:
            return list(self._processed)

    def visited_set(self) -> set[int]:
        with self._lock:
            return set(self._visited)

    def log(self) -> list[TraceEntry]:
        """Trace entries, newest first."""
        with self._lock:
            return list(self._log)

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return EngineSnapshot(
                state=self._state,
                strategy=self._strategy,
                start=self._start,
                current=self._current,
                frontier=self._frontier.snapshot(),
                visited=frozenset(self._visited),
                processed=tuple(self._processed),
                log=tuple(self._log),
            )

    # ---- Internals ------------------------------------------------------

    def _validate_start(self, graph: Graph, start: int) -> None:
        if start not in graph.vertices():
            raise InvalidStartError(
                f"Start vertex {start} does not exist in the graph",
                context=ErrorContext(vertex=start),
                known_vertices=sorted(graph.vertices()),
            )

    def _clear_run(self) -> None:
        self._state = EngineState.NOT_STARTED
        self._frontier = frontier_for(self._strategy)
        self._visited = set()
        self._processed = []
        self._current = None

    def _label(self, vertex_id: int) -> str:
        assert self._graph is not None
        return self._graph.label(vertex_id)

    def _seed(self) -> None:
        assert self._start is not None
        start = self._start
        self._frontier.push(start)
        self._visited.add(start)
        self._state = EngineState.RUNNING
        self._record(
            "start",
            f"Start: added {self._label(start)} to the {self._strategy.container_name} "
            f"and marked it visited.",
            vertex=start,
            added=(start,),
        )
        logger.info("Started %s traversal from vertex %d", self._strategy.short_name, start)

    def _expand_next(self) -> None:
        assert self._graph is not None
        current = self._frontier.pop()
        assert current is not None
        self._current = current
        self._processed.append(current)

        neighbors = sorted(set(self._graph.edges_incident_to(current)))
        unvisited = [n for n in neighbors if n not in self._visited]
        label = self._label(current)

        if unvisited:
            self._visited.update(unvisited)
            self._frontier.push_many(unvisited)
            labels = ", ".join(self._label(n) for n in unvisited)
            self._record(
                "expand",
                f"Exploring {label}: neighbors ({labels}) -> {self._strategy.container_name}.",
                vertex=current,
                added=tuple(unvisited),
            )
        else:
            self._record("dead_end", f"Exploring {label}: no new neighbors.", vertex=current)

        logger.debug(
            "Processed vertex %d, discovered %s, frontier=%s",
            current,
            unvisited,
            list(self._frontier.snapshot()),
        )

    def _finish(self) -> None:
        self._state = EngineState.FINISHED
        self._current = None
        self._record(
            "finish",
            f"{self._strategy.container_name.capitalize()} empty. Search complete.",
        )
        logger.info("Traversal finished after processing %d vertices", len(self._processed))

    def _record(
        self,
        kind: str,
        message: str,
        vertex: int | None = None,
        added: tuple[int, ...] = (),
    ) -> None:
        self._log.insert(0, TraceEntry(kind=kind, message=message, vertex=vertex, added=added))


__all__ = [
    "EngineState",
    "VertexStatus",
    "TraceEntry",
    "EngineSnapshot",
    "TraversalEngine",
]
