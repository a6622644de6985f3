"""Session - Editing and run controller around one graph and one engine.

The session plays the part of the simulator's UI layer:

- owns the graph, the start vertex, the strategy and the current mode
- only allows graph edits in EDIT mode, and switching to EDIT resets the run
- resets the engine (stopping auto-play first) whenever the graph, the
  strategy or the loaded slot changes
- keeps its own newest-first event list for editing and slot messages;
  the traversal trace lives in the engine
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from traversim.autoplay import AutoPlayer
from traversim.config import SimulatorConfig
from traversim.engine import EngineSnapshot, EngineState, TraversalEngine
from traversim.errors import ErrorContext, GraphLockedError, InvalidStartError
from traversim.frontier import Strategy
from traversim.graph import Graph, Vertex
from traversim.slots import GraphSnapshot, SlotStore

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    RUN = "run"
    EDIT = "edit"


class Session:
    """Graph editing, start/strategy selection, stepping, auto-play and slots.

    Example::

        session = Session()
        session.step()              # seeds the run from vertex A
        session.play()              # auto-play until finished
        session.player.wait()
        session.snapshot().processed
    """

    def __init__(
        self,
        graph: Graph | None = None,
        config: SimulatorConfig | None = None,
        slots: SlotStore | None = None,
        on_step: Callable[[EngineSnapshot], None] | None = None,
    ) -> None:
        self.config = config or SimulatorConfig()
        self.graph = graph if graph is not None else Graph.default()
        self.slots = slots or SlotStore(self.config.slot_file, self.config.slot_count)
        self.engine = TraversalEngine()
        self.player = AutoPlayer(self.engine, self.config.step_interval, on_step=on_step)
        self.mode = Mode.RUN
        self.strategy = self.config.strategy
        self.start_vertex = min(self.graph.vertices(), default=0)
        self.events: list[str] = []
        self._reload_engine()

    # ---- Run control ----------------------------------------------------

    def snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    @property
    def run_started(self) -> bool:
        return self.engine.state is not EngineState.NOT_STARTED

    def step(self) -> EngineSnapshot:
        """Advance the traversal by one step (RUN mode only)."""
        self._require_run_mode()
        self.player.stop()
        self._prepare_run()
        return self.engine.step()

    def play(self) -> bool:
        """Start auto-play. Returns False if already playing or finished."""
        self._require_run_mode()
        self._prepare_run()
        if self.engine.state is EngineState.NOT_STARTED:
            # surface an invalid start here rather than inside the timer thread
            self.engine.step()
        return self.player.start()

    def pause(self) -> None:
        self.player.pause()

    def reset(self) -> None:
        """Stop auto-play and discard the run state."""
        self.player.stop()
        self._reload_engine()
        self.engine.reset()

    # ---- Mode, start and strategy ---------------------------------------

    def set_mode(self, mode: Mode | str) -> None:
        mode = Mode(mode)
        if mode is self.mode:
            return
        if mode is Mode.EDIT:
            self.reset()
        else:
            self._reload_engine()
        self.mode = mode
        logger.debug("Mode changed to %s", mode.value)

    def set_start(self, vertex_id: int) -> None:
        """Choose the start vertex. Only allowed before the run has started."""
        if self.run_started:
            raise GraphLockedError(
                "Start vertex can only change before the traversal starts",
                context=ErrorContext(vertex=vertex_id),
            )
        if vertex_id not in self.graph:
            raise InvalidStartError(
                f"Start vertex {vertex_id} does not exist in the graph",
                context=ErrorContext(vertex=vertex_id),
            )
        self.start_vertex = vertex_id
        self._reload_engine()
        self._event(f"Start vertex changed to {self.graph.label(vertex_id)}.")

    def set_strategy(self, strategy: Strategy | str) -> None:
        """Switch BFS/DFS. Refused while a run is in progress."""
        strategy = Strategy.parse(strategy)
        if self.player.is_active or (
            self.run_started and not self.engine.is_finished()
        ):
            raise GraphLockedError("Strategy can only change when no traversal is in progress")
        self.strategy = strategy
        self.reset()

    # ---- Graph editing --------------------------------------------------

    def add_node(self, x: float = 0.0, y: float = 0.0) -> Vertex:
        self._require_edit_mode()
        vertex = self.graph.add_node(x, y)
        self._event(f"Vertex {vertex.label} added.")
        return vertex

    def delete_node(self, vertex_id: int) -> bool:
        self._require_edit_mode()
        removed = self.graph.delete_node(vertex_id)
        if removed:
            if self.start_vertex == vertex_id:
                self.start_vertex = min(self.graph.vertices(), default=0)
            self._event("Vertex deleted.")
        return removed

    def toggle_edge(self, a: int, b: int) -> bool | None:
        self._require_edit_mode()
        result = self.graph.toggle_edge(a, b)
        if result is True:
            self._event("Edge created.")
        elif result is False:
            self._event("Edge removed.")
        return result

    def move_node(self, vertex_id: int, x: float, y: float) -> None:
        self._require_edit_mode()
        self.graph.move_node(vertex_id, x, y)

    def clear_graph(self) -> None:
        """Reset the run and remove every vertex and edge."""
        self.reset()
        self.graph.clear()
        self.start_vertex = 0
        self._event("Graph cleared.")

    # ---- Save slots -----------------------------------------------------

    def save_slot(self, slot: int) -> GraphSnapshot:
        snapshot = self.slots.save(slot, self.graph)
        self._event(f"Graph saved to slot {slot + 1}.")
        return snapshot

    def load_slot(self, slot: int) -> None:
        """Reset the run and replace the graph with the one stored in ``slot``."""
        graph = self.slots.load(slot)
        self.reset()
        self.graph = graph
        if self.start_vertex not in self.graph:
            self.start_vertex = min(self.graph.vertices(), default=0)
        self._reload_engine()
        self._event(f"Graph loaded from slot {slot + 1}.")

    def delete_slot(self, slot: int) -> None:
        self.slots.delete(slot)
        self._event(f"Slot {slot + 1} deleted.")

    # ---- Internals ------------------------------------------------------

    def _reload_engine(self) -> None:
        """Point the engine at the current graph/start/strategy if the start is valid."""
        self.player.stop()
        if self.start_vertex in self.graph:
            self.engine.load(self.graph, self.start_vertex, self.strategy)

    def _prepare_run(self) -> None:
        """Load the engine from the current graph/start/strategy if no run is in progress."""
        if self.engine.state is EngineState.NOT_STARTED:
            self.engine.load(self.graph, self.start_vertex, self.strategy)

    def _require_run_mode(self) -> None:
        if self.mode is not Mode.RUN:
            raise GraphLockedError("Traversal can only run in run mode")

    def _require_edit_mode(self) -> None:
        if self.mode is not Mode.EDIT:
            raise GraphLockedError("Graph can only be edited in edit mode")

    def _event(self, message: str) -> None:
        self.events.insert(0, message)
        logger.debug(message)


__all__ = ["Mode", "Session"]
