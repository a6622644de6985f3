"""traversim - Step-by-step breadth-first / depth-first search simulator.

The traversal engine performs one visit-step per call and exposes its
frontier, visited set, processed order and trace log so a front end can
draw every intermediate state.

Core abstractions:
- Graph: editable undirected graph (vertices + edges)
- Strategy: BREADTH_FIRST (FIFO frontier) or DEPTH_FIRST (LIFO frontier)
- TraversalEngine: the resumable BFS/DFS state machine
- AutoPlayer: steps an engine on a fixed interval
- SlotStore: named graph snapshots
- Session: editing/run controller tying the above together

Example::

    from traversim import Graph, Strategy, TraversalEngine

    engine = TraversalEngine()
    engine.initialize(Graph.default(), 0, Strategy.DEPTH_FIRST)
    while not engine.is_finished():
        engine.step()
    engine.processed_order()   # [0, 1, 3, 4, 5, 2]
"""

from traversim.autoplay import AutoPlayer
from traversim.config import SimulatorConfig, load_config
from traversim.engine import (
    EngineSnapshot,
    EngineState,
    TraceEntry,
    TraversalEngine,
    VertexStatus,
)
from traversim.errors import (
    ConfigValidationError,
    EmptySlotError,
    ErrorCode,
    ErrorContext,
    GraphError,
    GraphLockedError,
    InvalidStartError,
    SlotError,
    SlotIndexError,
    SlotStorageError,
    TraversimError,
)
from traversim.frontier import (
    BaseFrontier,
    FifoFrontier,
    Frontier,
    LifoFrontier,
    Strategy,
    frontier_for,
)
from traversim.graph import Graph, Vertex, vertex_label
from traversim.session import Mode, Session
from traversim.slots import GraphSnapshot, SlotStore

__version__ = "0.1.0"

__all__ = [
    # Graph
    "Graph",
    "Vertex",
    "vertex_label",
    # Frontier and strategy
    "Strategy",
    "Frontier",
    "BaseFrontier",
    "FifoFrontier",
    "LifoFrontier",
    "frontier_for",
    # Engine
    "TraversalEngine",
    "EngineState",
    "EngineSnapshot",
    "TraceEntry",
    "VertexStatus",
    # Drivers and collaborators
    "AutoPlayer",
    "Session",
    "Mode",
    "SlotStore",
    "GraphSnapshot",
    "SimulatorConfig",
    "load_config",
    # Errors
    "TraversimError",
    "ErrorCode",
    "ErrorContext",
    "InvalidStartError",
    "GraphError",
    "GraphLockedError",
    "SlotError",
    "SlotIndexError",
    "EmptySlotError",
    "SlotStorageError",
    "ConfigValidationError",
]
