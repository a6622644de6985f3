"""Pytest fixtures for traversim tests."""

from __future__ import annotations

import os

import pytest

from traversim.config import SimulatorConfig
from traversim.engine import EngineSnapshot, TraversalEngine
from traversim.graph import Graph
from traversim.slots import SlotStore


class DuplicateEdgeGraph:
    """Read-only graph stub whose incidence lists repeat neighbors.

    Only exposes what the engine consumes: vertices(), edges_incident_to()
    and label().
    """

    def __init__(self, adjacency: dict[int, list[int]]) -> None:
        self._adjacency = adjacency

    def vertices(self) -> frozenset[int]:
        return frozenset(self._adjacency)

    def edges_incident_to(self, vertex_id: int) -> list[int]:
        return list(self._adjacency.get(vertex_id, []))

    def label(self, vertex_id: int) -> str:
        return f"v{vertex_id}"


def run_to_completion(engine: TraversalEngine, limit: int = 1000) -> list[EngineSnapshot]:
    """Step until finished and return the snapshot after every step."""
    snapshots = []
    for _ in range(limit):
        if engine.is_finished():
            return snapshots
        snapshots.append(engine.step())
    raise AssertionError("engine did not finish")


@pytest.fixture
def sample_graph() -> Graph:
    """Vertices A..F with edges A-B, A-C, B-D, B-E, C-F, E-F."""
    return Graph.default()


@pytest.fixture
def engine() -> TraversalEngine:
    return TraversalEngine()


@pytest.fixture
def fast_config() -> SimulatorConfig:
    return SimulatorConfig(step_interval=0.01)


@pytest.fixture
def slot_store(tmp_path) -> SlotStore:
    return SlotStore(tmp_path / "slots.json", slot_count=3)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TRAVERSIM_* variables from the outer environment out of tests."""
    for key in list(os.environ):
        if key.startswith("TRAVERSIM_"):
            monkeypatch.delenv(key, raising=False)
