"""Tests for SlotStore save slots."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from traversim.errors import EmptySlotError, ErrorCode, SlotIndexError, SlotStorageError
from traversim.graph import Graph
from traversim.slots import GraphSnapshot, SlotStore


class TestSlotStore:
    """Test saving, loading and deleting slots."""

    def test_new_store_is_empty(self, slot_store: SlotStore) -> None:
        assert slot_store.slots() == [None, None, None]
        assert all(slot_store.is_empty(i) for i in range(3))

    def test_save_and_load_round_trip(self, slot_store: SlotStore, sample_graph: Graph) -> None:
        sample_graph.move_node(0, 11, 22)
        slot_store.save(1, sample_graph)

        loaded = slot_store.load(1)

        assert loaded == sample_graph
        assert loaded is not sample_graph
        assert slot_store.is_empty(0)

    def test_loaded_graph_is_independent(
        self, slot_store: SlotStore, sample_graph: Graph
    ) -> None:
        slot_store.save(0, sample_graph)

        slot_store.load(0).delete_node(0)

        assert 0 in slot_store.load(0)

    def test_save_replaces_previous(self, slot_store: SlotStore, sample_graph: Graph) -> None:
        slot_store.save(0, sample_graph)
        slot_store.save(0, Graph.from_edges([0], []))

        assert len(slot_store.load(0)) == 1

    def test_delete(self, slot_store: SlotStore, sample_graph: Graph) -> None:
        slot_store.save(2, sample_graph)

        assert slot_store.delete(2) is True
        assert slot_store.delete(2) is False
        assert slot_store.is_empty(2)

    def test_load_empty_slot_raises(self, slot_store: SlotStore) -> None:
        with pytest.raises(EmptySlotError) as exc_info:
            slot_store.load(0)

        assert exc_info.value.error_code is ErrorCode.SLOT_EMPTY
        assert exc_info.value.context.slot == 0

    @pytest.mark.parametrize("slot", [-1, 3, 10])
    def test_out_of_range_slot_raises(self, slot_store: SlotStore, slot: int) -> None:
        with pytest.raises(SlotIndexError):
            slot_store.get(slot)

    def test_describe(self, slot_store: SlotStore, sample_graph: Graph) -> None:
        snapshot = slot_store.save(0, sample_graph)

        assert slot_store.describe(0) == f"Slot 1 ({snapshot.saved_at.strftime('%H:%M:%S')})"
        assert slot_store.describe(1) == "Slot 2 (empty)"

    def test_in_memory_store(self, sample_graph: Graph) -> None:
        store = SlotStore()
        store.save(0, sample_graph)

        assert store.path is None
        assert store.load(0) == sample_graph

    def test_slot_count_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            SlotStore(slot_count=0)


class TestPersistence:
    """Test the JSON slot file."""

    def test_file_survives_new_store(self, tmp_path: Path, sample_graph: Graph) -> None:
        path = tmp_path / "slots.json"
        SlotStore(path).save(1, sample_graph)

        reopened = SlotStore(path)

        assert reopened.is_empty(0)
        assert reopened.load(1) == sample_graph

    def test_file_format(self, tmp_path: Path) -> None:
        path = tmp_path / "slots.json"
        SlotStore(path).save(0, Graph.from_edges([0, 1], [(0, 1)]))

        raw = json.loads(path.read_text())

        assert raw[1] is None and raw[2] is None
        assert raw[0]["edges"] == [[0, 1]]
        assert [n["label"] for n in raw[0]["nodes"]] == ["A", "B"]
        assert "saved_at" in raw[0]

    @pytest.mark.parametrize("content", ["not json", '{"a": 1}', '[{"nodes": 5}]'])
    def test_unreadable_file_is_ignored(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "slots.json"
        path.write_text(content)

        store = SlotStore(path)

        assert store.slots() == [None, None, None]

    def test_write_failure_raises(self, tmp_path: Path, sample_graph: Graph) -> None:
        store = SlotStore(tmp_path / "missing" / "slots.json")

        with pytest.raises(SlotStorageError) as exc_info:
            store.save(0, sample_graph)

        assert exc_info.value.cause is not None
        assert "path" in exc_info.value.context.extra


class TestGraphSnapshot:
    """Test the pydantic snapshot model."""

    def test_from_graph(self, sample_graph: Graph) -> None:
        snapshot = GraphSnapshot.from_graph(sample_graph)

        assert len(snapshot.nodes) == 6
        assert snapshot.edges[0] == (0, 1)
        assert snapshot.to_graph() == sample_graph
