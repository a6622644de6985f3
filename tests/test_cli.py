"""Tests for the traversim command line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from traversim.cli.commands import cli
from traversim.graph import Graph


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def slot_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "slots.json"
    monkeypatch.setenv("TRAVERSIM_SLOT_FILE", str(path))
    return path


@pytest.fixture
def line_graph_file(tmp_path: Path) -> Path:
    path = tmp_path / "line.json"
    path.write_text(json.dumps(Graph.from_edges([0, 1, 2, 3], [(2, 3), (0, 1), (1, 2)]).to_dict()))
    return path


class TestRunCommand:
    """Tests for `traversim run`."""

    def test_bfs_text_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run"])

        assert result.exit_code == 0, result.output
        assert "BFS step 1" in result.output
        assert "Processed order: A B C D E F" in result.output
        assert "Queue empty. Search complete." in result.output

    def test_dfs_json_output(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--strategy", "dfs", "--format", "json"])

        assert result.exit_code == 0, result.output
        output = json.loads(result.stdout)
        assert output["strategy"] == "dfs"
        assert output["state"] == "finished"
        assert output["processed"] == [0, 1, 3, 4, 5, 2]
        assert output["processed_labels"] == ["A", "B", "D", "E", "F", "C"]
        assert output["frontier"] == []
        assert output["trace"][0] == "Start: added A to the stack and marked it visited."
        assert output["trace"][-1] == "Stack empty. Search complete."

    def test_start_option(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--start", "5", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["processed"] == [5, 2, 4, 0, 1, 3]

    def test_invalid_start_exits_2(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--start", "99"])

        assert result.exit_code == 2
        assert "E101" in result.output

    def test_graph_file(self, runner: CliRunner, line_graph_file: Path) -> None:
        result = runner.invoke(
            cli, ["run", "--graph", str(line_graph_file), "--start", "3", "--format", "json"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["processed"] == [3, 2, 1, 0]

    def test_bad_graph_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("[1, 2]")

        result = runner.invoke(cli, ["run", "--graph", str(path)])

        assert result.exit_code == 2
        assert "nodes" in result.output

    def test_auto_mode(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--auto", "--interval", "0.01", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["processed"] == [0, 1, 2, 3, 4, 5]

    def test_auto_mode_reports_steps_in_order(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--auto", "--interval", "0.001"])

        assert result.exit_code == 0, result.output
        positions = [result.output.index(f"BFS step {n}") for n in range(1, 9)]
        assert positions == sorted(positions)
        assert "BFS step 9" not in result.output

    def test_non_positive_interval_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run", "--auto", "--interval", "0"])

        assert result.exit_code == 2

    def test_graph_and_slot_are_exclusive(
        self, runner: CliRunner, line_graph_file: Path
    ) -> None:
        result = runner.invoke(cli, ["run", "--graph", str(line_graph_file), "--slot", "1"])

        assert result.exit_code == 2

    def test_config_file(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "traversim.yaml"
        config.write_text("default_strategy: dfs\n")

        result = runner.invoke(cli, ["-c", str(config), "run", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["strategy"] == "dfs"


class TestSlotsCommands:
    """Tests for `traversim slots ...`."""

    def test_list_empty(self, runner: CliRunner, slot_file: Path) -> None:
        result = runner.invoke(cli, ["slots", "list"])

        assert result.exit_code == 0, result.output
        assert "Slot 1 (empty)" in result.output
        assert "Slot 3 (empty)" in result.output

    def test_save_list_and_run(
        self, runner: CliRunner, slot_file: Path, line_graph_file: Path
    ) -> None:
        saved = runner.invoke(cli, ["slots", "save", "2", "--graph", str(line_graph_file)])
        assert saved.exit_code == 0, saved.output
        assert slot_file.exists()

        listed = runner.invoke(cli, ["slots", "list"])
        assert "4 vertices, 3 edges" in listed.output

        result = runner.invoke(cli, ["run", "--slot", "2", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["processed"] == [0, 1, 2, 3]

    def test_run_from_empty_slot_fails(self, runner: CliRunner, slot_file: Path) -> None:
        result = runner.invoke(cli, ["run", "--slot", "1"])

        assert result.exit_code == 1
        assert "E303" in result.output

    def test_export(self, runner: CliRunner, slot_file: Path) -> None:
        runner.invoke(cli, ["slots", "save", "1"])

        result = runner.invoke(cli, ["slots", "export", "1"])

        assert result.exit_code == 0, result.output
        assert Graph.from_dict(json.loads(result.stdout)) == Graph.default()

    def test_delete(self, runner: CliRunner, slot_file: Path) -> None:
        runner.invoke(cli, ["slots", "save", "1"])

        result = runner.invoke(cli, ["slots", "delete", "1"])

        assert result.exit_code == 0, result.output
        assert "Slot 1 (empty)" in runner.invoke(cli, ["slots", "list"]).output

    def test_out_of_range_slot(self, runner: CliRunner, slot_file: Path) -> None:
        result = runner.invoke(cli, ["slots", "delete", "7"])

        assert result.exit_code == 1
        assert "E302" in result.output
