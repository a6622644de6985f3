"""CLI commands for traversim."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from traversim.config import SimulatorConfig, load_config
from traversim.engine import EngineSnapshot
from traversim.errors import GraphError, InvalidStartError, SlotError
from traversim.frontier import Strategy
from traversim.graph import Graph
from traversim.reporters.console import ConsoleReporter
from traversim.session import Session
from traversim.slots import SlotStore

console = Console()


def setup_logging(config: SimulatorConfig, verbose: bool) -> None:
    """Configure logging based on config and verbosity."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        config.configure_logging()


def _load_graph_file(path: str) -> Graph:
    try:
        data = json.loads(Path(path).read_text())
    except (OSError, ValueError) as e:
        raise click.BadParameter(f"cannot read graph file: {e}", param_hint="--graph") from e
    if not isinstance(data, dict) or "nodes" not in data or "edges" not in data:
        raise click.BadParameter("graph file must contain 'nodes' and 'edges'", param_hint="--graph")
    try:
        return Graph.from_dict(data)
    except (GraphError, KeyError, TypeError, ValueError) as e:
        raise click.BadParameter(f"invalid graph file: {e}", param_hint="--graph") from e


def _slot_store(config: SimulatorConfig) -> SlotStore:
    return SlotStore(config.slot_file, config.slot_count)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to YAML config file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """traversim - Step-by-step BFS/DFS graph traversal simulator."""
    ctx.ensure_object(dict)

    config_obj = load_config(config)
    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = verbose

    setup_logging(config_obj, verbose)


@cli.command()
@click.option(
    "--strategy",
    "-s",
    type=click.Choice(["bfs", "dfs"], case_sensitive=False),
    default=None,
    help="Traversal strategy (default: from config)",
)
@click.option("--start", "start", type=int, default=None, help="Start vertex id (default: lowest id)")
@click.option("--graph", "graph_path", type=click.Path(exists=True), help="Graph JSON file")
@click.option("--slot", type=int, default=None, help="Load the graph from a save slot (1-based)")
@click.option("--auto/--no-auto", default=False, help="Step on a timer instead of immediately")
@click.option("--interval", type=float, default=None, help="Seconds between auto-play steps")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def run(
    ctx: click.Context,
    strategy: str | None,
    start: int | None,
    graph_path: str | None,
    slot: int | None,
    auto: bool,
    interval: float | None,
    output_format: str,
) -> None:
    """Run a traversal and print every step.

    Uses the built-in six-vertex sample graph unless --graph or --slot is given.
    """
    config: SimulatorConfig = ctx.obj["config"]
    if interval is not None:
        if interval <= 0:
            raise click.BadParameter("must be positive", param_hint="--interval")
        config = config.model_copy(update={"step_interval": interval})

    if graph_path and slot is not None:
        raise click.UsageError("--graph and --slot are mutually exclusive")

    graph = _load_graph_file(graph_path) if graph_path else Graph.default()
    session = Session(graph=graph, config=config)
    reporter = ConsoleReporter(session.graph, console=console, log_limit=config.log_display_limit)
    text_output = output_format == "text"

    try:
        if slot is not None:
            session.load_slot(slot - 1)
            reporter.graph = session.graph
        if strategy is not None:
            session.set_strategy(strategy)
        if start is not None:
            session.set_start(start)
        session.engine.clear_log()

        if auto:
            snapshot = _run_auto(session, reporter if text_output else None)
        else:
            snapshot = _run_manual(session, reporter if text_output else None)
    except InvalidStartError as e:
        click.echo(e.format_verbose(), err=True)
        sys.exit(2)
    except SlotError as e:
        click.echo(e.format_verbose(), err=True)
        sys.exit(1)

    if text_output:
        reporter.report_summary(snapshot)
    else:
        click.echo(json.dumps(_snapshot_to_dict(session.graph, snapshot), indent=2))


def _run_manual(session: Session, reporter: ConsoleReporter | None) -> EngineSnapshot:
    step_number = 0
    snapshot = session.snapshot()
    while not snapshot.is_finished:
        snapshot = session.step()
        step_number += 1
        if reporter is not None:
            reporter.report_step(step_number, snapshot)
    return snapshot


def _run_auto(session: Session, reporter: ConsoleReporter | None) -> EngineSnapshot:
    counter = {"steps": 1}

    def on_step(snapshot: EngineSnapshot) -> None:
        counter["steps"] += 1
        if reporter is not None:
            reporter.report_step(counter["steps"], snapshot)

    session.player.on_step = on_step
    seeded = session.step()
    if reporter is not None:
        reporter.report_step(1, seeded)
    session.play()
    try:
        session.player.wait()
    except KeyboardInterrupt:
        session.pause()
        click.echo("Paused.", err=True)
    if session.player.error is not None:
        raise session.player.error
    return session.snapshot()


def _snapshot_to_dict(graph: Graph, snapshot: EngineSnapshot) -> dict[str, Any]:
    return {
        "strategy": snapshot.strategy.value,
        "state": snapshot.state.value,
        "start": snapshot.start,
        "processed": list(snapshot.processed),
        "processed_labels": [graph.label(v) for v in snapshot.processed],
        "visited": sorted(snapshot.visited),
        "frontier": list(snapshot.frontier),
        "trace": [entry.message for entry in reversed(snapshot.log)],
    }


@cli.group()
def slots() -> None:
    """Manage saved graphs."""


@slots.command("list")
@click.pass_context
def list_slots(ctx: click.Context) -> None:
    """List save slots."""
    store = _slot_store(ctx.obj["config"])
    for i, snapshot in enumerate(store.slots()):
        line = store.describe(i)
        if snapshot is not None:
            line += f" - {len(snapshot.nodes)} vertices, {len(snapshot.edges)} edges"
        click.echo(line)


@slots.command("save")
@click.argument("slot", type=int)
@click.option("--graph", "graph_path", type=click.Path(exists=True), help="Graph JSON file")
@click.pass_context
def save_slot(ctx: click.Context, slot: int, graph_path: str | None) -> None:
    """Save a graph (default: the sample graph) into SLOT (1-based)."""
    store = _slot_store(ctx.obj["config"])
    graph = _load_graph_file(graph_path) if graph_path else Graph.default()
    try:
        store.save(slot - 1, graph)
    except SlotError as e:
        click.echo(e.format_verbose(), err=True)
        sys.exit(1)
    click.echo(f"Graph saved to slot {slot}.")


@slots.command("delete")
@click.argument("slot", type=int)
@click.pass_context
def delete_slot(ctx: click.Context, slot: int) -> None:
    """Empty SLOT (1-based)."""
    store = _slot_store(ctx.obj["config"])
    try:
        store.delete(slot - 1)
    except SlotError as e:
        click.echo(e.format_verbose(), err=True)
        sys.exit(1)
    click.echo(f"Slot {slot} deleted.")


@slots.command("export")
@click.argument("slot", type=int)
@click.pass_context
def export_slot(ctx: click.Context, slot: int) -> None:
    """Print the graph stored in SLOT (1-based) as JSON."""
    store = _slot_store(ctx.obj["config"])
    try:
        graph = store.load(slot - 1)
    except SlotError as e:
        click.echo(e.format_verbose(), err=True)
        sys.exit(1)
    click.echo(json.dumps(graph.to_dict(), indent=2))


__all__ = ["cli", "run", "slots"]
