"""Console reporter for terminal output."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from traversim.engine import EngineSnapshot, VertexStatus
from traversim.graph import Graph


class ConsoleReporter:
    """Renders engine snapshots for the terminal.

    Colours follow the simulator legend:
    - unvisited: dim
    - queued (in the frontier): yellow
    - current: bold blue
    - processed: green
    """

    STATUS_STYLES = {
        VertexStatus.UNVISITED: "dim",
        VertexStatus.QUEUED: "yellow",
        VertexStatus.CURRENT: "bold blue",
        VertexStatus.PROCESSED: "green",
    }

    def __init__(
        self,
        graph: Graph,
        console: Console | None = None,
        log_limit: int = 50,
    ) -> None:
        self.graph = graph
        self.console = console or Console()
        self.log_limit = log_limit

    def _labels(self, vertex_ids: tuple[int, ...] | list[int]) -> str:
        return " ".join(self.graph.label(v) for v in vertex_ids)

    def vertex_line(self, snapshot: EngineSnapshot) -> Text:
        """One styled label per vertex, in id order."""
        text = Text()
        for vertex in self.graph.iter_vertices():
            status = snapshot.status_of(vertex.id)
            if text.plain:
                text.append(" ")
            marker = "*" if vertex.id == snapshot.start and not snapshot.visited else ""
            text.append(f"{vertex.label}{marker}", style=self.STATUS_STYLES[status])
        return text

    def step_table(self, step_number: int, snapshot: EngineSnapshot) -> Table:
        """A compact table describing the state after one step."""
        strategy = snapshot.strategy
        table = Table(
            title=f"{strategy.short_name} step {step_number}",
            show_header=False,
            title_justify="left",
        )
        table.add_column("field", style="bold")
        table.add_column("value")

        current = "-" if snapshot.current is None else self.graph.label(snapshot.current)
        frontier = self._labels(snapshot.frontier) or f"({strategy.container_name} empty)"
        table.add_row("State", snapshot.state.value)
        table.add_row("Current", current)
        table.add_row(f"Frontier ({strategy.frontier_kind})", frontier)
        table.add_row("Processed", self._labels(snapshot.processed) or "-")
        table.add_row("Vertices", self.vertex_line(snapshot))
        if snapshot.log:
            table.add_row("Trace", snapshot.log[0].message)
        return table

    def report_step(self, step_number: int, snapshot: EngineSnapshot) -> None:
        self.console.print(self.step_table(step_number, snapshot))

    def report_summary(self, snapshot: EngineSnapshot) -> None:
        """Print the processed order and the (capped) trace, oldest first."""
        self.console.print()
        self.console.print(
            f"[bold]Processed order:[/bold] {self._labels(snapshot.processed) or '-'}"
        )
        unvisited = sorted(self.graph.vertices() - snapshot.visited)
        if unvisited:
            self.console.print(f"[dim]Never reached:[/dim] {self._labels(unvisited)}")

        entries = snapshot.log[: self.log_limit] if self.log_limit else ()
        if entries:
            self.console.print()
            self.console.print("[bold]Trace[/bold]")
            for entry in reversed(entries):
                self.console.print(f"  {entry.message}")


__all__ = ["ConsoleReporter"]
