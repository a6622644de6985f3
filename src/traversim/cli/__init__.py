"""traversim CLI - Command line interface for the traversal simulator."""

from __future__ import annotations

from traversim.cli.commands import cli


def main() -> None:
    """Main entry point for the traversim CLI."""
    cli()


__all__ = ["main", "cli"]
