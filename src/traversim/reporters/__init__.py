"""Reporters that render traversal state."""

from traversim.reporters.console import ConsoleReporter

__all__ = ["ConsoleReporter"]
