"""Exception hierarchy for traversim.

Every error carries:
- error_code: an ErrorCode enum for programmatic handling
- context: ErrorContext with the vertex/slot/field involved
- suggestions: actionable hints shown by the CLI

Example:
    try:
        engine.initialize(graph, 99, Strategy.BREADTH_FIRST)
    except InvalidStartError as e:
        print(f"Error [{e.error_code.value}]: {e.message}")
        for suggestion in e.suggestions:
            print(f"  - {suggestion}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes.

    - E1xx: Traversal engine errors
    - E2xx: Graph editing errors
    - E3xx: Save slot errors
    - E4xx: Configuration errors
    - E9xx: Unknown/internal errors
    """

    INVALID_START = "E101"

    UNKNOWN_VERTEX = "E201"
    GRAPH_LOCKED = "E202"

    SLOT_FAILED = "E301"
    SLOT_OUT_OF_RANGE = "E302"
    SLOT_EMPTY = "E303"
    SLOT_STORAGE = "E304"

    INVALID_CONFIG = "E401"

    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 200:
            return "engine"
        elif code_num < 300:
            return "graph"
        elif code_num < 400:
            return "slots"
        elif code_num < 500:
            return "config"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context attached to an error.

    Attributes:
        vertex: Vertex id involved, if any.
        slot: Save slot index involved, if any.
        setting: Configuration field involved, if any.
        extra: Additional context-specific information.
        timestamp: When the error occurred.
    """

    vertex: int | None = None
    slot: int | None = None
    setting: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "vertex": self.vertex,
            "slot": self.slot,
            "setting": self.setting,
            "extra": self.extra,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.vertex is not None:
            parts.append(f"vertex={self.vertex}")
        if self.slot is not None:
            parts.append(f"slot={self.slot}")
        if self.setting:
            parts.append(f"setting={self.setting}")
        return " > ".join(parts) if parts else "unknown location"


class TraversimError(Exception):
    """Base exception for all traversim errors."""

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]
        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")
        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [f"Error [{self.error_code.value}]: {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class InvalidStartError(TraversimError):
    """The start vertex is not a member of the graph.

    Raised by ``TraversalEngine.initialize``/``load`` before any state is
    touched, and by the seeding ``step()`` when the start vertex has been
    deleted since the engine was loaded.
    """

    error_code = ErrorCode.INVALID_START
    default_message = "Start vertex does not exist in the graph"
    default_suggestions = [
        "Pick a start vertex that exists in the graph",
        "Run 'traversim run --start <id>' with one of the listed ids",
    ]


class GraphError(TraversimError):
    """An editing operation referenced a vertex that does not exist."""

    error_code = ErrorCode.UNKNOWN_VERTEX
    default_message = "Vertex does not exist in the graph"


class GraphLockedError(TraversimError):
    """The graph, start vertex or strategy cannot change right now.

    Editing is only allowed in edit mode, and the start vertex or strategy
    only before a run has started.
    """

    error_code = ErrorCode.GRAPH_LOCKED
    default_message = "Graph cannot be changed while a traversal is in progress"
    default_suggestions = [
        "Switch the session to edit mode (this resets the traversal)",
        "Reset the traversal before changing the start vertex or strategy",
    ]


class SlotError(TraversimError):
    """Base class for save slot errors."""

    error_code = ErrorCode.SLOT_FAILED
    default_message = "Save slot operation failed"


class SlotIndexError(SlotError):
    """Slot index outside the configured range."""

    error_code = ErrorCode.SLOT_OUT_OF_RANGE
    default_message = "Save slot index out of range"


class EmptySlotError(SlotError):
    """Tried to load from a slot that holds no snapshot."""

    error_code = ErrorCode.SLOT_EMPTY
    default_message = "Save slot is empty"


class SlotStorageError(SlotError):
    """The slot file could not be written."""

    error_code = ErrorCode.SLOT_STORAGE
    default_message = "Failed to write save slots"
    default_suggestions = [
        "Check that the directory of slot_file exists and is writable",
    ]


class ConfigValidationError(TraversimError):
    """A configuration value is invalid."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
        context: ErrorContext | None = None,
        **kwargs: Any,
    ) -> None:
        context = context or ErrorContext()
        context.setting = field
        if value is not None:
            context.extra["value"] = value
        super().__init__(message=message, context=context, **kwargs)


__all__ = [
    "ErrorCode",
    "ErrorContext",
    "TraversimError",
    "InvalidStartError",
    "GraphError",
    "GraphLockedError",
    "SlotError",
    "SlotIndexError",
    "EmptySlotError",
    "SlotStorageError",
    "ConfigValidationError",
]
