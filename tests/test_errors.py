"""Tests for the traversim exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestErrorCode:
    """Test error code categories."""

    @pytest.mark.parametrize(
        "code,category",
        [
            (ErrorCode.INVALID_START, "engine"),
            (ErrorCode.UNKNOWN_VERTEX, "graph"),
            (ErrorCode.GRAPH_LOCKED, "graph"),
            (ErrorCode.SLOT_EMPTY, "slots"),
            (ErrorCode.INVALID_CONFIG, "config"),
            (ErrorCode.UNKNOWN, "unknown"),
        ],
    )
    def test_category(self, code: ErrorCode, category: str) -> None:
        assert code.category == category


class TestErrorContext:
    """Test ErrorContext formatting."""

    def test_format_location(self) -> None:
        assert ErrorContext(vertex=3, slot=1).format_location() == "vertex=3 > slot=1"
        assert ErrorContext().format_location() == "unknown location"

    def test_to_dict_drops_none(self) -> None:
        data = ErrorContext(setting="step_interval").to_dict()

        assert data["setting"] == "step_interval"
        assert "vertex" not in data
        assert "timestamp" in data


class TestTraversimError:
    """Test the base exception behaviour."""

    def test_defaults(self) -> None:
        error = TraversimError()

        assert error.message == "An unexpected error occurred"
        assert error.error_code is ErrorCode.UNKNOWN
        assert error.suggestions == []

    def test_str_includes_code_and_location(self) -> None:
        error = InvalidStartError("Start vertex 9 missing", context=ErrorContext(vertex=9))

        assert str(error) == "[E101] Start vertex 9 missing | at vertex=9"

    def test_extra_context(self) -> None:
        error = InvalidStartError(known_vertices=[0, 1])

        assert error.context.extra == {"known_vertices": [0, 1]}

    def test_custom_suggestions_override_defaults(self) -> None:
        error = InvalidStartError(suggestions=["try 0"])

        assert error.suggestions == ["try 0"]
        assert len(InvalidStartError().suggestions) == 2

    def test_format_verbose(self) -> None:
        error = GraphLockedError(context=ErrorContext(vertex=2))
        text = error.format_verbose()

        assert text.startswith("Error [E202]: ")
        assert "Location: vertex=2" in text
        assert "Suggestions:" in text

    def test_to_dict(self) -> None:
        cause = OSError("disk full")
        data = SlotStorageError(cause=cause).to_dict()

        assert data["error_code"] == "E304"
        assert data["error_type"] == "SlotStorageError"
        assert data["cause"] == "disk full"


class TestHierarchy:
    """Test subclass relationships and codes."""

    @pytest.mark.parametrize(
        "cls,code",
        [
            (InvalidStartError, ErrorCode.INVALID_START),
            (GraphError, ErrorCode.UNKNOWN_VERTEX),
            (GraphLockedError, ErrorCode.GRAPH_LOCKED),
            (SlotIndexError, ErrorCode.SLOT_OUT_OF_RANGE),
            (EmptySlotError, ErrorCode.SLOT_EMPTY),
            (SlotStorageError, ErrorCode.SLOT_STORAGE),
            (ConfigValidationError, ErrorCode.INVALID_CONFIG),
        ],
    )
    def test_codes(self, cls: type[TraversimError], code: ErrorCode) -> None:
        error = cls()

        assert isinstance(error, TraversimError)
        assert error.error_code is code

    def test_slot_errors_share_base(self) -> None:
        for cls in (SlotIndexError, EmptySlotError, SlotStorageError):
            assert issubclass(cls, SlotError)

    def test_config_error_records_setting_and_value(self) -> None:
        error = ConfigValidationError("bad", field="slot_count", value=0)

        assert error.context.setting == "slot_count"
        assert error.context.extra["value"] == 0
