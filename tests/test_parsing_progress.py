"""Tests for parsing.progress: Progress, Ok, Err."""

from __future__ import annotations

import pytest

from slicecomb.diagnostics import ProgressUnwrapError
from slicecomb.parsing import Err, Ok, Progress, SliceCursor

# ============================================================================
# CONSTRUCTION AND INSPECTION
# ============================================================================


class TestProgressConstruction:
    """Test constructors and accessors."""

    def test_success(self) -> None:
        """success() holds the cursor and an Ok value."""
        progress = Progress.success(3, "abc")

        assert progress.cursor == 3
        assert progress.status == Ok("abc")
        assert progress.is_ok
        assert not progress.is_err
        assert progress.value == "abc"

    def test_failure(self) -> None:
        """failure() holds the cursor and an Err value."""
        progress = Progress.failure(0, "boom")

        assert progress.status == Err("boom")
        assert progress.is_err
        assert progress.error == "boom"

    def test_from_result(self) -> None:
        """from_result() takes a ready status."""
        assert Progress.from_result(1, Err("e")) == Progress.failure(1, "e")

    def test_value_of_failure_raises(self) -> None:
        """Asking a failure for its value is a grammar bug."""
        with pytest.raises(ProgressUnwrapError, match="unwrap for value"):
            _ = Progress.failure(0, "boom").value

    def test_error_of_success_raises(self) -> None:
        """Asking a success for its error is a grammar bug."""
        with pytest.raises(ProgressUnwrapError, match="unwrap for error"):
            _ = Progress.success(0, 1).error

    def test_unwrap(self) -> None:
        """unwrap() returns (cursor, value)."""
        assert Progress.success(4, 5).unwrap() == (4, 5)

    def test_unwrap_err(self) -> None:
        """unwrap_err() returns (cursor, error)."""
        assert Progress.failure(2, "e").unwrap_err() == (2, "e")

    def test_finish(self) -> None:
        """finish() splits into cursor and status."""
        assert Progress.success(1, "v").finish() == (1, Ok("v"))

    def test_frozen(self) -> None:
        """Progress cannot be mutated."""
        progress = Progress.success(0, 1)

        with pytest.raises(AttributeError):
            progress.cursor = 1  # type: ignore[misc]

    def test_pattern_matching(self) -> None:
        """Progress destructures with match."""
        match Progress.success(7, "x"):
            case Progress(cursor, Ok(value)):
                assert (cursor, value) == (7, "x")
            case _:
                pytest.fail("expected success")


# ============================================================================
# TRANSFORMATION
# ============================================================================


class TestProgressMapping:
    """map / map_err and their cursor-aware variants."""

    def test_map_success(self) -> None:
        """map() transforms the value and keeps the cursor."""
        assert Progress.success(4, "abcd").map(len) == Progress.success(4, 4)

    def test_map_failure_untouched(self) -> None:
        """map() leaves failures alone."""
        failure = Progress.failure(0, "e")

        assert failure.map(len) == failure

    def test_map_with_cursor(self) -> None:
        """map_with_cursor() also receives the cursor."""
        progress = Progress.success(4, 10).map_with_cursor(lambda v, c: v + c)

        assert progress == Progress.success(4, 14)

    def test_map_err(self) -> None:
        """map_err() transforms the error only."""
        assert Progress.failure(1, "e").map_err(str.upper) == Progress.failure(1, "E")
        assert Progress.success(1, "v").map_err(str.upper) == Progress.success(1, "v")

    def test_map_err_with_cursor(self) -> None:
        """map_err_with_cursor() also receives the cursor."""
        progress = Progress.failure(3, "e").map_err_with_cursor(lambda e, c: f"{e}@{c}")

        assert progress.error == "e@3"


class TestProgressAndThen:
    """and_then: fallible refinement with explicit restore cursor."""

    def test_and_then_success_keeps_cursor(self) -> None:
        """A successful refinement keeps the advanced cursor."""
        progress = Progress.success(4, "12").and_then(0, lambda s: Ok(int(s)))

        assert progress == Progress.success(4, 12)

    def test_and_then_failure_restores_cursor(self) -> None:
        """A failed refinement reports exactly restore_to."""
        progress = Progress.success(4, "xx").and_then(0, lambda s: Err(f"bad {s}"))

        assert progress == Progress.failure(0, "bad xx")

    def test_and_then_on_failure_passes_through(self) -> None:
        """The refinement never runs on a failure."""
        calls: list[str] = []
        progress = Progress.failure(2, "e").and_then(0, lambda v: calls.append(v) or Ok(v))

        assert progress == Progress.failure(2, "e")
        assert calls == []

    def test_and_then_utf8_example(self) -> None:
        """Bytes read but not valid text look like a failure at the start."""
        start = SliceCursor.new(b"\xff")

        def decode(raw: memoryview) -> Ok[str] | Err[str]:
            try:
                return Ok(bytes(raw).decode())
            except UnicodeDecodeError as e:
                return Err(e.reason)

        progress = start.take(1).and_then(start, decode)

        assert progress.is_err
        assert progress.cursor.offset == 0

    def test_and_then_with_cursor(self) -> None:
        """and_then_with_cursor() passes the advanced cursor along."""
        progress = Progress.success(5, 1).and_then_with_cursor(0, lambda v, c: Ok((v, c)))

        assert progress.value == (1, 5)


class TestProgressRewindAndOptional:
    """rewind_on_err, into_optional and to."""

    def test_rewind_on_err(self) -> None:
        """Only failures are rewound."""
        assert Progress.failure(9, "e").rewind_on_err(2) == Progress.failure(2, "e")
        assert Progress.success(9, "v").rewind_on_err(2) == Progress.success(9, "v")

    def test_into_optional(self) -> None:
        """Success gives (cursor, value); failure gives (reset_to, None)."""
        assert Progress.success(3, "v").into_optional(0) == (3, "v")
        assert Progress.failure(3, "e").into_optional(0) == (0, None)

    def test_to_converts_both_sides(self) -> None:
        """to() runs value and error through the given constructors."""
        assert Progress.success(1, "5").to(value_type=int) == Progress.success(1, 5)
        assert Progress.failure(1, 5).to(error_type=str) == Progress.failure(1, "5")

    def test_to_without_targets_is_identity(self) -> None:
        """A missing target leaves that side as it is."""
        progress = Progress.success(1, "5")

        assert progress.to(error_type=str) == progress
