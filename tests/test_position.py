"""Tests for syntax.position helpers."""

from __future__ import annotations

import pytest
from hypothesis import given

from handparse.syntax.position import (
    column_offset,
    format_position,
    get_error_context,
    get_line_content,
    line_offset,
)
from tests.strategies import sources_with_positions


class TestOffsets:
    """0-based line and column offsets."""

    @pytest.mark.parametrize(
        ("pos", "line", "column"),
        [(0, 0, 0), (5, 0, 5), (6, 1, 0), (10, 1, 4), (11, 1, 5), (12, 2, 0)],
    )
    def test_offsets(self, pos: int, line: int, column: int) -> None:
        """Offsets count '\\n' before pos."""
        source = "hello\nworld\n"

        assert line_offset(source, pos) == line
        assert column_offset(source, pos) == column

    def test_positions_past_end_are_clamped(self) -> None:
        """Positions beyond the source clamp to its length."""
        assert line_offset("a\nb", 99) == 1
        assert column_offset("a\nb", 99) == 1

    @pytest.mark.parametrize("func", [line_offset, column_offset])
    def test_negative_position_rejected(self, func: object) -> None:
        """Negative positions are a caller error."""
        with pytest.raises(ValueError, match=">= 0"):
            func("abc", -1)  # type: ignore[operator]

    def test_format_position(self) -> None:
        """line:col, 1-based unless asked otherwise."""
        assert format_position("hello\nworld", 6) == "2:1"
        assert format_position("hello\nworld", 6, zero_based=True) == "1:0"

    @given(data=sources_with_positions())
    def test_format_position_matches_offsets(self, data: tuple[str, int]) -> None:
        """PROPERTY: format_position is built from the offset helpers."""
        source, pos = data

        assert format_position(source, pos) == (
            f"{line_offset(source, pos) + 1}:{column_offset(source, pos) + 1}"
        )


class TestGetLineContent:
    """Single-line extraction."""

    def test_lines(self) -> None:
        """Zero-based by default, CR stripped."""
        source = "first\r\nsecond\nthird"

        assert get_line_content(source, 0) == "first"
        assert get_line_content(source, 2, zero_based=False) == "second"
        assert get_line_content(source, 2) == "third"

    def test_trailing_newline_has_empty_last_line(self) -> None:
        """End of input after a final newline still has a line."""
        assert get_line_content("a\n", 1) == ""

    @pytest.mark.parametrize(("line", "match"), [(-1, ">= 0"), (3, "out of range")])
    def test_out_of_range(self, line: int, match: str) -> None:
        """Lines outside the source are rejected."""
        with pytest.raises(ValueError, match=match):
            get_line_content("a\nb", line)


class TestGetErrorContext:
    """Snippet with caret marker."""

    def test_plain(self) -> None:
        """The failing line and a caret."""
        assert get_error_context("abc def", 4) == "abc def\n    ^"

    def test_context_window_at_start(self) -> None:
        """Context lines are clipped at the start of the source."""
        assert get_error_context("ab\ncd\nef", 0, context_lines=1) == "ab\n^\ncd"

    def test_gutter_width_follows_last_line_number(self) -> None:
        """Line numbers are right-aligned to the widest one shown."""
        source = "\n".join(f"line{i}" for i in range(1, 12))
        pos = source.index("line10")

        context = get_error_context(source, pos, context_lines=1, gutter=True)

        assert context.splitlines() == [
            "  9 | line9",
            " 10 | line10",
            "    | ^",
            " 11 | line11",
        ]

    def test_custom_marker(self) -> None:
        """Any marker text may be used."""
        assert get_error_context("xy", 1, marker="^^^").endswith(" ^^^")
