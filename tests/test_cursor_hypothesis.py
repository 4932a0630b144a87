"""Hypothesis property-based tests for Cursor.

Tests cursor immutability, EOF handling, and navigation properties over
both text and token sources. Complements test_cursor.py.
"""

from __future__ import annotations

import pytest
from hypothesis import assume, event, given, settings
from hypothesis import strategies as st

from combiparse.cursor import Cursor

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================

source_text = st.text(
    alphabet=st.characters(blacklist_categories=["Cs"], blacklist_characters=["\x00"]),
    min_size=0,
    max_size=200,
)

token_lists = st.lists(st.one_of(st.integers(), st.none(), st.text(max_size=3)), max_size=50)

positions = st.integers(min_value=0, max_value=500)


# ============================================================================
# PROPERTY TESTS - IMMUTABILITY
# ============================================================================


class TestCursorImmutability:
    """Test cursor immutability properties."""

    @given(source=source_text, pos=positions)
    @settings(max_examples=200)
    def test_advance_returns_new_cursor(self, source: str, pos: int) -> None:
        """INVARIANT: advance() returns NEW cursor, original unchanged."""
        assume(pos < len(source))

        cursor = Cursor(source, pos)
        new_cursor = cursor.advance()

        assert cursor.pos == pos
        assert new_cursor.pos == pos + 1
        assert new_cursor.source is source

    @given(source=token_lists, count=st.integers(min_value=0, max_value=100))
    def test_advance_clamps_and_is_suffix(self, source: list[object], count: int) -> None:
        """PROPERTY: advance(count) yields a suffix of the original input."""
        cursor = Cursor(source, 0)
        new_cursor = cursor.advance(count)

        event(f"clamped={count > len(source)}")
        assert new_cursor.pos == min(count, len(source))
        assert new_cursor.remaining() == source[new_cursor.pos :]


# ============================================================================
# PROPERTY TESTS - EOF HANDLING
# ============================================================================


class TestCursorEOF:
    """Test EOF detection properties."""

    @given(source=source_text, pos=positions)
    def test_is_eof_iff_nothing_remains(self, source: str, pos: int) -> None:
        """PROPERTY: is_eof <=> len(cursor) == 0."""
        cursor = Cursor(source, pos)

        assert cursor.is_eof == (len(cursor) == 0)

    @given(source=source_text)
    @settings(max_examples=100)
    def test_current_raises_eoferror_at_eof(self, source: str) -> None:
        """PROPERTY: current raises EOFError when is_eof is True."""
        cursor = Cursor(source, len(source))

        with pytest.raises(EOFError):
            _ = cursor.current

    @given(source=token_lists.filter(lambda s: len(s) > 0))
    @settings(max_examples=100)
    def test_advance_until_eof_reaches_end(self, source: list[object]) -> None:
        """PROPERTY: Advancing one element at a time reaches EOF in len(source) steps."""
        cursor = Cursor(source, 0)

        steps = 0
        while not cursor.is_eof:
            assert cursor.current == source[steps]
            cursor = cursor.advance()
            steps += 1

        assert steps == len(source)


# ============================================================================
# PROPERTY TESTS - STARTS_WITH
# ============================================================================


class TestCursorStartsWith:
    """Test starts_with against slicing."""

    @given(source=source_text, pos=positions, size=st.integers(min_value=0, max_value=10))
    def test_starts_with_own_prefix(self, source: str, pos: int, size: int) -> None:
        """PROPERTY: The cursor always starts with its own next elements."""
        cursor = Cursor(source, pos)
        prefix = cursor.remaining()[:size]

        assert cursor.starts_with(prefix)
        assert cursor.starts_with(list(prefix))

    @given(source=st.text(alphabet="ab", max_size=20), pattern=st.text(alphabet="ab", max_size=4))
    def test_starts_with_agrees_with_str(self, source: str, pattern: str) -> None:
        """PROPERTY: Elementwise and str fast paths agree with str.startswith."""
        cursor = Cursor(source, 0)
        expected = source.startswith(pattern)

        event(f"match={expected}")
        assert cursor.starts_with(pattern) == expected
        assert cursor.starts_with(tuple(pattern)) == expected
        assert Cursor(list(source), 0).starts_with(pattern) == expected


# ============================================================================
# PROPERTY TESTS - LINE/COLUMN TRACKING
# ============================================================================


class TestCursorLineColumn:
    """Test line and column tracking properties."""

    @given(lines=st.lists(st.text(alphabet="ab "), min_size=1, max_size=10))
    @settings(max_examples=50)
    def test_newline_increments_line_number(self, lines: list[str]) -> None:
        """PROPERTY: Line at end of input is newline count + 1."""
        source = "\n".join(lines)
        line_end, _ = Cursor(source, len(source)).compute_line_col()

        assert line_end == source.count("\n") + 1

    @given(source=source_text, pos=st.integers(min_value=0, max_value=200))
    def test_column_counts_from_last_newline(self, source: str, pos: int) -> None:
        """PROPERTY: Column is the distance from the last newline before pos."""
        pos = min(pos, len(source))
        _, col = Cursor(source, pos).compute_line_col()
        last_newline = source.rfind("\n", 0, pos)
        event(f"first_line={last_newline < 0}")

        assert col == pos - last_newline
