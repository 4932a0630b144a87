"""Tests for combiparse.depth_guard.

Tests DepthGuard, depth_failure(), and depth_clamp() directly, and the
nesting limit as Rule and lazy() apply it.

Python 3.13+.
"""

from __future__ import annotations

import logging
import sys

import pytest

from combiparse import Rule, compose, lazy, opt
from combiparse.constants import FRAMES_PER_LEVEL, MAX_DEPTH, RESERVED_FRAMES
from combiparse.cursor import Cursor, ParseResult, Success
from combiparse.depth_guard import DepthGuard, current_depth, depth_clamp, depth_failure
from tests.helpers.parser_assertions import assert_not_parsed

# ============================================================================
# DepthGuard
# ============================================================================


class TestDepthGuard:
    """Test DepthGuard as context manager."""

    def test_context_manager_increments_depth(self) -> None:
        """Entering increments the depth; exiting restores it."""
        assert current_depth() == 0

        with DepthGuard(5) as guard:
            assert not guard.exceeded
            assert current_depth() == 1
            with DepthGuard(5):
                assert current_depth() == 2

        assert current_depth() == 0

    def test_exceeded_leaves_depth_unchanged(self) -> None:
        """At the limit the guard reports exceeded and does not increment."""
        with DepthGuard(1):
            with DepthGuard(1) as inner:
                assert inner.exceeded
                assert current_depth() == 1
            assert current_depth() == 1

        assert current_depth() == 0

    def test_depth_restored_on_exception(self) -> None:
        """An exception inside the block still restores the depth."""
        with pytest.raises(RuntimeError), DepthGuard(5):
            raise RuntimeError

        assert current_depth() == 0

    def test_depth_failure(self, caplog: pytest.LogCaptureFixture) -> None:
        """depth_failure() names the rule and the limit, and logs at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="combiparse.depth_guard"):
            failure = depth_failure(Cursor("(((", 2), "rule 'expr'", 7)

        assert failure.at.pos == 2
        assert failure.reason == "maximum nesting depth (7) exceeded in rule 'expr'"
        assert "Nesting depth 7 reached in rule 'expr' at position 2" in caplog.text


# ============================================================================
# depth_clamp
# ============================================================================


class TestDepthClamp:
    """Test depth_clamp() utility function."""

    def test_default_within_limit(self) -> None:
        """MAX_DEPTH is not clamped under the default recursion limit."""
        if sys.getrecursionlimit() < 1000:
            pytest.skip("recursion limit lowered by the environment")

        assert depth_clamp(MAX_DEPTH) == MAX_DEPTH

    def test_clamps_excessive_depth(self, caplog: pytest.LogCaptureFixture) -> None:
        """A depth the stack cannot hold is clamped, with a warning."""
        limit = sys.getrecursionlimit()
        with caplog.at_level(logging.WARNING, logger="combiparse.depth_guard"):
            result = depth_clamp(limit)

        assert result == (limit - RESERVED_FRAMES) // FRAMES_PER_LEVEL
        assert "Clamping to" in caplog.text

    def test_custom_frame_costs(self) -> None:
        """reserve_frames and frames_per_level shape the safe depth."""
        limit = sys.getrecursionlimit()

        assert depth_clamp(limit, reserve_frames=100, frames_per_level=1) == limit - 100

    def test_never_below_one(self) -> None:
        """Even an absurd frame cost leaves one level."""
        assert depth_clamp(10, frames_per_level=10**9) == 1


# ============================================================================
# Rule and lazy() nesting limits
# ============================================================================


def _parens(max_depth: int = MAX_DEPTH) -> Rule:
    """parens := ('(' parens ')')?"""
    parens = Rule("parens", max_depth=max_depth)
    parens.define(opt(compose("(", compose(parens, ")"))))
    return parens


class TestRuleNestingLimit:
    """Rule fails with a depth reason instead of overflowing the stack."""

    def test_max_depth_defaults_to_constant(self) -> None:
        """Rule uses MAX_DEPTH by default."""
        if sys.getrecursionlimit() < 1000:
            pytest.skip("recursion limit lowered by the environment")

        assert Rule("r").max_depth == MAX_DEPTH

    def test_within_limit_parses(self) -> None:
        """Nesting below the limit parses completely."""
        result = _parens(max_depth=10)(Cursor("(" * 5 + ")" * 5))

        assert result.is_success
        assert result.remainder.is_eof  # type: ignore[union-attr]

    def test_limit_stops_recursion(self) -> None:
        """At the limit the innermost invocation fails; opt() absorbs it."""
        parens = _parens(max_depth=3)

        # Fourth nested call fails; each opt() above it then matches nothing
        result = parens(Cursor("(((())))"))

        assert result.is_success
        assert result.remainder.pos == 0  # type: ignore[union-attr]

    def test_depth_reason_reported(self) -> None:
        """A rule at its limit reports the depth reason at its input."""
        rule = Rule("deep", max_depth=2)
        rule.define(compose("(", rule))

        failure = assert_not_parsed(rule, "((((")

        assert "maximum nesting depth (2) exceeded in rule 'deep'" in (failure.reason or "")

    def test_depth_reset_after_parse(self) -> None:
        """Depth is back to zero after every parse, successful or not."""
        parens = _parens(max_depth=3)
        parens(Cursor("((((((("))
        parens(Cursor("()"))

        assert current_depth() == 0


class TestLazyNestingLimit:
    """lazy() shares the nesting count with Rule."""

    def test_lazy_reports_depth(self) -> None:
        """A self-referencing thunk fails once the limit is reached."""

        def nested() -> object:
            return compose("[", parser)

        parser = lazy(nested, max_depth=4)
        failure = assert_not_parsed(parser, "[" * 10)

        assert "maximum nesting depth (4) exceeded in lazy(nested)" in (failure.reason or "")

    def test_rule_and_lazy_share_depth(self) -> None:
        """A lazy inside a Rule starts one level deep."""
        seen: list[int] = []

        def record_depth(cursor: Cursor[str]) -> ParseResult[str, None]:
            seen.append(current_depth())
            return Success(None, cursor)

        rule = Rule("outer")
        rule.define(lazy(lambda: record_depth))
        rule(Cursor(""))

        assert seen == [2]
