"""Failure reason and error message templates.

Centralized message templates for testable, consistent failure reasons.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Callable, Iterable
from typing import Any

from combiparse.constants import ELLIPSIS, MAX_PREVIEW_LENGTH

__all__ = ["FailureTemplate", "describe"]


def describe(value: object, limit: int = MAX_PREVIEW_LENGTH) -> str:
    """Render a pattern, element, or container for use in a message.

    Strings and bytes are shown with their repr. Sequences longer than
    ``limit`` elements are truncated. Unordered containers are rendered in
    sorted order when their members are comparable, so messages stay stable
    across runs.

    Args:
        value: Value to render
        limit: Maximum number of elements shown before truncating

    Returns:
        Human-readable rendering of value

    Example:
        >>> describe("ab")
        "'ab'"
        >>> describe(frozenset("ba"))
        "{'a', 'b'}"
    """
    if isinstance(value, (str, bytes)):
        if len(value) > limit:
            return repr(value[:limit]) + ELLIPSIS
        return repr(value)
    if isinstance(value, (set, frozenset)):
        try:
            members = sorted(value)
        except TypeError:
            members = list(value)
        shown = ", ".join(repr(m) for m in members[:limit])
        suffix = ", " + ELLIPSIS if len(members) > limit else ""
        return "{" + shown + suffix + "}"
    if isinstance(value, (list, tuple)) and len(value) > limit:
        shown = ", ".join(repr(m) for m in value[:limit])
        return f"[{shown}, {ELLIPSIS}]"
    return repr(value)


class FailureTemplate:
    """Centralized failure reasons and error messages.

    All failure reasons are created here. NO f-strings at the return site
    of a parser or in exception constructors! This provides:
        - Testable failure reasons
        - Consistent formatting
        - Documentation of all failure cases
    """

    # ------------------------------------------------------------------
    # Primitive matchers
    # ------------------------------------------------------------------

    @staticmethod
    def expected_pattern(pattern: object) -> str:
        """Input does not start with the expected prefix.

        Args:
            pattern: The prefix that was expected

        Returns:
            Failure reason for match_prefix
        """
        return f"expected {describe(pattern)}"

    @staticmethod
    def expected_element_found_nothing(element: object) -> str:
        """Expected a specific element but the input was empty."""
        return f"expected {describe(element)} but found nothing"

    @staticmethod
    def expected_range_found_nothing(bounds: object) -> str:
        """Expected an element within a range but the input was empty."""
        return f"expected range {bounds} but found nothing"

    @staticmethod
    def out_of_range(found: object, bounds: object) -> str:
        """Next element lies outside the closed range.

        Args:
            found: The element that was found
            bounds: The range that was expected (rendered with str())

        Returns:
            Failure reason for match_range
        """
        return f"expected {describe(found)} to be in range {bounds}"

    @staticmethod
    def expected_one_of(members: Iterable[Any]) -> str:
        """Next element is not a member of the expected set."""
        return f"expected one of {describe(members)}"

    @staticmethod
    def expected_member_found_nothing() -> str:
        """Expected a set member but the input was empty."""
        return "expected a set member but found nothing"

    @staticmethod
    def expected_something() -> str:
        """Expected any element but the input was empty."""
        return "expected something but found nothing"

    @staticmethod
    def predicate_failed(predicate: Callable[..., bool]) -> str:
        """Predicate returned false for the next element.

        The predicate is identified by its qualified name when it has one.
        Lambdas render as ``<lambda>``; callers that need a precise message
        should prefer a named matcher.

        Args:
            predicate: The predicate that rejected the element

        Returns:
            Failure reason for match_if
        """
        name = getattr(predicate, "__qualname__", None) or type(predicate).__name__
        return f"match failed because {name} returned false"

    @staticmethod
    def unexpected_element(element: object) -> str:
        """Next element is equal to an element that was rejected."""
        return f"expected next element to not equal {describe(element)}"

    @staticmethod
    def did_not_expect(element: object) -> str:
        """Next element is a member of a rejected set."""
        return f"did not expect {describe(element)}"

    @staticmethod
    def unexpected_end_of_input() -> str:
        """Input ended where an element was required."""
        return "unexpectedly at end of input"

    # ------------------------------------------------------------------
    # Structural combinators
    # ------------------------------------------------------------------

    @staticmethod
    def expected_failure(value: object) -> str:
        """Negative lookahead matched when it should not have.

        Args:
            value: The value the negated parser produced

        Returns:
            Failure reason for not_
        """
        return f"expected failure but found {describe(value)}"

    @staticmethod
    def expected_end_of_input() -> str:
        """Input remains where end of input was required."""
        return "expected end of input but found something"

    @staticmethod
    def not_yet_implemented() -> str:
        """Placeholder parser or undefined grammar rule was invoked."""
        return "not yet implemented"

    @staticmethod
    def depth_exceeded(name: str, max_depth: int) -> str:
        """Input nests deeper than a Rule or lazy() allows.

        Args:
            name: Name of the rule that hit the limit
            max_depth: The nesting limit in force

        Returns:
            Failure reason for Rule and lazy
        """
        return f"maximum nesting depth ({max_depth}) exceeded in {name}"

    # ------------------------------------------------------------------
    # Programmer errors (exception messages)
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof(pos: int) -> str:
        """Cursor.current read at end of input."""
        return f"Unexpected EOF at position {pos}"

    @staticmethod
    def negative_position(pos: int) -> str:
        """Cursor constructed with a negative offset."""
        return f"Cursor.pos must be >= 0, got {pos}"

    @staticmethod
    def empty_range(low: object, high: object) -> str:
        """Closed range constructed with low > high."""
        return f"ClosedRange.low ({low!r}) must be <= high ({high!r})"

    @staticmethod
    def missing_upper_bound(low: object) -> str:
        """match_range called with a bare low bound and no high bound."""
        return f"match_range({low!r}) requires a high bound or a ClosedRange"

    @staticmethod
    def not_coercible(obj: object) -> str:
        """Object cannot be used where a parser is expected.

        Args:
            obj: The offending object

        Returns:
            Exception message for as_parser
        """
        return (
            f"Cannot use {type(obj).__name__} as a parser; "
            "expected a callable, str, bytes, list, or tuple"
        )

    @staticmethod
    def rule_already_defined(name: str) -> str:
        """Grammar rule bound twice."""
        return f"Rule '{name}' is already defined"

    @staticmethod
    def parse_failed(formatted: str) -> str:
        """Top-level parse did not consume the whole input."""
        return f"Parse failed: {formatted}"
