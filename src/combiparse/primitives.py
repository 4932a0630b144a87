"""Primitive matchers.

Single-step parsers that consume a small, known-in-advance amount of input:
a literal prefix or exactly one element. They never look beyond what they
consume, and every one of them fails on empty input; recognising end of
input is the job of :data:`combiparse.combinators.eof`.

Each factory returns a fresh parser closure. The closures hold only the
immutable arguments they were built from, so they may be shared freely.
"""

from collections.abc import Callable, Container, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from combiparse.cursor import Cursor, Failure, ParseError, ParseResult, Parser, Success
from combiparse.diagnostics import FailureTemplate

__all__ = [
    "ClosedRange",
    "always",
    "match_element",
    "match_if",
    "match_one_of",
    "match_prefix",
    "match_range",
    "reject_any_of",
    "reject_element",
]


@dataclass(frozen=True, slots=True)
class ClosedRange[E]:
    """Inclusive range over an ordered element type.

    Example:
        >>> "c" in ClosedRange("a", "z")
        True
        >>> str(ClosedRange("0", "9"))
        "'0'...'9'"
    """

    low: E
    high: E

    def __post_init__(self) -> None:
        """Reject empty ranges.

        Raises:
            ValueError: If low > high
        """
        if self.high < self.low:  # type: ignore[operator]
            raise ValueError(FailureTemplate.empty_range(self.low, self.high))

    def __contains__(self, item: object) -> bool:
        try:
            return self.low <= item <= self.high  # type: ignore[operator]
        except TypeError:
            return False

    def __str__(self) -> str:
        return f"{self.low!r}...{self.high!r}"


def _fail[E](cursor: Cursor[E], reason: str | None = None) -> Failure[E]:
    return Failure(ParseError(cursor, reason))


def _match_one_if[E](
    cursor: Cursor[E], predicate: Callable[[E], bool]
) -> ParseResult[E, E]:
    """Consume one element if predicate holds.

    Building block for the single-element matchers. Fails without a reason;
    callers are expected to supply a meaningful one.
    """
    if cursor.is_eof:
        return _fail(cursor)
    element = cursor.current
    if predicate(element):
        return Success(element, cursor.advance())
    return _fail(cursor)


def _with_reason[E, V](result: ParseResult[E, V], reason: str) -> ParseResult[E, V]:
    """Fill in a failure reason when the failure does not carry one."""
    if isinstance(result, Failure) and result.error.reason is None:
        return _fail(result.error.at, reason)
    return result


def match_prefix[E](pattern: Sequence[E]) -> Parser[E, Sequence[E]]:
    """Match a literal prefix.

    Succeeds iff the input starts with pattern (elementwise equality) and
    consumes exactly len(pattern) elements. The value is the matched slice
    of the source, so matching "ab" against text yields a str and matching
    a token list yields a list.

    Args:
        pattern: Elements that must appear next, in order

    Returns:
        Parser yielding the matched prefix

    Example:
        >>> match_prefix("ab")(Cursor("abc")).value
        'ab'
    """
    size = len(pattern)

    def parse_prefix(cursor: Cursor[E]) -> ParseResult[E, Sequence[E]]:
        if cursor.starts_with(pattern):
            end = cursor.advance(size)
            return Success(cursor.slice_to(end.pos), end)
        return _fail(cursor, FailureTemplate.expected_pattern(pattern))

    return parse_prefix


def match_element[E](element: E) -> Parser[E, E]:
    """Match a single element by equality.

    Implemented with match_prefix over a one-element pattern; the value is
    the element itself rather than a one-element slice.

    Example:
        >>> result = match_element("x")(Cursor("xyz"))
        >>> result.value, result.remainder.remaining()
        ('x', 'yz')
    """
    prefix = match_prefix([element])

    def parse_element(cursor: Cursor[E]) -> ParseResult[E, E]:
        if cursor.is_eof:
            return _fail(cursor, FailureTemplate.expected_element_found_nothing(element))
        result = prefix(cursor)
        if isinstance(result, Success):
            return Success(result.value[0], result.remainder)
        return result

    return parse_element


def match_range[E](low: E | ClosedRange[E], high: E | None = None) -> Parser[E, E]:
    """Match one element within an inclusive range.

    Accepts either a ClosedRange or the two bounds:

        match_range(ClosedRange("a", "z"))
        match_range("a", "z")

    Raises:
        TypeError: If low is a bare bound and high is missing
        ValueError: If low > high
    """
    if isinstance(low, ClosedRange):
        bounds = low
    elif high is None:
        raise TypeError(FailureTemplate.missing_upper_bound(low))
    else:
        bounds = ClosedRange(low, high)

    def parse_range(cursor: Cursor[E]) -> ParseResult[E, E]:
        if cursor.is_eof:
            return _fail(cursor, FailureTemplate.expected_range_found_nothing(bounds))
        element = cursor.current
        if element in bounds:
            return Success(element, cursor.advance())
        return _fail(cursor, FailureTemplate.out_of_range(element, bounds))

    return parse_range


def match_one_of[E](members: Container[E]) -> Parser[E, E]:
    """Match one element that is a member of members.

    Any container works; a frozenset gives O(1) membership. A str container
    tests substring membership, which coincides with set membership for
    single-character elements. An element the container cannot test (a
    non-str token against a str, an unhashable token against a set) is not
    a member.
    """

    def parse_one_of(cursor: Cursor[E]) -> ParseResult[E, E]:
        if cursor.is_eof:
            return _fail(cursor, FailureTemplate.expected_member_found_nothing())
        element = cursor.current
        try:
            is_member = element in members
        except TypeError:
            is_member = False
        if is_member:
            return Success(element, cursor.advance())
        return _fail(cursor, FailureTemplate.expected_one_of(members))  # type: ignore[arg-type]

    return parse_one_of


def match_if[E](predicate: Callable[[E], bool]) -> Parser[E, E]:
    """Match one element satisfying predicate.

    The failure reason is generic: a predicate cannot in general be
    rendered into a message. Prefer match_range / match_one_of when a
    precise reason matters.

    Example:
        >>> match_if(str.isdigit)(Cursor("7a")).value
        '7'
    """

    def parse_if(cursor: Cursor[E]) -> ParseResult[E, E]:
        if cursor.is_eof:
            return _fail(cursor, FailureTemplate.expected_something())
        return _with_reason(
            _match_one_if(cursor, predicate), FailureTemplate.predicate_failed(predicate)
        )

    return parse_if


def reject_element[E](element: E) -> Parser[E, E]:
    """Match any one element that is not equal to element."""

    def parse_not_element(cursor: Cursor[E]) -> ParseResult[E, E]:
        return _with_reason(
            _match_one_if(cursor, lambda e: e != element),
            FailureTemplate.unexpected_element(element),
        )

    return parse_not_element


def reject_any_of[E](pattern: Iterable[E]) -> Parser[E, E]:
    """Match any one element equal to none of pattern's members.

    Fails without consuming if the next element equals any member, or if
    the input is empty.

    Example:
        >>> reject_any_of(",;")(Cursor("a")).value
        'a'
    """
    members: tuple[Any, ...] = tuple(pattern)

    def parse_none_of(cursor: Cursor[E]) -> ParseResult[E, E]:
        if cursor.is_eof:
            return _fail(cursor, FailureTemplate.unexpected_end_of_input())
        element = cursor.current
        for member in members:
            if element == member:
                return _fail(cursor, FailureTemplate.did_not_expect(member))
        return Success(element, cursor.advance())

    return parse_none_of


def always[E](cursor: Cursor[E]) -> ParseResult[E, E]:
    """Parser that consumes and yields any single element.

    Fails only at end of input.
    """
    if cursor.is_eof:
        return _fail(cursor, FailureTemplate.expected_something())
    return Success(cursor.current, cursor.advance())
