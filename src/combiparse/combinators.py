"""Structural combinators.

Functions that build new parsers out of existing ones: sequencing,
repetition, optionality, alternation, conjunction, zero-width assertions,
and the two sentinel parsers eof and placeholder.

Every combinator accepts literals wherever a parser is expected (see
:func:`combiparse.literals.as_parser`) and returns a pure parser: invoking
it never mutates shared state, so one parser value can be reused across
inputs and threads.

Failure Positions:
    - compose() reports failures at its own entry cursor, keeping the
      inner reason.
    - or_() reports at the shared input with the branch reasons joined.
    - either() reports at the shared input with no reason.
    - and_() and look_ahead() echo the inner error unchanged.
    - not_() reports at its input.

Recursive Grammars:
    A rule cannot refer to a parser that does not exist yet. Declare the
    rule as a Rule cell first, use it freely, and define() it once all the
    parsers it depends on exist:

        expr = Rule("expr")
        group = compose("(", compose(expr, ")"))
        expr.define(or_(group, match_if(str.isdigit)))

    Rule and lazy() invocations count towards one nesting depth per call
    path. Input nested deeper than MAX_DEPTH levels fails with a depth
    reason rather than exhausting the Python stack.
"""

import logging
from collections.abc import Callable
from typing import Any

from combiparse.constants import MAX_DEPTH, OR_SEPARATOR
from combiparse.cursor import Cursor, Failure, ParseError, ParseResult, Parser, Success
from combiparse.depth_guard import DepthGuard, depth_clamp, depth_failure
from combiparse.diagnostics import FailureTemplate, GrammarDefinitionError
from combiparse.either import Either, Left, Right
from combiparse.literals import ParserLike, as_parser

__all__ = [
    "Rule",
    "and_",
    "compose",
    "either",
    "eof",
    "lazy",
    "look_ahead",
    "map_value",
    "not_",
    "opt",
    "or_",
    "placeholder",
    "rep",
    "rep1",
]

logger = logging.getLogger(__name__)


def _relocate[E](failure: Failure[E], cursor: Cursor[E]) -> Failure[E]:
    """Move a failure to cursor, keeping its reason."""
    if failure.error.at == cursor:
        return failure
    return Failure(ParseError(cursor, failure.error.reason))


# ============================================================================
# SENTINELS
# ============================================================================


def eof[E](cursor: Cursor[E]) -> ParseResult[E, None]:
    """Parser that succeeds with None iff no input remains. Never consumes."""
    if cursor.is_eof:
        return Success(None, cursor)
    return Failure(ParseError(cursor, FailureTemplate.expected_end_of_input()))


def placeholder[E](cursor: Cursor[E]) -> ParseResult[E, Any]:
    """Parser that fails for all input.

    Stand-in for a rule that has been declared but not yet defined.
    """
    return Failure(ParseError(cursor, FailureTemplate.not_yet_implemented()))


# ============================================================================
# SEQUENCING AND TRANSFORMATION
# ============================================================================


def compose(left: ParserLike, right: ParserLike) -> Parser[Any, tuple[Any, Any]]:
    """Run left, then right on left's remainder.

    Succeeds with the pair (left_value, right_value) and right's remainder.
    If either side fails the whole composition fails, reported at the
    cursor compose() was invoked with.

    Example:
        >>> result = compose("a", "b")(Cursor("abc"))
        >>> result.value, result.remainder.remaining()
        (('a', 'b'), 'c')
    """
    left_parser = as_parser(left)
    right_parser = as_parser(right)

    def parse_compose(cursor: Cursor[Any]) -> ParseResult[Any, tuple[Any, Any]]:
        left_result = left_parser(cursor)
        if isinstance(left_result, Failure):
            return _relocate(left_result, cursor)
        right_result = right_parser(left_result.remainder)
        if isinstance(right_result, Failure):
            return _relocate(right_result, cursor)
        return Success((left_result.value, right_result.value), right_result.remainder)

    return parse_compose


def map_value[V, W](parser: ParserLike, fn: Callable[[V], W]) -> Parser[Any, W]:
    """Transform the value of a successful parse. Failures pass through.

    Example:
        >>> digit = match_if(str.isdigit)
        >>> map_value(digit, int)(Cursor("7")).value
        7
    """
    inner = as_parser(parser)

    def parse_map(cursor: Cursor[Any]) -> ParseResult[Any, W]:
        result = inner(cursor)
        if isinstance(result, Success):
            return Success(fn(result.value), result.remainder)
        return result

    return parse_map


# ============================================================================
# REPETITION AND OPTIONALITY
# ============================================================================


def rep(parser: ParserLike) -> Parser[Any, list[Any]]:
    """Apply parser zero or more times. Never fails.

    Collects values until the first failure, which is discarded. The loop is
    iterative, so stack usage does not grow with input length.

    A success that consumes nothing is recorded once and ends the
    repetition; repeating it could never make progress.

    Example:
        >>> result = rep("a")(Cursor("aaab"))
        >>> result.value, result.remainder.remaining()
        (['a', 'a', 'a'], 'b')
    """
    inner = as_parser(parser)

    def parse_rep(cursor: Cursor[Any]) -> ParseResult[Any, list[Any]]:
        values: list[Any] = []
        current = cursor
        while True:
            result = inner(current)
            if isinstance(result, Failure):
                break
            values.append(result.value)
            if result.remainder.pos == current.pos:
                logger.debug("rep() stopped on a zero-width match at position %d", current.pos)
                break
            current = result.remainder
        return Success(values, current)

    return parse_rep


def rep1(parser: ParserLike) -> Parser[Any, list[Any]]:
    """Apply parser one or more times.

    Equivalent to one mandatory application followed by rep() of the same
    parser, with the first value prepended. Fails iff the first application
    fails.
    """
    inner = as_parser(parser)
    return map_value(compose(inner, rep(inner)), lambda pair: [pair[0], *pair[1]])


def opt(parser: ParserLike) -> Parser[Any, Any]:
    """Apply parser if possible. Never fails.

    On failure succeeds with None and the original, unconsumed input.
    """
    inner = as_parser(parser)

    def parse_opt(cursor: Cursor[Any]) -> ParseResult[Any, Any]:
        result = inner(cursor)
        if isinstance(result, Success):
            return result
        return Success(None, cursor)

    return parse_opt


# ============================================================================
# ALTERNATION
# ============================================================================


def either(left: ParserLike, right: ParserLike) -> Parser[Any, Either[Any, Any]]:
    """Heterogeneous alternation.

    Tries left; on success wraps its value in Left. Otherwise tries right on
    the same input and wraps its value in Right. When both fail the failure
    is reported at the input with no reason.

    Example:
        >>> number = map_value(match_if(str.isdigit), int)
        >>> either(number, "x")(Cursor("x")).value
        Right(value='x')
    """
    left_parser = as_parser(left)
    right_parser = as_parser(right)

    def parse_either(cursor: Cursor[Any]) -> ParseResult[Any, Either[Any, Any]]:
        left_result = left_parser(cursor)
        if isinstance(left_result, Success):
            return Success(Left(left_result.value), left_result.remainder)
        right_result = right_parser(cursor)
        if isinstance(right_result, Success):
            return Success(Right(right_result.value), right_result.remainder)
        return Failure(ParseError(cursor))

    return parse_either


def or_(left: ParserLike, right: ParserLike, *more: ParserLike) -> Parser[Any, Any]:
    """Homogeneous, left-biased alternation.

    Tries each parser against the same input and returns the first success.
    When all fail, the failure is reported at the input with the non-empty
    branch reasons joined by " or ".

    or_(a, b, c) behaves exactly like or_(or_(a, b), c).

    Example:
        >>> or_("a", "b")(Cursor("b")).value
        'b'
        >>> or_("a", "b")(Cursor("c")).reason
        "expected 'a' or expected 'b'"
    """
    parsers = tuple(as_parser(p) for p in (left, right, *more))

    def parse_or(cursor: Cursor[Any]) -> ParseResult[Any, Any]:
        reasons: list[str] = []
        for parser in parsers:
            result = parser(cursor)
            if isinstance(result, Success):
                return result
            if result.error.reason:
                reasons.append(result.error.reason)
        return Failure(ParseError(cursor, OR_SEPARATOR.join(reasons)))

    return parse_or


# ============================================================================
# CONJUNCTION AND ZERO-WIDTH ASSERTIONS
# ============================================================================


def and_(left: ParserLike, right: ParserLike) -> Parser[Any, Any]:
    """Succeed with left's result only if right also succeeds on the same input.

    This is intersection, not sequencing: right starts where left starts and
    its value and remainder are discarded. Both sides always run. Useful to
    carve exclusions out of a broader matcher:

        >>> letter_but_not_a = and_(match_if(str.isalnum), not_("a"))
        >>> letter_but_not_a(Cursor("b")).value
        'b'
        >>> letter_but_not_a(Cursor("a")).is_success
        False

    When both fail, left's failure is reported.
    """
    left_parser = as_parser(left)
    right_parser = as_parser(right)

    def parse_and(cursor: Cursor[Any]) -> ParseResult[Any, Any]:
        left_result = left_parser(cursor)
        right_result = right_parser(cursor)
        if isinstance(left_result, Failure):
            return left_result
        if isinstance(right_result, Failure):
            return right_result
        return left_result

    return parse_and


def look_ahead(parser: ParserLike) -> Parser[Any, Any]:
    """Run parser without consuming input.

    On success yields parser's value with the original input as remainder.
    Failures pass through unchanged.
    """
    inner = as_parser(parser)

    def parse_look_ahead(cursor: Cursor[Any]) -> ParseResult[Any, Any]:
        result = inner(cursor)
        if isinstance(result, Success):
            return Success(result.value, cursor)
        return result

    return parse_look_ahead


def not_(parser: ParserLike) -> Parser[Any, None]:
    """Negative lookahead: succeed with None iff parser fails. Never consumes."""
    inner = as_parser(parser)

    def parse_not(cursor: Cursor[Any]) -> ParseResult[Any, None]:
        result = inner(cursor)
        if isinstance(result, Success):
            return Failure(ParseError(cursor, FailureTemplate.expected_failure(result.value)))
        return Success(None, cursor)

    return parse_not


# ============================================================================
# RECURSION SUPPORT
# ============================================================================


class Rule:
    """Named indirection cell for self- and mutually-recursive grammars.

    A Rule is itself a parser. Until define() is called it behaves like
    placeholder; afterwards it delegates to the bound parser. The binding is
    the only mutable state in a grammar and is written exactly once, while
    the grammar is being assembled.

    Nesting is limited: when max_depth Rule or lazy() invocations are
    already active on the call path, the rule fails with a depth reason
    instead of recursing further. max_depth is clamped against
    sys.getrecursionlimit() when the rule is created.

    Example:
        >>> parens = Rule("parens")
        >>> parens.define(opt(compose("(", compose(parens, ")"))))
        >>> parens(Cursor("(())")).remainder.is_eof
        True
    """

    __slots__ = ("_max_depth", "_name", "_parser")

    def __init__(self, name: str = "rule", max_depth: int = MAX_DEPTH) -> None:
        self._name = name
        self._max_depth = depth_clamp(max_depth)
        self._parser: Callable[..., Any] | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def is_defined(self) -> bool:
        return self._parser is not None

    def define(self, parser: ParserLike) -> None:
        """Bind the rule to its definition.

        Raises:
            GrammarDefinitionError: If the rule is already defined
        """
        if self._parser is not None:
            raise GrammarDefinitionError(FailureTemplate.rule_already_defined(self._name))
        self._parser = as_parser(parser)
        logger.debug("Defined grammar rule: %s", self._name)

    def __call__(self, cursor: Cursor[Any]) -> ParseResult[Any, Any]:
        parser = self._parser
        if parser is None:
            return placeholder(cursor)
        with DepthGuard(self._max_depth) as guard:
            if guard.exceeded:
                return depth_failure(cursor, f"rule '{self._name}'", self._max_depth)
            return parser(cursor)

    def __repr__(self) -> str:
        state = "defined" if self._parser is not None else "undefined"
        return f"Rule({self._name!r}, {state})"


def lazy(factory: Callable[[], ParserLike], max_depth: int = MAX_DEPTH) -> Parser[Any, Any]:
    """Defer building a parser until it is first invoked.

    The alternative to Rule for recursion: refer to a parser by a thunk
    that is only evaluated once every name it mentions is bound.

        def value() -> Parser: ...
        array = compose("[", compose(rep(lazy(value)), "]"))

    The factory runs once; later invocations reuse its result. Nesting is
    limited exactly as for Rule, and both count towards the same depth.
    """
    resolved: list[Callable[..., Any]] = []
    limit = depth_clamp(max_depth)
    name = f"lazy({getattr(factory, '__name__', type(factory).__name__)})"

    def parse_lazy(cursor: Cursor[Any]) -> ParseResult[Any, Any]:
        if not resolved:
            resolved.append(as_parser(factory()))
        with DepthGuard(limit) as guard:
            if guard.exceeded:
                return depth_failure(cursor, name, limit)
            return resolved[0](cursor)

    return parse_lazy
