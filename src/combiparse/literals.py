"""Literal-to-parser coercion.

Lets literal values stand wherever a parser is expected:

    compose("(", compose(expr, ")"))

is shorthand for

    compose(match_prefix("("), compose(expr, match_prefix(")")))

Built purely on match_prefix; adds no parsing behavior of its own.
"""

from collections.abc import Callable, Sequence
from typing import Any

from combiparse.cursor import Parser
from combiparse.diagnostics import FailureTemplate
from combiparse.primitives import match_prefix

__all__ = ["LITERAL_TYPES", "ParserLike", "as_parser"]

# Sequence types that match themselves when used as a parser.
LITERAL_TYPES: tuple[type, ...] = (str, bytes, list, tuple)

type ParserLike = Parser[Any, Any] | Sequence[Any]


def as_parser(obj: ParserLike) -> Callable[..., Any]:
    """Produce a parser from a parser or a literal.

    Args:
        obj: A parser (any callable taking a Cursor) or a literal str,
             bytes, list, or tuple

    Returns:
        obj itself if callable, otherwise match_prefix(obj)

    Raises:
        TypeError: If obj is neither callable nor a supported literal

    Example:
        >>> from combiparse.cursor import Cursor
        >>> as_parser("let")(Cursor("let x")).value
        'let'
    """
    if callable(obj):
        return obj
    if isinstance(obj, LITERAL_TYPES):
        return match_prefix(obj)
    raise TypeError(FailureTemplate.not_coercible(obj))
