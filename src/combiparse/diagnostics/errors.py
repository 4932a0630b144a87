"""combiparse exception hierarchy.

Parsers never raise: failure inside the combinator algebra is a value.
These exceptions are raised only at the edges, where a caller asks for a
value outright (parse_all) or misuses the grammar-building API.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .templates import FailureTemplate

if TYPE_CHECKING:
    from combiparse.cursor import ParseError

__all__ = ["CombiparseError", "GrammarDefinitionError", "ParseFailedError"]


class CombiparseError(Exception):
    """Base exception for all combiparse errors."""


class ParseFailedError(CombiparseError):
    """Input was rejected by a top-level parse.

    Raised by parse_all() when the parser fails or leaves input unconsumed.

    Attributes:
        error: The ParseError value the parser returned
    """

    def __init__(self, error: ParseError) -> None:
        """Initialize ParseFailedError.

        Args:
            error: The failure returned by the parser
        """
        super().__init__(FailureTemplate.parse_failed(error.format_error()))
        self.error = error


class GrammarDefinitionError(CombiparseError):
    """A grammar was assembled incorrectly.

    Example:
        expr = Rule("expr")
        expr.define(term)
        expr.define(other)  # <- Raises: a rule is bound exactly once
    """
