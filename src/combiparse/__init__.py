"""combiparse - composable parser combinators over any sequence.

A parser is a plain function from a Cursor to a ParseResult: either
Success(value, remainder) or Failure(ParseError). Primitive matchers consume
a prefix or a single element; combinators build larger parsers out of
smaller ones without shared mutable state. Works over text, bytes, and
token lists alike.

Public API:
    Cursor, ParseError, Success, Failure - data model
    match_prefix, match_element, match_range, match_one_of, match_if,
    reject_element, reject_any_of, always - primitive matchers
    compose, rep, rep1, opt, either, or_, and_, look_ahead, not_,
    map_value, eof, placeholder - combinators
    Rule, lazy - recursive grammar support
    parse, parse_all - entry points

Exceptions:
    CombiparseError - Base exception class
    ParseFailedError - Raised by parse_all()
    GrammarDefinitionError - Grammar assembly misuse

Example:
    >>> digits = map_value(rep1(match_range("0", "9")), "".join)
    >>> parse_all(digits, "2024")
    '2024'
"""

from .combinators import (
    Rule,
    and_,
    compose,
    either,
    eof,
    lazy,
    look_ahead,
    map_value,
    not_,
    opt,
    or_,
    placeholder,
    rep,
    rep1,
)
from .cursor import Cursor, Failure, ParseError, ParseResult, Parser, Success
from .diagnostics import CombiparseError, GrammarDefinitionError, ParseFailedError
from .either import Either, Left, Right
from .literals import ParserLike, as_parser
from .primitives import (
    ClosedRange,
    always,
    match_element,
    match_if,
    match_one_of,
    match_prefix,
    match_range,
    reject_any_of,
    reject_element,
)
from .runner import parse, parse_all

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("combiparse")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ClosedRange",
    "CombiparseError",
    "Cursor",
    "Either",
    "Failure",
    "GrammarDefinitionError",
    "Left",
    "ParseError",
    "ParseFailedError",
    "ParseResult",
    "Parser",
    "ParserLike",
    "Right",
    "Rule",
    "Success",
    "__version__",
    "always",
    "and_",
    "as_parser",
    "compose",
    "either",
    "eof",
    "lazy",
    "look_ahead",
    "map_value",
    "match_element",
    "match_if",
    "match_one_of",
    "match_prefix",
    "match_range",
    "not_",
    "opt",
    "or_",
    "parse",
    "parse_all",
    "placeholder",
    "rep",
    "rep1",
    "reject_any_of",
    "reject_element",
]
