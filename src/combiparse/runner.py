"""Entry points for running a parser over a complete input.

parse() returns the ParseResult value exactly as the parser produced it.
parse_all() is for callers that want the parsed value or an exception:
it requires the whole input to be consumed and raises ParseFailedError
otherwise. This is the only place in the package where a failure value
becomes an exception.
"""

import logging
from collections.abc import Sequence
from typing import Any

from combiparse.combinators import eof
from combiparse.cursor import Cursor, Failure, ParseResult
from combiparse.diagnostics import ParseFailedError
from combiparse.literals import ParserLike, as_parser

__all__ = ["parse", "parse_all"]

logger = logging.getLogger(__name__)


def parse[E](parser: ParserLike, source: Sequence[E], pos: int = 0) -> ParseResult[E, Any]:
    """Run parser over source starting at pos.

    Args:
        parser: Parser or literal to run
        source: Input sequence (text, bytes, token list)
        pos: Starting offset

    Returns:
        Success or Failure, as produced by the parser
    """
    result = as_parser(parser)(Cursor(source, pos))
    if isinstance(result, Failure):
        logger.debug("Parse failed: %s", result.error.format_error())
    else:
        logger.debug(
            "Parse succeeded: consumed %d of %d elements",
            result.remainder.pos - pos,
            len(source) - pos,
        )
    return result


def parse_all[E](parser: ParserLike, source: Sequence[E]) -> Any:
    """Run parser over the whole of source and return its value.

    Raises:
        ParseFailedError: If the parser fails or input remains afterwards

    Example:
        >>> parse_all(rep1(match_if(str.isdigit)), "42")
        ['4', '2']
    """
    result = parse(parser, source)
    if isinstance(result, Failure):
        raise ParseFailedError(result.error)
    # Checked separately so leftover input is reported where it starts
    end = eof(result.remainder)
    if isinstance(end, Failure):
        raise ParseFailedError(end.error)
    return result.value
