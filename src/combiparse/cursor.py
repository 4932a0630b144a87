"""Immutable cursor and result model for combinator parsing.

Implements the immutable cursor pattern shared by every parser in the
package. Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - Works over any Sequence: str, bytes, list or tuple of tokens
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor
    - Failure is a value (Failure), never an exception
    - Line:column computed on-demand (only for error reporting)

Line Ending Support:
    Text sources use \\n as the line delimiter. CRLF works because the \\n
    is still present. For non-text sources the "line" is always 1 and the
    "column" is the element offset plus one.

Pattern Reference:
    - Rust nom parser combinator library
    - Haskell Parsec
    - Scala parser combinators
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from combiparse.constants import DEFAULT_CONTEXT_LINES, MAX_PREVIEW_LENGTH
from combiparse.diagnostics import FailureTemplate, describe

__all__ = [
    "Cursor",
    "Failure",
    "ParseError",
    "ParseResult",
    "Parser",
    "Success",
]


@dataclass(frozen=True, slots=True, repr=False)
class Cursor[E]:
    """Immutable position within an input sequence.

    Key Design Decisions:
        1. Frozen dataclass - Immutability enforced by Python
        2. Slots - Memory efficiency (one cursor per parse step)
        3. Simple position - Just an integer offset into source
        4. EOF is a property - Not a return value
        5. current raises - Elements may legitimately be None in token
           streams, so None is never used as an end marker

    Two cursors are equal when they view equal sources at the same offset.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance(2).remaining()
        'llo'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
        >>> Cursor(["let", "x"], 2).is_eof
        True
    """

    source: Sequence[E]
    pos: int = 0

    def __post_init__(self) -> None:
        """Validate position.

        Raises:
            ValueError: If pos is negative
        """
        if self.pos < 0:
            raise ValueError(FailureTemplate.negative_position(self.pos))

    @property
    def is_eof(self) -> bool:
        """Check if no elements remain.

        Note: This is the preferred way to check for EOF.
              Use this in while loops: `while not cursor.is_eof:`
        """
        return self.pos >= len(self.source)

    @property
    def current(self) -> E:
        """Get the next element without consuming it.

        Returns:
            Element at the current position

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            raise EOFError(FailureTemplate.unexpected_eof(self.pos))
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> E | None:
        """Peek at the element at position + offset without advancing.

        Returns None ONLY when the target lies outside the source (beyond EOF,
        or before the start for a negative offset). Token streams that contain
        None elements should check is_eof / len() instead.
        """
        target_pos = self.pos + offset
        if target_pos < 0 or target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor[E]":
        """Return new cursor advanced by count elements (clamped to end).

        Example:
            >>> cursor = Cursor("hello", 0)
            >>> cursor.advance().pos
            1
            >>> cursor.advance(10).pos
            5
        """
        new_pos = min(self.pos + count, len(self.source))
        if new_pos <= self.pos:
            # Never move backwards, even from a position past the end
            return self
        return Cursor(self.source, new_pos)

    def starts_with(self, pattern: Sequence[E]) -> bool:
        """Check whether the remaining elements begin with pattern.

        Comparison is elementwise equality. An empty pattern always matches.

        Example:
            >>> Cursor("abc", 0).starts_with("ab")
            True
            >>> Cursor("abc", 0).starts_with(["a", "b"])
            True
            >>> Cursor("abc", 1).starts_with("ab")
            False
        """
        n = len(pattern)
        if n == 0:
            return True
        if self.pos + n > len(self.source):
            return False
        source = self.source
        if isinstance(source, (str, bytes)) and type(pattern) is type(source):
            return source.startswith(pattern, self.pos)
        return all(source[self.pos + i] == pattern[i] for i in range(n))

    def remaining(self) -> Sequence[E]:
        """Return the unconsumed suffix as the source's own sequence type."""
        return self.source[self.pos :]

    def slice_to(self, end_pos: int) -> Sequence[E]:
        """Extract source slice from current position to end_pos (exclusive).

        Useful for recovering the text a sequence of parsers consumed:

            >>> start = Cursor("hello world", 0)
            >>> end = start.advance(5)
            >>> start.slice_to(end.pos)
            'hello'
        """
        return self.source[self.pos : end_pos]

    def __len__(self) -> int:
        """Number of elements remaining."""
        return max(len(self.source) - self.pos, 0)

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for the current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Performance:
            O(n) where n = current position. Only call for error reporting,
            not during normal parsing!

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
            >>> Cursor([1, 2, 3], 2).compute_line_col()
            (1, 3)
        """
        if not isinstance(self.source, str):
            return (1, self.pos + 1)

        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)

    def __str__(self) -> str:
        if self.is_eof:
            return f"<end of input at {self.pos}>"
        window = self.source[self.pos : self.pos + MAX_PREVIEW_LENGTH + 1]
        return f"{describe(window)} at {self.pos}"

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, remaining={describe(self.remaining())})"


@dataclass(frozen=True, slots=True)
class ParseError[E]:
    """Parse failure with location and optional reason.

    Design:
        - Stores cursor at failure point (for line:column)
        - Reason is optional: either() deliberately reports none
        - Immutable so combinators can rebuild rather than mutate

    Example:
        >>> error = ParseError(Cursor("hello\\nworld", 7), "expected ']'")
        >>> error.format_error()
        "2:2: expected ']'"
    """

    at: Cursor[E]
    reason: str | None = None

    def format_error(self) -> str:
        """Format error as "line:col: reason"."""
        line, col = self.at.compute_line_col()
        reason = self.reason if self.reason else "parse failed"
        return f"{line}:{col}: {reason}"

    def format_with_context(self, context_lines: int = DEFAULT_CONTEXT_LINES) -> str:
        """Format error with source context and pointer.

        Shows the failing line and a caret pointing to the failure position.
        Non-text sources fall back to format_error().

        Args:
            context_lines: Number of lines to show before/after the failure

        Example:
            >>> source = "a = 1\\nb = (2\\nc = 3"
            >>> error = ParseError(Cursor(source, 12), "expected ')'")
            >>> print(error.format_with_context())
            2:7: expected ')'
            <BLANKLINE>
               1 | a = 1
               2 | b = (2
                 |       ^
               3 | c = 3
        """
        if not isinstance(self.at.source, str):
            return self.format_error()

        line, col = self.at.compute_line_col()
        lines = self.at.source.split("\n")
        result_lines = [self.format_error(), ""]

        start_line = max(1, line - context_lines)
        end_line = min(len(lines), line + context_lines)

        for i in range(start_line, end_line + 1):
            line_num_str = f"{i:4} | "
            result_lines.append(line_num_str + lines[i - 1])
            if i == line:
                gutter = " " * (len(line_num_str) - 2) + "| "
                result_lines.append(gutter + " " * (col - 1) + "^")

        return "\n".join(result_lines)


@dataclass(frozen=True, slots=True)
class Success[E, V]:
    """Successful parse: the value and the cursor after it.

    Invariant: remainder is always a suffix of the cursor the parser was
    given (consumption is monotonic).

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> result = Success("h", cursor.advance())
        >>> result.value
        'h'
        >>> result.remainder.current
        'e'
    """

    value: V
    remainder: Cursor[E]

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """Failed parse carrying a ParseError."""

    error: ParseError[E]

    @property
    def is_success(self) -> bool:
        return False

    @property
    def at(self) -> Cursor[E]:
        """Position of the failure (shortcut for error.at)."""
        return self.error.at

    @property
    def reason(self) -> str | None:
        """Failure reason (shortcut for error.reason)."""
        return self.error.reason


type ParseResult[E, V] = Success[E, V] | Failure[E]

# Every parser has this signature:
#     def parse_foo(cursor: Cursor[E]) -> ParseResult[E, Foo]
type Parser[E, V] = Callable[[Cursor[E]], ParseResult[E, V]]
