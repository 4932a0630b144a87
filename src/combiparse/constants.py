"""Shared constants for combiparse.

Centralized display, formatting, and depth limits used across the cursor,
diagnostics, combinator, and runner modules. Placing them here avoids circular
imports and provides a single source of truth.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "DEFAULT_CONTEXT_LINES",
    "ELLIPSIS",
    "FRAMES_PER_LEVEL",
    "MAX_DEPTH",
    "MAX_PREVIEW_LENGTH",
    "OR_SEPARATOR",
    "RESERVED_FRAMES",
]

# ============================================================================
# ERROR DISPLAY
# ============================================================================

# Lines of source shown above and below the failing line by
# ParseError.format_with_context().
DEFAULT_CONTEXT_LINES: int = 2

# Maximum number of elements rendered when a cursor or pattern is shown in a
# failure reason. Long token streams would otherwise flood log output.
MAX_PREVIEW_LENGTH: int = 20

# Marker appended to truncated previews.
ELLIPSIS: str = "..."

# ============================================================================
# ALTERNATION
# ============================================================================

# Separator between branch reasons when both sides of or_() fail.
OR_SEPARATOR: str = " or "

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum nesting of Rule and lazy() invocations on one call path.
# Deeper input fails with a depth reason instead of overflowing the stack.
MAX_DEPTH: int = 100

# Stack frames a typical grammar spends between two nested rule invocations
# (Rule -> map_value -> compose -> ... -> or_ -> compose -> Rule).
FRAMES_PER_LEVEL: int = 9

# Stack frames kept free for the caller, the test runner, and failure
# formatting when MAX_DEPTH is clamped against sys.getrecursionlimit().
RESERVED_FRAMES: int = 50
