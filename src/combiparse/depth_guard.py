"""Nesting depth limits for recursive grammars.

Every recursive grammar recurses through a Rule or a lazy() thunk, so those
are the only places that need to count. Each invocation enters a
DepthGuard, which tracks nesting on the current call path so that input
nested deeper than the limit becomes a Failure before Python's own
recursion limit is reached.

Thread Safety:
    The current depth lives in a ContextVar. Each thread and each async task
    sees its own value, so one parser value can run concurrently.

Python 3.13+.
"""

import logging
import sys
from contextvars import ContextVar, Token

from combiparse.constants import FRAMES_PER_LEVEL, MAX_DEPTH, RESERVED_FRAMES
from combiparse.cursor import Cursor, Failure, ParseError
from combiparse.diagnostics import FailureTemplate

__all__ = ["DepthGuard", "current_depth", "depth_clamp", "depth_failure"]

logger = logging.getLogger(__name__)

# Rule and lazy() invocations currently on the call path.
_rule_depth: ContextVar[int] = ContextVar("combiparse_rule_depth", default=0)


def current_depth() -> int:
    """Number of Rule and lazy() invocations on the current call path."""
    return _rule_depth.get()


class DepthGuard:
    """Context manager for one level of grammar nesting.

    Entering increments the depth for the duration of the block, unless
    max_depth levels are already active. In that case the depth is left
    alone and ``exceeded`` is set, so the caller can fail instead of
    recursing:

        with DepthGuard(max_depth) as guard:
            if guard.exceeded:
                return depth_failure(cursor, "rule 'expr'", max_depth)
            return parser(cursor)

    Unlike a helper function wrapping the call, the guard adds no stack
    frame of its own while the block runs.
    """

    __slots__ = ("_max_depth", "_token", "exceeded")

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        self._max_depth = max_depth
        self._token: Token[int] | None = None
        self.exceeded = False

    def __enter__(self) -> "DepthGuard":
        """Enter guarded section, increment depth if the limit allows."""
        depth = _rule_depth.get()
        if depth >= self._max_depth:
            self.exceeded = True
        else:
            self._token = _rule_depth.set(depth + 1)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit guarded section, restore previous depth."""
        if self._token is not None:
            _rule_depth.reset(self._token)
            self._token = None


def depth_failure[E](cursor: Cursor[E], name: str, max_depth: int) -> Failure[E]:
    """Failure reported by a Rule or lazy() that hit its nesting limit."""
    logger.debug("Nesting depth %d reached in %s at position %d", max_depth, name, cursor.pos)
    return Failure(ParseError(cursor, FailureTemplate.depth_exceeded(name, max_depth)))


def depth_clamp(
    requested_depth: int,
    reserve_frames: int = RESERVED_FRAMES,
    frames_per_level: int = FRAMES_PER_LEVEL,
) -> int:
    """Clamp a nesting limit against the Python recursion limit.

    Each level of grammar nesting costs several stack frames, so the safe
    limit is the recursion limit, less reserve_frames, divided by
    frames_per_level. Logs a warning if clamping occurs.

    Args:
        requested_depth: Desired maximum nesting depth
        reserve_frames: Stack frames to keep free for the caller
        frames_per_level: Stack frames one nesting level is expected to use

    Returns:
        Safe depth value, clamped if necessary

    Example:
        >>> import sys
        >>> sys.setrecursionlimit(1000)
        >>> depth_clamp(100)
        100
        >>> depth_clamp(500)  # (1000 - 50) // 9
        105
    """
    max_safe_depth = max((sys.getrecursionlimit() - reserve_frames) // frames_per_level, 1)
    if requested_depth > max_safe_depth:
        logger.warning(
            "Requested nesting depth %d exceeds what the Python recursion limit (%d) "
            "allows. Clamping to %d to prevent RecursionError. "
            "Consider increasing sys.setrecursionlimit() if needed.",
            requested_depth,
            sys.getrecursionlimit(),
            max_safe_depth,
        )
        return max_safe_depth
    return requested_depth
