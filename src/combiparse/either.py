"""Two-variant sum type for heterogeneous alternation.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

__all__ = ["Either", "Left", "Right"]


@dataclass(frozen=True, slots=True)
class Left[L]:
    """Value produced by the left branch of either()."""

    value: L


@dataclass(frozen=True, slots=True)
class Right[R]:
    """Value produced by the right branch of either()."""

    value: R


type Either[L, R] = Left[L] | Right[R]
