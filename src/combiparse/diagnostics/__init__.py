"""Diagnostics for combiparse: failure reason templates and exceptions.

Python 3.13+. Zero external dependencies.
"""

from .errors import CombiparseError, GrammarDefinitionError, ParseFailedError
from .templates import FailureTemplate, describe

__all__ = [
    "CombiparseError",
    "FailureTemplate",
    "GrammarDefinitionError",
    "ParseFailedError",
    "describe",
]
