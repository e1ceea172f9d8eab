"""Template pattern matching against document cursors."""

from .bindings import Binding, VarBindings
from .matcher import (
    SENSE_VARIABLE,
    MatchFailure,
    MatchResult,
    MatchSuccess,
    reverse_pattern,
    try_match,
)

__all__ = [
    "Binding",
    "MatchFailure",
    "MatchResult",
    "MatchSuccess",
    "SENSE_VARIABLE",
    "VarBindings",
    "reverse_pattern",
    "try_match",
]
