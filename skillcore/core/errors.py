"""Exception hierarchy for skillcore.

Every failure a rating update can produce is one of two kinds:

1. ``InvalidInputError``: the caller handed over something the engines cannot rate
   (mismatched lengths, empty teams, non-positive constants). Raised before any
   computation starts, so no partial result ever exists.
2. ``NumericDegenerateError``: a numerical fallback was itself impossible. With finite
   inputs this should not happen.
"""

from __future__ import annotations


class SkillcoreError(Exception):
    """Base exception for all skillcore errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional context for logging/debugging
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class InvalidInputError(SkillcoreError, ValueError):
    """Raised when ratings, outcomes or a configuration cannot be rated."""

    pass


class NumericDegenerateError(SkillcoreError, ArithmeticError):
    """Raised when a computation produces a non-finite value with no usable fallback."""

    pass
