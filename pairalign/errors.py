"""
errors.py — exception hierarchy for pairalign

Every error raised by the alignment engine derives from AlignmentError and
from the builtin exception that matches its meaning, so callers can catch
either the library type or the builtin one:

  - InvalidScoringSchemeError      : ValueError   (bad argument at bind time)
  - AlignmentStateError            : RuntimeError (query before setup)
  - IncompatibleScoringSchemeError : LookupError  (scheme cannot score a symbol)
"""

from __future__ import annotations

from typing import Any, Optional


class AlignmentError(Exception):
    """
    Base exception for all pairalign errors.

    Parameters
    ----------
    message : str
        What went wrong.
    suggestion : str, optional
        What the caller can do about it.
    context : str, optional
        Extra detail about the failing input.
    """

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[str] = None,
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context
        super().__init__(self.formatted())

    def formatted(self) -> str:
        msg = self.message
        if self.context:
            msg += f"\n  Context: {self.context}"
        if self.suggestion:
            msg += f"\n  Suggestion: {self.suggestion}"
        return msg

    def __str__(self) -> str:
        return self.formatted()


class InvalidScoringSchemeError(AlignmentError, ValueError):
    """Raised when a missing or unusable scoring scheme is bound to an engine."""

    def __init__(self, message: str = "Null scoring scheme object."):
        super().__init__(
            message,
            suggestion="Pass a ScoringScheme instance to bind_scoring_scheme()",
        )


class AlignmentStateError(AlignmentError, RuntimeError):
    """Raised when an alignment or score is requested before the engine is ready."""

    def __init__(self, message: str):
        super().__init__(
            message,
            suggestion="Call load_sequences() and bind_scoring_scheme() first",
        )


class IncompatibleScoringSchemeError(AlignmentError, LookupError):
    """
    Raised by a scoring scheme that cannot score a symbol.

    Parameters
    ----------
    symbol : object
        The offending symbol.
    operation : str
        Which score was requested ("substitution", "insertion", "deletion").
    """

    def __init__(self, symbol: Any, operation: str = "substitution"):
        self.symbol = symbol
        self.operation = operation
        super().__init__(
            f"Scoring scheme cannot score symbol {symbol!r}",
            suggestion="Use a scoring scheme whose alphabet covers both sequences",
            context=f"operation={operation}",
        )
