"""
scoring.py — scoring schemes consumed by the alignment engine

A scoring scheme gives the score of substituting one symbol for another,
of inserting a symbol and of deleting a symbol.  Scores are integers;
positive values reward, negative values penalize.  DP matrices are int64,
so every score, and every accumulated path score, must fit in that range.

  - ScoringScheme       : abstract contract used by the DP core.
  - BasicScoringScheme  : identity scoring (match / mismatch / gap) for any symbols.
  - MatrixScoringScheme : substitution matrix over a fixed alphabet.
  - checked_scores      : wrapper enforcing integer scores in int64 range.
"""

from __future__ import annotations

import numbers
from abc import ABC, abstractmethod
from typing import Any, Hashable, Mapping, Optional

import numpy as np
from numpy.typing import NDArray

from .errors import IncompatibleScoringSchemeError

SCORE_MIN = int(np.iinfo(np.int64).min)
SCORE_MAX = int(np.iinfo(np.int64).max)


class ScoringScheme(ABC):
    """
    Abstract base class for scoring schemes.

    Every method returns an int in the int64 range; the matrix fills reject
    anything else with TypeError or OverflowError (see as_score).
    """

    @abstractmethod
    def substitution(self, a: Any, b: Any) -> int:
        """Score of aligning symbol `a` (sequence 1) against `b` (sequence 2)."""
        raise NotImplementedError

    @abstractmethod
    def insertion(self, a: Any) -> int:
        """Score of inserting symbol `a` of sequence 2 (gap in sequence 1)."""
        raise NotImplementedError

    @abstractmethod
    def deletion(self, a: Any) -> int:
        """Score of deleting symbol `a` of sequence 1 (gap in sequence 2)."""
        raise NotImplementedError

    @abstractmethod
    def supports_partial_match(self) -> bool:
        """
        True if two different symbols may score positively.

        Engines disable the MATCH tag for such schemes and write the
        matching symbol in the tag line instead.
        """
        raise NotImplementedError


class BasicScoringScheme(ScoringScheme):
    """
    Identity scoring: `match` for equal symbols, `mismatch` otherwise,
    and the same `gap` score for every insertion and deletion.

    Works with any symbols that support equality; never raises
    IncompatibleScoringSchemeError.
    """

    def __init__(self, match: int = 1, mismatch: int = -1, gap: int = -1):
        self.match = int(match)
        self.mismatch = int(mismatch)
        self.gap = int(gap)

    def substitution(self, a, b) -> int:
        return self.match if a == b else self.mismatch

    def insertion(self, a) -> int:
        return self.gap

    def deletion(self, a) -> int:
        return self.gap

    def supports_partial_match(self) -> bool:
        return False

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(match={self.match}, "
            f"mismatch={self.mismatch}, gap={self.gap})"
        )


class MatrixScoringScheme(ScoringScheme):
    """
    Substitution matrix scoring over a fixed alphabet.

    Parameters
    ----------
    score_matrix : (K, K) array of int
        score_matrix[alphabet_to_index[a], alphabet_to_index[b]] is the score
        of substituting a for b.

    alphabet_to_index : mapping symbol -> int
        Maps each symbol to a row/column index in score_matrix.

    gap : int
        Linear gap score used for insertions and deletions unless
        overridden below.

    insertion, deletion : mapping symbol -> int, optional
        Per-symbol gap scores.  Symbols of the alphabet missing from these
        mappings fall back to `gap`.
    """

    def __init__(
        self,
        score_matrix: NDArray[np.integer],
        alphabet_to_index: Mapping[Hashable, int],
        gap: int = -1,
        insertion: Optional[Mapping[Hashable, int]] = None,
        deletion: Optional[Mapping[Hashable, int]] = None,
    ):
        matrix = np.asarray(score_matrix)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"score_matrix must be square, got shape {matrix.shape}")
        k = matrix.shape[0]
        for symbol, idx in alphabet_to_index.items():
            if not 0 <= idx < k:
                raise ValueError(
                    f"Alphabet index out of range: {symbol!r} -> {idx}, matrix size is {k}"
                )

        self.score_matrix = matrix.astype(np.int64)
        self.alphabet_to_index = dict(alphabet_to_index)
        self.gap = int(gap)
        self._insertion = {s: int(v) for s, v in (insertion or {}).items()}
        self._deletion = {s: int(v) for s, v in (deletion or {}).items()}

        off_diagonal = self.score_matrix[~np.eye(k, dtype=bool)]
        self._partial = bool(np.any(off_diagonal > 0))

    def _index(self, a, operation: str) -> int:
        try:
            return self.alphabet_to_index[a]
        except (KeyError, TypeError):
            raise IncompatibleScoringSchemeError(a, operation) from None

    def substitution(self, a, b) -> int:
        ia = self._index(a, "substitution")
        ib = self._index(b, "substitution")
        return int(self.score_matrix[ia, ib])

    def insertion(self, a) -> int:
        self._index(a, "insertion")
        return self._insertion.get(a, self.gap)

    def deletion(self, a) -> int:
        self._index(a, "deletion")
        return self._deletion.get(a, self.gap)

    def supports_partial_match(self) -> bool:
        return self._partial


def as_score(value: Any, operation: str = "substitution") -> int:
    """
    Return `value` as a Python int, rejecting values a DP matrix cannot hold.

    Raises
    ------
    TypeError
        `value` is not an integer (floats are not truncated).
    OverflowError
        `value` is outside the int64 range.
    """
    if not isinstance(value, numbers.Integral):
        raise TypeError(
            f"{operation} score must be an integer, got {type(value).__name__} {value!r}"
        )
    value = int(value)
    if not SCORE_MIN <= value <= SCORE_MAX:
        raise OverflowError(f"{operation} score {value} does not fit in int64")
    return value


class _CheckedScoringScheme(ScoringScheme):
    """Delegates to another scheme and passes every score through as_score."""

    def __init__(self, scheme: ScoringScheme):
        self.scheme = scheme

    def substitution(self, a, b) -> int:
        return as_score(self.scheme.substitution(a, b), "substitution")

    def insertion(self, a) -> int:
        return as_score(self.scheme.insertion(a), "insertion")

    def deletion(self, a) -> int:
        return as_score(self.scheme.deletion(a), "deletion")

    def supports_partial_match(self) -> bool:
        return self.scheme.supports_partial_match()


def checked_scores(scheme: ScoringScheme) -> ScoringScheme:
    """Wrap `scheme` so that the matrix fills only ever see valid int scores."""
    if isinstance(scheme, _CheckedScoringScheme):
        return scheme
    return _CheckedScoringScheme(scheme)
