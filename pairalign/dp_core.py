"""
dp_core.py — shared alignment engine

This module holds the parts common to every pairwise alignment algorithm:

  - AlignmentTags            : tag-line symbols and the gap symbol.
  - AlignmentResult          : gapped sequences, tag line and score.
  - CacheState / ResultCache : tri-state cache of the last computation.
  - traceback_alignment      : backward walk through a filled DP matrix.
  - PairwiseAlignmentAlgorithm : sequence loading, scheme binding and lazy,
                                 cached computation of alignment or score.

Concrete algorithms (needleman_wunsch.py, smith_waterman.py) supply the
matrix fill and the linear-space score.

Thread safety: each engine instance serializes its own calls with an
instance lock.  Sharing one scoring scheme object between engines is fine
as long as the scheme itself is not mutated while they run.
"""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from . import default
from .errors import AlignmentStateError, InvalidScoringSchemeError
from .scoring import ScoringScheme

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tags and result container
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AlignmentTags:
    """
    Symbols written to the output of an alignment.

    Attributes
    ----------
    match : object
        Tag for a column where both symbols are equal (only used when the
        scoring scheme does not support partial matches).
    approximate_match : object
        Tag for different symbols with a positive substitution score.
    mismatch : object
        Tag for different symbols with a non-positive substitution score.
    gap : object
        Tag for a column with a gap in either sequence.
    gap_character : object
        Symbol placed in a gapped sequence opposite an unaligned symbol.
    """
    match: Any = default.MATCH_TAG
    approximate_match: Any = default.APPROXIMATE_MATCH_TAG
    mismatch: Any = default.MISMATCH_TAG
    gap: Any = default.GAP_TAG
    gap_character: Any = default.GAP_CHARACTER


@dataclass(frozen=True)
class AlignmentResult:
    """
    Result of a pairwise alignment.

    Attributes
    ----------
    gapped_seq1, gapped_seq2 : tuple
        Aligned sequences, with the gap symbol where the other sequence
        has an unaligned symbol.  Both have the same length.

    tag_line : tuple
        One tag per column describing the relation of the two symbols.

    score : int
        Score of the alignment under the scoring scheme used.
    """
    gapped_seq1: Tuple[Any, ...]
    tag_line: Tuple[Any, ...]
    gapped_seq2: Tuple[Any, ...]
    score: int

    def __post_init__(self):
        lengths = (len(self.gapped_seq1), len(self.tag_line), len(self.gapped_seq2))
        if len(set(lengths)) != 1:
            raise ValueError(f"Alignment rows must have equal length, got {lengths}")

    def __len__(self) -> int:
        return len(self.gapped_seq1)

    def columns(self) -> Iterator[Tuple[Any, Any, Any]]:
        """Iterate over (symbol1, tag, symbol2) triples, one per column."""
        return zip(self.gapped_seq1, self.tag_line, self.gapped_seq2)

    def to_tuple(self) -> Tuple[Tuple[Any, ...], Tuple[Any, ...], Tuple[Any, ...], int]:
        return (self.gapped_seq1, self.tag_line, self.gapped_seq2, self.score)

    def __str__(self) -> str:
        lines = (
            "".join(str(s) for s in self.gapped_seq1),
            "".join(str(s) for s in self.tag_line),
            "".join(str(s) for s in self.gapped_seq2),
        )
        return "\n".join(lines) + f"\n\nScore: {self.score}"


# ---------------------------------------------------------------------------
# Result cache
# ---------------------------------------------------------------------------

class CacheState(Enum):
    EMPTY = "empty"
    SCORE_ONLY = "score_only"
    ALIGNMENT = "alignment"


@dataclass
class ResultCache:
    """
    Last computed result of an engine.

    EMPTY       : nothing computed for the current scheme/sequences.
    SCORE_ONLY  : score known, alignment not reconstructed.
    ALIGNMENT   : alignment known (and therefore its score).
    """
    state: CacheState = CacheState.EMPTY
    alignment: Optional[AlignmentResult] = None
    score: Optional[int] = None

    def clear(self) -> None:
        self.state = CacheState.EMPTY
        self.alignment = None
        self.score = None

    def store_score(self, score: int) -> None:
        self.state = CacheState.SCORE_ONLY
        self.alignment = None
        self.score = score

    def store_alignment(self, alignment: AlignmentResult) -> None:
        self.state = CacheState.ALIGNMENT
        self.alignment = alignment
        self.score = alignment.score

    def drop_alignment(self) -> None:
        """Forget the alignment but keep its score."""
        if self.state is CacheState.ALIGNMENT:
            self.state = CacheState.SCORE_ONLY
            self.alignment = None


def _checked_tags(tags: Any) -> AlignmentTags:
    if not isinstance(tags, AlignmentTags):
        raise ValueError(f"tags must be an AlignmentTags instance, got {tags!r}")
    return tags


# ---------------------------------------------------------------------------
# Traceback
# ---------------------------------------------------------------------------

def substitution_tag(
    a: Any,
    b: Any,
    score: int,
    tags: AlignmentTags,
    use_match_tag: bool,
) -> Any:
    """
    Tag for a column aligning `a` against `b` with substitution `score`.

    Equal symbols get the MATCH tag, or the symbol itself when match
    tagging is disabled.  Different symbols get APPROXIMATE_MATCH when the
    substitution scores positively and MISMATCH otherwise.
    """
    if a == b:
        return tags.match if use_match_tag else a
    if score > 0:
        return tags.approximate_match
    return tags.mismatch


def traceback_alignment(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    matrix: NDArray[np.integer],
    scoring: ScoringScheme,
    tags: AlignmentTags,
    use_match_tag: bool,
    start: Tuple[int, int],
    local: bool = False,
) -> AlignmentResult:
    """
    Recover one optimal alignment from a filled DP matrix.

    Starting at `start`, each step checks which predecessor reproduces the
    current cell, in the fixed order insertion (left), substitution
    (diagonal), deletion (up).  Deletion is the fallback and is not
    re-verified.  Global traceback runs to (0, 0); local traceback also
    stops at the first cell whose value is 0.

    Parameters
    ----------
    seq1, seq2 : sequence
        Sequences indexing the rows (seq1) and columns (seq2) of `matrix`.
    matrix : (n+1, m+1) array of int
        Filled score matrix.
    scoring : ScoringScheme
        Scheme used to fill `matrix`.
    tags : AlignmentTags
        Output symbols.
    use_match_tag : bool
        Whether equal symbols are tagged with tags.match.
    start : (int, int)
        Cell where the alignment ends.
    local : bool, default False
        Stop at zero-valued cells (Smith-Waterman).

    Returns
    -------
    AlignmentResult
        Score is matrix[start].
    """
    r, c = start
    score = int(matrix[r, c])

    aln1 = []
    tag_line = []
    aln2 = []

    while (r > 0 or c > 0) and (not local or matrix[r, c] > 0):
        if c > 0:
            b = seq2[c - 1]
            if matrix[r, c] == matrix[r, c - 1] + scoring.insertion(b):
                aln1.append(tags.gap_character)
                tag_line.append(tags.gap)
                aln2.append(b)
                c -= 1
                continue

        if r > 0 and c > 0:
            a, b = seq1[r - 1], seq2[c - 1]
            sub = scoring.substitution(a, b)
            if matrix[r, c] == matrix[r - 1, c - 1] + sub:
                aln1.append(a)
                tag_line.append(substitution_tag(a, b, sub, tags, use_match_tag))
                aln2.append(b)
                r -= 1
                c -= 1
                continue

        # deletion
        aln1.append(seq1[r - 1])
        tag_line.append(tags.gap)
        aln2.append(tags.gap_character)
        r -= 1

    aln1.reverse()
    tag_line.reverse()
    aln2.reverse()

    return AlignmentResult(
        gapped_seq1=tuple(aln1),
        tag_line=tuple(tag_line),
        gapped_seq2=tuple(aln2),
        score=score,
    )


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class PairwiseAlignmentAlgorithm(ABC):
    """
    Base class for pairwise alignment algorithms.

    Bind a scoring scheme and load two sequences, then ask for either the
    alignment (full matrix, quadratic space) or only its score (linear
    space).  Results are cached until a new scheme or new sequences are
    bound.

    Parameters
    ----------
    scoring : ScoringScheme, optional
        Bound immediately if given.
    seq1, seq2 : sequence, optional
        Loaded immediately if both are given.
    tags : AlignmentTags, optional
        Output symbols; defaults to the constants in pairalign.default.
    """

    def __init__(
        self,
        scoring: Optional[ScoringScheme] = None,
        seq1: Optional[Sequence[Any]] = None,
        seq2: Optional[Sequence[Any]] = None,
        tags: Optional[AlignmentTags] = None,
    ):
        self._lock = threading.RLock()
        self._scoring: Optional[ScoringScheme] = None
        self._use_match_tag = True
        self._seq1: Optional[Tuple[Any, ...]] = None
        self._seq2: Optional[Tuple[Any, ...]] = None
        self._tags = AlignmentTags() if tags is None else _checked_tags(tags)
        self._cache = ResultCache()

        if scoring is not None:
            self.bind_scoring_scheme(scoring)
        if seq1 is not None or seq2 is not None:
            if seq1 is None or seq2 is None:
                raise ValueError("seq1 and seq2 must be given together")
            self.load_sequences(seq1, seq2)

    # -- binding -----------------------------------------------------------

    def bind_scoring_scheme(self, scoring: ScoringScheme) -> None:
        """
        Set the scoring scheme for the next computations.

        Any cached alignment or score is discarded.  Match tagging is
        enabled unless the scheme supports partial matches.
        """
        if scoring is None:
            raise InvalidScoringSchemeError()
        with self._lock:
            self._scoring = scoring
            self._use_match_tag = not scoring.supports_partial_match()
            self._invalidate("scoring scheme bound")

    def load_sequences(self, seq1: Sequence[Any], seq2: Sequence[Any]) -> None:
        """Load the two sequences to align, discarding any cached result."""
        with self._lock:
            self._seq1 = tuple(seq1)
            self._seq2 = tuple(seq2)
            self._invalidate("sequences loaded")

    def _invalidate(self, reason: str) -> None:
        if self._cache.state is not CacheState.EMPTY:
            logger.debug("%s: cache cleared (%s)", type(self).__name__, reason)
        self._cache.clear()

    # -- queries -----------------------------------------------------------

    def get_alignment(self) -> AlignmentResult:
        """
        Return an optimal alignment of the loaded sequences.

        Computed with the full DP matrix on first call, then cached.

        Raises
        ------
        AlignmentStateError
            If no scoring scheme is bound or no sequences are loaded.
        IncompatibleScoringSchemeError
            If the scheme cannot score a symbol of either sequence.
        """
        with self._lock:
            if self._cache.state is CacheState.ALIGNMENT:
                return self._cache.alignment
            self._check_ready()
            logger.debug(
                "%s: computing alignment (n=%d, m=%d)",
                type(self).__name__, len(self._seq1), len(self._seq2),
            )
            alignment = self._compute_alignment()
            self._cache.store_alignment(alignment)
            return alignment

    def get_score(self) -> int:
        """
        Return the optimal alignment score of the loaded sequences.

        Uses the cached score when available, otherwise the linear-space
        computation (no alignment is reconstructed).

        Raises
        ------
        AlignmentStateError
            If no scoring scheme is bound or no sequences are loaded.
        IncompatibleScoringSchemeError
            If the scheme cannot score a symbol of either sequence.
        """
        with self._lock:
            if self._cache.state is not CacheState.EMPTY:
                return self._cache.score
            self._check_ready()
            logger.debug(
                "%s: computing score in linear space (n=%d, m=%d)",
                type(self).__name__, len(self._seq1), len(self._seq2),
            )
            score = int(self._compute_score())
            self._cache.store_score(score)
            return score

    def _check_ready(self) -> None:
        if self._seq1 is None or self._seq2 is None:
            raise AlignmentStateError("Sequences have not been loaded.")
        if self._scoring is None:
            raise AlignmentStateError("Scoring scheme has not been set.")

    # -- subclass hooks ----------------------------------------------------

    @abstractmethod
    def _compute_alignment(self) -> AlignmentResult:
        """Fill the full matrix and trace back one optimal alignment."""
        raise NotImplementedError

    @abstractmethod
    def _compute_score(self) -> int:
        """Compute the optimal score in linear space."""
        raise NotImplementedError

    # -- accessors ---------------------------------------------------------

    @property
    def scoring_scheme(self) -> Optional[ScoringScheme]:
        return self._scoring

    @property
    def use_match_tag(self) -> bool:
        return self._use_match_tag

    @property
    def sequences(self) -> Tuple[Optional[Tuple[Any, ...]], Optional[Tuple[Any, ...]]]:
        return self._seq1, self._seq2

    @property
    def sequences_loaded(self) -> bool:
        return self._seq1 is not None and self._seq2 is not None

    @property
    def cache_state(self) -> CacheState:
        return self._cache.state

    @property
    def tags(self) -> AlignmentTags:
        return self._tags

    @tags.setter
    def tags(self, tags: AlignmentTags) -> None:
        # the score does not depend on tags, only the reconstructed alignment does
        with self._lock:
            self._tags = _checked_tags(tags)
            self._cache.drop_alignment()
