"""
needleman_wunsch.py — global alignment (Needleman-Wunsch, linear gaps)

  - fill_global_matrix  : full (n+1, m+1) score matrix.
  - global_score_linear : optimal score keeping a single row or column.
  - NeedlemanWunsch     : engine computing alignments/scores with the above.

Rows of the matrix are indexed by seq1 and columns by seq2.  Moving left
inserts a symbol of seq2, moving up deletes a symbol of seq1, and moving
diagonally substitutes one for the other.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from .dp_core import AlignmentResult, PairwiseAlignmentAlgorithm, traceback_alignment
from .scoring import ScoringScheme, checked_scores


def fill_global_matrix(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: ScoringScheme,
) -> NDArray[np.int64]:
    """
    Fill the Needleman-Wunsch score matrix.

    Parameters
    ----------
    seq1, seq2 : sequence
        Sequences to align (rows, columns).
    scoring : ScoringScheme
        Substitution, insertion and deletion scores.

    Returns
    -------
    M : (n+1, m+1) array of int64
        M[i, j] is the best score aligning seq1[:i] with seq2[:j].
        Row 0 and column 0 hold cumulative insertion/deletion costs.
    """
    scoring = checked_scores(scoring)
    n, m = len(seq1), len(seq2)
    M = np.zeros((n + 1, m + 1), dtype=np.int64)

    # first row: seq2 prefix against gaps
    for j in range(1, m + 1):
        M[0, j] = M[0, j - 1] + scoring.insertion(seq2[j - 1])

    for i in range(1, n + 1):
        a = seq1[i - 1]
        # first column: seq1 prefix against gaps
        M[i, 0] = M[i - 1, 0] + scoring.deletion(a)

        for j in range(1, m + 1):
            b = seq2[j - 1]
            ins = M[i, j - 1] + scoring.insertion(b)
            sub = M[i - 1, j - 1] + scoring.substitution(a, b)
            dele = M[i - 1, j] + scoring.deletion(a)
            M[i, j] = max(ins, sub, dele)

    return M


def global_score_linear(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: ScoringScheme,
) -> int:
    """
    Optimal global score in O(min(n, m)) space.

    Sweeps the matrix column by column when seq1 is the shorter sequence
    and row by row otherwise, so the live vector has min(n, m) + 1 cells.
    `tmp` holds the cell being computed until the cell above/left of it in
    the vector is no longer needed.
    """
    scoring = checked_scores(scoring)
    rows, cols = len(seq1) + 1, len(seq2) + 1

    if rows <= cols:
        # columnwise
        array = np.zeros(rows, dtype=np.int64)
        for r in range(1, rows):
            array[r] = array[r - 1] + scoring.deletion(seq1[r - 1])

        for c in range(1, cols):
            b = seq2[c - 1]
            tmp = array[0] + scoring.insertion(b)
            for r in range(1, rows):
                a = seq1[r - 1]
                ins = array[r] + scoring.insertion(b)
                sub = array[r - 1] + scoring.substitution(a, b)
                dele = tmp + scoring.deletion(a)
                array[r - 1] = tmp
                tmp = max(ins, sub, dele)
            array[rows - 1] = tmp

        return int(array[rows - 1])

    # rowwise
    array = np.zeros(cols, dtype=np.int64)
    for c in range(1, cols):
        array[c] = array[c - 1] + scoring.insertion(seq2[c - 1])

    for r in range(1, rows):
        a = seq1[r - 1]
        tmp = array[0] + scoring.deletion(a)
        for c in range(1, cols):
            b = seq2[c - 1]
            ins = tmp + scoring.insertion(b)
            sub = array[c - 1] + scoring.substitution(a, b)
            dele = array[c] + scoring.deletion(a)
            array[c - 1] = tmp
            tmp = max(ins, sub, dele)
        array[cols - 1] = tmp

    return int(array[cols - 1])


class NeedlemanWunsch(PairwiseAlignmentAlgorithm):
    """
    Global pairwise alignment.

    Ties between optimal paths are broken during traceback by preferring
    insertion, then substitution, then deletion.

    Usage:
        nw = NeedlemanWunsch(BasicScoringScheme(2, -1, -1), "GATTACA", "GCATGCA")
        score = nw.get_score()
        alignment = nw.get_alignment()
    """

    def _compute_alignment(self) -> AlignmentResult:
        matrix = fill_global_matrix(self._seq1, self._seq2, self._scoring)
        n, m = len(self._seq1), len(self._seq2)
        return traceback_alignment(
            self._seq1,
            self._seq2,
            matrix,
            self._scoring,
            self._tags,
            self._use_match_tag,
            start=(n, m),
        )

    def _compute_score(self) -> int:
        return global_score_linear(self._seq1, self._seq2, self._scoring)
