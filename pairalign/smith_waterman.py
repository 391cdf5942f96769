"""
smith_waterman.py — local alignment (Smith-Waterman, linear gaps)

Same recurrence as Needleman-Wunsch with three changes:

  * row 0 and column 0 are 0, so an alignment may start anywhere;
  * every cell is clipped at 0, so a new alignment may start at any cell;
  * the score is the highest cell of the matrix, not the corner.
"""

from __future__ import annotations

from typing import Any, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .dp_core import AlignmentResult, PairwiseAlignmentAlgorithm, traceback_alignment
from .scoring import ScoringScheme, checked_scores


def fill_local_matrix(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: ScoringScheme,
) -> Tuple[NDArray[np.int64], int, int]:
    """
    Fill the Smith-Waterman score matrix.

    Returns
    -------
    M : (n+1, m+1) array of int64
        Clipped local scores.
    max_row, max_col : int
        First cell, in row-major order, holding the maximum score.
        (0, 0) when no cell scores above 0.
    """
    scoring = checked_scores(scoring)
    n, m = len(seq1), len(seq2)
    M = np.zeros((n + 1, m + 1), dtype=np.int64)

    max_row = max_col = 0
    max_score = 0

    for i in range(1, n + 1):
        a = seq1[i - 1]
        for j in range(1, m + 1):
            b = seq2[j - 1]
            ins = M[i, j - 1] + scoring.insertion(b)
            sub = M[i - 1, j - 1] + scoring.substitution(a, b)
            dele = M[i - 1, j] + scoring.deletion(a)
            M[i, j] = max(ins, sub, dele, 0)

            # strictly greater: ties keep the first cell found
            if M[i, j] > max_score:
                max_score = M[i, j]
                max_row, max_col = i, j

    return M, max_row, max_col


def local_score_linear(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: ScoringScheme,
) -> int:
    """
    Optimal local score in O(min(n, m)) space.

    Same sweep as global_score_linear, with zero boundaries, cells clipped
    at 0 and a running maximum over every cell visited.
    """
    scoring = checked_scores(scoring)
    rows, cols = len(seq1) + 1, len(seq2) + 1
    max_score = 0

    if rows <= cols:
        # columnwise
        array = np.zeros(rows, dtype=np.int64)
        for c in range(1, cols):
            b = seq2[c - 1]
            tmp = 0
            for r in range(1, rows):
                a = seq1[r - 1]
                ins = array[r] + scoring.insertion(b)
                sub = array[r - 1] + scoring.substitution(a, b)
                dele = tmp + scoring.deletion(a)
                array[r - 1] = tmp
                tmp = max(ins, sub, dele, 0)
                if tmp > max_score:
                    max_score = tmp
            array[rows - 1] = tmp
    else:
        # rowwise
        array = np.zeros(cols, dtype=np.int64)
        for r in range(1, rows):
            a = seq1[r - 1]
            tmp = 0
            for c in range(1, cols):
                b = seq2[c - 1]
                ins = tmp + scoring.insertion(b)
                sub = array[c - 1] + scoring.substitution(a, b)
                dele = array[c] + scoring.deletion(a)
                array[c - 1] = tmp
                tmp = max(ins, sub, dele, 0)
                if tmp > max_score:
                    max_score = tmp
            array[cols - 1] = tmp

    return int(max_score)


class SmithWaterman(PairwiseAlignmentAlgorithm):
    """
    Local pairwise alignment.

    The alignment ends at the first maximum-scoring cell (row-major order)
    and starts where the traceback first reaches a zero cell.  When no
    pair of symbols scores positively the result is the empty alignment
    with score 0.
    """

    def _compute_alignment(self) -> AlignmentResult:
        matrix, max_row, max_col = fill_local_matrix(self._seq1, self._seq2, self._scoring)
        return traceback_alignment(
            self._seq1,
            self._seq2,
            matrix,
            self._scoring,
            self._tags,
            self._use_match_tag,
            start=(max_row, max_col),
            local=True,
        )

    def _compute_score(self) -> int:
        return local_score_linear(self._seq1, self._seq2, self._scoring)
