"""
validation.py — independent baselines and checks for pairalign

This module provides a plain-list Needleman-Wunsch score (naive_global_score),
a brute-force local score (naive_local_score), and helpers for randomized
regression tests.

The goals are:

  1. Verify that both computation modes of each engine (full matrix and
     linear space) agree with each other and with the naive baselines.

  2. Verify that a reconstructed alignment is well formed: equal row
     lengths, no double gaps, gap-free rows reproducing the inputs, and a
     score that can be recomputed column by column.

This module is independent of the DP modules: naive_global_score
reimplements the recurrence on nested lists so that bugs in the numpy
implementation cannot mask each other during testing.
"""

from typing import Any, Sequence, Tuple, Type

import numpy as np

from . import default
from .dp_core import AlignmentResult, PairwiseAlignmentAlgorithm
from .needleman_wunsch import NeedlemanWunsch
from .scoring import ScoringScheme


# ---------------------------------------------------------------------------
# Naive baselines
# ---------------------------------------------------------------------------

def naive_global_score(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: ScoringScheme,
) -> int:
    """
    Global alignment score on nested lists.
    """
    n, m = len(seq1), len(seq2)
    F = [[0] * (m + 1) for _ in range(n + 1)]

    for j in range(1, m + 1):
        F[0][j] = F[0][j - 1] + scoring.insertion(seq2[j - 1])
    for i in range(1, n + 1):
        F[i][0] = F[i - 1][0] + scoring.deletion(seq1[i - 1])

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            F[i][j] = max(
                F[i - 1][j - 1] + scoring.substitution(seq1[i - 1], seq2[j - 1]),
                F[i - 1][j] + scoring.deletion(seq1[i - 1]),
                F[i][j - 1] + scoring.insertion(seq2[j - 1]),
            )
    return F[n][m]


def naive_local_score(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: ScoringScheme,
) -> int:
    """
    Brute-force local alignment score.

    The local score is the best global score over all pairs of contiguous
    substrings, including the empty pair (score 0):

        S_local(A, B) = max(0, max_{i<=j, k<=l} NW(A[i:j], B[k:l]))

    Runs in O(n^3 m^3); only meant for short test sequences.
    """
    n, m = len(seq1), len(seq2)
    best = 0
    for i in range(n + 1):
        for j in range(i, n + 1):
            for k in range(m + 1):
                for l in range(k, m + 1):
                    score = naive_global_score(seq1[i:j], seq2[k:l], scoring)
                    if score > best:
                        best = score
    return best


def check_full_vs_linear(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: ScoringScheme,
    algorithm: Type[PairwiseAlignmentAlgorithm] = NeedlemanWunsch,
) -> Tuple[int, int]:
    """
    Compare the full-matrix score to the linear-space score.

    Two separate engines are used so neither result comes from a cache.

    Returns
    -------
    full_score : int
        Score of get_alignment().
    linear_score : int
        Score of get_score() on a fresh engine.
    """
    full = algorithm(scoring, seq1, seq2).get_alignment().score
    linear = algorithm(scoring, seq1, seq2).get_score()
    return full, linear


# ---------------------------------------------------------------------------
# Alignment validity helpers
# ---------------------------------------------------------------------------

def recompute_score(
    result: AlignmentResult,
    scoring: ScoringScheme,
    gap_character: Any = default.GAP_CHARACTER,
) -> int:
    """
    Score an alignment column by column.
    """
    total = 0
    for a, _, b in result.columns():
        if a == gap_character:
            total += scoring.insertion(b)
        elif b == gap_character:
            total += scoring.deletion(a)
        else:
            total += scoring.substitution(a, b)
    return total


def _contains_run(seq: Tuple[Any, ...], run: Tuple[Any, ...]) -> bool:
    k = len(run)
    return any(seq[i:i + k] == run for i in range(len(seq) - k + 1))


def check_alignment_validity(
    result: AlignmentResult,
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: ScoringScheme,
    local: bool = False,
    gap_character: Any = default.GAP_CHARACTER,
) -> Tuple[bool, str]:
    """
    Check that an AlignmentResult is a valid alignment of seq1 and seq2.

    Verifies that the result:
    - Has rows of the same length
    - Has no column with a gap in both rows
    - Reproduces seq1 and seq2 once gaps are removed (global), or
      contiguous pieces of them (local)
    - Reports a score equal to the score recomputed from its columns

    Returns
    -------
    valid : bool
        True if the alignment passes all checks.
    message : str
        Description of what was checked or what failed.
    """
    aln1, aln2 = result.gapped_seq1, result.gapped_seq2

    if len(aln1) != len(aln2):
        return False, f"Length mismatch: gapped_seq1={len(aln1)}, gapped_seq2={len(aln2)}"

    for i, (a, b) in enumerate(zip(aln1, aln2)):
        if a == gap_character and b == gap_character:
            return False, f"Double gap found in alignment at position {i}"

    ungapped1 = tuple(a for a in aln1 if a != gap_character)
    ungapped2 = tuple(b for b in aln2 if b != gap_character)
    if local:
        if not _contains_run(tuple(seq1), ungapped1):
            return False, "gapped_seq1 is not a contiguous piece of seq1"
        if not _contains_run(tuple(seq2), ungapped2):
            return False, "gapped_seq2 is not a contiguous piece of seq2"
    else:
        if ungapped1 != tuple(seq1):
            return False, "gapped_seq1 does not reproduce seq1"
        if ungapped2 != tuple(seq2):
            return False, "gapped_seq2 does not reproduce seq2"

    computed = recompute_score(result, scoring, gap_character)
    if computed != result.score:
        return False, f"Score mismatch: computed {computed}, reported {result.score}"

    return True, f"Valid alignment of length {len(aln1)}"


# ---------------------------------------------------------------------------
# Random sequence generation
# ---------------------------------------------------------------------------

def random_sequence(
    length: int,
    rng: np.random.Generator,
    alphabet: Sequence[str] = default.BASES,
) -> str:
    """
    Generate a random string of a given length over `alphabet`.
    """
    return "".join(rng.choice(np.asarray(alphabet), size=length))


def mutate_sequence(
    seq: Sequence[Any],
    rng: np.random.Generator,
    sub_rate: float = 0.1,
    indel_rate: float = 0.05,
    alphabet: Sequence[Any] = default.BASES,
):
    """
    Derive a related sequence by random point edits.

    Each position of `seq` is independently deleted with probability
    `indel_rate`; a surviving symbol is replaced by a different symbol of
    `alphabet` with probability `sub_rate`, and a random symbol is inserted
    after it with probability `indel_rate`.

    Returns a string when `seq` is a string, a tuple otherwise.
    """
    symbols = [s.item() if isinstance(s, np.generic) else s for s in alphabet]
    events = rng.random((len(seq), 3))
    edited = []

    for symbol, (p_del, p_sub, p_ins) in zip(seq, events):
        if p_del < indel_rate:
            continue
        if p_sub < sub_rate:
            choices = [s for s in symbols if s != symbol]
            symbol = choices[rng.integers(len(choices))]
        edited.append(symbol)
        if p_ins < indel_rate:
            edited.append(symbols[rng.integers(len(symbols))])

    if isinstance(seq, str):
        return "".join(str(s) for s in edited)
    return tuple(edited)
