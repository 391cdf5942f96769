"""
aligners.py — one-call alignment helpers

Each function builds an engine, binds the scoring scheme (the default DNA
scheme from pairalign.default when none is given), loads the sequences and
returns the alignment or the score.  Use the engine classes directly to
reuse cached results across calls.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from .default import default_scoring
from .dp_core import AlignmentResult, AlignmentTags
from .needleman_wunsch import NeedlemanWunsch
from .scoring import ScoringScheme
from .smith_waterman import SmithWaterman


def align_global(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: Optional[ScoringScheme] = None,
    tags: Optional[AlignmentTags] = None,
) -> AlignmentResult:
    """
    Optimal global (Needleman-Wunsch) alignment of seq1 and seq2.

    Parameters
    ----------
    seq1, seq2 : sequence
        Sequences to align.
    scoring : ScoringScheme, optional
        Defaults to pairalign.default.default_scoring().
    tags : AlignmentTags, optional
        Output symbols; defaults to pairalign.default constants.
    """
    if scoring is None:
        scoring = default_scoring()
    return NeedlemanWunsch(scoring, seq1, seq2, tags=tags).get_alignment()


def align_local(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: Optional[ScoringScheme] = None,
    tags: Optional[AlignmentTags] = None,
) -> AlignmentResult:
    """
    Optimal local (Smith-Waterman) alignment of seq1 and seq2.

    See align_global for the parameters.
    """
    if scoring is None:
        scoring = default_scoring()
    return SmithWaterman(scoring, seq1, seq2, tags=tags).get_alignment()


def score_global(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: Optional[ScoringScheme] = None,
) -> int:
    """Optimal global score, computed in linear space."""
    if scoring is None:
        scoring = default_scoring()
    return NeedlemanWunsch(scoring, seq1, seq2).get_score()


def score_local(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    scoring: Optional[ScoringScheme] = None,
) -> int:
    """Optimal local score, computed in linear space."""
    if scoring is None:
        scoring = default_scoring()
    return SmithWaterman(scoring, seq1, seq2).get_score()
