"""
default.py — Default parameters for pairalign

Provides the default tag-line symbols, the gap symbol, and a DNA alphabet
with a +2/-1/-1 scoring scheme that is used throughout examples and tests.
"""

import numpy as np

# Tag line and gap symbols
MATCH_TAG = "|"
APPROXIMATE_MATCH_TAG = "+"
MISMATCH_TAG = " "
GAP_TAG = " "
GAP_CHARACTER = "-"

# DNA alphabet
BASES = np.array(["A", "C", "G", "T"])
ALPHABET_TO_INDEX = {b: i for i, b in enumerate(BASES)}

# Substitution matrix: +2 for match, -1 for mismatch
SCORE_MATRIX = np.full((4, 4), -1, dtype=np.int64)
np.fill_diagonal(SCORE_MATRIX, 2)

## Linear gap penalty (per symbol, insertion and deletion alike)
GAP_SCORE = -1


def default_tags():
    """
    Return an AlignmentTags built from the module-level tag constants.

    Usage:
        nw = NeedlemanWunsch(tags=default_tags())"""
    from .dp_core import AlignmentTags

    return AlignmentTags(
        match=MATCH_TAG,
        approximate_match=APPROXIMATE_MATCH_TAG,
        mismatch=MISMATCH_TAG,
        gap=GAP_TAG,
        gap_character=GAP_CHARACTER,
    )


def default_scoring():
    """
    Convenience helper returning the default DNA MatrixScoringScheme.
    """
    from .scoring import MatrixScoringScheme

    return MatrixScoringScheme(
        score_matrix=SCORE_MATRIX,
        alphabet_to_index=ALPHABET_TO_INDEX,
        gap=GAP_SCORE,
    )
