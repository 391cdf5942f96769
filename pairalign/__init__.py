"""
pairalign: pairwise sequence alignment by dynamic programming.
"""

import logging

# =============================================================================
# ALIGNMENT ENGINES
# =============================================================================

from .dp_core import (
    AlignmentResult,
    AlignmentTags,
    CacheState,
    PairwiseAlignmentAlgorithm,
)

from .needleman_wunsch import (
    NeedlemanWunsch,
    fill_global_matrix,
    global_score_linear,
)

from .smith_waterman import (
    SmithWaterman,
    fill_local_matrix,
    local_score_linear,
)

from .aligners import (
    align_global,
    align_local,
    score_global,
    score_local,
)


# =============================================================================
# SCORING SCHEMES AND ERRORS
# =============================================================================

from .scoring import (
    ScoringScheme,
    BasicScoringScheme,
    MatrixScoringScheme,
)

from .errors import (
    AlignmentError,
    AlignmentStateError,
    IncompatibleScoringSchemeError,
    InvalidScoringSchemeError,
)

from .default import default_scoring, default_tags

logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    # Engines
    "AlignmentResult",
    "AlignmentTags",
    "CacheState",
    "PairwiseAlignmentAlgorithm",
    "NeedlemanWunsch",
    "SmithWaterman",
    # DP functions
    "fill_global_matrix",
    "global_score_linear",
    "fill_local_matrix",
    "local_score_linear",
    # One-call helpers
    "align_global",
    "align_local",
    "score_global",
    "score_local",
    # Scoring
    "ScoringScheme",
    "BasicScoringScheme",
    "MatrixScoringScheme",
    "default_scoring",
    "default_tags",
    # Errors
    "AlignmentError",
    "AlignmentStateError",
    "IncompatibleScoringSchemeError",
    "InvalidScoringSchemeError",
]
