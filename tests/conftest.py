"""
conftest.py — Shared pytest fixtures for the pairalign test suite

Provides common scoring schemes, tag sets, and random number generators
used across all test modules.
"""

import pytest
import numpy as np

from pairalign.dp_core import AlignmentTags
from pairalign.scoring import BasicScoringScheme, MatrixScoringScheme
from pairalign.validation import random_sequence
from pairalign import default


# ---------------------------------------------------------------------------
# Scoring fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def basic_scoring() -> BasicScoringScheme:
    """+2 match, -1 mismatch, -1 per gap symbol."""
    return BasicScoringScheme(match=2, mismatch=-1, gap=-1)


@pytest.fixture
def dna_scoring() -> MatrixScoringScheme:
    """Default DNA matrix scheme (same scores as basic_scoring, fixed alphabet)."""
    return default.default_scoring()


@pytest.fixture
def partial_scoring() -> MatrixScoringScheme:
    """Two-letter alphabet where A/G substitutions score positively."""
    matrix = np.array([[2, 1], [1, 2]])
    return MatrixScoringScheme(matrix, {"A": 0, "G": 1}, gap=-2)


@pytest.fixture
def word_tags() -> AlignmentTags:
    """Multi-character tags, easy to tell apart in assertions."""
    return AlignmentTags(
        match="==",
        approximate_match="~~",
        mismatch="!=",
        gap="__",
        gap_character="-",
    )


# ---------------------------------------------------------------------------
# Random number generator fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(888)


@pytest.fixture
def rng_alt():
    """Alternative seed for diversity in randomized tests."""
    return np.random.default_rng(123)


# ---------------------------------------------------------------------------
# Sequence generation helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def random_dna_factory():
    """Factory fixture returning a function to generate random DNA strings."""
    def _random_dna(length: int, rng: np.random.Generator) -> str:
        return random_sequence(length, rng)
    return _random_dna
