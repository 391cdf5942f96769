"""
test_needleman_wunsch.py — Tests for global alignment

Fixed cases with known alignments, tie-breaking order, tag lines, and
randomized cross-checks between the full-matrix mode, the linear-space
mode and the naive list-based baseline.
"""

import pytest

from pairalign.needleman_wunsch import (
    NeedlemanWunsch,
    fill_global_matrix,
    global_score_linear,
)
from pairalign.scoring import BasicScoringScheme
from pairalign.validation import (
    check_alignment_validity,
    check_full_vs_linear,
    naive_global_score,
)


class TestKnownAlignments:
    """Alignments whose optimum is unique and easy to verify by hand."""

    def test_integer_sequences_gap_out_three_and_six(self, basic_scoring):
        nw = NeedlemanWunsch(basic_scoring)
        nw.load_sequences([1, 2, 3, 4, 5, 6, 7], [1, 2, 4, 5, 7])
        result = nw.get_alignment()

        assert result.gapped_seq1 == (1, 2, 3, 4, 5, 6, 7)
        assert result.gapped_seq2 == (1, 2, "-", 4, 5, "-", 7)
        assert result.tag_line == ("|", "|", " ", "|", "|", " ", "|")
        assert result.score == 2 * 5 + (-1) * 2 == 8

    def test_integer_sequences_custom_tags(self, basic_scoring, word_tags):
        nw = NeedlemanWunsch(basic_scoring, [1, 2, 3, 4, 5, 6, 7], [1, 2, 4, 5, 7], tags=word_tags)
        result = nw.get_alignment()
        assert result.tag_line == ("==", "==", "__", "==", "==", "__", "==")
        assert nw.get_score() == 8

    def test_empty_second_sequence(self, basic_scoring):
        nw = NeedlemanWunsch(basic_scoring, "ACGT", "")
        result = nw.get_alignment()
        assert result.score == sum(basic_scoring.deletion(x) for x in "ACGT") == -4
        assert result.gapped_seq1 == tuple("ACGT")
        assert result.gapped_seq2 == ("-",) * 4
        assert result.tag_line == (" ",) * 4

    def test_empty_second_sequence_linear(self, basic_scoring):
        assert global_score_linear("ACGT", "", basic_scoring) == -4

    def test_empty_first_sequence(self, basic_scoring):
        result = NeedlemanWunsch(basic_scoring, "", "ACG").get_alignment()
        assert result.score == -3
        assert result.gapped_seq1 == ("-",) * 3
        assert result.gapped_seq2 == tuple("ACG")
        assert global_score_linear("", "ACG", basic_scoring) == -3

    def test_both_empty(self, basic_scoring):
        result = NeedlemanWunsch(basic_scoring, "", "").get_alignment()
        assert len(result) == 0
        assert result.score == 0
        assert global_score_linear("", "", basic_scoring) == 0

    def test_single_mismatch(self, basic_scoring, word_tags):
        result = NeedlemanWunsch(basic_scoring, "A", "T", tags=word_tags).get_alignment()
        assert result.gapped_seq1 == ("A",)
        assert result.gapped_seq2 == ("T",)
        assert result.tag_line == ("!=",)
        assert result.score == -1

    def test_diagonal_step_scores_emitted_pair(self, basic_scoring):
        """The substitution checked during traceback is the pair written out."""
        result = NeedlemanWunsch(basic_scoring, "CA", "A").get_alignment()
        assert result.gapped_seq1 == ("C", "A")
        assert result.gapped_seq2 == ("-", "A")
        assert result.tag_line == (" ", "|")
        assert result.score == 1

    def test_matrix_boundaries(self, basic_scoring):
        M = fill_global_matrix("AC", "GTA", basic_scoring)
        assert M.shape == (3, 4)
        assert list(M[0]) == [0, -1, -2, -3]
        assert list(M[:, 0]) == [0, -1, -2]
        assert M[2, 3] == global_score_linear("AC", "GTA", basic_scoring)


class TestTieBreaking:
    """When several paths are optimal: insertion, then substitution, then deletion."""

    def test_insertion_preferred_over_substitution(self):
        scoring = BasicScoringScheme(match=1, mismatch=-1, gap=-1)
        result = NeedlemanWunsch(scoring, "A", "AA").get_alignment()
        # both ("A-", "AA") and ("-A", "AA") score 0; the gap is taken last
        assert result.gapped_seq1 == ("A", "-")
        assert result.gapped_seq2 == ("A", "A")
        assert result.score == 0

    def test_substitution_preferred_over_deletion(self):
        scoring = BasicScoringScheme(match=1, mismatch=-1, gap=-1)
        result = NeedlemanWunsch(scoring, "AA", "A").get_alignment()
        assert result.gapped_seq1 == ("A", "A")
        assert result.gapped_seq2 == ("-", "A")
        assert result.score == 0


class TestTagLine:
    """Tag line content depends on the scheme's partial-match support."""

    def test_partial_match_writes_symbol_and_approximate_tag(self, partial_scoring):
        nw = NeedlemanWunsch(partial_scoring, "AG", "AA")
        assert not nw.use_match_tag
        result = nw.get_alignment()
        assert result.tag_line == ("A", "+")
        assert result.score == 3

    def test_basic_scheme_uses_match_tag(self, basic_scoring):
        nw = NeedlemanWunsch(basic_scoring, "AG", "AG")
        assert nw.use_match_tag
        assert nw.get_alignment().tag_line == ("|", "|")


class TestSelfAlignment:
    """A sequence aligned to itself is the ungapped diagonal."""

    @pytest.mark.parametrize("length", [1, 5, 17, 40])
    def test_self_alignment(self, length, rng, random_dna_factory, dna_scoring):
        seq = random_dna_factory(length, rng)
        result = NeedlemanWunsch(dna_scoring, seq, seq).get_alignment()
        assert result.score == sum(dna_scoring.substitution(x, x) for x in seq)
        assert "-" not in result.gapped_seq1
        assert "-" not in result.gapped_seq2
        assert result.gapped_seq1 == tuple(seq)


class TestFullVsLinear:
    """Full-matrix and linear-space scores agree, on both sweep axes."""

    FIXED_CASES = [
        ("ACGT", "ACGT", "identical sequences"),
        ("AAAA", "TTTT", "all mismatches"),
        ("ACGTACGT", "ACGT", "seq1 longer (rowwise sweep)"),
        ("ACGT", "ACGTACGT", "seq2 longer (columnwise sweep)"),
        ("GATTACA", "GCATGCA", "classic example"),
        ("A", "", "single symbol against empty"),
    ]

    @pytest.mark.parametrize("seq1,seq2,desc", FIXED_CASES)
    def test_fixed_cases(self, seq1, seq2, desc, basic_scoring):
        full, linear = check_full_vs_linear(seq1, seq2, basic_scoring)
        assert full == linear, f"Mismatch on '{desc}': full={full}, linear={linear}"
        assert full == naive_global_score(seq1, seq2, basic_scoring)

    def test_random_asymmetric(self, rng, random_dna_factory, dna_scoring):
        for n1, n2 in [(10, 20), (30, 15), (5, 50), (12, 12)]:
            seq1 = random_dna_factory(n1, rng)
            seq2 = random_dna_factory(n2, rng)
            full, linear = check_full_vs_linear(seq1, seq2, dna_scoring)
            assert full == linear, f"Mismatch on n1={n1}, n2={n2}"
            assert full == naive_global_score(seq1, seq2, dna_scoring)

    def test_random_partial_scheme(self, rng_alt, partial_scoring):
        for n1, n2 in [(8, 13), (13, 8)]:
            seq1 = "".join(rng_alt.choice(["A", "G"], size=n1))
            seq2 = "".join(rng_alt.choice(["A", "G"], size=n2))
            full, linear = check_full_vs_linear(seq1, seq2, partial_scoring)
            assert full == linear


class TestAlignmentValidity:
    """Reconstructed alignments are well formed and score what they report."""

    def test_ungapped_recovers_original(self, basic_scoring):
        seq1, seq2 = "ACGTACGT", "ACGACG"
        result = NeedlemanWunsch(basic_scoring, seq1, seq2).get_alignment()
        assert "".join(s for s in result.gapped_seq1 if s != "-") == seq1
        assert "".join(s for s in result.gapped_seq2 if s != "-") == seq2

    def test_random_alignment_validity(self, rng, random_dna_factory, dna_scoring):
        for _ in range(20):
            seq1 = random_dna_factory(int(rng.integers(0, 25)), rng)
            seq2 = random_dna_factory(int(rng.integers(0, 25)), rng)
            result = NeedlemanWunsch(dna_scoring, seq1, seq2).get_alignment()
            valid, msg = check_alignment_validity(result, seq1, seq2, dna_scoring)
            assert valid, msg
            assert len(result) >= max(len(seq1), len(seq2))
