from __future__ import annotations

import pytest

from kmerprofile import InvalidArgumentError, Kmer, OutOfRangeError
from kmerprofile.constants import MAX_KMER_LENGTH, MISSING_NUCLEOTIDE


def test_of_size_is_all_missing():
    """Verify size-based construction fills the kmer with the missing symbol."""
    k = Kmer.of_size(3)
    assert k.text == MISSING_NUCLEOTIDE * 3
    assert k.size() == 3
    assert k.has_missing()


@pytest.mark.parametrize("k", [-1, MAX_KMER_LENGTH + 1])
def test_of_size_rejects_out_of_range(k):
    with pytest.raises(OutOfRangeError):
        Kmer.of_size(k)


def test_long_text_is_truncated():
    k = Kmer("A" * (MAX_KMER_LENGTH + 5))
    assert len(k) == MAX_KMER_LENGTH


def test_fit_truncates_and_pads():
    assert Kmer.fit("ACGT", 2).text == "AC"
    assert Kmer.fit("A", 3).text == "A__"


def test_non_string_text_rejected():
    with pytest.raises(InvalidArgumentError):
        Kmer(42)  # type: ignore[arg-type]


def test_equality_and_alphabetical_order():
    """Verify kmers compare symbol by symbol."""
    assert Kmer("AC") == Kmer("AC")
    assert Kmer("AC") != Kmer("ac")
    assert sorted([Kmer("GT"), Kmer("A_"), Kmer("AC")]) == [Kmer("AC"), Kmer("A_"), Kmer("GT")]
    assert len({Kmer("AC"), Kmer("AC")}) == 1


def test_at_bounds():
    k = Kmer("ACG")
    assert k.at(0) == "A" and k.at(2) == "G"
    with pytest.raises(OutOfRangeError):
        k.at(3)
    with pytest.raises(OutOfRangeError):
        k.at(-1)


def test_normalize_uppercases_and_masks_invalid():
    """Verify invalid symbols become missing and valid ones are uppercased."""
    assert Kmer("aCnT").normalize("ACGT").text == "AC_T"
    assert Kmer("hG").normalize("acgt").text == "_G"


def test_case_helpers_return_new_kmers():
    k = Kmer("AcG")
    assert k.to_upper().text == "ACG"
    assert k.to_lower().text == "acg"
    assert k.text == "AcG"


def test_complementary():
    assert Kmer("ACGT").complementary().text == "TGCA"
    assert Kmer("ANT").complementary("ACGT", "TGCA").text == "T_A"
    with pytest.raises(InvalidArgumentError):
        Kmer("AC").complementary("ACGT", "TG")
