from __future__ import annotations

import copy

import pytest

from kmerprofile import GrowthPolicy, Kmer, KmerFreq, OutOfRangeError, Profile


def test_empty_profile_defaults():
    p = Profile()
    assert p.profile_id == "unknown"
    assert p.size == 0 and len(p) == 0
    assert p.capacity == 10


@pytest.mark.parametrize("size", [0, 1, 10, 25, 2000])
def test_sized_profile_holds_missing_kmers(size):
    """Verify a sized profile has `size` pairs of the all-missing kmer with frequency 0."""
    p = Profile(size)
    assert p.size == size
    assert p.capacity >= size
    assert all(pair.kmer == Kmer.of_size(1) and pair.frequency == 0 for pair in p)


@pytest.mark.parametrize("size", [-1, 2001])
def test_sized_profile_out_of_range(size):
    with pytest.raises(OutOfRangeError):
        Profile(size)


def test_append_merges_by_kmer(make_profile, as_tuples):
    """Verify appending an existing kmer adds frequencies instead of duplicating."""
    p = make_profile([("A", 2), ("B", 3), ("A", 1)])
    assert as_tuples(p) == [("A", 3), ("B", 3)]


def test_append_copies_the_pair():
    p = Profile()
    pair = KmerFreq("AC", 1)
    p.append(pair)
    pair.frequency = 50
    assert p[0].frequency == 1


def test_iadd_with_pair(as_tuples):
    p = Profile()
    p += KmerFreq("AC", 1)
    p += KmerFreq("AC", 2)
    assert as_tuples(p) == [("AC", 3)]


def test_append_grows_in_blocks(make_profile):
    p = make_profile([(f"{i:03d}", 1) for i in range(11)])
    assert p.size == 11
    assert p.capacity == 20


def test_append_fails_at_max_capacity_and_keeps_state(make_profile, as_tuples):
    policy = GrowthPolicy(initial_capacity=2, block_size=2, max_capacity=4)
    p = make_profile([("AA", 1), ("CC", 1), ("GG", 1), ("TT", 1)], policy=policy)
    with pytest.raises(OutOfRangeError):
        p.append(KmerFreq("AT", 1))
    assert as_tuples(p) == [("AA", 1), ("CC", 1), ("GG", 1), ("TT", 1)]
    # merging into an existing kmer still works when full
    p.append(KmerFreq("AA", 4))
    assert p[0].frequency == 5


def test_index_access_is_bounds_checked(make_profile):
    p = make_profile([("AC", 1)])
    assert p.at(0) is p[0]
    for bad in (-1, 1):
        with pytest.raises(OutOfRangeError):
            p.at(bad)
        with pytest.raises(OutOfRangeError):
            p[bad] = KmerFreq("GG", 1)


def test_mutable_access_updates_in_place(make_profile):
    p = make_profile([("AC", 1)])
    p[0].frequency = 8
    p.at(0).frequency += 1
    assert p[0].frequency == 9
    p[0] = KmerFreq("GT", 4)
    assert p[0] == KmerFreq("GT", 4)


def test_normalize_example(make_profile, as_tuples):
    """Verify the documented normalize example merges into first-seen order."""
    p = make_profile([("Ct", 5), ("hG", 4), ("nG", 1), ("cT", 4)])
    p.normalize("ACGT")
    assert as_tuples(p) == [("CT", 9), ("_G", 5)]


def test_normalize_is_idempotent(make_profile):
    p = make_profile([("ac", 1), ("Ax", 2), ("AC", 3), ("a_", 4), ("gg", 1)])
    p.normalize("ACGT")
    once = p.copy()
    p.normalize("ACGT")
    assert p == once


def test_normalize_matches_appending_canonical_pairs(make_profile):
    raw = [("tT", 2), ("ga", 1), ("TT", 3), ("Rt", 7), ("GA", 1), ("nt", 2)]
    p = make_profile(raw)
    p.normalize("ACGT")

    expected = Profile()
    for text, freq in raw:
        expected.append(KmerFreq(Kmer(text).normalize("ACGT"), freq))
    assert p == expected


def test_normalize_uses_configured_alphabet(make_profile, as_tuples):
    from kmerprofile.core.config import set_valid_nucleotides

    set_valid_nucleotides("ACGTN")
    try:
        p = make_profile([("an", 1), ("AX", 1)])
        p.normalize()
        assert as_tuples(p) == [("AN", 1), ("A_", 1)]
    finally:
        set_valid_nucleotides("ACGT")


def test_copy_is_deep(make_profile):
    """Verify copies never share pairs or storage with the source."""
    p = make_profile([("AC", 1), ("GT", 2)], profile_id="src")
    for clone in (p.copy(), copy.copy(p), copy.deepcopy(p)):
        assert clone == p
        clone[0].frequency = 100
        clone.append(KmerFreq("TT", 1))
        assert p[0].frequency == 1
        assert p.size == 2


def test_assign_replaces_content(make_profile):
    target = make_profile([(f"{i:02d}", 1) for i in range(16)], profile_id="old")
    source = make_profile([("GT", 2)], profile_id="new")
    target.assign(source)
    assert target == source
    assert target.capacity == source.capacity
    target[0].frequency = 7
    assert source[0].frequency == 2
