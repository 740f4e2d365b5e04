from __future__ import annotations

import io

import pytest

from kmerprofile import InvalidArgumentError, IOFailureError, Kmer, KmerFreq


def test_default_pair_is_missing_kmer_with_zero():
    pair = KmerFreq()
    assert pair.kmer == Kmer("_")
    assert pair.frequency == 0


def test_string_kmer_is_wrapped():
    assert KmerFreq("AC", 2).kmer == Kmer("AC")


def test_negative_frequency_rejected():
    with pytest.raises(InvalidArgumentError):
        KmerFreq("AC", -1)
    pair = KmerFreq("AC", 1)
    with pytest.raises(InvalidArgumentError):
        pair.frequency = -5
    assert pair.frequency == 1


def test_copy_is_independent():
    pair = KmerFreq("AC", 1)
    other = pair.copy()
    other.frequency = 9
    assert pair.frequency == 1
    assert other.kmer == pair.kmer


def test_sort_order_frequency_then_kmer():
    """Verify pairs sort by decreasing frequency and alphabetical kmer on ties."""
    pairs = [KmerFreq("GG", 2), KmerFreq("AA", 5), KmerFreq("CC", 2)]
    assert [p.kmer.text for p in sorted(pairs)] == ["AA", "CC", "GG"]


def test_text_primitives():
    pair = KmerFreq("A_", 7)
    assert pair.to_text() == "A_ 7"
    assert KmerFreq.from_text("A_ 7\n") == pair


@pytest.mark.parametrize("line", ["AC", "AC x", "AC -2", "AC 1 x", ""])
def test_from_text_rejects_malformed_lines(line):
    with pytest.raises(IOFailureError):
        KmerFreq.from_text(line)


def test_from_text_splits_on_last_space():
    """Verify the frequency is the last field, whatever the kmer holds."""
    assert KmerFreq.from_text("A C 3") == KmerFreq("A C", 3)
    assert KmerFreq.from_text(" 3\n") == KmerFreq("", 3)
    assert KmerFreq.from_text("AC 1 2") == KmerFreq("AC 1", 2)
    for pair in (KmerFreq("", 4), KmerFreq("G T ", 2)):
        assert KmerFreq.from_text(pair.to_text()) == pair


def test_binary_primitives_round_trip_in_sequence():
    buf = io.BytesIO()
    KmerFreq("ACG", 3).write_binary(buf)
    KmerFreq("T", 10**10).write_binary(buf)
    buf.seek(0)
    assert KmerFreq.read_binary(buf) == KmerFreq("ACG", 3)
    assert KmerFreq.read_binary(buf) == KmerFreq("T", 10**10)


def test_binary_short_read_fails():
    buf = io.BytesIO()
    KmerFreq("ACG", 3).write_binary(buf)
    truncated = io.BytesIO(buf.getvalue()[:-2])
    with pytest.raises(IOFailureError):
        KmerFreq.read_binary(truncated)
