from __future__ import annotations

import io

import pytest

from kmerprofile import GrowthPolicy, InvalidArgumentError, IOFailureError, KmerFreq, OutOfRangeError, Profile
from kmerprofile.constants import MAGIC_STRING_B, MAGIC_STRING_T
from kmerprofile.profile import ProfileFormat


@pytest.fixture
def sample(make_profile) -> Profile:
    p = make_profile([("CT", 9), ("_G", 5), ("AA", 5), ("GT", 1)], profile_id="Homo sapiens")
    p.sort()
    return p


@pytest.mark.parametrize("mode", ["t", "b", ProfileFormat.TEXT, ProfileFormat.BINARY])
def test_save_load_round_trip(tmp_path, sample, mode):
    """Verify save/load reproduces identifier and ordered pairs in both formats."""
    path = tmp_path / "sample.prf"
    sample.save(path, mode)
    loaded = Profile()
    loaded.load(path)
    assert loaded == sample


def test_text_file_layout(tmp_path, sample):
    path = tmp_path / "sample.prf"
    sample.save(path, "t")
    assert path.read_text(encoding="utf-8").splitlines() == [
        MAGIC_STRING_T,
        "Homo sapiens",
        "4",
        "CT 9",
        "AA 5",
        "_G 5",
        "GT 1",
    ]


def test_binary_file_starts_with_magic(tmp_path, sample):
    path = tmp_path / "sample.bin"
    sample.save(path, "b")
    assert path.read_bytes().startswith(MAGIC_STRING_B.encode() + b"\n")


def test_unknown_save_mode(tmp_path, sample):
    with pytest.raises(InvalidArgumentError):
        sample.save(tmp_path / "x.prf", "z")


def test_save_to_unwritable_location_raises_io_failure(tmp_path, sample):
    with pytest.raises(IOFailureError):
        sample.save(tmp_path / "missing_dir" / "x.prf", "t")


def test_load_discards_previous_content(tmp_path, make_profile, sample):
    path = tmp_path / "sample.prf"
    sample.save(path)
    target = make_profile([("TTTT", 40), ("GGGG", 1)], profile_id="old")
    target.load(path)
    assert target == sample


def test_load_corrupted_magic_leaves_profile_empty(tmp_path, sample, make_profile):
    """Verify a bad magic string raises InvalidArgumentError and empties the profile."""
    path = tmp_path / "bad.prf"
    sample.save(path, "t")
    content = path.read_text(encoding="utf-8").replace(MAGIC_STRING_T, "MP-KMER-X-9.9", 1)
    path.write_text(content, encoding="utf-8")

    target = make_profile([("AC", 1)], profile_id="keep-me?")
    with pytest.raises(InvalidArgumentError):
        target.load(path)
    assert target.size == 0
    assert target.profile_id == "unknown"


def test_load_missing_file(tmp_path):
    p = Profile()
    with pytest.raises(IOFailureError):
        p.load(tmp_path / "nope.prf")
    assert p.size == 0


@pytest.mark.parametrize("count", ["-1", "2001"])
def test_load_count_out_of_range(tmp_path, count):
    path = tmp_path / "count.prf"
    path.write_text(f"{MAGIC_STRING_T}\nid\n{count}\nAC 1\n", encoding="utf-8")
    p = Profile()
    with pytest.raises(OutOfRangeError):
        p.load(path)
    assert p.size == 0


def test_load_count_respects_policy(tmp_path, sample):
    path = tmp_path / "sample.prf"
    sample.save(path, "b")
    small = Profile(policy=GrowthPolicy(initial_capacity=2, block_size=2, max_capacity=2))
    with pytest.raises(OutOfRangeError):
        small.load(path)
    assert small.size == 0


@pytest.mark.parametrize(
    "body",
    [
        "id\n3\nAC 1\nGT 2\n",  # fewer pairs than declared
        "id\nthree\nAC 1\n",  # count is not a number
        "id\n1\nAC many\n",  # bad frequency
        "id\n",  # no count at all
    ],
)
def test_load_truncated_or_malformed_text(tmp_path, body):
    path = tmp_path / "broken.prf"
    path.write_text(f"{MAGIC_STRING_T}\n{body}", encoding="utf-8")
    p = Profile()
    with pytest.raises(IOFailureError):
        p.load(path)
    assert p.size == 0


def test_load_truncated_binary(tmp_path, sample):
    path = tmp_path / "sample.bin"
    sample.save(path, "b")
    path.write_bytes(path.read_bytes()[:-3])
    p = Profile()
    with pytest.raises(IOFailureError):
        p.load(path)
    assert p.size == 0


def test_load_keeps_stored_order_and_duplicates(tmp_path):
    path = tmp_path / "dups.prf"
    path.write_text(f"{MAGIC_STRING_T}\nraw\n3\nAC 1\nAC 2\nGT 0\n", encoding="utf-8")
    p = Profile.from_file(path)
    assert [(x.kmer.text, x.frequency) for x in p] == [("AC", 1), ("AC", 2), ("GT", 0)]


def test_stream_write_read(sample):
    """Verify write/read use the identifier/count/pairs text layout."""
    out = io.StringIO()
    sample.write(out)
    assert out.getvalue() == str(sample) == sample.to_string()
    assert out.getvalue().splitlines()[:2] == ["Homo sapiens", "4"]

    target = Profile(2)
    target.read(io.StringIO(out.getvalue()))
    assert target == sample
    assert Profile.from_stream(io.StringIO(out.getvalue())) == sample


def test_stream_read_failure_leaves_profile_empty(make_profile):
    target = make_profile([("AC", 1)])
    with pytest.raises(IOFailureError):
        target.read(io.StringIO("id\n2\nAC 1\n"))
    assert target.size == 0


def test_profile_id_must_be_single_line():
    p = Profile()
    with pytest.raises(InvalidArgumentError):
        p.profile_id = "two\nlines"
    p.profile_id = "E. coli K-12"
    assert p.profile_id == "E. coli K-12"


def test_binary_rejects_non_ascii_kmers(tmp_path):
    p = Profile()
    p.append(KmerFreq("ñ", 1))
    with pytest.raises(IOFailureError):
        p.save(tmp_path / "x.bin", "b")


@pytest.mark.parametrize("mode", ["t", "b"])
def test_round_trip_of_empty_and_spaced_kmers(tmp_path, make_profile, mode):
    """Verify kmers that are empty or contain spaces load back unchanged."""
    p = make_profile([("", 3), ("A C", 2), ("GT", 1)], profile_id="odd kmers")
    path = tmp_path / "odd.prf"
    p.save(path, mode)
    assert Profile.from_file(path) == p


def test_text_rejects_kmers_with_line_breaks(tmp_path, make_profile):
    p = make_profile([("A\nC", 1)])
    with pytest.raises(IOFailureError):
        p.save(tmp_path / "x.prf", "t")
    with pytest.raises(IOFailureError):
        p.write(io.StringIO())
    assert not (tmp_path / "x.prf").exists()


@pytest.mark.parametrize("mode, bad_kmer", [("b", "ñ"), ("t", "A\nC")])
def test_failed_save_keeps_previous_file(tmp_path, sample, make_profile, mode, bad_kmer):
    """Verify a save that fails while encoding leaves the existing file loadable."""
    path = tmp_path / "keep.prf"
    sample.save(path, mode)
    before = path.read_bytes()

    bad = make_profile([("AC", 1), (bad_kmer, 2)], profile_id="bad")
    with pytest.raises(IOFailureError):
        bad.save(path, mode)

    assert path.read_bytes() == before
    assert Profile.from_file(path) == sample
