"""Shared fixtures for all test suites."""
from __future__ import annotations

import os
from collections.abc import Callable, Iterator, Sequence

import pytest

from kmerprofile import Kmer, KmerFreq, Profile


@pytest.fixture(autouse=True)
def _isolated_runtime(tmp_path, monkeypatch) -> Iterator[None]:
    """Send logs to a temporary file and keep the cache inside tmp_path."""
    for k in list(os.environ.keys()):
        if k.startswith("KMERPROFILE_LOG_"):
            monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv("KMERPROFILE_LOG_FILE", str(tmp_path / "kmerprofile.log"))

    from kmerprofile.core.config import temporary_cache_root

    with temporary_cache_root(tmp_path / "cache"):
        yield


@pytest.fixture
def make_profile() -> Callable[..., Profile]:
    """Build a profile by appending ``(kmer, frequency)`` tuples in order."""

    def _make(pairs: Sequence[tuple[str, int]], profile_id: str = "unknown", **kwargs) -> Profile:
        profile = Profile(profile_id=profile_id, **kwargs)
        for text, freq in pairs:
            profile.append(KmerFreq(Kmer(text), freq))
        return profile

    return _make


@pytest.fixture
def as_tuples() -> Callable[[Profile], list[tuple[str, int]]]:
    """Flatten a profile into ``(kmer_text, frequency)`` tuples."""
    return lambda profile: [(pair.kmer.text, pair.frequency) for pair in profile]
