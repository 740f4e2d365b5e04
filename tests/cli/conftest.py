# tests/cli/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

from kmerprofile import Kmer, KmerFreq, Profile


def _write(path: Path, profile_id: str, pairs, mode: str = "t") -> Path:
    profile = Profile(profile_id=profile_id)
    for text, freq in pairs:
        profile.append(KmerFreq(Kmer(text), freq))
    profile.save(path, mode)
    return path


@pytest.fixture
def human_file(tmp_path) -> Path:
    return _write(tmp_path / "human.prf", "human", [("ac", 2), ("GT", 7), ("Ac", 4), ("NN", 1), ("CC", 3)])


@pytest.fixture
def mouse_file(tmp_path) -> Path:
    return _write(tmp_path / "mouse.prf", "mouse", [("GT", 5), ("CC", 6), ("TT", 1)], mode="b")
