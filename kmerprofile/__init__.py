# kmerprofile/__init__.py
from __future__ import annotations

from importlib import metadata as _metadata

"""
kmerprofile public package surface.

Re-exports the k-mer types, the Profile container, the error hierarchy and
the configuration accessors so that users can:
    import kmerprofile as kp
    p = kp.Profile(profile_id="ecoli")
    p.append(kp.KmerFreq("AC", 3))
"""

# Version
try:
    __version__ = _metadata.version("kmerprofile")
except _metadata.PackageNotFoundError:  # local dev / not installed
    __version__ = "0.0.1-dev"

from .core import (  # noqa: E402
    InvalidArgumentError,
    IOFailureError,
    OutOfRangeError,
    ProfileError,
    get_config,
    set_cache_root,
    set_valid_nucleotides,
    temporary_cache_root,
)
from .kmer import Kmer, KmerFreq  # noqa: E402
from .profile import GrowthPolicy, Profile, ProfileFormat  # noqa: E402

__all__ = [
    "__version__",
    # values
    "Kmer",
    "KmerFreq",
    # container
    "Profile",
    "ProfileFormat",
    "GrowthPolicy",
    # errors
    "ProfileError",
    "OutOfRangeError",
    "InvalidArgumentError",
    "IOFailureError",
    # config
    "get_config",
    "set_cache_root",
    "set_valid_nucleotides",
    "temporary_cache_root",
]
