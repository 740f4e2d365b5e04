# tool_constants.py
from __future__ import annotations

# Environment variable prefix used across the project (e.g., KMERPROFILE_CACHE_ROOT)
_ENV_PREFIX: str = "KMERPROFILE_"

# Symbol used for unknown/invalid nucleotides inside a k-mer
MISSING_NUCLEOTIDE: str = "_"

# Longest k-mer the value type will hold; longer texts are truncated
MAX_KMER_LENGTH: int = 100

# Default alphabet used when callers do not provide one
DEFAULT_VALID_NUCLEOTIDES: str = "ACGT"

# Watson-Crick pairing used by Kmer.complementary() defaults
DEFAULT_COMPLEMENTARY_NUCLEOTIDES: str = "TGCA"

# Profile storage policy
DIM_VECTOR_KMER_FREQ: int = 2000  # maximum number of pairs a profile can hold
INITIAL_CAPACITY: int = 10
BLOCK_SIZE: int = 10

# Identifier given to profiles that were never named
UNKNOWN_PROFILE_ID: str = "unknown"

# File signatures (first line of every saved profile)
MAGIC_STRING_T: str = "MP-KMER-T-1.0"
MAGIC_STRING_B: str = "MP-KMER-B-1.0"

# Sentinel returned by Profile.find_kmer() when nothing matches
NOT_FOUND: int = -1

