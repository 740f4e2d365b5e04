"""
K-mer value types
=================

``Kmer`` is the immutable symbol sequence; ``KmerFreq`` pairs it with an
occurrence count and knows how to read/write itself in text and binary form.
"""

from .kmer import Kmer
from .kmer_freq import KmerFreq

__all__ = ["Kmer", "KmerFreq"]
