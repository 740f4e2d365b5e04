# kmer/kmer.py
from __future__ import annotations

from dataclasses import dataclass

from kmerprofile.constants.tool_constants import (
    DEFAULT_COMPLEMENTARY_NUCLEOTIDES,
    DEFAULT_VALID_NUCLEOTIDES,
    MAX_KMER_LENGTH,
    MISSING_NUCLEOTIDE,
)
from kmerprofile.core.errors import InvalidArgumentError, OutOfRangeError


@dataclass(frozen=True, order=True)
class Kmer:
    """
    Immutable sequence of nucleotide symbols.

    Equality and ordering compare the symbols one by one, so sorting a list
    of k-mers yields alphabetical order (``"AC" < "AG" < "A_"``).

    Parameters
    ----------
    text : str
        Symbols of the k-mer. Texts longer than ``MAX_KMER_LENGTH`` are
        truncated to that length.

    Notes
    -----
    Case is preserved on construction; ``normalize`` is the canonicalizing
    step (uppercase + invalid symbols replaced by ``MISSING_NUCLEOTIDE``).
    """

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise InvalidArgumentError(f"Kmer text must be a str, got {type(self.text).__name__}.")
        if len(self.text) > MAX_KMER_LENGTH:
            object.__setattr__(self, "text", self.text[:MAX_KMER_LENGTH])

    # ----------------------------
    # Alternative constructors
    # ----------------------------

    @classmethod
    def of_size(cls, k: int = 1) -> "Kmer":
        """Return a k-mer made of `k` missing symbols."""
        if k < 0 or k > MAX_KMER_LENGTH:
            raise OutOfRangeError(f"Kmer size must be in [0, {MAX_KMER_LENGTH}], got {k}.")
        return cls(MISSING_NUCLEOTIDE * k)

    @classmethod
    def fit(cls, text: str, k: int) -> "Kmer":
        """Truncate `text`, or pad it with missing symbols, to exactly `k` symbols."""
        if k < 0 or k > MAX_KMER_LENGTH:
            raise OutOfRangeError(f"Kmer size must be in [0, {MAX_KMER_LENGTH}], got {k}.")
        return cls(text[:k].ljust(k, MISSING_NUCLEOTIDE))

    # ----------------------------
    # Queries
    # ----------------------------

    def size(self) -> int:
        return len(self.text)

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def at(self, index: int) -> str:
        """Symbol at `index`; raises OutOfRangeError outside ``[0, size)``."""
        if index < 0 or index >= len(self.text):
            raise OutOfRangeError(f"Index {index} out of range for kmer of size {len(self.text)}.")
        return self.text[index]

    def has_missing(self) -> bool:
        return MISSING_NUCLEOTIDE in self.text

    # ----------------------------
    # Transformations (always return a new Kmer)
    # ----------------------------

    def to_upper(self) -> "Kmer":
        return Kmer(self.text.upper())

    def to_lower(self) -> "Kmer":
        return Kmer(self.text.lower())

    def normalize(self, valid_nucleotides: str = DEFAULT_VALID_NUCLEOTIDES) -> "Kmer":
        """
        Uppercase every symbol and replace the ones not found in
        `valid_nucleotides` (compared case-insensitively) by the missing symbol.
        """
        valid = set(valid_nucleotides.upper())
        return Kmer("".join(c if c in valid else MISSING_NUCLEOTIDE for c in self.text.upper()))

    def complementary(
        self,
        nucleotides: str = DEFAULT_VALID_NUCLEOTIDES,
        complementary_nucleotides: str = DEFAULT_COMPLEMENTARY_NUCLEOTIDES,
    ) -> "Kmer":
        """
        Replace each symbol found in `nucleotides` by the symbol at the same
        position in `complementary_nucleotides`; any other symbol becomes
        missing.
        """
        if len(nucleotides) != len(complementary_nucleotides):
            raise InvalidArgumentError(
                "nucleotides and complementary_nucleotides must have the same length "
                f"({len(nucleotides)} != {len(complementary_nucleotides)})."
            )
        table = dict(zip(nucleotides, complementary_nucleotides))
        return Kmer("".join(table.get(c, MISSING_NUCLEOTIDE) for c in self.text))
