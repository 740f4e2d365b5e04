# kmer/kmer_freq.py
from __future__ import annotations

import struct
from typing import BinaryIO, Union

from kmerprofile.core.errors import InvalidArgumentError, IOFailureError

from .kmer import Kmer

# Binary layout of one pair: uint16 k-mer length, ASCII symbols, int64 frequency.
_LENGTH = struct.Struct("<H")
_FREQUENCY = struct.Struct("<q")


class KmerFreq:
    """
    A k-mer paired with its occurrence count.

    The k-mer is fixed once the pair exists (merge key inside a Profile);
    the frequency is the mutable part and can never be negative.

    Parameters
    ----------
    kmer : Kmer or str, default=Kmer.of_size(1)
        The k-mer. Plain strings are wrapped into a Kmer.
    frequency : int, default=0
        Number of occurrences (>= 0).
    """

    __slots__ = ("_kmer", "_frequency")

    def __init__(self, kmer: Union[Kmer, str, None] = None, frequency: int = 0) -> None:
        if kmer is None:
            kmer = Kmer.of_size(1)
        self._kmer = kmer if isinstance(kmer, Kmer) else Kmer(kmer)
        self._frequency = 0
        self.frequency = frequency

    # ----------------------------
    # Accessors
    # ----------------------------

    @property
    def kmer(self) -> Kmer:
        return self._kmer

    @property
    def frequency(self) -> int:
        return self._frequency

    @frequency.setter
    def frequency(self, value: int) -> None:
        value = int(value)
        if value < 0:
            raise InvalidArgumentError(f"Frequency cannot be negative (got {value}).")
        self._frequency = value

    def copy(self) -> "KmerFreq":
        return KmerFreq(self._kmer, self._frequency)

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "KmerFreq":
        return self.copy()

    # ----------------------------
    # Comparison
    # ----------------------------

    def sort_key(self) -> tuple[int, str]:
        """Key giving profile order: higher frequency first, then alphabetical k-mer."""
        return (-self._frequency, self._kmer.text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KmerFreq):
            return NotImplemented
        return self._kmer == other._kmer and self._frequency == other._frequency

    def __lt__(self, other: "KmerFreq") -> bool:
        if not isinstance(other, KmerFreq):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"KmerFreq({self._kmer.text!r}, {self._frequency})"

    def __str__(self) -> str:
        return self.to_text()

    # ----------------------------
    # Text primitives
    # ----------------------------

    def to_text(self) -> str:
        return f"{self._kmer.text} {self._frequency}"

    @classmethod
    def from_text(cls, line: str) -> "KmerFreq":
        """
        Parse a ``"<kmer> <frequency>"`` line. The frequency follows the last
        space, so k-mers that are empty or hold spaces read back unchanged.
        """
        text, sep, raw_freq = line.rstrip().rpartition(" ")
        if not sep:
            raise IOFailureError(f"Malformed kmer-frequency line: {line.strip()!r}")
        try:
            frequency = int(raw_freq)
        except ValueError as exc:
            raise IOFailureError(f"Invalid frequency in line: {line.strip()!r}") from exc
        if frequency < 0:
            raise IOFailureError(f"Negative frequency in line: {line.strip()!r}")
        return cls(Kmer(text), frequency)

    # ----------------------------
    # Binary primitives
    # ----------------------------

    def write_binary(self, stream: BinaryIO) -> None:
        try:
            data = self._kmer.text.encode("ascii")
        except UnicodeEncodeError as exc:
            raise IOFailureError(f"Kmer {self._kmer.text!r} cannot be stored in binary form.") from exc
        stream.write(_LENGTH.pack(len(data)))
        stream.write(data)
        stream.write(_FREQUENCY.pack(self._frequency))

    @classmethod
    def read_binary(cls, stream: BinaryIO) -> "KmerFreq":
        (length,) = _LENGTH.unpack(_read_exact(stream, _LENGTH.size))
        raw = _read_exact(stream, length)
        (frequency,) = _FREQUENCY.unpack(_read_exact(stream, _FREQUENCY.size))
        if frequency < 0:
            raise IOFailureError(f"Negative frequency {frequency} in binary record.")
        try:
            text = raw.decode("ascii")
        except UnicodeDecodeError as exc:
            raise IOFailureError("Non-ASCII kmer in binary record.") from exc
        return cls(Kmer(text), frequency)


def _read_exact(stream: BinaryIO, n: int) -> bytes:
    data = stream.read(n)
    if data is None or len(data) != n:
        raise IOFailureError(f"Unexpected end of data (wanted {n} bytes, got {len(data or b'')}).")
    return data
