# profile/profile.py
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional, TextIO, Union

import numpy as np
import pandas as pd

from kmerprofile.constants.tool_constants import NOT_FOUND, UNKNOWN_PROFILE_ID
from kmerprofile.core.errors import InvalidArgumentError, IOFailureError, OutOfRangeError
from kmerprofile.kmer import Kmer, KmerFreq
from kmerprofile.logging import add_context, get_logger

from .codecs import ProfileFormat, ProfilePayload, codec_for_magic, codec_for_mode, read_body, read_magic, write_body
from .storage import GrowableBuffer, GrowthPolicy

if TYPE_CHECKING:
    from kmerprofile.types import FileFormat, SaveModeChar

PathLike = Union[str, Path]

_ = get_logger("kmerprofile")
_LOG = logging.getLogger("kmerprofile.profile")
add_context(_LOG, component="profile")


def _same_kmer(a: KmerFreq, b: KmerFreq) -> bool:
    return a.kmer == b.kmer


def _add_frequency(target: KmerFreq, source: KmerFreq) -> None:
    target.frequency += source.frequency


class Profile:
    """
    Identified, ordered collection of (k-mer, frequency) pairs.

    The order of the pairs is meaningful: once `sort` has run, the index of a
    pair is its rank (0 = most frequent), which is what `get_distance`
    compares. Profiles have value semantics; `copy` and assignment through
    `assign` never share storage.

    Parameters
    ----------
    size : int, default=0
        Number of placeholder pairs to create, each holding a one-symbol
        missing k-mer with frequency 0.
    profile_id : str, default="unknown"
        Identifier of the profile (typically a species name).
    policy : GrowthPolicy, optional
        Storage growth policy (initial capacity, block size, max capacity).

    Raises
    ------
    OutOfRangeError
        If `size` is negative or above the maximum capacity.
    """

    def __init__(
        self,
        size: int = 0,
        *,
        profile_id: str = UNKNOWN_PROFILE_ID,
        policy: Optional[GrowthPolicy] = None,
    ) -> None:
        policy = policy or GrowthPolicy()
        if size < 0 or size > policy.max_capacity:
            raise OutOfRangeError(f"Profile size must be in [0, {policy.max_capacity}], got {size}.")
        self._buffer: GrowableBuffer[KmerFreq] = GrowableBuffer(policy, capacity=max(policy.initial_capacity, size))
        for _i in range(size):
            self._buffer.push(KmerFreq())
        self._profile_id = UNKNOWN_PROFILE_ID
        self.profile_id = profile_id

    # ----------------------------
    # Value semantics
    # ----------------------------

    def copy(self) -> "Profile":
        """Deep copy: pairs are duplicated, storage is never shared."""
        clone = Profile.__new__(Profile)
        clone._buffer = self._buffer.clone(KmerFreq.copy)
        clone._profile_id = self._profile_id
        return clone

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "Profile":
        return self.copy()

    def assign(self, other: "Profile") -> "Profile":
        """Replace this profile's content with a deep copy of `other`."""
        if other is self:
            return self
        self._buffer.clear()
        self._buffer = other._buffer.clone(KmerFreq.copy)
        self._profile_id = other._profile_id
        return self

    # ----------------------------
    # Queries
    # ----------------------------

    @property
    def profile_id(self) -> str:
        return self._profile_id

    @profile_id.setter
    def profile_id(self, value: str) -> None:
        value = str(value)
        if "\n" in value or "\r" in value:
            raise InvalidArgumentError("A profile identifier must fit in a single line.")
        self._profile_id = value

    @property
    def size(self) -> int:
        return len(self._buffer)

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    @property
    def policy(self) -> GrowthPolicy:
        return self._buffer.policy

    def __len__(self) -> int:
        return len(self._buffer)

    def __iter__(self) -> Iterator[KmerFreq]:
        return iter(self._buffer)

    def at(self, index: int) -> KmerFreq:
        """Pair stored at `index` (mutations on it apply to the profile)."""
        return self._buffer[index]

    def __getitem__(self, index: int) -> KmerFreq:
        return self._buffer[index]

    def __setitem__(self, index: int, pair: KmerFreq) -> None:
        self._buffer[index] = pair.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return self._profile_id == other._profile_id and list(self._buffer) == list(other._buffer)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Profile(profile_id={self._profile_id!r}, size={self.size}, capacity={self.capacity})"

    def find_kmer(self, kmer: Union[Kmer, str], initial_pos: int = 0, final_pos: Optional[int] = None) -> int:
        """
        Index of the first pair holding `kmer` within ``[initial_pos, final_pos]``
        (both included), or -1. Bounds are clamped to the valid positions.
        """
        target = kmer if isinstance(kmer, Kmer) else Kmer(kmer)
        return self._buffer.find(lambda pair: pair.kmer == target, initial_pos, final_pos)

    def get_distance(self, other: "Profile") -> float:
        """
        Rank distance from this profile to `other`.

        ``sum(|rank_self(k) - rank_other(k)|) / (size_self * size_other)`` over
        the k-mers of this profile only; a k-mer missing from `other` gets rank
        ``other.size``. Both profiles must already be sorted (not checked), and
        the measure is not symmetric.

        Raises
        ------
        InvalidArgumentError
            If either profile is empty.
        """
        if self.size == 0 or other.size == 0:
            raise InvalidArgumentError(
                f"Cannot compute a distance with an empty profile "
                f"('{self._profile_id}' has {self.size} kmers, '{other._profile_id}' has {other.size})."
            )
        own_ranks = np.arange(self.size, dtype=np.int64)
        other_ranks = np.fromiter(
            (other._rank_of(pair.kmer) for pair in self._buffer), dtype=np.int64, count=self.size
        )
        total = int(np.abs(own_ranks - other_ranks).sum())
        distance = total / (self.size * other.size)
        _LOG.debug("Distance '%s' -> '%s' = %.6f", self._profile_id, other._profile_id, distance)
        return distance

    def _rank_of(self, kmer: Kmer) -> int:
        pos = self.find_kmer(kmer)
        return self.size if pos == NOT_FOUND else pos

    def frequencies(self) -> np.ndarray:
        return np.fromiter((pair.frequency for pair in self._buffer), dtype=np.int64, count=self.size)

    def to_string(self) -> str:
        """Identifier line, count line, then one ``kmer frequency`` line per pair."""
        lines = [self._profile_id, str(self.size)]
        lines.extend(pair.to_text() for pair in self._buffer)
        return "\n".join(lines) + "\n"

    __str__ = to_string

    # ----------------------------
    # Building and editing
    # ----------------------------

    def append(self, pair: KmerFreq) -> None:
        """
        Add `pair` to the profile: its frequency is added to an existing pair
        with the same k-mer, otherwise a copy goes to the end.

        Raises
        ------
        OutOfRangeError
            If a new slot is needed and the maximum capacity is reached; the
            profile is left unchanged.
        """
        self._buffer.merge_or_push(pair.copy(), _same_kmer, _add_frequency)

    def join(self, other: "Profile") -> None:
        """Append every pair of `other`, in its order."""
        for pair in list(other):
            self.append(pair)

    def __iadd__(self, item: Union[KmerFreq, "Profile"]) -> "Profile":
        if isinstance(item, Profile):
            self.join(item)
        elif isinstance(item, KmerFreq):
            self.append(item)
        else:
            return NotImplemented
        return self

    def normalize(self, valid_nucleotides: Optional[str] = None) -> None:
        """
        Uppercase every k-mer, turn symbols outside `valid_nucleotides` into
        the missing symbol, then merge pairs that became identical into the
        first one (frequencies summed, order of survivors preserved).

        Without `valid_nucleotides`, the configured default alphabet is used.
        """
        if valid_nucleotides is None:
            from kmerprofile.core.config import get_config

            valid_nucleotides = get_config().valid_nucleotides
        merged: GrowableBuffer[KmerFreq] = GrowableBuffer(self.policy, capacity=self.capacity)
        for pair in self._buffer:
            merged.merge_or_push(
                KmerFreq(pair.kmer.normalize(valid_nucleotides), pair.frequency), _same_kmer, _add_frequency
            )
        removed = self.size - len(merged)
        self._buffer = merged
        _LOG.debug("Normalized '%s' with alphabet %r: %d duplicates merged.", self._profile_id, valid_nucleotides, removed)

    def sort(self) -> None:
        """Order by decreasing frequency; ties by alphabetical k-mer."""
        ordered = sorted(self._buffer, key=KmerFreq.sort_key)
        for i, pair in enumerate(ordered):
            self._buffer[i] = pair

    def delete_pos(self, pos: int) -> None:
        """Remove the pair at `pos`; raises OutOfRangeError outside ``[0, size)``."""
        self._buffer.delete(pos)

    def zip(self, delete_missing: bool = False, lower_bound: int = 0) -> None:
        """
        Drop pairs with frequency <= `lower_bound` and, if `delete_missing`,
        pairs whose k-mer holds a missing symbol. Survivors keep their order.
        """
        removed = self._buffer.retain(
            lambda pair: pair.frequency > lower_bound and not (delete_missing and pair.kmer.has_missing())
        )
        _LOG.debug(
            "Zipped '%s' (delete_missing=%s, lower_bound=%d): %d pairs removed.",
            self._profile_id, delete_missing, lower_bound, removed,
        )

    def clear(self) -> None:
        """Drop every pair and reset the identifier."""
        self._buffer.clear()
        self._profile_id = UNKNOWN_PROFILE_ID

    # ----------------------------
    # Streams and files
    # ----------------------------

    def _commit(self, payload: ProfilePayload) -> None:
        policy = self.policy
        buffer: GrowableBuffer[KmerFreq] = GrowableBuffer(
            policy, capacity=max(policy.initial_capacity, len(payload.pairs))
        )
        for pair in payload.pairs:
            buffer.push(pair)
        self._buffer = buffer
        self.profile_id = payload.profile_id

    def write(self, stream: TextIO) -> None:
        """Write identifier, count and pairs as text lines."""
        write_body(self._profile_id, self._buffer, stream)

    def read(self, stream: TextIO) -> None:
        """
        Replace the content with a profile read from a text stream (format of
        `write`). On failure the profile is left empty and the error re-raised.
        """
        self.clear()
        try:
            payload = read_body(stream, self.policy.max_capacity)
            self._commit(payload)
        except Exception:
            self.clear()
            raise

    @classmethod
    def from_stream(cls, stream: TextIO, *, policy: Optional[GrowthPolicy] = None) -> "Profile":
        profile = cls(policy=policy)
        profile.read(stream)
        return profile

    def save(self, path: PathLike, mode: Union[ProfileFormat, "SaveModeChar"] = ProfileFormat.TEXT) -> None:
        """
        Save the profile to `path`.

        Parameters
        ----------
        path : str | Path
            Destination file.
        mode : ProfileFormat or {"t", "b"}, default=ProfileFormat.TEXT
            Text or binary encoding.

        Raises
        ------
        InvalidArgumentError
            If `mode` is not a known format.
        IOFailureError
            If a k-mer cannot be encoded in `mode` or the file cannot be
            opened or written. An existing file at `path` is only replaced
            once the whole profile has been encoded.
        """
        codec = codec_for_mode(mode)
        dest = Path(path).expanduser()
        # Encode fully before touching `dest` so a failed save leaves it intact.
        encoded = io.BytesIO()
        codec.dump(ProfilePayload(self._profile_id, list(self._buffer)), encoded)
        try:
            with open(dest, "wb") as fh:
                fh.write(encoded.getvalue())
        except OSError as exc:
            _LOG.error("Cannot write profile '%s' to %s: %s", self._profile_id, dest, exc)
            raise IOFailureError(f"Cannot write profile to {dest}: {exc}") from exc
        _LOG.info("Saved profile '%s' (%d kmers, %s) to %s", self._profile_id, self.size, codec.fmt.name, dest)

    def load(self, path: PathLike) -> None:
        """
        Replace the content with the profile stored in `path` (text or binary,
        detected from the magic string).

        Raises
        ------
        IOFailureError
            If the file cannot be opened or read.
        InvalidArgumentError
            If the magic string is not a known one.
        OutOfRangeError
            If the stored count is negative or above the maximum capacity.

        On failure the profile is left empty.
        """
        self.clear()
        src = Path(path).expanduser()
        try:
            with open(src, "rb") as fh:
                codec = codec_for_magic(read_magic(fh))
                payload = codec.parse(fh, self.policy.max_capacity)
            self._commit(payload)
        except OSError as exc:
            self.clear()
            if isinstance(exc, IOFailureError):
                _LOG.error("Failed to load profile from %s: %s", src, exc)
                raise
            _LOG.error("Cannot read profile file %s: %s", src, exc)
            raise IOFailureError(f"Cannot read profile file {src}: {exc}") from exc
        except Exception:
            self.clear()
            raise
        _LOG.info("Loaded profile '%s' (%d kmers, %s) from %s", self._profile_id, self.size, codec.fmt.name, src)

    @classmethod
    def from_file(cls, path: PathLike, *, policy: Optional[GrowthPolicy] = None) -> "Profile":
        profile = cls(policy=policy)
        profile.load(path)
        return profile

    # ----------------------------
    # Tabular interop
    # ----------------------------

    def to_frame(self) -> pd.DataFrame:
        """Pairs as a DataFrame with ``kmer``, ``frequency`` and ``rank`` columns."""
        return pd.DataFrame(
            {
                "kmer": [pair.kmer.text for pair in self._buffer],
                "frequency": self.frequencies(),
                "rank": np.arange(self.size, dtype=np.int64),
            }
        )

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        *,
        profile_id: str = UNKNOWN_PROFILE_ID,
        kmer_column: str = "kmer",
        frequency_column: str = "frequency",
        policy: Optional[GrowthPolicy] = None,
    ) -> "Profile":
        """Build a profile by appending the rows of `df` in order (duplicates merge)."""
        missing = [c for c in (kmer_column, frequency_column) if c not in df.columns]
        if missing:
            raise InvalidArgumentError(f"Columns {missing} not found. Available: {list(df.columns)}")
        profile = cls(profile_id=profile_id, policy=policy)
        for text, freq in zip(df[kmer_column].astype(str), df[frequency_column]):
            profile.append(KmerFreq(Kmer(text), int(freq)))
        return profile

    def export(
        self,
        path: PathLike,
        file_format: Optional["FileFormat"] = None,
        *,
        overwrite: bool = True,
    ) -> Path:
        """Write `to_frame()` as csv/npy/npz/parquet through UtilsLib.export_data."""
        from kmerprofile.misc.utils_lib import UtilsLib

        return UtilsLib.export_data(
            self.to_frame(),
            path,
            base_message=f"Profile '{self._profile_id}'",
            file_format=file_format,
            overwrite=overwrite,
        )


__all__ = ["Profile", "ProfileFormat", "GrowthPolicy"]
