# profile/codecs.py
"""
On-disk encodings of a profile.

Every file starts with the same three lines: magic string, profile
identifier, number of pairs. What follows depends on the format:

- text   (``MP-KMER-T-1.0``): one ``<kmer> <frequency>`` line per pair.
- binary (``MP-KMER-B-1.0``): the pairs written back to back with
  ``KmerFreq.write_binary``.

``write_body``/``read_body`` handle the identifier/count/pairs part in text
form; they are also what ``Profile.write``/``Profile.read`` use on streams.
"""

from __future__ import annotations

import io
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, ClassVar, Iterable, List, TextIO, Union

from kmerprofile.constants.tool_constants import DIM_VECTOR_KMER_FREQ, MAGIC_STRING_B, MAGIC_STRING_T
from kmerprofile.core.errors import InvalidArgumentError, IOFailureError, OutOfRangeError
from kmerprofile.kmer import KmerFreq
from kmerprofile.logging import add_context, get_logger

_ = get_logger("kmerprofile")
_LOG = logging.getLogger("kmerprofile.profile.codecs")
add_context(_LOG, component="profile", facility="codecs")


class ProfileFormat(str, Enum):
    """Profile file formats; values are the single-character save modes."""

    TEXT = "t"
    BINARY = "b"

    @classmethod
    def coerce(cls, mode: Union["ProfileFormat", str]) -> "ProfileFormat":
        if isinstance(mode, cls):
            return mode
        key = (mode or "").strip().lower()
        aliases = {"t": cls.TEXT, "text": cls.TEXT, "b": cls.BINARY, "binary": cls.BINARY}
        if key not in aliases:
            raise InvalidArgumentError(f"Unknown profile format {mode!r}. Use 't' (text) or 'b' (binary).")
        return aliases[key]


@dataclass
class ProfilePayload:
    """Identifier and ordered pairs decoded from (or about to be written to) a file."""

    profile_id: str
    pairs: List[KmerFreq] = field(default_factory=list)


# ----------------------------
# Shared header/body helpers
# ----------------------------

def _next_line(stream: TextIO, what: str) -> str:
    line = stream.readline()
    if not line:
        raise IOFailureError(f"Unexpected end of data while reading {what}.")
    return line.rstrip("\r\n")


def _parse_count(raw: str, max_count: int) -> int:
    try:
        count = int(raw.strip())
    except ValueError as exc:
        raise IOFailureError(f"Invalid number of kmers: {raw!r}") from exc
    if count < 0 or count > max_count:
        raise OutOfRangeError(f"Number of kmers {count} is outside [0, {max_count}].")
    return count


def write_body(profile_id: str, pairs: Iterable[KmerFreq], stream: TextIO) -> None:
    pairs = list(pairs)
    for pair in pairs:
        if "\n" in pair.kmer.text or "\r" in pair.kmer.text:
            raise IOFailureError(f"Kmer {pair.kmer.text!r} cannot be stored as a text line.")
    stream.write(f"{profile_id}\n{len(pairs)}\n")
    for pair in pairs:
        stream.write(pair.to_text())
        stream.write("\n")


def read_body(stream: TextIO, max_count: int = DIM_VECTOR_KMER_FREQ) -> ProfilePayload:
    profile_id = _next_line(stream, "the profile identifier")
    count = _parse_count(_next_line(stream, "the number of kmers"), max_count)
    pairs: List[KmerFreq] = []
    while len(pairs) < count:
        line = _next_line(stream, f"pair {len(pairs) + 1} of {count}")
        if line.strip():
            pairs.append(KmerFreq.from_text(line))
    return ProfilePayload(profile_id, pairs)


# ----------------------------
# Codec strategies
# ----------------------------

class ProfileCodec(ABC):
    """Write/read contract shared by the file formats. Streams are binary file objects."""

    magic: ClassVar[str]
    fmt: ClassVar[ProfileFormat]

    def dump(self, payload: ProfilePayload, stream: BinaryIO) -> None:
        header = f"{self.magic}\n"
        stream.write(header.encode("utf-8"))
        self._dump_body(payload, stream)
        _LOG.debug("Encoded profile '%s' (%d pairs) as %s.", payload.profile_id, len(payload.pairs), self.fmt.name)

    def parse(self, stream: BinaryIO, max_count: int = DIM_VECTOR_KMER_FREQ) -> ProfilePayload:
        """Decode what follows the magic line (already consumed by the caller)."""
        try:
            return self._parse_body(stream, max_count)
        except UnicodeDecodeError as exc:
            raise IOFailureError(f"Undecodable {self.fmt.name.lower()} profile data: {exc}") from exc

    @abstractmethod
    def _dump_body(self, payload: ProfilePayload, stream: BinaryIO) -> None: ...

    @abstractmethod
    def _parse_body(self, stream: BinaryIO, max_count: int) -> ProfilePayload: ...


class TextCodec(ProfileCodec):
    magic = MAGIC_STRING_T
    fmt = ProfileFormat.TEXT

    def _dump_body(self, payload: ProfilePayload, stream: BinaryIO) -> None:
        text = io.TextIOWrapper(stream, encoding="utf-8", newline="\n")  # type: ignore[arg-type]
        try:
            write_body(payload.profile_id, payload.pairs, text)
            text.flush()
        finally:
            text.detach()

    def _parse_body(self, stream: BinaryIO, max_count: int) -> ProfilePayload:
        text = io.TextIOWrapper(stream, encoding="utf-8")  # type: ignore[arg-type]
        try:
            return read_body(text, max_count)
        finally:
            text.detach()


class BinaryCodec(ProfileCodec):
    magic = MAGIC_STRING_B
    fmt = ProfileFormat.BINARY

    def _dump_body(self, payload: ProfilePayload, stream: BinaryIO) -> None:
        stream.write(f"{payload.profile_id}\n{len(payload.pairs)}\n".encode("utf-8"))
        for pair in payload.pairs:
            pair.write_binary(stream)

    def _parse_body(self, stream: BinaryIO, max_count: int) -> ProfilePayload:
        profile_id = _binary_line(stream, "the profile identifier")
        count = _parse_count(_binary_line(stream, "the number of kmers"), max_count)
        pairs = [KmerFreq.read_binary(stream) for _ in range(count)]
        return ProfilePayload(profile_id, pairs)


def _binary_line(stream: BinaryIO, what: str) -> str:
    raw = stream.readline()
    if not raw:
        raise IOFailureError(f"Unexpected end of data while reading {what}.")
    return raw.decode("utf-8").rstrip("\r\n")


_BY_FORMAT: dict[ProfileFormat, ProfileCodec] = {
    ProfileFormat.TEXT: TextCodec(),
    ProfileFormat.BINARY: BinaryCodec(),
}
_BY_MAGIC: dict[str, ProfileCodec] = {codec.magic: codec for codec in _BY_FORMAT.values()}


def codec_for_mode(mode: Union[ProfileFormat, str]) -> ProfileCodec:
    return _BY_FORMAT[ProfileFormat.coerce(mode)]


def codec_for_magic(magic: str) -> ProfileCodec:
    codec = _BY_MAGIC.get(magic.strip())
    if codec is None:
        _LOG.error("Unknown magic string %r.", magic)
        raise InvalidArgumentError(
            f"Invalid magic string {magic!r}; expected one of {sorted(_BY_MAGIC)}."
        )
    return codec


def read_magic(stream: BinaryIO) -> str:
    """Read the first line of a profile file as text (undecodable bytes are replaced)."""
    return stream.readline().decode("utf-8", errors="replace").rstrip("\r\n")


__all__ = [
    "ProfileFormat",
    "ProfilePayload",
    "ProfileCodec",
    "TextCodec",
    "BinaryCodec",
    "codec_for_mode",
    "codec_for_magic",
    "read_magic",
    "write_body",
    "read_body",
]
