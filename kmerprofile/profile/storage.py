# profile/storage.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

from kmerprofile.constants.tool_constants import BLOCK_SIZE, DIM_VECTOR_KMER_FREQ, INITIAL_CAPACITY, NOT_FOUND
from kmerprofile.core.errors import InvalidArgumentError, OutOfRangeError

T = TypeVar("T")


@dataclass(frozen=True)
class GrowthPolicy:
    """
    Block growth policy of a GrowableBuffer.

    Parameters
    ----------
    initial_capacity : int, default=10
        Slots allocated for an empty buffer.
    block_size : int, default=10
        Slots added on each reallocation.
    max_capacity : int, default=DIM_VECTOR_KMER_FREQ
        Hard upper bound; requesting more raises OutOfRangeError.
    """

    initial_capacity: int = INITIAL_CAPACITY
    block_size: int = BLOCK_SIZE
    max_capacity: int = DIM_VECTOR_KMER_FREQ

    def __post_init__(self) -> None:
        if self.block_size <= 0:
            raise InvalidArgumentError(f"block_size must be positive, got {self.block_size}.")
        if not 0 <= self.initial_capacity <= self.max_capacity:
            raise InvalidArgumentError(
                f"initial_capacity must be in [0, {self.max_capacity}], got {self.initial_capacity}."
            )

    def next_capacity(self, current: int) -> int:
        return current + self.block_size


class GrowableBuffer(Generic[T]):
    """
    Contiguous storage with explicit capacity and block growth.

    Slots beyond ``len(self)`` are unused (None). Indexed access is only
    valid in ``[0, len(self))``; negative indices are rejected rather than
    counted from the end.
    """

    def __init__(self, policy: Optional[GrowthPolicy] = None, capacity: Optional[int] = None) -> None:
        self.policy = policy or GrowthPolicy()
        cap = self.policy.initial_capacity if capacity is None else capacity
        self._check_capacity(cap)
        self._slots: List[Optional[T]] = [None] * cap
        self._size = 0

    # ----------------------------
    # Capacity management
    # ----------------------------

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def _check_capacity(self, capacity: int) -> None:
        if capacity < 0 or capacity > self.policy.max_capacity:
            raise OutOfRangeError(
                f"Requested capacity {capacity} is outside [0, {self.policy.max_capacity}]."
            )

    def reallocate(self, new_capacity: int) -> None:
        """Move the items to a new backing array of `new_capacity` slots."""
        self._check_capacity(new_capacity)
        if new_capacity < self._size:
            raise OutOfRangeError(f"Cannot shrink capacity to {new_capacity} below size {self._size}.")
        slots: List[Optional[T]] = [None] * new_capacity
        slots[: self._size] = self._slots[: self._size]
        self._slots = slots

    def _ensure_room(self) -> None:
        if self._size == len(self._slots):
            self.reallocate(self.policy.next_capacity(len(self._slots)))

    # ----------------------------
    # Element access
    # ----------------------------

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= self._size:
            raise OutOfRangeError(f"Index {index} out of range [0, {self._size}).")

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> T:
        self._check_index(index)
        return self._slots[index]  # type: ignore[return-value]

    def __setitem__(self, index: int, item: T) -> None:
        self._check_index(index)
        self._slots[index] = item

    def __iter__(self) -> Iterator[T]:
        for i in range(self._size):
            yield self._slots[i]  # type: ignore[misc]

    # ----------------------------
    # Mutation
    # ----------------------------

    def push(self, item: T) -> None:
        self._ensure_room()
        self._slots[self._size] = item
        self._size += 1

    def merge_or_push(self, item: T, same: Callable[[T, T], bool], merge: Callable[[T, T], None]) -> int:
        """
        Merge `item` into the first stored element `e` with ``same(e, item)``,
        or push it at the end. Returns the index that received the item.
        """
        for i in range(self._size):
            current = self._slots[i]
            if same(current, item):  # type: ignore[arg-type]
                merge(current, item)  # type: ignore[arg-type]
                return i
        self.push(item)
        return self._size - 1

    def find(self, predicate: Callable[[T], bool], lo: int = 0, hi: Optional[int] = None) -> int:
        """First index in ``[lo, hi]`` (inclusive, clamped) matching `predicate`, or -1."""
        last = self._size - 1 if hi is None else min(hi, self._size - 1)
        for i in range(max(lo, 0), last + 1):
            if predicate(self._slots[i]):  # type: ignore[arg-type]
                return i
        return NOT_FOUND

    def retain(self, predicate: Callable[[T], bool]) -> int:
        """Keep the items satisfying `predicate`, in order. Returns how many were removed."""
        write = 0
        for read in range(self._size):
            item = self._slots[read]
            if predicate(item):  # type: ignore[arg-type]
                self._slots[write] = item
                write += 1
        removed = self._size - write
        self.truncate(write)
        return removed

    def delete(self, pos: int) -> T:
        self._check_index(pos)
        item = self._slots[pos]
        self._slots[pos : self._size - 1] = self._slots[pos + 1 : self._size]
        self._size -= 1
        self._slots[self._size] = None
        return item  # type: ignore[return-value]

    def truncate(self, size: int) -> None:
        if size < 0 or size > self._size:
            raise OutOfRangeError(f"Cannot truncate to {size} (size is {self._size}).")
        for i in range(size, self._size):
            self._slots[i] = None
        self._size = size

    def clear(self) -> None:
        """Drop every item and go back to the initial capacity."""
        self._slots = [None] * self.policy.initial_capacity
        self._size = 0

    def clone(self, copy_item: Callable[[T], T]) -> "GrowableBuffer[T]":
        """Independent copy with the same capacity; each item passes through `copy_item`."""
        other: GrowableBuffer[T] = GrowableBuffer(self.policy, capacity=self.capacity)
        for item in self:
            other._slots[other._size] = copy_item(item)
            other._size += 1
        return other
