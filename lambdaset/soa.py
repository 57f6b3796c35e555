"""Compact index and slice handles into struct-of-arrays storage.

An ``Index`` names one element of a backing list by its offset. The slice
types name a run of consecutive elements, or parallel runs in several lists,
by a start offset and a length. Offsets are 32-bit and lengths 16-bit, as in
the compact encoding used throughout the compiler stages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, MutableSequence, Sequence, TypeVar

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")

_U32_MAX = 0xFFFF_FFFF
_U16_MAX = 0xFFFF


def _check_u32(name: str, value: int) -> None:
    if not 0 <= value <= _U32_MAX:
        raise ValueError(f"{name} must fit in 32 unsigned bits, got {value}")


def _check_u16(name: str, value: int) -> None:
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must fit in 16 unsigned bits, got {value}")


@dataclass(frozen=True, order=True)
class Index(Generic[T]):
    """An offset into a list of values."""

    index: int

    def __post_init__(self) -> None:
        _check_u32("index", self.index)

    def __index__(self) -> int:
        return self.index

    def as_slice(self) -> Slice[T]:
        """A slice of length one covering just this element."""
        return Slice(self.index, 1)


@dataclass
class EitherIndex(Generic[T, U]):
    """An index into one of two lists, the choice kept in the top bit."""

    raw: int

    MASK = 1 << 31

    def __post_init__(self) -> None:
        _check_u32("raw", self.raw)

    def __repr__(self) -> str:
        return f"EitherIndex({self.raw})"

    @classmethod
    def from_left(cls, index: Index[T]) -> EitherIndex[T, U]:
        if index.index & cls.MASK:
            raise ValueError(f"index {index.index} uses the reserved top bit")
        return cls(index.index)

    @classmethod
    def from_right(cls, index: Index[U]) -> EitherIndex[T, U]:
        if index.index & cls.MASK:
            raise ValueError(f"index {index.index} uses the reserved top bit")
        return cls(index.index | cls.MASK)

    def split(self) -> tuple[Index[T] | None, Index[U] | None]:
        """Return ``(left, None)`` or ``(None, right)``."""
        if self.raw & self.MASK == 0:
            return Index(self.raw), None
        return None, Index(self.raw ^ self.MASK)

    def decrement_index(self) -> None:
        """Step the raw value down by one, stopping at zero."""
        self.raw = max(self.raw - 1, 0)


def _checked_view(elems: Sequence[T], start: int, length: int) -> Sequence[T]:
    end = start + length
    if end > len(elems):
        raise IndexError(
            f"range {start}..{end} out of bounds for sequence of length {len(elems)}"
        )
    return elems[start:end]


@dataclass(order=True)
class Slice(Generic[T]):
    """A run of ``length`` elements starting at offset ``start``."""

    start: int = 0
    length: int = 0

    def __post_init__(self) -> None:
        _check_u32("start", self.start)
        _check_u16("length", self.length)

    @classmethod
    def empty(cls) -> Slice[T]:
        return cls(0, 0)

    def indices(self) -> range:
        return range(self.start, self.start + self.length)

    def at_start(self) -> Index[T]:
        return Index(self.start)

    def at(self, i: int) -> Index[T]:
        return Index(self.start + i)

    def truncate(self, length: int) -> Slice[T]:
        return Slice(self.start, length)

    def advance(self, amount: int) -> None:
        new_start = self.start + amount
        _check_u32("start", new_start)
        self.start = new_start

    def get_slice(self, elems: Sequence[T]) -> Sequence[T]:
        """The elements of ``elems`` this slice covers."""
        return _checked_view(elems, self.start, self.length)

    def as_nonempty_slice(self) -> NonEmptySlice[T] | None:
        return NonEmptySlice.from_slice(self)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Index[T]]:
        return (Index(i) for i in self.indices())


@dataclass(order=True)
class NonEmptySlice(Generic[T]):
    """A slice whose length is never zero."""

    start: int
    length: int

    def __post_init__(self) -> None:
        _check_u32("start", self.start)
        _check_u16("length", self.length)
        if self.length == 0:
            raise ValueError("a non-empty slice needs a nonzero length")

    @classmethod
    def from_slice(cls, slice_: Slice[T]) -> NonEmptySlice[T] | None:
        if slice_.length == 0:
            return None
        return cls(slice_.start, slice_.length)

    def as_slice(self) -> Slice[T]:
        return Slice(self.start, self.length)

    def indices(self) -> range:
        return range(self.start, self.start + self.length)

    def truncate(self, length: int) -> NonEmptySlice[T]:
        return NonEmptySlice(self.start, length)

    def advance(self, amount: int) -> None:
        new_start = self.start + amount
        _check_u32("start", new_start)
        self.start = new_start

    def get_slice(self, elems: Sequence[T]) -> Sequence[T]:
        return _checked_view(elems, self.start, self.length)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Index[T]]:
        return (Index(i) for i in self.indices())


@dataclass(order=True)
class PairSlice(Generic[T]):
    """A slice of consecutive pairs stored flat in one list."""

    inner: Slice[T]

    @classmethod
    def empty(cls) -> PairSlice[T]:
        return cls(Slice.empty())

    @classmethod
    def of_pairs(cls, start: int, pair_count: int) -> PairSlice[T]:
        return cls(Slice(start, pair_count * 2))

    @property
    def start(self) -> int:
        return self.inner.start

    def indices_iter(self) -> Iterator[tuple[int, int]]:
        """Yield the flat positions of each pair's two members."""
        for i in range(self.inner.start, self.inner.start + self.inner.length, 2):
            yield i, i + 1

    def is_empty(self) -> bool:
        return self.inner.length == 0

    def __len__(self) -> int:
        return self.inner.length // 2


@dataclass(order=True)
class Slice2(Generic[T, U]):
    """Two equally long runs at different offsets."""

    start1: int = 0
    start2: int = 0
    length: int = 0

    def __post_init__(self) -> None:
        _check_u32("start1", self.start1)
        _check_u32("start2", self.start2)
        _check_u16("length", self.length)

    @classmethod
    def empty(cls) -> Slice2[T, U]:
        return cls(0, 0, 0)

    def slice_first(self) -> Slice[T]:
        return Slice(self.start1, self.length)

    def slice_second(self) -> Slice[U]:
        return Slice(self.start2, self.length)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[tuple[Index[T], Index[U]]]:
        for offset in range(self.length):
            yield Index(self.start1 + offset), Index(self.start2 + offset)


@dataclass(order=True)
class Slice3(Generic[T, U, V]):
    """Three equally long runs at different offsets."""

    start1: int = 0
    start2: int = 0
    start3: int = 0
    length: int = 0

    def __post_init__(self) -> None:
        _check_u32("start1", self.start1)
        _check_u32("start2", self.start2)
        _check_u32("start3", self.start3)
        _check_u16("length", self.length)

    @classmethod
    def empty(cls) -> Slice3[T, U, V]:
        return cls(0, 0, 0, 0)

    def slice_first(self) -> Slice[T]:
        return Slice(self.start1, self.length)

    def slice_second(self) -> Slice[U]:
        return Slice(self.start2, self.length)

    def slice_third(self) -> Slice[V]:
        return Slice(self.start3, self.length)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[tuple[Index[T], Index[U], Index[V]]]:
        for offset in range(self.length):
            yield (
                Index(self.start1 + offset),
                Index(self.start2 + offset),
                Index(self.start3 + offset),
            )


def index_push_new(vector: MutableSequence[T], value: T) -> Index[T]:
    """Append ``value`` and return its index."""
    index = Index(len(vector))
    vector.append(value)
    return index


def slice_extend_new(vector: MutableSequence[T], values: Iterable[T]) -> Slice[T]:
    """Append ``values`` and return a slice covering the new elements."""
    start = len(vector)
    vector.extend(values)
    return Slice(start, len(vector) - start)