"""Primitive types, number literals and other small shared compiler values."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum, IntEnum

_U32_MAX = 0xFFFF_FFFF


class Primitive(Enum):
    """The built-in scalar types."""

    CRASH = "Crash"
    STR = "Str"
    U8 = "U8"
    I8 = "I8"
    U16 = "U16"
    I16 = "I16"
    U32 = "U32"
    I32 = "I32"
    U64 = "U64"
    I64 = "I64"
    U128 = "U128"
    I128 = "I128"
    F32 = "F32"
    F64 = "F64"
    DEC = "Dec"
    BOOL = "Bool"


class NumberKind(Enum):
    """The width and signedness of a number literal."""

    I8 = "I8"
    U8 = "U8"
    I16 = "I16"
    U16 = "U16"
    I32 = "I32"
    U32 = "U32"
    I64 = "I64"
    U64 = "U64"
    I128 = "I128"
    U128 = "U128"
    F32 = "F32"
    F64 = "F64"
    DEC = "Dec"

    @property
    def is_integer(self) -> bool:
        return self.value[0] in "IU"

    @property
    def bounds(self) -> tuple[int, int] | None:
        """Inclusive integer bounds, or None for fractional kinds."""
        if not self.is_integer:
            return None
        bits = int(self.value[1:])
        if self.value[0] == "I":
            return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        return 0, (1 << bits) - 1


@dataclass(frozen=True)
class NumberLiteral:
    """A number literal tagged with its kind; the value is checked against it."""

    kind: NumberKind
    value: int | float

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"number literal value must be int or float, got {value!r}")
        bounds = self.kind.bounds
        if bounds is not None:
            if not isinstance(value, int):
                raise TypeError(f"{self.kind.value} literal needs an integer, got {value!r}")
            low, high = bounds
            if not low <= value <= high:
                raise ValueError(f"{value} out of range for {self.kind.value}")
            return
        if self.kind is NumberKind.F32:
            try:
                narrowed = struct.unpack("<f", struct.pack("<f", float(value)))[0]
            except OverflowError as exc:
                raise ValueError(f"{value} out of range for F32") from exc
            object.__setattr__(self, "value", narrowed)
        else:
            object.__setattr__(self, "value", float(value))


class Recursive(IntEnum):
    """How a definition refers to itself."""

    NOT_RECURSIVE = 0
    RECURSIVE = 1
    TAIL_RECURSIVE = 2


@dataclass(frozen=True)
class LowLevel:
    """A low-level builtin operation."""


@dataclass(frozen=True, order=True)
class TypeVar:
    """A type variable from type checking."""

    id: int

    def __post_init__(self) -> None:
        if not 0 <= self.id <= _U32_MAX:
            raise ValueError(f"type variable id must fit in 32 unsigned bits, got {self.id}")