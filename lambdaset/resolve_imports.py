"""The artifacts of import resolution and type checking fed into the build stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from lambdaset.base import TypeVar
from lambdaset.region import Region, _check_unsigned
from lambdaset.soa import Index
from lambdaset.symbol import Symbol


class EarlyReturnKind(Enum):
    """How a function returns early."""

    RETURN = "return"
    TRY = "try"


@dataclass(frozen=True)
class OptTypeVar:
    """A type variable that may be absent."""

    var: TypeVar | None = None


@dataclass(frozen=True)
class IllegalCycleMark:
    """Marks whether solving found a recursive let-cycle to be illegal."""

    opt_var: OptTypeVar = field(default_factory=OptTypeVar)


@dataclass(frozen=True)
class ValueDecl:
    """A plain value declaration."""


@dataclass(frozen=True)
class _IndexedDecl:
    index: Index


class FunctionDecl(_IndexedDecl):
    """A non-recursive function; ``index`` points into the function bodies."""


class RecursiveDecl(_IndexedDecl):
    """A recursive function; ``index`` points into the function bodies."""


class TailRecursiveDecl(_IndexedDecl):
    """A tail-recursive function; ``index`` points into the function bodies."""


class DestructureDecl(_IndexedDecl):
    """A destructuring declaration; ``index`` points into the destructs."""


@dataclass(frozen=True)
class MutualRecursionDecl:
    """Marks the start of ``length`` mutually recursive declarations."""

    length: int
    cycle_mark: IllegalCycleMark = field(default_factory=IllegalCycleMark)

    def __post_init__(self) -> None:
        _check_unsigned("length", self.length, 16)


DeclarationTag = Union[
    ValueDecl,
    FunctionDecl,
    RecursiveDecl,
    TailRecursiveDecl,
    DestructureDecl,
    MutualRecursionDecl,
]


@dataclass
class FunctionDef:
    """The typed signature and captures of one function."""

    closure_type: TypeVar
    return_type: TypeVar
    fx_type: TypeVar
    early_returns: list[tuple[TypeVar, Region, EarlyReturnKind]] = field(
        default_factory=list
    )
    captured_symbols: list[tuple[Symbol, TypeVar]] = field(default_factory=list)
    arguments: list[tuple[TypeVar, Any, Region]] = field(default_factory=list)


@dataclass
class ResolveIR:
    """All declarations of a program after type checking."""

    declarations: list[DeclarationTag] = field(default_factory=list)
    type_vars: list[TypeVar] = field(default_factory=list)
    symbols: list[Symbol] = field(default_factory=list)
    symbol_regions: list[Region] = field(default_factory=list)
    host_exposed_annotations: dict[int, TypeVar] = field(default_factory=dict)
    function_bodies: list[FunctionDef] = field(default_factory=list)
    function_regions: list[Region] = field(default_factory=list)
    expressions: list[Any] = field(default_factory=list)
    expression_regions: list[Region] = field(default_factory=list)
    destructs: list[Any] = field(default_factory=list)