"""The IR after specializing higher-order functions.

Generic higher-order functions are copied for each concrete use, call sites
refer to the copies by symbol, and function sets become tag unions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from lambdaset.base import NumberLiteral, Primitive
from lambdaset.env import FieldNameId, StringLiteralId
from lambdaset.problem import CompilerProblem
from lambdaset.region import Region
from lambdaset.soa import Index, NonEmptySlice, Slice, Slice2, Slice3
from lambdaset.symbol import IdentId, Symbol

_U16_MAX = 0xFFFF


def _check_u16(name: str, value: int) -> None:
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must fit in 16 unsigned bits, got {value}")


@dataclass(frozen=True)
class FuncSpecTypeId:
    """The id of a type in a ``FuncSpecIR``."""

    index: Index


@dataclass(frozen=True)
class FuncSpecExprId:
    """The id of an expression in a ``FuncSpecIR``."""

    index: Index


@dataclass(frozen=True)
class FuncSpecPatternId:
    """The id of a pattern in a ``FuncSpecIR``."""

    index: Index


# Types


@dataclass(frozen=True)
class PrimitiveType:
    primitive: Primitive


@dataclass(frozen=True)
class BoxType:
    inner: FuncSpecTypeId


@dataclass(frozen=True)
class ListType:
    elem: FuncSpecTypeId


@dataclass(frozen=True)
class StructType:
    fields: NonEmptySlice


@dataclass(frozen=True)
class TagUnionType:
    payloads: NonEmptySlice


FuncSpecType = Union[PrimitiveType, BoxType, ListType, StructType, TagUnionType]


# Expressions


@dataclass(frozen=True)
class FuncSpecDef:
    """A let-definition binding a pattern to an expression."""

    pattern: FuncSpecPatternId
    pattern_vars: Slice2
    expr: FuncSpecExprId
    expr_type: FuncSpecTypeId


@dataclass(frozen=True)
class FuncSpecWhenBranch:
    """One branch of a ``when`` expression."""

    patterns: NonEmptySlice
    guard: FuncSpecExprId | None
    value: FuncSpecExprId


@dataclass(frozen=True)
class LetExpr:
    definition: FuncSpecDef


@dataclass(frozen=True)
class StrExpr:
    literal: StringLiteralId


@dataclass(frozen=True)
class NumberExpr:
    literal: NumberLiteral


@dataclass(frozen=True)
class ListExpr:
    elem_type: FuncSpecTypeId
    elems: Slice


@dataclass(frozen=True)
class LookupExpr:
    ident: IdentId
    type_: FuncSpecTypeId


@dataclass(frozen=True)
class CallExpr:
    """A call of a specialized function named by its symbol."""

    fn_type: FuncSpecTypeId
    fn_symbol: Symbol
    args: Slice2


@dataclass(frozen=True)
class UnitExpr:
    """The empty value."""


@dataclass(frozen=True)
class StructExpr:
    fields: NonEmptySlice


@dataclass(frozen=True)
class StructAccessExpr:
    """Access of exactly one field of a record, tuple or tag payload."""

    record_expr: FuncSpecExprId
    record_type: FuncSpecTypeId
    field_type: FuncSpecTypeId
    field_id: FieldNameId


@dataclass(frozen=True)
class TagExpr:
    discriminant: int
    tag_union_type: FuncSpecTypeId
    args: Slice2

    def __post_init__(self) -> None:
        _check_u16("discriminant", self.discriminant)


@dataclass(frozen=True)
class WhenExpr:
    value: FuncSpecExprId
    value_type: FuncSpecTypeId
    branch_type: FuncSpecTypeId
    branches: NonEmptySlice


@dataclass(frozen=True)
class CompilerBugExpr:
    problem: CompilerProblem


FuncSpecExpr = Union[
    LetExpr,
    StrExpr,
    NumberExpr,
    ListExpr,
    LookupExpr,
    CallExpr,
    UnitExpr,
    StructExpr,
    StructAccessExpr,
    TagExpr,
    WhenExpr,
    CompilerBugExpr,
]


# Patterns


@dataclass(frozen=True)
class RequiredDestruct:
    """A field that must be present."""


@dataclass(frozen=True)
class GuardDestruct:
    """A field matched against a further pattern."""

    type_: FuncSpecTypeId
    pattern: FuncSpecPatternId


FuncSpecDestructType = Union[RequiredDestruct, GuardDestruct]


@dataclass(frozen=True)
class IdentifierPattern:
    ident: IdentId


@dataclass(frozen=True)
class AsPattern:
    pattern: FuncSpecPatternId
    ident: IdentId


@dataclass(frozen=True)
class StrLiteralPattern:
    literal: StringLiteralId


@dataclass(frozen=True)
class NumberLiteralPattern:
    literal: NumberLiteral


@dataclass(frozen=True)
class AppliedTagPattern:
    tag_union_type: FuncSpecTypeId
    tag_name: IdentId
    args: Slice


@dataclass(frozen=True)
class StructDestructurePattern:
    struct_type: FuncSpecTypeId
    destructs: Slice3
    opt_spread: tuple[FuncSpecTypeId, FuncSpecPatternId] | None = None


@dataclass(frozen=True)
class ListPattern:
    """A list pattern, optionally split by a rest pattern at ``opt_rest[0]``."""

    elem_type: FuncSpecTypeId
    patterns: Slice
    opt_rest: tuple[int, IdentId | None] | None = None

    def __post_init__(self) -> None:
        if self.opt_rest is not None:
            _check_u16("rest index", self.opt_rest[0])


@dataclass(frozen=True)
class UnderscorePattern:
    """Matches anything and binds nothing."""


@dataclass(frozen=True)
class CompilerBugPattern:
    problem: CompilerProblem


FuncSpecPattern = Union[
    IdentifierPattern,
    AsPattern,
    StrLiteralPattern,
    NumberLiteralPattern,
    AppliedTagPattern,
    StructDestructurePattern,
    ListPattern,
    UnderscorePattern,
    CompilerBugPattern,
]


@dataclass
class FuncSpecIR:
    """Storage for the expressions, patterns and types of this stage."""

    exprs: list[FuncSpecExpr] = field(default_factory=list)
    expr_regions: list[Region] = field(default_factory=list)
    patterns: list[FuncSpecPattern] = field(default_factory=list)
    types: list[FuncSpecType] = field(default_factory=list)

    def add_expr(
        self, expr: FuncSpecExpr, region: Region | None = None
    ) -> FuncSpecExprId:
        expr_id = FuncSpecExprId(Index(len(self.exprs)))
        self.exprs.append(expr)
        self.expr_regions.append(region if region is not None else Region())
        return expr_id

    def add_pattern(self, pattern: FuncSpecPattern) -> FuncSpecPatternId:
        pattern_id = FuncSpecPatternId(Index(len(self.patterns)))
        self.patterns.append(pattern)
        return pattern_id

    def add_type(self, type_: FuncSpecType) -> FuncSpecTypeId:
        type_id = FuncSpecTypeId(Index(len(self.types)))
        self.types.append(type_)
        return type_id

    def __getitem__(self, index):
        if isinstance(index, FuncSpecExprId):
            return self.exprs[index.index.index]
        if isinstance(index, FuncSpecPatternId):
            return self.patterns[index.index.index]
        if isinstance(index, FuncSpecTypeId):
            return self.types[index.index.index]
        raise TypeError(f"cannot index a FuncSpecIR with {type(index).__name__}")