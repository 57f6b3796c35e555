"""The lowered IR: first-order procedures made of statements, ready for codegen.

After reference counting is added, this IR can be handed straight to code
generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from lambdaset.base import LowLevel, NumberLiteral, Primitive
from lambdaset.env import StringLiteralId
from lambdaset.soa import Index, NonEmptySlice, Slice
from lambdaset.symbol import ForeignSymbolId, Symbol

_U16_MAX = 0xFFFF
_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF


def _check_u16(name: str, value: int) -> None:
    if not 0 <= value <= _U16_MAX:
        raise ValueError(f"{name} must fit in 16 unsigned bits, got {value}")


def _check_u64(name: str, value: int) -> None:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must fit in 64 unsigned bits, got {value}")


@dataclass(frozen=True)
class TagIdIntType:
    """The numeric id of a tag within its union."""

    id: int

    def __post_init__(self) -> None:
        _check_u16("tag id", self.id)


@dataclass(frozen=True)
class LowerLayoutId:
    """The id of a layout in a ``LowerIR``."""

    index: Index


@dataclass(frozen=True)
class LowerExprId:
    """The id of an expression in a ``LowerIR``."""

    index: Index


@dataclass(frozen=True)
class LowerStmtId:
    """The id of a statement in a ``LowerIR``."""

    index: Index


# Layouts


@dataclass(frozen=True)
class PrimitiveLayout:
    primitive: Primitive


@dataclass(frozen=True)
class BoxLayout:
    inner: LowerLayoutId


@dataclass(frozen=True)
class ListLayout:
    elem: LowerLayoutId


@dataclass(frozen=True)
class StructLayout:
    fields: NonEmptySlice


@dataclass(frozen=True)
class TagUnionLayout:
    payloads: NonEmptySlice


@dataclass(frozen=True)
class UnitLayout:
    """The layout of an empty value."""


LowerLayout = Union[
    PrimitiveLayout, BoxLayout, ListLayout, StructLayout, TagUnionLayout, UnitLayout
]


# Union layouts


@dataclass(frozen=True)
class NonRecursiveUnion:
    """A non-recursive tag union, e.g. ``[Ok a, Err e]``."""

    tags: Slice


@dataclass(frozen=True)
class RecursiveUnion:
    """A recursive tag union in the general case."""

    tags: Slice


@dataclass(frozen=True)
class NonNullableUnwrappedUnion:
    """A recursive union with one constructor; no tag id is stored."""

    fields: Slice


@dataclass(frozen=True)
class NullableWrappedUnion:
    """A recursive union whose empty tag ``nullable_id`` is a null pointer."""

    nullable_id: int
    other_tags: Slice

    def __post_init__(self) -> None:
        _check_u16("nullable id", self.nullable_id)


@dataclass(frozen=True)
class NullableUnwrappedUnion:
    """A recursive union of two tags, one empty and represented as null.

    ``nullable_id`` is the id (0 or 1, as a bool) of the empty tag.
    """

    nullable_id: bool
    other_fields: Slice


UnionLayout = Union[
    NonRecursiveUnion,
    RecursiveUnion,
    NonNullableUnwrappedUnion,
    NullableWrappedUnion,
    NullableUnwrappedUnion,
]


# Expressions


@dataclass(frozen=True)
class ListLiteralElem:
    """An element of a list literal: a string, a number or a symbol."""

    value: Union[StringLiteralId, NumberLiteral, Symbol]

    def __post_init__(self) -> None:
        if not isinstance(self.value, (StringLiteralId, NumberLiteral, Symbol)):
            raise TypeError(
                f"list literal element must be a string literal, number or symbol, "
                f"got {type(self.value).__name__}"
            )


@dataclass(frozen=True)
class ByNameCall:
    symbol: Symbol
    ret_layout: LowerLayoutId
    arg_layouts: Slice


@dataclass(frozen=True)
class ByPointerCall:
    pointer: Symbol
    ret_layout: LowerLayoutId
    arg_layouts: Slice


@dataclass(frozen=True)
class ForeignCall:
    foreign_symbol: ForeignSymbolId
    ret_layout: LowerLayoutId


@dataclass(frozen=True)
class LowLevelCall:
    op: LowLevel


LowerCallType = Union[ByNameCall, ByPointerCall, ForeignCall, LowLevelCall]


@dataclass(frozen=True)
class LowerCall:
    """A call of any kind together with its argument symbols."""

    call_type: LowerCallType
    arguments: Slice = field(default_factory=Slice.empty)


@dataclass(frozen=True)
class StrExpr:
    literal: StringLiteralId


@dataclass(frozen=True)
class NumberExpr:
    literal: NumberLiteral


@dataclass(frozen=True)
class CallExpr:
    call: LowerCall


@dataclass(frozen=True)
class TagExpr:
    tag_layout: UnionLayout
    tag_id: TagIdIntType
    arguments: Slice


@dataclass(frozen=True)
class StructExpr:
    fields: NonEmptySlice


@dataclass(frozen=True)
class NullPointerExpr:
    """A null pointer."""


@dataclass(frozen=True)
class StructAtIndexExpr:
    index: int
    field_layouts: Slice
    structure: Symbol

    def __post_init__(self) -> None:
        _check_u64("index", self.index)


@dataclass(frozen=True)
class GetTagIdExpr:
    structure: Symbol
    union_layout: UnionLayout


@dataclass(frozen=True)
class UnionAtIndexExpr:
    structure: Symbol
    tag_id: TagIdIntType
    union_layout: UnionLayout
    index: int

    def __post_init__(self) -> None:
        _check_u64("index", self.index)


@dataclass(frozen=True)
class GetElementPointerExpr:
    structure: Symbol
    union_layout: UnionLayout
    indices: Slice


@dataclass(frozen=True)
class ArrayExpr:
    elem_layout: LowerLayoutId
    elems: Slice


@dataclass(frozen=True)
class EmptyArrayExpr:
    """An empty list."""


@dataclass(frozen=True)
class FunctionPointerExpr:
    """A pointer to the given function."""

    symbol: Symbol


@dataclass(frozen=True)
class AllocaExpr:
    element_layout: LowerLayoutId
    initializer: Symbol | None = None


@dataclass(frozen=True)
class ResetExpr:
    symbol: Symbol


@dataclass(frozen=True)
class ResetRefExpr:
    """Like a reset, but the children are not decremented."""

    symbol: Symbol


LowerExpr = Union[
    StrExpr,
    NumberExpr,
    CallExpr,
    TagExpr,
    StructExpr,
    NullPointerExpr,
    StructAtIndexExpr,
    GetTagIdExpr,
    UnionAtIndexExpr,
    GetElementPointerExpr,
    ArrayExpr,
    EmptyArrayExpr,
    FunctionPointerExpr,
    AllocaExpr,
    ResetExpr,
    ResetRefExpr,
]


# Statements


@dataclass(frozen=True)
class JoinPointId:
    symbol: Symbol


class CrashTag(IntEnum):
    """The source of a crash, as passed to the runtime panic handler."""

    ROC = 0
    USER = 1


@dataclass(frozen=True)
class LowerParam:
    symbol: Symbol
    layout: LowerLayoutId


@dataclass(frozen=True)
class NoBranchInfo:
    """Nothing is known about the scrutinee in this branch."""


@dataclass(frozen=True)
class ConstructorBranchInfo:
    scrutinee: Symbol
    layout: LowerLayoutId
    tag_id: TagIdIntType


@dataclass(frozen=True)
class ListBranchInfo:
    scrutinee: Symbol
    len: int

    def __post_init__(self) -> None:
        _check_u64("len", self.len)


@dataclass(frozen=True)
class UniqueBranchInfo:
    scrutinee: Symbol
    unique: bool


LowerBranchInfo = Union[
    NoBranchInfo, ConstructorBranchInfo, ListBranchInfo, UniqueBranchInfo
]


@dataclass(frozen=True)
class LetStmt:
    symbol: Symbol
    expr: LowerExprId
    layout: LowerExprId
    continuation: LowerStmtId


@dataclass(frozen=True)
class SwitchStmt:
    """Jump on an integer condition to the branch whose value equals it."""

    cond_symbol: Symbol
    cond_layout: LowerLayoutId
    branches: Slice
    default_branch: tuple[LowerBranchInfo, LowerStmtId]
    ret_layout: LowerLayoutId


@dataclass(frozen=True)
class RetStmt:
    symbol: Symbol


@dataclass(frozen=True)
class JoinStmt:
    """``join id params = body in remainder``."""

    id: JoinPointId
    parameters: Slice
    body: LowerStmtId
    remainder: LowerStmtId


@dataclass(frozen=True)
class JumpStmt:
    id: JoinPointId
    arguments: Slice


@dataclass(frozen=True)
class CrashStmt:
    symbol: Symbol
    tag: CrashTag


LowerStmt = Union[LetStmt, SwitchStmt, RetStmt, JoinStmt, JumpStmt, CrashStmt]


@dataclass(frozen=True)
class LowerProcedure:
    arguments: Slice
    body: LowerStmtId
    return_layout: LowerLayoutId


@dataclass
class LowerIR:
    """Procedures and the expressions, layouts and statements they use."""

    procs: dict[Symbol, LowerProcedure] = field(default_factory=dict)
    exprs: list[LowerExpr] = field(default_factory=list)
    layouts: list[LowerLayout] = field(default_factory=list)
    stmts: list[LowerStmt] = field(default_factory=list)

    def add_expr(self, expr: LowerExpr) -> LowerExprId:
        expr_id = LowerExprId(Index(len(self.exprs)))
        self.exprs.append(expr)
        return expr_id

    def add_layout(self, layout: LowerLayout) -> LowerLayoutId:
        layout_id = LowerLayoutId(Index(len(self.layouts)))
        self.layouts.append(layout)
        return layout_id

    def add_stmt(self, stmt: LowerStmt) -> LowerStmtId:
        stmt_id = LowerStmtId(Index(len(self.stmts)))
        self.stmts.append(stmt)
        return stmt_id

    def add_proc(
        self, symbol: Symbol, procedure: LowerProcedure
    ) -> LowerProcedure | None:
        """Register a procedure; return the one it replaced, if any."""
        previous = self.procs.get(symbol)
        self.procs[symbol] = procedure
        return previous

    def __getitem__(self, index):
        if isinstance(index, LowerExprId):
            return self.exprs[index.index.index]
        if isinstance(index, LowerLayoutId):
            return self.layouts[index.index.index]
        if isinstance(index, LowerStmtId):
            return self.stmts[index.index.index]
        raise TypeError(f"cannot index a LowerIR with {type(index).__name__}")