"""The lowered IR with explicit reference counting operations added."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from lambdaset.base import Primitive
from lambdaset.lower_ir import (
    CrashTag,
    JoinPointId,
    LowerBranchInfo,
    LowerExpr,
    LowerExprId,
    LowerLayout,
    LowerLayoutId,
    ListLayout,
    PrimitiveLayout,
)
from lambdaset.soa import Index, Slice
from lambdaset.symbol import Symbol

_U64_MAX = 0xFFFF_FFFF_FFFF_FFFF


def _check_u64(name: str, value: int) -> None:
    if not 0 <= value <= _U64_MAX:
        raise ValueError(f"{name} must fit in 64 unsigned bits, got {value}")


@dataclass(frozen=True)
class RefCountStmtId:
    """The id of a statement in a ``RefCountIR``."""

    index: Index


# Reference count changes


@dataclass(frozen=True)
class Inc:
    """Increment a reference count by ``amount``."""

    symbol: Symbol
    amount: int

    def __post_init__(self) -> None:
        _check_u64("amount", self.amount)


@dataclass(frozen=True)
class Dec:
    """Decrement a reference count, recursively freeing children at zero."""

    symbol: Symbol


@dataclass(frozen=True)
class DecRef:
    """Decrement without touching children; only frees the outer value."""

    symbol: Symbol


@dataclass(frozen=True)
class Free:
    """Deallocate unconditionally."""

    symbol: Symbol


ModifyRefCount = Union[Inc, Dec, DecRef, Free]


# Statements


@dataclass(frozen=True)
class RefCountLet:
    symbol: Symbol
    expr: LowerExprId
    layout: LowerExprId
    continuation: RefCountStmtId


@dataclass(frozen=True)
class RefCountSwitch:
    """Jump on an integer condition to the branch whose value equals it."""

    cond_symbol: Symbol
    cond_layout: LowerLayoutId
    branches: Slice
    default_branch: tuple[LowerBranchInfo, RefCountStmtId]
    ret_layout: LowerLayoutId


@dataclass(frozen=True)
class RefCountRet:
    symbol: Symbol


@dataclass(frozen=True)
class RefCountChange:
    """Change the reference count of ``symbol``."""

    symbol: Symbol
    change: ModifyRefCount


@dataclass(frozen=True)
class RefCountJoin:
    """``join id params = body in remainder``."""

    id: JoinPointId
    parameters: Slice
    body: RefCountStmtId
    remainder: RefCountStmtId


@dataclass(frozen=True)
class RefCountJump:
    id: JoinPointId
    arguments: Slice


@dataclass(frozen=True)
class RefCountCrash:
    symbol: Symbol
    tag: CrashTag


RefCountStmt = Union[
    RefCountLet,
    RefCountSwitch,
    RefCountRet,
    RefCountChange,
    RefCountJoin,
    RefCountJump,
    RefCountCrash,
]


@dataclass(frozen=True)
class RefCountProcedure:
    arguments: Slice
    body: RefCountStmtId
    return_layout: LowerLayoutId


class Ownership(Enum):
    """Whether a value is owned or borrowed by its user."""

    OWNED = "owned"
    BORROWED = "borrowed"


@dataclass(frozen=True)
class BorrowSignature:
    """A 64-bit mask recording ownership of a series of values."""

    bits: int = 0

    def __post_init__(self) -> None:
        _check_u64("bits", self.bits)


@dataclass
class RefCountIR:
    """Procedures with reference counting, and what they refer to."""

    procs: dict[Symbol, RefCountProcedure] = field(default_factory=dict)
    exprs: list[LowerExpr] = field(default_factory=list)
    layouts: list[LowerLayout] = field(default_factory=list)
    stmts: list[RefCountStmt] = field(default_factory=list)

    def add_expr(self, expr: LowerExpr) -> LowerExprId:
        expr_id = LowerExprId(Index(len(self.exprs)))
        self.exprs.append(expr)
        return expr_id

    def add_layout(self, layout: LowerLayout) -> LowerLayoutId:
        layout_id = LowerLayoutId(Index(len(self.layouts)))
        self.layouts.append(layout)
        return layout_id

    def add_stmt(self, stmt: RefCountStmt) -> RefCountStmtId:
        stmt_id = RefCountStmtId(Index(len(self.stmts)))
        self.stmts.append(stmt)
        return stmt_id

    def add_proc(
        self, symbol: Symbol, procedure: RefCountProcedure
    ) -> RefCountProcedure | None:
        """Register a procedure; return the one it replaced, if any."""
        previous = self.procs.get(symbol)
        self.procs[symbol] = procedure
        return previous

    def __getitem__(self, index):
        if isinstance(index, LowerExprId):
            return self.exprs[index.index.index]
        if isinstance(index, LowerLayoutId):
            return self.layouts[index.index.index]
        if isinstance(index, RefCountStmtId):
            return self.stmts[index.index.index]
        raise TypeError(f"cannot index a RefCountIR with {type(index).__name__}")


def layout_to_ownership(layout_id: LowerLayoutId, lower_ir) -> Ownership:
    """Lists and strings are borrowed; every other layout is owned."""
    layout = lower_ir[layout_id]
    if isinstance(layout, ListLayout):
        return Ownership.BORROWED
    if isinstance(layout, PrimitiveLayout) and layout.primitive is Primitive.STR:
        return Ownership.BORROWED
    return Ownership.OWNED