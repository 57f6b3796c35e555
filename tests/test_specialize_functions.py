import pytest

from lambdaset.base import NumberKind, NumberLiteral, Primitive
from lambdaset.env import Env
from lambdaset.problem import CompilerProblem, CompilerStage
from lambdaset.region import Position, Region
from lambdaset.soa import Index, NonEmptySlice, Slice, Slice2, Slice3
from lambdaset.specialize_functions import (
    AppliedTagPattern,
    CallExpr,
    CompilerBugPattern,
    FuncSpecDef,
    FuncSpecExprId,
    FuncSpecIR,
    FuncSpecPatternId,
    FuncSpecTypeId,
    FuncSpecWhenBranch,
    GuardDestruct,
    LetExpr,
    ListType,
    LookupExpr,
    NumberLiteralPattern,
    PrimitiveType,
    StrExpr,
    StructDestructurePattern,
    TagExpr,
    TagUnionType,
    UnitExpr,
    WhenExpr,
)
from lambdaset.symbol import IdentId, ModuleId, Symbol


def test_types_round_trip_through_ir():
    ir = FuncSpecIR()
    elem = ir.add_type(PrimitiveType(Primitive.I64))
    lst = ir.add_type(ListType(elem))
    assert ir[lst] == ListType(elem)
    assert ir[ir[lst].elem] == PrimitiveType(Primitive.I64)
    assert len(ir.types) == 2


def test_call_names_function_by_symbol():
    ir = FuncSpecIR()
    fn_type = ir.add_type(PrimitiveType(Primitive.STR))
    symbol = Symbol(ModuleId(0), IdentId(7))
    call_id = ir.add_expr(CallExpr(fn_type, symbol, Slice2.empty()))
    call = ir[call_id]
    assert call.fn_symbol == symbol
    assert len(call.args) == 0


def test_let_expr_round_trip():
    ir = FuncSpecIR()
    t = ir.add_type(PrimitiveType(Primitive.U8))
    value = ir.add_expr(UnitExpr())
    pattern = ir.add_pattern(NumberLiteralPattern(NumberLiteral(NumberKind.U8, 1)))
    definition = FuncSpecDef(pattern, Slice2.empty(), value, t)
    let_id = ir.add_expr(LetExpr(definition))
    assert ir[let_id].definition.expr == value
    assert ir[ir[let_id].definition.pattern] == NumberLiteralPattern(
        NumberLiteral(NumberKind.U8, 1)
    )


def test_string_literal_expression_resolves_through_env():
    env = Env()
    literal = env.add_string_literal("hello")
    ir = FuncSpecIR()
    expr_id = ir.add_expr(StrExpr(literal))
    assert env[ir[expr_id].literal] == "hello"


def test_regions_follow_exprs():
    ir = FuncSpecIR()
    region = Region(Position(1), Position(4))
    first = ir.add_expr(UnitExpr(), region)
    second = ir.add_expr(UnitExpr())
    assert ir.expr_regions[first.index.index] == region
    assert ir.expr_regions[second.index.index] == Region()
    assert len(ir.expr_regions) == len(ir.exprs)


def test_when_expr_branches():
    ir = FuncSpecIR()
    t = ir.add_type(PrimitiveType(Primitive.BOOL))
    value = ir.add_expr(LookupExpr(IdentId(1), t))
    branch = FuncSpecWhenBranch(NonEmptySlice(0, 1), None, value)
    when = WhenExpr(value, t, t, NonEmptySlice(0, 1))
    when_id = ir.add_expr(when)
    assert ir[when_id].branches.as_slice() == Slice(0, 1)
    assert branch.guard is None


def test_tag_union_type_needs_payloads():
    with pytest.raises(ValueError):
        TagUnionType(NonEmptySlice(0, 0))
    union = TagUnionType(NonEmptySlice(4, 2))
    assert len(union.payloads) == 2


def test_tag_discriminant_range():
    union = FuncSpecTypeId(Index(0))
    assert TagExpr(3, union, Slice2.empty()).discriminant == 3
    with pytest.raises(ValueError):
        TagExpr(1 << 16, union, Slice2.empty())


def test_applied_tag_pattern_args_iterate():
    pattern = AppliedTagPattern(FuncSpecTypeId(Index(0)), IdentId(2), Slice(3, 2))
    assert [i.index for i in pattern.args] == [3, 4]


def test_struct_destructure_with_guard_and_spread():
    ir = FuncSpecIR()
    t = ir.add_type(PrimitiveType(Primitive.STR))
    inner = ir.add_pattern(CompilerBugPattern(CompilerProblem(CompilerStage.SPECIALIZE_FUNCTIONS)))
    guard = GuardDestruct(t, inner)
    pattern = StructDestructurePattern(t, Slice3(0, 0, 0, 1), (t, inner))
    pattern_id = ir.add_pattern(pattern)
    assert ir[pattern_id].opt_spread == (t, inner)
    assert ir[guard.pattern].problem.stage is CompilerStage.SPECIALIZE_FUNCTIONS
    assert StructDestructurePattern(t, Slice3.empty()).opt_spread is None


def test_indexing_with_other_stage_id_raises():
    ir = FuncSpecIR()
    expr_id = ir.add_expr(UnitExpr())
    with pytest.raises(TypeError):
        ir["0"]
    assert ir[expr_id] == UnitExpr()
    assert len(ir.exprs) == 1


def test_indexing_missing_pattern_raises():
    ir = FuncSpecIR()
    with pytest.raises(IndexError):
        ir[FuncSpecPatternId(Index(0))]


def test_expr_ids_are_sequential():
    ir = FuncSpecIR()
    ids = [ir.add_expr(UnitExpr()) for _ in range(3)]
    assert [i.index.index for i in ids] == list(range(3))
    assert ids[0] == FuncSpecExprId(Index(0))