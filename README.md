# lambdaset

Data structures for the intermediate representations of a compiler pipeline
that compiles functions through lambda sets. Each representation stores its
entries in flat, index-addressed lists ("struct of arrays") and refers to them
by small typed ids instead of by object references.

## Modules

Shared building blocks:

- `lambdaset.soa` — `Index`, `EitherIndex`, `Slice`, `NonEmptySlice`,
  `PairSlice`, `Slice2`, `Slice3`, plus `index_push_new` (append a value and
  get its `Index`) and `slice_extend_new` (append values and get a `Slice`
  over them). Offsets must fit in 32 unsigned bits and lengths in 16; values
  outside raise `ValueError`.
- `lambdaset.base` — `Primitive`, `NumberKind`, `NumberLiteral` (range-checked
  against its kind), `Recursive`, `LowLevel`, `TypeVar`.
- `lambdaset.region` — `Position` and `Region`; an all-zero region prints as `…`,
  any other as `@start-end`.
- `lambdaset.string_store` — `fnv_str_hash` (32-bit FNV-1 over UTF-8 bytes) and
  `DedupedStringStore`, which stores a string once per distinct hash.
- `lambdaset.symbol` — `Ident`, `IdentAttributes`, `IdentProblems`, `ModuleId`,
  `IdentId`, `Symbol`, `SymbolStore` (hands out fresh ident ids per module via
  `insert_new`), `ModuleStore`, `ForeignSymbol`, `ForeignSymbolId`,
  `ForeignSymbols`.
- `lambdaset.problem` — `CompilerStage`, `CompilerProblem`, `Problem`.
- `lambdaset.env` — `Env`, holding the symbol store, string literals, and
  deduplicated field and tag names.

Intermediate representations, in pipeline order:

| Module | Contents |
| --- | --- |
| `lambdaset.resolve_imports` | `ResolveIR`: declarations, function definitions and type variables from type checking |
| `lambdaset.specialize_functions` | `FuncSpecIR`: expressions, patterns and types after higher-order functions are specialized per use |
| `lambdaset.lower_ir` | `LowerIR`: procedures, statements, expressions and layouts |
| `lambdaset.reference_count` | `RefCountIR`: lowered statements plus reference-count changes (`Inc`, `Dec`, `DecRef`, `Free`), and `layout_to_ownership` |

Each IR container has `add_*` methods that append an entry and return its id;
`ir[some_id]` returns the stored entry, and indexing with an id of the wrong
kind raises `TypeError`. `LowerIR.add_proc` and `RefCountIR.add_proc` register
a procedure under a symbol and return the one it replaced, if any.

## Installation

```
pip install .
```

## Example

```python
from lambdaset.env import Env
from lambdaset.soa import slice_extend_new

env = Env()

literal = env.add_string_literal("hello")
assert env[literal] == "hello"

x = env.add_field_name("x")
y = env.add_field_name("y")
fields = env.add_field_name_slice([x, y])
assert [env[f] for f in env[fields]] == ["x", "y"]

table = [10, 20]
new = slice_extend_new(table, [30, 40])
assert new.get_slice(table) == [30, 40]
```

```python
from lambdaset.base import Primitive
from lambdaset.lower_ir import LowerIR, ListLayout, PrimitiveLayout
from lambdaset.reference_count import Ownership, layout_to_ownership

ir = LowerIR()
str_layout = ir.add_layout(PrimitiveLayout(Primitive.STR))
list_layout = ir.add_layout(ListLayout(str_layout))
int_layout = ir.add_layout(PrimitiveLayout(Primitive.I64))

assert layout_to_ownership(list_layout, ir) is Ownership.BORROWED
assert layout_to_ownership(int_layout, ir) is Ownership.OWNED
```

## What this package does not do

It provides the data structures only. It does not parse or type-check source,
does not run any transformation from one representation to the next, and does
not generate code. It holds no representation for the stages between type
checking and function specialization. There is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```