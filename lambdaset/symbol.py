"""Identifiers, modules, symbols and the store that assigns symbol ids."""

from __future__ import annotations

from dataclasses import dataclass, field

from lambdaset.soa import Index
from lambdaset.string_store import fnv_str_hash


@dataclass(frozen=True)
class _NumericId:
    id: int


class ModuleId(_NumericId):
    """The id of a module."""


class IdentId(_NumericId):
    """The id of an identifier within its module."""


@dataclass
class ModuleStore:
    """Module ids alongside their names."""

    ids: list[int] = field(default_factory=list)
    names: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class IdentAttributes:
    """Properties read off an identifier's spelling."""

    bang_suffix: bool = False
    ignored: bool = False
    reassignable: bool = False
    uppercase: bool = False


@dataclass(frozen=True)
class IdentProblems:
    """Problems found in an identifier's spelling."""


@dataclass(frozen=True)
class Ident:
    """An identifier as written in source."""

    text: str
    attributes: IdentAttributes = field(default_factory=IdentAttributes)
    problems: IdentProblems = field(default_factory=IdentProblems)


@dataclass(frozen=True)
class Symbol:
    """An identifier qualified by the module that defines it."""

    module_id: ModuleId
    ident_id: IdentId


@dataclass
class SymbolStore:
    """Assigns identifier ids per module and records them by text hash."""

    ident_ids_per_module: dict[int, dict[ModuleId, list[IdentId]]] = field(
        default_factory=dict
    )
    next_ident_id_per_module: dict[ModuleId, int] = field(default_factory=dict)
    text_index_per_symbol: dict[Symbol, int] = field(default_factory=dict)
    problems_per_text_hash: dict[int, IdentProblems] = field(default_factory=dict)
    texts: list[str] = field(default_factory=list)

    def _next_ident_id(self, module_id: ModuleId) -> IdentId:
        next_id = self.next_ident_id_per_module.get(module_id, 0)
        self.next_ident_id_per_module[module_id] = next_id + 1
        return IdentId(next_id)

    def insert_new(self, module_id: ModuleId, ident: Ident) -> Symbol:
        """Give ``ident`` a fresh id in ``module_id`` and return the new symbol."""
        text_hash = fnv_str_hash(ident.text)
        ident_id = self._next_ident_id(module_id)
        (
            self.ident_ids_per_module.setdefault(text_hash, {})
            .setdefault(module_id, [])
            .append(ident_id)
        )
        self.problems_per_text_hash[text_hash] = ident.problems
        return Symbol(module_id, ident_id)


@dataclass(frozen=True)
class ForeignSymbol:
    """A symbol provided by the host."""


@dataclass(frozen=True)
class ForeignSymbolId:
    """The id of a foreign symbol."""

    index: Index


@dataclass
class ForeignSymbols:
    """All foreign symbols known to the compiler."""

    symbols: list[ForeignSymbol] = field(default_factory=list)