"""The shared environment of strings, names and problems used by every stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from lambdaset.problem import CompilerProblem, Problem
from lambdaset.soa import Index, Slice, slice_extend_new
from lambdaset.string_store import DedupedStringId, DedupedStringStore
from lambdaset.symbol import SymbolStore


@dataclass(frozen=True)
class StringLiteralId:
    """The id of a string literal stored in an ``Env``."""

    index: Index


@dataclass(frozen=True)
class FieldNameId:
    """The id of a record field name."""

    id: DedupedStringId


@dataclass(frozen=True)
class FieldNameIdSlice:
    """A run of field name ids."""

    slice: Slice


@dataclass(frozen=True)
class TagNameId:
    """The id of a tag name."""

    id: DedupedStringId


@dataclass(frozen=True)
class TagNameIdSlice:
    """A run of tag name ids."""

    slice: Slice


@dataclass
class FieldNameCache:
    """Deduplicated field names and the id runs that refer to them."""

    field_names: DedupedStringStore = field(default_factory=DedupedStringStore)
    name_ids_for_slicing: list[FieldNameId] = field(default_factory=list)

    def add_name(self, name: str) -> FieldNameId:
        return FieldNameId(self.field_names.insert(name))

    def add_name_slice(self, name_ids: Iterable[FieldNameId]) -> FieldNameIdSlice:
        return FieldNameIdSlice(slice_extend_new(self.name_ids_for_slicing, name_ids))


@dataclass
class TagNameCache:
    """Deduplicated tag names and the id runs that refer to them."""

    tag_names: DedupedStringStore = field(default_factory=DedupedStringStore)
    name_ids_for_slicing: list[TagNameId] = field(default_factory=list)

    def add_name(self, name: str) -> TagNameId:
        return TagNameId(self.tag_names.insert(name))

    def add_name_slice(self, name_ids: Iterable[TagNameId]) -> TagNameIdSlice:
        return TagNameIdSlice(slice_extend_new(self.name_ids_for_slicing, name_ids))


@dataclass
class Env:
    """Data shared across the compiler stages.

    Index it with a string literal, field name, tag name or name-slice id to
    get back what was stored.
    """

    symbols: SymbolStore = field(default_factory=SymbolStore)
    # String literals are kept as given: they tend to be unique and large.
    string_literals: list[str] = field(default_factory=list)
    tag_names: TagNameCache = field(default_factory=TagNameCache)
    field_names: FieldNameCache = field(default_factory=FieldNameCache)
    problems: list[Problem] = field(default_factory=list)
    compiler_problems: list[CompilerProblem] = field(default_factory=list)

    def add_string_literal(self, s: str) -> StringLiteralId:
        position = len(self.string_literals)
        self.string_literals.append(s)
        return StringLiteralId(Index(position))

    def add_field_name(self, name: str) -> FieldNameId:
        return self.field_names.add_name(name)

    def add_field_name_slice(self, name_ids: Iterable[FieldNameId]) -> FieldNameIdSlice:
        return self.field_names.add_name_slice(name_ids)

    def add_tag_name(self, name: str) -> TagNameId:
        return self.tag_names.add_name(name)

    def add_tag_name_slice(self, name_ids: Iterable[TagNameId]) -> TagNameIdSlice:
        return self.tag_names.add_name_slice(name_ids)

    def __getitem__(self, key):
        if isinstance(key, StringLiteralId):
            return self.string_literals[key.index.index]
        if isinstance(key, FieldNameId):
            return self.field_names.field_names[key.id]
        if isinstance(key, FieldNameIdSlice):
            return list(key.slice.get_slice(self.field_names.name_ids_for_slicing))
        if isinstance(key, TagNameId):
            return self.tag_names.tag_names[key.id]
        if isinstance(key, TagNameIdSlice):
            return list(key.slice.get_slice(self.tag_names.name_ids_for_slicing))
        raise TypeError(f"cannot index an Env with {type(key).__name__}")