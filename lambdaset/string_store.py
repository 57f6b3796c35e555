"""A string store that hands out one id per distinct string hash."""

from __future__ import annotations

from dataclasses import dataclass, field

from lambdaset.soa import Index

_FNV_PRIME_32_BIT = 16777619
_OFFSET_BASIS_32_BIT = 2166136261
_U32_MASK = 0xFFFF_FFFF


def fnv_str_hash(s: str) -> int:
    """The 32-bit FNV-1 hash of the UTF-8 bytes of ``s``."""
    hash_ = _OFFSET_BASIS_32_BIT
    for byte in s.encode("utf-8"):
        hash_ = (hash_ * _FNV_PRIME_32_BIT) & _U32_MASK
        hash_ ^= byte
    return hash_


@dataclass(frozen=True)
class DedupedStringId:
    """The id of a string in a ``DedupedStringStore``."""

    index: Index


@dataclass
class DedupedStringStore:
    """Stores strings once, keyed by their hash."""

    indices_by_hash: dict[int, int] = field(default_factory=dict)
    strings: list[str] = field(default_factory=list)

    def insert(self, s: str) -> DedupedStringId:
        """Store ``s`` unless a string with the same hash is present; return its id."""
        hash_ = fnv_str_hash(s)
        position = self.indices_by_hash.get(hash_)
        if position is None:
            position = len(self.strings)
            self.strings.append(s)
            self.indices_by_hash[hash_] = position
        return DedupedStringId(Index(position))

    def __getitem__(self, string_id: DedupedStringId) -> str:
        return self.strings[string_id.index.index]

    def __len__(self) -> int:
        return len(self.strings)