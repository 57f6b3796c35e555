"""Source positions and regions."""

from __future__ import annotations

from dataclasses import dataclass, field


def _check_unsigned(name: str, value: int, bits: int) -> None:
    """Raise ``ValueError`` unless ``value`` fits in ``bits`` unsigned bits."""
    if not 0 <= value < 1 << bits:
        raise ValueError(f"{name} must fit in {bits} unsigned bits, got {value}")


@dataclass(frozen=True, order=True)
class Position:
    """A byte offset into a source file."""

    offset: int = 0

    def __post_init__(self) -> None:
        _check_unsigned("offset", self.offset, 32)

    @classmethod
    def zero(cls) -> Position:
        return cls(0)


@dataclass(frozen=True, order=True)
class Region:
    """A span of source between two positions."""

    start: Position = field(default_factory=Position.zero)
    end: Position = field(default_factory=Position.zero)

    def __repr__(self) -> str:
        zero = Position.zero()
        if self.start == zero and self.end == zero:
            return "…"
        return f"@{self.start.offset}-{self.end.offset}"