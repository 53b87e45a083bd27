"""Symbol dataclasses: positions, ranges, kinds and the symbol tree node."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class SymbolKind(IntEnum):
    """Kind of a code symbol.

    Values follow the editor symbol-kind numbering so the integer can be
    emitted as a stable ``typeCode`` in reports.
    """
    FILE = 0
    MODULE = 1
    NAMESPACE = 2
    PACKAGE = 3
    CLASS = 4
    METHOD = 5
    PROPERTY = 6
    FIELD = 7
    CONSTRUCTOR = 8
    ENUM = 9
    INTERFACE = 10
    FUNCTION = 11
    VARIABLE = 12
    CONSTANT = 13
    STRING = 14
    NUMBER = 15
    BOOLEAN = 16
    ARRAY = 17
    OBJECT = 18
    KEY = 19
    NULL = 20
    ENUM_MEMBER = 21
    STRUCT = 22
    EVENT = 23
    OPERATOR = 24
    TYPE_PARAMETER = 25

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``"enum member"``."""
        return self.name.lower().replace("_", " ")


@dataclass(frozen=True, order=True)
class SourcePosition:
    """Zero-based line/character position."""
    line: int = 0
    character: int = 0

    def __post_init__(self):
        if self.line < 0 or self.character < 0:
            raise ValueError(f"Negative position: {self.line}:{self.character}")


@dataclass(frozen=True)
class SourceRange:
    """Source span; ``end`` never precedes ``start``."""
    start: SourcePosition
    end: SourcePosition

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Range end {self.end} precedes start {self.start}")

    @classmethod
    def from_points(cls, start: tuple[int, int], end: tuple[int, int]) -> "SourceRange":
        """Build a range from ``(row, column)`` pairs."""
        return cls(SourcePosition(start[0], start[1]), SourcePosition(end[0], end[1]))


@dataclass(frozen=True)
class Symbol:
    """A named code construct with its nested members."""
    name: str                               # May be empty, never None
    kind: SymbolKind
    range: SourceRange                      # Zero-based
    detail: Optional[str] = None            # Signature or type text
    children: tuple["Symbol", ...] = field(default_factory=tuple)
