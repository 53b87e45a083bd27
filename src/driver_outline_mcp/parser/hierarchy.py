"""Helpers over symbol forests: ordering, counting and flattening."""

from dataclasses import replace
from typing import Iterable

from .symbols import Symbol


def _position_key(symbol: Symbol) -> tuple[int, int]:
    start = symbol.range.start
    return (start.line, start.character)


def sort_symbols(symbols: Iterable[Symbol]) -> tuple[Symbol, ...]:
    """Sort a forest by start line, then start column, at every level.

    The sort is stable, so symbols starting at the same position keep
    their original relative order. Returns new nodes; the input is not
    touched.
    """
    ordered = sorted(symbols, key=_position_key)
    return tuple(
        replace(s, children=sort_symbols(s.children)) if s.children else s
        for s in ordered
    )


def count_symbols(symbols: Iterable[Symbol]) -> int:
    """Count every node of a forest, descendants included."""
    return sum(1 + count_symbols(s.children) for s in symbols)


def flatten_tree(symbols: Iterable[Symbol], depth: int = 0) -> list[tuple[Symbol, int]]:
    """Flatten symbol tree with depth information.

    Returns list of (symbol, depth) tuples for indentation.
    """
    result = []
    for symbol in symbols:
        result.append((symbol, depth))
        result.extend(flatten_tree(symbol.children, depth + 1))
    return result
