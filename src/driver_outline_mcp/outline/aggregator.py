"""Aggregate per-file symbol forests into an outline document."""

import os
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional, Sequence

from ..parser.hierarchy import sort_symbols, count_symbols
from ..parser.symbols import Symbol
from .document import DEFAULT_TITLE, FileRecord, OutlineDocument


def aggregate(
    files: Iterable[str],
    symbols_by_file: Mapping[str, Sequence[Symbol]],
    scan_root: str,
    generated_at: Optional[str] = None,
    title: str = DEFAULT_TITLE,
) -> OutlineDocument:
    """Build an outline document from one pass's results.

    Every discovered file is kept, even with no symbols, so coverage can
    be audited. Symbols for paths outside ``files`` are ignored.

    Args:
        files: Absolute paths found by the walk
        symbols_by_file: Path -> top-level symbol forest, in any order
        scan_root: Absolute scan root; relative paths are computed from it
        generated_at: Timestamp override (defaults to now, UTC)
        title: Document title

    Returns:
        OutlineDocument with files sorted by relative path
    """
    records = []
    for path in set(files):
        symbols = sort_symbols(symbols_by_file.get(path, ()))
        records.append(FileRecord(
            path=path,
            relative_path=relative_path(path, scan_root),
            symbols=symbols,
            symbol_count=count_symbols(symbols),
        ))

    records.sort(key=lambda r: path_sort_key(r.relative_path))

    return OutlineDocument(
        generated_at=generated_at or datetime.now(timezone.utc).isoformat(),
        root_directory=scan_root,
        files=tuple(records),
        title=title,
    )


def relative_path(path: str, scan_root: str) -> str:
    """Path relative to the scan root, with forward slashes."""
    return os.path.relpath(path, scan_root).replace(os.sep, "/")


def path_sort_key(path: str) -> tuple[str, str]:
    """Case-insensitive ordering key; lowercase sorts first on ties."""
    return (path.casefold(), path.swapcase())
