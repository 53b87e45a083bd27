"""Outline document model."""

from dataclasses import dataclass
from typing import Optional

from ..parser.symbols import Symbol


DEFAULT_TITLE = "C/C++ File Outline"


@dataclass(frozen=True)
class FileRecord:
    """One scanned file and its sorted symbol forest."""
    path: str                       # Absolute path
    relative_path: str              # POSIX path relative to the scan root
    symbols: tuple[Symbol, ...]     # Top-level forest, zero-based ranges
    symbol_count: int               # All nodes, descendants included


@dataclass(frozen=True)
class OutlineDocument:
    """All files of one pipeline pass, sorted by relative path."""
    generated_at: str               # ISO-8601 timestamp (UTC)
    root_directory: str
    files: tuple[FileRecord, ...]
    title: str = DEFAULT_TITLE

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_symbols(self) -> int:
        return sum(f.symbol_count for f in self.files)

    def get_file(self, relative_path: str) -> Optional[FileRecord]:
        """Find a file record by relative path."""
        for record in self.files:
            if record.relative_path == relative_path:
                return record
        return None
