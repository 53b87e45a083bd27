"""Pipeline package: directory walk, symbol fetching, scheduling and convergence."""

from .walker import walk_source_files
from .fetcher import SymbolFetcher, SymbolProvider
from .scheduler import run_all
from .convergence import (
    ConvergenceController,
    ConvergenceState,
    OutlinePipeline,
    PassReport,
)

__all__ = [
    "walk_source_files",
    "SymbolFetcher",
    "SymbolProvider",
    "run_all",
    "ConvergenceController",
    "ConvergenceState",
    "OutlinePipeline",
    "PassReport",
]
