"""Parser package: symbol model, C/C++ file rules and the tree-sitter outliner."""

from .symbols import Symbol, SymbolKind, SourcePosition, SourceRange
from .languages import (
    LanguageSpec,
    LANGUAGE_REGISTRY,
    IGNORED_DIRECTORIES,
    is_source_file,
    is_ignored_directory,
    language_for_file,
)
from .extractor import outline_source, TreeSitterSymbolProvider
from .hierarchy import sort_symbols, count_symbols, flatten_tree

__all__ = [
    "Symbol",
    "SymbolKind",
    "SourcePosition",
    "SourceRange",
    "LanguageSpec",
    "LANGUAGE_REGISTRY",
    "IGNORED_DIRECTORIES",
    "is_source_file",
    "is_ignored_directory",
    "language_for_file",
    "outline_source",
    "TreeSitterSymbolProvider",
    "sort_symbols",
    "count_symbols",
    "flatten_tree",
]
