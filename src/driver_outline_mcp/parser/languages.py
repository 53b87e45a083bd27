"""C/C++ file filtering rules and tree-sitter grammar specifications."""

import os
import re
from dataclasses import dataclass

from .symbols import SymbolKind


# Source file extensions (matched case-insensitively)
SOURCE_FILE_PATTERN = re.compile(r"\.(c|h|cpp|hpp|cc|cxx|c\+\+|h\+\+|inl|txx)$", re.IGNORECASE)

# Directory names never descended into (exact, case-sensitive)
IGNORED_DIRECTORIES = frozenset([
    ".git", ".vscode", "node_modules", "build", "dist", "out", "__pycache__",
])

HIDDEN_PREFIX = "."


def is_source_file(name: str) -> bool:
    """Check whether a file name has a C/C++-family extension."""
    return SOURCE_FILE_PATTERN.search(name) is not None


def is_ignored_directory(name: str) -> bool:
    """Check whether a directory should be pruned from the scan."""
    return name in IGNORED_DIRECTORIES or name.startswith(HIDDEN_PREFIX)


@dataclass
class LanguageSpec:
    """How to outline one tree-sitter grammar."""
    # tree-sitter language name (for tree-sitter-language-pack)
    ts_language: str

    # Type nodes that produce a symbol when they carry a body
    # Maps node_type -> symbol kind
    type_node_kinds: dict[str, SymbolKind]

    # Nodes whose children are outlined as if they were siblings
    # (preprocessor conditionals, templates, extern "C" blocks)
    transparent_node_types: list[str]

    # Nodes holding the members of a namespace or type
    body_node_types: list[str]

    # Declarator wrappers to unwrap when looking for a name
    declarator_wrappers: list[str]


C_SPEC = LanguageSpec(
    ts_language="c",
    type_node_kinds={
        "struct_specifier": SymbolKind.STRUCT,
        "union_specifier": SymbolKind.STRUCT,
        "enum_specifier": SymbolKind.ENUM,
    },
    transparent_node_types=[
        "preproc_if", "preproc_ifdef", "preproc_else", "preproc_elif",
        "preproc_elifdef",
    ],
    body_node_types=["field_declaration_list", "enumerator_list"],
    declarator_wrappers=[
        "pointer_declarator", "array_declarator", "parenthesized_declarator",
        "init_declarator", "attributed_declarator",
    ],
)


CPP_SPEC = LanguageSpec(
    ts_language="cpp",
    type_node_kinds={
        "struct_specifier": SymbolKind.STRUCT,
        "union_specifier": SymbolKind.STRUCT,
        "class_specifier": SymbolKind.CLASS,
        "enum_specifier": SymbolKind.ENUM,
    },
    transparent_node_types=C_SPEC.transparent_node_types + [
        "template_declaration", "linkage_specification", "declaration_list",
    ],
    body_node_types=["field_declaration_list", "enumerator_list", "declaration_list"],
    declarator_wrappers=C_SPEC.declarator_wrappers + ["reference_declarator"],
)


LANGUAGE_REGISTRY = {
    "c": C_SPEC,
    "cpp": CPP_SPEC,
}


def language_for_file(name: str) -> str:
    """Pick the grammar for a source file.

    Lowercase ``.c`` files use the C grammar; headers and everything else
    (``.C`` included) use the C++ grammar, which also accepts C headers.
    """
    _, ext = os.path.splitext(name)
    return "c" if ext == ".c" else "cpp"
