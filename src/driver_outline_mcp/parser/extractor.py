"""C/C++ symbol outliner using tree-sitter."""

import asyncio
import logging
import re
from pathlib import Path
from typing import Optional

from tree_sitter_language_pack import get_parser

from ..errors import SymbolProviderError
from .symbols import Symbol, SymbolKind, SourceRange
from .languages import LanguageSpec, LANGUAGE_REGISTRY, language_for_file


logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def outline_source(content: str, language: str) -> list[Symbol]:
    """Parse C/C++ source and build its symbol forest.

    Args:
        content: Raw source code
        language: Grammar name (must be in LANGUAGE_REGISTRY)

    Returns:
        Top-level symbols, each carrying its nested members
    """
    if language not in LANGUAGE_REGISTRY:
        return []

    spec = LANGUAGE_REGISTRY[language]
    source_bytes = content.encode("utf-8")

    parser = get_parser(spec.ts_language)
    tree = parser.parse(source_bytes)

    return _outline_children(tree.root_node, spec, source_bytes, None)


class TreeSitterSymbolProvider:
    """Symbol provider that outlines files with tree-sitter grammars.

    Parsing runs in a worker thread so the event loop stays free while
    other files are fetched.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def __call__(self, file_path: str) -> list[Symbol]:
        return await asyncio.to_thread(self.outline_file, file_path)

    def outline_file(self, file_path: str) -> list[Symbol]:
        """Read and outline one file synchronously."""
        try:
            content = Path(file_path).read_text(encoding=self.encoding, errors="replace")
        except OSError as e:
            raise SymbolProviderError(f"Failed to read {file_path}: {e}") from e

        language = language_for_file(file_path)
        logger.debug("Outlining %s as %s", file_path, language)
        return outline_source(content, language)


def _outline_children(
    node,
    spec: LanguageSpec,
    source_bytes: bytes,
    scope: Optional[str],
) -> list[Symbol]:
    """Outline the named children of a container node."""
    symbols = []
    for child in node.named_children:
        if child.type in spec.transparent_node_types:
            symbols.extend(_outline_children(child, spec, source_bytes, scope))
        else:
            symbols.extend(_outline_node(child, spec, source_bytes, scope))
    return symbols


def _outline_node(
    node,
    spec: LanguageSpec,
    source_bytes: bytes,
    scope: Optional[str],
) -> list[Symbol]:
    """Build the symbols declared by a single node (possibly none)."""
    node_type = node.type

    if node_type == "function_definition":
        return [_function_symbol(node, spec, source_bytes, scope)]

    if node_type in ("declaration", "field_declaration"):
        return _declaration_symbols(node, spec, source_bytes, scope)

    if node_type == "type_definition":
        return _typedef_symbols(node, spec, source_bytes)

    if node_type == "alias_declaration":
        name = _node_text(node.child_by_field_name("name"), source_bytes)
        aliased = _node_text(node.child_by_field_name("type"), source_bytes)
        return [_make_symbol(node, name, SymbolKind.CLASS, f"using {aliased}")]

    if node_type == "namespace_definition":
        return [_namespace_symbol(node, spec, source_bytes)]

    if node_type in spec.type_node_kinds:
        symbol = _type_symbol(node, spec, source_bytes)
        return [symbol] if symbol else []

    if node_type == "enumerator":
        name = _node_text(node.child_by_field_name("name"), source_bytes)
        value = node.child_by_field_name("value")
        detail = _clean_text(_node_text(value, source_bytes)) if value else None
        return [_make_symbol(node, name, SymbolKind.ENUM_MEMBER, detail)]

    if node_type == "preproc_def":
        name = _node_text(node.child_by_field_name("name"), source_bytes)
        value = node.child_by_field_name("value")
        detail = _clean_text(_node_text(value, source_bytes)) if value else None
        return [_make_symbol(node, name, SymbolKind.CONSTANT, detail or None)]

    if node_type == "preproc_function_def":
        name = _node_text(node.child_by_field_name("name"), source_bytes)
        params = _node_text(node.child_by_field_name("parameters"), source_bytes)
        return [_make_symbol(node, name, SymbolKind.FUNCTION, f"macro {name}{params}")]

    return []


def _type_symbol(node, spec: LanguageSpec, source_bytes: bytes) -> Optional[Symbol]:
    """Outline a struct/union/class/enum that has a body."""
    body = node.child_by_field_name("body")
    if body is None:
        # Forward declaration or plain type reference
        return None

    keyword = node.type.split("_")[0]
    name = _node_text(node.child_by_field_name("name"), source_bytes)
    if not name:
        name = f"(anonymous {keyword})"

    members = _outline_children(body, spec, source_bytes, name)
    detail = keyword if node.type == "union_specifier" else None
    return _make_symbol(node, name, spec.type_node_kinds[node.type], detail, members)


def _namespace_symbol(node, spec: LanguageSpec, source_bytes: bytes) -> Symbol:
    name = _node_text(node.child_by_field_name("name"), source_bytes) or "(anonymous namespace)"
    body = node.child_by_field_name("body")
    members = _outline_children(body, spec, source_bytes, None) if body else []
    return _make_symbol(node, name, SymbolKind.NAMESPACE, None, members)


def _function_symbol(node, spec: LanguageSpec, source_bytes: bytes, scope: Optional[str]) -> Symbol:
    """Outline a function definition; its body is not descended into."""
    declarator = node.child_by_field_name("declarator")
    function_declarator = _find_function_declarator(declarator, spec)
    if function_declarator is not None:
        name_node = function_declarator.child_by_field_name("declarator")
    else:
        name_node = _innermost_declarator(declarator, spec)

    name = _node_text(name_node, source_bytes)
    kind = _function_kind(name_node, name, scope)
    return _make_symbol(node, name, kind, _build_signature(node, source_bytes))


def _declaration_symbols(
    node,
    spec: LanguageSpec,
    source_bytes: bytes,
    scope: Optional[str],
) -> list[Symbol]:
    """Outline a declaration: inline type bodies first, then each declarator."""
    symbols = []

    type_node = node.child_by_field_name("type")
    if type_node is not None and type_node.type in spec.type_node_kinds:
        inline_type = _type_symbol(type_node, spec, source_bytes)
        if inline_type:
            symbols.append(inline_type)

    type_text = _type_text(type_node, source_bytes)
    is_field = node.type == "field_declaration"

    for declarator in node.children_by_field_name("declarator"):
        function_declarator = _find_function_declarator(declarator, spec)
        if function_declarator is not None:
            name_node = function_declarator.child_by_field_name("declarator")
            name = _node_text(name_node, source_bytes)
            kind = _function_kind(name_node, name, scope)
            detail = _clean_text(_node_text(node, source_bytes)).rstrip(";").rstrip()
        else:
            name_node = _innermost_declarator(declarator, spec)
            name = _node_text(name_node, source_bytes)
            if is_field:
                kind = SymbolKind.FIELD
            elif _is_constant(node, source_bytes):
                kind = SymbolKind.CONSTANT
            else:
                kind = SymbolKind.VARIABLE
            detail = type_text or None
        symbols.append(_make_symbol(node, name, kind, detail))

    return symbols


def _typedef_symbols(node, spec: LanguageSpec, source_bytes: bytes) -> list[Symbol]:
    """Outline ``typedef``: the inline type body (if any) plus each alias name."""
    symbols = []

    type_node = node.child_by_field_name("type")
    if type_node is not None and type_node.type in spec.type_node_kinds:
        inline_type = _type_symbol(type_node, spec, source_bytes)
        if inline_type:
            symbols.append(inline_type)

    type_text = _type_text(type_node, source_bytes)

    for declarator in node.children_by_field_name("declarator"):
        name = _node_text(_innermost_declarator(declarator, spec), source_bytes)
        symbols.append(_make_symbol(node, name, SymbolKind.CLASS, f"typedef {type_text}".strip()))

    return symbols


def _find_function_declarator(declarator, spec: LanguageSpec):
    """Return the function_declarator under pointer/reference wrappers.

    Function pointers (``int (*fp)(int)``) are variables, so a function
    declarator whose own declarator is parenthesized does not count.
    """
    current = declarator
    while current is not None:
        if current.type == "function_declarator":
            inner = current.child_by_field_name("declarator")
            if inner is not None and inner.type == "parenthesized_declarator":
                return None
            return current
        if current.type not in ("pointer_declarator", "reference_declarator", "attributed_declarator"):
            return None
        current = _inner_declarator(current)
    return None


def _innermost_declarator(declarator, spec: LanguageSpec):
    """Unwrap declarator wrappers down to the identifier-like node."""
    current = declarator
    while current is not None and (
        current.type in spec.declarator_wrappers or current.type == "function_declarator"
    ):
        current = _inner_declarator(current)
    return current


def _inner_declarator(node):
    inner = node.child_by_field_name("declarator")
    if inner is None and node.named_child_count:
        inner = node.named_children[0]
    return inner


def _function_kind(name_node, name: str, scope: Optional[str]) -> SymbolKind:
    """Classify a function by its declarator name and enclosing type."""
    if name_node is None:
        return SymbolKind.FUNCTION

    last = name.split("::")[-1]
    if name_node.type == "operator_name" or last.startswith("operator"):
        return SymbolKind.OPERATOR
    if name_node.type == "destructor_name" or last.startswith("~"):
        return SymbolKind.METHOD

    if name_node.type == "qualified_identifier":
        # Out-of-class member definition: Owner::member
        parts = name.split("::")
        owner = parts[-2].split("<")[0] if len(parts) > 1 else ""
        if owner and last == owner:
            return SymbolKind.CONSTRUCTOR
        return SymbolKind.METHOD

    if scope is not None:
        if last == scope.split("::")[-1].split("<")[0]:
            return SymbolKind.CONSTRUCTOR
        return SymbolKind.METHOD

    return SymbolKind.FUNCTION


def _is_constant(node, source_bytes: bytes) -> bool:
    for child in node.children:
        if child.type == "type_qualifier" and _node_text(child, source_bytes) in ("const", "constexpr"):
            return True
    return False


def _make_symbol(node, name: str, kind: SymbolKind, detail: Optional[str], children=()) -> Symbol:
    return Symbol(
        name=name or "",
        kind=kind,
        range=SourceRange.from_points(tuple(node.start_point), tuple(node.end_point)),
        detail=detail,
        children=tuple(children),
    )


def _build_signature(node, source_bytes: bytes) -> str:
    """Build a one-line signature from the node start up to its body."""
    body = node.child_by_field_name("body")
    end_byte = body.start_byte if body else node.end_byte

    sig_text = source_bytes[node.start_byte:end_byte].decode("utf-8", errors="replace")
    return _clean_text(sig_text).rstrip("{; ")


def _node_text(node, source_bytes: bytes) -> str:
    if node is None:
        return ""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _clean_text(text: str) -> str:
    """Collapse whitespace runs to single spaces."""
    return _WHITESPACE.sub(" ", text).strip()


def _type_text(type_node, source_bytes: bytes) -> str:
    """Type text for details; inline bodies shrink to ``keyword name``."""
    if type_node is None:
        return ""
    if type_node.child_by_field_name("body") is not None:
        keyword = type_node.type.split("_")[0]
        type_name = _node_text(type_node.child_by_field_name("name"), source_bytes)
        return f"{keyword} {type_name}".strip()
    return _clean_text(_node_text(type_node, source_bytes))
