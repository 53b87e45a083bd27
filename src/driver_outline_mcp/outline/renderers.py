"""Render an outline document as JSON, Markdown or plain text.

All renderers are pure: they read the document and return a string.
Ranges are stored zero-based; the one-based line/column numbers shown to
readers are derived here and nowhere else.
"""

import json
import re

from ..parser.hierarchy import flatten_tree
from ..parser.symbols import Symbol, SourcePosition
from .document import FileRecord, OutlineDocument


MARKDOWN_SYMBOL_BASE_LEVEL = 3
TEXT_INDENT = "  "


def one_based(position: SourcePosition) -> tuple[int, int]:
    """Convert a zero-based position to one-based (line, column)."""
    return position.line + 1, position.character + 1


def slugify(text: str) -> str:
    """Convert a heading to a Markdown anchor.

    Lowercase, drop everything but ASCII word characters, whitespace and
    hyphens, collapse whitespace/underscore/hyphen runs into one hyphen
    and trim hyphens at both ends.
    Example: src/Driver_Main.c -> srcdriver-mainc
    """
    slug = text.lower()
    slug = re.sub(r"[^\w\s-]", "", slug, flags=re.ASCII)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def symbol_to_dict(symbol: Symbol) -> dict:
    """Convert a Symbol to its JSON form (one-based positions)."""
    line, column = one_based(symbol.range.start)
    end_line, end_column = one_based(symbol.range.end)

    result = {
        "name": symbol.name,
        "type": symbol.kind.label,
        "typeCode": int(symbol.kind),
        "line": line,
        "column": column,
        "endLine": end_line,
        "endColumn": end_column,
    }

    if symbol.detail:
        result["detail"] = symbol.detail

    if symbol.children:
        result["children"] = [symbol_to_dict(c) for c in symbol.children]

    return result


def file_to_dict(record: FileRecord) -> dict:
    return {
        "path": record.relative_path,
        "fullPath": record.path,
        "symbolCount": record.symbol_count,
        "symbols": [symbol_to_dict(s) for s in record.symbols],
    }


def document_to_dict(document: OutlineDocument) -> dict:
    return {
        "title": document.title,
        "generatedAt": document.generated_at,
        "directory": document.root_directory,
        "totalFiles": document.total_files,
        "totalSymbols": document.total_symbols,
        "files": [file_to_dict(f) for f in document.files],
    }


def render_json(document: OutlineDocument) -> str:
    return json.dumps(document_to_dict(document), indent=2, ensure_ascii=False)


def _location(symbol: Symbol) -> str:
    line, column = one_based(symbol.range.start)
    end_line, end_column = one_based(symbol.range.end)

    location = f"line {line}, column {column}"
    if (end_line, end_column) != (line, column):
        location += f" - line {end_line}, column {end_column}"
    return location


def _markdown_symbol(symbol: Symbol, level: int) -> list[str]:
    lines = [
        f"{'#' * level} {symbol.name}",
        "",
        f"- **Type**: {symbol.kind.label}",
        f"- **Location**: {_location(symbol)}",
    ]
    if symbol.detail:
        lines.append(f"- **Detail**: {symbol.detail}")
    lines.append("")

    for child in symbol.children:
        lines.extend(_markdown_symbol(child, level + 1))

    return lines


def render_markdown(document: OutlineDocument) -> str:
    """Render a Markdown report with a linked table of contents."""
    lines = [
        f"# {document.title}",
        "",
        f"**Generated at**: {document.generated_at}",
        "",
        f"**Directory**: {document.root_directory}",
        "",
        f"**Statistics**: {document.total_files} files, {document.total_symbols} symbols",
        "",
        "## Table of Contents",
        "",
    ]

    for record in document.files:
        lines.append(
            f"- [{record.relative_path}](#{slugify(record.relative_path)})"
            f" ({record.symbol_count} symbols)"
        )

    lines.extend(["", "---", ""])

    for record in document.files:
        lines.extend([
            f"## {record.relative_path}",
            "",
            f"**Full path**: `{record.path}`",
            "",
            f"**Symbol count**: {record.symbol_count}",
            "",
        ])
        for symbol in record.symbols:
            lines.extend(_markdown_symbol(symbol, MARKDOWN_SYMBOL_BASE_LEVEL))
        lines.extend(["---", ""])

    return "\n".join(lines)


def render_text(document: OutlineDocument) -> str:
    """Render a plain-text listing, two spaces of indent per nesting level."""
    lines = [
        document.title,
        "=" * len(document.title),
        "",
        f"Generated at: {document.generated_at}",
        f"Directory: {document.root_directory}",
        f"Statistics: {document.total_files} files, {document.total_symbols} symbols",
        "",
    ]

    for record in document.files:
        lines.extend([
            record.relative_path,
            "-" * len(record.relative_path),
            f"Full path: {record.path}",
            f"Symbol count: {record.symbol_count}",
            "",
        ])
        for symbol, depth in flatten_tree(record.symbols):
            indent = TEXT_INDENT * depth
            lines.append(f"{indent}{symbol.name} ({symbol.kind.label}) - {_location(symbol)}")
            if symbol.detail:
                lines.append(f"{indent}{TEXT_INDENT}Detail: {symbol.detail}")
        lines.append("")

    return "\n".join(lines)
