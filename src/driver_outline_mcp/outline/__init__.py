"""Outline package: document model, aggregation and report rendering."""

from .document import DEFAULT_TITLE, FileRecord, OutlineDocument
from .aggregator import aggregate, relative_path
from .renderers import (
    render_json,
    render_markdown,
    render_text,
    slugify,
    document_to_dict,
    symbol_to_dict,
)

__all__ = [
    "DEFAULT_TITLE",
    "FileRecord",
    "OutlineDocument",
    "aggregate",
    "relative_path",
    "render_json",
    "render_markdown",
    "render_text",
    "slugify",
    "document_to_dict",
    "symbol_to_dict",
]
