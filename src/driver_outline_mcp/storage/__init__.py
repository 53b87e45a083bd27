"""Storage package for outline report save/load operations."""

from .outline_store import OutlineStore, StoredOutline, JSON_FILENAME, MARKDOWN_FILENAME, TEXT_FILENAME

__all__ = ["OutlineStore", "StoredOutline", "JSON_FILENAME", "MARKDOWN_FILENAME", "TEXT_FILENAME"]
