"""Outline report storage: write the three artifacts, read the JSON back."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..outline.document import OutlineDocument
from ..outline.renderers import render_json, render_markdown, render_text


logger = logging.getLogger(__name__)

JSON_FILENAME = "driver_outline.json"
MARKDOWN_FILENAME = "driver_outline.md"
TEXT_FILENAME = "driver_outline.txt"


@dataclass
class StoredOutline:
    """Outline loaded back from ``driver_outline.json``."""
    directory: str
    generated_at: str
    total_files: int
    total_symbols: int
    files: list[dict]               # Serialized file records

    def get_file(self, file_path: str) -> Optional[dict]:
        """Find a file by relative path (or absolute path)."""
        normalized = file_path.replace("\\", "/")
        for record in self.files:
            if record.get("path") == normalized or record.get("fullPath") == file_path:
                return record
        return None


class OutlineStore:
    """Reads and writes outline reports in a scan root."""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def paths(self) -> dict[str, Path]:
        return {
            "json": self.directory / JSON_FILENAME,
            "markdown": self.directory / MARKDOWN_FILENAME,
            "text": self.directory / TEXT_FILENAME,
        }

    def save(self, document: OutlineDocument) -> dict[str, str]:
        """Render the document and write all three reports.

        Returns:
            Dict mapping format name to written file path
        """
        paths = self.paths()
        contents = {
            "json": render_json(document),
            "markdown": render_markdown(document),
            "text": render_text(document),
        }

        for fmt, content in contents.items():
            with open(paths[fmt], "w", encoding="utf-8") as f:
                f.write(content)
            logger.info("Wrote %s", paths[fmt])

        return {fmt: str(path) for fmt, path in paths.items()}

    def load(self) -> Optional[StoredOutline]:
        """Load the JSON report, or None if it has not been generated."""
        json_path = self.paths()["json"]

        if not json_path.exists():
            return None

        with open(json_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return StoredOutline(
            directory=data["directory"],
            generated_at=data["generatedAt"],
            total_files=data["totalFiles"],
            total_symbols=data["totalSymbols"],
            files=data["files"],
        )
