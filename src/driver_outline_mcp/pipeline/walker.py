"""Directory walk: find C/C++ source files under a root."""

import logging
import os
from typing import Optional

from ..errors import InvalidInputError
from ..parser.languages import is_source_file, is_ignored_directory


logger = logging.getLogger(__name__)


def walk_source_files(root: str, warnings: Optional[list[str]] = None) -> set[str]:
    """Recursively collect source files below ``root``.

    Ignored directories are pruned before descending. Symlinked
    directories are not followed. A directory that cannot be listed is
    logged, recorded in ``warnings`` and skipped; the rest of the scan
    continues.

    Args:
        root: Absolute path of the scan root
        warnings: Optional list collecting skipped-directory messages

    Returns:
        Set of absolute file paths
    """
    if not os.path.isabs(root):
        raise InvalidInputError(f"Directory path must be absolute: {root}")

    files: set[str] = set()
    pending = [root]

    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        if not is_ignored_directory(entry.name):
                            pending.append(entry.path)
                    elif is_source_file(entry.name):
                        files.add(entry.path)
        except OSError as e:
            message = f"Failed to read directory {directory}: {e}"
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)

    return files
