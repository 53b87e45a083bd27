"""Get file outline - symbols of one file from a generated report."""

from ..storage import OutlineStore


def get_file_outline(path: str, file_path: str) -> dict:
    """Get the stored symbol tree of one file.

    Args:
        path: Directory that was outlined (holds driver_outline.json)
        file_path: File path relative to that directory, or absolute

    Returns:
        Dict with the file's symbols outline
    """
    store = OutlineStore(path)
    outline = store.load()

    if not outline:
        return {"error": f"No outline generated for: {path}"}

    record = outline.get_file(file_path)

    if not record:
        return {"error": f"File not in outline: {file_path}"}

    return {
        "directory": outline.directory,
        "generated_at": outline.generated_at,
        "file": record["path"],
        "full_path": record["fullPath"],
        "symbol_count": record["symbolCount"],
        "symbols": record["symbols"],
    }
