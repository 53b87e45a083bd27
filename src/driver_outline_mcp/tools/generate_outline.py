"""Generate outline tool - walk, outline, converge, write reports."""

import logging
import os
from typing import Optional

from ..config import OutlineSettings
from ..errors import InvalidInputError, OutlineError
from ..pipeline import ConvergenceController, OutlinePipeline, PassReport, SymbolProvider
from ..parser import TreeSitterSymbolProvider
from ..storage import OutlineStore


logger = logging.getLogger(__name__)


async def generate_outline(
    path: str,
    write_files: bool = True,
    settings: Optional[OutlineSettings] = None,
    provider: Optional[SymbolProvider] = None,
) -> dict:
    """Build the symbol outline of a C/C++ source tree.

    Passes are repeated until the symbol total is stable, then the JSON,
    Markdown and text reports are written into the scanned directory.

    Args:
        path: Absolute path to the directory to scan
        write_files: Whether to write the driver_outline.* reports
        settings: Tunables (default: read from the environment)
        provider: Symbol provider (default: tree-sitter outliner)

    Returns:
        Dict with run results, or ``{"success": False, "error": ...}``
    """
    provider = provider or TreeSitterSymbolProvider()

    try:
        settings = settings or OutlineSettings.from_env()
        if not os.path.isabs(path):
            raise InvalidInputError(f"Directory path must be absolute: {path}")
        if not os.path.isdir(path):
            raise InvalidInputError(f"Path is not a directory: {path}")

        pipeline = OutlinePipeline(
            provider,
            concurrency=settings.concurrency,
            retry_delays=settings.retry_delays,
        )
        controller = ConvergenceController(
            pipeline,
            max_passes=settings.max_passes,
            pass_delay=settings.pass_delay,
        )

        def on_progress(done: int, total: int) -> None:
            logger.debug("Pass %d: outlined %d/%d files", controller.passes + 1, done, total)

        history: list[dict] = []

        def on_pass(report: PassReport) -> None:
            history.append({
                "pass": report.pass_index,
                "files": report.files_found,
                "symbols": report.symbols_found,
            })

        document = await controller.run(path, on_progress=on_progress, on_pass=on_pass)

        outputs = OutlineStore(path).save(document) if write_files else {}

    except OutlineError as e:
        return {"success": False, "error": f"Failed to generate outline: {e}"}
    except ValueError as e:
        return {"success": False, "error": f"Invalid configuration: {e}"}
    except OSError as e:
        return {"success": False, "error": f"Failed to write outline: {e}"}

    result = {
        "success": True,
        "directory": document.root_directory,
        "generated_at": document.generated_at,
        "passes": controller.passes,
        "pass_history": history,
        "state": controller.state.value,
        "file_count": document.total_files,
        "symbol_count": document.total_symbols,
        "outputs": outputs,
        "files": [f.relative_path for f in document.files[:20]],  # Limit files in response
    }

    if pipeline.warnings:
        result["warnings"] = pipeline.warnings

    return result
