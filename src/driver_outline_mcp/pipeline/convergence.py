"""One pipeline pass, and the loop that repeats passes until they agree."""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Optional, Sequence

from ..errors import InvalidInputError, NoSourceFilesError, OutlineError, PipelineError
from ..outline.aggregator import aggregate
from ..outline.document import OutlineDocument
from ..parser.symbols import Symbol
from .fetcher import DEFAULT_RETRY_DELAYS, SymbolFetcher, SymbolProvider
from .scheduler import DEFAULT_CONCURRENCY, ProgressCallback, run_all
from .walker import walk_source_files


logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 15
DEFAULT_PASS_DELAY = 0.5


class OutlinePipeline:
    """Walk, fetch every file with bounded concurrency, aggregate."""

    def __init__(
        self,
        provider: SymbolProvider,
        concurrency: int = DEFAULT_CONCURRENCY,
        retry_delays: Sequence[float] = DEFAULT_RETRY_DELAYS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.fetcher = SymbolFetcher(provider, retry_delays=retry_delays, sleep=sleep)
        self.concurrency = concurrency
        self.warnings: list[str] = []

    async def run_pass(
        self,
        root: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> OutlineDocument:
        """Run one full pass and build a fresh document."""
        self.warnings = []
        files = walk_source_files(root, self.warnings)
        if not files:
            raise NoSourceFilesError(
                f"No C/C++ source files found in {root} (expected .c, .h, .cpp, ... files)"
            )

        symbols_by_file: dict[str, tuple[Symbol, ...]] = {}

        async def fetch_one(path: str) -> None:
            symbols_by_file[path] = await self.fetcher.fetch(path)

        await run_all(sorted(files), fetch_one, limit=self.concurrency, on_progress=on_progress)

        return aggregate(files, symbols_by_file, root)


class ConvergenceState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STABILIZED = "stabilized"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class PassReport:
    """Status of one finished pass."""
    pass_index: int                 # 1-based
    max_passes: int
    files_found: int
    symbols_found: int


PassCallback = Callable[[PassReport], None]


@dataclass
class ConvergenceController:
    """Repeat pipeline passes until the symbol total stops changing.

    A provider that is still indexing reports fewer symbols than it will
    once it is done, so a single pass cannot be trusted. The controller
    reruns the pass, pausing ``pass_delay`` seconds between runs, until
    two consecutive passes report the same total (STABILIZED) or
    ``max_passes`` passes have run (EXHAUSTED). The last document wins.
    """
    pipeline: OutlinePipeline
    max_passes: int = DEFAULT_MAX_PASSES
    pass_delay: float = DEFAULT_PASS_DELAY
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    state: ConvergenceState = field(default=ConvergenceState.IDLE, init=False)
    passes: int = field(default=0, init=False)

    def __post_init__(self):
        if self.max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {self.max_passes}")

    async def run(
        self,
        root: str,
        on_progress: Optional[ProgressCallback] = None,
        on_pass: Optional[PassCallback] = None,
    ) -> OutlineDocument:
        """Run passes over ``root`` and return the final document.

        Raises:
            InvalidInputError: ``root`` is not absolute (nothing is scanned)
            NoSourceFilesError: the scan found no source files
            PipelineError: any other failure inside a pass
        """
        if not os.path.isabs(root):
            raise InvalidInputError(f"Directory path must be absolute: {root}")

        self.state = ConvergenceState.RUNNING
        self.passes = 0
        previous_total: Optional[int] = None

        while True:
            try:
                document = await self.pipeline.run_pass(root, on_progress)
            except OutlineError:
                self.state = ConvergenceState.IDLE
                raise
            except Exception as e:
                self.state = ConvergenceState.IDLE
                raise PipelineError(f"Outline generation failed: {e}") from e

            self.passes += 1
            total = document.total_symbols
            logger.info(
                "Pass %d/%d: %d files, %d symbols",
                self.passes, self.max_passes, document.total_files, total,
            )
            if on_pass is not None:
                on_pass(PassReport(self.passes, self.max_passes, document.total_files, total))

            if previous_total is not None and total == previous_total:
                self.state = ConvergenceState.STABILIZED
                return document

            if self.passes >= self.max_passes:
                self.state = ConvergenceState.EXHAUSTED
                return document

            previous_total = total
            await self.sleep(self.pass_delay)
