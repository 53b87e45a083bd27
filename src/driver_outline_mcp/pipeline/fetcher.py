"""Per-file symbol retrieval with retry on empty results."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Sequence

from ..parser.symbols import Symbol


logger = logging.getLogger(__name__)

# Async callable: absolute file path -> symbol forest (may be empty or None)
SymbolProvider = Callable[[str], Awaitable[Optional[Sequence[Symbol]]]]

DEFAULT_RETRY_DELAYS = (0.1, 0.3, 0.6)


class SymbolFetcher:
    """Fetch one file's symbols, tolerating a provider that is warming up.

    An empty answer is not trusted right away: the provider is asked again
    after each delay in ``retry_delays``. A file that really has no
    symbols therefore costs the full backoff before it is accepted as
    empty. Provider errors are logged and turn into an empty forest.
    """

    def __init__(
        self,
        provider: SymbolProvider,
        retry_delays: Sequence[float] = DEFAULT_RETRY_DELAYS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.provider = provider
        self.retry_delays = tuple(retry_delays)
        self.sleep = sleep

    async def fetch(self, file_path: str) -> tuple[Symbol, ...]:
        symbols: tuple[Symbol, ...] = ()
        attempts = len(self.retry_delays) + 1

        for attempt in range(attempts):
            if attempt:
                await self.sleep(self.retry_delays[attempt - 1])

            try:
                result = await self.provider(file_path)
            except Exception as e:
                logger.warning(
                    "Symbol lookup failed for %s (attempt %d/%d): %s",
                    file_path, attempt + 1, attempts, e,
                )
                return ()

            symbols = tuple(result or ())
            if symbols:
                return symbols

            logger.debug("No symbols yet for %s (attempt %d/%d)", file_path, attempt + 1, attempts)

        return symbols
