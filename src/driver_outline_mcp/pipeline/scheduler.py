"""Bounded-concurrency runner for per-file work."""

import asyncio
from typing import Awaitable, Callable, Iterable, Optional, TypeVar


T = TypeVar("T")

ProgressCallback = Callable[[int, int], None]

DEFAULT_CONCURRENCY = 8


async def run_all(
    items: Iterable[T],
    worker: Callable[[T], Awaitable[None]],
    limit: int = DEFAULT_CONCURRENCY,
    on_progress: Optional[ProgressCallback] = None,
) -> None:
    """Run ``worker`` over every item with at most ``limit`` in flight.

    A fixed pool of ``limit`` workers pulls items from one shared iterator,
    so items are dispatched in input order and a new item starts only when
    a running one has finished. ``on_progress(completed, total)`` fires
    once per item, after it finishes, with ``completed`` counting up to
    ``total``.

    A worker that raises still frees its slot and the remaining items
    still run; the first exception is re-raised once everything is done.
    """
    if limit < 1:
        raise ValueError(f"Concurrency limit must be at least 1, got {limit}")

    queue = list(items)
    total = len(queue)
    if not total:
        return

    pending = iter(queue)
    completed = 0
    errors: list[BaseException] = []

    async def pool_worker() -> None:
        nonlocal completed
        for item in pending:
            try:
                await worker(item)
            except Exception as e:
                errors.append(e)
            finally:
                completed += 1
                if on_progress is not None:
                    on_progress(completed, total)

    outcomes = await asyncio.gather(
        *(pool_worker() for _ in range(min(limit, total))),
        return_exceptions=True,
    )
    # Progress callback failures surface from the pool itself
    errors.extend(o for o in outcomes if isinstance(o, BaseException))

    if errors:
        raise errors[0]
