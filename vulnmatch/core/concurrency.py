"""Bounded concurrent fan-out."""

import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_limited(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    limit: int
) -> List[R]:
    """Run func over items with at most limit calls in flight.

    At most limit worker tasks are started; each pulls the next item from
    a shared queue until the queue is drained. Results are returned in
    the order of items. If any call raises, the workers are cancelled and
    awaited before the first error is re-raised, so no work outlives the
    call. Cancelling the caller cancels every worker the same way.

    Args:
        func: Coroutine function applied to each item
        items: Inputs
        limit: Maximum number of concurrent calls

    Returns:
        One result per item
    """
    if limit < 1:
        raise ValueError(f"concurrency limit must be positive, got {limit}")

    queue: "asyncio.Queue[Tuple[int, T]]" = asyncio.Queue()
    for pair in enumerate(items):
        queue.put_nowait(pair)
    if queue.empty():
        return []

    results: List[Optional[R]] = [None] * queue.qsize()

    async def worker() -> None:
        while True:
            try:
                index, item = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            results[index] = await func(item)

    workers = [asyncio.ensure_future(worker()) for _ in range(min(limit, len(results)))]
    try:
        await asyncio.gather(*workers)
    except BaseException:
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        raise
    return results  # type: ignore[return-value]
