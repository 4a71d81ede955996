import asyncio
from typing import Any, Coroutine


async def gather_with_concurrency(
    n: int, *tasks: Coroutine[Any, Any, Any], return_exceptions: bool = False
) -> list[Any]:
    """
    Runs the coroutines concurrently with at most ``n`` in flight.
    Results keep the order of the given coroutines.
    """
    semaphore = asyncio.Semaphore(max(1, n))

    async def sem_task(task: Coroutine[Any, Any, Any]) -> Any:
        async with semaphore:
            return await task

    return await asyncio.gather(*(sem_task(task) for task in tasks), return_exceptions=return_exceptions)
