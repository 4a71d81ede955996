import asyncio
from typing import Awaitable, Callable, Tuple, TypeVar

from utils.exceptions import RetryError, render_error
from utils.logger_utils import get_logger

logger = get_logger("Retry Executor")

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 5
DEFAULT_BASE_DELAY_SECONDS = 0.5

# Case-insensitive fragments of error messages raised by rate limits and flaky networks
RETRYABLE_ERROR_MARKERS: Tuple[str, ...] = (
    "rate",
    "limit",
    "429",
    "too many",
    "timeout",
    "timed out",
    "connection",
    "temporarily",
    "unavailable",
    "502",
    "503",
    "504",
)


def is_retryable_error(error: BaseException) -> bool:
    message = render_error(error).lower()
    return any(marker in message for marker in RETRYABLE_ERROR_MARKERS)


class RetryExecutor:
    """
    Runs idempotent read operations with bounded exponential backoff.

    An operation is attempted at most ``max_retries + 1`` times; after the n-th
    (0-based) retryable failure the executor sleeps ``base_delay * 2**n``
    seconds. Non-retryable errors stop immediately. Every failure surfaces as a
    single RetryError carrying the message of each attempt.
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._sleep = sleep

    async def execute(self, operation: Callable[[], Awaitable[T]], description: str = "RPC operation") -> T:
        attempts = []
        for attempt in range(self.max_retries + 1):
            try:
                return await operation()
            except Exception as e:
                attempts.append(f"Attempt {attempt + 1}: {render_error(e)}")

                if not is_retryable_error(e) or attempt == self.max_retries:
                    raise RetryError(description, attempts, e) from e

                delay = self.base_delay * 2**attempt
                logger.warning(
                    f"{description} failed: {e}. Retrying in {delay:.2f}s... "
                    f"(Attempt {attempt + 1}/{self.max_retries + 1})"
                )
                await self._sleep(delay)

        # Unreachable: the loop either returns or raises on its last attempt
        raise AssertionError("retry loop exited without a result")
