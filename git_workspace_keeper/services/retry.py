"""Retry and timeout primitives for network-bound git operations."""

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Callable, Optional, Tuple, Type, TypeVar

from git_workspace_keeper.exceptions import TransientGitError
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def timeout_for_attempt(attempt: int, step: float) -> float:
    """Timeout of attempt ``attempt`` (1-based): ``attempt * step``."""
    if attempt < 1:
        raise ValueError(f"attempt must be >= 1, got {attempt}")
    return attempt * step


def race(work: Callable[[], T], timeout: float) -> T:
    """Run ``work`` against a timer and return its result if it wins.

    ``work`` runs on its own worker thread. When the timer wins a built-in
    ``TimeoutError`` is raised and the worker is abandoned, not cancelled:
    whatever it started keeps running until it finishes on its own.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="git-race")
    future = executor.submit(work)
    try:
        return future.result(timeout=timeout)
    except FuturesTimeoutError:
        raise TimeoutError(f"Work did not finish within {timeout}s") from None
    finally:
        executor.shutdown(wait=False)


class RetryEngine:
    """Resubmits a unit of work until it stops failing with a retryable error."""

    def __init__(
        self,
        max_attempts: Optional[int] = None,
        retry_on: Tuple[Type[BaseException], ...] = (TransientGitError,),
    ):
        """Initialize the engine.

        Args:
            max_attempts: Upper bound on attempts, None for no bound
            retry_on: Exception types that trigger another attempt; anything else propagates
        """
        if max_attempts is not None and max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1 or None, got {max_attempts}")
        self.max_attempts = max_attempts
        self.retry_on = retry_on

    def run_with_retry(self, work: Callable[[int], T]) -> T:
        """Call ``work(attempt)`` with attempt = 1, 2, 3, ... until it returns.

        Raises:
            The last retryable error once ``max_attempts`` is exhausted, or the
            first non-retryable error immediately.
        """
        attempt = 1
        while True:
            try:
                return work(attempt)
            except self.retry_on as e:
                if self.max_attempts is not None and attempt >= self.max_attempts:
                    logger.warning(f"Giving up after {attempt} attempts: {e}")
                    raise
                logger.info(f"Attempt {attempt} failed, retrying: {e}")
                attempt += 1
