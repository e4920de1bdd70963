"""Network fetch with an escalating per-attempt timeout."""

from typing import Optional

from git_workspace_keeper.exceptions import FetchTimeoutError
from git_workspace_keeper.models.output import GitOutput
from git_workspace_keeper.services.git.command_runner import DEFAULT_TIMEOUT, GitCommandRunner
from git_workspace_keeper.services.retry import RetryEngine, race, timeout_for_attempt
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_STEP = 50.0


class FetchCoordinator:
    """Runs ``git fetch`` until one attempt finishes inside its window.

    Attempt n waits ``n * timeout_step`` seconds. A timed-out attempt is
    abandoned rather than cancelled, so its git process may still be running
    in the same directory while the next attempt starts. The fetch process of
    attempt n is killed after ``max(n * timeout_step, command_timeout)`` seconds.
    """

    def __init__(
        self,
        runner: GitCommandRunner,
        retry_engine: RetryEngine,
        timeout_step: float = DEFAULT_TIMEOUT_STEP,
        command_timeout: float = DEFAULT_TIMEOUT,
    ):
        self.runner = runner
        self.retry_engine = retry_engine
        self.timeout_step = timeout_step
        self.command_timeout = command_timeout

    def timeout_for_attempt(self, attempt: int) -> float:
        return timeout_for_attempt(attempt, self.timeout_step)

    def fetch(self, path: str, remote: Optional[str] = None) -> GitOutput:
        """Fetch the remote refs of the workspace at ``path``.

        Args:
            path: Workspace directory
            remote: Remote to fetch, None for git's default remote
        """
        args = ["fetch", "--verbose"]
        if remote:
            args.append(remote)

        def attempt_fetch(attempt: int) -> GitOutput:
            timeout = self.timeout_for_attempt(attempt)
            kill_after = max(timeout, self.command_timeout)
            logger.debug(f"Fetching {remote or 'default remote'} at {path} (attempt {attempt}, timeout {timeout}s)")
            try:
                return race(lambda: self.runner.run_git(path, *args, timeout=kill_after), timeout)
            except TimeoutError:
                logger.warning(
                    f"Git fetch at {path} exceeded {timeout}s on attempt {attempt}; "
                    f"abandoning it and retrying."
                )
                raise FetchTimeoutError(path, attempt, timeout) from None

        return self.retry_engine.run_with_retry(attempt_fetch)
