"""Git command execution built on GitPython."""

import os
from typing import Optional

import git

from git_workspace_keeper.exceptions import (
    GitCommandError,
    GitCommandTimeoutError,
    GitNotFoundError,
)
from git_workspace_keeper.models.output import GitOutput
from git_workspace_keeper.utils.logging import get_logger
from git_workspace_keeper.utils.urls import redact_args, redact_credentials

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 120.0

_LFS_MISSING_MARKERS = ("'git-lfs' was not found", "git-lfs: command not found")
# GitPython replaces stderr with this marker when kill_after_timeout fired
_TIMEOUT_MARKER = "Timeout: the command"
_FAILURE_MARKERS = ("fatal", "error:")


class GitCommandRunner:
    """Runs the git binary in a working directory and classifies the result."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the runner.

        Args:
            timeout: Seconds after which a git process is killed, unless a call overrides it
        """
        self.timeout = timeout

    def run_git(self, path: str, *args: str, timeout: Optional[float] = None) -> GitOutput:
        """Run ``git <args>`` in ``path``.

        The directory is created when it does not exist yet. A command counts as
        failed when git writes ``fatal`` or ``error:`` to stderr; commands that only
        exit non-zero (``git commit`` with nothing to commit, ``git config --get``
        of an unset key) return their output.

        Args:
            path: Working directory
            *args: Arguments after ``git``
            timeout: Seconds before the process is killed (defaults to the runner timeout)

        Returns:
            GitOutput with the stdout text, stderr text and exit status

        Raises:
            GitNotFoundError: git or git-lfs could not be started
            GitCommandTimeoutError: the process was killed after ``timeout``
            GitCommandError: git reported a failure
        """
        path = str(path)
        os.makedirs(path, exist_ok=True)
        timeout = timeout if timeout is not None else self.timeout
        command = " ".join(redact_args(args))
        logger.debug(f"Running git {command} at {path}")

        try:
            status, output, error = git.Git(path).execute(
                ["git", *args],
                with_extended_output=True,
                with_exceptions=False,
                kill_after_timeout=timeout,
                env={"GIT_TERMINAL_PROMPT": "0"},
            )
        except git.exc.GitCommandNotFound:
            raise GitNotFoundError(
                "Start Git failed! Git not found! Please install Git at https://git-scm.com .",
                command,
                path,
            ) from None

        output = output or ""
        error = redact_credentials(error or "")

        if any(marker in output or marker in error for marker in _LFS_MISSING_MARKERS):
            raise GitNotFoundError("Start Git failed! Git LFS not found!", command, path)

        if status != 0 and error.startswith(_TIMEOUT_MARKER):
            raise GitCommandTimeoutError(
                f"Execute git command: git {command} at {path} was timed out! Timeout is {timeout}s.",
                command,
                output=output,
                error=error,
                path=path,
            )

        if any(marker in error for marker in _FAILURE_MARKERS):
            logger.debug(f"git {command} failed with: {error}")
            raise GitCommandError(
                f"Git command resulted an error: git {command} on {path} got result: {error}",
                command,
                output=output,
                error=error,
                path=path,
            )

        if status != 0:
            logger.debug(f"git {command} exited with {status} without reporting an error")
        return GitOutput(output=output, error=error, status=status)
