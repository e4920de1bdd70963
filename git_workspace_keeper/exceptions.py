"""Custom exceptions for git-workspace-keeper"""

from typing import Optional


class GitWorkspaceKeeperError(Exception):
    """Base exception for all git-workspace-keeper errors."""
    pass


class ConfigurationError(GitWorkspaceKeeperError):
    """Exception raised for invalid configuration. Never retried."""
    pass


class UnsupportedCloneModeError(ConfigurationError):
    """Exception raised when a clone mode has no flag mapping."""

    def __init__(self, clone_mode):
        self.clone_mode = clone_mode
        super().__init__(f"Clone mode {clone_mode!r} is not supported.")


class InvalidEndpointError(ConfigurationError):
    """Exception raised when a repository endpoint cannot be a git URL or path."""

    def __init__(self, endpoint):
        self.endpoint = endpoint
        super().__init__(f"Endpoint {endpoint!r} is not a valid repository URL or path.")


class GitNotFoundError(GitWorkspaceKeeperError):
    """Exception raised when the git binary (or git-lfs) cannot be started."""

    def __init__(self, message: str, command: str, path: str):
        self.command = command
        self.path = path
        super().__init__(message)


class GitCommandError(GitWorkspaceKeeperError):
    """Exception raised when a git command reports a failure.

    Carries everything needed to diagnose the failure without re-running it.
    """

    def __init__(
        self,
        message: str,
        command: str,
        output: str = "",
        error: str = "",
        path: Optional[str] = None,
    ):
        self.message = message
        self.command = command
        self.output = output
        self.error = error
        self.path = path
        super().__init__(message)


class RemoteMismatchError(GitCommandError):
    """Exception raised when a workspace tracks a different remote than requested."""

    def __init__(self, remote_url: str, endpoint: str, path: str):
        self.remote_url = remote_url
        self.endpoint = endpoint
        super().__init__(
            f"The repository with remote: '{remote_url}' is not a repository for {endpoint}.",
            "remote -v",
            output=remote_url,
            error=remote_url,
            path=path,
        )


class TransientGitError(GitCommandError):
    """Base class for failures that are worth retrying."""
    pass


class GitCommandTimeoutError(TransientGitError):
    """Exception raised when the command runner killed a git process on timeout."""
    pass


class FetchTimeoutError(TransientGitError):
    """Exception raised when a fetch attempt did not finish inside its window."""

    def __init__(self, path: str, attempt: int, timeout: float):
        self.attempt = attempt
        self.timeout = timeout
        super().__init__(
            f"Git fetch at {path} exceeded the timeout of {timeout}s on attempt {attempt}.",
            "fetch --verbose",
            path=path,
        )
