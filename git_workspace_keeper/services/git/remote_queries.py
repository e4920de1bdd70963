"""Remote query and management service for git-workspace-keeper."""

from typing import List

from git_workspace_keeper.exceptions import GitCommandError
from git_workspace_keeper.models.remote import Remote
from git_workspace_keeper.parsers import parse_lines
from git_workspace_keeper.services.git.command_runner import GitCommandRunner
from git_workspace_keeper.utils.logging import get_logger
from git_workspace_keeper.utils.urls import redact_credentials

logger = get_logger(__name__)


class RemoteQueries:
    """Service for reading and editing the remotes of a workspace."""

    def __init__(self, runner: GitCommandRunner):
        self.runner = runner

    def get_remote_url(self, path: str, remote_name: str) -> str:
        result = self.runner.run_git(path, "remote", "get-url", remote_name)
        return result.output.strip()

    def get_remote_names(self, path: str) -> List[str]:
        result = self.runner.run_git(path, "remote")
        return parse_lines(result.output)

    def get_remotes(self, path: str) -> List[Remote]:
        """Get every remote with its URL."""
        return [
            Remote(name=name, url=self.get_remote_url(path, name))
            for name in self.get_remote_names(path)
        ]

    def add_remote(self, path: str, remote_name: str, remote_url: str) -> None:
        """Add a remote.

        Raises:
            GitCommandError: if a remote with that name already exists
        """
        if remote_name in self.get_remote_names(path):
            raise GitCommandError(
                f"Remote {remote_name} already exists in {path}.",
                "remote -v",
                path=path,
            )

        logger.info(f"Adding remote {remote_name} with URL {redact_credentials(remote_url)} in {path}.")
        self.runner.run_git(path, "remote", "add", remote_name, remote_url)

    def set_remote_url(self, path: str, remote_name: str, remote_url: str) -> None:
        """Point an existing remote at a new URL.

        Raises:
            GitCommandError: if the remote does not exist
        """
        if remote_name not in self.get_remote_names(path):
            raise GitCommandError(
                f"Remote {remote_name} does not exist in {path}.",
                "remote -v",
                path=path,
            )

        logger.info(f"Setting remote {remote_name} with URL {redact_credentials(remote_url)} in {path}.")
        self.runner.run_git(path, "remote", "set-url", remote_name, remote_url)

    def delete_remote(self, path: str, remote_name: str) -> None:
        """Remove a remote.

        Raises:
            GitCommandError: if the remote does not exist
        """
        if remote_name not in self.get_remote_names(path):
            raise GitCommandError(
                f"Remote {remote_name} does not exist in {path}.",
                "remote -v",
                path=path,
            )

        logger.info(f"Deleting remote {remote_name} in {path}.")
        self.runner.run_git(path, "remote", "remove", remote_name)

    def add_or_set_remote_url(self, path: str, remote_name: str, remote_url: str) -> None:
        """Make ``remote_name`` point at ``remote_url``, adding it if needed."""
        if remote_name not in self.get_remote_names(path):
            self.add_remote(path, remote_name, remote_url)
            return

        current_url = self.get_remote_url(path, remote_name)
        if current_url.lower() == remote_url.lower():
            logger.info(f"Remote {remote_name} already points to {redact_credentials(remote_url)} in {path}, skipping.")
            return

        self.set_remote_url(path, remote_name, remote_url)
