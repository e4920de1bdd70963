"""Commit history queries for git-workspace-keeper."""

from datetime import datetime
from typing import List

from git_workspace_keeper.exceptions import GitCommandError
from git_workspace_keeper.models.commit import Commit
from git_workspace_keeper.parsers import COMMIT_LOG_FORMAT, parse_commit_times, parse_commits
from git_workspace_keeper.services.git.command_runner import GitCommandRunner
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)

_NO_COMMITS_MARKER = "does not have any commits yet"


class CommitQueries:
    """Service for reading commit history and working tree state."""

    def __init__(self, runner: GitCommandRunner):
        self.runner = runner

    def get_commits(self, path: str) -> List[Commit]:
        """Get every commit reachable from HEAD, newest first."""
        try:
            result = self.runner.run_git(path, "--no-pager", "log", f"--format={COMMIT_LOG_FORMAT}")
        except GitCommandError as e:
            if _NO_COMMITS_MARKER in e.error:
                return []
            raise
        return parse_commits(result.output)

    def get_commit_times(self, path: str) -> List[datetime]:
        """Get the commit time of every commit reachable from HEAD, newest first.

        A repository without commits yields an empty list.
        """
        try:
            result = self.runner.run_git(path, "--no-pager", "log", "--format=%at")
        except GitCommandError as e:
            if _NO_COMMITS_MARKER in e.error:
                logger.debug(f"No commits yet at {path}")
                return []
            raise
        return parse_commit_times(result.output)

    def pending_commit(self, path: str) -> bool:
        """True if the working tree has anything to commit."""
        result = self.runner.run_git(path, "status")
        return "working tree clean" not in result.output

    def get_current_user_email(self, path: str) -> str:
        """The configured ``user.email``, or an empty string when there is none."""
        try:
            result = self.runner.run_git(path, "config", "user.email")
        except GitCommandError:
            return ""
        return result.output.strip()
