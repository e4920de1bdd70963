"""Branch query service for git-workspace-keeper."""

from typing import List

from git_workspace_keeper.exceptions import GitCommandError
from git_workspace_keeper.models.branch import BranchInfo
from git_workspace_keeper.parsers import (
    parse_local_branches,
    parse_remote_branches,
    parse_single_line,
)
from git_workspace_keeper.services.git.command_runner import GitCommandRunner
from git_workspace_keeper.services.git.fetch import FetchCoordinator
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)


class BranchQueries:
    """Service for querying branch information."""

    def __init__(self, runner: GitCommandRunner, fetcher: FetchCoordinator):
        """Initialize the branch queries service.

        Args:
            runner: Command runner used for every query
            fetcher: Fetch coordinator, used to refresh remote refs before listing them
        """
        self.runner = runner
        self.fetcher = fetcher

    def get_branch(self, path: str) -> str:
        """Get the current branch (``HEAD`` when detached)."""
        result = self.runner.run_git(path, "rev-parse", "--abbrev-ref", "HEAD")
        return parse_single_line(result.output)

    def get_all_local_branches(self, path: str) -> List[str]:
        """List all local branch names."""
        result = self.runner.run_git(path, "branch", "--format=%(refname:short)")
        return parse_local_branches(result.output)

    def list_remote_branches(self, path: str, remote: str = "origin") -> List[str]:
        """List the branches of ``remote`` without the ``<remote>/`` prefix.

        Fetches first, so the listing reflects the remote as of this call.
        """
        self.fetcher.fetch(path, remote)
        result = self.runner.run_git(path, "branch", "-r")
        branches = parse_remote_branches(result.output, remote)
        logger.debug(f"Found {len(branches)} branches on {remote} at {path}")
        return branches

    def get_upstream(self, path: str, branch: str) -> BranchInfo:
        """Get the upstream tracking relation of a local branch."""
        try:
            result = self.runner.run_git(
                path, "rev-parse", "--abbrev-ref", "--symbolic-full-name", f"{branch}@{{upstream}}"
            )
        except GitCommandError as e:
            if "no upstream configured" in e.error or "does not point to a branch" in e.error:
                return BranchInfo(name=branch)
            raise

        upstream = parse_single_line(result.output)
        remote, _, remote_branch = upstream.partition("/")
        if not remote_branch:
            return BranchInfo(name=branch)
        return BranchInfo(name=branch, upstream_remote=remote, upstream_branch=remote_branch)
