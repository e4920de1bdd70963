"""Branch mirroring: make the local branch set match a remote's branch set."""

from typing import List

from git_workspace_keeper.exceptions import GitCommandError
from git_workspace_keeper.services.git.branch_queries import BranchQueries
from git_workspace_keeper.services.git.command_runner import GitCommandRunner
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)


class BranchMirror:
    """Mirrors every branch of a remote into local branches.

    The phases run strictly one after another (prune, adopt, synchronize) so
    that an interrupted mirror leaves a well-defined set of local branches.
    A failing branch aborts the whole operation; callers retry it as a unit.
    """

    def __init__(self, runner: GitCommandRunner, branches: BranchQueries):
        self.runner = runner
        self.branches = branches

    def delete_local_branch(self, path: str, branch_name: str, force: bool = False) -> None:
        flag = "-D" if force else "-d"
        logger.info(f"Deleting local branch {branch_name} in {path} with flag {flag}.")
        self.runner.run_git(path, "branch", flag, branch_name)

    def delete_local_branches_not_in_remote(self, path: str, remote: str = "origin") -> List[str]:
        """Force-delete local branches that have no counterpart on ``remote``.

        Returns:
            Names of the deleted branches
        """
        remote_branches = {name.lower() for name in self.branches.list_remote_branches(path, remote)}
        local_branches = self.branches.get_all_local_branches(path)

        deleted = []
        for branch in local_branches:
            if branch.lower() in remote_branches:
                continue
            logger.info(f"Deleting local branch {branch} in {path} because it does not exist on the remote.")
            try:
                self.delete_local_branch(path, branch, force=True)
            except GitCommandError as e:
                logger.warning(f"Failed to delete branch {branch} in {path}: {e}")
                raise
            deleted.append(branch)
        return deleted

    def create_local_branches_from_remote(self, path: str, remote: str = "origin") -> List[str]:
        """Create a tracking local branch for every branch only ``remote`` has.

        Returns:
            Names of the created branches
        """
        remote_branches = self.branches.list_remote_branches(path, remote)
        local_branches = {name.lower() for name in self.branches.get_all_local_branches(path)}

        created = []
        for branch in remote_branches:
            if branch.lower() in local_branches:
                continue
            logger.info(f"Creating local branch {branch} in {path} because it does not exist locally.")
            try:
                self.runner.run_git(path, "checkout", "-b", branch)
                self.runner.run_git(path, "reset", "--hard", f"{remote}/{branch}")
                self.runner.run_git(path, "branch", f"--set-upstream-to={remote}/{branch}", branch)
            except GitCommandError as e:
                logger.warning(f"Failed to create branch {branch} in {path}: {e}")
                raise
            created.append(branch)
        return created

    def ensure_all_local_branches_up_to_date_with_remote(self, path: str, remote: str = "origin") -> List[str]:
        """Make the local branches exactly mirror the branches of ``remote``.

        Afterwards the local branch names equal the remote branch names
        (compared case-insensitively) and every local tip equals its remote tip.

        Returns:
            The mirrored local branch names
        """
        self.delete_local_branches_not_in_remote(path, remote)
        self.create_local_branches_from_remote(path, remote)

        # Remote refs were fetched by the listings above; no second fetch here
        local_branches = self.branches.get_all_local_branches(path)
        for branch in local_branches:
            try:
                self.runner.run_git(path, "checkout", branch)
                self.runner.run_git(path, "reset", "--hard", f"{remote}/{branch}")
            except GitCommandError as e:
                logger.warning(f"Failed to mirror branch {branch} in {path}: {e}")
                raise
        return local_branches
