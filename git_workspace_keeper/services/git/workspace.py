"""Workspace reconciliation: clone, reset, switch, commit and push."""

from typing import Optional

from git_workspace_keeper.exceptions import GitCommandError, RemoteMismatchError
from git_workspace_keeper.models.branch import PushOutcome
from git_workspace_keeper.models.clone_mode import CloneMode, clone_flags
from git_workspace_keeper.models.output import GitOutput
from git_workspace_keeper.models.remote import Remote
from git_workspace_keeper.services.git.branch_queries import BranchQueries
from git_workspace_keeper.services.git.command_runner import GitCommandRunner
from git_workspace_keeper.services.git.commit_queries import CommitQueries
from git_workspace_keeper.services.git.fetch import FetchCoordinator
from git_workspace_keeper.services.git.remote_queries import RemoteQueries
from git_workspace_keeper.utils.fs import delete_by_force
from git_workspace_keeper.utils.logging import get_logger
from git_workspace_keeper.utils.urls import embed_token, redact_credentials, validate_endpoint

logger = get_logger(__name__)

_NOTHING_TO_COMMIT = "nothing to commit"
_BRANCH_EXISTS = "already exists"
_PUSH_REJECTED = "rejected]"
_NO_SUCH_REMOTE = "No such remote"


def _is_recoverable_by_reclone(error: GitCommandError, endpoint: str) -> bool:
    """Failures meaning the directory is not a usable checkout of ``endpoint``."""
    if isinstance(error, RemoteMismatchError):
        return True
    message = str(error)
    return (
        "not a git repository" in message
        or "unknown revision or path" in message
        or f"is not a repository for {endpoint}" in message
    )


class WorkspaceManager:
    """Converges a directory to a (endpoint, branch, clone mode) state.

    Every method takes the workspace path explicitly; the manager keeps no
    per-directory state. Calls against the same directory must be serialized
    by the caller.
    """

    def __init__(
        self,
        runner: GitCommandRunner,
        fetcher: FetchCoordinator,
        branches: BranchQueries,
        remotes: RemoteQueries,
        commits: CommitQueries,
        remote_name: str = "origin",
        push_remote_name: str = "ninja",
        bot_name: str = "git-workspace-keeper",
        bot_email: str = "nobody@domain.com",
    ):
        """Initialize the workspace manager.

        Args:
            runner: Command runner
            fetcher: Fetch coordinator used for every network fetch
            branches: Branch queries
            remotes: Remote queries
            commits: Commit queries
            remote_name: Remote a workspace is synchronized from
            push_remote_name: Remote reserved for publishing
            bot_name: Author name used when the workspace has no identity
            bot_email: Author email used when the workspace has no identity
        """
        self.runner = runner
        self.fetcher = fetcher
        self.branches = branches
        self.remotes = remotes
        self.commits = commits
        self.remote_name = remote_name
        self.push_remote_name = push_remote_name
        self.bot_name = bot_name
        self.bot_email = bot_email

    def init(self, path: str) -> None:
        self.runner.run_git(path, "init")

    def is_bare_repo(self, path: str) -> bool:
        result = self.runner.run_git(path, "config", "--get", "core.bare")
        return "true" in result.output

    def fetch(self, path: str) -> GitOutput:
        """Fetch from the remote, retrying with an escalating timeout."""
        return self.fetcher.fetch(path, self.remote_name)

    def clone(
        self,
        path: str,
        branch: Optional[str],
        endpoint: str,
        clone_mode: CloneMode,
        token: Optional[str] = None,
    ) -> None:
        """Clone ``endpoint`` into ``path``.

        Args:
            path: Empty (or missing) target directory
            branch: Branch to check out, None for the remote's default branch
            endpoint: Repository URL
            clone_mode: How much history to download
            token: Optional token, embedded into https endpoints only

        Raises:
            UnsupportedCloneModeError: if ``clone_mode`` has no flag mapping
            InvalidEndpointError: if ``endpoint`` is blank or malformed
        """
        flags = clone_flags(clone_mode)
        validate_endpoint(endpoint)
        url = embed_token(endpoint, token)
        if url != endpoint:
            logger.info("Using a personal access token to clone from a private repository.")

        args = ["clone", *flags]
        # git refuses --origin together with --bare on older versions
        rename_remote = self.remote_name != "origin" and clone_mode.is_bare
        if self.remote_name != "origin" and not rename_remote:
            args += ["--origin", self.remote_name]
        if branch and branch.strip():
            args += ["-b", branch.strip()]
        args += [url, "."]

        logger.info(f"Cloning {redact_credentials(endpoint)} into {path} ({clone_mode.value})")
        self.runner.run_git(path, *args)
        if rename_remote:
            self.runner.run_git(path, "remote", "rename", "origin", self.remote_name)

    def reset_repo(
        self,
        path: str,
        branch: Optional[str],
        endpoint: str,
        clone_mode: CloneMode,
        token: Optional[str] = None,
    ) -> None:
        """Make ``path`` a clean checkout of ``endpoint`` at ``branch``.

        Works on an empty or missing directory, on a checkout of another
        repository, on a broken repository and on a previous bare or non-bare
        checkout of the same repository. Only when the directory cannot be
        reused is it wiped and cloned again.

        Args:
            path: Workspace directory
            branch: Branch to end up on, None for the remote's default branch
            endpoint: Repository URL the workspace must track
            clone_mode: Clone mode used if a fresh clone is needed
            token: Optional token for https endpoints

        Raises:
            UnsupportedCloneModeError: if ``clone_mode`` has no flag mapping
            InvalidEndpointError: if ``endpoint`` is blank or malformed; the
                directory is left untouched
        """
        clone_flags(clone_mode)
        validate_endpoint(endpoint)
        branch = branch.strip() if branch and branch.strip() else None
        try:
            remote = Remote(self.remote_name, self.remotes.get_remote_url(path, self.remote_name))
            if not remote.points_to(endpoint):
                raise RemoteMismatchError(redact_credentials(remote.url), endpoint, path)

            if self.is_bare_repo(path):
                logger.debug(f"The repo at {path} is a bare repo. We will fetch it.")
                current_branch = self.branches.get_branch(path)
                self.runner.run_git(
                    path, "fetch", self.remote_name, f"{current_branch}:{current_branch}"
                )
            else:
                logger.debug(f"The repo at {path} is a normal repo. We will reset it.")
                self.runner.run_git(path, "reset", "--hard", "HEAD")
                self.runner.run_git(path, "clean", ".", "-fdx")
                if branch:
                    logger.info(f"Switching to branch {branch} at {path}")
                    self.switch_to_branch(path, branch, enforce_current_content=False)

                self.fetch(path)
                target = f"{self.remote_name}/{branch}" if branch else f"{self.remote_name}/HEAD"
                self.runner.run_git(path, "reset", "--hard", target)
        except GitCommandError as e:
            if not _is_recoverable_by_reclone(e, endpoint):
                raise
            logger.info(f"The repo at {path} is not a usable checkout because {e}. We will clone it.")
            delete_by_force(path, keep_folder=True)
            self.clone(path, branch, endpoint, clone_mode, token)

    def switch_to_branch(self, path: str, target_branch: str, enforce_current_content: bool) -> None:
        """Switch ``path`` to ``target_branch``.

        Args:
            path: Workspace directory
            target_branch: Branch to switch to
            enforce_current_content: If True and the branch already exists, it is
                deleted and recreated from the current HEAD, discarding its history.
                If False, the existing branch is checked out as it is.
        """
        current_branch = self.branches.get_branch(path)
        if current_branch.lower() == target_branch.lower():
            return

        recreated = False
        while True:
            try:
                self.runner.run_git(path, "checkout", "-b", target_branch)
                return
            except GitCommandError as e:
                if _BRANCH_EXISTS not in str(e):
                    raise
                if not enforce_current_content:
                    self.runner.run_git(path, "checkout", target_branch)
                    return
                if recreated:
                    raise
                logger.info(f"Overwriting existing branch {target_branch} at {path} with the current content.")
                self.runner.run_git(path, "branch", "-D", target_branch)
                recreated = True

    def add_and_commit(self, path: str, message: str) -> None:
        """Stage everything and commit, using the bot identity if none is configured."""
        self.runner.run_git(path, "add", ".")
        if self.commits.get_current_user_email(path):
            self.runner.run_git(path, "commit", "-m", message)
            return

        self.set_user_config(path, self.bot_name, self.bot_email)
        self.runner.run_git(
            path, "commit", "-m", message, "--author", f"{self.bot_name} <{self.bot_email}>"
        )

    def set_user_config(self, path: str, username: str, email: str) -> None:
        self.runner.run_git(path, "config", "user.name", username)
        self.runner.run_git(path, "config", "user.email", email)

    def commit_to_branch(self, path: str, message: str, branch: str) -> bool:
        """Stage all changes and commit them as the new tip of ``branch``.

        ``branch`` is recreated from the current HEAD if it already exists.

        Returns:
            True if a commit was created, False if there was nothing to commit
        """
        self.runner.run_git(path, "add", ".")
        self.switch_to_branch(path, branch, enforce_current_content=True)
        result = self.runner.run_git(path, "commit", "-m", message)
        return _NOTHING_TO_COMMIT not in result.combined

    def push(self, path: str, branch: str, endpoint: str, force: bool = False) -> PushOutcome:
        """Publish ``branch`` to ``endpoint`` through the dedicated publish remote.

        Returns:
            PushOutcome.PUSHED, or PushOutcome.REJECTED when the remote has
            commits the local branch lacks (nothing is overwritten then)
        """
        validate_endpoint(endpoint)
        try:
            self.runner.run_git(path, "remote", "set-url", self.push_remote_name, endpoint)
        except GitCommandError as e:
            if _NO_SUCH_REMOTE not in e.error:
                raise
            self.runner.run_git(path, "remote", "add", self.push_remote_name, endpoint)

        args = ["push", "--set-upstream", self.push_remote_name, branch]
        if force:
            args.append("--force")
        try:
            logger.info(f"Running git {' '.join(args)}")
            self.runner.run_git(path, *args)
        except GitCommandError as e:
            if _PUSH_REJECTED in e.error:
                logger.info(f"Push of {branch} from {path} was rejected; the remote is ahead.")
                return PushOutcome.REJECTED
            logger.warning(
                f"Git push failed from {path}, branch {branch}, endpoint {redact_credentials(endpoint)}: {e}"
            )
            raise
        return PushOutcome.PUSHED

    def push_all_branches_and_tags(self, path: str, remote_name: str, force: bool = False) -> None:
        force_args = ["--force"] if force else []
        self.runner.run_git(path, "push", remote_name, "--all", *force_args)
        self.runner.run_git(path, "push", remote_name, "--tags", *force_args)
