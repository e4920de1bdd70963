"""Core functionality for git-workspace-keeper"""

from typing import Optional, Union

from git_workspace_keeper.config import Config
from git_workspace_keeper.models.branch import PushOutcome
from git_workspace_keeper.models.clone_mode import CloneMode
from git_workspace_keeper.services.git import (
    BranchMirror,
    BranchQueries,
    CommitQueries,
    FetchCoordinator,
    GitCommandRunner,
    RemoteQueries,
    WorkspaceManager,
)
from git_workspace_keeper.services.retry import RetryEngine
from git_workspace_keeper.utils.logging import get_logger

logger = get_logger(__name__)


class WorkspaceKeeper:
    """Wires the git services together from one configuration.

    Each collaborator is created once and handed to the services that need
    it; individual services can be replaced by passing them in.
    """

    def __init__(
        self,
        config: Optional[Union[Config, dict]] = None,
        runner: Optional[GitCommandRunner] = None,
    ):
        """Initialize the keeper.

        Args:
            config: Config object or plain dictionary, defaults to Config()
            runner: Command runner to use instead of one built from the config
        """
        if config is None:
            config = Config()
        elif isinstance(config, dict):
            config = Config.from_dict(config)
        self.config = config

        self.runner = runner or GitCommandRunner(timeout=config.command_timeout)
        self.retry_engine = RetryEngine(max_attempts=config.max_fetch_attempts)
        self.fetcher = FetchCoordinator(
            self.runner, self.retry_engine, config.fetch_timeout_step, config.command_timeout
        )
        self.branches = BranchQueries(self.runner, self.fetcher)
        self.remotes = RemoteQueries(self.runner)
        self.commits = CommitQueries(self.runner)
        self.workspace = WorkspaceManager(
            self.runner,
            self.fetcher,
            self.branches,
            self.remotes,
            self.commits,
            remote_name=config.remote_name,
            push_remote_name=config.push_remote_name,
            bot_name=config.bot_name,
            bot_email=config.bot_email,
        )
        self.mirror = BranchMirror(self.runner, self.branches)
        logger.debug("Workspace keeper initialized")

    def clone(self, path: str, endpoint: str, branch: Optional[str] = None,
              clone_mode: Union[CloneMode, str] = CloneMode.FULL) -> None:
        self.workspace.clone(path, branch, endpoint, CloneMode.parse(clone_mode), self.config.token)

    def reset(self, path: str, endpoint: str, branch: Optional[str] = None,
              clone_mode: Union[CloneMode, str] = CloneMode.FULL) -> None:
        """Converge ``path`` to a clean checkout of ``endpoint`` at ``branch``."""
        self.workspace.reset_repo(path, branch, endpoint, CloneMode.parse(clone_mode), self.config.token)

    def mirror_branches(self, path: str, remote: Optional[str] = None):
        """Mirror every branch of ``remote`` (the sync remote by default) locally."""
        return self.mirror.ensure_all_local_branches_up_to_date_with_remote(
            path, remote or self.config.remote_name
        )

    def publish(self, path: str, branch: str, endpoint: str, force: bool = False) -> PushOutcome:
        return self.workspace.push(path, branch, endpoint, force)
