"""Git-related services for git-workspace-keeper."""

from .command_runner import GitCommandRunner
from .fetch import FetchCoordinator
from .branch_queries import BranchQueries
from .remote_queries import RemoteQueries
from .commit_queries import CommitQueries
from .workspace import WorkspaceManager
from .mirror import BranchMirror

__all__ = [
    "GitCommandRunner",
    "FetchCoordinator",
    "BranchQueries",
    "RemoteQueries",
    "CommitQueries",
    "WorkspaceManager",
    "BranchMirror",
]
