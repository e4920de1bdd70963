"""Data models for git-workspace-keeper."""

from .branch import BranchInfo, PushOutcome
from .clone_mode import CloneMode, CLONE_MODE_FLAGS
from .commit import Commit
from .output import GitOutput
from .remote import Remote

__all__ = [
    "BranchInfo",
    "PushOutcome",
    "CloneMode",
    "CLONE_MODE_FLAGS",
    "Commit",
    "GitOutput",
    "Remote",
]
