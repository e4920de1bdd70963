"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class PushOutcome(Enum):
    """Result of publishing a branch."""
    PUSHED = "pushed"
    REJECTED = "rejected"  # Remote is ahead of local; nothing was overwritten


@dataclass(frozen=True)
class BranchInfo:
    """A local branch and the remote branch it follows, if any."""
    name: str
    upstream_remote: Optional[str] = None
    upstream_branch: Optional[str] = None

    @property
    def has_upstream(self) -> bool:
        return self.upstream_remote is not None and self.upstream_branch is not None

    @property
    def upstream_ref(self) -> Optional[str]:
        """Upstream in ``<remote>/<branch>`` form."""
        if not self.has_upstream:
            return None
        return f"{self.upstream_remote}/{self.upstream_branch}"
