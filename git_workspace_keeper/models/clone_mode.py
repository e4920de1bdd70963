"""Clone modes and the git flags each one maps to."""

import re
from enum import Enum
from typing import Dict, Tuple, Union

from git_workspace_keeper.exceptions import UnsupportedCloneModeError


class CloneMode(Enum):
    """How much history, tree and blob data a clone downloads."""

    # All reachable commits, trees and blobs. Best for inspecting file history.
    FULL = "full"
    # Treeless clone: commits only, trees and blobs fetched on demand.
    ONLY_COMMITS = "only-commits"
    # Blobless clone: commits and trees, blobs fetched on demand.
    COMMITS_AND_TREES = "commits-and-trees"
    # Shallow clone truncated to the tip commit.
    DEPTH1 = "depth1"
    # No working tree, history only.
    BARE = "bare"
    BARE_WITH_ONLY_COMMITS = "bare-with-only-commits"

    @property
    def is_bare(self) -> bool:
        return self in (CloneMode.BARE, CloneMode.BARE_WITH_ONLY_COMMITS)

    @classmethod
    def parse(cls, value: Union[str, "CloneMode"]) -> "CloneMode":
        """Parse ``depth1``, ``Depth1``, ``only-commits``, ``OnlyCommits``, ``ONLY_COMMITS`` ..."""
        if isinstance(value, cls):
            return value
        key = re.sub(r"[-_\s]", "", str(value)).lower()
        for mode in cls:
            if key == mode.name.replace("_", "").lower():
                return mode
        raise UnsupportedCloneModeError(value)


CLONE_MODE_FLAGS: Dict[CloneMode, Tuple[str, ...]] = {
    CloneMode.FULL: (),
    CloneMode.ONLY_COMMITS: ("--filter=tree:0",),
    CloneMode.COMMITS_AND_TREES: ("--filter=blob:none",),
    CloneMode.DEPTH1: ("--depth=1",),
    CloneMode.BARE: ("--bare",),
    CloneMode.BARE_WITH_ONLY_COMMITS: ("--bare", "--filter=tree:0"),
}


def clone_flags(clone_mode) -> Tuple[str, ...]:
    """Return the clone flags for ``clone_mode``.

    Raises:
        UnsupportedCloneModeError: if ``clone_mode`` is not a known mode
    """
    try:
        return CLONE_MODE_FLAGS[clone_mode]
    except (KeyError, TypeError):
        raise UnsupportedCloneModeError(clone_mode) from None
