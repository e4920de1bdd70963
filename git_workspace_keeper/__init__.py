"""
git-workspace-keeper - Keep local git workspaces converged with their remotes
"""

from .__version__ import __version__
from .core import WorkspaceKeeper
from .cli.main import main

__all__ = ["WorkspaceKeeper", "main", "__version__"]
