"""Services for git-workspace-keeper."""
