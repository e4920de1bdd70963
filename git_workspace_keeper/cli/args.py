"""Command-line argument parsing for git-workspace-keeper."""

import argparse

from git_workspace_keeper.__version__ import __version__
from git_workspace_keeper.config import TOKEN_ENV_VAR
from git_workspace_keeper.models.clone_mode import CloneMode

CLONE_MODE_CHOICES = [mode.value for mode in CloneMode]


def _add_checkout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Workspace directory")
    parser.add_argument("endpoint", help="Repository URL")
    parser.add_argument("-b", "--branch", help="Branch to check out (default: the remote's default branch)")
    parser.add_argument(
        "--mode",
        choices=CLONE_MODE_CHOICES,
        default=CloneMode.FULL.value,
        help="How much history to download (default: full)",
    )


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Keep local git workspaces converged with their remotes",
        epilog=f"Private https repositories: set {TOKEN_ENV_VAR} or pass --token.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--debug", action="store_true", help="Log every git command")
    parser.add_argument("--version", action="version", version=f"git-workspace-keeper {__version__}")
    parser.add_argument("--log-file", help="Also write a full debug log to this file")
    parser.add_argument("--token", help=f"Token for https endpoints (default: ${TOKEN_ENV_VAR})")
    parser.add_argument("--remote", default="origin", help="Remote to synchronize from (default: origin)")
    parser.add_argument(
        "--command-timeout",
        type=float,
        default=120.0,
        metavar="SECONDS",
        help="Kill any git process running longer than this (default: 120)",
    )
    parser.add_argument(
        "--fetch-timeout-step",
        type=float,
        default=50.0,
        metavar="SECONDS",
        help="Fetch attempt n is abandoned after n times this (default: 50)",
    )
    parser.add_argument(
        "--max-fetch-attempts",
        type=int,
        metavar="N",
        help="Give up fetching after N attempts (default: never give up)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    clone_parser = subparsers.add_parser("clone", help="Clone a repository into an empty directory")
    _add_checkout_arguments(clone_parser)

    reset_parser = subparsers.add_parser(
        "reset", help="Make a directory a clean checkout of a repository, whatever it contains now"
    )
    _add_checkout_arguments(reset_parser)

    mirror_parser = subparsers.add_parser(
        "mirror", help="Make the local branches exactly match the remote's branches"
    )
    mirror_parser.add_argument("path", help="Workspace directory")

    branches_parser = subparsers.add_parser("branches", help="Show local and remote branches")
    branches_parser.add_argument("path", help="Workspace directory")

    commits_parser = subparsers.add_parser("commits", help="Show the commit history, newest first")
    commits_parser.add_argument("path", help="Workspace directory")
    commits_parser.add_argument("-n", "--limit", type=int, default=20, help="Number of commits (default: 20)")

    push_parser = subparsers.add_parser("push", help="Publish a branch to another repository")
    push_parser.add_argument("path", help="Workspace directory")
    push_parser.add_argument("branch", help="Branch to publish")
    push_parser.add_argument("endpoint", help="Repository URL to publish to")
    push_parser.add_argument("--force", action="store_true", help="Overwrite the remote branch")

    return parser.parse_args(argv)
