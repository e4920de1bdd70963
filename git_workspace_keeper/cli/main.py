"""Command-line interface for git-workspace-keeper"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from git_workspace_keeper.cli.args import parse_args
from git_workspace_keeper.config import Config
from git_workspace_keeper.core import WorkspaceKeeper
from git_workspace_keeper.exceptions import GitCommandError
from git_workspace_keeper.models.branch import PushOutcome
from git_workspace_keeper.utils.logging import setup_logging

console = Console()


def _build_config(parsed_args) -> Config:
    values = dict(
        remote_name=parsed_args.remote,
        command_timeout=parsed_args.command_timeout,
        fetch_timeout_step=parsed_args.fetch_timeout_step,
        max_fetch_attempts=parsed_args.max_fetch_attempts,
        verbose=parsed_args.verbose,
        debug=parsed_args.debug,
    )
    if parsed_args.token:
        values["token"] = parsed_args.token
    return Config(**values)


def _show_branches(keeper: WorkspaceKeeper, path: str) -> None:
    remote = keeper.config.remote_name
    local = keeper.branches.get_all_local_branches(path)
    remote_branches = keeper.branches.list_remote_branches(path, remote)
    current = keeper.branches.get_branch(path)
    remote_lower = {name.lower() for name in remote_branches}
    local_lower = {name.lower() for name in local}

    table = Table(title=f"Branches at {path}")
    table.add_column("Branch")
    table.add_column("Local")
    table.add_column(remote)
    for name in sorted(set(local) | set(remote_branches), key=str.lower):
        marker = " *" if name == current else ""
        table.add_row(
            f"{name}{marker}",
            "✓" if name.lower() in local_lower else "✗",
            "✓" if name.lower() in remote_lower else "✗",
        )
    console.print(table)


def _show_commits(keeper: WorkspaceKeeper, path: str, limit: int) -> None:
    commits = keeper.commits.get_commits(path)
    table = Table(title=f"Commits at {path}")
    table.add_column("Hash", style="yellow")
    table.add_column("Date")
    table.add_column("Author")
    table.add_column("Message")
    for commit in commits[:limit]:
        table.add_row(
            commit.hash[:8],
            commit.time.strftime("%Y-%m-%d %H:%M"),
            f"{commit.author} <{commit.email}>",
            commit.message,
        )
    console.print(table)


def run(parsed_args) -> int:
    """Run one parsed command and return the exit code."""
    keeper = WorkspaceKeeper(_build_config(parsed_args))

    if parsed_args.command == "clone":
        keeper.clone(parsed_args.path, parsed_args.endpoint, parsed_args.branch, parsed_args.mode)
        console.print(f"[green]Cloned into {parsed_args.path}[/green]")
    elif parsed_args.command == "reset":
        keeper.reset(parsed_args.path, parsed_args.endpoint, parsed_args.branch, parsed_args.mode)
        branch = keeper.branches.get_branch(parsed_args.path)
        console.print(f"[green]{parsed_args.path} is up to date on {branch}[/green]")
    elif parsed_args.command == "mirror":
        branches = keeper.mirror_branches(parsed_args.path)
        console.print(f"[green]Mirrored {len(branches)} branches from {keeper.config.remote_name}[/green]")
    elif parsed_args.command == "branches":
        _show_branches(keeper, parsed_args.path)
    elif parsed_args.command == "commits":
        _show_commits(keeper, parsed_args.path, parsed_args.limit)
    elif parsed_args.command == "push":
        outcome = keeper.publish(parsed_args.path, parsed_args.branch, parsed_args.endpoint, parsed_args.force)
        if outcome is PushOutcome.REJECTED:
            console.print("[yellow]Push rejected: the remote has commits this branch does not have[/yellow]")
        else:
            console.print(f"[green]Pushed {parsed_args.branch}[/green]")
    return 0


def main(argv=None):
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, log_file=parsed_args.log_file)
        return run(parsed_args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except GitCommandError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        console.print(f"[dim]command: git {escape(e.command)}\npath: {escape(str(e.path))}[/dim]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
