"""Pytest fixtures for git-workspace-keeper tests"""
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest

from git_workspace_keeper.config import Config
from git_workspace_keeper.core import WorkspaceKeeper
from git_workspace_keeper.models.output import GitOutput
from git_workspace_keeper.services.git.command_runner import GitCommandRunner


def _configure_identity(repo):
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


def _commit_file(repo, name, content, message):
    path = Path(repo.working_dir) / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([name])
    return repo.index.commit(message)


def make_upstream(path: Path, branches=("dev",)):
    """Create a non-bare repository with a main branch and extra branches."""
    path.mkdir(parents=True, exist_ok=True)
    repo = git.Repo.init(path)
    _configure_identity(repo)
    _commit_file(repo, "README.md", "# Upstream\n", "Initial commit")
    repo.git.branch("-M", "main")
    _commit_file(repo, "main.txt", "main content\n", "Second commit on main")

    for branch in branches:
        repo.git.checkout("-b", branch)
        slug = branch.replace("/", "-")
        _commit_file(repo, f"{slug}.txt", f"{branch} content\n", f"Work on {branch}")
        repo.git.checkout("main")
    return repo


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config():
    """Configuration with short timeouts for tests."""
    return {
        "remote_name": "origin",
        "push_remote_name": "ninja",
        "command_timeout": 60.0,
        "fetch_timeout_step": 30.0,
        "max_fetch_attempts": None,
        "token": None,
        "verbose": False,
        "debug": False,
    }


@pytest.fixture
def keeper(mock_config):
    """A keeper wired with real services."""
    return WorkspaceKeeper(Config.from_dict(mock_config))


@pytest.fixture
def upstream_repo(temp_dir):
    """An upstream repository with branches main and dev."""
    repo = make_upstream(temp_dir / "upstream")
    yield repo
    repo.close()


@pytest.fixture
def upstream_url(upstream_repo):
    return Path(upstream_repo.working_dir).as_uri()


@pytest.fixture
def other_upstream_url(temp_dir):
    """A second, unrelated upstream repository."""
    repo = make_upstream(temp_dir / "other-upstream", branches=())
    yield Path(repo.working_dir).as_uri()
    repo.close()


@pytest.fixture
def workspace_dir(temp_dir):
    """An empty workspace directory."""
    path = temp_dir / "workspace"
    path.mkdir()
    return path


@pytest.fixture
def publish_repo(temp_dir):
    """A bare repository to push to."""
    path = temp_dir / "publish.git"
    repo = git.Repo.init(path, bare=True)
    yield repo
    repo.close()


@pytest.fixture
def mock_runner():
    """A command runner that records calls and returns empty output."""
    runner = Mock(spec=GitCommandRunner)
    runner.run_git.return_value = GitOutput(output="")
    return runner


@pytest.fixture
def mock_keeper(mock_config, mock_runner):
    """A keeper whose services all talk to ``mock_runner``."""
    return WorkspaceKeeper(Config.from_dict(mock_config), runner=mock_runner)
