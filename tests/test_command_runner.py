"""Tests for GitCommandRunner"""
from unittest.mock import patch

import git
import pytest

from git_workspace_keeper.exceptions import (
    GitCommandError,
    GitCommandTimeoutError,
    GitNotFoundError,
    TransientGitError,
)
from git_workspace_keeper.services.git.command_runner import GitCommandRunner


class TestRunGit:
    """Test running real git commands."""

    def test_success_returns_output(self, upstream_repo):
        runner = GitCommandRunner()
        result = runner.run_git(upstream_repo.working_dir, "rev-parse", "--abbrev-ref", "HEAD")
        assert result.output == "main"
        assert result.status == 0

    def test_creates_missing_directory(self, temp_dir):
        runner = GitCommandRunner()
        target = temp_dir / "does" / "not" / "exist"
        runner.run_git(str(target), "init")
        assert (target / ".git").is_dir()

    def test_fatal_error_is_classified(self, temp_dir):
        runner = GitCommandRunner()
        with pytest.raises(GitCommandError) as exc_info:
            runner.run_git(str(temp_dir), "rev-parse", "--abbrev-ref", "HEAD")

        error = exc_info.value
        assert "not a git repository" in str(error)
        assert error.command == "rev-parse --abbrev-ref HEAD"
        assert error.path == str(temp_dir)
        assert "fatal" in error.error

    def test_nonzero_exit_without_error_text_returns_output(self, upstream_repo):
        """``git config --get`` of an unset key exits 1 without complaining."""
        runner = GitCommandRunner()
        result = runner.run_git(upstream_repo.working_dir, "config", "--get", "workspace.keeper.unset")
        assert result.output == ""
        assert result.status != 0


class TestClassification:
    """Test classification of failures reported by GitPython."""

    def test_git_not_found(self, temp_dir):
        runner = GitCommandRunner()
        with patch.object(git.Git, "execute", side_effect=git.exc.GitCommandNotFound("git", "not found")):
            with pytest.raises(GitNotFoundError) as exc_info:
                runner.run_git(str(temp_dir), "status")
        assert "Git not found" in str(exc_info.value)

    def test_git_lfs_missing(self, temp_dir):
        runner = GitCommandRunner()
        with patch.object(git.Git, "execute", return_value=(0, "", "git-lfs: command not found")):
            with pytest.raises(GitNotFoundError, match="Git LFS not found"):
                runner.run_git(str(temp_dir), "checkout", "main")

    def test_killed_after_timeout(self, temp_dir):
        runner = GitCommandRunner(timeout=5)
        stderr = 'Timeout: the command "git fetch --verbose" did not complete in 5 secs.'
        with patch.object(git.Git, "execute", return_value=(-9, "", stderr)):
            with pytest.raises(GitCommandTimeoutError) as exc_info:
                runner.run_git(str(temp_dir), "fetch", "--verbose")
        assert isinstance(exc_info.value, TransientGitError)
        assert exc_info.value.command == "fetch --verbose"

    def test_timeout_is_passed_to_gitpython(self, temp_dir):
        runner = GitCommandRunner(timeout=5)
        with patch.object(git.Git, "execute", return_value=(0, "ok", "")) as mock_execute:
            runner.run_git(str(temp_dir), "status")
            runner.run_git(str(temp_dir), "status", timeout=1)
        assert mock_execute.call_args_list[0].kwargs["kill_after_timeout"] == 5
        assert mock_execute.call_args_list[1].kwargs["kill_after_timeout"] == 1

    def test_credentials_redacted_from_errors(self, temp_dir):
        runner = GitCommandRunner()
        stderr = "fatal: unable to access 'https://s3cret@example.com/repo.git/': Could not resolve host"
        with patch.object(git.Git, "execute", return_value=(128, "", stderr)):
            with pytest.raises(GitCommandError) as exc_info:
                runner.run_git(str(temp_dir), "clone", "https://s3cret@example.com/repo.git", ".")

        error = exc_info.value
        assert "s3cret" not in str(error)
        assert "s3cret" not in error.command
        assert "s3cret" not in error.error
