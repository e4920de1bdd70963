"""Tests for clone modes and the clone command line"""
import pytest

from git_workspace_keeper.exceptions import ConfigurationError, UnsupportedCloneModeError
from git_workspace_keeper.models.clone_mode import CLONE_MODE_FLAGS, CloneMode, clone_flags

EXPECTED_FLAGS = {
    CloneMode.FULL: [],
    CloneMode.ONLY_COMMITS: ["--filter=tree:0"],
    CloneMode.COMMITS_AND_TREES: ["--filter=blob:none"],
    CloneMode.DEPTH1: ["--depth=1"],
    CloneMode.BARE: ["--bare"],
    CloneMode.BARE_WITH_ONLY_COMMITS: ["--bare", "--filter=tree:0"],
}


class TestCloneModeMapping:
    """Test the mode to flag mapping."""

    def test_every_mode_is_mapped(self):
        assert set(CLONE_MODE_FLAGS) == set(CloneMode)

    @pytest.mark.parametrize("mode", list(CloneMode))
    def test_clone_issues_exactly_the_mode_flags(self, mode, mock_keeper, mock_runner):
        """Each mode produces one clone command with exactly its flags."""
        mock_keeper.workspace.clone("/fake/path", "main", "https://example.com/repo.git", mode)

        mock_runner.run_git.assert_called_once()
        path, *args = mock_runner.run_git.call_args.args
        assert path == "/fake/path"
        assert args == ["clone", *EXPECTED_FLAGS[mode], "-b", "main", "https://example.com/repo.git", "."]

    def test_clone_without_branch_has_no_selector(self, mock_keeper, mock_runner):
        mock_keeper.workspace.clone("/fake/path", None, "https://example.com/repo.git", CloneMode.DEPTH1)

        args = mock_runner.run_git.call_args.args[1:]
        assert "-b" not in args

    def test_unknown_mode_is_configuration_error(self, mock_keeper, mock_runner):
        with pytest.raises(ConfigurationError):
            mock_keeper.workspace.clone("/fake/path", None, "https://example.com/repo.git", "shallowest")
        mock_runner.run_git.assert_not_called()

    def test_clone_flags_rejects_none(self):
        with pytest.raises(UnsupportedCloneModeError):
            clone_flags(None)


class TestCloneModeParsing:
    """Test parsing clone modes from user input."""

    @pytest.mark.parametrize("text,expected", [
        ("depth1", CloneMode.DEPTH1),
        ("Depth1", CloneMode.DEPTH1),
        ("only-commits", CloneMode.ONLY_COMMITS),
        ("OnlyCommits", CloneMode.ONLY_COMMITS),
        ("COMMITS_AND_TREES", CloneMode.COMMITS_AND_TREES),
        ("bare-with-only-commits", CloneMode.BARE_WITH_ONLY_COMMITS),
        (CloneMode.FULL, CloneMode.FULL),
    ])
    def test_parse(self, text, expected):
        assert CloneMode.parse(text) is expected

    def test_parse_unknown(self):
        with pytest.raises(UnsupportedCloneModeError):
            CloneMode.parse("mirror")

    def test_bare_modes(self):
        assert CloneMode.BARE.is_bare
        assert CloneMode.BARE_WITH_ONLY_COMMITS.is_bare
        assert not CloneMode.DEPTH1.is_bare
