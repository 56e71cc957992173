# Tests for repodock.git.operations
# Git command execution and thin command wrappers

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from repodock.git.operations import (
    CommandResult,
    GitError,
    GitRunner,
    branch_exists,
    checkout,
    get_current_branch,
    get_remote_head,
    pull_from_remote,
    run_checked,
    set_upstream,
)


class TestGitError:
    """Tests for GitError exception."""

    def test_basic_error(self):
        err = GitError("test message")
        assert err.message == "test message"
        assert err.returncode == 1
        assert err.output == ""
        assert err.command == ""
        assert str(err) == "test message"

    def test_error_with_details(self):
        err = GitError("failed", returncode=128, output="fatal: not a repo", command="pull")
        assert err.returncode == 128
        assert err.output == "fatal: not a repo"
        assert err.command == "pull"


class TestCommandResult:
    def test_ok(self):
        assert CommandResult(args=("pull",), output="", returncode=0).ok
        assert not CommandResult(args=("pull",), output="", returncode=1).ok

    def test_command_is_first_argument(self):
        assert CommandResult(args=("branch", "--show-current"), output="", returncode=0).command == "branch"
        assert CommandResult(args=(), output="", returncode=0).command == ""


class TestGitRunner:
    """Tests for GitRunner.run."""

    @patch("repodock.git.operations.subprocess.run")
    def test_successful_command(self, mock_run, temp_dir: Path):
        mock_run.return_value = subprocess.CompletedProcess(args=["git", "status"], returncode=0, stdout="clean")
        result = GitRunner().run(temp_dir, "status")
        assert result.ok
        assert result.output == "clean"
        assert result.args == ("status",)

    @patch("repodock.git.operations.subprocess.run")
    def test_merges_stderr_into_output(self, mock_run, temp_dir: Path):
        mock_run.return_value = subprocess.CompletedProcess(args=["git", "pull"], returncode=1, stdout="fatal: x")
        GitRunner().run(temp_dir, "pull")
        mock_run.assert_called_once_with(
            ["git", "pull"],
            cwd=temp_dir,
            check=False,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
        )

    @patch("repodock.git.operations.subprocess.run")
    def test_non_zero_exit_is_returned_not_raised(self, mock_run, temp_dir: Path):
        mock_run.return_value = subprocess.CompletedProcess(args=["git", "diff"], returncode=1, stdout=None)
        result = GitRunner().run(temp_dir, "diff", "--quiet")
        assert result.returncode == 1
        assert result.output == ""

    @patch("repodock.git.operations.subprocess.run", side_effect=FileNotFoundError)
    def test_git_not_found(self, mock_run, temp_dir: Path):
        with pytest.raises(GitError, match="git command not found") as exc_info:
            GitRunner().run(temp_dir, "status")
        assert exc_info.value.returncode == 127

    @patch("repodock.git.operations.subprocess.run")
    def test_missing_directory(self, mock_run, temp_dir: Path):
        with pytest.raises(GitError) as exc_info:
            GitRunner().run(temp_dir / "missing", "status")
        assert "No such file or directory" in exc_info.value.output
        mock_run.assert_not_called()

    @patch("repodock.git.operations.subprocess.run")
    def test_custom_executable(self, mock_run, temp_dir: Path):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="")
        GitRunner("/usr/local/bin/git").run(temp_dir, "fetch")
        assert mock_run.call_args[0][0] == ["/usr/local/bin/git", "fetch"]


class TestRunChecked:
    def test_returns_result_on_success(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner({("fetch",): ("done", 0)})
        assert run_checked(temp_dir, "fetch", runner=runner).output == "done"

    def test_raises_with_output_and_command(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner({("pull",): ("fatal: Could not read from remote repository.\n", 1)})
        with pytest.raises(GitError) as exc_info:
            run_checked(temp_dir, "pull", runner=runner)
        assert exc_info.value.command == "pull"
        assert exc_info.value.returncode == 1
        assert exc_info.value.output == "fatal: Could not read from remote repository."


class TestCommands:
    def test_get_current_branch_strips_output(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner({("branch", "--show-current"): ("feature/x\n", 0)})
        assert get_current_branch(temp_dir, runner=runner) == "feature/x"

    def test_get_current_branch_raises(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner({("branch", "--show-current"): ("fatal: not a git repository", 128)})
        with pytest.raises(GitError):
            get_current_branch(temp_dir, runner=runner)

    def test_checkout_arguments(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner()
        checkout(temp_dir, "develop", runner=runner)
        assert runner.commands == [("checkout", "develop")]

    def test_set_upstream_arguments(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner()
        set_upstream(temp_dir, "develop", runner=runner)
        assert runner.commands == [("branch", "--set-upstream-to=origin/develop", "develop")]

    def test_pull_from_remote_arguments(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner()
        pull_from_remote(temp_dir, "develop", runner=runner)
        assert runner.commands == [("pull", "origin", "develop")]


class TestBranchExists:
    def test_exists(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner({("show-ref", "--verify", "--quiet", "refs/heads/main"): ("", 0)})
        assert branch_exists(temp_dir, "main", runner=runner) is True

    def test_missing(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner(default=("", 1))
        assert branch_exists(temp_dir, "main", runner=runner) is False

    def test_launch_failure_counts_as_missing(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner(default=("", 0))
        runner.responses[("show-ref", "--verify", "--quiet", "refs/heads/main")] = GitError("git command not found")
        assert branch_exists(temp_dir, "main", runner=runner) is False


class TestGetRemoteHead:
    def test_last_segment(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner({("symbolic-ref", "refs/remotes/origin/HEAD"): ("refs/remotes/origin/trunk\n", 0)})
        assert get_remote_head(temp_dir, runner=runner) == "trunk"

    def test_not_set(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner(
            {("symbolic-ref", "refs/remotes/origin/HEAD"): ("fatal: ref refs/remotes/origin/HEAD is not a symbolic ref", 128)}
        )
        assert get_remote_head(temp_dir, runner=runner) is None

    def test_empty_output(self, temp_dir: Path, make_git_runner):
        runner = make_git_runner({("symbolic-ref", "refs/remotes/origin/HEAD"): ("\n", 0)})
        assert get_remote_head(temp_dir, runner=runner) is None
