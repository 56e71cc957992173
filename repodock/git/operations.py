# Repodock Git Operations
# Git command execution inside a working copy

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class GitError(Exception):
    """Exception raised for git operation errors."""

    def __init__(self, message: str, returncode: int = 1, output: str = "", command: str = ""):
        self.message = message
        self.returncode = returncode
        self.output = output
        self.command = command
        super().__init__(message)


@dataclass(frozen=True)
class CommandResult:
    """Combined output and exit status of a git invocation."""

    args: tuple[str, ...]
    output: str
    returncode: int

    @property
    def ok(self) -> bool:
        """True if git exited with status 0."""
        return self.returncode == 0

    @property
    def command(self) -> str:
        """The git subcommand, e.g. "pull"."""
        return self.args[0] if self.args else ""


class GitRunner:
    """
    Runs git as a blocking external process.

    Standard output and standard error are merged, so the text seen by the
    error classifier is exactly what a user would see in a terminal. No
    timeout is applied.
    """

    def __init__(self, executable: str = "git"):
        self.executable = executable

    def run(self, cwd: Path, *args: str) -> CommandResult:
        """
        Run a git command in a working directory.

        Args:
            cwd: Working directory.
            *args: Git command arguments.

        Returns:
            CommandResult with combined output and exit status.

        Raises:
            GitError: If the process cannot be launched.
        """
        cwd = Path(cwd)
        if not cwd.is_dir():
            raise GitError(
                f"No such file or directory: {cwd}",
                returncode=-1,
                output=f"fatal: cannot change to '{cwd}': No such file or directory",
                command=args[0] if args else "",
            )

        cmd = [self.executable, *args]
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except FileNotFoundError:
            raise GitError("git command not found. Is git installed?", returncode=127, command=args[0] if args else "")
        except PermissionError as e:
            raise GitError(f"Permission denied: {e}", returncode=126, output=str(e), command=args[0] if args else "")

        return CommandResult(args=tuple(args), output=result.stdout or "", returncode=result.returncode)


_default_runner = GitRunner()


def get_default_runner() -> GitRunner:
    """Return the process-wide git runner."""
    return _default_runner


def run_checked(path: Path, *args: str, runner: Optional[GitRunner] = None) -> CommandResult:
    """
    Run a git command and raise on a non-zero exit.

    Args:
        path: Working copy path.
        *args: Git command arguments.
        runner: Optional runner (defaults to the real git binary).

    Returns:
        CommandResult of the successful command.

    Raises:
        GitError: If git cannot be launched or exits non-zero.
    """
    result = (runner or _default_runner).run(path, *args)
    if not result.ok:
        raise GitError(
            f"Git command failed: git {' '.join(args)}",
            returncode=result.returncode,
            output=result.output.strip(),
            command=result.command,
        )
    return result


def get_current_branch(path: Path, *, runner: Optional[GitRunner] = None) -> str:
    """
    Get current branch name.

    Args:
        path: Working copy path.
        runner: Optional git runner.

    Returns:
        Branch name, empty on a detached HEAD.

    Raises:
        GitError: If the branch cannot be read.
    """
    result = run_checked(path, "branch", "--show-current", runner=runner)
    return result.output.strip()


def checkout(path: Path, branch: str, *, runner: Optional[GitRunner] = None) -> CommandResult:
    """Switch the working copy to ``branch``."""
    return run_checked(path, "checkout", branch, runner=runner)


def fetch(path: Path, *, runner: Optional[GitRunner] = None) -> CommandResult:
    """Fetch remote changes without merging."""
    return run_checked(path, "fetch", runner=runner)


def pull(path: Path, *, runner: Optional[GitRunner] = None) -> CommandResult:
    """Pull from the configured upstream."""
    return run_checked(path, "pull", runner=runner)


def pull_from_remote(
    path: Path,
    branch: str,
    *,
    remote: str = "origin",
    runner: Optional[GitRunner] = None,
) -> CommandResult:
    """Pull ``branch`` from ``remote`` explicitly, bypassing upstream config."""
    return run_checked(path, "pull", remote, branch, runner=runner)


def set_upstream(
    path: Path,
    branch: str,
    *,
    remote: str = "origin",
    runner: Optional[GitRunner] = None,
) -> CommandResult:
    """Bind local ``branch`` to ``remote/branch`` as its upstream."""
    return run_checked(path, "branch", f"--set-upstream-to={remote}/{branch}", branch, runner=runner)


def branch_exists(path: Path, name: str, *, runner: Optional[GitRunner] = None) -> bool:
    """
    Check whether a local branch exists.

    Args:
        path: Working copy path.
        name: Branch name.
        runner: Optional git runner.

    Returns:
        True if ``refs/heads/<name>`` exists.
    """
    try:
        result = (runner or _default_runner).run(path, "show-ref", "--verify", "--quiet", f"refs/heads/{name}")
    except GitError:
        return False
    return result.ok


def get_remote_head(path: Path, *, runner: Optional[GitRunner] = None) -> Optional[str]:
    """
    Get the branch that ``origin/HEAD`` points at.

    Args:
        path: Working copy path.
        runner: Optional git runner.

    Returns:
        Branch name or None if the symbolic ref is not set.
    """
    try:
        result = (runner or _default_runner).run(path, "symbolic-ref", "refs/remotes/origin/HEAD")
    except GitError:
        return None
    if not result.ok:
        return None

    ref = result.output.strip()
    if not ref:
        return None
    return ref.split("/")[-1] or None
