# Repodock Change Guard
# Detect uncommitted work before switching or pulling

from pathlib import Path
from typing import Optional

from repodock.git.operations import GitError, GitRunner, get_default_runner
from repodock.git.scanner import WorkingCopy

# git diff --quiet exits 1 when differences exist
DIFF_FOUND = 1


class RepositoryStateError(Exception):
    """Raised when the state of a working copy cannot be inspected."""

    def __init__(self, message: str, output: str = ""):
        self.message = message
        self.output = output
        super().__init__(message)


def _has_diff(path: Path, runner: GitRunner, *args: str) -> bool:
    label = "staged" if "--cached" in args else "unstaged"
    try:
        result = runner.run(path, "diff", *args, "--quiet")
    except GitError as e:
        raise RepositoryStateError(f"failed to check {label} changes: {e.message}", output=e.output or e.message)

    if result.ok:
        return False
    if result.returncode == DIFF_FOUND:
        return True
    raise RepositoryStateError(
        f"failed to check {label} changes: exit status {result.returncode}",
        output=result.output.strip(),
    )


def has_uncommitted_changes(working_copy: WorkingCopy, *, runner: Optional[GitRunner] = None) -> bool:
    """
    Check if a working copy has staged or unstaged modifications.

    Args:
        working_copy: Working copy to inspect.
        runner: Optional git runner.

    Returns:
        True if either staged or unstaged changes exist.

    Raises:
        RepositoryStateError: If git cannot inspect the working copy.
    """
    runner = runner or get_default_runner()

    if _has_diff(working_copy.path, runner, "--cached"):
        return True
    return _has_diff(working_copy.path, runner)
