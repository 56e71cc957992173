# Repodock Branch Resolution
# Work out which branch a working copy should be synced to

from typing import Optional

from repodock.git.operations import GitRunner, branch_exists, get_remote_head
from repodock.git.scanner import WorkingCopy

DEFAULT_BRANCH = "main"
FALLBACK_BRANCHES = ("main", "master")


def resolve_default_branch(working_copy: WorkingCopy, *, runner: Optional[GitRunner] = None) -> str:
    """
    Determine the default branch of a working copy.

    The remote's ``origin/HEAD`` pointer wins when it is set. Otherwise a
    local ``main`` or ``master`` branch is used, in that order, and
    ``main`` is returned when neither exists.

    Args:
        working_copy: Working copy to inspect.
        runner: Optional git runner.

    Returns:
        Branch name. Never raises.
    """
    remote_head = get_remote_head(working_copy.path, runner=runner)
    if remote_head:
        return remote_head

    for name in FALLBACK_BRANCHES:
        if branch_exists(working_copy.path, name, runner=runner):
            return name

    return DEFAULT_BRANCH
