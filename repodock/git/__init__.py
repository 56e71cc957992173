# Repodock Git Module
# Git process execution, working copy discovery and inspection

from repodock.git.branches import DEFAULT_BRANCH, resolve_default_branch
from repodock.git.guard import RepositoryStateError, has_uncommitted_changes
from repodock.git.operations import (
    CommandResult,
    GitError,
    GitRunner,
    branch_exists,
    checkout,
    fetch,
    get_current_branch,
    get_default_runner,
    get_remote_head,
    pull,
    pull_from_remote,
    run_checked,
    set_upstream,
)
from repodock.git.scanner import NotFoundError, ScanError, WorkingCopy, scan_directory, working_copy_from_path

__all__ = [
    # Runner
    "GitRunner",
    "GitError",
    "CommandResult",
    "get_default_runner",
    "run_checked",
    # Commands
    "get_current_branch",
    "checkout",
    "fetch",
    "pull",
    "pull_from_remote",
    "set_upstream",
    "branch_exists",
    "get_remote_head",
    # Discovery
    "WorkingCopy",
    "NotFoundError",
    "ScanError",
    "scan_directory",
    "working_copy_from_path",
    # Inspection
    "RepositoryStateError",
    "has_uncommitted_changes",
    "DEFAULT_BRANCH",
    "resolve_default_branch",
]
