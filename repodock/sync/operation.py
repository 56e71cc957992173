# Repodock Sync Operation
# Bring one working copy onto its target branch and pull

from pathlib import Path
from typing import Optional

from repodock.git.branches import DEFAULT_BRANCH, resolve_default_branch
from repodock.git.guard import RepositoryStateError, has_uncommitted_changes
from repodock.git.operations import (
    GitError,
    GitRunner,
    checkout,
    fetch,
    get_current_branch,
    get_default_runner,
    pull,
    pull_from_remote,
    set_upstream,
)
from repodock.git.scanner import WorkingCopy
from repodock.sync.classify import UNCOMMITTED_MESSAGE, ClassifiedFailure, FailureKind, classify
from repodock.sync.result import SyncOutcome

NO_TRACKING_INFORMATION = "no tracking information"


class SyncOperation:
    """
    Per-repository sync: guard, resolve branch, checkout, pull.

    Every failure is turned into a failed SyncOutcome; ``sync`` does not
    raise for git problems. Not safe to run twice on the same path at once.
    """

    def __init__(self, runner: Optional[GitRunner] = None):
        """
        Initialize the operation.

        Args:
            runner: Git runner used for every command (defaults to real git).
        """
        self.runner = runner or get_default_runner()

    def sync(self, working_copy: WorkingCopy, requested_branch: str = DEFAULT_BRANCH) -> SyncOutcome:
        """
        Check out the target branch and pull the latest changes.

        Args:
            working_copy: Working copy to sync.
            requested_branch: Branch to sync to. Empty or "main" means
                "use the repository's default branch".

        Returns:
            SyncOutcome describing what happened.
        """
        try:
            if has_uncommitted_changes(working_copy, runner=self.runner):
                return SyncOutcome.failure(
                    working_copy,
                    ClassifiedFailure(kind=FailureKind.UNCOMMITTED_CHANGES, message=UNCOMMITTED_MESSAGE),
                )
        except RepositoryStateError as e:
            return SyncOutcome.failure(working_copy, classify(e.output or e.message, "diff"))

        target = self.resolve_target(working_copy, requested_branch)

        try:
            current = get_current_branch(working_copy.path, runner=self.runner)
        except GitError as e:
            return SyncOutcome.failure(
                working_copy,
                ClassifiedFailure(
                    kind=FailureKind.NOT_A_REPOSITORY,
                    message="Not a valid Git repository",
                    raw=e.output or e.message,
                    command="branch",
                ),
            )

        switched = current != target
        if switched:
            try:
                checkout(working_copy.path, target, runner=self.runner)
            except GitError as e:
                return SyncOutcome.failure(working_copy, classify(e.output or e.message, "checkout", target))

        try:
            self.pull_with_fallback(working_copy.path, target)
        except GitError as e:
            return SyncOutcome.failure(working_copy, classify(e.output or e.message, e.command or "pull", target))

        if switched:
            return SyncOutcome.success(working_copy, f"Checked out '{target}' and pulled latest changes")
        return SyncOutcome.success(working_copy, f"Already on '{target}', pulled latest changes")

    def resolve_target(self, working_copy: WorkingCopy, requested_branch: str) -> str:
        """Return the requested branch, or the detected default for "" and "main"."""
        if requested_branch and requested_branch != DEFAULT_BRANCH:
            return requested_branch
        return resolve_default_branch(working_copy, runner=self.runner)

    def pull_with_fallback(self, path: Path, branch: str) -> None:
        """
        Pull, recovering from a branch with no upstream configured.

        When a plain pull reports missing tracking information, fetch,
        bind ``branch`` to ``origin/<branch>`` and pull again. If the
        upstream cannot be bound, pull ``origin <branch>`` explicitly.

        Args:
            path: Working copy path.
            branch: Branch that is checked out.

        Raises:
            GitError: If the pull fails and cannot be recovered.
        """
        try:
            pull(path, runner=self.runner)
            return
        except GitError as e:
            if NO_TRACKING_INFORMATION not in e.output.lower():
                raise

        fetch(path, runner=self.runner)

        try:
            set_upstream(path, branch, runner=self.runner)
        except GitError:
            pull_from_remote(path, branch, runner=self.runner)
            return

        pull(path, runner=self.runner)
