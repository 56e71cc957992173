# Repodock Sync Engine
# Fan repositories out across worker threads and aggregate the results

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import TYPE_CHECKING

from repodock.git.branches import DEFAULT_BRANCH
from repodock.git.scanner import WorkingCopy, scan_directory, working_copy_from_path
from repodock.sync.operation import SyncOperation
from repodock.sync.result import BatchResult, SyncOutcome

if TYPE_CHECKING:
    from repodock.output.console import Console


class Syncer:
    """
    Parallel synchronization of many working copies.

    One worker thread is started per working copy, with no cap. Each worker
    writes its outcome into the slot matching the working copy's position,
    so ``BatchResult.outcomes`` follows input order even though progress
    lines are printed in completion order.
    """

    def __init__(
        self,
        console: Console | None = None,
        operation: SyncOperation | None = None,
        on_outcome: Callable[[SyncOutcome], None] | None = None,
    ):
        """
        Initialize the syncer.

        Args:
            console: Output sink for progress lines (silent if None).
            operation: Per-repository operation (creates one if not provided).
            on_outcome: Optional callback invoked from the worker thread as
                each outcome becomes known.
        """
        self.console = console
        self.operation = operation or SyncOperation()
        self.on_outcome = on_outcome

    def sync_all(self, root: Path, branch: str = DEFAULT_BRANCH) -> BatchResult:
        """
        Scan ``root`` and sync every working copy found.

        Args:
            root: Directory containing working copies.
            branch: Requested branch ("" or "main" means detect default).

        Returns:
            BatchResult with outcomes in discovery order.

        Raises:
            NotFoundError: If ``root`` does not exist.
            ScanError: If ``root`` cannot be listed.
        """
        working_copies = scan_directory(root)
        return self.sync_repositories(working_copies, branch)

    def sync_repositories(self, working_copies: list[WorkingCopy], branch: str = DEFAULT_BRANCH) -> BatchResult:
        """
        Sync a given list of working copies in parallel.

        Args:
            working_copies: Working copies, in the order results should keep.
            branch: Requested branch.

        Returns:
            BatchResult with outcomes in input order.
        """
        if not working_copies:
            return BatchResult()

        if self.console:
            self.console.print_info(f"Found {len(working_copies)} repositories")
            self.console.print()

        results: list[SyncOutcome | None] = [None] * len(working_copies)

        def worker(index: int, working_copy: WorkingCopy) -> None:
            outcome = self.operation.sync(working_copy, branch)
            results[index] = outcome
            self._report(outcome)

        with ThreadPoolExecutor(max_workers=len(working_copies), thread_name_prefix="repodock-sync") as executor:
            futures = [executor.submit(worker, i, wc) for i, wc in enumerate(working_copies)]
            wait(futures)

        # Re-raise anything unexpected from a worker
        for future in futures:
            future.result()

        return BatchResult.from_outcomes([r for r in results if r is not None])

    def sync_one(self, path: Path, branch: str = DEFAULT_BRANCH) -> SyncOutcome:
        """
        Sync a single repository path.

        Args:
            path: Repository path.
            branch: Requested branch.

        Returns:
            SyncOutcome for the repository.
        """
        return self.operation.sync(working_copy_from_path(path), branch)

    def print_summary(self, result: BatchResult) -> None:
        """Print the summary of a finished run, if a console is attached."""
        if self.console:
            self.console.print_summary(result)

    def _report(self, outcome: SyncOutcome) -> None:
        if self.console:
            self.console.print_progress(outcome)
        if self.on_outcome:
            self.on_outcome(outcome)
