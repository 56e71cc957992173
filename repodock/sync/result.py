# Repodock Sync Results
# Per-repository outcomes and batch aggregates

from dataclasses import dataclass, field
from typing import Optional

from repodock.git.scanner import WorkingCopy
from repodock.sync.classify import ClassifiedFailure, FailureKind


@dataclass(frozen=True)
class SyncOutcome:
    """Result of syncing one working copy."""

    working_copy: WorkingCopy
    succeeded: bool
    message: str
    failure_kind: Optional[FailureKind] = None
    detail: str = ""

    @property
    def name(self) -> str:
        """Display name of the working copy."""
        return self.working_copy.name

    @classmethod
    def success(cls, working_copy: WorkingCopy, message: str) -> "SyncOutcome":
        """Create a successful outcome."""
        return cls(working_copy=working_copy, succeeded=True, message=message)

    @classmethod
    def failure(cls, working_copy: WorkingCopy, failure: ClassifiedFailure) -> "SyncOutcome":
        """Create a failed outcome from a classified failure."""
        return cls(
            working_copy=working_copy,
            succeeded=False,
            message=failure.message,
            failure_kind=failure.kind,
            detail=failure.raw,
        )


@dataclass(frozen=True)
class BatchResult:
    """Aggregate of one sync run, outcomes in discovery order."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    outcomes: tuple[SyncOutcome, ...] = field(default_factory=tuple)

    @classmethod
    def from_outcomes(cls, outcomes: list[SyncOutcome]) -> "BatchResult":
        """Build a batch result, counting successes and failures in one pass."""
        succeeded = 0
        failed = 0
        for outcome in outcomes:
            if outcome.succeeded:
                succeeded += 1
            else:
                failed += 1
        return cls(total=len(outcomes), succeeded=succeeded, failed=failed, outcomes=tuple(outcomes))

    @property
    def success(self) -> bool:
        """True if no repository failed."""
        return self.failed == 0

    @property
    def failures(self) -> list[SyncOutcome]:
        """Failed outcomes, in discovery order."""
        return [o for o in self.outcomes if not o.succeeded]
