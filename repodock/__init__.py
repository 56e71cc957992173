"""Repodock - parallel git repository sync and docker-compose workflows.

Scans a directory for git working copies, brings each onto its target
branch and pulls the latest changes in parallel, and starts or stops the
dependency and microservice compose groups of a workspace.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "BatchResult",
    "FailureKind",
    "SyncOperation",
    "SyncOutcome",
    "Syncer",
    "WorkingCopy",
    "classify",
    "scan_directory",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("WorkingCopy", "scan_directory"):
        from repodock.git import scanner

        return getattr(scanner, name)
    if name in ("BatchResult", "FailureKind", "SyncOperation", "SyncOutcome", "Syncer", "classify"):
        from repodock import sync

        return getattr(sync, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
