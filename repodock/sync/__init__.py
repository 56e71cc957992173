# Repodock Sync Module
# Parallel repository synchronization engine and components

from repodock.sync.classify import CLASSIFICATION_RULES, ClassifiedFailure, FailureKind, classify
from repodock.sync.engine import Syncer
from repodock.sync.operation import SyncOperation
from repodock.sync.result import BatchResult, SyncOutcome

__all__ = [
    # Classification
    "FailureKind",
    "ClassifiedFailure",
    "CLASSIFICATION_RULES",
    "classify",
    # Results
    "SyncOutcome",
    "BatchResult",
    # Operation
    "SyncOperation",
    # Engine
    "Syncer",
]
