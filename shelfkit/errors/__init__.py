from .base import ShelfError
from .path import PathViolation
from .restore import RestoreError, SnapshotMissingError, UnresolvedConflictError
from .store import BundleError, StoreError, VcsError

__all__ = [
    "ShelfError",
    "PathViolation",
    "RestoreError",
    "SnapshotMissingError",
    "UnresolvedConflictError",
    "StoreError",
    "BundleError",
    "VcsError",
]
