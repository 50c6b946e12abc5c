from .base import ShelfError


class RestoreError(ShelfError):
    """A single file could not be restored."""


class SnapshotMissingError(RestoreError):
    """The snapshot holds no content for the requested relative path."""

    def __init__(self, relative_path: str):
        super().__init__(f"Shelf file not found: {relative_path}")
        self.relative_path = relative_path


class UnresolvedConflictError(RestoreError):
    """
    The workspace and shelf versions differed, but resolving the difference
    failed (policy error, undecodable text for marking, failed write).
    """

    def __init__(self, relative_path: str, message: str, forced: bool = False):
        super().__init__(message)
        self.relative_path = relative_path
        self.forced = forced
