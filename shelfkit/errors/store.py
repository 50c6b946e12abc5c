from .base import ShelfError


class StoreError(ShelfError):
    """The shelf store could not complete an operation."""


class BundleError(StoreError):
    """An export bundle is malformed."""


class VcsError(ShelfError):
    """A git command failed."""
