from .base import ShelfError


class PathViolation(ShelfError):
    """A relative path resolved outside of the root it was joined to."""
