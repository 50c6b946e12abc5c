class ShelfError(Exception):
    """Base class for every error raised by shelfkit."""
