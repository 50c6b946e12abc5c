# shelfkit/restore/snapshot.py
import os
from typing import Optional

from ..utils.fs import read_bytes
from ..utils.paths import contained_path


class DirectorySnapshot:
    """
    Read-only view of a shelf entry's captured files laid out under ``root``.

    Content is read lazily; ``read`` distinguishes a missing file (None) from
    an empty one (b"").
    """

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def path_for(self, relative_path: str) -> str:
        """Absolute location of the captured copy; raises PathViolation on escape."""
        return contained_path(self.root, relative_path)

    def exists(self, relative_path: str) -> bool:
        return os.path.isfile(self.path_for(relative_path))

    def read(self, relative_path: str) -> Optional[bytes]:
        path = self.path_for(relative_path)
        if not os.path.isfile(path):
            return None
        return read_bytes(path)

    def __repr__(self) -> str:
        return f"DirectorySnapshot({self.root!r})"
