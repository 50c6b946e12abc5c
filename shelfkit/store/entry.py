# shelfkit/store/entry.py
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from ..errors.store import StoreError

ENTRY_FILE = "entry.json"


def make_entry_id(name: str, timestamp: int) -> str:
    """``<timestamp>-<name>`` with every non-alphanumeric character replaced by '_'."""
    return f"{timestamp}-{re.sub(r'[^a-zA-Z0-9]', '_', name)}"


@dataclass(frozen=True)
class ShelfEntry:
    """A named, timestamped snapshot of a set of workspace files."""

    id: str
    name: str
    timestamp: int  # epoch milliseconds
    # Workspace-relative path -> absolute path the file was captured from.
    files: Dict[str, str] = field(default_factory=dict)
    workspace_path: str = ""

    @property
    def relative_paths(self) -> list:
        return list(self.files)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "timestamp": self.timestamp,
            "files": dict(self.files),
            "workspacePath": self.workspace_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ShelfEntry":
        try:
            files = data.get("files") or {}
            if not isinstance(files, dict):
                raise TypeError("'files' must be an object")
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                timestamp=int(data["timestamp"]),
                files={str(k): str(v) for k, v in files.items()},
                workspace_path=str(data.get("workspacePath", "")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"Invalid shelf entry metadata: {e}") from e
