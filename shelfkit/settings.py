# shelfkit/settings.py
import json
import os
from dataclasses import dataclass
from typing import Any, Mapping

from .store.core import DEFAULT_MAX_ITEMS, ShelfStore

# Editor-style dotted keys and the short keys both map onto the same fields.
_KEYS = {
    "shelf.unshelve.forceOverride": "force_override",
    "unshelve.forceOverride": "force_override",
    "force_override": "force_override",
    "shelf.maxItems": "max_items",
    "maxItems": "max_items",
    "max_items": "max_items",
}


@dataclass(frozen=True)
class ShelfSettings:
    """User-tunable behaviour."""

    force_override: bool = False  # overwrite differing files without asking
    max_items: int = DEFAULT_MAX_ITEMS  # newest entries kept by the store

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ShelfSettings":
        values = {}
        for key, value in mapping.items():
            name = _KEYS.get(key)
            if name is None:
                continue
            if name == "force_override":
                if not isinstance(value, bool):
                    raise ValueError(f"{key} must be a boolean, got {value!r}")
                values[name] = value
            else:
                if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                    raise ValueError(f"{key} must be a positive integer, got {value!r}")
                values[name] = value
        return cls(**values)

    def open_store(self, root: str) -> ShelfStore:
        """A ShelfStore at ``root`` that keeps at most ``max_items`` entries."""
        return ShelfStore(root, max_items=self.max_items)


def load_settings(path: str) -> ShelfSettings:
    """Read settings from a JSON file; a missing file yields the defaults."""
    if not os.path.exists(path):
        return ShelfSettings()
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")
    return ShelfSettings.from_mapping(data)
