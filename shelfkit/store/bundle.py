# shelfkit/store/bundle.py
"""
Portable export/import of shelf entries.

A bundle is one JSON document::

    {
      "version": "1.0",
      "exportDate": 1700000000000,
      "entries": [
        {"entry": {...entry.json...}, "files": {"src/a.py": "<base64>"}}
      ]
    }
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
import os
from typing import Any, Dict, List, Optional

from .._logging import resolve_logger
from ..errors.store import BundleError, StoreError
from ..utils.fs import write_bytes_atomic
from ..utils.paths import contained_path
from .core import ShelfStore
from .entry import ShelfEntry

__all__ = ["BUNDLE_VERSION", "build_bundle", "export_bundle", "import_bundle", "load_bundle"]

BUNDLE_VERSION = "1.0"

log = logging.getLogger(__name__)


def build_bundle(store: ShelfStore, entry_ids: Optional[List[str]] = None) -> Dict[str, Any]:
    """Collect entries (all by default) and their file contents into a bundle dict."""
    entries = store.list_entries() if entry_ids is None else [store.get(i) for i in entry_ids]
    exported = []
    for entry in entries:
        snapshot = store.snapshot(entry.id)
        files: Dict[str, str] = {}
        for rel in entry.files:
            try:
                content = snapshot.read(rel)
            except OSError as e:
                log.error("Failed to read file %s: %s", rel, e)
                continue
            if content is not None:
                files[rel] = base64.b64encode(content).decode("ascii")
        exported.append({"entry": entry.to_dict(), "files": files})
    return {"version": BUNDLE_VERSION, "exportDate": store.clock(), "entries": exported}


def export_bundle(store: ShelfStore, dest: str, entry_ids: Optional[List[str]] = None) -> int:
    """Write a bundle to ``dest``; returns the number of entries exported."""
    bundle = build_bundle(store, entry_ids)
    if not bundle["entries"]:
        raise StoreError("No shelves to export")
    write_bytes_atomic(os.path.abspath(dest), json.dumps(bundle, indent=2).encode("utf-8"))
    return len(bundle["entries"])


def load_bundle(source: str) -> Dict[str, Any]:
    """Read and validate a bundle file."""
    try:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise BundleError(f"Failed to read bundle {source}: {e}") from e
    if (
        not isinstance(data, dict)
        or not data.get("version")
        or not isinstance(data.get("entries"), list)
    ):
        raise BundleError("Invalid export file format")
    for item in data["entries"]:
        if not isinstance(item, dict) or not isinstance(item.get("entry"), dict):
            raise BundleError("Invalid export file format: malformed entry")
        if not isinstance(item.get("files", {}), dict):
            raise BundleError("Invalid export file format: 'files' must be an object")
    return data


def import_bundle(
    store: ShelfStore,
    source: str,
    *,
    logger: Optional[logging.Logger] = None,
    log: bool = False,
) -> List[ShelfEntry]:
    """
    Add every entry in the bundle at ``source`` to ``store``.

    An entry whose id is already taken is stored under a freshly allocated id.
    """
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    data = load_bundle(source)
    imported: List[ShelfEntry] = []
    for item in data["entries"]:
        entry = ShelfEntry.from_dict(item["entry"])
        if store.exists(entry.id):
            new_id = store.allocate_id(entry.name)
            lg.info("Shelf entry %s already exists, importing as %s", entry.id, new_id)
            entry = ShelfEntry(
                id=new_id,
                name=entry.name,
                timestamp=entry.timestamp,
                files=entry.files,
                workspace_path=entry.workspace_path,
            )
        entry_dir = store.entry_dir(entry.id)
        os.makedirs(entry_dir, exist_ok=True)
        for rel, encoded in item.get("files", {}).items():
            try:
                content = base64.b64decode(encoded, validate=True)
            except (binascii.Error, TypeError, ValueError) as e:
                raise BundleError(f"Invalid file content for {rel} in entry {entry.id}: {e}") from e
            write_bytes_atomic(contained_path(entry_dir, rel), content)
        store.save_entry(entry)
        imported.append(entry)
    lg.info("Imported %d shelf(es) from %s", len(imported), source)
    return imported
