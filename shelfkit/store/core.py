# shelfkit/store/core.py
import hashlib
import json
import logging
import os
import shutil
import time
from typing import Callable, Iterable, List, Optional, Sequence

from .._logging import resolve_logger
from ..errors.store import StoreError
from ..restore.core import RestoreSummary, restore_files
from ..restore.policy import ConflictPolicy
from ..restore.snapshot import DirectorySnapshot
from ..utils.fs import read_bytes, write_bytes_atomic
from ..utils.gitignore import get_gitignore, iter_unignored_files
from ..utils.paths import contained_path, normalize_relative, relative_to
from .entry import ENTRY_FILE, ShelfEntry, make_entry_id

log = logging.getLogger(__name__)

DEFAULT_MAX_ITEMS = 50


def shelf_directory(storage_root: str, workspace_uri: Optional[str] = None) -> str:
    """
    Per-workspace shelf location: ``<storage_root>/shelf/<hash>`` where hash is
    the first 8 hex digits of md5(workspace_uri). Without a workspace the
    shared ``<storage_root>/shelf`` is used.
    """
    if workspace_uri:
        digest = hashlib.md5(workspace_uri.encode("utf-8")).hexdigest()[:8]
        return os.path.join(storage_root, "shelf", digest)
    return os.path.join(storage_root, "shelf")


def _now_ms() -> int:
    return int(time.time() * 1000)


class ShelfStore:
    """
    Shelf entries on disk. Each entry lives in ``<root>/<entry_id>/`` holding
    the captured files at their relative paths plus an ``entry.json``.
    """

    def __init__(
        self,
        root: str,
        *,
        max_items: int = DEFAULT_MAX_ITEMS,
        clock: Callable[[], int] = _now_ms,
    ):
        if max_items < 1:
            raise ValueError("max_items must be at least 1")
        self.root = os.path.abspath(root)
        self.max_items = max_items
        self.clock = clock

    # ---------- lookup ----------

    def entry_dir(self, entry_id: str) -> str:
        return contained_path(self.root, entry_id)

    def snapshot(self, entry_id: str) -> DirectorySnapshot:
        return DirectorySnapshot(self.entry_dir(entry_id))

    def _load(self, entry_id: str) -> ShelfEntry:
        entry_file = os.path.join(self.entry_dir(entry_id), ENTRY_FILE)
        try:
            with open(entry_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to load shelf entry {entry_id}: {e}") from e
        return ShelfEntry.from_dict(data)

    def get(self, entry_id: str) -> ShelfEntry:
        if not os.path.isfile(os.path.join(self.entry_dir(entry_id), ENTRY_FILE)):
            raise StoreError(f"Shelf entry not found: {entry_id}")
        return self._load(entry_id)

    def exists(self, entry_id: str) -> bool:
        return os.path.isdir(self.entry_dir(entry_id))

    def list_entries(self) -> List[ShelfEntry]:
        """All entries, newest first. Entries beyond ``max_items`` are deleted."""
        if not os.path.isdir(self.root):
            return []
        entries: List[ShelfEntry] = []
        for name in sorted(os.listdir(self.root)):
            if not os.path.isfile(os.path.join(self.root, name, ENTRY_FILE)):
                continue
            try:
                entries.append(self._load(name))
            except StoreError as e:
                log.warning("Skipping unreadable shelf entry %s: %s", name, e)
        entries.sort(key=lambda e: e.timestamp, reverse=True)

        for stale in entries[self.max_items:]:
            log.info("Pruning shelf entry %s (limit %d)", stale.id, self.max_items)
            shutil.rmtree(self.entry_dir(stale.id), ignore_errors=True)
        return entries[: self.max_items]

    # ---------- mutation ----------

    def save_entry(self, entry: ShelfEntry) -> None:
        data = json.dumps(entry.to_dict(), indent=2).encode("utf-8")
        write_bytes_atomic(os.path.join(self.entry_dir(entry.id), ENTRY_FILE), data)

    def allocate_id(self, name: str, timestamp: Optional[int] = None) -> str:
        """A fresh entry id; the timestamp is bumped until the directory is free."""
        ts = self.clock() if timestamp is None else timestamp
        entry_id = make_entry_id(name, ts)
        while os.path.exists(self.entry_dir(entry_id)):
            ts += 1
            entry_id = make_entry_id(name, ts)
        return entry_id

    def create_entry(
        self,
        name: str,
        paths: Iterable[str],
        workspace_path: str,
        *,
        deleted: Iterable[str] = (),
        head_reader: Optional[Callable[[str], bytes]] = None,
        respect_gitignore: bool = True,
        logger: Optional[logging.Logger] = None,
        log: bool = False,
    ) -> ShelfEntry:
        """
        Capture ``paths`` (absolute, or relative to ``workspace_path``) into a new entry.

        Directories are expanded, skipping files matched by the nearest
        .gitignore when ``respect_gitignore`` is set. Paths outside the
        workspace are skipped. A missing file listed in ``deleted`` is captured
        from ``head_reader`` (e.g. the last committed version); any other
        missing file is captured as empty.

        Raises:
            StoreError: if nothing could be captured.
        """
        lg = resolve_logger(logger=logger, enabled=log, name=__name__)
        if not name or not name.strip():
            raise ValueError("A shelf needs a name")

        workspace = os.path.abspath(workspace_path)
        deleted_set = {normalize_relative(p) for p in deleted}
        spec = get_gitignore(workspace) if respect_gitignore else None

        timestamp = self.clock()
        entry_id = self.allocate_id(name, timestamp)
        entry_dir = self.entry_dir(entry_id)
        os.makedirs(entry_dir, exist_ok=True)

        requested = list(paths)
        lg.debug("Creating shelf entry '%s' for %d path(s) in %s", name, len(requested), workspace)
        files = {}
        for raw in requested:
            rel = relative_to(workspace, raw)
            if rel is None:
                lg.warning("Skipping file outside workspace: %s", raw)
                continue
            full = os.path.join(workspace, *rel.split("/"))
            if os.path.isdir(full):
                if spec is not None:
                    expanded = list(iter_unignored_files(full, workspace, spec))
                else:
                    expanded = [
                        os.path.relpath(os.path.join(d, f), workspace).replace(os.sep, "/")
                        for d, _dirs, fs in os.walk(full)
                        for f in sorted(fs)
                    ]
            else:
                expanded = [rel]
            for member in expanded:
                try:
                    self._capture(entry_dir, workspace, member, member in deleted_set, head_reader, files, lg)
                except Exception as e:
                    lg.error("Failed to shelve file %s: %s", member, e)

        if not files:
            shutil.rmtree(entry_dir, ignore_errors=True)
            detail = (
                f"Attempted to shelve {len(requested)} path(s) but all failed."
                if requested
                else "No changes were found to shelve."
            )
            raise StoreError(f"No files were successfully shelved. {detail}")

        entry = ShelfEntry(id=entry_id, name=name, timestamp=timestamp, files=files, workspace_path=workspace)
        self.save_entry(entry)
        lg.info("Shelved %d file(s) as '%s'", len(files), name)
        return entry

    def _capture(self, entry_dir, workspace, rel, is_deleted, head_reader, files, lg) -> None:
        source = os.path.join(workspace, *rel.split("/"))
        if os.path.isfile(source):
            content = read_bytes(source)
        elif is_deleted and head_reader is not None:
            try:
                content = head_reader(rel)
            except Exception as e:
                lg.warning("Could not read deleted file %s from history, saving as empty: %s", rel, e)
                content = b""
        else:
            lg.warning("File %s not found, saving as empty", source)
            content = b""
        write_bytes_atomic(contained_path(entry_dir, rel), content)
        files[rel] = source

    def delete(self, entry_id: str) -> bool:
        entry_dir = self.entry_dir(entry_id)
        if not os.path.isdir(entry_dir):
            return False
        shutil.rmtree(entry_dir)
        return True

    def clear(self) -> None:
        if os.path.isdir(self.root):
            shutil.rmtree(self.root)
        os.makedirs(self.root, exist_ok=True)

    # ---------- restore ----------

    def restore(
        self,
        entry_id: str,
        workspace_root: str,
        paths: Optional[Sequence[str]] = None,
        *,
        force_override: bool = False,
        policy: Optional[ConflictPolicy] = None,
        logger: Optional[logging.Logger] = None,
        log: bool = False,
    ) -> RestoreSummary:
        """Restore ``paths`` (default: every file in the entry) into ``workspace_root``."""
        entry = self.get(entry_id)
        selected = entry.relative_paths if paths is None else list(paths)
        return restore_files(
            entry.name,
            self.snapshot(entry_id),
            workspace_root,
            [p for p in selected if p],
            force_override=force_override,
            policy=policy,
            logger=logger,
            log=log,
        )
