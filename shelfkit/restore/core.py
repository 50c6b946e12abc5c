# shelfkit/restore/core.py
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from .._logging import resolve_logger
from ..errors.restore import RestoreError, SnapshotMissingError, UnresolvedConflictError
from ..markers.core import build_conflict_text
from ..utils.fs import read_bytes, write_bytes_atomic
from ..utils.paths import contained_path, normalize_relative
from .policy import ConflictPolicy, Resolution, ResolutionCancelled, coerce_resolution
from .snapshot import DirectorySnapshot

__all__ = ["RestoreStatus", "FileResult", "RestoreSummary", "restore_files", "restore_file"]


class RestoreStatus:
    RESTORED = "restored"
    IDENTICAL = "identical"
    SKIPPED = "skipped"
    CONFLICT_MARKED = "conflict-marked"
    ERROR = "error"


@dataclass
class FileResult:
    """What happened to one relative path during a restore."""

    path: str
    status: str
    had_conflict: bool = False
    # Written by force-override without consulting the policy.
    forced: bool = False
    error: Optional[str] = None


@dataclass
class RestoreSummary:
    """Counters for one restore invocation. Built fresh every call, never persisted."""

    restored: int = 0
    identical: int = 0
    skipped: int = 0
    conflict_marked: int = 0
    # Files whose workspace bytes differed from the shelf, whatever the outcome.
    conflicts: int = 0
    # Conflicts settled by force-override; the policy never saw them.
    forced: int = 0
    errors: int = 0
    results: List[FileResult] = field(default_factory=list)
    # Map relative path -> error string (when failed)
    failures: Dict[str, str] = field(default_factory=dict)

    def record(self, result: FileResult) -> None:
        self.results.append(result)
        if result.had_conflict:
            self.conflicts += 1
        if result.forced:
            self.forced += 1
        if result.status == RestoreStatus.RESTORED:
            self.restored += 1
        elif result.status == RestoreStatus.IDENTICAL:
            self.identical += 1
        elif result.status == RestoreStatus.SKIPPED:
            self.skipped += 1
        elif result.status == RestoreStatus.CONFLICT_MARKED:
            self.conflict_marked += 1
        elif result.status == RestoreStatus.ERROR:
            self.errors += 1
            self.failures[result.path] = result.error or ""

    @property
    def processed(self) -> int:
        return len(self.results)

    def as_counts(self) -> Dict[str, int]:
        return {
            "restored": self.restored,
            "identical": self.identical,
            "skipped": self.skipped,
            "conflict_marked": self.conflict_marked,
            "conflicts": self.conflicts,
            "errors": self.errors,
        }


def _decode(data: bytes, which: str, relative_path: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise RestoreError(f"Cannot mark conflicts in {relative_path}: {which} version is not UTF-8 text ({e})") from e


def _resolve_difference(
    entry_label: str,
    relative_path: str,
    target_path: str,
    shelf_path: str,
    target_content: bytes,
    shelf_content: bytes,
    force_override: bool,
    policy: Optional[ConflictPolicy],
) -> FileResult:
    if force_override:
        write_bytes_atomic(target_path, shelf_content)
        return FileResult(relative_path, RestoreStatus.RESTORED, had_conflict=True, forced=True)

    if policy is None:
        raise RestoreError(f"No conflict policy available for {relative_path}")
    try:
        choice = coerce_resolution(policy.resolve(entry_label, relative_path, target_path, shelf_path))
    except ResolutionCancelled:
        choice = Resolution.KEEP

    if choice is Resolution.APPLY:
        write_bytes_atomic(target_path, shelf_content)
        return FileResult(relative_path, RestoreStatus.RESTORED, had_conflict=True)

    if choice is Resolution.MARK:
        current_text = _decode(target_content, "current", relative_path)
        shelved_text = _decode(shelf_content, "shelved", relative_path)
        marked = build_conflict_text(relative_path, current_text, shelved_text, entry_label)
        write_bytes_atomic(target_path, marked.encode("utf-8"))
        return FileResult(relative_path, RestoreStatus.CONFLICT_MARKED, had_conflict=True)

    return FileResult(relative_path, RestoreStatus.SKIPPED, had_conflict=True)


def restore_file(
    entry_label: str,
    relative_path: str,
    snapshot: DirectorySnapshot,
    workspace_root: str,
    *,
    force_override: bool = False,
    policy: Optional[ConflictPolicy] = None,
) -> FileResult:
    """
    Restore one shelved file into the workspace.

    Raises on failure; ``restore_files`` is the boundary that turns exceptions
    into per-file errors. Once the two versions are known to differ, any
    failure is raised as UnresolvedConflictError.
    """
    shelf_path = snapshot.path_for(relative_path)
    shelf_content = snapshot.read(relative_path)
    if shelf_content is None:
        raise SnapshotMissingError(relative_path)

    target_path = contained_path(workspace_root, relative_path)
    os.makedirs(os.path.dirname(target_path), exist_ok=True)

    if not os.path.exists(target_path):
        write_bytes_atomic(target_path, shelf_content)
        return FileResult(relative_path, RestoreStatus.RESTORED)

    target_content = read_bytes(target_path)
    if target_content == shelf_content:
        return FileResult(relative_path, RestoreStatus.IDENTICAL)

    try:
        return _resolve_difference(
            entry_label,
            relative_path,
            target_path,
            shelf_path,
            target_content,
            shelf_content,
            force_override,
            policy,
        )
    except Exception as e:
        raise UnresolvedConflictError(relative_path, str(e), forced=force_override) from e


def restore_files(
    entry_label: str,
    snapshot_root: Union[str, DirectorySnapshot],
    workspace_root: str,
    relative_paths: Sequence[str],
    *,
    force_override: bool = False,
    policy: Optional[ConflictPolicy] = None,
    logger: Optional[logging.Logger] = None,
    log: bool = False,
) -> RestoreSummary:
    """
    Restore shelved files into a workspace, one at a time and in order.

    Args:
        entry_label: Shelf entry name, shown in conflict markers and prompts.
        snapshot_root: Directory holding the captured files (or a DirectorySnapshot).
        workspace_root: Directory the files are restored into.
        relative_paths: '/'-separated paths relative to both roots.
        force_override: Overwrite differing files without consulting ``policy``.
        policy: Decides apply/keep/mark for differing files. Required unless
                ``force_override`` is set.
        logger / log: Opt-in logging, see ``shelfkit._logging``.

    Returns:
        RestoreSummary with one FileResult per requested path. A failure on one
        file is recorded and never stops the rest of the batch.
    """
    if policy is None and not force_override:
        raise ValueError("policy is required unless force_override is set")

    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    snapshot = snapshot_root if isinstance(snapshot_root, DirectorySnapshot) else DirectorySnapshot(snapshot_root)
    summary = RestoreSummary()

    lg.debug("Restoring %d file(s) from shelf '%s' into %s", len(relative_paths), entry_label, workspace_root)
    for raw_path in relative_paths:
        relative_path = str(raw_path)
        try:
            relative_path = normalize_relative(raw_path)
            result = restore_file(
                entry_label,
                relative_path,
                snapshot,
                workspace_root,
                force_override=force_override,
                policy=policy,
            )
        except UnresolvedConflictError as e:
            lg.warning("Failed to resolve %s: %s", relative_path, e)
            result = FileResult(relative_path, RestoreStatus.ERROR, had_conflict=True, forced=e.forced, error=str(e))
        except Exception as e:
            lg.warning("Failed to restore %s: %s", relative_path, e)
            result = FileResult(relative_path, RestoreStatus.ERROR, error=str(e))
        else:
            lg.debug("  %s: %s%s", relative_path, result.status, " (conflict)" if result.had_conflict else "")
        summary.record(result)
    return summary
