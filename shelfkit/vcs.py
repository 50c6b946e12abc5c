# shelfkit/vcs.py
"""Changed-file discovery through the ``git`` command line."""
from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors.store import VcsError

__all__ = [
    "GitFileStatus",
    "changed_files",
    "parse_porcelain",
    "read_head_blob",
    "repository_root",
    "status_map",
    "status_text",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitFileStatus:
    path: str
    status: str  # two-letter porcelain code, e.g. "M ", " D", "??"
    is_deleted: bool = False
    is_untracked: bool = False


def _git(repo_path: str, *args: str) -> bytes:
    try:
        proc = subprocess.run(["git", *args], cwd=repo_path, capture_output=True, check=False)
    except OSError as e:
        raise VcsError(f"Could not run git: {e}") from e
    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        raise VcsError(f"git {' '.join(args)} failed: {stderr}")
    return proc.stdout


def parse_porcelain(output: str) -> List[GitFileStatus]:
    """
    Parse ``git status --porcelain -z`` output. For renames and copies only
    the new path is reported.
    """
    files: List[GitFileStatus] = []
    tokens = output.split("\0")
    i = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1
        if len(token) < 4:
            continue
        status, path = token[:2], token[3:]
        if "R" in status or "C" in status:
            i += 1  # the origin path follows as its own token
        if status == "  ":
            continue
        files.append(
            GitFileStatus(
                path=path,
                status=status,
                is_deleted="D" in status,
                is_untracked=status == "??",
            )
        )
    return files


def changed_files(repo_path: str, *, strict: bool = False) -> List[GitFileStatus]:
    """Every modified, added, deleted, renamed or untracked file in the repository."""
    try:
        out = _git(repo_path, "status", "--porcelain", "-z", "--untracked-files=all")
    except VcsError as e:
        if strict:
            raise
        log.error("Error getting git status: %s", e)
        return []
    return parse_porcelain(out.decode("utf-8", errors="surrogateescape"))


def status_map(repo_path: str, *, strict: bool = False) -> Dict[str, str]:
    return {f.path: f.status for f in changed_files(repo_path, strict=strict)}


def status_text(status: Optional[str]) -> str:
    """Human-readable label for a porcelain status code."""
    if not status:
        return "Changed"
    if status == "??":
        return "Untracked"
    for code, label in (("M", "Modified"), ("A", "Added"), ("D", "Deleted"), ("R", "Renamed")):
        if code in status:
            return label
    return "Changed"


def repository_root(path: str) -> Optional[str]:
    """Top-level directory of the repository containing ``path``, or None."""
    try:
        out = _git(path, "rev-parse", "--show-toplevel")
    except VcsError:
        return None
    return out.decode("utf-8").strip() or None


def read_head_blob(repo_path: str, relative_path: str) -> bytes:
    """Committed (HEAD) content of ``relative_path``; raises VcsError if absent."""
    return _git(repo_path, "show", f"HEAD:{relative_path}")
