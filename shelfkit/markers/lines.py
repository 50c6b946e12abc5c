# shelfkit/markers/lines.py
from __future__ import annotations

import os
import re
from typing import Iterable, List, Optional

from ..diff.lines import DiffSegment, diff_lines

__all__ = [
    "CURRENT_MARKER",
    "SEPARATOR_MARKER",
    "SHELF_MARKER_PREFIX",
    "detect_line_ending",
    "conflict_block",
    "build_line_conflict_markers",
    "mark_text_conflicts",
]

CURRENT_MARKER = "<<<<<<< Current Workspace"
SEPARATOR_MARKER = "======="
SHELF_MARKER_PREFIX = ">>>>>>> Shelf: "

_TERMINATOR_RE = re.compile(r"\r\n|\n|\r")


def detect_line_ending(*texts: str) -> Optional[str]:
    """Return the first line terminator found scanning ``texts`` in order, or None."""
    for text in texts:
        match = _TERMINATOR_RE.search(text)
        if match:
            return match.group(0)
    return None


def _ends_with_terminator(text: str) -> bool:
    return text.endswith("\n") or text.endswith("\r")


def conflict_block(left: str, right: str, entry_label: str, line_ending: str) -> str:
    """Render one start/separator/end conflict block around the two sides."""
    parts = [CURRENT_MARKER, line_ending]
    if left:
        parts.append(left)
        if not _ends_with_terminator(left):
            parts.append(line_ending)
    parts.extend([SEPARATOR_MARKER, line_ending])
    if right:
        parts.append(right)
        if not _ends_with_terminator(right):
            parts.append(line_ending)
    parts.extend([SHELF_MARKER_PREFIX, entry_label, line_ending])
    return "".join(parts)


def build_line_conflict_markers(
    segments: Iterable[DiffSegment],
    entry_label: str,
    line_ending: str,
) -> str:
    """
    Turn a diff segment stream into text with inline conflict blocks.

    Removed runs are held back until the next added run (which becomes the
    right side of the same block) or the next unchanged run (which flushes
    them with an empty right side). Unchanged text passes through verbatim.
    """
    out: List[str] = []
    pending_removed = ""

    for seg in segments:
        if seg.removed:
            pending_removed += seg.value
            continue
        if seg.added:
            out.append(conflict_block(pending_removed, seg.value, entry_label, line_ending))
            pending_removed = ""
            continue
        if pending_removed:
            out.append(conflict_block(pending_removed, "", entry_label, line_ending))
            pending_removed = ""
        out.append(seg.value)

    if pending_removed:
        out.append(conflict_block(pending_removed, "", entry_label, line_ending))

    return "".join(out)


def mark_text_conflicts(current_text: str, shelved_text: str, entry_label: str) -> str:
    """Line-based reconciliation of ``current_text`` against ``shelved_text``."""
    line_ending = detect_line_ending(current_text, shelved_text) or os.linesep
    return build_line_conflict_markers(diff_lines(current_text, shelved_text), entry_label, line_ending)
