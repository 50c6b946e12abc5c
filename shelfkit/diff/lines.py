# shelfkit/diff/lines.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

__all__ = ["DiffSegment", "UNCHANGED", "ADDED", "REMOVED", "split_lines", "diff_lines"]

UNCHANGED = "unchanged"
ADDED = "added"
REMOVED = "removed"

# A line is a maximal run ending at CRLF, LF or a lone CR, or at end of text.
_LINE_RE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")


@dataclass(frozen=True)
class DiffSegment:
    """A run of lines that is unchanged, only in the shelved text, or only in the current text."""

    tag: str  # "unchanged", "added" (shelved only) or "removed" (current only)
    value: str

    @property
    def added(self) -> bool:
        return self.tag == ADDED

    @property
    def removed(self) -> bool:
        return self.tag == REMOVED


def split_lines(text: str) -> List[str]:
    """Split text into lines, keeping each line's terminator attached."""
    if not text:
        return []
    return _LINE_RE.findall(text)


def _push(segments: List[DiffSegment], tag: str, lines: List[str]) -> None:
    if not lines:
        return
    value = "".join(lines)
    if segments and segments[-1].tag == tag:
        segments[-1] = DiffSegment(tag, segments[-1].value + value)
    else:
        segments.append(DiffSegment(tag, value))


def _edit_script(a: List[str], b: List[str]) -> List[Tuple[str, str]]:
    """
    Shortest edit script turning ``a`` into ``b`` (Myers' O(ND) greedy search).

    Returns ``(tag, line)`` pairs in order; the UNCHANGED lines form a longest
    common subsequence of ``a`` and ``b``.
    """
    n, m = len(a), len(b)
    v: Dict[int, int] = {1: 0}
    trace: List[Dict[int, int]] = []
    for d in range(n + m + 1):
        trace.append(dict(v))
        done = False
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[k - 1] < v[k + 1]):
                x = v[k + 1]
            else:
                x = v[k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[k] = x
            if x >= n and y >= m:
                done = True
                break
        if done:
            break

    # Walk the trace backwards from (n, m) to (0, 0).
    ops: List[Tuple[str, str]] = []
    x, y = n, m
    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y
        if k == -d or (k != d and v[k - 1] < v[k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = v[prev_k]
        prev_y = prev_x - prev_k
        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            ops.append((UNCHANGED, a[x]))
        if d > 0:
            if x == prev_x:
                ops.append((ADDED, b[prev_y]))
            else:
                ops.append((REMOVED, a[prev_x]))
        x, y = prev_x, prev_y
    ops.reverse()
    return ops


def diff_lines(current: str, shelved: str) -> List[DiffSegment]:
    """
    Minimal line-level diff of ``current`` against ``shelved``.

    Dropping every "added" segment and joining the rest rebuilds ``current``;
    dropping every "removed" segment rebuilds ``shelved``. The unchanged lines
    are a longest common subsequence of the two line lists. A replaced run is
    reported as its removed lines followed by its added lines.
    """
    a = split_lines(current)
    b = split_lines(shelved)

    # Common head and tail never need the search.
    head = 0
    while head < len(a) and head < len(b) and a[head] == b[head]:
        head += 1
    tail = 0
    while tail < len(a) - head and tail < len(b) - head and a[-1 - tail] == b[-1 - tail]:
        tail += 1

    segments: List[DiffSegment] = []
    _push(segments, UNCHANGED, a[:head])
    removed: List[str] = []
    added: List[str] = []
    for tag, line in _edit_script(a[head:len(a) - tail], b[head:len(b) - tail]):
        if tag == REMOVED:
            removed.append(line)
        elif tag == ADDED:
            added.append(line)
        else:
            _push(segments, REMOVED, removed)
            _push(segments, ADDED, added)
            removed, added = [], []
            _push(segments, UNCHANGED, [line])
    _push(segments, REMOVED, removed)
    _push(segments, ADDED, added)
    _push(segments, UNCHANGED, a[len(a) - tail:])
    return segments
