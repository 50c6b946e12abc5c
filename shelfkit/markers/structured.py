# shelfkit/markers/structured.py
"""
JSON-aware conflict markers.

The current document is re-serialized with two-space indentation and every
conflicting path is replaced by an inline block showing the current value on
the left and the shelved value on the right::

    {
      "x": <<<<<<< Current Workspace
        1
      =======
        2
      >>>>>>> Shelf: X
    }

The result is deliberately not valid JSON while any block remains.
"""
from __future__ import annotations

import json
import os
from typing import Any, Iterable, List, Optional, Set

from ..diff.structured import JsonPath, find_json_conflicts, try_parse_json
from .lines import (
    CURRENT_MARKER,
    SEPARATOR_MARKER,
    SHELF_MARKER_PREFIX,
    detect_line_ending,
    mark_text_conflicts,
)

__all__ = ["DELETED", "build_json_conflict_markers", "mark_json_conflicts"]

DELETED = "(deleted)"
_INDENT = "  "


class _Missing:
    """Stands in for a key or index one side does not have."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


_MISSING = _Missing()


def _dump(value: Any, indent: Optional[int] = None) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def _side(value: Any, continuation: str, line_ending: str) -> str:
    if value is _MISSING:
        return DELETED
    return (line_ending + continuation).join(_dump(value, indent=2).split("\n"))


def _close(items: List[str], closer: str, indent_str: str, line_ending: str) -> str:
    body = ("," + line_ending).join(items)
    if not body.endswith(line_ending):
        body += line_ending
    return body + indent_str + closer


def _child(container: Any, key: Any) -> Any:
    if isinstance(container, list):
        return container[key] if key < len(container) else _MISSING
    if isinstance(container, dict):
        return container.get(key, _MISSING)
    return _MISSING


def build_json_conflict_markers(
    current: Any,
    shelved: Any,
    conflicts: Iterable[JsonPath],
    entry_label: str,
    line_ending: str = "\n",
) -> str:
    """Render ``current`` as JSON text with a conflict block at each path in ``conflicts``."""
    conflict_set: Set[JsonPath] = {tuple(p) for p in conflicts}

    def render(cur: Any, shelf: Any, path: JsonPath, depth: int) -> str:
        indent_str = _INDENT * depth
        if path in conflict_set:
            continuation = indent_str + _INDENT
            return "".join(
                [
                    CURRENT_MARKER, line_ending,
                    continuation, _side(cur, continuation, line_ending), line_ending,
                    indent_str, SEPARATOR_MARKER, line_ending,
                    continuation, _side(shelf, continuation, line_ending), line_ending,
                    indent_str, SHELF_MARKER_PREFIX, entry_label, line_ending,
                ]
            )

        child_indent = indent_str + _INDENT

        if isinstance(cur, list):
            shelf_len = len(shelf) if isinstance(shelf, list) else 0
            items = []
            for index in range(max(len(cur), shelf_len)):
                item_path = path + (index,)
                if index >= len(cur) and item_path not in conflict_set:
                    continue
                value = render(_child(cur, index), _child(shelf, index), item_path, depth + 1)
                items.append(child_indent + value)
            if not items:
                return "[]"
            return "[" + line_ending + _close(items, "]", indent_str, line_ending)

        if isinstance(cur, dict):
            keys = list(cur)
            if isinstance(shelf, dict):
                keys.extend(k for k in shelf if k not in cur)
            pairs = []
            for key in keys:
                key_path = path + (key,)
                if key not in cur and key_path not in conflict_set:
                    continue
                value = render(_child(cur, key), _child(shelf, key), key_path, depth + 1)
                pairs.append(child_indent + _dump(key) + ": " + value)
            if not pairs:
                return "{}"
            return "{" + line_ending + _close(pairs, "}", indent_str, line_ending)

        return _dump(cur)

    return render(current, shelved, (), 0)


def mark_json_conflicts(current_text: str, shelved_text: str, entry_label: str) -> str:
    """
    Structural reconciliation of two JSON documents.

    Falls back to line-based markers when either side does not parse. When the
    documents agree structurally the current text is returned untouched.
    """
    current = try_parse_json(current_text)
    shelved = try_parse_json(shelved_text)
    if not current.success or not shelved.success:
        return mark_text_conflicts(current_text, shelved_text, entry_label)

    conflicts = find_json_conflicts(current.data, shelved.data)
    if not conflicts:
        return current_text

    line_ending = detect_line_ending(current_text, shelved_text) or os.linesep
    text = build_json_conflict_markers(current.data, shelved.data, conflicts, entry_label, line_ending)
    # Keep the file's trailing newline if it had one.
    if current_text.endswith(("\n", "\r")) and not text.endswith(line_ending):
        text += line_ending
    return text
