# shelfkit/diff/structured.py
"""
Structural comparison of two parsed JSON documents.

The differ walks both trees together and reports every location where they
disagree as a path tuple: object keys are ``str``, array indices are ``int``
and the document root is ``()``. It never stops at the first difference since
the marker builder annotates all of them.
"""
from __future__ import annotations

import json
from typing import Any, List, Optional, Tuple, Union

__all__ = ["JsonPath", "ParseResult", "find_json_conflicts", "json_kind", "try_parse_json"]

JsonPath = Tuple[Union[str, int], ...]


class ParseResult:
    """Outcome of ``try_parse_json``: either ``data`` or an ``error`` message."""

    __slots__ = ("success", "data", "error")

    def __init__(self, success: bool, data: Any = None, error: Optional[str] = None):
        self.success = success
        self.data = data
        self.error = error

    def __repr__(self) -> str:
        if self.success:
            return f"ParseResult(success=True, data={self.data!r})"
        return f"ParseResult(success=False, error={self.error!r})"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON literal: {name}")


def try_parse_json(text: str) -> ParseResult:
    """Parse strict JSON (no NaN/Infinity); failures are reported, not raised."""
    try:
        return ParseResult(True, data=json.loads(text, parse_constant=_reject_constant))
    except ValueError as e:
        return ParseResult(False, error=str(e))


def json_kind(value: Any) -> str:
    """Classify a parsed JSON value the way JSON itself types it."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def find_json_conflicts(current: Any, shelved: Any, path: JsonPath = ()) -> List[JsonPath]:
    """Return every path at which ``current`` and ``shelved`` disagree, in document order."""
    conflicts: List[JsonPath] = []
    _collect(current, shelved, tuple(path), conflicts)
    return conflicts


def _collect(current: Any, shelved: Any, path: JsonPath, out: List[JsonPath]) -> None:
    kind = json_kind(current)
    if kind != json_kind(shelved):
        out.append(path)
        return

    if kind == "array":
        for i in range(max(len(current), len(shelved))):
            if i >= len(current) or i >= len(shelved):
                out.append(path + (i,))
            else:
                _collect(current[i], shelved[i], path + (i,), out)
        return

    if kind == "object":
        # Current keys first, then keys only the shelved side has.
        keys = list(current)
        keys.extend(k for k in shelved if k not in current)
        for key in keys:
            if key not in current or key not in shelved:
                out.append(path + (key,))
            else:
                _collect(current[key], shelved[key], path + (key,), out)
        return

    if current != shelved:
        out.append(path)
