from .core import build_conflict_text
from .lines import (
    CURRENT_MARKER,
    SEPARATOR_MARKER,
    SHELF_MARKER_PREFIX,
    build_line_conflict_markers,
    conflict_block,
    detect_line_ending,
    mark_text_conflicts,
)
from .structured import DELETED, build_json_conflict_markers, mark_json_conflicts

__all__ = [
    "CURRENT_MARKER",
    "SEPARATOR_MARKER",
    "SHELF_MARKER_PREFIX",
    "DELETED",
    "build_conflict_text",
    "build_line_conflict_markers",
    "build_json_conflict_markers",
    "conflict_block",
    "detect_line_ending",
    "mark_json_conflicts",
    "mark_text_conflicts",
]
