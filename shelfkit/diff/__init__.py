from .lines import ADDED, REMOVED, UNCHANGED, DiffSegment, diff_lines, split_lines
from .structured import JsonPath, ParseResult, find_json_conflicts, json_kind, try_parse_json

__all__ = [
    "ADDED",
    "REMOVED",
    "UNCHANGED",
    "DiffSegment",
    "diff_lines",
    "split_lines",
    "JsonPath",
    "ParseResult",
    "find_json_conflicts",
    "json_kind",
    "try_parse_json",
]
