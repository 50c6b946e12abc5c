from .diff import DiffSegment, diff_lines, find_json_conflicts, try_parse_json
from .markers import (
    build_conflict_text,
    build_json_conflict_markers,
    build_line_conflict_markers,
    detect_line_ending,
    mark_json_conflicts,
    mark_text_conflicts,
)
from .restore import (
    CallbackPolicy,
    ConflictPolicy,
    DirectorySnapshot,
    FileResult,
    PromptPolicy,
    Resolution,
    ResolutionCancelled,
    RestoreStatus,
    RestoreSummary,
    StaticPolicy,
    restore_files,
)
from .report import format_summary
from .settings import ShelfSettings, load_settings
from .store import ShelfEntry, ShelfStore, export_bundle, import_bundle, shelf_directory
from .utils.language import is_json_file
from .errors import (
    BundleError,
    PathViolation,
    RestoreError,
    ShelfError,
    SnapshotMissingError,
    UnresolvedConflictError,
    StoreError,
    VcsError,
)

__all__ = [
    "diff_lines",
    "DiffSegment",
    "find_json_conflicts",
    "try_parse_json",
    "detect_line_ending",
    "build_line_conflict_markers",
    "build_json_conflict_markers",
    "build_conflict_text",
    "mark_text_conflicts",
    "mark_json_conflicts",
    "is_json_file",
    "restore_files",
    "RestoreSummary",
    "RestoreStatus",
    "FileResult",
    "DirectorySnapshot",
    "ConflictPolicy",
    "Resolution",
    "ResolutionCancelled",
    "StaticPolicy",
    "CallbackPolicy",
    "PromptPolicy",
    "format_summary",
    "ShelfSettings",
    "load_settings",
    "ShelfEntry",
    "ShelfStore",
    "shelf_directory",
    "export_bundle",
    "import_bundle",
    "ShelfError",
    "RestoreError",
    "SnapshotMissingError",
    "UnresolvedConflictError",
    "StoreError",
    "BundleError",
    "VcsError",
    "PathViolation",
]
