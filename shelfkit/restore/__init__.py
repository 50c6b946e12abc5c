from .core import FileResult, RestoreStatus, RestoreSummary, restore_file, restore_files
from .policy import (
    CallbackPolicy,
    ConflictPolicy,
    PromptPolicy,
    Resolution,
    ResolutionCancelled,
    StaticPolicy,
    coerce_resolution,
)
from .snapshot import DirectorySnapshot

__all__ = [
    "restore_files",
    "restore_file",
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
    "coerce_resolution",
]
