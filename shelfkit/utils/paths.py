# shelfkit/utils/paths.py
import os

from ..errors.path import PathViolation


def normalize_relative(rel_path: "str | os.PathLike[str]") -> str:
    """Return ``rel_path`` with forward slashes and no leading ``./``."""
    rel = os.fspath(rel_path)
    if not isinstance(rel, str):
        raise PathViolation(f"Expected a text path, got {rel_path!r}")
    rel = rel.replace("\\", "/")
    while rel.startswith("./"):
        rel = rel[2:]
    return rel


def contained_path(root: str, rel_path: str, check_exists: bool = False) -> str:
    """
    Join a '/'-separated relative path onto ``root`` and enforce containment.
    Raises PathViolation if the resolved path escapes the root.
    If check_exists is False the target may not exist yet (new files/dirs).
    """
    if not rel_path or os.path.isabs(rel_path):
        raise PathViolation(f"Expected a relative path, got '{rel_path}'")
    base_real = os.path.realpath(root)
    target_path = os.path.join(base_real, *normalize_relative(rel_path).split("/"))
    # realpath of a missing path is unreliable; normalize manually instead.
    if not check_exists:
        resolved = os.path.abspath(target_path)
    else:
        resolved = os.path.realpath(target_path)
    if os.path.commonpath([base_real, resolved]) != base_real or resolved == base_real:
        raise PathViolation(f"Path traversal attempt detected for '{rel_path}'")
    return resolved


def relative_to(root: str, path: str) -> str | None:
    """
    Express ``path`` relative to ``root`` with forward slashes.
    Returns None when the path lies outside the root.
    """
    full = path if os.path.isabs(path) else os.path.join(root, path)
    rel = os.path.relpath(os.path.abspath(full), os.path.abspath(root)).replace(os.sep, "/")
    if rel == "." or rel == ".." or rel.startswith("../"):
        return None
    return rel
