# shelfkit/utils/gitignore.py
import os
from typing import Iterator, List

import pathspec


def get_gitignore(path: str) -> pathspec.PathSpec:
    """
    Return a PathSpec compiled from the nearest .gitignore found by walking
    upward from `path` (file or directory). Always ignores '.git/'.
    An unreadable or missing .gitignore still yields a spec ignoring '.git/'.
    """
    defaults: List[str] = [".git/"]
    lines: List[str] = list(defaults)

    base = os.path.abspath(path or ".")
    if os.path.isfile(base):
        base = os.path.dirname(base)

    cur = base
    while True:
        gi = os.path.join(cur, ".gitignore")
        try:
            if os.path.exists(gi):
                with open(gi, "r", encoding="utf-8", errors="ignore") as f:
                    lines.extend(f.read().splitlines())
                break
        except OSError:
            # Unreadable .gitignore: keep walking upward.
            pass
        parent = os.path.dirname(cur)
        if parent == cur:
            break
        cur = parent

    try:
        return pathspec.PathSpec.from_lines("gitwildmatch", lines)
    except Exception:
        return pathspec.PathSpec.from_lines("gitwildmatch", defaults)


def iter_unignored_files(directory: str, root: str, spec: pathspec.PathSpec) -> Iterator[str]:
    """
    Yield every file under ``directory`` that ``spec`` does not ignore, as a
    '/'-separated path relative to ``root``. Ignored directories are pruned.
    """
    for current, dirs, files in os.walk(directory):
        kept = []
        for d in sorted(dirs):
            rel = os.path.relpath(os.path.join(current, d), root).replace(os.sep, "/")
            # Trailing '/' so patterns like 'build/' match directories.
            if not spec.match_file(rel + "/"):
                kept.append(d)
        dirs[:] = kept
        for name in sorted(files):
            rel = os.path.relpath(os.path.join(current, name), root).replace(os.sep, "/")
            if not spec.match_file(rel):
                yield rel
