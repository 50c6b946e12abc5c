# shelfkit/utils/__init__.py
from .fs import read_bytes, write_bytes_atomic
from .gitignore import get_gitignore, iter_unignored_files
from .language import is_json_file, language_for_path
from .paths import contained_path, normalize_relative, relative_to

__all__ = [
    "contained_path",
    "get_gitignore",
    "is_json_file",
    "iter_unignored_files",
    "language_for_path",
    "normalize_relative",
    "read_bytes",
    "relative_to",
    "write_bytes_atomic",
]
