# shelfkit/utils/language.py
import os

# Extensions whose conflicts are reconciled structurally rather than line by line.
JSON_EXTENSIONS = frozenset({".json", ".jsonc"})


def is_json_file(file_path: str) -> bool:
    """True when the path should go through the JSON-aware marker builder."""
    return os.path.splitext(file_path)[1].lower() in JSON_EXTENSIONS


def language_for_path(file_path: str) -> str:
    """Gets an editor language identifier from a file path extension."""
    extension = os.path.splitext(file_path)[1].lstrip(".").lower()
    lang_map = {
        "js": "javascript",
        "jsx": "javascript",
        "ts": "typescript",
        "tsx": "typescript",
        "py": "python",
        "css": "css",
        "html": "html",
        "json": "json",
        "jsonc": "jsonc",
        "md": "markdown",
        "yaml": "yaml",
        "yml": "yaml",
        "xml": "xml",
        "java": "java",
        "cs": "csharp",
        "cpp": "cpp",
        "h": "cpp",
        "sh": "shell",
        "go": "go",
        "rs": "rust",
    }
    return lang_map.get(extension, "plaintext")
