# shelfkit/markers/core.py
from ..utils.language import is_json_file
from .lines import mark_text_conflicts
from .structured import mark_json_conflicts


def build_conflict_text(relative_path: str, current_text: str, shelved_text: str, entry_label: str) -> str:
    """Reconcile two versions of ``relative_path``, picking the builder by file type."""
    if is_json_file(relative_path):
        return mark_json_conflicts(current_text, shelved_text, entry_label)
    return mark_text_conflicts(current_text, shelved_text, entry_label)
