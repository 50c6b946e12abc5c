from .bundle import BUNDLE_VERSION, build_bundle, export_bundle, import_bundle, load_bundle
from .core import DEFAULT_MAX_ITEMS, ShelfStore, shelf_directory
from .entry import ENTRY_FILE, ShelfEntry, make_entry_id

__all__ = [
    "ShelfStore",
    "ShelfEntry",
    "shelf_directory",
    "make_entry_id",
    "ENTRY_FILE",
    "DEFAULT_MAX_ITEMS",
    "BUNDLE_VERSION",
    "build_bundle",
    "export_bundle",
    "import_bundle",
    "load_bundle",
]
