import json

import pytest

from shelfkit.settings import ShelfSettings, load_settings
from shelfkit.store.core import DEFAULT_MAX_ITEMS


def test_defaults():
    settings = ShelfSettings()
    assert settings.force_override is False
    assert settings.max_items == DEFAULT_MAX_ITEMS


def test_from_mapping_accepts_editor_keys():
    settings = ShelfSettings.from_mapping({"shelf.unshelve.forceOverride": True, "shelf.maxItems": 5, "other": 1})
    assert settings == ShelfSettings(force_override=True, max_items=5)


def test_from_mapping_accepts_short_keys():
    assert ShelfSettings.from_mapping({"max_items": 3}).max_items == 3


@pytest.mark.parametrize(
    "mapping",
    [
        {"shelf.unshelve.forceOverride": "yes"},
        {"shelf.maxItems": 0},
        {"shelf.maxItems": True},
        {"max_items": "10"},
    ],
)
def test_invalid_values_raise(mapping):
    with pytest.raises(ValueError):
        ShelfSettings.from_mapping(mapping)


def test_load_settings(tmp_path):
    assert load_settings(str(tmp_path / "missing.json")) == ShelfSettings()
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"shelf.maxItems": 7}), encoding="utf-8")
    assert load_settings(str(path)).max_items == 7
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(str(path))


def test_open_store_uses_max_items(tmp_path):
    store = ShelfSettings(max_items=3).open_store(str(tmp_path / "shelf"))
    assert store.max_items == 3
