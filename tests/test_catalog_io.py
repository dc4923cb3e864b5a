import json

import pytest

from ai_translate.models import LocalizationUnit
from ai_translate.utils.catalog_io import (
    CatalogReadError,
    CatalogWriteError,
    backup_path_for,
    encode_catalog,
    load_catalog,
    save_catalog,
)

RAW = {
    "version": "1.0",
    "sourceLanguage": "en",
    "strings": {
        "Hello": {"comment": "Greeting", "extractionState": "manual"},
        "Café": {"localizations": {"fr": {"stringUnit": {"state": "translated", "value": "Café"}}}},
    },
}


def test_load_catalog(catalog_file):
    catalog = load_catalog(catalog_file(RAW))

    assert catalog.source_language == "en"
    assert list(catalog.strings) == ["Hello", "Café"]


def test_load_missing_file(tmp_path):
    with pytest.raises(CatalogReadError):
        load_catalog(tmp_path / "missing.xcstrings")


def test_load_malformed_json(tmp_path):
    path = tmp_path / "broken.xcstrings"
    path.write_text("{ not json", encoding="utf-8")

    with pytest.raises(CatalogReadError):
        load_catalog(path)


def test_load_non_utf8_file(tmp_path):
    path = tmp_path / "latin1.xcstrings"
    path.write_bytes(b'{"sourceLanguage":"en","strings":{"\xff":{}}}')

    with pytest.raises(CatalogReadError, match="UTF-8"):
        load_catalog(path)


def test_load_rejects_catalog_without_source_language(catalog_file):
    with pytest.raises(CatalogReadError):
        load_catalog(catalog_file({"strings": {}}))


def test_encode_matches_xcode_layout(catalog_file):
    text = encode_catalog(load_catalog(catalog_file(RAW)))

    assert text.endswith("}\n")
    assert '"sourceLanguage" : "en"' in text
    assert '"Café"' in text
    assert "\\u00e9" not in text
    # Keys sorted at every level
    assert text.index('"Café"') < text.index('"Hello"')
    assert text.index('"sourceLanguage"') < text.index('"strings"') < text.index('"version"')
    assert json.loads(text) == RAW


def test_save_creates_backup_and_writes_update(catalog_file):
    path = catalog_file(RAW)
    original_text = path.read_text(encoding="utf-8")
    catalog = load_catalog(path)
    catalog.strings["Hello"].localizations = {"de": LocalizationUnit.from_result("Hallo")}

    save_catalog(catalog, path)

    backup = backup_path_for(path)
    assert backup.name == "Localizable.xcstrings.original"
    assert backup.read_text(encoding="utf-8") == original_text
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["strings"]["Hello"]["localizations"]["de"]["stringUnit"] == {"state": "translated", "value": "Hallo"}
    assert saved["strings"]["Hello"]["extractionState"] == "manual"


def test_save_replaces_previous_backup(catalog_file):
    path = catalog_file(RAW)
    backup_path_for(path).write_text("stale", encoding="utf-8")
    current = path.read_text(encoding="utf-8")

    save_catalog(load_catalog(path), path)

    assert backup_path_for(path).read_text(encoding="utf-8") == current


def test_save_without_backup(catalog_file):
    path = catalog_file(RAW)

    save_catalog(load_catalog(path), path, backup=False)

    assert not backup_path_for(path).exists()
    assert json.loads(path.read_text(encoding="utf-8")) == RAW


def test_save_to_missing_directory_raises(catalog_file, tmp_path):
    catalog = load_catalog(catalog_file(RAW))

    with pytest.raises(CatalogWriteError):
        save_catalog(catalog, tmp_path / "nope" / "out.xcstrings")
