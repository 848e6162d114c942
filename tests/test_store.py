"""Tests for the JSON document store."""

import json

import pytest

from product_catalog_api.app.core.store import JsonDocumentStore


class TestRead:

    def test_missing_file_is_initialised(self, db_path):
        store = JsonDocumentStore(db_path)
        assert store.read() == {"products": []}
        assert json.loads(db_path.read_text(encoding="utf-8")) == {"products": []}

    def test_empty_file_is_initialised(self, db_path):
        db_path.write_text("  \n", encoding="utf-8")
        store = JsonDocumentStore(db_path)
        assert store.read() == {"products": []}
        assert json.loads(db_path.read_text(encoding="utf-8")) == {"products": []}

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "db.json"
        JsonDocumentStore(path).read()
        assert path.exists()

    def test_picks_up_external_changes(self, db_path):
        store = JsonDocumentStore(db_path)
        store.read()
        db_path.write_text(json.dumps({"products": [{"id": "x", "name": "Ext"}]}), encoding="utf-8")
        assert store.read()["products"] == [{"id": "x", "name": "Ext"}]

    def test_document_without_products_key(self, db_path):
        db_path.write_text(json.dumps({"other": 1}), encoding="utf-8")
        data = JsonDocumentStore(db_path).read()
        assert data["products"] == []
        assert data["other"] == 1

    def test_corrupt_file_raises(self, db_path):
        db_path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            JsonDocumentStore(db_path).read()

    def test_non_object_document_raises(self, db_path):
        db_path.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError):
            JsonDocumentStore(db_path).read()


class TestWrite:

    def test_write_replaces_whole_document(self, db_path):
        store = JsonDocumentStore(db_path)
        store.read()
        store.data["products"].append({"id": "a", "name": "A"})
        store.write()
        assert json.loads(db_path.read_text(encoding="utf-8")) == {"products": [{"id": "a", "name": "A"}]}

    def test_write_leaves_no_temp_files(self, db_path):
        store = JsonDocumentStore(db_path)
        store.read()
        store.write()
        assert [p.name for p in db_path.parent.iterdir()] == ["db.json"]

    def test_failed_serialisation_keeps_previous_document(self, db_path):
        store = JsonDocumentStore(db_path)
        store.read()
        store.data["products"].append({"id": "bad", "value": object()})
        with pytest.raises(TypeError):
            store.write()
        assert json.loads(db_path.read_text(encoding="utf-8")) == {"products": []}
        assert [p.name for p in db_path.parent.iterdir()] == ["db.json"]
