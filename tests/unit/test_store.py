import pytest
from datetime import datetime
from unittest.mock import MagicMock, Mock

from google.api_core.exceptions import NotFound, ServiceUnavailable

from app.db import DocumentNotFound, StoreError
from app.db.firestore import FirestoreDocumentStore


class TestSQLDocumentStore:
    def test_insert_and_get(self, store):
        doc_id = store.insert("countries", {"id": "ignored", "name": "Japan"})
        assert doc_id != "ignored"
        assert store.get_by_id("countries", doc_id) == {"id": doc_id, "name": "Japan"}

    def test_get_missing(self, store):
        assert store.get_by_id("countries", "nope") is None

    def test_collections_are_separate(self, store):
        store.insert_with_id("countries", "same", {"name": "Japan"})
        store.insert_with_id("plans", "same", {"title": "3GB"})
        assert [r["id"] for r in store.get_all("countries")] == ["same"]
        assert store.get_by_id("plans", "same")["title"] == "3GB"

    def test_get_by_field(self, store):
        store.insert("plans", {"countryId": "jp", "title": "a"})
        store.insert("plans", {"countryId": "kr", "title": "b"})
        assert [r["title"] for r in store.get_by_field("plans", "countryId", "jp")] == ["a"]

    def test_update_merges(self, store):
        store.insert_with_id("users", "U1", {"displayName": "A", "cart": []})
        store.update("users", "U1", {"cart": [{"planId": "p1"}]})
        assert store.get_by_id("users", "U1") == {"id": "U1", "displayName": "A", "cart": [{"planId": "p1"}]}

    def test_update_missing_raises(self, store):
        with pytest.raises(DocumentNotFound):
            store.update("users", "ghost", {"cart": []})

    def test_datetimes_stored_as_iso(self, store):
        doc_id = store.insert("menus", {"createdAt": datetime(2024, 1, 2, 3, 4, 5)})
        assert store.get_by_id("menus", doc_id)["createdAt"] == "2024-01-02T03:04:05"

    def test_delete_missing_is_noop(self, store):
        store.delete("plans", "nope")


@pytest.fixture
def client():
    return MagicMock()


class TestFirestoreDocumentStore:
    def test_get_by_id(self, client):
        snapshot = Mock(id="jp", exists=True)
        snapshot.to_dict.return_value = {"name": "Japan"}
        client.collection.return_value.document.return_value.get.return_value = snapshot

        assert FirestoreDocumentStore(client).get_by_id("countries", "jp") == {"id": "jp", "name": "Japan"}
        client.collection.assert_called_with("countries")

    def test_get_missing(self, client):
        client.collection.return_value.document.return_value.get.return_value = Mock(exists=False)
        assert FirestoreDocumentStore(client).get_by_id("countries", "jp") is None

    def test_insert_uses_generated_id(self, client):
        ref = client.collection.return_value.document.return_value
        ref.id = "auto123"

        assert FirestoreDocumentStore(client).insert("plans", {"id": "x", "title": "3GB"}) == "auto123"
        ref.set.assert_called_once_with({"title": "3GB"})

    def test_update_missing_raises(self, client):
        client.collection.return_value.document.return_value.update.side_effect = NotFound("gone")
        with pytest.raises(DocumentNotFound):
            FirestoreDocumentStore(client).update("users", "U1", {"cart": []})

    def test_api_errors_wrapped(self, client):
        client.collection.return_value.stream.side_effect = ServiceUnavailable("down")
        with pytest.raises(StoreError):
            FirestoreDocumentStore(client).get_all("plans")
