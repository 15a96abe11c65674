import logging
from typing import Any, List, Optional

from google.api_core.exceptions import GoogleAPIError, NotFound
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from app.db.store import DocumentNotFound, DocumentStore, Record, StoreError

logger = logging.getLogger("esimshop.store")


class FirestoreDocumentStore(DocumentStore):
    """Documents kept in Cloud Firestore, one collection per entity."""

    def __init__(self, client: firestore.Client):
        self.client = client

    @classmethod
    def from_settings(cls, project_id: Optional[str] = None, credentials_path: Optional[str] = None):
        if credentials_path:
            client = firestore.Client.from_service_account_json(credentials_path, project=project_id)
        else:
            client = firestore.Client(project=project_id)
        logger.info(f"Firestore client created for project {client.project}")
        return cls(client)

    @staticmethod
    def _as_record(snapshot) -> Record:
        return {"id": snapshot.id, **(snapshot.to_dict() or {})}

    def get_all(self, collection: str) -> List[Record]:
        try:
            return [self._as_record(s) for s in self.client.collection(collection).stream()]
        except GoogleAPIError as e:
            raise StoreError(f"Failed to read '{collection}': {e}") from e

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Record]:
        try:
            snapshot = self.client.collection(collection).document(doc_id).get()
        except GoogleAPIError as e:
            raise StoreError(f"Failed to read '{collection}/{doc_id}': {e}") from e
        return self._as_record(snapshot) if snapshot.exists else None

    def get_by_field(self, collection: str, field: str, value: Any) -> List[Record]:
        try:
            query = self.client.collection(collection).where(filter=FieldFilter(field, "==", value))
            return [self._as_record(s) for s in query.stream()]
        except GoogleAPIError as e:
            raise StoreError(f"Failed to query '{collection}' by {field}: {e}") from e

    def insert(self, collection: str, data: Record) -> str:
        ref = self.client.collection(collection).document()
        self.insert_with_id(collection, ref.id, data)
        return ref.id

    def insert_with_id(self, collection: str, doc_id: str, data: Record) -> None:
        payload = {k: v for k, v in data.items() if k != "id"}
        try:
            self.client.collection(collection).document(doc_id).set(payload)
        except GoogleAPIError as e:
            raise StoreError(f"Failed to write '{collection}/{doc_id}': {e}") from e

    def update(self, collection: str, doc_id: str, partial: Record) -> None:
        payload = {k: v for k, v in partial.items() if k != "id"}
        try:
            self.client.collection(collection).document(doc_id).update(payload)
        except NotFound as e:
            raise DocumentNotFound(collection, doc_id) from e
        except GoogleAPIError as e:
            raise StoreError(f"Failed to update '{collection}/{doc_id}': {e}") from e

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            self.client.collection(collection).document(doc_id).delete()
        except GoogleAPIError as e:
            raise StoreError(f"Failed to delete '{collection}/{doc_id}': {e}") from e
