"""
Document store gateway.

Every entity of the catalog lives in a named collection of schemaless
documents. Records handed out by a store are plain dicts that always carry
their ``id``; records handed in never need one.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.db.models import Document

logger = logging.getLogger("esimshop.store")

Record = Dict[str, Any]


class StoreError(Exception):
    """Connectivity or permission failure of the backing store."""


class DocumentNotFound(StoreError):
    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"No document '{doc_id}' in '{collection}'")
        self.collection = collection
        self.doc_id = doc_id


class DocumentStore:
    def get_all(self, collection: str) -> List[Record]:
        raise NotImplementedError

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Record]:
        raise NotImplementedError

    def get_by_field(self, collection: str, field: str, value: Any) -> List[Record]:
        raise NotImplementedError

    def insert(self, collection: str, data: Record) -> str:
        raise NotImplementedError

    def insert_with_id(self, collection: str, doc_id: str, data: Record) -> None:
        raise NotImplementedError

    def update(self, collection: str, doc_id: str, partial: Record) -> None:
        raise NotImplementedError

    def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError


def _strip_id(data: Record) -> Record:
    return {k: v for k, v in data.items() if k != "id"}


class SQLDocumentStore(DocumentStore):
    """Documents kept as JSON rows of a single SQLAlchemy table."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _as_record(doc: Document) -> Record:
        return {"id": doc.id, **(doc.data or {})}

    def get_all(self, collection: str) -> List[Record]:
        try:
            with self.session_factory() as db:
                rows = db.execute(
                    select(Document).where(Document.collection == collection).order_by(Document.created_at)
                ).scalars().all()
                return [self._as_record(row) for row in rows]
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read '{collection}': {e}") from e

    def get_by_id(self, collection: str, doc_id: str) -> Optional[Record]:
        try:
            with self.session_factory() as db:
                doc = db.get(Document, (collection, doc_id))
                return self._as_record(doc) if doc else None
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read '{collection}/{doc_id}': {e}") from e

    def get_by_field(self, collection: str, field: str, value: Any) -> List[Record]:
        value = jsonable_encoder(value)
        return [r for r in self.get_all(collection) if r.get(field) == value]

    def insert(self, collection: str, data: Record) -> str:
        doc_id = uuid.uuid4().hex
        self.insert_with_id(collection, doc_id, data)
        return doc_id

    def insert_with_id(self, collection: str, doc_id: str, data: Record) -> None:
        try:
            with self.session_factory() as db:
                doc = db.get(Document, (collection, doc_id))
                if doc is None:
                    doc = Document(collection=collection, id=doc_id)
                    db.add(doc)
                doc.data = jsonable_encoder(_strip_id(data))
                db.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to write '{collection}/{doc_id}': {e}") from e
        logger.debug(f"Stored document {collection}/{doc_id}")

    def update(self, collection: str, doc_id: str, partial: Record) -> None:
        try:
            with self.session_factory() as db:
                doc = db.get(Document, (collection, doc_id))
                if doc is None:
                    raise DocumentNotFound(collection, doc_id)
                # JSON columns only notice reassignment
                doc.data = {**(doc.data or {}), **jsonable_encoder(_strip_id(partial))}
                db.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to update '{collection}/{doc_id}': {e}") from e

    def delete(self, collection: str, doc_id: str) -> None:
        try:
            with self.session_factory() as db:
                doc = db.get(Document, (collection, doc_id))
                if doc is not None:
                    db.delete(doc)
                    db.commit()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to delete '{collection}/{doc_id}': {e}") from e
