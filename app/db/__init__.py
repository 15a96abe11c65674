import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from config import (FIRESTORE_CREDENTIALS, FIRESTORE_PROJECT_ID,
                    SQLALCHEMY_DATABASE_URL, STORE_BACKEND)

from app.db.base import Base
from app.db.store import (DocumentNotFound, DocumentStore, SQLDocumentStore,
                          StoreError)

logger = logging.getLogger("esimshop")

if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
else:
    engine = create_engine(SQLALCHEMY_DATABASE_URL, pool_size=10, max_overflow=30, pool_recycle=3600)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_store: Optional[DocumentStore] = None


def init_db():
    if STORE_BACKEND == "sql":
        from app.db import models  # noqa: F401
        Base.metadata.create_all(bind=engine)
        logger.info("Document table ensured on SQL backend")


def get_store() -> DocumentStore:
    """Process-wide store for the configured backend, created on first use."""
    global _store
    if _store is None:
        if STORE_BACKEND == "firestore":
            from app.db.firestore import FirestoreDocumentStore
            _store = FirestoreDocumentStore.from_settings(FIRESTORE_PROJECT_ID, FIRESTORE_CREDENTIALS)
        elif STORE_BACKEND == "sql":
            _store = SQLDocumentStore(SessionLocal)
        else:
            raise ValueError(f"Unknown STORE_BACKEND '{STORE_BACKEND}'")
    return _store


def set_store(store: Optional[DocumentStore]):
    global _store
    _store = store


from app.db import crud  # noqa: E402

__all__ = [
    "Session",
    "SessionLocal",
    "DocumentStore",
    "SQLDocumentStore",
    "DocumentNotFound",
    "StoreError",
    "get_store",
    "set_store",
    "init_db",
    "crud",
]
