from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection, DBConfig
from .store import DocumentStore

logger = logging.getLogger(__name__)

BACKENDS = ("firestore", "mysql", "memory")


def build_store(settings: Any) -> Optional[DocumentStore]:
    """Pick the document store backend named by ``STORE_BACKEND``.

    Returns ``None`` for a Firestore backend without usable credentials; the
    document service then reports every call as store-unavailable.
    """

    backend = str(getattr(settings, "STORE_BACKEND", "firestore")).lower()

    if backend == "memory":
        from .memory_store import MemoryDocumentStore

        logger.info("Using in-memory document store")
        return MemoryDocumentStore()

    if backend == "mysql":
        from .mysql_document_store import MySQLDocumentStore

        config = DBConfig.from_mapping(getattr(settings, "DB_CONFIG"))
        logger.info("Using MySQL document store %s", config.describe())
        return MySQLDocumentStore(DatabaseConnection(config))

    if backend == "firestore":
        from .firestore_document_store import FirestoreDocumentStore, init_firestore_client

        client = init_firestore_client(
            getattr(settings, "FIREBASE_PROJECT_ID", None),
            getattr(settings, "FIREBASE_CREDENTIALS", None),
        )
        return FirestoreDocumentStore(client) if client is not None else None

    raise ValidationError(f"Unknown STORE_BACKEND {backend!r}; expected one of {', '.join(BACKENDS)}")
