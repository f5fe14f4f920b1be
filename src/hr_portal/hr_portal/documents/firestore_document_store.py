from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.constants import FIELD_CREATED_AT, FIELD_ID, FIELD_UPDATED_AT, FIELD_VERSION, RESERVED_FIELDS
from ..core.enums import FilterOperator, SortDirection, WriteType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from .model import Document, QueryOptions, WriteOperation
from .store import DocumentStore

logger = logging.getLogger(__name__)

PLACEHOLDER_PROJECT_IDS = frozenset({"", "demo-project", "your-project-id", "your_project_id"})

# The Python client spells the array operators with underscores.
_OPERATORS = {
    FilterOperator.EQ: "==",
    FilterOperator.NE: "!=",
    FilterOperator.LT: "<",
    FilterOperator.LE: "<=",
    FilterOperator.GT: ">",
    FilterOperator.GE: ">=",
    FilterOperator.IN: "in",
    FilterOperator.NOT_IN: "not-in",
    FilterOperator.ARRAY_CONTAINS: "array_contains",
    FilterOperator.ARRAY_CONTAINS_ANY: "array_contains_any",
}


def has_real_credentials(project_id: Optional[str], credentials_path: Optional[str]) -> bool:
    """True when a Firestore connection should be attempted.

    The emulator needs only a project id; a real project also needs a
    service-account key file on disk.
    """

    if (project_id or "").strip() in PLACEHOLDER_PROJECT_IDS:
        return False
    if os.environ.get("FIRESTORE_EMULATOR_HOST"):
        return True
    return bool(credentials_path) and os.path.isfile(str(credentials_path))


def init_firestore_client(project_id: Optional[str], credentials_path: Optional[str]):
    """Initialise the default firebase app once and return a Firestore client.

    Returns ``None`` when credentials are not configured so the application can
    report a configuration error instead of attempting connections.
    """

    if not has_real_credentials(project_id, credentials_path):
        logger.error(
            "Firestore credentials not configured. Set FIREBASE_PROJECT_ID and FIREBASE_CREDENTIALS "
            "(or FIRESTORE_EMULATOR_HOST)."
        )
        return None

    try:
        app = firebase_admin.get_app()
    except ValueError:
        cred = credentials.Certificate(credentials_path) if credentials_path and os.path.isfile(credentials_path) else None
        app = firebase_admin.initialize_app(cred, {"projectId": project_id})
        logger.info("Firebase initialized for project %s", project_id)
    return firestore.client(app)


def _snapshot_to_document(snap) -> Document:
    doc = snap.to_dict() or {}
    doc[FIELD_ID] = snap.id
    return doc


def _fields(data: Document) -> Document:
    return {k: v for k, v in data.items() if k not in RESERVED_FIELDS}


class FirestoreDocumentStore(DocumentStore):
    def __init__(self, client):
        self._client = client

    def _ref(self, collection: str, doc_id: str):
        return self._client.collection(collection).document(doc_id)

    def insert(self, collection: str, data: Document, *, doc_id: Optional[str] = None) -> Document:
        coll = self._client.collection(collection)
        ref = coll.document(doc_id) if doc_id else coll.document()
        payload = _fields(data)
        payload.update(
            {
                FIELD_CREATED_AT: firestore.SERVER_TIMESTAMP,
                FIELD_UPDATED_AT: firestore.SERVER_TIMESTAMP,
                FIELD_VERSION: 1,
            }
        )
        try:
            ref.create(payload)
        except google_exceptions.AlreadyExists:
            raise ConflictError(f"Document already exists: {collection}/{ref.id}")
        # Read back so the server-resolved timestamps are returned.
        return _snapshot_to_document(ref.get())

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        snap = self._ref(collection, doc_id).get()
        if not snap.exists:
            return None
        return _snapshot_to_document(snap)

    def query(self, collection: str, options: QueryOptions) -> Sequence[Document]:
        coll = self._client.collection(collection)
        q: Any = coll
        for flt in options.filters:
            q = q.where(filter=FieldFilter(flt.field, _OPERATORS[flt.operator], flt.value))
        for ob in options.order_by:
            direction = firestore.Query.DESCENDING if ob.direction == SortDirection.DESC else firestore.Query.ASCENDING
            q = q.order_by(ob.field, direction=direction)
        if options.start_after:
            cursor = coll.document(options.start_after).get()
            if not cursor.exists:
                raise ValidationError(f"Unknown cursor: {options.start_after}")
            q = q.start_after(cursor)
        if options.limit:
            q = q.limit(options.limit)
        return [_snapshot_to_document(snap) for snap in q.stream()]

    def update(
        self,
        collection: str,
        doc_id: str,
        partial: Document,
        *,
        expected_version: Optional[int] = None,
    ) -> Document:
        ref = self._ref(collection, doc_id)
        fields = _fields(partial)

        if expected_version is None:
            payload = dict(fields)
            payload.update({FIELD_UPDATED_AT: firestore.SERVER_TIMESTAMP, FIELD_VERSION: firestore.Increment(1)})
            try:
                ref.update(payload)
            except google_exceptions.NotFound:
                raise NotFoundError(f"Document not found: {collection}/{doc_id}")
        else:
            transaction = self._client.transaction()

            @firestore.transactional
            def _conditional_update(trans):
                snap = ref.get(transaction=trans)
                if not snap.exists:
                    raise NotFoundError(f"Document not found: {collection}/{doc_id}")
                version = int((snap.to_dict() or {}).get(FIELD_VERSION) or 0)
                if version != int(expected_version):
                    raise ConflictError(
                        f"Document {collection}/{doc_id} was modified (version {version}, expected {expected_version})",
                        expected=int(expected_version),
                        actual=version,
                    )
                payload = dict(fields)
                payload.update({FIELD_UPDATED_AT: firestore.SERVER_TIMESTAMP, FIELD_VERSION: version + 1})
                trans.update(ref, payload)

            _conditional_update(transaction)

        snap = ref.get()
        return _snapshot_to_document(snap) if snap.exists else dict(fields, **{FIELD_ID: doc_id})

    def delete(self, collection: str, doc_id: str) -> None:
        self._ref(collection, doc_id).delete()

    def commit_batch(self, operations: Sequence[WriteOperation]) -> list[str]:
        batch = self._client.batch()
        ids: list[str] = []
        for op in operations:
            coll = self._client.collection(op.collection)
            if op.type == WriteType.SET:
                ref = coll.document(op.id) if op.id else coll.document()
                payload = _fields(op.data)
                # A set replaces the whole document, so its version restarts.
                payload.update(
                    {
                        FIELD_CREATED_AT: firestore.SERVER_TIMESTAMP,
                        FIELD_UPDATED_AT: firestore.SERVER_TIMESTAMP,
                        FIELD_VERSION: firestore.Increment(1),
                    }
                )
                batch.set(ref, payload)
            elif op.type == WriteType.UPDATE:
                ref = coll.document(op.id)
                payload = _fields(op.data)
                payload.update({FIELD_UPDATED_AT: firestore.SERVER_TIMESTAMP, FIELD_VERSION: firestore.Increment(1)})
                batch.update(ref, payload)
            else:
                ref = coll.document(op.id)
                batch.delete(ref)
            ids.append(ref.id)

        try:
            batch.commit()
        except google_exceptions.NotFound as exc:
            raise NotFoundError(f"Batch aborted, document not found: {exc.message}")
        return ids
