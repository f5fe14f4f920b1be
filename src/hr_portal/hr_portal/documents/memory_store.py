from __future__ import annotations

import copy
import threading
import uuid
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..core.constants import FIELD_CREATED_AT, FIELD_ID, FIELD_UPDATED_AT, FIELD_VERSION, RESERVED_FIELDS
from ..core.enums import WriteType
from ..core.exceptions import ConflictError, NotFoundError
from .model import Document, QueryOptions, WriteOperation
from .query import apply_query
from .store import DocumentStore


def generate_id() -> str:
    """Random 20-character id in the style of Firestore auto ids."""
    return uuid.uuid4().hex[:20]


class MemoryDocumentStore(DocumentStore):
    """Process-local store used by the testing configuration.

    Every read returns deep copies so callers cannot mutate stored state.
    """

    def __init__(self, *, clock: Callable = now_utc, id_factory: Callable[[], str] = generate_id):
        self._collections: dict[str, dict[str, Document]] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._id_factory = id_factory

    def _coll(self, collection: str, data: Optional[dict] = None) -> dict[str, Document]:
        target = self._collections if data is None else data
        return target.setdefault(collection, {})

    @staticmethod
    def _clean(data: Document) -> Document:
        return {k: copy.deepcopy(v) for k, v in data.items() if k not in RESERVED_FIELDS}

    def _insert_into(self, space: dict, collection: str, data: Document, doc_id: Optional[str]) -> Document:
        now = self._clock()
        new_id = doc_id or self._id_factory()
        doc = self._clean(data)
        doc.update({FIELD_ID: new_id, FIELD_CREATED_AT: now, FIELD_UPDATED_AT: now, FIELD_VERSION: 1})
        self._coll(collection, space)[new_id] = doc
        return doc

    def _update_into(
        self,
        space: dict,
        collection: str,
        doc_id: str,
        partial: Document,
        expected_version: Optional[int],
    ) -> Document:
        current = self._coll(collection, space).get(doc_id)
        if current is None:
            raise NotFoundError(f"Document not found: {collection}/{doc_id}")
        version = int(current.get(FIELD_VERSION) or 0)
        if expected_version is not None and version != int(expected_version):
            raise ConflictError(
                f"Document {collection}/{doc_id} was modified (version {version}, expected {expected_version})",
                expected=int(expected_version),
                actual=version,
            )
        current.update(self._clean(partial))
        current[FIELD_UPDATED_AT] = self._clock()
        current[FIELD_VERSION] = version + 1
        return current

    def insert(self, collection: str, data: Document, *, doc_id: Optional[str] = None) -> Document:
        with self._lock:
            if doc_id and doc_id in self._coll(collection):
                raise ConflictError(f"Document already exists: {collection}/{doc_id}")
            return copy.deepcopy(self._insert_into(self._collections, collection, data, doc_id))

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with self._lock:
            doc = self._coll(collection).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def query(self, collection: str, options: QueryOptions) -> Sequence[Document]:
        with self._lock:
            docs = list(self._coll(collection).values())
            return copy.deepcopy(apply_query(docs, options))

    def update(
        self,
        collection: str,
        doc_id: str,
        partial: Document,
        *,
        expected_version: Optional[int] = None,
    ) -> Document:
        with self._lock:
            return copy.deepcopy(self._update_into(self._collections, collection, doc_id, partial, expected_version))

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            self._coll(collection).pop(doc_id, None)

    def commit_batch(self, operations: Sequence[WriteOperation]) -> list[str]:
        with self._lock:
            # Work on a copy and swap it in only when every operation succeeded.
            staged = copy.deepcopy(self._collections)
            ids: list[str] = []
            for op in operations:
                if op.type == WriteType.SET:
                    existing = self._coll(op.collection, staged).get(op.id) if op.id else None
                    if existing is None:
                        doc = self._insert_into(staged, op.collection, op.data, op.id)
                    else:
                        doc = self._clean(op.data)
                        doc.update(
                            {
                                FIELD_ID: op.id,
                                FIELD_CREATED_AT: existing.get(FIELD_CREATED_AT),
                                FIELD_UPDATED_AT: self._clock(),
                                FIELD_VERSION: int(existing.get(FIELD_VERSION) or 0) + 1,
                            }
                        )
                        self._coll(op.collection, staged)[op.id] = doc
                    ids.append(doc[FIELD_ID])
                elif op.type == WriteType.UPDATE:
                    self._update_into(staged, op.collection, op.id, op.data, None)
                    ids.append(op.id)
                else:
                    self._coll(op.collection, staged).pop(op.id, None)
                    ids.append(op.id)
            self._collections = staged
            return ids
