from __future__ import annotations

from typing import Any, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import now_utc
from ..core.constants import FIELD_CREATED_AT, FIELD_ID, FIELD_UPDATED_AT, FIELD_VERSION, RESERVED_FIELDS
from ..core.enums import WriteType
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_document, fetchall, fetchone, load_document
from .memory_store import generate_id
from .model import Document, QueryOptions, WriteOperation
from .query import apply_query
from .store import DocumentStore


def _row_to_document(row: dict[str, Any]) -> Document:
    doc = load_document(row["data"])
    doc.update(
        {
            FIELD_ID: row["doc_id"],
            FIELD_CREATED_AT: row["created_at"],
            FIELD_UPDATED_AT: row["updated_at"],
            FIELD_VERSION: int(row["version"]),
        }
    )
    return doc


def _fields(data: Document) -> Document:
    return {k: v for k, v in data.items() if k not in RESERVED_FIELDS}


class MySQLDocumentStore(DocumentStore):
    """Documents stored as JSON rows of a single ``documents`` table.

    Predicates, ordering and cursors are evaluated in-process over the rows of
    one collection, which keeps the query semantics identical to Firestore's.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _now():
        # DATETIME columns are timezone-naive; values are always UTC.
        return now_utc().replace(tzinfo=None)

    @staticmethod
    def _select_one(cur, collection: str, doc_id: str, *, for_update: bool = False) -> Optional[dict]:
        cur.execute(
            """
            SELECT doc_id, data, version, created_at, updated_at
            FROM documents
            WHERE collection=%s AND doc_id=%s
            """
            + (" FOR UPDATE" if for_update else ""),
            (collection, doc_id),
        )
        return fetchone(cur)

    def _insert(self, cur, collection: str, data: Document, doc_id: Optional[str]) -> Document:
        now = self._now()
        new_id = doc_id or generate_id()
        fields = _fields(data)
        cur.execute(
            """
            INSERT INTO documents(collection, doc_id, data, version, created_at, updated_at)
            VALUES(%s,%s,%s,%s,%s,%s)
            """,
            (collection, new_id, dump_document(fields), 1, now, now),
        )
        fields.update({FIELD_ID: new_id, FIELD_CREATED_AT: now, FIELD_UPDATED_AT: now, FIELD_VERSION: 1})
        return fields

    def _update(
        self,
        cur,
        collection: str,
        doc_id: str,
        partial: Document,
        *,
        expected_version: Optional[int],
        replace: bool = False,
    ) -> Document:
        row = self._select_one(cur, collection, doc_id, for_update=True)
        if not row:
            raise NotFoundError(f"Document not found: {collection}/{doc_id}")

        version = int(row["version"])
        if expected_version is not None and version != int(expected_version):
            raise ConflictError(
                f"Document {collection}/{doc_id} was modified (version {version}, expected {expected_version})",
                expected=int(expected_version),
                actual=version,
            )

        merged = {} if replace else load_document(row["data"])
        merged.update(_fields(partial))
        now = self._now()
        cur.execute(
            """
            UPDATE documents
            SET data=%s, version=%s, updated_at=%s
            WHERE collection=%s AND doc_id=%s
            """,
            (dump_document(merged), version + 1, now, collection, doc_id),
        )
        merged.update(
            {FIELD_ID: doc_id, FIELD_CREATED_AT: row["created_at"], FIELD_UPDATED_AT: now, FIELD_VERSION: version + 1}
        )
        return merged

    def insert(self, collection: str, data: Document, *, doc_id: Optional[str] = None) -> Document:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                return self._insert(cur, collection, data, doc_id)
        except mysql.connector.IntegrityError:
            raise ConflictError(f"Document already exists: {collection}/{doc_id}")

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            row = self._select_one(cur, collection, doc_id)
            return _row_to_document(row) if row else None

    def query(self, collection: str, options: QueryOptions) -> Sequence[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT doc_id, data, version, created_at, updated_at
                FROM documents
                WHERE collection=%s
                """,
                (collection,),
            )
            docs = [_row_to_document(r) for r in fetchall(cur)]
        return apply_query(docs, options)

    def update(
        self,
        collection: str,
        doc_id: str,
        partial: Document,
        *,
        expected_version: Optional[int] = None,
    ) -> Document:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._update(cur, collection, doc_id, partial, expected_version=expected_version)

    def delete(self, collection: str, doc_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM documents WHERE collection=%s AND doc_id=%s", (collection, doc_id))

    def commit_batch(self, operations: Sequence[WriteOperation]) -> list[str]:
        ids: list[str] = []
        # One connection, one transaction: db_cursor rolls back on the first error.
        with db_cursor(self._conn_factory) as (_, cur):
            for op in operations:
                if op.type == WriteType.SET:
                    if op.id and self._select_one(cur, op.collection, op.id, for_update=True):
                        self._update(cur, op.collection, op.id, op.data, expected_version=None, replace=True)
                        ids.append(op.id)
                    else:
                        ids.append(self._insert(cur, op.collection, op.data, op.id)[FIELD_ID])
                elif op.type == WriteType.UPDATE:
                    self._update(cur, op.collection, op.id, op.data, expected_version=None)
                    ids.append(op.id)
                else:
                    cur.execute(
                        "DELETE FROM documents WHERE collection=%s AND doc_id=%s",
                        (op.collection, op.id),
                    )
                    ids.append(op.id)
        return ids
