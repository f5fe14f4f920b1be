from __future__ import annotations

import copy

import mysql.connector
import pytest

from src.hr_portal.hr_portal.core.enums import FilterOperator, WriteType
from src.hr_portal.hr_portal.core.exceptions import ConflictError, NotFoundError
from src.hr_portal.hr_portal.database.bootstrap import iter_sql_statements
from src.hr_portal.hr_portal.documents.model import Filter, QueryOptions, WriteOperation
from src.hr_portal.hr_portal.documents.mysql_document_store import MySQLDocumentStore


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self._result = []

    def execute(self, sql, params=()):
        sql = " ".join(sql.split())
        rows = self._conn.rows
        if sql.startswith("SELECT") and "doc_id=%s" in sql:
            row = rows.get((params[0], params[1]))
            self._result = [copy.deepcopy(row)] if row else []
        elif sql.startswith("SELECT"):
            self._result = [copy.deepcopy(r) for (c, _), r in sorted(rows.items()) if c == params[0]]
        elif sql.startswith("INSERT"):
            collection, doc_id, data, version, created, updated = params
            if (collection, doc_id) in rows:
                raise mysql.connector.IntegrityError("Duplicate entry")
            rows[(collection, doc_id)] = {
                "doc_id": doc_id,
                "data": data,
                "version": version,
                "created_at": created,
                "updated_at": updated,
            }
        elif sql.startswith("UPDATE"):
            data, version, updated, collection, doc_id = params
            rows[(collection, doc_id)].update({"data": data, "version": version, "updated_at": updated})
        elif sql.startswith("DELETE"):
            rows.pop((params[0], params[1]), None)
        else:
            raise AssertionError(f"unexpected SQL: {sql}")

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return list(self._result)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, db):
        self._db = db
        self.rows = copy.deepcopy(db.rows)

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self._db.rows = self.rows

    def rollback(self):
        self.rows = copy.deepcopy(self._db.rows)

    def close(self):
        pass


class FakeDB:
    def __init__(self):
        self.rows = {}

    def connect(self, *, with_database=True):
        return FakeConnection(self)


@pytest.fixture()
def store():
    return MySQLDocumentStore(FakeDB())


def test_insert_and_get(store):
    created = store.insert("employees", {"firstName": "Asha", "version": 99}, doc_id="e1")

    fetched = store.get("employees", "e1")

    assert created["version"] == 1
    assert fetched["firstName"] == "Asha"
    assert fetched["version"] == 1
    assert fetched["createdAt"] == fetched["updatedAt"]
    assert store.get("employees", "missing") is None


def test_duplicate_id_is_conflict(store):
    store.insert("employees", {"firstName": "Asha"}, doc_id="e1")

    with pytest.raises(ConflictError):
        store.insert("employees", {"firstName": "Bina"}, doc_id="e1")


def test_conditional_update(store):
    store.insert("leaves", {"status": "pending"}, doc_id="l1")

    updated = store.update("leaves", "l1", {"status": "approved"}, expected_version=1)

    assert updated["version"] == 2
    assert updated["status"] == "approved"
    with pytest.raises(ConflictError):
        store.update("leaves", "l1", {"status": "rejected"}, expected_version=1)
    with pytest.raises(NotFoundError):
        store.update("leaves", "missing", {"status": "rejected"})


def test_query_uses_shared_evaluator(store):
    for doc_id, dept in (("e1", "Eng"), ("e2", "HR"), ("e3", "Eng")):
        store.insert("employees", {"department": dept}, doc_id=doc_id)

    found = store.query("employees", QueryOptions(filters=(Filter("department", FilterOperator.EQ, "Eng"),)))

    assert [d["id"] for d in found] == ["e1", "e3"]


def test_batch_is_rolled_back_on_failure(store):
    store.insert("employees", {"firstName": "Asha"}, doc_id="e1")

    with pytest.raises(NotFoundError):
        store.commit_batch(
            [
                WriteOperation("employees", WriteType.SET, "e2", {"firstName": "Bina"}),
                WriteOperation("employees", WriteType.UPDATE, "nope", {"firstName": "X"}),
            ]
        )

    assert store.get("employees", "e2") is None


def test_batch_set_replaces_existing_document(store):
    store.insert("employees", {"firstName": "Asha", "department": "Eng"}, doc_id="e1")

    ids = store.commit_batch([WriteOperation("employees", WriteType.SET, "e1", {"firstName": "Asha R"})])

    doc = store.get("employees", "e1")
    assert ids == ["e1"]
    assert doc == {**doc, "firstName": "Asha R", "version": 2}
    assert "department" not in doc


def test_schema_statement_splitter_keeps_quoted_semicolons():
    sql = "-- schema\nCREATE TABLE a (x TEXT DEFAULT 'a;b');\nINSERT INTO a VALUES ('c');\n"

    assert list(iter_sql_statements(sql)) == ["CREATE TABLE a (x TEXT DEFAULT 'a;b')", "INSERT INTO a VALUES ('c')"]
