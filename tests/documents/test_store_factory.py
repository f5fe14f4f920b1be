from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.hr_portal.hr_portal.core.exceptions import ValidationError
from src.hr_portal.hr_portal.documents.factory import build_store
from src.hr_portal.hr_portal.documents.firestore_document_store import has_real_credentials
from src.hr_portal.hr_portal.documents.memory_store import MemoryDocumentStore


@pytest.fixture(autouse=True)
def _no_emulator(monkeypatch):
    monkeypatch.delenv("FIRESTORE_EMULATOR_HOST", raising=False)


@pytest.mark.parametrize("project_id", ["", "your-project-id", "demo-project", None])
def test_placeholder_project_ids_are_not_credentials(project_id, tmp_path):
    key = tmp_path / "key.json"
    key.write_text("{}")

    assert has_real_credentials(project_id, str(key)) is False


def test_real_project_needs_key_file(tmp_path):
    key = tmp_path / "key.json"

    assert has_real_credentials("acme-hr", str(key)) is False
    key.write_text("{}")
    assert has_real_credentials("acme-hr", str(key)) is True


def test_emulator_only_needs_project_id(monkeypatch):
    monkeypatch.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8080")

    assert has_real_credentials("acme-hr", None) is True


def test_firestore_backend_without_credentials_yields_no_store():
    settings = SimpleNamespace(STORE_BACKEND="firestore", FIREBASE_PROJECT_ID="your-project-id", FIREBASE_CREDENTIALS=None)

    assert build_store(settings) is None


def test_memory_backend():
    assert isinstance(build_store(SimpleNamespace(STORE_BACKEND="memory")), MemoryDocumentStore)


def test_unknown_backend_is_rejected():
    with pytest.raises(ValidationError):
        build_store(SimpleNamespace(STORE_BACKEND="redis"))


def test_mysql_backend_connects_lazily():
    from src.hr_portal.hr_portal.documents.mysql_document_store import MySQLDocumentStore

    settings = SimpleNamespace(STORE_BACKEND="mysql", DB_CONFIG={"host": "db.invalid", "database": "hr"})

    assert isinstance(build_store(settings), MySQLDocumentStore)
