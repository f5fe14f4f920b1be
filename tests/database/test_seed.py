from __future__ import annotations

from src.hr_portal.hr_portal.database.seed import DEMO_EMPLOYEES, demo_holidays, seed_demo_data
from src.hr_portal.hr_portal.documents.memory_store import MemoryDocumentStore
from src.hr_portal.hr_portal.documents.service import DocumentService


def test_seeding_twice_does_not_duplicate():
    documents = DocumentService(MemoryDocumentStore())

    assert seed_demo_data(documents, year=2025).success
    assert seed_demo_data(documents, year=2025).success

    assert len(documents.get_all("employees").data) == len(DEMO_EMPLOYEES)
    assert len(documents.get_all("holidays").data) == len(demo_holidays(2025))


def test_seeding_keeps_saved_payroll_settings():
    documents = DocumentService(MemoryDocumentStore())
    documents.batch_write(
        [{"collection": "payrollSettings", "type": "set", "id": "percentages", "data": {"pfPercent": 10}}]
    )

    seed_demo_data(documents, year=2025)

    assert documents.get_by_id("payrollSettings", "percentages").data["pfPercent"] == 10


def test_seeding_adds_default_settings_when_missing():
    documents = DocumentService(MemoryDocumentStore())

    seed_demo_data(documents, year=2025)

    assert documents.get_by_id("payrollSettings", "percentages").data["pfPercent"] == 12.0
