from __future__ import annotations

import csv
import io
from datetime import datetime, timezone

import pytest

from src.hr_portal.hr_portal.core.exceptions import ValidationError
from src.hr_portal.hr_portal.core.result import ErrorCode
from src.hr_portal.hr_portal.documents.memory_store import MemoryDocumentStore
from src.hr_portal.hr_portal.documents.service import DocumentService
from src.hr_portal.hr_portal.listing.criteria import ListingCriteria
from src.hr_portal.hr_portal.reports.export import REPORTS, export_csv, headers
from src.hr_portal.hr_portal.reports.service import ReportService


def _rows(content: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content)))


def test_one_line_per_record_plus_header():
    records = [
        {"id": "e1", "employeeId": "EMP001", "firstName": "Asha", "lastName": "Rao", "isActive": True},
        {"id": "e2", "employeeId": "EMP002", "firstName": "Bina", "lastName": "Shah", "isActive": False},
        {"id": "e3", "firstName": "Chitra", "status": "active"},
    ]

    content = export_csv("employees", records)

    assert len(content.splitlines()) == 1 + len(records)
    rows = _rows(content)
    assert rows[0] == headers("employees")
    assert rows[1][:2] == ["EMP001", "Asha Rao"]
    assert rows[1][-1] == "Active"
    assert rows[2][-1] == "Inactive"
    assert rows[3][0] == "e3"
    assert rows[3][-1] == "Active"


def test_empty_export_is_header_only():
    for report in REPORTS:
        assert export_csv(report, []).splitlines() == [",".join(headers(report))]


def test_payroll_amounts_are_two_decimals():
    record = {
        "id": "p1",
        "employee": {"firstName": "Asha", "lastName": "Rao"},
        "month": 3,
        "year": 2025,
        "basicSalary": 30000,
        "allowances": 0,
        "totalDeductions": 4115,
        "grossPay": 42000.5,
        "netPay": 37885.4,
    }

    row = _rows(export_csv("payroll", [record]))[1]

    assert row == ["p1", "Asha Rao", "3", "2025", "30000.00", "0.00", "4115.00", "42000.50", "37885.40"]


def test_dates_are_iso_and_commas_are_quoted():
    record = {
        "id": "l1",
        "employeeName": "Rao, Asha",
        "type": "sick",
        "startDate": datetime(2025, 3, 3, 9, 0, tzinfo=timezone.utc),
        "endDate": "2025-03-05T00:00:00Z",
        "days": 3,
        "reason": "fever\nand rest",
        "status": "approved",
    }

    content = export_csv("leaves", [record])

    assert len(content.splitlines()) == 2
    assert _rows(content)[1] == ["l1", "Rao, Asha", "sick", "2025-03-03", "2025-03-05", "3", "fever and rest", "approved"]


def test_unknown_report():
    with pytest.raises(ValidationError):
        export_csv("incidents", [])


def test_report_service_applies_criteria():
    documents = DocumentService(MemoryDocumentStore())
    for name, status in (("Laptop", "assigned"), ("Phone", "available"), ("Monitor", "assigned")):
        documents.create("assets", {"name": name, "status": status, "value": 1000})

    result = ReportService(documents).export("assets", ListingCriteria(exact={"status": "assigned"}))

    assert result.success
    rows = _rows(result.data)
    assert len(rows) == 3
    assert sorted(r[1] for r in rows[1:]) == ["Laptop", "Monitor"]


def test_report_service_unknown_report():
    result = ReportService(DocumentService(MemoryDocumentStore())).export("incidents")

    assert result.code == ErrorCode.VALIDATION
