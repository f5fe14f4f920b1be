from __future__ import annotations

from datetime import date

import pytest

from src.hr_portal.hr_portal.config import testing
from src.hr_portal.hr_portal.container import build_container
from src.hr_portal.hr_portal.core.result import ErrorCode
from src.hr_portal.hr_portal.documents.memory_store import MemoryDocumentStore


@pytest.fixture()
def service():
    c = build_container(testing, store=MemoryDocumentStore())
    docs = c.document_service
    for day, hours in ((3, 10), (4, 8), (14, 8), (17, 8)):
        docs.create(
            "attendance",
            {"employeeId": "EMP001", "date": f"2025-03-{day:02d}", "status": "present", "totalHours": hours},
        )
    docs.create("attendance", {"employeeId": "EMP002", "date": "2025-03-05", "status": "present", "totalHours": 8})
    docs.create("holidays", {"name": "Holi", "date": "2025-03-14", "isActive": True})
    docs.create(
        "leaves",
        {"employeeId": "EMP001", "startDate": "2025-03-17", "endDate": "2025-03-18", "status": "approved"},
    )
    return c.attendance_service


def test_month_summary_skips_holidays_and_leave(service):
    result = service.month_summary("EMP001", 3, 2025)

    assert result.success
    summary = result.data
    assert summary.working_days == 21
    assert summary.payable_days == 2
    assert summary.ot_hours == 2
    assert summary.holiday_days == 1
    assert summary.leave_days == 2


def test_month_summary_rejects_bad_month(service):
    result = service.month_summary("EMP001", 13, 2025)

    assert not result.success
    assert result.code == ErrorCode.VALIDATION


def test_records_between_filters_by_employee_and_range(service):
    result = service.records_between("EMP001", date(2025, 3, 1), date(2025, 3, 10))

    assert result.success
    assert sorted(r.date.day for r in result.data) == [3, 4]


def test_records_between_rejects_inverted_range(service):
    result = service.records_between("EMP001", date(2025, 3, 10), date(2025, 3, 1))

    assert result.code == ErrorCode.VALIDATION


def test_holiday_without_active_flag_is_not_paid():
    c = build_container(testing, store=MemoryDocumentStore())
    docs = c.document_service
    docs.create("holidays", {"name": "Holi", "date": "2025-03-03"})
    docs.create("holidays", {"name": "Old", "date": "2025-03-04", "isActive": False})
    for day in (3, 4):
        docs.create(
            "attendance",
            {"employeeId": "EMP001", "date": f"2025-03-{day:02d}", "status": "present", "totalHours": 8},
        )

    summary = c.attendance_service.month_summary("EMP001", 3, 2025).data

    assert summary.holiday_days == 1
    assert summary.payable_days == 1


def test_datetime_dates_count_on_the_last_day_of_the_month():
    c = build_container(testing, store=MemoryDocumentStore())
    c.document_service.create(
        "attendance",
        {"employeeId": "EMP001", "date": "2025-03-31T09:00:00", "status": "present", "totalHours": 9},
    )

    summary = c.attendance_service.month_summary("EMP001", 3, 2025).data
    records = c.attendance_service.records_between("EMP001", date(2025, 3, 31), date(2025, 3, 31)).data

    assert summary.payable_days == 1
    assert summary.ot_hours == 1
    assert len(records) == 1
