"""Demo data so a fresh store has something to list and pay."""
from __future__ import annotations

import logging
from datetime import date

from ..core import constants as c
from ..core.result import ErrorCode, Result
from ..documents.service import DocumentService
from ..payroll.model import PayrollSettings

logger = logging.getLogger(__name__)

DEMO_EMPLOYEES = [
    {
        "employeeId": "EMP001",
        "firstName": "Asha",
        "lastName": "Rao",
        "email": "asha.rao@example.com",
        "department": "Engineering",
        "position": "Software Engineer",
        "baseSalary": 30000,
        "joinDate": "2022-04-01",
        "isActive": True,
        "pfApplicable": True,
        "esiApplicable": True,
    },
    {
        "employeeId": "EMP002",
        "firstName": "Vikram",
        "lastName": "Shah",
        "email": "vikram.shah@example.com",
        "department": "Finance",
        "position": "Accountant",
        "baseSalary": 45000,
        "joinDate": "2021-07-15",
        "isActive": True,
        "pfApplicable": True,
        "esiApplicable": False,
    },
    {
        "employeeId": "EMP003",
        "firstName": "Meera",
        "lastName": "Iyer",
        "email": "meera.iyer@example.com",
        "department": "Human Resources",
        "position": "HR Executive",
        "baseSalary": 28000,
        "joinDate": "2023-01-09",
        "isActive": False,
        "pfApplicable": False,
        "esiApplicable": True,
    },
]


def demo_holidays(year: int) -> list[dict]:
    return [
        {"name": "Republic Day", "date": date(year, 1, 26).isoformat(), "type": "national", "isActive": True},
        {"name": "Independence Day", "date": date(year, 8, 15).isoformat(), "type": "national", "isActive": True},
        {"name": "Gandhi Jayanti", "date": date(year, 10, 2).isoformat(), "type": "national", "isActive": True},
    ]


def seed_demo_data(documents: DocumentService, *, year: int | None = None) -> Result[list[str]]:
    """Upsert demo employees and holidays; add default payroll settings if absent.

    Fixed document ids keep repeated runs from duplicating data, and settings
    an administrator already saved are left alone.
    """

    year = year or date.today().year
    operations = [
        {"collection": c.EMPLOYEES, "type": "set", "id": emp["employeeId"], "data": emp}
        for emp in DEMO_EMPLOYEES
    ]
    operations += [
        {"collection": c.HOLIDAYS, "type": "set", "id": f"{h['date']}-{i}", "data": h}
        for i, h in enumerate(demo_holidays(year))
    ]
    existing = documents.get_by_id(c.PAYROLL_SETTINGS, c.PAYROLL_SETTINGS_DOC)
    if not existing.success and existing.code == ErrorCode.NOT_FOUND:
        operations.append(
            {
                "collection": c.PAYROLL_SETTINGS,
                "type": "set",
                "id": c.PAYROLL_SETTINGS_DOC,
                "data": PayrollSettings().to_document(),
            }
        )
    result = documents.batch_write(operations)
    if result.success:
        logger.info("Seeded %s demo documents", len(result.data or []))
    return result
