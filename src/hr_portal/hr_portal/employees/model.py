from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_iso_date
from ..documents.record import as_bool, as_date, as_float, as_int, as_str, required


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee document from the ``employees`` collection."""

    id: Optional[str]
    employee_id: str
    first_name: str
    last_name: str
    email: str
    department: str
    position: str
    base_salary: float
    join_date: Optional[date]
    is_active: bool = True
    pf_applicable: bool = True
    esi_applicable: bool = True
    version: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Employee":
        # Older records keep the salary under ``salary``.
        salary = doc.get("baseSalary", doc.get("salary"))
        return cls(
            id=doc.get("id"),
            employee_id=as_str(doc.get("employeeId"), default=as_str(doc.get("id"))),
            first_name=as_str(required(doc, "firstName")),
            last_name=as_str(doc.get("lastName")),
            email=as_str(doc.get("email")),
            department=as_str(doc.get("department")),
            position=as_str(doc.get("position")),
            base_salary=as_float(salary),
            join_date=as_date(doc.get("joinDate", doc.get("hireDate"))),
            is_active=as_bool(doc.get("isActive"), default=True),
            pf_applicable=as_bool(doc.get("pfApplicable"), default=True),
            esi_applicable=as_bool(doc.get("esiApplicable"), default=True),
            version=as_int(doc.get("version")),
        )

    def to_document(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
            "baseSalary": self.base_salary,
            "joinDate": format_iso_date(self.join_date),
            "isActive": self.is_active,
            "pfApplicable": self.pf_applicable,
            "esiApplicable": self.esi_applicable,
        }

    def snapshot(self) -> dict:
        """Denormalized copy embedded in payroll and request documents."""
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "department": self.department,
            "position": self.position,
        }

    def to_dict(self) -> dict:
        out = self.to_document()
        out["id"] = self.id
        out["version"] = self.version
        return out
