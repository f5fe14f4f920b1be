from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import format_iso_date
from ..core.enums import AttendanceStatus, LeaveStatus
from ..documents.record import as_bool, as_date, as_enum, as_float, as_int, as_str, required


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar date."""

    id: Optional[str]
    employee_id: str
    date: date
    status: AttendanceStatus
    total_hours: float = 0.0
    overtime_hours: float = 0.0
    clock_in: Optional[str] = None
    clock_out: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "AttendanceRecord":
        return cls(
            id=doc.get("id"),
            employee_id=as_str(required(doc, "employeeId")),
            date=as_date(required(doc, "date")),  # type: ignore[arg-type]
            status=as_enum(AttendanceStatus, doc.get("status"), default=AttendanceStatus.ABSENT),
            total_hours=as_float(doc.get("totalHours")),
            overtime_hours=as_float(doc.get("overtimeHours")),
            clock_in=doc.get("clockIn") or None,
            clock_out=doc.get("clockOut") or None,
        )

    def to_document(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "date": format_iso_date(self.date),
            "status": self.status.value,
            "totalHours": self.total_hours,
            "overtimeHours": self.overtime_hours,
            "clockIn": self.clock_in,
            "clockOut": self.clock_out,
        }


@dataclass(frozen=True)
class Holiday:
    id: Optional[str]
    name: str
    date: date
    is_active: bool = True
    type: str = "public"

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Holiday":
        return cls(
            id=doc.get("id"),
            name=as_str(doc.get("name")),
            date=as_date(required(doc, "date")),  # type: ignore[arg-type]
            is_active=as_bool(doc.get("isActive"), default=True),
            type=as_str(doc.get("type"), default="public"),
        )

    def to_document(self) -> dict:
        return {
            "name": self.name,
            "date": format_iso_date(self.date),
            "isActive": self.is_active,
            "type": self.type,
        }


@dataclass(frozen=True)
class LeaveRequest:
    id: Optional[str]
    employee_id: str
    start_date: date
    end_date: date
    status: LeaveStatus
    type: str = "annual"
    reason: str = ""
    days: int = 0

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "LeaveRequest":
        start = as_date(required(doc, "startDate"))
        # Single-day leave is sometimes stored without an end date.
        end = as_date(doc.get("endDate")) or start
        return cls(
            id=doc.get("id"),
            employee_id=as_str(required(doc, "employeeId")),
            start_date=start,  # type: ignore[arg-type]
            end_date=end,  # type: ignore[arg-type]
            status=as_enum(LeaveStatus, doc.get("status"), default=LeaveStatus.PENDING),
            type=as_str(doc.get("type"), default="annual"),
            reason=as_str(doc.get("reason")),
            days=as_int(doc.get("days")),
        )

    def to_document(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "startDate": format_iso_date(self.start_date),
            "endDate": format_iso_date(self.end_date),
            "status": self.status.value,
            "type": self.type,
            "reason": self.reason,
            "days": self.days,
        }
