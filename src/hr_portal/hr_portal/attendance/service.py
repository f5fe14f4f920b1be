from __future__ import annotations

from datetime import date

from ..common.datetime_utils import month_range
from ..common.validators import require_month, require_non_empty
from ..core.exceptions import DomainError, ValidationError
from ..core.result import Result
from ..payroll.period import WorkSummary, walk_period
from .model import AttendanceRecord
from .repository import AttendanceRepository, HolidayRepository, LeaveRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, holidays: HolidayRepository, leaves: LeaveRepository):
        self._attendance = attendance
        self._holidays = holidays
        self._leaves = leaves

    def records_between(self, employee_id: str, start: date, end: date) -> Result[list[AttendanceRecord]]:
        try:
            require_non_empty(employee_id, "employeeId")
            if end < start:
                raise ValidationError("end cannot be before start")
        except DomainError as exc:
            return Result.from_exception(exc)
        return self._attendance.for_employee_between(employee_id, start, end)

    def month_summary(self, employee_id: str, month: int, year: int) -> Result[WorkSummary]:
        """Working, payable, holiday and leave days plus overtime for one month."""
        try:
            require_non_empty(employee_id, "employeeId")
            month, year = require_month(month, year)
        except DomainError as exc:
            return Result.from_exception(exc)

        start, end = month_range(year, month)
        attendance = self._attendance.for_employee_between(employee_id, start, end)
        holidays = self._holidays.active_between(start, end)
        leaves = self._leaves.approved_for_employee(employee_id)
        for fetched in (attendance, holidays, leaves):
            if not fetched.success:
                return Result(success=False, error=fetched.error, code=fetched.code)
        return Result.ok(walk_period(start, end, attendance.data or [], holidays.data or [], leaves.data or []))
