from __future__ import annotations

from datetime import date

from ..core.constants import ATTENDANCE, HOLIDAYS, LEAVES
from ..core.enums import FilterOperator, LeaveStatus
from ..core.result import Result
from ..documents.accessor import CollectionAccessor
from ..documents.model import Filter, QueryOptions
from ..documents.service import DocumentService
from .model import AttendanceRecord, Holiday, LeaveRequest


class AttendanceRepository(CollectionAccessor[AttendanceRecord]):
    def __init__(self, documents: DocumentService):
        super().__init__(documents, ATTENDANCE, AttendanceRecord)

    def for_employee_between(self, employee_id: str, start: date, end: date) -> Result[list[AttendanceRecord]]:
        # Stored dates may be plain dates, ISO datetimes or timestamps, so the
        # range is checked on the parsed record rather than in the store.
        found = self.list(QueryOptions(filters=(Filter("employeeId", FilterOperator.EQ, employee_id),)))
        if not found.success:
            return found
        return Result.ok([rec for rec in found.data or [] if start <= rec.date <= end])


class HolidayRepository(CollectionAccessor[Holiday]):
    def __init__(self, documents: DocumentService):
        super().__init__(documents, HOLIDAYS, Holiday)

    def active_between(self, start: date, end: date) -> Result[list[Holiday]]:
        # A holiday without ``isActive`` counts as active, which a store
        # filter on the field would miss.
        found = self.list()
        if not found.success:
            return found
        return Result.ok([h for h in found.data or [] if h.is_active and start <= h.date <= end])


class LeaveRepository(CollectionAccessor[LeaveRequest]):
    def __init__(self, documents: DocumentService):
        super().__init__(documents, LEAVES, LeaveRequest)

    def approved_for_employee(self, employee_id: str) -> Result[list[LeaveRequest]]:
        # Overlap with the period is checked in memory: the store cannot
        # combine range filters on two different fields.
        return self.list(
            QueryOptions(
                filters=(
                    Filter("employeeId", FilterOperator.EQ, employee_id),
                    Filter("status", FilterOperator.EQ, LeaveStatus.APPROVED.value),
                )
            )
        )
