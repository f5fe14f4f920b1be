from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..attendance.model import AttendanceRecord, Holiday, LeaveRequest
from ..common.datetime_utils import iter_days
from ..core.constants import STANDARD_WORK_HOURS, WEEKDAYS
from ..core.enums import AttendanceStatus, LeaveStatus


@dataclass(frozen=True)
class WorkSummary:
    """Outcome of walking a pay period day by day."""

    working_days: int = 0
    payable_days: int = 0
    ot_hours: float = 0.0
    holiday_days: int = 0
    leave_days: int = 0


def _index_attendance(records: Iterable[AttendanceRecord]) -> dict[date, AttendanceRecord]:
    # One record per employee per date is assumed but not enforced by the
    # store; on duplicates a "present" record with the most hours wins.
    by_date: dict[date, AttendanceRecord] = {}
    for rec in records:
        current = by_date.get(rec.date)
        if current is None:
            by_date[rec.date] = rec
            continue
        rec_rank = (rec.status == AttendanceStatus.PRESENT, rec.total_hours)
        cur_rank = (current.status == AttendanceStatus.PRESENT, current.total_hours)
        if rec_rank > cur_rank:
            by_date[rec.date] = rec
    return by_date


def walk_period(
    start: date,
    end: date,
    attendance: Iterable[AttendanceRecord],
    holidays: Iterable[Holiday] = (),
    leaves: Iterable[LeaveRequest] = (),
    *,
    standard_hours: float = STANDARD_WORK_HOURS,
) -> WorkSummary:
    """Count payable days and overtime hours between start and end (inclusive).

    Only Monday-Friday are considered. A weekday is skipped when an active
    holiday falls on it or an approved leave covers it; otherwise it is payable
    when the attendance record for that date says "present", and hours beyond
    ``standard_hours`` on such a day count as overtime.
    """

    holiday_dates = {h.date for h in holidays if h.is_active}
    approved = [lv for lv in leaves if lv.status == LeaveStatus.APPROVED]
    by_date = _index_attendance(attendance)

    working_days = payable_days = holiday_days = leave_days = 0
    ot_hours = 0.0

    for day in iter_days(start, end):
        if day.weekday() not in WEEKDAYS:
            continue
        working_days += 1
        if day in holiday_dates:
            holiday_days += 1
            continue
        if any(lv.covers(day) for lv in approved):
            leave_days += 1
            continue

        rec = by_date.get(day)
        if rec is None or rec.status != AttendanceStatus.PRESENT:
            continue
        payable_days += 1
        if rec.total_hours > standard_hours:
            ot_hours += rec.total_hours - standard_hours

    return WorkSummary(
        working_days=working_days,
        payable_days=payable_days,
        ot_hours=round(ot_hours, 2),
        holiday_days=holiday_days,
        leave_days=leave_days,
    )
