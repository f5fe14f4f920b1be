from datetime import date

from src.hr_portal.hr_portal.attendance.model import AttendanceRecord, Holiday, LeaveRequest
from src.hr_portal.hr_portal.core.enums import AttendanceStatus, LeaveStatus
from src.hr_portal.hr_portal.payroll.period import walk_period

MONDAY = date(2025, 3, 3)


def _present(day, hours=8.0, status=AttendanceStatus.PRESENT):
    return AttendanceRecord(id=None, employee_id="EMP001", date=day, status=status, total_hours=hours)


def test_weekend_only_range_pays_nothing():
    saturday, sunday = date(2025, 3, 1), date(2025, 3, 2)

    summary = walk_period(saturday, sunday, [_present(saturday, 12), _present(sunday, 12)])

    assert summary.working_days == 0
    assert summary.payable_days == 0
    assert summary.ot_hours == 0


def test_full_week_with_overtime():
    days = [date(2025, 3, d) for d in range(3, 8)]
    attendance = [_present(d) for d in days] + [_present(date(2025, 3, 8), 10)]
    attendance[0] = _present(MONDAY, 10.5)

    summary = walk_period(date(2025, 3, 3), date(2025, 3, 9), attendance)

    assert summary.working_days == 5
    assert summary.payable_days == 5
    assert summary.ot_hours == 2.5


def test_active_holiday_excludes_present_day():
    holiday = Holiday(id="h1", name="Festival", date=MONDAY, is_active=True)

    summary = walk_period(MONDAY, MONDAY, [_present(MONDAY, 10)], [holiday])

    assert summary.payable_days == 0
    assert summary.ot_hours == 0
    assert summary.holiday_days == 1


def test_inactive_holiday_is_ignored():
    holiday = Holiday(id="h1", name="Cancelled", date=MONDAY, is_active=False)

    summary = walk_period(MONDAY, MONDAY, [_present(MONDAY, 10)], [holiday])

    assert summary.payable_days == 1
    assert summary.ot_hours == 2


def test_approved_leave_covers_whole_interval():
    leave = LeaveRequest(
        id="l1",
        employee_id="EMP001",
        start_date=date(2025, 3, 4),
        end_date=date(2025, 3, 5),
        status=LeaveStatus.APPROVED,
    )
    pending = LeaveRequest(
        id="l2",
        employee_id="EMP001",
        start_date=date(2025, 3, 6),
        end_date=date(2025, 3, 6),
        status=LeaveStatus.PENDING,
    )
    attendance = [_present(date(2025, 3, d)) for d in range(3, 8)]

    summary = walk_period(date(2025, 3, 3), date(2025, 3, 7), attendance, leaves=[leave, pending])

    assert summary.leave_days == 2
    assert summary.payable_days == 3


def test_only_present_days_are_payable():
    attendance = [
        _present(date(2025, 3, 3)),
        _present(date(2025, 3, 4), status=AttendanceStatus.LATE),
        _present(date(2025, 3, 5), status=AttendanceStatus.HALF_DAY),
        _present(date(2025, 3, 6), status=AttendanceStatus.ABSENT),
    ]

    summary = walk_period(date(2025, 3, 3), date(2025, 3, 7), attendance)

    assert summary.working_days == 5
    assert summary.payable_days == 1


def test_duplicate_records_count_once():
    attendance = [_present(MONDAY, 9), _present(MONDAY, 11), _present(MONDAY, 4, status=AttendanceStatus.ABSENT)]

    summary = walk_period(MONDAY, MONDAY, attendance)

    assert summary.payable_days == 1
    assert summary.ot_hours == 3
