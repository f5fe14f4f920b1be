from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from ..attendance.model import AttendanceRecord, Holiday, LeaveRequest
from ..attendance.repository import AttendanceRepository, HolidayRepository, LeaveRepository
from ..common.datetime_utils import month_range
from ..core.constants import MSG_EMPLOYEE_NOT_FOUND
from ..core.enums import PayrollStatus
from ..core.exceptions import DomainError, ValidationError
from ..core.result import ErrorCode, Result
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollRecord, PayrollRequest, PayrollSettings
from .period import walk_period
from .repository import PayrollRepository, PayrollSettingsRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollSummary:
    records: int
    total_gross: float
    total_deductions: float
    total_net: float


def build_payroll(
    request: PayrollRequest,
    employee: Employee,
    *,
    attendance: Iterable[AttendanceRecord],
    holidays: Iterable[Holiday],
    leaves: Iterable[LeaveRequest],
    settings: PayrollSettings,
    calculator: Optional[PayrollCalculator] = None,
) -> PayrollRecord:
    """Pure payroll derivation from already fetched inputs."""

    start, end = month_range(request.year, request.month)
    summary = walk_period(start, end, attendance, holidays, leaves)

    pf_applicable = employee.pf_applicable if request.pf_applicable is None else request.pf_applicable
    esi_applicable = employee.esi_applicable if request.esi_applicable is None else request.esi_applicable
    basic = employee.base_salary if request.basic_salary is None else request.basic_salary

    breakdown = (calculator or StandardPayrollCalculator()).calculate(
        basic_salary=basic,
        summary=summary,
        request=request,
        settings=settings,
        pf_applicable=pf_applicable,
        esi_applicable=esi_applicable,
    )
    return PayrollRecord(
        id=None,
        employee_id=employee.id or request.employee_id,
        employee=employee.snapshot(),
        month=request.month,
        year=request.year,
        breakdown=breakdown,
        status=PayrollStatus.DRAFT,
        payment_method=request.payment_method,
        payable_days=summary.payable_days,
        working_days=summary.working_days,
        ot_hours=summary.ot_hours,
        overtime_rate=request.overtime_rate,
    )


class PayrollService:
    """Use case: turn employee + attendance + settings into a payroll draft."""

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        holidays: HolidayRepository,
        leaves: LeaveRepository,
        payroll: PayrollRepository,
        settings: PayrollSettingsRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._attendance = attendance
        self._holidays = holidays
        self._leaves = leaves
        self._payroll = payroll
        self._settings = settings
        self._calculator = calculator or StandardPayrollCalculator()

    @staticmethod
    def _parse(request: Any) -> PayrollRequest:
        if isinstance(request, PayrollRequest):
            return request.validate()
        if isinstance(request, Mapping):
            return PayrollRequest.from_input(request)
        raise ValidationError("Payroll input must be an object")

    def _compute(self, request: Any) -> Result[PayrollRecord]:
        try:
            req = self._parse(request)
        except DomainError as exc:
            return Result.from_exception(exc)

        employee = self._employees.get(req.employee_id)
        if not employee.success:
            if employee.code == ErrorCode.NOT_FOUND:
                return Result.fail(MSG_EMPLOYEE_NOT_FOUND, ErrorCode.NOT_FOUND)
            return Result(success=False, error=employee.error, code=employee.code)

        start, end = month_range(req.year, req.month)
        settings = self._settings.load()
        attendance = self._attendance.for_employee_between(req.employee_id, start, end)
        holidays = self._holidays.active_between(start, end)
        leaves = self._leaves.approved_for_employee(req.employee_id)
        for fetched in (settings, attendance, holidays, leaves):
            if not fetched.success:
                return Result(success=False, error=fetched.error, code=fetched.code)

        record = build_payroll(
            req,
            employee.data,  # type: ignore[arg-type]
            attendance=attendance.data or [],
            holidays=holidays.data or [],
            leaves=leaves.data or [],
            settings=settings.data,  # type: ignore[arg-type]
            calculator=self._calculator,
        )
        return Result.ok(record)

    def preview(self, request: Any) -> Result[PayrollRecord]:
        """Compute a payroll draft without saving it."""
        return self._compute(request)

    def generate(self, request: Any) -> Result[PayrollRecord]:
        """Compute and save a draft payroll record.

        A missing employee aborts before anything is written. Only one live
        (non-rejected) record may exist per employee and month.
        """

        computed = self._compute(request)
        if not computed.success:
            return computed
        record: PayrollRecord = computed.data  # type: ignore[assignment]

        existing = self._payroll.for_period(record.month, record.year, employee_id=record.employee_id)
        if not existing.success:
            return Result(success=False, error=existing.error, code=existing.code)
        if any(r.status != PayrollStatus.REJECTED for r in existing.data or []):
            return Result.fail(
                f"Payroll for {record.month:02d}/{record.year} already exists for this employee",
                ErrorCode.VALIDATION,
            )

        created = self._payroll.create(record)
        if created.success:
            logger.info(
                "Payroll generated for employee %s %02d/%s (net %.2f)",
                record.employee_id,
                record.month,
                record.year,
                record.breakdown.net_pay,
            )
        return created

    def get(self, payroll_id: str) -> Result[PayrollRecord]:
        return self._payroll.get(payroll_id)

    def list_for_period(self, month: int, year: int) -> Result[list[PayrollRecord]]:
        return self._payroll.for_period(month, year)

    def summarize(self, records: Iterable[PayrollRecord]) -> PayrollSummary:
        records = list(records)
        return PayrollSummary(
            records=len(records),
            total_gross=round(sum(r.breakdown.gross_pay for r in records), 2),
            total_deductions=round(sum(r.breakdown.total_deductions for r in records), 2),
            total_net=round(sum(r.breakdown.net_pay for r in records), 2),
        )

    def load_settings(self) -> Result[PayrollSettings]:
        return self._settings.load()

    def save_settings(self, raw: Any) -> Result[PayrollSettings]:
        try:
            settings = raw if isinstance(raw, PayrollSettings) else PayrollSettings.from_input(raw)
        except DomainError as exc:
            return Result.from_exception(exc)
        saved = self._settings.save(settings)
        if saved.success:
            logger.info("Payroll settings updated")
        return saved

