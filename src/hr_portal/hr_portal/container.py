from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.repository import AttendanceRepository, HolidayRepository, LeaveRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_PAGE_SIZE
from .documents.factory import build_store
from .documents.service import DocumentService
from .documents.store import DocumentStore
from .employees.repository import EmployeeRepository
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.repository import PayrollRepository, PayrollSettingsRepository
from .payroll.service import PayrollService
from .reports.service import ReportService
from .workflows.service import WorkflowService


@dataclass(frozen=True)
class Container:
    store: Optional[DocumentStore]
    document_service: DocumentService

    employee_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    holiday_repo: HolidayRepository
    leave_repo: LeaveRepository
    payroll_repo: PayrollRepository
    payroll_settings_repo: PayrollSettingsRepository

    attendance_service: AttendanceService
    payroll_service: PayrollService
    workflow_service: WorkflowService
    report_service: ReportService

    default_page_size: int = DEFAULT_PAGE_SIZE


def build_container(settings: Any, *, store: Optional[DocumentStore] = None) -> Container:
    """Wire services for ``settings``; ``store`` overrides the configured backend."""

    store = store if store is not None else build_store(settings)
    documents = DocumentService(store)

    employee_repo = EmployeeRepository(documents)
    attendance_repo = AttendanceRepository(documents)
    holiday_repo = HolidayRepository(documents)
    leave_repo = LeaveRepository(documents)
    payroll_repo = PayrollRepository(documents)
    payroll_settings_repo = PayrollSettingsRepository(documents)

    payroll_service = PayrollService(
        employee_repo,
        attendance_repo,
        holiday_repo,
        leave_repo,
        payroll_repo,
        payroll_settings_repo,
        calculator=StandardPayrollCalculator(),
    )

    return Container(
        store=store,
        document_service=documents,
        employee_repo=employee_repo,
        attendance_repo=attendance_repo,
        holiday_repo=holiday_repo,
        leave_repo=leave_repo,
        payroll_repo=payroll_repo,
        payroll_settings_repo=payroll_settings_repo,
        attendance_service=AttendanceService(attendance_repo, holiday_repo, leave_repo),
        payroll_service=payroll_service,
        workflow_service=WorkflowService(documents),
        report_service=ReportService(documents),
        default_page_size=int(getattr(settings, "DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)),
    )
