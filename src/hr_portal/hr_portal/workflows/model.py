from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Type

from ..core import constants as c
from ..core.enums import (
    AssetStatus,
    ExitStatus,
    ExpenseStatus,
    LeaveStatus,
    PayrollStatus,
    RequestStatus,
    TrackingConsentStatus,
    TrainingStatus,
)
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class WorkflowDefinition:
    """Status lifecycle of one kind of record.

    ``transitions`` maps every status to the statuses it may move to. A
    status with no outgoing transitions is terminal.
    """

    kind: str
    collection: str
    status_type: Type[Enum]
    initial: str
    transitions: Mapping[str, frozenset[str]]
    # Set when new records must come from a dedicated endpoint instead of submit.
    created_via: Optional[str] = None
    required_fields: tuple[str, ...] = ()
    text_fields: tuple[str, ...] = ()
    exact_fields: tuple[str, ...] = ("status",)
    range_fields: tuple[str, ...] = ()

    @property
    def statuses(self) -> frozenset[str]:
        return frozenset(s.value for s in self.status_type)  # type: ignore[attr-defined]

    def is_terminal(self, status: str) -> bool:
        return not self.transitions.get(status)

    def check_transition(self, current: str, target: str) -> None:
        if target not in self.statuses:
            raise ValidationError(f"Unknown {self.kind} status: {target!r}")
        if current not in self.statuses:
            raise ValidationError(f"{self.kind} has unknown current status {current!r}")
        if self.is_terminal(current):
            raise ValidationError(f"{self.kind} is already {current} and cannot change")
        if target not in self.transitions[current]:
            raise ValidationError(f"Cannot move {self.kind} from {current} to {target}")


def _t(mapping: Mapping[Enum, tuple]) -> dict[str, frozenset[str]]:
    return {k.value: frozenset(v.value for v in targets) for k, targets in mapping.items()}  # type: ignore[attr-defined]


LEAVE = WorkflowDefinition(
    kind="leave",
    collection=c.LEAVES,
    status_type=LeaveStatus,
    initial=LeaveStatus.PENDING.value,
    transitions=_t(
        {
            LeaveStatus.PENDING: (LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED),
            LeaveStatus.APPROVED: (),
            LeaveStatus.REJECTED: (),
            LeaveStatus.CANCELLED: (),
        }
    ),
    required_fields=("employeeId", "type", "startDate", "endDate"),
    text_fields=("employeeName", "reason", "type"),
    exact_fields=("status", "type", "employeeId"),
    range_fields=("startDate",),
)

REQUEST = WorkflowDefinition(
    kind="request",
    collection=c.REQUESTS,
    status_type=RequestStatus,
    initial=RequestStatus.PENDING.value,
    transitions=_t(
        {
            RequestStatus.PENDING: (RequestStatus.APPROVED, RequestStatus.REJECTED, RequestStatus.CANCELLED),
            RequestStatus.APPROVED: (),
            RequestStatus.REJECTED: (),
            RequestStatus.CANCELLED: (),
        }
    ),
    required_fields=("employeeId", "type", "subject"),
    text_fields=("employeeName", "subject", "description"),
    exact_fields=("status", "type", "priority", "employeeId"),
)

EXPENSE = WorkflowDefinition(
    kind="expense",
    collection=c.EXPENSES,
    status_type=ExpenseStatus,
    initial=ExpenseStatus.PENDING.value,
    transitions=_t(
        {
            ExpenseStatus.PENDING: (ExpenseStatus.APPROVED, ExpenseStatus.REJECTED),
            ExpenseStatus.APPROVED: (ExpenseStatus.REIMBURSED,),
            ExpenseStatus.REJECTED: (),
            ExpenseStatus.REIMBURSED: (),
        }
    ),
    required_fields=("employeeId", "category", "amount", "date"),
    text_fields=("employeeName", "description", "category"),
    exact_fields=("status", "category", "employeeId"),
    range_fields=("date", "amount"),
)

EXIT = WorkflowDefinition(
    kind="exit",
    collection=c.EXIT_PROCESSES,
    status_type=ExitStatus,
    initial=ExitStatus.INITIATED.value,
    transitions=_t(
        {
            ExitStatus.INITIATED: (ExitStatus.IN_PROGRESS, ExitStatus.CANCELLED),
            ExitStatus.IN_PROGRESS: (ExitStatus.COMPLETED, ExitStatus.CANCELLED),
            ExitStatus.COMPLETED: (),
            ExitStatus.CANCELLED: (),
        }
    ),
    required_fields=("employeeId", "exitType", "lastWorkingDay"),
    text_fields=("employeeName", "reason"),
    exact_fields=("status", "exitType"),
    range_fields=("lastWorkingDay",),
)

ASSET = WorkflowDefinition(
    kind="asset",
    collection=c.ASSETS,
    status_type=AssetStatus,
    initial=AssetStatus.AVAILABLE.value,
    transitions=_t(
        {
            AssetStatus.AVAILABLE: (AssetStatus.ASSIGNED, AssetStatus.MAINTENANCE, AssetStatus.RETIRED),
            AssetStatus.ASSIGNED: (AssetStatus.AVAILABLE, AssetStatus.MAINTENANCE, AssetStatus.RETIRED),
            AssetStatus.MAINTENANCE: (AssetStatus.AVAILABLE, AssetStatus.ASSIGNED, AssetStatus.RETIRED),
            AssetStatus.RETIRED: (),
        }
    ),
    required_fields=("name", "category"),
    text_fields=("name", "serialNumber", "assignedToName"),
    exact_fields=("status", "category"),
    range_fields=("purchaseDate", "value"),
)

TRAINING = WorkflowDefinition(
    kind="training",
    collection=c.TRAININGS,
    status_type=TrainingStatus,
    initial=TrainingStatus.SCHEDULED.value,
    transitions=_t(
        {
            TrainingStatus.SCHEDULED: (TrainingStatus.IN_PROGRESS, TrainingStatus.CANCELLED),
            TrainingStatus.IN_PROGRESS: (TrainingStatus.COMPLETED, TrainingStatus.CANCELLED),
            TrainingStatus.COMPLETED: (),
            TrainingStatus.CANCELLED: (),
        }
    ),
    required_fields=("title", "startDate"),
    text_fields=("title", "description", "instructorName"),
    exact_fields=("status", "category"),
    range_fields=("startDate",),
)

PAYROLL = WorkflowDefinition(
    kind="payroll",
    collection=c.PAYROLL,
    status_type=PayrollStatus,
    initial=PayrollStatus.DRAFT.value,
    transitions=_t(
        {
            PayrollStatus.DRAFT: (PayrollStatus.PENDING,),
            PayrollStatus.PENDING: (PayrollStatus.APPROVED, PayrollStatus.REJECTED),
            PayrollStatus.APPROVED: (PayrollStatus.PAID,),
            PayrollStatus.REJECTED: (PayrollStatus.DRAFT,),
            PayrollStatus.PAID: (),
        }
    ),
    created_via="/api/payroll/generate",
    text_fields=("employee.firstName", "employee.lastName", "employee.employeeId"),
    exact_fields=("status", "employeeId"),
    range_fields=("netPay",),
)

TRACKING_CONSENT = WorkflowDefinition(
    kind="tracking-consent",
    collection=c.USER_TRACKING_CONSENT,
    status_type=TrackingConsentStatus,
    initial=TrackingConsentStatus.GRANTED.value,
    transitions=_t(
        {
            TrackingConsentStatus.GRANTED: (TrackingConsentStatus.PAUSED, TrackingConsentStatus.REVOKED),
            TrackingConsentStatus.PAUSED: (TrackingConsentStatus.GRANTED, TrackingConsentStatus.REVOKED),
            TrackingConsentStatus.REVOKED: (),
        }
    ),
    required_fields=("userId",),
    exact_fields=("status", "userId"),
)

DEFINITIONS: dict[str, WorkflowDefinition] = {
    d.kind: d for d in (LEAVE, REQUEST, EXPENSE, EXIT, ASSET, TRAINING, PAYROLL, TRACKING_CONSENT)
}


def get_definition(kind: str) -> WorkflowDefinition:
    try:
        return DEFINITIONS[str(kind)]
    except KeyError:
        raise ValidationError(f"Unknown workflow: {kind!r}")
