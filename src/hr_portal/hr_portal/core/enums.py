from __future__ import annotations

from enum import Enum


class FilterOperator(str, Enum):
    """Comparison operators understood by every document store backend."""

    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    IN = "in"
    NOT_IN = "not-in"
    ARRAY_CONTAINS = "array-contains"
    ARRAY_CONTAINS_ANY = "array-contains-any"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class WriteType(str, Enum):
    """Kinds of operation accepted in a batch write."""

    SET = "set"
    UPDATE = "update"
    DELETE = "delete"


class AttendanceStatus(str, Enum):
    """Attendance status as stored on the attendance document."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"
    LEAVE = "leave"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"
    REJECTED = "rejected"


class RequestStatus(str, Enum):
    """Generic employee request portal (documents, equipment, ...)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class ExpenseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REIMBURSED = "reimbursed"


class ExitStatus(str, Enum):
    INITIATED = "initiated"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AssetStatus(str, Enum):
    AVAILABLE = "available"
    ASSIGNED = "assigned"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


class TrainingStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InstructorStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class TrackingConsentStatus(str, Enum):
    GRANTED = "granted"
    PAUSED = "paused"
    REVOKED = "revoked"
