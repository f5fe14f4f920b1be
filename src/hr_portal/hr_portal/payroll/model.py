from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from ..common.validators import require_month, require_non_empty, require_non_negative
from ..core.enums import PayrollStatus
from ..core.exceptions import ValidationError
from ..documents.record import as_bool, as_enum, as_float, as_int, as_str, required

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollSettings:
    """Percentage rates read from ``payrollSettings/percentages``.

    Every rate has a built-in default so a missing settings document (or a
    missing/garbled rate inside it) never leaves a value undefined.
    """

    pf_percent: float = 12.0
    eps_percent: float = 8.33
    epf_percent: float = 3.67
    edli_percent: float = 0.5
    admin_charges_percent: float = 0.5
    esi_employee_percent: float = 0.75
    esi_employer_percent: float = 3.25
    hra_percent: float = 40.0
    da_percent: float = 0.0
    special_allowance_percent: float = 0.0
    pt_amount: float = 200.0

    _DOC_KEYS = {
        "pf_percent": "pfPercent",
        "eps_percent": "epsPercent",
        "epf_percent": "epfPercent",
        "edli_percent": "edliPercent",
        "admin_charges_percent": "adminChargesPercent",
        "esi_employee_percent": "esiEmployeePercent",
        "esi_employer_percent": "esiEmployerPercent",
        "hra_percent": "hraPercent",
        "da_percent": "daPercent",
        "special_allowance_percent": "specialAllowancePercent",
        "pt_amount": "ptAmount",
    }

    @classmethod
    def from_document(cls, doc: Optional[Mapping[str, Any]]) -> "PayrollSettings":
        defaults = cls()
        if not doc:
            return defaults
        values: dict[str, float] = {}
        for attr, key in cls._DOC_KEYS.items():
            raw = doc.get(key)
            try:
                value = as_float(raw, getattr(defaults, attr))
            except ValidationError:
                logger.warning("Invalid payroll setting %s=%r, using default", key, raw)
                value = getattr(defaults, attr)
            values[attr] = value if value >= 0 else getattr(defaults, attr)
        return cls(**values)

    def to_document(self) -> dict:
        return {key: getattr(self, attr) for attr, key in self._DOC_KEYS.items()}

    @classmethod
    def from_input(cls, raw: Mapping[str, Any]) -> "PayrollSettings":
        """Strict variant for settings submitted by an administrator."""
        if not isinstance(raw, Mapping):
            raise ValidationError("Settings must be an object")
        defaults = cls()
        values = {}
        for attr, key in cls._DOC_KEYS.items():
            raw_value = raw.get(key, getattr(defaults, attr))
            values[attr] = require_non_negative(raw_value, key)
            if attr.endswith("_percent") and values[attr] > 100:
                raise ValidationError(f"{key} cannot exceed 100")
        return cls(**values)


@dataclass(frozen=True)
class PayrollRequest:
    """Inputs for one employee's payroll for one month."""

    employee_id: str
    month: int
    year: int
    overtime_rate: float = 0.0
    bonuses: float = 0.0
    allowances: float = 0.0
    arrears: float = 0.0
    deductions: float = 0.0
    tax_deductions: float = 0.0
    salary_advance: float = 0.0
    other_deductions: float = 0.0
    basic_salary: Optional[float] = None
    pf_applicable: Optional[bool] = None
    esi_applicable: Optional[bool] = None
    payment_method: str = "bank-transfer"

    _AMOUNTS = {
        "overtime_rate": "overtimeRate",
        "bonuses": "bonuses",
        "allowances": "allowances",
        "arrears": "arrears",
        "deductions": "deductions",
        "tax_deductions": "taxDeductions",
        "salary_advance": "salaryAdvance",
        "other_deductions": "otherDeductions",
    }

    @classmethod
    def from_input(cls, raw: Mapping[str, Any]) -> "PayrollRequest":
        if not isinstance(raw, Mapping):
            raise ValidationError("Payroll input must be an object")
        employee_id = require_non_empty(raw.get("employeeId") or "", "employeeId")
        month, year = require_month(raw.get("month"), raw.get("year"))
        amounts = {attr: require_non_negative(raw.get(key), key) for attr, key in cls._AMOUNTS.items()}

        basic = raw.get("basicSalary")
        basic_salary = require_non_negative(basic, "basicSalary") if basic not in (None, "") else None

        pf = raw.get("pfApplicable")
        esi = raw.get("esiApplicable")
        return cls(
            employee_id=employee_id,
            month=month,
            year=year,
            basic_salary=basic_salary,
            pf_applicable=as_bool(pf) if pf is not None else None,
            esi_applicable=as_bool(esi) if esi is not None else None,
            payment_method=as_str(raw.get("paymentMethod"), default="bank-transfer") or "bank-transfer",
            **amounts,
        )

    def validate(self) -> "PayrollRequest":
        require_non_empty(self.employee_id, "employeeId")
        require_month(self.month, self.year)
        for attr, key in self._AMOUNTS.items():
            require_non_negative(getattr(self, attr), key)
        if self.basic_salary is not None:
            require_non_negative(self.basic_salary, "basicSalary")
        return self


@dataclass(frozen=True)
class PayrollBreakdown:
    # Earnings
    basic_salary: float = 0.0
    da: float = 0.0
    hra: float = 0.0
    special_allowance: float = 0.0
    overtime_pay: float = 0.0
    bonuses: float = 0.0
    allowances: float = 0.0
    arrears: float = 0.0
    gross_pay: float = 0.0
    # Employee deductions
    pf_employee: float = 0.0
    esi_employee: float = 0.0
    pt: float = 0.0
    deductions: float = 0.0
    tax_deductions: float = 0.0
    salary_advance: float = 0.0
    other_deductions: float = 0.0
    total_deductions: float = 0.0
    net_pay: float = 0.0
    # Employer contributions (informational)
    eps: float = 0.0
    epf: float = 0.0
    edli: float = 0.0
    admin_charges: float = 0.0
    esi_employer: float = 0.0
    employer_cost: float = 0.0


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


_BREAKDOWN_KEYS = {f.name: _camel(f.name) for f in fields(PayrollBreakdown)}


@dataclass(frozen=True)
class PayrollRecord:
    """Domain entity: a payroll document from the ``payroll`` collection."""

    id: Optional[str]
    employee_id: str
    month: int
    year: int
    breakdown: PayrollBreakdown
    employee: dict = field(default_factory=dict)
    status: PayrollStatus = PayrollStatus.DRAFT
    payment_method: str = "bank-transfer"
    payable_days: int = 0
    working_days: int = 0
    ot_hours: float = 0.0
    overtime_rate: float = 0.0
    version: int = 0

    @property
    def employee_name(self) -> str:
        name = f"{self.employee.get('firstName', '')} {self.employee.get('lastName', '')}".strip()
        return name or str(self.employee.get("employeeName") or self.employee_id)

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "PayrollRecord":
        values = {attr: as_float(doc.get(key)) for attr, key in _BREAKDOWN_KEYS.items()}
        # Hand-entered records predate the gross/net split fields.
        if not doc.get("grossPay") and doc.get("grossSalary") is not None:
            values["gross_pay"] = as_float(doc.get("grossSalary"))
        if not doc.get("netPay") and doc.get("netSalary") is not None:
            values["net_pay"] = as_float(doc.get("netSalary"))
        employee = doc.get("employee") if isinstance(doc.get("employee"), Mapping) else {}
        if not employee and doc.get("employeeName"):
            employee = {"employeeName": doc.get("employeeName")}
        return cls(
            id=doc.get("id"),
            employee_id=as_str(required(doc, "employeeId")),
            month=as_int(required(doc, "month")),
            year=as_int(required(doc, "year")),
            breakdown=PayrollBreakdown(**values),
            employee=dict(employee),
            status=as_enum(PayrollStatus, doc.get("status"), default=PayrollStatus.DRAFT),
            payment_method=as_str(doc.get("paymentMethod"), default="bank-transfer"),
            payable_days=as_int(doc.get("payableDays")),
            working_days=as_int(doc.get("workingDays")),
            ot_hours=as_float(doc.get("otHours")),
            overtime_rate=as_float(doc.get("overtimeRate")),
            version=as_int(doc.get("version")),
        )

    def to_document(self) -> dict:
        doc = {key: getattr(self.breakdown, attr) for attr, key in _BREAKDOWN_KEYS.items()}
        doc.update(
            {
                "employeeId": self.employee_id,
                "employee": dict(self.employee),
                "month": self.month,
                "year": self.year,
                "status": self.status.value,
                "paymentMethod": self.payment_method,
                "payableDays": self.payable_days,
                "workingDays": self.working_days,
                "otHours": self.ot_hours,
                "overtimeRate": self.overtime_rate,
            }
        )
        return doc

    def to_dict(self) -> dict:
        out = self.to_document()
        out["id"] = self.id
        out["version"] = self.version
        return out
