from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Any, Callable, Iterable, Mapping

from ..common.datetime_utils import coerce_date, format_iso_date
from ..core import constants as c
from ..core.exceptions import ValidationError
from ..documents.query import lookup

Getter = Callable[[Mapping[str, Any]], Any]


def _first(doc: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = lookup(doc, key)
        if value not in (None, ""):
            return value
    return None


def text(*keys: str) -> Getter:
    def get(doc):
        value = _first(doc, keys)
        if value is None:
            return ""
        # Keep one record per line.
        return " ".join(str(value).split())

    return get


def money(*keys: str) -> Getter:
    def get(doc):
        value = _first(doc, keys)
        try:
            return f"{float(value or 0):.2f}"
        except (TypeError, ValueError):
            return ""

    return get


def number(*keys: str) -> Getter:
    def get(doc):
        value = _first(doc, keys)
        if value is None or isinstance(value, bool):
            return ""
        try:
            return f"{float(value):g}"
        except (TypeError, ValueError):
            return ""

    return get


def iso_date(*keys: str) -> Getter:
    def get(doc):
        value = _first(doc, keys)
        if isinstance(value, (date, datetime, str)):
            try:
                return format_iso_date(coerce_date(value))
            except ValueError:
                return str(value)
        return ""

    return get


def active_flag(key: str, fallback: str = "status") -> Getter:
    def get(doc):
        value = lookup(doc, key)
        if isinstance(value, bool):
            return "Active" if value else "Inactive"
        status = lookup(doc, fallback)
        return str(status).capitalize() if status else ""

    return get


def person(name_key: str = "employeeName") -> Getter:
    def get(doc):
        name = _first(doc, (name_key,))
        if name:
            return str(name)
        for prefix in ("", "employee."):
            full = f"{lookup(doc, prefix + 'firstName') or ''} {lookup(doc, prefix + 'lastName') or ''}".strip()
            if full:
                return full
        return ""

    return get


REPORTS: dict[str, list[tuple[str, Getter]]] = {
    "employees": [
        ("ID", text("employeeId", "id")),
        ("Name", person("name")),
        ("Email", text("email")),
        ("Department", text("department")),
        ("Position", text("position")),
        ("Hire Date", iso_date("joinDate", "hireDate")),
        ("Status", active_flag("isActive")),
    ],
    "attendance": [
        ("ID", text("id")),
        ("Employee", person()),
        ("Date", iso_date("date")),
        ("Clock In", text("clockIn")),
        ("Clock Out", text("clockOut")),
        ("Total Hours", number("totalHours")),
        ("Status", text("status")),
    ],
    "payroll": [
        ("ID", text("id")),
        ("Employee", person()),
        ("Month", text("month")),
        ("Year", text("year")),
        ("Basic Salary", money("basicSalary")),
        ("Allowances", money("allowances")),
        ("Deductions", money("totalDeductions", "deductions")),
        ("Gross Salary", money("grossPay", "grossSalary")),
        ("Net Salary", money("netPay", "netSalary")),
    ],
    "leaves": [
        ("ID", text("id")),
        ("Employee", person()),
        ("Type", text("type")),
        ("Start Date", iso_date("startDate")),
        ("End Date", iso_date("endDate")),
        ("Days", number("days")),
        ("Reason", text("reason")),
        ("Status", text("status")),
    ],
    "assets": [
        ("ID", text("id")),
        ("Name", text("name")),
        ("Type", text("category", "type")),
        ("Serial Number", text("serialNumber")),
        ("Assigned To", text("assignedToName", "assignedTo")),
        ("Purchase Date", iso_date("purchaseDate")),
        ("Cost", money("value", "cost")),
        ("Status", text("status")),
    ],
    "expenses": [
        ("ID", text("id")),
        ("Employee", person()),
        ("Type", text("category", "type")),
        ("Amount", money("amount")),
        ("Date", iso_date("date")),
        ("Description", text("description")),
        ("Status", text("status")),
    ],
    "holidays": [
        ("ID", text("id")),
        ("Name", text("name")),
        ("Date", iso_date("date")),
        ("Type", text("type")),
        ("Description", text("description")),
    ],
    "training": [
        ("ID", text("id")),
        ("Title", text("title")),
        ("Type", text("category", "type")),
        ("Instructor", text("instructorName", "instructor")),
        ("Start Date", iso_date("startDate")),
        ("End Date", iso_date("endDate")),
        ("Duration", text("duration")),
        ("Status", text("status")),
    ],
}

REPORT_COLLECTIONS = {
    "employees": c.EMPLOYEES,
    "attendance": c.ATTENDANCE,
    "payroll": c.PAYROLL,
    "leaves": c.LEAVES,
    "assets": c.ASSETS,
    "expenses": c.EXPENSES,
    "holidays": c.HOLIDAYS,
    "training": c.TRAININGS,
}


def headers(report: str) -> list[str]:
    return [name for name, _ in _columns(report)]


def _columns(report: str) -> list[tuple[str, Getter]]:
    try:
        return REPORTS[report]
    except KeyError:
        raise ValidationError(f"Unknown report: {report!r}")


def _as_mapping(record: Any) -> Mapping[str, Any]:
    if isinstance(record, Mapping):
        return record
    if hasattr(record, "to_dict"):
        return record.to_dict()
    raise ValidationError(f"Cannot export {type(record).__name__}")


def export_csv(report: str, records: Iterable[Any]) -> str:
    """Render records as CSV: one header line, then one line per record."""

    columns = _columns(report)
    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow([name for name, _ in columns])
    for record in records:
        doc = _as_mapping(record)
        writer.writerow([get(doc) for _, get in columns])
    return out.getvalue()
