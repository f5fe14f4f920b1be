from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .model import PayrollRecord

TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_currency(value, symbol: str = "₹") -> str:
    try:
        amount = float(value or 0)
    except (TypeError, ValueError):
        amount = 0.0
    return f"{symbol}{amount:,.2f}"


def _environment(template_dir: Optional[Path] = None) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    env.filters["currency"] = format_currency
    return env


def render_payslip(record: PayrollRecord, *, company_name: str = "HR Portal", template_dir: Optional[Path] = None) -> str:
    """Render one payroll record as a standalone HTML payslip."""

    b = record.breakdown
    earnings = [
        ("Basic Salary", b.basic_salary),
        ("Dearness Allowance", b.da),
        ("House Rent Allowance", b.hra),
        ("Special Allowance", b.special_allowance),
        ("Overtime Pay", b.overtime_pay),
        ("Bonuses", b.bonuses),
        ("Allowances", b.allowances),
        ("Arrears", b.arrears),
    ]
    deductions = [
        ("Provident Fund", b.pf_employee),
        ("ESI", b.esi_employee),
        ("Professional Tax", b.pt),
        ("Deductions", b.deductions),
        ("Tax Deductions", b.tax_deductions),
        ("Salary Advance", b.salary_advance),
        ("Other Deductions", b.other_deductions),
    ]
    employer = [
        ("EPS", b.eps),
        ("EPF", b.epf),
        ("EDLI", b.edli),
        ("Admin Charges", b.admin_charges),
        ("ESI (Employer)", b.esi_employer),
    ]

    template = _environment(template_dir).get_template("payslip.html")
    return template.render(
        company_name=company_name,
        record=record,
        period=f"{MONTH_NAMES[record.month - 1]} {record.year}",
        employee_name=record.employee_name,
        earnings=[row for row in earnings if row[1]],
        deductions=[row for row in deductions if row[1]],
        employer=[row for row in employer if row[1]],
        breakdown=b,
    )
