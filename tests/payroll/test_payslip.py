from src.hr_portal.hr_portal.core.enums import PayrollStatus
from src.hr_portal.hr_portal.payroll.model import PayrollBreakdown, PayrollRecord
from src.hr_portal.hr_portal.payroll.payslip import format_currency, render_payslip


def test_format_currency():
    assert format_currency(42000) == "₹42,000.00"
    assert format_currency(None) == "₹0.00"
    assert format_currency("n/a") == "₹0.00"


def test_payslip_shows_employee_and_totals():
    record = PayrollRecord(
        id="p1",
        employee_id="EMP001",
        month=3,
        year=2025,
        breakdown=PayrollBreakdown(basic_salary=30000, hra=12000, gross_pay=42000, pf_employee=3600, total_deductions=3600, net_pay=38400),
        employee={"firstName": "Asha", "lastName": "Rao", "department": "Engineering"},
        status=PayrollStatus.APPROVED,
    )

    html = render_payslip(record, company_name="Acme <HR>")

    assert "Asha Rao" in html
    assert "March 2025" in html
    assert "₹42,000.00" in html
    assert "₹38,400.00" in html
    assert "Provident Fund" in html
    assert "Acme &lt;HR&gt;" in html
