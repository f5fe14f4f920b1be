from src.hr_portal.hr_portal.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.hr_portal.hr_portal.payroll.model import PayrollRequest, PayrollSettings
from src.hr_portal.hr_portal.payroll.period import WorkSummary


def _calculate(basic=30000.0, *, pf=True, esi=True, summary=None, settings=None, **amounts):
    request = PayrollRequest(employee_id="EMP001", month=3, year=2025, **amounts)
    return StandardPayrollCalculator().calculate(
        basic_salary=basic,
        summary=summary or WorkSummary(),
        request=request,
        settings=settings or PayrollSettings(),
        pf_applicable=pf,
        esi_applicable=esi,
    )


def test_default_rates_on_basic_30000():
    b = _calculate()

    assert b.hra == 12000
    assert b.pf_employee == 3600
    assert b.gross_pay == 42000
    # ESI is taken on basic + HRA + special allowance.
    assert b.esi_employee == 315
    assert b.pt == 200
    assert b.total_deductions == 4115
    assert b.net_pay == 37885


def test_employer_contributions_do_not_touch_net_pay():
    b = _calculate()

    assert (b.eps, b.epf, b.edli, b.admin_charges) == (2499, 1101, 150, 150)
    assert b.esi_employer == 1365
    assert b.employer_cost == 42000 + 2499 + 1101 + 150 + 150 + 1365
    assert b.net_pay == b.gross_pay - b.total_deductions


def test_pf_and_esi_can_be_switched_off():
    b = _calculate(pf=False, esi=False)

    assert b.pf_employee == 0
    assert b.esi_employee == 0
    assert b.eps == b.epf == b.edli == b.admin_charges == b.esi_employer == 0
    assert b.total_deductions == 200


def test_overtime_and_manual_amounts():
    b = _calculate(
        summary=WorkSummary(working_days=21, payable_days=21, ot_hours=5),
        overtime_rate=200,
        bonuses=1000,
        allowances=500,
        arrears=250,
        deductions=100,
        tax_deductions=300,
        salary_advance=1000,
        other_deductions=50,
    )

    assert b.overtime_pay == 1000
    assert b.gross_pay == 42000 + 1000 + 1000 + 500 + 250
    assert b.total_deductions == 3600 + 315 + 200 + 100 + 300 + 1000 + 50
    assert b.net_pay == round(b.gross_pay - b.total_deductions, 2)


def test_settings_are_injected():
    settings = PayrollSettings(hra_percent=50, da_percent=10, special_allowance_percent=5, pt_amount=0)

    b = _calculate(settings=settings, esi=False)

    assert (b.hra, b.da, b.special_allowance) == (15000, 3000, 1500)
    assert b.gross_pay == 49500
    assert b.total_deductions == 3600
