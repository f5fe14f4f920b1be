from __future__ import annotations

from .base import PayrollCalculator
from ..model import PayrollBreakdown, PayrollRequest, PayrollSettings
from ..period import WorkSummary


def _pct(percent: float, amount: float) -> float:
    return round(amount * percent / 100.0, 2)


def _money(value: float) -> float:
    return round(value, 2)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: percentage components on basic, statutory deductions, net = gross - deductions.

    ESI is always computed on basic + HRA + special allowance.
    """

    def calculate(
        self,
        *,
        basic_salary: float,
        summary: WorkSummary,
        request: PayrollRequest,
        settings: PayrollSettings,
        pf_applicable: bool,
        esi_applicable: bool,
    ) -> PayrollBreakdown:
        basic = _money(basic_salary)

        da = _pct(settings.da_percent, basic)
        hra = _pct(settings.hra_percent, basic)
        special = _pct(settings.special_allowance_percent, basic)
        overtime_pay = _money(summary.ot_hours * request.overtime_rate)
        bonuses = _money(request.bonuses)
        allowances = _money(request.allowances)
        arrears = _money(request.arrears)
        gross = _money(basic + da + hra + special + overtime_pay + bonuses + allowances + arrears)

        esi_base = basic + hra + special
        pf_employee = _pct(settings.pf_percent, basic) if pf_applicable else 0.0
        esi_employee = _pct(settings.esi_employee_percent, esi_base) if esi_applicable else 0.0
        pt = _money(settings.pt_amount)
        manual = [
            _money(request.deductions),
            _money(request.tax_deductions),
            _money(request.salary_advance),
            _money(request.other_deductions),
        ]
        total_deductions = _money(pf_employee + esi_employee + pt + sum(manual))
        net = _money(gross - total_deductions)

        eps = _pct(settings.eps_percent, basic) if pf_applicable else 0.0
        epf = _pct(settings.epf_percent, basic) if pf_applicable else 0.0
        edli = _pct(settings.edli_percent, basic) if pf_applicable else 0.0
        admin = _pct(settings.admin_charges_percent, basic) if pf_applicable else 0.0
        esi_employer = _pct(settings.esi_employer_percent, esi_base) if esi_applicable else 0.0

        return PayrollBreakdown(
            basic_salary=basic,
            da=da,
            hra=hra,
            special_allowance=special,
            overtime_pay=overtime_pay,
            bonuses=bonuses,
            allowances=allowances,
            arrears=arrears,
            gross_pay=gross,
            pf_employee=pf_employee,
            esi_employee=esi_employee,
            pt=pt,
            deductions=manual[0],
            tax_deductions=manual[1],
            salary_advance=manual[2],
            other_deductions=manual[3],
            total_deductions=total_deductions,
            net_pay=net,
            eps=eps,
            epf=epf,
            edli=edli,
            admin_charges=admin,
            esi_employer=esi_employer,
            employer_cost=_money(gross + eps + epf + edli + admin + esi_employer),
        )
