from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import PayrollBreakdown, PayrollRequest, PayrollSettings
from ..period import WorkSummary


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
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
        raise NotImplementedError
