from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import PayrollBreakdown
from ..rates import RateConfiguration


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(self, base_salary: Decimal, qualifying_days: int, rates: RateConfiguration) -> PayrollBreakdown:
        raise NotImplementedError

    @staticmethod
    def net_salary(base_salary: Decimal, deductions: Decimal, bonuses: Decimal) -> Decimal:
        return base_salary - deductions + bonuses
