from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import MONEY_QUANT
from ..model import PayrollBreakdown
from ..rates import RateConfiguration
from .base import PayrollCalculator


def _money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_QUANT, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: tax and insurance as a percentage of base, flat bonus per full day.

    Each deduction is rounded to cents before summing so the stored values
    satisfy ``net = base - deductions + bonuses`` exactly.
    """

    def compute(self, base_salary: Decimal, qualifying_days: int, rates: RateConfiguration) -> PayrollBreakdown:
        tax = _money(base_salary * rates.tax_rate_percent / 100)
        insurance = _money(base_salary * rates.insurance_rate_percent / 100)
        deductions = tax + insurance
        bonuses = _money(Decimal(int(qualifying_days)) * rates.bonus_per_day)
        return PayrollBreakdown(
            deductions=deductions,
            bonuses=bonuses,
            net_salary=self.net_salary(base_salary, deductions, bonuses),
        )
