from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Period:
    """One payroll cycle."""

    month: int
    year: int

    def __str__(self) -> str:
        return f"{self.month:02d}/{self.year}"


@dataclass(frozen=True)
class PayrollBreakdown:
    deductions: Decimal
    bonuses: Decimal
    net_salary: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    """Domain entity: one payroll line for an employee and period.

    ``payroll_id`` is None (or 0) until the store assigns one.
    """

    employee_id: int
    month: int
    year: int
    base_salary: Decimal
    deductions: Decimal = Decimal("0")
    bonuses: Decimal = Decimal("0")
    net_salary: Decimal = Decimal("0")
    payroll_id: Optional[int] = None

    @property
    def is_transient(self) -> bool:
        return not self.payroll_id

    @property
    def period(self) -> Period:
        return Period(month=self.month, year=self.year)
