from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.aggregator import AttendanceAggregator
from ..common.validators import require_id, require_money, require_month, require_year
from ..core.exceptions import DuplicatePeriodError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollBreakdown, PayrollRecord, Period
from .rates import RateConfiguration
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


class PayrollLedger:
    """Owns persisted payroll lines.

    Invariants enforced on every write:
    - at most one record per (employee_id, month, year);
    - net_salary is recomputed from base/deductions/bonuses, never taken from input.

    Every mutating operation fetches the authoritative row, mutates a copy and
    persists it within the same call.
    """

    def __init__(
        self,
        payrolls: PayrollRepository,
        employees: EmployeeRepository,
        aggregator: AttendanceAggregator,
        *,
        calculator: Optional[PayrollCalculator] = None,
        rates: Optional[RateConfiguration] = None,
    ):
        self._payrolls = payrolls
        self._employees = employees
        self._aggregator = aggregator
        self._calculator = calculator or StandardPayrollCalculator()
        self._rates = rates or RateConfiguration()

    @property
    def rates(self) -> RateConfiguration:
        return self._rates

    def update_rates(self, rates: RateConfiguration) -> None:
        """Use ``rates`` for every computation from now on; stored lines are untouched."""

        logger.info("Payroll rates changed from %s to %s", self._rates, rates)
        self._rates = rates

    def new_draft(self, month: int, year: int) -> PayrollRecord:
        """Transient record for a manual entry, prefilled with the selected period."""

        return PayrollRecord(
            employee_id=0,
            month=require_month(month),
            year=require_year(year),
            base_salary=Decimal("0"),
        )

    def preview(self, employee_id: int, year: int, month: int) -> PayrollBreakdown:
        """What ``calculate`` would store for the period, without persisting anything."""

        employee = self._require_employee(require_id(employee_id, "employee_id"))
        return self._compute(employee, require_year(year), require_month(month))

    def calculate(self, employee_id: int, year: int, month: int) -> PayrollRecord:
        employee_id = require_id(employee_id, "employee_id")
        year = require_year(year)
        month = require_month(month)

        self._ensure_period_free(employee_id=employee_id, month=month, year=year)
        employee = self._require_employee(employee_id)
        breakdown = self._compute(employee, year, month)

        record = PayrollRecord(
            employee_id=employee_id,
            month=month,
            year=year,
            base_salary=employee.base_salary,
            deductions=breakdown.deductions,
            bonuses=breakdown.bonuses,
            net_salary=breakdown.net_salary,
        )
        payroll_id = self._payrolls.add(record)
        logger.info(
            "Payroll #%s calculated for employee #%s (%s): net %s",
            payroll_id,
            employee_id,
            record.period,
            record.net_salary,
        )
        return replace(record, payroll_id=payroll_id)

    def recalculate(self, payroll_id: int) -> PayrollRecord:
        """Refresh an existing line from the employee's current salary and attendance.

        Identity and period never change here, so no duplicate check is needed.
        """

        current = self._require_payroll(payroll_id)
        employee = self._require_employee(current.employee_id)
        breakdown = self._compute(employee, current.year, current.month)

        updated = replace(
            current,
            base_salary=employee.base_salary,
            deductions=breakdown.deductions,
            bonuses=breakdown.bonuses,
            net_salary=breakdown.net_salary,
        )
        self._persist_update(updated)
        logger.info("Payroll #%s recalculated: net %s", updated.payroll_id, updated.net_salary)
        return updated

    def save(self, record: PayrollRecord) -> PayrollRecord:
        """Create or update a manually entered line.

        Money fields are taken as given except ``net_salary``, which is always
        recomputed.
        """

        employee_id = require_id(record.employee_id, "employee_id")
        month = require_month(record.month)
        year = require_year(record.year)
        base_salary = require_money(record.base_salary, "base_salary")
        deductions = require_money(record.deductions, "deductions")
        bonuses = require_money(record.bonuses, "bonuses")
        net_salary = self._calculator.net_salary(base_salary, deductions, bonuses)

        if record.is_transient:
            self._ensure_period_free(employee_id=employee_id, month=month, year=year)
            self._require_employee(employee_id)
            created = PayrollRecord(
                employee_id=employee_id,
                month=month,
                year=year,
                base_salary=base_salary,
                deductions=deductions,
                bonuses=bonuses,
                net_salary=net_salary,
            )
            payroll_id = self._payrolls.add(created)
            logger.info("Payroll #%s saved for employee #%s (%s)", payroll_id, employee_id, created.period)
            return replace(created, payroll_id=payroll_id)

        current = self._require_payroll(record.payroll_id)
        if (employee_id, month, year) != (current.employee_id, current.month, current.year):
            self._ensure_period_free(
                employee_id=employee_id,
                month=month,
                year=year,
                ignore_id=current.payroll_id,
            )
            self._require_employee(employee_id)

        updated = replace(
            current,
            employee_id=employee_id,
            month=month,
            year=year,
            base_salary=base_salary,
            deductions=deductions,
            bonuses=bonuses,
            net_salary=net_salary,
        )
        self._persist_update(updated)
        logger.info("Payroll #%s updated: net %s", updated.payroll_id, updated.net_salary)
        return updated

    def delete(self, payroll_id: int) -> None:
        payroll_id = require_id(payroll_id, "payroll_id")
        if not self._payrolls.delete_by_id(payroll_id):
            raise NotFoundError("Payroll", payroll_id)
        logger.info("Payroll #%s deleted", payroll_id)

    def list(self, period: Optional[Period] = None) -> Sequence[PayrollRecord]:
        """All lines, or one period's lines, most recent period first."""

        if period is not None:
            period = Period(month=require_month(period.month), year=require_year(period.year))
        records = self._payrolls.list_all(period=period)
        # Stable sort: the store's tie order (if any) is kept within a period.
        return sorted(records, key=lambda r: (r.year, r.month), reverse=True)

    def _compute(self, employee: Employee, year: int, month: int) -> PayrollBreakdown:
        days = self._aggregator.qualifying_days(employee.employee_id, year, month)
        return self._calculator.compute(employee.base_salary, days, self._rates)

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee", employee_id)
        return employee

    def _require_payroll(self, payroll_id: Optional[int]) -> PayrollRecord:
        payroll_id = require_id(payroll_id, "payroll_id")
        record = self._payrolls.get_by_id(payroll_id)
        if not record:
            raise NotFoundError("Payroll", payroll_id)
        return record

    def _ensure_period_free(self, *, employee_id: int, month: int, year: int, ignore_id: Optional[int] = None) -> None:
        existing = self._payrolls.find_for_period(employee_id=employee_id, month=month, year=year)
        if existing and existing.payroll_id != ignore_id:
            logger.warning(
                "Rejected duplicate payroll for employee #%s (%02d/%s): #%s exists",
                employee_id,
                month,
                year,
                existing.payroll_id,
            )
            raise DuplicatePeriodError(employee_id, month, year)

    def _persist_update(self, record: PayrollRecord) -> None:
        # False means the row vanished between fetch and write.
        if not self._payrolls.update(record):
            raise NotFoundError("Payroll", record.payroll_id)
