from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from hr_payroll.attendance.aggregator import AttendanceAggregator
from hr_payroll.attendance.model import AttendanceRecord
from hr_payroll.employees.model import Employee
from hr_payroll.payroll.model import PayrollRecord, Period
from hr_payroll.payroll.service import PayrollLedger


class InMemoryEmployees:
    def __init__(self):
        self._by_id: dict[int, Employee] = {}
        self.batch_calls = 0

    def put(self, employee_id: int, base_salary: str, full_name: str = "") -> Employee:
        employee = Employee(
            employee_id=employee_id,
            full_name=full_name or f"Employee {employee_id}",
            base_salary=Decimal(base_salary),
        )
        self._by_id[employee_id] = employee
        return employee

    def remove(self, employee_id: int) -> None:
        self._by_id.pop(employee_id, None)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(employee_id)

    def get_many(self, employee_ids) -> dict[int, Employee]:
        self.batch_calls += 1
        return {i: self._by_id[i] for i in set(employee_ids) if i in self._by_id}


class InMemoryAttendance:
    def __init__(self):
        self._rows: list[AttendanceRecord] = []
        self.calls = 0

    def add(self, employee_id: int, work_date: date, hours_worked: float) -> None:
        self._rows.append(
            AttendanceRecord(
                attendance_id=len(self._rows) + 1,
                employee_id=employee_id,
                work_date=work_date,
                hours_worked=hours_worked,
            )
        )

    def add_full_days(self, employee_id: int, year: int, month: int, days: int, hours: float = 8.0) -> None:
        for day in range(1, days + 1):
            self.add(employee_id, date(year, month, day), hours)

    def list_for_period(self, employee_id: int, year: int, month: int):
        self.calls += 1
        return [
            r
            for r in self._rows
            if r.employee_id == employee_id and r.work_date.year == year and r.work_date.month == month
        ]


class InMemoryPayrolls:
    """Mimics the MySQL store, including its unique (employee, month, year) key."""

    def __init__(self):
        self._by_id: dict[int, PayrollRecord] = {}
        self._next_id = 1

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        return self._by_id.get(int(payroll_id))

    def find_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        for r in self._by_id.values():
            if (r.employee_id, r.month, r.year) == (employee_id, month, year):
                return r
        return None

    def list_all(self, *, period: Optional[Period] = None):
        rows = sorted(self._by_id.values(), key=lambda r: r.payroll_id)
        if period is not None:
            rows = [r for r in rows if r.month == period.month and r.year == period.year]
        return sorted(rows, key=lambda r: (r.year, r.month), reverse=True)

    def add(self, record: PayrollRecord) -> int:
        payroll_id = self._next_id
        self._next_id += 1
        self._by_id[payroll_id] = replace(record, payroll_id=payroll_id)
        return payroll_id

    def update(self, record: PayrollRecord) -> bool:
        if record.payroll_id not in self._by_id:
            return False
        self._by_id[record.payroll_id] = record
        return True

    def delete_by_id(self, payroll_id: int) -> bool:
        return self._by_id.pop(int(payroll_id), None) is not None


@pytest.fixture
def employees():
    return InMemoryEmployees()


@pytest.fixture
def attendance():
    return InMemoryAttendance()


@pytest.fixture
def payrolls():
    return InMemoryPayrolls()


@pytest.fixture
def ledger(payrolls, employees, attendance):
    return PayrollLedger(payrolls, employees, AttendanceAggregator(attendance))
