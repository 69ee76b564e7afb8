from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Employee:
    """Read-only view of an employee, owned by the employee-management side.

    Only what payroll needs: identity, display name and base salary.
    """

    employee_id: int
    full_name: str
    base_salary: Decimal
