from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Lookup-only interface; payroll never mutates employees."""

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_many(self, employee_ids: Iterable[int]) -> Dict[int, Employee]:
        """Employees keyed by id; ids with no employee are left out."""
        raise NotImplementedError
