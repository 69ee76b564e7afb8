from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_period(self, employee_id: int, year: int, month: int) -> Sequence[AttendanceRecord]:
        """All records of the employee dated within the given month."""

        raise NotImplementedError
