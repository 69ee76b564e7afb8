from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one day of attendance for an employee."""

    attendance_id: int
    employee_id: int
    work_date: date
    hours_worked: float
