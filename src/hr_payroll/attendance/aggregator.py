from __future__ import annotations

from ..core.constants import QUALIFYING_HOURS
from .repository import AttendanceRepository


class AttendanceAggregator:
    """Counts bonus-qualifying attendance days for an employee and month."""

    def __init__(self, attendance: AttendanceRepository, *, qualifying_hours: float = QUALIFYING_HOURS):
        self._attendance = attendance
        self._qualifying_hours = qualifying_hours

    def qualifying_days(self, employee_id: int, year: int, month: int) -> int:
        employee_id, year, month = int(employee_id), int(year), int(month)
        rows = self._attendance.list_for_period(employee_id, year, month)
        # Stores may over-fetch; only the exact employee and month count.
        return sum(
            1
            for r in rows
            if r.employee_id == employee_id
            and r.work_date.year == year
            and r.work_date.month == month
            and r.hours_worked >= self._qualifying_hours
        )
