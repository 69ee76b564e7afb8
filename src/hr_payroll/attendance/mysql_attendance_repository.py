from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_period(self, employee_id: int, year: int, month: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, work_date, hours_worked
                FROM attendance_records
                WHERE employee_id=%s AND YEAR(work_date)=%s AND MONTH(work_date)=%s
                ORDER BY work_date ASC
                """,
                (int(employee_id), int(year), int(month)),
            )
            rows = fetchall(cur)
            return [
                AttendanceRecord(
                    attendance_id=int(r["attendance_id"]),
                    employee_id=int(r["employee_id"]),
                    work_date=r["work_date"],
                    hours_worked=float(r.get("hours_worked") or 0),
                )
                for r in rows
            ]
