from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import Employee
from .repository import EmployeeRepository


def _row_to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        full_name=f"{row['first_name']} {row['last_name']}".strip(),
        base_salary=to_decimal(row["salary"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, first_name, last_name, salary
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_many(self, employee_ids: Iterable[int]) -> Dict[int, Employee]:
        ids = sorted({int(i) for i in employee_ids})
        if not ids:
            return {}

        placeholders = ", ".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, first_name, last_name, salary
                FROM employees
                WHERE employee_id IN ({placeholders})
                """,
                tuple(ids),
            )
            employees = [_row_to_employee(r) for r in fetchall(cur)]
        return {e.employee_id: e for e in employees}
