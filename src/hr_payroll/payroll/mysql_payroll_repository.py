from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal
from .model import PayrollRecord, Period
from .repository import PayrollRepository

_COLUMNS = "payroll_id, employee_id, month, year, base_salary, deductions, bonuses, net_salary"


def _row_to_record(r: Dict[str, Any]) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        base_salary=to_decimal(r["base_salary"]),
        deductions=to_decimal(r["deductions"]),
        bonuses=to_decimal(r["bonuses"]),
        net_salary=to_decimal(r["net_salary"]),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payrolls WHERE payroll_id=%s", (int(payroll_id),))
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def find_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payrolls
                WHERE employee_id=%s AND month=%s AND year=%s
                """,
                (int(employee_id), int(month), int(year)),
            )
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def list_all(self, *, period: Optional[Period] = None) -> Sequence[PayrollRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if period is not None:
            clauses.append("month=%s AND year=%s")
            params.extend([int(period.month), int(period.year)])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payrolls
                {where}
                ORDER BY year DESC, month DESC, payroll_id ASC
                """,
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def add(self, record: PayrollRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payrolls(employee_id, month, year, base_salary, deductions, bonuses, net_salary)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.employee_id,
                    record.month,
                    record.year,
                    record.base_salary,
                    record.deductions,
                    record.bonuses,
                    record.net_salary,
                ),
            )
            return int(cur.lastrowid)

    def update(self, record: PayrollRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payrolls
                SET employee_id=%s, month=%s, year=%s,
                    base_salary=%s, deductions=%s, bonuses=%s, net_salary=%s
                WHERE payroll_id=%s
                """,
                (
                    record.employee_id,
                    record.month,
                    record.year,
                    record.base_salary,
                    record.deductions,
                    record.bonuses,
                    record.net_salary,
                    int(record.payroll_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, payroll_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payrolls WHERE payroll_id=%s", (int(payroll_id),))
            return cur.rowcount > 0
