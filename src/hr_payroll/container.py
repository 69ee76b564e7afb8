from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.aggregator import AttendanceAggregator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.rates import RateConfiguration
from .payroll.service import PayrollLedger


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    payroll_ledger: PayrollLedger


def build_container(*, db_config: dict, rates: Optional[RateConfiguration] = None) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    payrolls_repo = MySQLPayrollRepository(conn)

    payroll_ledger = PayrollLedger(
        payrolls_repo,
        employees_repo,
        AttendanceAggregator(attendance_repo),
        rates=rates,
    )

    return Container(
        employees_repo=employees_repo,
        payroll_ledger=payroll_ledger,
    )
