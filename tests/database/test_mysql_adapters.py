from __future__ import annotations

from decimal import Decimal

import mysql.connector
import pytest

from hr_payroll.core.exceptions import StoreError
from hr_payroll.database.mysql_base import db_cursor, to_decimal
from hr_payroll.employees.mysql_employee_repository import MySQLEmployeeRepository
from hr_payroll.payroll.model import PayrollRecord, Period
from hr_payroll.payroll.mysql_payroll_repository import MySQLPayrollRepository


class FakeCursor:
    def __init__(self, rows=None, *, error=None, rowcount=1, lastrowid=7):
        self._rows = list(rows or [])
        self._error = error
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self.executed: list[tuple[str, tuple]] = []
        self.closed = False

    def execute(self, sql, params=()):
        self.executed.append((sql, params))
        if self._error:
            raise self._error

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return self._rows

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self, cursor, *, rollback_error=None, close_error=None):
        self._cursor = cursor
        self._rollback_error = rollback_error
        self._close_error = close_error
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True
        if self._rollback_error:
            raise self._rollback_error

    def close(self):
        self.closed = True
        if self._close_error:
            raise self._close_error


class FakeFactory:
    def __init__(self, cursor=None, *, connect_error=None, rollback_error=None, close_error=None):
        self.cursor = cursor or FakeCursor()
        self.conn = FakeConn(self.cursor, rollback_error=rollback_error, close_error=close_error)
        self._connect_error = connect_error

    def connect(self):
        if self._connect_error:
            raise self._connect_error
        return self.conn


def test_db_cursor_commits_on_success():
    factory = FakeFactory()

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    assert factory.conn.committed
    assert factory.conn.closed
    assert factory.cursor.closed


def test_db_cursor_wraps_driver_errors_and_rolls_back():
    error = mysql.connector.IntegrityError(msg="Duplicate entry '1-3-2024' for key 'uq_payroll_employee_period'", errno=1062)
    factory = FakeFactory(FakeCursor(error=error))

    with pytest.raises(StoreError, match="Duplicate entry") as exc:
        with db_cursor(factory) as (_, cur):
            cur.execute("INSERT ...")

    assert exc.value.__cause__ is error
    assert factory.conn.rolled_back
    assert not factory.conn.committed
    assert factory.conn.closed


def test_db_cursor_wraps_connection_errors():
    factory = FakeFactory(connect_error=mysql.connector.InterfaceError(msg="Can't connect to MySQL server"))

    with pytest.raises(StoreError, match="Can't connect"):
        with db_cursor(factory):
            pass


def test_db_cursor_does_not_wrap_non_driver_errors():
    factory = FakeFactory()

    with pytest.raises(KeyError):
        with db_cursor(factory):
            raise KeyError("x")

    assert factory.conn.rolled_back


def test_db_cursor_lost_connection_still_raises_store_error():
    lost = mysql.connector.OperationalError(msg="Lost connection to MySQL server during query", errno=2013)
    factory = FakeFactory(
        FakeCursor(error=lost),
        rollback_error=mysql.connector.OperationalError(msg="MySQL Connection not available", errno=2055),
        close_error=mysql.connector.OperationalError(msg="MySQL Connection not available", errno=2055),
    )

    with pytest.raises(StoreError, match="Lost connection") as exc:
        with db_cursor(factory) as (_, cur):
            cur.execute("UPDATE payrolls ...")

    assert exc.value.__cause__ is lost
    assert factory.conn.rolled_back
    assert factory.conn.closed


def test_db_cursor_failing_close_after_commit_is_not_an_error():
    factory = FakeFactory(close_error=mysql.connector.OperationalError(msg="MySQL Connection not available", errno=2055))

    with db_cursor(factory) as (_, cur):
        cur.execute("SELECT 1")

    assert factory.conn.committed


@pytest.mark.parametrize("raw", [Decimal("12.50"), "12.50", b"12.50", 12.5])
def test_to_decimal_normalizes_connector_values(raw):
    assert to_decimal(raw) == Decimal("12.50")


def _row(**overrides):
    row = {
        "payroll_id": 3,
        "employee_id": 1,
        "month": 3,
        "year": 2024,
        "base_salary": Decimal("75000.00"),
        "deductions": Decimal("11250.00"),
        "bonuses": Decimal("1000.00"),
        "net_salary": Decimal("64750.00"),
    }
    row.update(overrides)
    return row


def test_payroll_repository_maps_rows_to_records():
    factory = FakeFactory(FakeCursor([_row()]))
    repo = MySQLPayrollRepository(factory)

    record = repo.get_by_id(3)

    assert record == PayrollRecord(
        payroll_id=3,
        employee_id=1,
        month=3,
        year=2024,
        base_salary=Decimal("75000"),
        deductions=Decimal("11250"),
        bonuses=Decimal("1000"),
        net_salary=Decimal("64750"),
    )


def test_payroll_repository_list_filters_and_orders_by_period():
    cursor = FakeCursor([_row()])
    repo = MySQLPayrollRepository(FakeFactory(cursor))

    repo.list_all(period=Period(month=3, year=2024))

    sql, params = cursor.executed[0]
    assert "month=%s AND year=%s" in sql
    assert "ORDER BY year DESC, month DESC" in sql
    assert params == (3, 2024)


def test_payroll_repository_add_returns_new_id():
    cursor = FakeCursor(lastrowid=42)
    repo = MySQLPayrollRepository(FakeFactory(cursor))

    payroll_id = repo.add(PayrollRecord(employee_id=1, month=3, year=2024, base_salary=Decimal("10")))

    assert payroll_id == 42


def test_employee_repository_get_many_uses_one_query():
    cursor = FakeCursor(
        [
            {"employee_id": 1, "first_name": "Jane", "last_name": "Doe", "salary": Decimal("1000.00")},
            {"employee_id": 4, "first_name": "John", "last_name": "Roe", "salary": "2500.50"},
        ]
    )
    repo = MySQLEmployeeRepository(FakeFactory(cursor))

    found = repo.get_many([4, 1, 4, 9])

    assert len(cursor.executed) == 1
    sql, params = cursor.executed[0]
    assert "IN (%s, %s, %s)" in sql
    assert params == (1, 4, 9)
    assert found[1].full_name == "Jane Doe"
    assert found[4].base_salary == Decimal("2500.50")
    assert 9 not in found


def test_employee_repository_get_many_without_ids_skips_the_database():
    factory = FakeFactory(connect_error=mysql.connector.InterfaceError(msg="should not connect"))

    assert MySQLEmployeeRepository(factory).get_many([]) == {}


def test_payroll_repository_update_reports_missing_row():
    repo = MySQLPayrollRepository(FakeFactory(FakeCursor(rowcount=0)))

    ok = repo.update(PayrollRecord(payroll_id=9, employee_id=1, month=3, year=2024, base_salary=Decimal("10")))

    assert ok is False
