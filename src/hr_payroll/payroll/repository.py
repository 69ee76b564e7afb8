from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayrollRecord, Period


class PayrollRepository(Protocol):
    """Store interface for payroll lines.

    Note (DIP): the ledger depends on this protocol, not on a concrete database.
    """

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def find_for_period(self, *, employee_id: int, month: int, year: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_all(self, *, period: Optional[Period] = None) -> Sequence[PayrollRecord]:
        """Records ordered most recent period first (year desc, month desc)."""

        raise NotImplementedError

    def add(self, record: PayrollRecord) -> int:
        """Insert a transient record and return the assigned id."""

        raise NotImplementedError

    def update(self, record: PayrollRecord) -> bool:
        """Overwrite the stored row; False when the id no longer exists."""

        raise NotImplementedError

    def delete_by_id(self, payroll_id: int) -> bool:
        raise NotImplementedError
