from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """Raised when an operation targets a record or employee that no longer exists."""

    def __init__(self, entity: str, entity_id: object):
        super().__init__(f"{entity} #{entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class DuplicatePeriodError(DomainError):
    """Raised when a payroll already exists for an (employee, month, year) tuple."""

    def __init__(self, employee_id: int, month: int, year: int):
        super().__init__(f"Payroll for employee #{employee_id} already exists for {month:02d}/{year}")
        self.employee_id = employee_id
        self.month = month
        self.year = year


class StoreError(DomainError):
    """Raised when the underlying persistence layer fails.

    The original driver exception is chained as ``__cause__``.
    """
