from __future__ import annotations

from enum import Enum


class FilterMode(str, Enum):
    """Which payroll rows a listing shows."""

    BY_PERIOD = "period"
    ALL = "all"


class ErrorCategory(str, Enum):
    """Message category rendered by the presentation layer for each error kind."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    STORE = "store"
