from __future__ import annotations

from datetime import date


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def current_period() -> tuple[int, int]:
    """(month, year) of today, the default selection for payroll screens."""
    today = today_local()
    return today.month, today.year
